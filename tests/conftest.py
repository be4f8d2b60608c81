"""Shared fixtures for arcadegen tests."""

from typing import Any, Dict, List

import pytest

from models import Manifest

from arcadegen.generation import fallback_level
from arcadegen.logging import LogSink, close_all_sinks, register_sink


class RecordingSink(LogSink):
    """Sink that keeps every emitted record in memory."""

    def __init__(self):
        self.records: List[Dict[str, Any]] = []

    def emit(self, module: str, record: Dict[str, Any]) -> None:
        self.records.append({'module': module, **record})

    def flush(self) -> None:
        pass

    def close(self) -> None:
        pass

    def of_type(self, record_type: str) -> List[Dict[str, Any]]:
        return [r for r in self.records if r.get('type') == record_type]


@pytest.fixture
def session_records():
    """Capture structured records emitted by the session module."""
    sink = RecordingSink()
    register_sink('session', sink)
    yield sink
    close_all_sinks()


@pytest.fixture
def room_level():
    """The 20x10 hand-authored room (player at (2, 2), one enemy at (15, 7))."""
    return fallback_level()


@pytest.fixture
def manifest_data() -> Dict[str, Any]:
    """A wire-format manifest with one authored level and one dynamic entity."""
    return {
        'gameId': 'spooky-dungeon',
        'genre': 'maze',
        'palette': ['#1A1A2E', '#E94560', '#0F3460'],
        'assets': [
            {'type': 'sprite', 'name': 'hero', 'url': '/assets/hero.png', 'frames': 4},
        ],
        'levels': [
            {
                'id': 'authored-1',
                'layout': ['WWWWW', 'W...W', 'W...W', 'WWWWW'],
                'tileMap': {'W': 'wall', '.': 'floor'},
                'spawn': {
                    'player': {'x': 1, 'y': 1},
                    'enemies': [{'x': 3, 'y': 2, 'type': 'enemy', 'behavior': 'patrol', 'speed': 40}],
                },
            },
        ],
        'dynamicEntities': [
            {
                'type': 'bat',
                'spawnCoords': [{'x': 1, 'y': 1}],
                'behavior': {'name': 'wander', 'speed': 60},
            },
        ],
    }


@pytest.fixture
def manifest(manifest_data) -> Manifest:
    return Manifest.model_validate(manifest_data)
