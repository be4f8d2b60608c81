"""
Unified models library for the game generator.

This package provides all Pydantic data models used across the system:
- Primitives: grid and world coordinates (GridPosition, Point2D)
- Level: synthesized or authored level descriptions and spawn records
- Manifest: the inbound game manifest and dynamic entity definitions
- Player: immutable player health/score state

Usage:
    >>> from models import LevelDescription, Manifest, PlayerState
    >>> from models.primitives import Point2D
"""

# ============================================================================
# Primitives (basic types used everywhere)
# ============================================================================
from .primitives import (
    GridPosition,
    Point2D,
    Vector2D,  # Alias for Point2D
)

# ============================================================================
# Level models
# ============================================================================
from .level import (
    TileKind,
    BehaviorName,
    EnemySpawnRecord,
    LevelSpawns,
    LevelDescription,
    CollectibleKind,
    CollectibleSpawn,
)

# ============================================================================
# Manifest models
# ============================================================================
from .manifest import (
    AssetType,
    AssetDescriptor,
    SpawnArea,
    BehaviorDescriptor,
    DynamicEntityDefinition,
    Manifest,
)

# ============================================================================
# Player / session state
# ============================================================================
from .player import PlayerState
from .game_state import GameState

__all__ = [
    'GridPosition',
    'Point2D',
    'Vector2D',
    'TileKind',
    'BehaviorName',
    'EnemySpawnRecord',
    'LevelSpawns',
    'LevelDescription',
    'CollectibleKind',
    'CollectibleSpawn',
    'AssetType',
    'AssetDescriptor',
    'SpawnArea',
    'BehaviorDescriptor',
    'DynamicEntityDefinition',
    'Manifest',
    'PlayerState',
    'GameState',
]
