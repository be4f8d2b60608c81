"""
Tests for the shared pydantic models.

Run with: pytest tests/test_models.py -v
"""

import pytest
from pydantic import ValidationError

from models import (
    BehaviorName,
    CollectibleSpawn,
    DynamicEntityDefinition,
    EnemySpawnRecord,
    GridPosition,
    LevelDescription,
    Manifest,
    PlayerState,
    Point2D,
    SpawnArea,
    TileKind,
)

TILE_MAP = {'W': 'wall', '.': 'floor'}


def make_level(layout, player=(1, 1), enemies=(), tile_map=TILE_MAP):
    return LevelDescription(
        id='test',
        layout=list(layout),
        tile_map=tile_map,
        spawn={'player': {'x': player[0], 'y': player[1]}, 'enemies': list(enemies)},
    )


class TestPrimitives:
    """Test coordinate types."""

    def test_to_world_is_tile_center(self):
        """Grid positions map to the center of their tile."""
        point = GridPosition(x=2, y=3).to_world(64)
        assert (point.x, point.y) == (160.0, 224.0)

    def test_distance(self):
        """Points measure Euclidean distance."""
        assert Point2D(x=0, y=0).distance_to(Point2D(x=3, y=4)) == 5.0

    def test_frozen(self):
        """Points are immutable."""
        point = Point2D(x=1, y=2)
        with pytest.raises(ValidationError):
            point.x = 5


class TestLevelDescription:
    """Test level invariants."""

    def test_valid(self):
        """A rectangular level with a floor spawn is accepted."""
        level = make_level(['WWWW', 'W..W', 'WWWW'])
        assert (level.width, level.height) == (4, 3)
        assert level.tile_at(1, 1) == TileKind.FLOOR
        assert level.is_wall(0, 0)
        assert list(level.floor_tiles()) == [(1, 1), (2, 1)]

    def test_ragged_rows(self):
        """Rows of different lengths are rejected."""
        with pytest.raises(ValidationError, match='row 1'):
            make_level(['WWWW', 'W..', 'WWWW'])

    def test_empty_layout(self):
        """A level needs at least one row."""
        with pytest.raises(ValidationError):
            make_level([])

    def test_unknown_code(self):
        """Every layout code must be in the tile map."""
        with pytest.raises(ValidationError, match='missing from tile map'):
            make_level(['WWWW', 'W.?W', 'WWWW'])

    def test_multi_char_code(self):
        """Tile codes are single characters."""
        with pytest.raises(ValidationError):
            make_level(['WWWW', 'W..W', 'WWWW'], tile_map={'W': 'wall', '.': 'floor', '..': 'floor'})

    def test_player_on_wall(self):
        """The player may not spawn inside a wall."""
        with pytest.raises(ValidationError, match='wall'):
            make_level(['WWWW', 'W..W', 'WWWW'], player=(0, 0))

    def test_player_out_of_bounds(self):
        """The player spawn must be inside the grid."""
        with pytest.raises(ValidationError, match='outside'):
            make_level(['WWWW', 'W..W', 'WWWW'], player=(9, 1))

    def test_enemy_out_of_bounds(self):
        """Enemy spawns must be inside the grid."""
        with pytest.raises(ValidationError, match='Enemy spawn'):
            make_level(['WWWW', 'W..W', 'WWWW'], enemies=[{'x': 4, 'y': 1}])

    def test_tile_at_outside(self):
        """Reading outside the grid raises IndexError."""
        level = make_level(['WWWW', 'W..W', 'WWWW'])
        with pytest.raises(IndexError):
            level.tile_at(-1, 0)

    def test_wire_format(self, room_level):
        """to_wire uses camelCase keys."""
        wire = room_level.to_wire()
        assert wire['tileMap'] == {'W': 'wall', '.': 'floor'}
        assert wire['spawn']['player'] == {'x': 2, 'y': 2}
        assert wire['spawn']['enemies'][0]['behavior'] == 'patrol'
        assert LevelDescription.model_validate(wire) == room_level


class TestSpawnRecords:
    """Test enemy and collectible spawn records."""

    def test_enemy_defaults(self):
        """Enemies default to wandering at speed 50."""
        record = EnemySpawnRecord(x=1, y=2)
        assert record.behavior == BehaviorName.WANDER
        assert record.speed == 50.0
        assert record.position == GridPosition(x=1, y=2)

    def test_enemy_speed_positive(self):
        """Speed must be positive."""
        with pytest.raises(ValidationError):
            EnemySpawnRecord(x=1, y=2, speed=0)

    def test_collectible_value_positive(self):
        """Collectibles carry a positive value."""
        with pytest.raises(ValidationError):
            CollectibleSpawn(id='coin_1_1', x=1, y=1, kind='coin', value=0)


class TestManifestModels:
    """Test manifest sub-models."""

    def test_spawn_area_bounds(self):
        """Minimums may not exceed maximums."""
        with pytest.raises(ValidationError, match='x_min'):
            SpawnArea(x_min=5, x_max=2, y_min=0, y_max=1)

    def test_spawn_area_from_wire(self):
        """Spawn areas accept camelCase keys."""
        area = SpawnArea.model_validate({'xMin': 1, 'xMax': 3, 'yMin': 2, 'yMax': 2})
        assert (area.x_min, area.y_max) == (1, 2)

    def test_behavior_keeps_extra_params(self):
        """Unknown behavior parameters are preserved."""
        entity = DynamicEntityDefinition.model_validate({
            'type': 'ghost',
            'behavior': {'name': 'chase', 'speed': 80, 'aggression': 0.7},
        })
        assert entity.behavior.speed == 80
        assert entity.behavior.model_extra == {'aggression': 0.7}
        assert entity.spawn_coords == []

    def test_palette_hex(self):
        """Palette entries must be #RRGGBB."""
        with pytest.raises(ValidationError, match='hex'):
            Manifest(game_id='g', palette=['#FFF'])


class TestPlayerState:
    """Test the immutable player state."""

    def test_defaults(self):
        """New players start at full health with no score."""
        state = PlayerState()
        assert (state.health, state.score, state.last_damage_at_ms) == (100, 0, None)
        assert not state.is_dead

    def test_dead_at_zero(self):
        """Zero health is dead."""
        assert PlayerState(health=0).is_dead

    def test_no_negative_health(self):
        """Health is never negative."""
        with pytest.raises(ValidationError):
            PlayerState(health=-1)

    def test_copy_leaves_original(self):
        """Updates produce new instances."""
        state = PlayerState()
        hurt = state.model_copy(update={'health': 90})
        assert state.health == 100
        assert hurt.health == 90
