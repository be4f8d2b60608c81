"""
Level description models.

A LevelDescription is the hand-off format between the level synthesizer
(or an AI-authored manifest) and whatever instantiates renderable,
collidable objects from it. The layout is a list of equal-length strings,
one character per tile, resolved to a semantic tile kind through the
tile map.

Example (wire form):
    {
        "id": "proc_42_maze_0_0",
        "layout": ["WWWW", "W..W", "WWWW"],
        "tileMap": {"W": "wall", ".": "floor"},
        "spawn": {
            "player": {"x": 1, "y": 1},
            "enemies": [{"x": 2, "y": 1, "type": "enemy",
                         "behavior": "patrol", "speed": 42.5}]
        }
    }
"""

from enum import Enum
from typing import Dict, Iterator, List, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .primitives import GridPosition


class TileKind(str, Enum):
    """Semantic kind of a tile code."""
    WALL = "wall"
    FLOOR = "floor"


class BehaviorName(str, Enum):
    """Behavior a non-player entity starts in."""
    PATROL = "patrol"
    WANDER = "wander"
    CHASE = "chase"


class EnemySpawnRecord(BaseModel):
    """Where an enemy starts, what it is and how it initially behaves.

    Attributes:
        x: Grid column
        y: Grid row
        type: Entity type tag (asset/sprite name)
        behavior: Initial behavior
        speed: Initial speed in world units per second (must be positive)
    """
    x: int
    y: int
    type: str = "enemy"
    behavior: BehaviorName = BehaviorName.WANDER
    speed: float = Field(default=50.0, gt=0)

    model_config = ConfigDict(frozen=True)

    @property
    def position(self) -> GridPosition:
        return GridPosition(x=self.x, y=self.y)


class LevelSpawns(BaseModel):
    """Player spawn plus ordered enemy spawns."""
    player: GridPosition
    enemies: List[EnemySpawnRecord] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)


class LevelDescription(BaseModel):
    """A rectangular tile grid with its tile map and spawn points.

    Invariants (checked on construction):
    - the layout has at least one row and every row has the same length
    - every code used in the layout has an entry in the tile map
    - the player spawn is inside the grid and not on a wall tile
    - every enemy spawn is inside the grid
    """
    id: Union[str, int]
    layout: List[str]
    tile_map: Dict[str, TileKind]
    spawn: LevelSpawns

    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )

    @field_validator('layout')
    @classmethod
    def validate_layout(cls, v: List[str]) -> List[str]:
        """Validate the layout is a non-empty rectangle."""
        if not v:
            raise ValueError('Layout must have at least one row')
        width = len(v[0])
        if width == 0:
            raise ValueError('Layout rows must not be empty')
        for index, row in enumerate(v):
            if len(row) != width:
                raise ValueError(
                    f'Layout row {index} has length {len(row)}, expected {width}'
                )
        return v

    @field_validator('tile_map')
    @classmethod
    def validate_tile_codes(cls, v: Dict[str, TileKind]) -> Dict[str, TileKind]:
        """Validate tile codes are single characters."""
        for code in v:
            if len(code) != 1:
                raise ValueError(f'Tile code must be a single character, got {code!r}')
        return v

    @model_validator(mode='after')
    def validate_level(self) -> 'LevelDescription':
        unknown = sorted({code for row in self.layout for code in row} - set(self.tile_map))
        if unknown:
            raise ValueError(f'Layout uses codes missing from tile map: {unknown}')

        player = self.spawn.player
        if not self.in_bounds(player.x, player.y):
            raise ValueError(f'Player spawn {player} is outside the level')
        if self.is_wall(player.x, player.y):
            raise ValueError(f'Player spawn {player} is on a wall tile')

        for enemy in self.spawn.enemies:
            if not self.in_bounds(enemy.x, enemy.y):
                raise ValueError(f'Enemy spawn ({enemy.x}, {enemy.y}) is outside the level')
        return self

    @property
    def width(self) -> int:
        return len(self.layout[0])

    @property
    def height(self) -> int:
        return len(self.layout)

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def tile_at(self, x: int, y: int) -> TileKind:
        """Resolve the tile kind at a grid coordinate.

        Raises:
            IndexError: If the coordinate is outside the level
        """
        if not self.in_bounds(x, y):
            raise IndexError(f'Tile ({x}, {y}) is outside the level')
        return self.tile_map[self.layout[y][x]]

    def is_wall(self, x: int, y: int) -> bool:
        return self.tile_at(x, y) == TileKind.WALL

    def floor_tiles(self) -> Iterator[Tuple[int, int]]:
        """Yield (x, y) for every floor tile in row-major order."""
        for y, row in enumerate(self.layout):
            for x, code in enumerate(row):
                if self.tile_map[code] == TileKind.FLOOR:
                    yield x, y

    def to_wire(self) -> Dict:
        """Serialize with camelCase keys for the rendering collaborator."""
        return self.model_dump(mode='json', by_alias=True)


class CollectibleKind(str, Enum):
    """Pickups placed on floor tiles."""
    COIN = "coin"
    RARE_COIN = "rare_coin"
    HEALTH = "health"


class CollectibleSpawn(BaseModel):
    """A pickup placed on the level grid.

    Coins carry a score value; health power-ups carry the amount of
    health they restore.
    """
    id: str
    x: int
    y: int
    kind: CollectibleKind
    value: int = Field(..., gt=0)

    model_config = ConfigDict(frozen=True)

    @property
    def position(self) -> GridPosition:
        return GridPosition(x=self.x, y=self.y)
