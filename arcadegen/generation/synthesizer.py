"""
Level synthesizer - seeded, deterministic tile layouts per genre.

synthesize() builds a walled rectangular grid for one chunk, picks a safe
player spawn and a set of enemy spawns. Every random choice comes from a
RandomSource keyed by the seed, so identical arguments always yield an
identical LevelDescription.

generate_level() wraps synthesize() with the failure policy: any exception
during generation is logged and a small hand-authored room is returned
instead, so level generation never blocks a game from starting.

Layout codes:
    W - wall
    . - floor
"""

from dataclasses import dataclass
from typing import Callable, Dict, Iterable, List, MutableSequence, Optional, Sequence, Set, Tuple, Union

from models import (
    BehaviorName,
    EnemySpawnRecord,
    GridPosition,
    LevelDescription,
    LevelSpawns,
    TileKind,
)

from arcadegen import config
from arcadegen.logging import get_logger

from .genre import Genre, coerce_genre
from .noise import noise2d
from .rng import RandomSource, SeededRandom

log = get_logger('synthesizer')

WALL = 'W'
FLOOR = '.'
TILE_MAP: Dict[str, TileKind] = {
    WALL: TileKind.WALL,
    FLOOR: TileKind.FLOOR,
}

FALLBACK_PREFIX = 'fallback_'

# Enemy behaviors are drawn uniformly from this order
_BEHAVIOR_CHOICES = (BehaviorName.PATROL, BehaviorName.WANDER, BehaviorName.CHASE)

Grid = List[List[str]]


# =============================================================================
# Search results
# =============================================================================

@dataclass(frozen=True)
class SpawnSearch:
    """Outcome of a player spawn search.

    Attributes:
        position: Chosen tile (grid center when exhausted)
        attempts_used: Random samples drawn before stopping
        exhausted: True if no sample hit a floor tile
    """
    position: GridPosition
    attempts_used: int
    exhausted: bool


@dataclass(frozen=True)
class EnemySpawnSearch:
    """Outcome of enemy spawn placement.

    Attributes:
        spawns: Placed enemies, in slot order
        skipped_slots: Slot indices whose attempt budget ran out
    """
    spawns: Tuple[EnemySpawnRecord, ...]
    skipped_slots: Tuple[int, ...]

    @property
    def exhausted(self) -> bool:
        return bool(self.skipped_slots)


# =============================================================================
# Per-genre cell rules
# =============================================================================

@dataclass(frozen=True)
class _Cell:
    """Everything a cell rule may look at for one interior tile."""
    x: int
    y: int
    width: int
    height: int
    world_x: int
    world_y: int
    seed: int
    roll: float        # seeded random value for this cell
    frequency: float   # genre noise frequency (tiles per lattice cell)

    def noise(self, frequency: Optional[float] = None, seed_offset: int = 0) -> float:
        f = frequency if frequency is not None else self.frequency
        return noise2d(self.world_x / f, self.world_y / f, self.seed + seed_offset)


def _platformer_wall(cell: _Cell) -> bool:
    """Ground along the bottom, floating platforms denser toward it."""
    if cell.y == cell.height - 2:
        return cell.roll < 0.8
    if cell.y == 1:
        return False  # headroom
    depth = cell.y / cell.height
    chance = 0.05 + 0.25 * cell.noise() + 0.15 * depth
    return cell.roll < chance


def _maze_wall(cell: _Cell) -> bool:
    """Walls only on a 3-tile lattice, thinned by noise into corridors."""
    if cell.x % 3 != 0 and cell.y % 3 != 0:
        return False
    return cell.roll < 0.35 + 0.4 * cell.noise()


def _arena_wall(cell: _Cell) -> bool:
    """Obstacles where a fine and a coarse noise field both run high."""
    obstacle = cell.noise()
    cluster = cell.noise(frequency=cell.frequency * 2.5, seed_offset=50)
    return obstacle > 0.6 and cluster > 0.45


_CELL_RULES: Dict[Genre, Callable[[_Cell], bool]] = {
    Genre.PLATFORMER: _platformer_wall,
    Genre.MAZE: _maze_wall,
    Genre.ARENA: _arena_wall,
    Genre.TOP_DOWN_SHOOTER: _arena_wall,
}


# =============================================================================
# Layout
# =============================================================================

def build_layout(
    chunk_x: int,
    chunk_y: int,
    width: int,
    height: int,
    seed: int,
    genre: Genre,
    rng: RandomSource,
) -> Grid:
    """Build the tile grid for one chunk.

    The outer border is always wall. If no interior floor survives, the
    center tile is carved out so a spawn can always be placed.

    Raises:
        ValueError: If the chunk is smaller than 3x3 (no interior)
    """
    if width < 3 or height < 3:
        raise ValueError(f"Level must be at least 3x3, got {width}x{height}")

    rule = _CELL_RULES[genre]
    frequency = config.get_genre_preset(genre.value).noise_frequency

    grid: Grid = []
    for y in range(height):
        row = []
        for x in range(width):
            if x == 0 or y == 0 or x == width - 1 or y == height - 1:
                row.append(WALL)
                continue
            cell = _Cell(
                x=x, y=y,
                width=width, height=height,
                world_x=chunk_x * width + x,
                world_y=chunk_y * height + y,
                seed=seed,
                roll=rng.scalar(seed + x * 100 + y * 1000),
                frequency=frequency,
            )
            row.append(WALL if rule(cell) else FLOOR)
        grid.append(row)

    if not any(code == FLOOR for row in grid for code in row):
        log.debug("No floor left in %dx%d %s layout, carving center", width, height, genre.value)
        grid[height // 2][width // 2] = FLOOR

    return grid


def _is_floor(layout: Sequence[Sequence[str]], x: int, y: int) -> bool:
    return 0 <= y < len(layout) and 0 <= x < len(layout[y]) and TILE_MAP.get(layout[y][x]) == TileKind.FLOOR


def _sample_interior(rng: RandomSource, seed_x: float, seed_y: float, width: int, height: int) -> Tuple[int, int]:
    x = int(rng.scalar(seed_x) * (width - 2)) + 1
    y = int(rng.scalar(seed_y) * (height - 2)) + 1
    return x, y


# =============================================================================
# Spawn placement
# =============================================================================

def find_safe_spawn(
    layout: Sequence[Sequence[str]],
    width: int,
    height: int,
    seed: int,
    rng: Optional[RandomSource] = None,
    attempts: int = config.SPAWN_ATTEMPTS,
) -> SpawnSearch:
    """Find a floor tile for the player with a bounded number of samples.

    Each attempt samples an interior coordinate from the seeded source and
    the first floor tile wins. When every attempt lands on a wall the grid
    center is returned regardless of its tile kind, flagged as exhausted.
    """
    rng = rng or SeededRandom()
    for attempt in range(attempts):
        x, y = _sample_interior(rng, seed + attempt * 123, seed + attempt * 456, width, height)
        if _is_floor(layout, x, y):
            return SpawnSearch(GridPosition(x=x, y=y), attempts_used=attempt + 1, exhausted=False)

    return SpawnSearch(GridPosition(x=width // 2, y=height // 2), attempts_used=attempts, exhausted=True)


def generate_enemy_spawns(
    layout: Sequence[Sequence[str]],
    width: int,
    height: int,
    seed: int,
    genre: Union[Genre, str],
    rng: Optional[RandomSource] = None,
    occupied: Iterable[Tuple[int, int]] = (),
    attempts: int = config.ENEMY_SPAWN_ATTEMPTS,
    count: Optional[int] = None,
) -> EnemySpawnSearch:
    """Place enemies on distinct floor tiles.

    Each slot gets its own attempt budget; a slot that never finds a free
    floor tile is skipped rather than forced onto a wall.

    Args:
        layout: Tile grid (rows of codes)
        width: Grid width
        height: Grid height
        seed: Level seed
        genre: Genre, selects the enemy count preset
        rng: Random source (default: SeededRandom)
        occupied: Tiles that must stay free (e.g. the player spawn)
        attempts: Samples per slot
        count: Override the genre's enemy count
    """
    rng = rng or SeededRandom()
    genre = coerce_genre(genre)
    if count is None:
        count = config.get_genre_preset(genre.value).enemy_count

    taken: Set[Tuple[int, int]] = set(occupied)
    spawns: List[EnemySpawnRecord] = []
    skipped: List[int] = []
    speed_range = config.ENEMY_SPEED_MAX - config.ENEMY_SPEED_MIN

    for slot in range(count):
        for attempt in range(attempts):
            x, y = _sample_interior(
                rng,
                seed + slot * 789 + attempt * 234,
                seed + slot * 567 + attempt * 890,
                width, height,
            )
            if (x, y) in taken or not _is_floor(layout, x, y):
                continue

            behavior = _BEHAVIOR_CHOICES[int(rng.scalar(seed + slot * 999) * len(_BEHAVIOR_CHOICES))]
            speed = config.ENEMY_SPEED_MIN + rng.scalar(seed + slot * 111) * speed_range
            spawns.append(EnemySpawnRecord(x=x, y=y, type='enemy', behavior=behavior, speed=speed))
            taken.add((x, y))
            break
        else:
            skipped.append(slot)

    return EnemySpawnSearch(spawns=tuple(spawns), skipped_slots=tuple(skipped))


# =============================================================================
# Level synthesis
# =============================================================================

def level_id(seed: int, genre: Genre, chunk_x: int, chunk_y: int) -> str:
    return f"proc_{seed}_{genre.value.replace(' ', '-')}_{chunk_x}_{chunk_y}"


def synthesize(
    chunk_x: int,
    chunk_y: int,
    width: int,
    height: int,
    seed: int,
    genre: Union[Genre, str],
    rng: Optional[RandomSource] = None,
) -> LevelDescription:
    """Generate one chunk's level.

    Args:
        chunk_x: Chunk column (offsets the noise field)
        chunk_y: Chunk row (offsets the noise field)
        width: Tiles per row
        height: Number of rows
        seed: Integer seed; same seed, same level
        genre: Genre or free-text genre
        rng: Random source (default: SeededRandom)

    Returns:
        A validated LevelDescription

    Raises:
        ValueError: If the chunk is too small to hold an interior
    """
    genre = coerce_genre(genre)
    rng = rng or SeededRandom()

    grid = build_layout(chunk_x, chunk_y, width, height, seed, genre, rng)

    search = find_safe_spawn(grid, width, height, seed, rng)
    player = search.position
    if search.exhausted:
        log.debug("Spawn search exhausted after %d attempts, using center %s", search.attempts_used, player)
        if not _is_floor(grid, player.x, player.y):
            grid[player.y][player.x] = FLOOR

    enemies = generate_enemy_spawns(
        grid, width, height, seed, genre, rng,
        occupied={(player.x, player.y)},
    )
    if enemies.exhausted:
        log.debug("Skipped enemy slots %s for seed %d", list(enemies.skipped_slots), seed)

    return LevelDescription(
        id=level_id(seed, genre, chunk_x, chunk_y),
        layout=[''.join(row) for row in grid],
        tile_map=dict(TILE_MAP),
        spawn=LevelSpawns(player=player, enemies=list(enemies.spawns)),
    )


_FALLBACK_LAYOUT = (
    'WWWWWWWWWWWWWWWWWWWW',
    'W..................W',
    'W..................W',
    'W....WWW...........W',
    'W..................W',
    'W..................W',
    'W.........WWW......W',
    'W..................W',
    'W..................W',
    'WWWWWWWWWWWWWWWWWWWW',
)


def fallback_level(chunk_x: int = 0, chunk_y: int = 0) -> LevelDescription:
    """The hand-authored room used when synthesis fails."""
    return LevelDescription(
        id=f"{FALLBACK_PREFIX}{chunk_x}_{chunk_y}",
        layout=list(_FALLBACK_LAYOUT),
        tile_map=dict(TILE_MAP),
        spawn=LevelSpawns(
            player=GridPosition(x=2, y=2),
            enemies=[
                EnemySpawnRecord(
                    x=15, y=7,
                    type='enemy',
                    behavior=BehaviorName.PATROL,
                    speed=config.DEFAULT_ENTITY_SPEED,
                ),
            ],
        ),
    )


def is_fallback(level: LevelDescription) -> bool:
    return str(level.id).startswith(FALLBACK_PREFIX)


def generate_level(
    chunk_x: int = 0,
    chunk_y: int = 0,
    width: int = config.CHUNK_WIDTH,
    height: int = config.CHUNK_HEIGHT,
    seed: int = 0,
    genre: Union[Genre, str] = Genre.ARENA,
    rng: Optional[RandomSource] = None,
) -> LevelDescription:
    """synthesize() with the never-fail policy.

    Any exception raised while generating is logged and replaced by
    fallback_level(); the caller always gets a playable level.
    """
    try:
        level = synthesize(chunk_x, chunk_y, width, height, seed, genre, rng)
    except Exception:
        log.exception("Level generation failed for chunk (%d, %d) seed %s, using fallback",
                      chunk_x, chunk_y, seed)
        return fallback_level(chunk_x, chunk_y)

    log.debug("Generated %s with %d enemies", level.id, len(level.spawn.enemies))
    return level
