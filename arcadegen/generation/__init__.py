"""
Level generation: noise, seeded randomness, genres and the synthesizer.

Usage:
    from arcadegen.generation import generate_level, Genre

    level = generate_level(seed=42, genre=Genre.MAZE)
    print('\\n'.join(level.layout))
"""

from .collectibles import place_collectibles
from .genre import Genre, coerce_genre, infer_genre, resolve_genre
from .noise import noise2d
from .rng import FixedRandom, RandomSource, SeededRandom, random_int, random_scalar
from .synthesizer import (
    FALLBACK_PREFIX,
    TILE_MAP,
    EnemySpawnSearch,
    SpawnSearch,
    build_layout,
    fallback_level,
    find_safe_spawn,
    generate_enemy_spawns,
    generate_level,
    is_fallback,
    synthesize,
)

__all__ = [
    'noise2d',
    'random_scalar',
    'random_int',
    'RandomSource',
    'SeededRandom',
    'FixedRandom',
    'Genre',
    'infer_genre',
    'resolve_genre',
    'coerce_genre',
    'TILE_MAP',
    'FALLBACK_PREFIX',
    'SpawnSearch',
    'EnemySpawnSearch',
    'build_layout',
    'find_safe_spawn',
    'generate_enemy_spawns',
    'synthesize',
    'fallback_level',
    'is_fallback',
    'generate_level',
    'place_collectibles',
]
