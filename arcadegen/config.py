"""
Arcadegen - Configuration loader.

Loads settings from a .env file beside the package, with sensible
defaults. Real environment variables win over the .env file. Every key
is prefixed with ARCADEGEN_ (e.g. ARCADEGEN_DETECTION_RANGE=200).
"""
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv

# Load .env from package directory
_env_path = Path(__file__).parent / '.env'
load_dotenv(_env_path)

_PREFIX = 'ARCADEGEN_'


def _get_bool(key: str, default: bool) -> bool:
    """Get boolean from environment."""
    val = os.getenv(_PREFIX + key, str(default)).lower()
    return val in ('true', '1', 'yes')


def _get_int(key: str, default: int) -> int:
    """Get integer from environment."""
    return int(os.getenv(_PREFIX + key, str(default)))


def _get_float(key: str, default: float) -> float:
    """Get float from environment."""
    return float(os.getenv(_PREFIX + key, str(default)))


# World / grid
TILE_SIZE = _get_int('TILE_SIZE', 64)  # world units per tile
CHUNK_WIDTH = _get_int('CHUNK_WIDTH', 20)  # tiles
CHUNK_HEIGHT = _get_int('CHUNK_HEIGHT', 15)  # tiles
PROCEDURAL_LEVELS = _get_bool('PROCEDURAL_LEVELS', True)  # False = use manifest levels first

# Spawn search budgets
SPAWN_ATTEMPTS = _get_int('SPAWN_ATTEMPTS', 50)
ENEMY_SPAWN_ATTEMPTS = _get_int('ENEMY_SPAWN_ATTEMPTS', 30)
ENEMY_SPEED_MIN = _get_float('ENEMY_SPEED_MIN', 30.0)
ENEMY_SPEED_MAX = _get_float('ENEMY_SPEED_MAX', 70.0)

# Collectibles
COIN_CHANCE = _get_float('COIN_CHANCE', 0.3)  # per free floor tile
RARE_COIN_CHANCE = _get_float('RARE_COIN_CHANCE', 0.2)  # of placed coins
MAX_POWER_UPS = _get_int('MAX_POWER_UPS', 2)

# Behaviors
DETECTION_RANGE = _get_float('DETECTION_RANGE', 150.0)  # chase trigger distance
CHASE_SPEED_MULTIPLIER = _get_float('CHASE_SPEED_MULTIPLIER', 1.2)
PATROL_TOLERANCE = _get_float('PATROL_TOLERANCE', 10.0)  # target reached within
PATROL_SPAN = _get_float('PATROL_SPAN', 200.0)  # distance between patrol turns
WANDER_INTERVAL_MIN = _get_float('WANDER_INTERVAL_MIN', 1.5)  # seconds
WANDER_INTERVAL_MAX = _get_float('WANDER_INTERVAL_MAX', 3.5)  # seconds
WANDER_TOWARD_PLAYER_CHANCE = _get_float('WANDER_TOWARD_PLAYER_CHANCE', 0.4)
DEFAULT_ENTITY_SPEED = _get_float('DEFAULT_ENTITY_SPEED', 50.0)

# Player movement
PLAYER_SPEED = _get_float('PLAYER_SPEED', 150.0)
JUMP_IMPULSE = _get_float('JUMP_IMPULSE', 400.0)
GRAVITY = _get_float('GRAVITY', 800.0)

# Combat / scoring
MAX_HEALTH = _get_int('MAX_HEALTH', 100)
CONTACT_DAMAGE = _get_int('CONTACT_DAMAGE', 10)
DAMAGE_COOLDOWN_MS = _get_float('DAMAGE_COOLDOWN_MS', 1000.0)
COIN_VALUE = _get_int('COIN_VALUE', 10)
RARE_COIN_VALUE = _get_int('RARE_COIN_VALUE', 25)
HEALTH_POWER_UP_VALUE = _get_int('HEALTH_POWER_UP_VALUE', 25)


# Genre presets
@dataclass(frozen=True)
class GenrePreset:
    """Per-genre generation settings.

    Enemy counts are fixed here rather than derived from level density.
    """
    name: str
    enemy_count: int
    noise_frequency: float  # world tiles per noise lattice cell


GENRE_PRESETS: Dict[str, GenrePreset] = {
    'platformer': GenrePreset(
        name='platformer',
        enemy_count=_get_int('PLATFORMER_ENEMIES', 3),
        noise_frequency=8.0,
    ),
    'maze': GenrePreset(
        name='maze',
        enemy_count=_get_int('MAZE_ENEMIES', 5),
        noise_frequency=3.0,
    ),
    'arena': GenrePreset(
        name='arena',
        enemy_count=_get_int('ARENA_ENEMIES', 8),
        noise_frequency=6.0,
    ),
    'top-down shooter': GenrePreset(
        name='top-down shooter',
        enemy_count=_get_int('SHOOTER_ENEMIES', 3),
        noise_frequency=6.0,
    ),
}


def get_genre_preset(genre: str) -> GenrePreset:
    """Get the preset for a genre value, defaulting to arena."""
    return GENRE_PRESETS.get(genre, GENRE_PRESETS['arena'])
