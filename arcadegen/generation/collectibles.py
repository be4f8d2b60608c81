"""
Collectible placement.

Scatters coins over the free floor of a generated level and promotes a
few of them to health power-ups. Placement is keyed by the level seed,
so a level and its pickups regenerate together.
"""

from typing import List, Optional, Set, Tuple

from models import CollectibleKind, CollectibleSpawn, LevelDescription

from arcadegen import config

from .rng import RandomSource, SeededRandom

# A coin roll above this is a power-up candidate
POWER_UP_THRESHOLD = 0.85


def _occupied_tiles(level: LevelDescription) -> Set[Tuple[int, int]]:
    occupied = {(level.spawn.player.x, level.spawn.player.y)}
    occupied.update((enemy.x, enemy.y) for enemy in level.spawn.enemies)
    return occupied


def place_collectibles(
    level: LevelDescription,
    seed: int,
    rng: Optional[RandomSource] = None,
    coin_chance: float = config.COIN_CHANCE,
    rare_chance: float = config.RARE_COIN_CHANCE,
    max_power_ups: int = config.MAX_POWER_UPS,
) -> List[CollectibleSpawn]:
    """Place coins and health power-ups on a level.

    Every floor tile that is not a spawn point gets a coin with
    probability coin_chance; a placed coin is rare with probability
    rare_chance. Walking the coins in row-major order, up to
    max_power_ups of them whose selection roll exceeds 0.85 become
    health power-ups instead.

    Args:
        level: Level to decorate
        seed: Placement seed (normally the level seed)
        rng: Random source (default: SeededRandom)
        coin_chance: Per-tile coin probability
        rare_chance: Probability a coin is a rare coin
        max_power_ups: Cap on health power-ups

    Returns:
        Collectibles in row-major order, ids unique per tile
    """
    rng = rng or SeededRandom()
    occupied = _occupied_tiles(level)

    placed: List[CollectibleSpawn] = []
    power_ups = 0
    for x, y in level.floor_tiles():
        if (x, y) in occupied:
            continue
        if rng.scalar(seed + x * 31 + y * 1009 + 17) >= coin_chance:
            continue

        if power_ups < max_power_ups and rng.scalar(seed + x * 71 + y * 1013 + 41) > POWER_UP_THRESHOLD:
            power_ups += 1
            placed.append(CollectibleSpawn(
                id=f"health_{x}_{y}",
                x=x, y=y,
                kind=CollectibleKind.HEALTH,
                value=config.HEALTH_POWER_UP_VALUE,
            ))
        elif rng.scalar(seed + x * 53 + y * 997 + 29) < rare_chance:
            placed.append(CollectibleSpawn(
                id=f"coin_{x}_{y}",
                x=x, y=y,
                kind=CollectibleKind.RARE_COIN,
                value=config.RARE_COIN_VALUE,
            ))
        else:
            placed.append(CollectibleSpawn(
                id=f"coin_{x}_{y}",
                x=x, y=y,
                kind=CollectibleKind.COIN,
                value=config.COIN_VALUE,
            ))

    return placed
