"""Collectible placement tests."""

from models import CollectibleKind

from arcadegen import config
from arcadegen.generation import FixedRandom, Genre, place_collectibles, synthesize

# The fallback room has 138 floor tiles, two of them spawn points
FREE_FLOOR = 136


class TestPlaceCollectibles:
    """Test coin and power-up placement."""

    def test_deterministic(self, room_level):
        """Same level and seed, same pickups."""
        assert place_collectibles(room_level, 42) == place_collectibles(room_level, 42)

    def test_on_free_floor_only(self):
        """Pickups sit on floor tiles that are not spawn points."""
        level = synthesize(0, 0, 20, 15, 42, Genre.ARENA)
        spawns = {(level.spawn.player.x, level.spawn.player.y)}
        spawns.update((e.x, e.y) for e in level.spawn.enemies)

        items = place_collectibles(level, 42)
        assert items
        for item in items:
            assert not level.is_wall(item.x, item.y)
            assert (item.x, item.y) not in spawns

    def test_unique_ids(self, room_level):
        """One pickup per tile, ids unique."""
        items = place_collectibles(room_level, 7)
        assert len({item.id for item in items}) == len(items)
        assert len({(item.x, item.y) for item in items}) == len(items)

    def test_values(self, room_level):
        """Each kind carries its configured value."""
        expected = {
            CollectibleKind.COIN: config.COIN_VALUE,
            CollectibleKind.RARE_COIN: config.RARE_COIN_VALUE,
            CollectibleKind.HEALTH: config.HEALTH_POWER_UP_VALUE,
        }
        for seed in range(5):
            for item in place_collectibles(room_level, seed):
                assert item.value == expected[item.kind]

    def test_no_coins_when_rolls_high(self, room_level):
        """Rolls above the coin chance place nothing."""
        assert place_collectibles(room_level, 1, rng=FixedRandom(0.9)) == []

    def test_low_rolls_give_rare_coins(self, room_level):
        """Low rolls place a rare coin on every free tile."""
        items = place_collectibles(room_level, 1, rng=FixedRandom(0.1))
        assert len(items) == FREE_FLOOR
        assert {item.kind for item in items} == {CollectibleKind.RARE_COIN}

    def test_power_ups_capped(self, room_level):
        """At most max_power_ups health pickups are placed."""
        items = place_collectibles(room_level, 1, rng=FixedRandom(0.9), coin_chance=1.0)
        kinds = [item.kind for item in items]

        assert len(items) == FREE_FLOOR
        assert kinds.count(CollectibleKind.HEALTH) == config.MAX_POWER_UPS
        assert kinds.count(CollectibleKind.COIN) == FREE_FLOOR - config.MAX_POWER_UPS
        # Power-ups go to the first coins in row-major order
        assert kinds[:config.MAX_POWER_UPS] == [CollectibleKind.HEALTH] * config.MAX_POWER_UPS
