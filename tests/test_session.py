"""
Game session tests.

Run with: pytest tests/test_session.py -v
"""

import pytest

from models import GameState, Manifest, PlayerState

from arcadegen.combat import CombatRules
from arcadegen.events import GameOver, LevelGenerated
from arcadegen.generation import Genre
from arcadegen.movement import InputState, PlatformerMovement, TopDownMovement
from arcadegen.session import GameSession


@pytest.fixture
def maze_manifest():
    return Manifest(game_id='test-maze', genre='maze')


@pytest.fixture
def session(manifest):
    """Procedural maze session with one extra dynamic bat."""
    return GameSession(manifest, seed=42, procedural=True)


class TestSetup:
    """Test level building and spawning."""

    def test_procedural_level(self, session):
        """The genre and seed pick the level."""
        assert session.genre == Genre.MAZE
        assert session.level.id == 'proc_42_maze_0_0'
        assert isinstance(session.movement, TopDownMovement)
        assert session.state == GameState.PLAYING

    def test_entities_spawned(self, session):
        """Level enemies plus manifest dynamic entities are spawned."""
        expected = len(session.level.spawn.enemies) + len(session.manifest.dynamic_entities)
        assert len(session.behaviors) == expected
        assert any(e.entity_type == 'bat' for e in session.behaviors.entities.values())

    def test_player_at_spawn(self, session):
        """The body starts at the spawn tile center with full health."""
        spawn = session.level.spawn.player.to_world(session.tile_size)
        assert (session.body.x, session.body.y) == (spawn.x, spawn.y)
        assert session.player.health == 100

    def test_authored_level(self, manifest):
        """procedural=False plays the manifest's first level."""
        session = GameSession(manifest, seed=1, procedural=False)
        assert session.level.id == 'authored-1'
        assert session.world_width == 5 * session.tile_size

    def test_authored_without_levels_generates(self, maze_manifest):
        """With no authored levels the session generates one anyway."""
        session = GameSession(maze_manifest, seed=3, procedural=False)
        assert session.level.id == 'proc_3_maze_0_0'

    def test_platformer_movement(self):
        """A platformer manifest gets gravity."""
        session = GameSession(Manifest(game_id='jumpy-platformer'), seed=5)
        assert isinstance(session.movement, PlatformerMovement)

    def test_same_seed_same_game(self, manifest):
        """Two sessions with one seed build the same level and pickups."""
        a = GameSession(manifest, seed=9)
        b = GameSession(manifest, seed=9)
        assert a.level == b.level
        assert a.collectibles == b.collectibles


class TestTick:
    """Test the per-frame update."""

    def test_first_tick_reports_level(self, session):
        """The level event is delivered once."""
        first = session.tick(0.016)
        second = session.tick(0.016)

        assert isinstance(first.events[0], LevelGenerated)
        assert first.events[0].level_id == 'proc_42_maze_0_0'
        assert not any(isinstance(e, LevelGenerated) for e in second.events)

    def test_clock_advances(self, session):
        """Ticks accumulate time; negative dt counts as zero."""
        session.tick(0.25)
        result = session.tick(-1.0)
        assert result.time == pytest.approx(0.25)

    def test_player_moves(self, session):
        """Held input moves the player."""
        start = session.body.x
        result = session.tick(0.1, InputState(right=True))
        assert result.player_position.x == pytest.approx(start + 15.0)
        assert result.player_velocity.x == 150

    def test_entities_reported(self, session):
        """Every entity appears in the result."""
        result = session.tick(0.016)
        assert {e.id for e in result.entities} == set(session.behaviors.entities)

    def test_player_stays_in_world(self, session):
        """The player is clamped to the world rectangle."""
        for _ in range(100):
            result = session.tick(0.1, InputState(left=True, up=True))
        assert result.player_position.x == 0.0
        assert result.player_position.y == 0.0

    def test_player_failure_contained(self, session, monkeypatch):
        """A failing movement phase is logged; behaviors still run."""
        def broken(body, inputs, dt):
            raise RuntimeError("boom")

        monkeypatch.setattr(session.movement, 'apply', broken)
        result = session.tick(0.016, InputState(right=True))
        assert result.state == GameState.PLAYING
        assert result.time == pytest.approx(0.016)


class TestCombat:
    """Test collision feedback."""

    def _enemy_id(self, session):
        return next(iter(session.behaviors.entities))

    def test_cooldown(self, session):
        """Two overlaps 200ms apart cost 10 health."""
        enemy = self._enemy_id(session)
        session.tick(0.1)
        session.handle_enemy_overlap(enemy)
        session.tick(0.2)
        session.handle_enemy_overlap(enemy)
        assert session.player.health == 90

    def test_unknown_entity_ignored(self, session):
        """Overlaps with unknown ids do nothing."""
        assert session.handle_enemy_overlap('nobody') == []
        assert session.player.health == 100

    def test_events_queued_for_next_tick(self, session):
        """Overlap events also arrive in the next TickResult."""
        session.tick(0.016)
        events = session.handle_enemy_overlap(self._enemy_id(session))
        result = session.tick(0.016)
        assert events[0] in result.events

    def test_game_over(self, session, session_records):
        """A lethal hit ends the game, stops the player and freezes the score."""
        session.player = PlayerState(health=5, score=30)
        events = session.handle_enemy_overlap(self._enemy_id(session))

        assert any(isinstance(e, GameOver) for e in events)
        assert session.state == GameState.GAME_OVER

        before = (session.body.x, session.body.y)
        result = session.tick(0.1, InputState(right=True, down=True))
        assert (result.player_velocity.x, result.player_velocity.y) == (0.0, 0.0)
        assert (result.player_position.x, result.player_position.y) == before

        item = next(iter(session.collectibles))
        assert session.handle_collectible_overlap(item) == []
        assert session.player.score == 30
        assert item in session.collectibles

        records = session_records.of_type('game_over')
        assert len(records) == 1
        assert records[0]['score'] == 30

    def test_collectible(self, session):
        """Picking up removes the collectible and applies it."""
        item_id, item = next(iter(session.collectibles.items()))
        events = session.handle_collectible_overlap(item_id)

        assert item_id not in session.collectibles
        assert events[0].collectible_id == item_id
        assert session.handle_collectible_overlap(item_id) == []

    def test_grounded(self):
        """Grounding cancels downward velocity."""
        session = GameSession(Manifest(game_id='x', genre='platformer'), seed=5)
        session.body.vy = 120.0
        session.set_player_grounded(True)
        assert session.body.on_ground
        assert session.body.vy == 0.0


class TestRestart:
    """Test restarting a session."""

    def test_restart_resets(self, session, session_records):
        """Restart resets health, score and state and builds a new level."""
        session.player = PlayerState(health=0, score=30)
        session.handle_enemy_overlap('nobody')
        seed = session.restart()

        assert session.player == PlayerState()
        assert session.state == GameState.PLAYING
        assert session.seed == seed
        assert session.level.id == f'proc_{seed}_maze_0_0'
        assert session.elapsed == 0.0
        assert session_records.of_type('restart')[0]['previous_seed'] == 42

    def test_restart_seed_sequence(self, manifest):
        """Restart seeds follow deterministically from the first seed."""
        a = GameSession(manifest, seed=42)
        b = GameSession(manifest, seed=42)
        a.tick(0.5)
        assert a.restart() == b.restart()

    def test_restart_explicit_seed(self, session):
        """An explicit seed is used as given."""
        assert session.restart(seed=7) == 7
        assert session.level.id == 'proc_7_maze_0_0'

    def test_restart_after_authored_level_synthesizes(self, manifest):
        """An authored opening level is replaced by a synthesized one on restart."""
        session = GameSession(manifest, seed=1, procedural=False)
        assert session.level.id == 'authored-1'

        seed = session.restart()

        assert session.level.id == f'proc_{seed}_maze_0_0'
        assert session.world_width == session.width * session.tile_size

    def test_level_record(self, manifest, session_records):
        """Level generation is recorded."""
        GameSession(manifest, seed=11)
        record = session_records.of_type('level_generated')[0]
        assert record['seed'] == 11
        assert record['genre'] == 'maze'
        assert record['fallback'] is False
