"""
Game Session - one playthrough of a generated game.

A session wires the core together:
1. Resolves the genre from the manifest
2. Builds the level (procedural, or the manifest's authored level)
3. Places collectibles and spawns enemies into a BehaviorEngine
4. Steps player movement and entity behaviors once per tick
5. Applies combat and pickups when the collision system reports overlaps

Usage:
    session = GameSession(manifest, seed=42)

    # In game loop:
    result = session.tick(dt, inputs)
    for entity_id in overlapping_enemies(result):
        session.handle_enemy_overlap(entity_id)
    if result.state == GameState.GAME_OVER and restart_pressed:
        session.restart()

Rendering, asset loading and collision detection are not done here; the
session only consumes their results.
"""

import random
import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from models import (
    CollectibleSpawn,
    GameState,
    LevelDescription,
    Manifest,
    PlayerState,
    Point2D,
    Vector2D,
)

from arcadegen import config
from arcadegen.behaviors import BehaviorEngine, EntitySnapshot
from arcadegen.combat import CombatOutcome, CombatRules
from arcadegen.events import GameEvent, LevelGenerated
from arcadegen.generation import generate_level, is_fallback, place_collectibles, resolve_genre
from arcadegen.logging import emit_record, get_logger
from arcadegen.movement import InputState, MovementPolicy, PlayerBody, movement_for_genre

log = get_logger('session')

_SEED_SPACE = 2 ** 31


@dataclass
class TickResult:
    """What happened during one tick."""
    time: float
    state: GameState
    player: PlayerState
    player_position: Point2D
    player_velocity: Vector2D
    entities: List[EntitySnapshot] = field(default_factory=list)
    events: List[GameEvent] = field(default_factory=list)


class GameSession:
    """
    Runs one generated game.

    Attributes:
        manifest: The game manifest
        genre: Resolved genre
        level: Current level
        collectibles: Remaining pickups keyed by id
        behaviors: Entity behavior engine
        player: Current immutable player state
        body: Player physics body
    """

    def __init__(
        self,
        manifest: Manifest,
        seed: Optional[int] = None,
        procedural: Optional[bool] = None,
        chunk: Tuple[int, int] = (0, 0),
        width: int = config.CHUNK_WIDTH,
        height: int = config.CHUNK_HEIGHT,
        tile_size: float = config.TILE_SIZE,
        combat: Optional[CombatRules] = None,
        movement: Optional[MovementPolicy] = None,
    ):
        """
        Create a session and build its first level.

        Args:
            manifest: Game manifest
            seed: Level seed (default: derived from the wall clock)
            procedural: Synthesize the first level instead of using the
                manifest's first authored level (default:
                config.PROCEDURAL_LEVELS). Restarts always synthesize.
            chunk: Chunk coordinates of the level
            width: Level width in tiles
            height: Level height in tiles
            tile_size: World units per tile
            combat: Combat rules (default: CombatRules())
            movement: Movement policy (default: chosen by genre)
        """
        self.manifest = manifest
        self.genre = resolve_genre(manifest.genre, manifest.game_id)
        self.procedural = config.PROCEDURAL_LEVELS if procedural is None else procedural
        self.chunk = chunk
        self.width = width
        self.height = height
        self.tile_size = tile_size
        self.combat = combat or CombatRules()
        self.movement = movement or movement_for_genre(self.genre)

        if seed is None:
            seed = int(time.time() * 1000) % _SEED_SPACE
        # Restart seeds follow from the first seed, independent of play
        self._seed_sequence = random.Random(seed)

        self._start(seed, use_authored=True)

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def _start(self, seed: int, use_authored: bool = False) -> None:
        self.seed = seed
        self.elapsed = 0.0
        self._state = GameState.PLAYING
        self._pending: List[GameEvent] = []

        self.level = self._build_level(seed, use_authored)
        self.world_width = self.level.width * self.tile_size
        self.world_height = self.level.height * self.tile_size

        self.collectibles: Dict[str, CollectibleSpawn] = {
            c.id: c for c in place_collectibles(self.level, seed)
        }

        self.behaviors = BehaviorEngine(
            self.world_width,
            self.world_height,
            rng=random.Random(seed),
        )
        for record in self.level.spawn.enemies:
            self.behaviors.spawn_from_record(record, self.tile_size)
        for definition in self.manifest.dynamic_entities:
            self.behaviors.spawn_from_definition(definition, self.tile_size)

        spawn = self.level.spawn.player.to_world(self.tile_size)
        self.body = PlayerBody(x=spawn.x, y=spawn.y)
        self.player = self.combat.new_player()

        fallback = is_fallback(self.level)
        self._pending.append(LevelGenerated(
            level_id=str(self.level.id),
            seed=seed,
            genre=self.genre.value,
            fallback=fallback,
        ))
        emit_record('session', {
            'type': 'level_generated',
            'game_id': self.manifest.game_id,
            'level_id': str(self.level.id),
            'seed': seed,
            'genre': self.genre.value,
            'fallback': fallback,
            'enemies': len(self.behaviors),
            'collectibles': len(self.collectibles),
        })
        log.info("Started %s (%s) on level %s with %d entities",
                 self.manifest.game_id, self.genre.value, self.level.id, len(self.behaviors))

    def _build_level(self, seed: int, use_authored: bool) -> LevelDescription:
        # Authored levels only open a session; restarts always synthesize
        if use_authored and not self.procedural and self.manifest.levels:
            return self.manifest.levels[0]
        cx, cy = self.chunk
        return generate_level(cx, cy, self.width, self.height, seed, self.genre)

    def restart(self, seed: Optional[int] = None) -> int:
        """Start over with a fresh player, entities and a newly synthesized level.

        Args:
            seed: New level seed (default: next seed derived from the first)

        Returns:
            The seed used
        """
        if seed is None:
            seed = self._seed_sequence.randrange(_SEED_SPACE)
        emit_record('session', {
            'type': 'restart',
            'game_id': self.manifest.game_id,
            'previous_seed': self.seed,
            'seed': seed,
            'score': self.player.score,
        })
        log.info("Restarting %s with seed %d", self.manifest.game_id, seed)
        self._start(seed)
        return seed

    # =========================================================================
    # Properties
    # =========================================================================

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def is_game_over(self) -> bool:
        return self._state == GameState.GAME_OVER

    @property
    def now_ms(self) -> float:
        return self.elapsed * 1000.0

    # =========================================================================
    # Tick
    # =========================================================================

    def tick(self, dt: float, inputs: Optional[InputState] = None) -> TickResult:
        """
        Advance the session by dt seconds.

        Each phase is guarded: a failure is logged and the tick still
        returns a result.

        Args:
            dt: Delta time in seconds (negative values count as 0)
            inputs: Inputs held this tick (default: nothing held)

        Returns:
            TickResult with state, entity snapshots and drained events
        """
        dt = max(0.0, dt)
        self.elapsed += dt
        inputs = inputs or InputState()

        events: List[GameEvent] = []

        try:
            self._update_player(dt, inputs)
        except Exception:
            log.exception("Player update failed")

        try:
            events.extend(self.behaviors.update(dt, self.elapsed, self.body.position))
        except Exception:
            log.exception("Behavior update failed")

        return TickResult(
            time=self.elapsed,
            state=self._state,
            player=self.player,
            player_position=self.body.position,
            player_velocity=self.body.velocity,
            entities=self.behaviors.snapshots(),
            events=self._drain_pending() + events,
        )

    def _update_player(self, dt: float, inputs: InputState) -> None:
        if self.is_game_over:
            self.body.stop()
            return

        self.movement.apply(self.body, inputs, dt)
        self.body.advance(dt)
        self._clamp_player()

    def _clamp_player(self) -> None:
        """Keep the player inside the world; the bottom edge is ground."""
        body = self.body
        if body.x < 0.0 or body.x > self.world_width:
            body.x = min(max(body.x, 0.0), self.world_width)
            body.vx = 0.0
        if body.y < 0.0:
            body.y = 0.0
            body.vy = max(body.vy, 0.0)
        elif body.y >= self.world_height:
            body.y = self.world_height
            body.vy = min(body.vy, 0.0)
            if self.movement.has_gravity:
                body.on_ground = True

    def _drain_pending(self) -> List[GameEvent]:
        pending, self._pending = self._pending, []
        return pending

    # =========================================================================
    # Collision feedback
    # =========================================================================

    def set_player_grounded(self, grounded: bool) -> None:
        """Report whether the player stands on something this tick."""
        self.body.on_ground = grounded
        if grounded and self.body.vy > 0:
            self.body.vy = 0.0

    def handle_enemy_overlap(self, entity_id: str) -> List[GameEvent]:
        """Apply contact damage from an overlapping entity.

        Returns:
            Events produced (also queued for the next TickResult)
        """
        if self.behaviors.get_entity(entity_id) is None:
            log.warning("Overlap with unknown entity %s", entity_id)
            return []
        return self._apply(self.combat.apply_enemy_contact(self.player, self.now_ms))

    def handle_collectible_overlap(self, collectible_id: str) -> List[GameEvent]:
        """Pick up an overlapping collectible.

        Returns:
            Events produced (also queued for the next TickResult)
        """
        collectible = self.collectibles.get(collectible_id)
        if collectible is None or self.player.is_dead:
            return []
        del self.collectibles[collectible_id]
        return self._apply(self.combat.collect(self.player, collectible))

    def _apply(self, outcome: CombatOutcome) -> List[GameEvent]:
        self.player = outcome.state
        self._pending.extend(outcome.events)
        if outcome.game_over:
            self._enter_game_over()
        return list(outcome.events)

    def _enter_game_over(self) -> None:
        self._state = GameState.GAME_OVER
        self.body.stop()
        emit_record('session', {
            'type': 'game_over',
            'game_id': self.manifest.game_id,
            'seed': self.seed,
            'score': self.player.score,
            'time': self.elapsed,
        })
        log.info("Game over: %s scored %d", self.manifest.game_id, self.player.score)
