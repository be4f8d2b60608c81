"""
Per-mode update rules.

Each handler steers one entity for one tick: it sets the velocity,
integrates the position and returns the mode the entity should be in
afterwards. Handlers never look up the player or other entities on their
own; everything they may read arrives in the TickContext.
"""

import math
import random
from dataclasses import dataclass
from typing import Callable, Dict, Optional, Type

from models import Point2D

from arcadegen import config

from .entity import EntityRuntimeState
from .modes import BehaviorMode, Chase, Patrol, Wander

# Heading offsets tried in order when the direct chase heading leaves the world
AVOIDANCE_OFFSETS = (0.0, math.pi / 4, -math.pi / 4, math.pi / 2, -math.pi / 2)


@dataclass(frozen=True)
class BehaviorSettings:
    """Tuning shared by all entities of an engine."""
    chase_multiplier: float = config.CHASE_SPEED_MULTIPLIER
    patrol_tolerance: float = config.PATROL_TOLERANCE
    patrol_span: float = config.PATROL_SPAN
    wander_interval_min: float = config.WANDER_INTERVAL_MIN
    wander_interval_max: float = config.WANDER_INTERVAL_MAX
    toward_player_chance: float = config.WANDER_TOWARD_PLAYER_CHANCE
    avoidance_lookahead: float = 0.5  # seconds of travel tested per heading

    @property
    def patrol_start_offset(self) -> float:
        return self.patrol_span / 2


@dataclass(frozen=True)
class TickContext:
    """Everything a handler may read besides the entity itself."""
    dt: float
    now: float
    player: Optional[Point2D]
    world_width: float
    world_height: float
    rng: random.Random
    settings: BehaviorSettings

    def in_world(self, x: float, y: float) -> bool:
        return 0 < x < self.world_width and 0 < y < self.world_height


def _player_in_range(entity: EntityRuntimeState, ctx: TickContext) -> bool:
    return ctx.player is not None and entity.distance_to(ctx.player) < entity.detection_range


def update_patrol(entity: EntityRuntimeState, mode: Patrol, ctx: TickContext) -> BehaviorMode:
    """Walk horizontally toward the target; turn around on arrival.

    On arrival the target moves patrol_span back past the entity, so the
    entity sweeps a fixed stretch of floor. Being pushed against the
    world edge counts as arrival.
    """
    settings = ctx.settings
    target = mode.target_x
    if target is None:
        offset = settings.patrol_start_offset
        target = entity.x + (offset if ctx.rng.random() > 0.5 else -offset)

    # Detection uses the position the tick started from
    sees_player = _player_in_range(entity, ctx)

    direction = 1 if target > entity.x else -1
    entity.set_velocity(direction * entity.speed, 0.0)
    entity.advance(ctx.dt)

    at_edge = not 0 <= entity.x <= ctx.world_width
    if at_edge or abs(entity.x - target) < settings.patrol_tolerance:
        target = entity.x - direction * settings.patrol_span

    if sees_player:
        return Chase()
    return Patrol(target_x=target)


def update_wander(entity: EntityRuntimeState, mode: Wander, ctx: TickContext) -> BehaviorMode:
    """Hold a random heading, re-deciding on a randomized timer.

    A re-decision heads roughly toward the player (within +/- 90 degrees)
    with probability toward_player_chance, otherwise anywhere.
    """
    settings = ctx.settings
    next_decision_at = mode.next_decision_at

    if ctx.now >= next_decision_at:
        angle = ctx.rng.uniform(0.0, 2 * math.pi)
        if ctx.player is not None and ctx.rng.random() < settings.toward_player_chance:
            angle = entity.position.angle_to(ctx.player) + (ctx.rng.random() - 0.5) * math.pi

        speed = entity.speed * (0.7 + ctx.rng.random() * 0.6)
        entity.set_velocity(math.cos(angle) * speed, math.sin(angle) * speed)
        entity.last_decision_at = ctx.now
        next_decision_at = ctx.now + ctx.rng.uniform(settings.wander_interval_min, settings.wander_interval_max)

    sees_player = _player_in_range(entity, ctx)
    entity.advance(ctx.dt)

    if sees_player:
        return Chase()
    return Wander(next_decision_at=next_decision_at)


def update_chase(entity: EntityRuntimeState, mode: Chase, ctx: TickContext) -> BehaviorMode:
    """Steer toward the player, giving up beyond twice the detection range."""
    if ctx.player is None:
        return Wander(next_decision_at=ctx.now)

    if entity.distance_to(ctx.player) > entity.detection_range * 2:
        entity.stop()
        return Patrol()

    speed = entity.speed * ctx.settings.chase_multiplier
    direct = entity.position.angle_to(ctx.player)
    lookahead = speed * ctx.settings.avoidance_lookahead

    heading = direct
    for offset in AVOIDANCE_OFFSETS:
        candidate = direct + offset
        if ctx.in_world(entity.x + math.cos(candidate) * lookahead,
                        entity.y + math.sin(candidate) * lookahead):
            heading = candidate
            break

    entity.set_velocity(math.cos(heading) * speed, math.sin(heading) * speed)
    entity.advance(ctx.dt)
    return mode


Handler = Callable[[EntityRuntimeState, BehaviorMode, TickContext], BehaviorMode]

HANDLERS: Dict[Type, Handler] = {
    Patrol: update_patrol,
    Wander: update_wander,
    Chase: update_chase,
}
