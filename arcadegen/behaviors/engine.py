"""
Behavior Engine - owns the non-player entities and steps their behaviors.

The engine:
1. Spawns entities from level spawn records and manifest definitions
2. Keeps them in an arena keyed by entity id
3. Runs each entity's mode handler once per tick
4. Clamps entities to the world rectangle
5. Reports behavior transitions as BehaviorChanged events

The player is never looked up from shared state; the caller passes its
position into update() every tick.
"""

import random
from typing import Optional

from models import (
    BehaviorName,
    DynamicEntityDefinition,
    EnemySpawnRecord,
    GridPosition,
    Point2D,
)

from arcadegen import config
from arcadegen.events import BehaviorChanged
from arcadegen.logging import get_logger

from .entity import EntityRuntimeState, EntitySnapshot
from .modes import BehaviorMode, Chase, Patrol, Wander
from .motion import HANDLERS, BehaviorSettings, TickContext

log = get_logger('behaviors')

# Grid position used when a definition has neither coordinates nor an area
DEFAULT_SPAWN = GridPosition(x=5, y=5)


class BehaviorEngine:
    """
    Manages entity behaviors and the entity arena.

    Usage:
        engine = BehaviorEngine(world_width=1280, world_height=960)
        for record in level.spawn.enemies:
            engine.spawn_from_record(record, tile_size=64)

        # In game loop:
        changes = engine.update(dt, now, player_position)
        for entity in engine.snapshots():
            render(entity)
    """

    def __init__(
        self,
        world_width: float,
        world_height: float,
        rng: Optional[random.Random] = None,
        detection_range: float = config.DETECTION_RANGE,
        settings: Optional[BehaviorSettings] = None,
    ):
        self.world_width = world_width
        self.world_height = world_height
        self.detection_range = detection_range
        self.settings = settings or BehaviorSettings()
        self._rng = rng or random.Random()

        # Entity storage
        self.entities: dict[str, EntityRuntimeState] = {}
        self._spawn_counter = 0

    def __len__(self) -> int:
        return len(self.entities)

    def _initial_mode(self, behavior: BehaviorName, x: float, direction: Optional[int], now: float) -> BehaviorMode:
        if behavior == BehaviorName.PATROL:
            if direction:
                return Patrol(target_x=x + direction * self.settings.patrol_start_offset)
            return Patrol()
        if behavior == BehaviorName.CHASE:
            return Chase()
        return Wander(next_decision_at=now)

    def create_entity(
        self,
        entity_type: str,
        x: float,
        y: float,
        behavior: BehaviorName = BehaviorName.WANDER,
        speed: float = config.DEFAULT_ENTITY_SPEED,
        direction: Optional[int] = None,
        now: float = 0.0,
    ) -> EntityRuntimeState:
        """
        Create a new entity and register it.

        Args:
            entity_type: Type tag (e.g., 'enemy', 'bat')
            x, y: Initial world position
            behavior: Initial behavior
            speed: Base speed in world units per second
            direction: Initial patrol direction (+1 right, -1 left)
            now: Session clock, seeds the first wander decision

        Returns:
            The created entity (already registered)
        """
        self._spawn_counter += 1
        entity_id = f"{entity_type}_{self._spawn_counter}"

        entity = EntityRuntimeState(
            id=entity_id,
            entity_type=entity_type,
            x=x,
            y=y,
            speed=speed,
            detection_range=self.detection_range,
            mode=self._initial_mode(behavior, x, direction, now),
            last_decision_at=now,
        )
        self.entities[entity_id] = entity
        log.debug("Spawned %s at (%.1f, %.1f) as %s", entity_id, x, y, entity.behavior.value)
        return entity

    def spawn_from_record(self, record: EnemySpawnRecord, tile_size: float) -> EntityRuntimeState:
        """Spawn an enemy from a level's spawn record."""
        center = record.position.to_world(tile_size)
        return self.create_entity(
            record.type,
            center.x,
            center.y,
            behavior=record.behavior,
            speed=record.speed,
        )

    def spawn_from_definition(self, definition: DynamicEntityDefinition, tile_size: float) -> EntityRuntimeState:
        """Spawn an entity from a manifest's dynamic entity definition.

        Position is the first explicit spawn coordinate, else a uniform
        integer tile inside the spawn area, else DEFAULT_SPAWN. Behavior
        names the engine does not know fall back to wander.
        """
        if definition.spawn_coords:
            tile = definition.spawn_coords[0]
        elif definition.spawn_area is not None:
            area = definition.spawn_area
            tile = GridPosition(
                x=self._rng.randint(area.x_min, area.x_max),
                y=self._rng.randint(area.y_min, area.y_max),
            )
        else:
            tile = DEFAULT_SPAWN

        descriptor = definition.behavior
        try:
            behavior = BehaviorName(descriptor.name.lower())
        except ValueError:
            log.warning("Unknown behavior %r for %s, using wander", descriptor.name, definition.type)
            behavior = BehaviorName.WANDER

        center = tile.to_world(tile_size)
        return self.create_entity(
            definition.type,
            center.x,
            center.y,
            behavior=behavior,
            speed=descriptor.speed,
            direction=descriptor.direction,
        )

    def get_entity(self, entity_id: str) -> Optional[EntityRuntimeState]:
        """Get entity by ID."""
        return self.entities.get(entity_id)

    def remove_entity(self, entity_id: str) -> bool:
        """Remove an entity. Returns True if it existed."""
        return self.entities.pop(entity_id, None) is not None

    def snapshots(self) -> list[EntitySnapshot]:
        return [entity.snapshot() for entity in self.entities.values()]

    def update(self, dt: float, now: float, player: Optional[Point2D]) -> list[BehaviorChanged]:
        """
        Step every entity's behavior once.

        Args:
            dt: Delta time in seconds
            now: Session clock in seconds
            player: Player world position, or None if there is no player

        Returns:
            Behavior transitions that happened this tick
        """
        ctx = TickContext(
            dt=dt,
            now=now,
            player=player,
            world_width=self.world_width,
            world_height=self.world_height,
            rng=self._rng,
            settings=self.settings,
        )

        changes: list[BehaviorChanged] = []
        for entity in list(self.entities.values()):
            try:
                previous = entity.mode
                handler = HANDLERS[type(previous)]
                entity.mode = handler(entity, previous, ctx)
                self._clamp(entity)
            except Exception:
                log.exception("Error updating entity %s", entity.id)
                continue

            if entity.mode.name != previous.name:
                log.debug("%s: %s -> %s", entity.id, previous.name.value, entity.mode.name.value)
                changes.append(BehaviorChanged(
                    entity_id=entity.id,
                    previous=previous.name,
                    current=entity.mode.name,
                ))
        return changes

    def _clamp(self, entity: EntityRuntimeState) -> None:
        """Keep the entity inside the world rectangle."""
        entity.x = min(max(entity.x, 0.0), self.world_width)
        entity.y = min(max(entity.y, 0.0), self.world_height)

    def clear(self) -> None:
        """Remove all entities and reset state."""
        self.entities.clear()
        self._spawn_counter = 0
