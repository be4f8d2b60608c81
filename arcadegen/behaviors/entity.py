"""
EntityRuntimeState - the mutable per-entity record behaviors operate on.

An entity has:
- Identity (id, type tag)
- Position and velocity in world units
- Movement tuning (speed, detection range)
- Its current behavior mode

Entities are mutable - the engine moves them and swaps their mode each
tick. EntitySnapshot is the frozen copy handed to callers.
"""

from dataclasses import dataclass, field

from models import BehaviorName, Point2D

from .modes import BehaviorMode, Wander


@dataclass(frozen=True)
class EntitySnapshot:
    """Read-only view of an entity at the end of a tick."""
    id: str
    entity_type: str
    x: float
    y: float
    vx: float
    vy: float
    behavior: BehaviorName


@dataclass
class EntityRuntimeState:
    """A non-player entity driven by the behavior engine."""

    # Identity
    id: str
    entity_type: str

    # Transform
    x: float = 0.0
    y: float = 0.0

    # Physics
    vx: float = 0.0
    vy: float = 0.0

    # Tuning
    speed: float = 50.0
    detection_range: float = 150.0

    # Behavior
    mode: BehaviorMode = field(default_factory=Wander)
    last_decision_at: float = 0.0

    @property
    def behavior(self) -> BehaviorName:
        return self.mode.name

    @property
    def position(self) -> Point2D:
        return Point2D(x=self.x, y=self.y)

    def distance_to(self, point: Point2D) -> float:
        return self.position.distance_to(point)

    def set_velocity(self, vx: float, vy: float) -> None:
        self.vx = vx
        self.vy = vy

    def stop(self) -> None:
        """Zero the velocity."""
        self.vx = 0.0
        self.vy = 0.0

    def advance(self, dt: float) -> None:
        """Integrate position from velocity over dt seconds."""
        self.x += self.vx * dt
        self.y += self.vy * dt

    def snapshot(self) -> EntitySnapshot:
        return EntitySnapshot(
            id=self.id,
            entity_type=self.entity_type,
            x=self.x,
            y=self.y,
            vx=self.vx,
            vy=self.vy,
            behavior=self.behavior,
        )
