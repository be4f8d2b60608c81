"""
Behavior modes - the tagged state an entity is in.

Each mode carries only the data that mode needs, so a patrol target can
not linger on a chasing entity:

    Patrol(target_x)          walking back and forth along x
    Wander(next_decision_at)  random headings, re-decided on a timer
    Chase()                   steering toward the player
"""

from dataclasses import dataclass
from typing import ClassVar, Optional, Union

from models import BehaviorName


@dataclass(frozen=True)
class Patrol:
    """Walk toward target_x, then turn around.

    target_x is None until the first update picks an initial target.
    """
    target_x: Optional[float] = None

    name: ClassVar[BehaviorName] = BehaviorName.PATROL


@dataclass(frozen=True)
class Wander:
    """Move in a random heading until the session clock reaches next_decision_at."""
    next_decision_at: float = 0.0

    name: ClassVar[BehaviorName] = BehaviorName.WANDER


@dataclass(frozen=True)
class Chase:
    name: ClassVar[BehaviorName] = BehaviorName.CHASE


BehaviorMode = Union[Patrol, Wander, Chase]
