"""Entity behavior engine - patrol, wander and chase state machines."""

from .entity import EntityRuntimeState, EntitySnapshot
from .engine import BehaviorEngine
from .modes import BehaviorMode, Chase, Patrol, Wander
from .motion import BehaviorSettings, TickContext

__all__ = [
    'BehaviorEngine',
    'BehaviorSettings',
    'TickContext',
    'EntityRuntimeState',
    'EntitySnapshot',
    'BehaviorMode',
    'Patrol',
    'Wander',
    'Chase',
]
