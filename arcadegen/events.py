"""
Arcadegen Event Types

Events emitted by the runtime core for the rendering, audio and UI
collaborators:
- DamageTaken / HealthRestored: player health changed
- ScoreChanged / CollectiblePicked: scoring
- GameOver: the player ran out of health
- BehaviorChanged: an entity switched patrol/wander/chase
- LevelGenerated: a session built (or fell back to) a level

Every event carries a ``kind`` tag so consumers can dispatch on the
serialized form without knowing the Python class.
"""

from typing import Literal, Union

from pydantic import BaseModel, ConfigDict, Field

from models import BehaviorName, CollectibleKind


class GameEvent(BaseModel):
    """Base for all outbound events. Events are immutable once created."""

    model_config = ConfigDict(frozen=True)


class DamageTaken(GameEvent):
    kind: Literal['damage_taken'] = 'damage_taken'
    amount: int = Field(..., ge=0, description="Health removed")
    health: int = Field(..., ge=0, description="Health after the hit")


class HealthRestored(GameEvent):
    kind: Literal['health_restored'] = 'health_restored'
    amount: int = Field(..., ge=0, description="Health actually gained (after capping)")
    health: int = Field(..., ge=0, description="Health after the pickup")


class ScoreChanged(GameEvent):
    kind: Literal['score_changed'] = 'score_changed'
    delta: int
    score: int = Field(..., ge=0)


class CollectiblePicked(GameEvent):
    kind: Literal['collectible_picked'] = 'collectible_picked'
    collectible_id: str
    collectible_kind: CollectibleKind
    value: int


class GameOver(GameEvent):
    kind: Literal['game_over'] = 'game_over'
    final_score: int = Field(..., ge=0)


class BehaviorChanged(GameEvent):
    kind: Literal['behavior_changed'] = 'behavior_changed'
    entity_id: str
    previous: BehaviorName
    current: BehaviorName


class LevelGenerated(GameEvent):
    kind: Literal['level_generated'] = 'level_generated'
    level_id: str
    seed: int
    genre: str
    fallback: bool = False


AnyEvent = Union[
    DamageTaken,
    HealthRestored,
    ScoreChanged,
    CollectiblePicked,
    GameOver,
    BehaviorChanged,
    LevelGenerated,
]
