"""
Player state model.

PlayerState is immutable: combat and scoring rules return a new instance
for every change, so earlier states stay valid for comparison and replay.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field


class PlayerState(BaseModel):
    """Health, score and damage cooldown bookkeeping for the player.

    Attributes:
        health: Remaining health (never below 0)
        score: Accumulated score (never decreases except on restart)
        last_damage_at_ms: Session time of the last accepted hit, if any

    Examples:
        >>> state = PlayerState()
        >>> state.health, state.score
        (100, 0)
        >>> PlayerState(health=0).is_dead
        True
    """
    health: int = Field(default=100, ge=0)
    score: int = Field(default=0, ge=0)
    last_damage_at_ms: Optional[float] = None

    model_config = ConfigDict(frozen=True)

    @computed_field
    @property
    def is_dead(self) -> bool:
        return self.health <= 0

    def __str__(self) -> str:
        return f"PlayerState(health={self.health}, score={self.score})"
