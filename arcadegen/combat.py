"""
Combat and scoring rules.

CombatRules uses an immutable state pattern: every operation takes a
PlayerState and returns a CombatOutcome holding a new PlayerState plus
the events the change produced. The input state is never modified.

Examples:
    >>> rules = CombatRules()
    >>> player = rules.new_player()
    >>> hit = rules.apply_enemy_contact(player, now_ms=0)
    >>> hit.state.health
    90
    >>> rules.apply_enemy_contact(hit.state, now_ms=200).state.health  # cooldown
    90
"""

from dataclasses import dataclass, field
from typing import List

from models import CollectibleKind, CollectibleSpawn, PlayerState

from arcadegen import config
from arcadegen.events import (
    CollectiblePicked,
    DamageTaken,
    GameEvent,
    GameOver,
    HealthRestored,
    ScoreChanged,
)


@dataclass(frozen=True)
class CombatOutcome:
    """New player state plus the events that produced it."""
    state: PlayerState
    events: List[GameEvent] = field(default_factory=list)

    @property
    def changed(self) -> bool:
        return bool(self.events)

    @property
    def game_over(self) -> bool:
        return any(isinstance(event, GameOver) for event in self.events)


class CombatRules:
    """Damage, cooldown and pickup rules.

    Attributes:
        damage: Health removed per accepted enemy contact
        cooldown_ms: Minimum time between accepted hits
        max_health: Health of a new player and cap for restores
    """

    def __init__(
        self,
        damage: int = config.CONTACT_DAMAGE,
        cooldown_ms: float = config.DAMAGE_COOLDOWN_MS,
        max_health: int = config.MAX_HEALTH,
    ):
        if damage < 0:
            raise ValueError(f"damage must be non-negative, got {damage}")
        if max_health <= 0:
            raise ValueError(f"max_health must be positive, got {max_health}")
        self.damage = damage
        self.cooldown_ms = cooldown_ms
        self.max_health = max_health

    def new_player(self) -> PlayerState:
        return PlayerState(health=self.max_health)

    def is_game_over(self, state: PlayerState) -> bool:
        return state.is_dead

    def can_take_damage(self, state: PlayerState, now_ms: float) -> bool:
        """True if a hit at now_ms falls outside the cooldown window."""
        if state.is_dead:
            return False
        if state.last_damage_at_ms is None:
            return True
        return now_ms - state.last_damage_at_ms >= self.cooldown_ms

    def apply_enemy_contact(self, state: PlayerState, now_ms: float) -> CombatOutcome:
        """Apply one enemy overlap.

        Hits inside the cooldown window, and hits on a dead player, are
        no-ops. A hit that takes health to zero adds a GameOver event.
        """
        if not self.can_take_damage(state, now_ms):
            return CombatOutcome(state)

        health = max(0, state.health - self.damage)
        new_state = state.model_copy(update={
            'health': health,
            'last_damage_at_ms': now_ms,
        })

        events: List[GameEvent] = [DamageTaken(amount=state.health - health, health=health)]
        if self.is_game_over(new_state):
            events.append(GameOver(final_score=new_state.score))
        return CombatOutcome(new_state, events)

    def collect(self, state: PlayerState, collectible: CollectibleSpawn) -> CombatOutcome:
        """Apply a pickup. Dead players collect nothing."""
        if state.is_dead:
            return CombatOutcome(state)

        picked = CollectiblePicked(
            collectible_id=collectible.id,
            collectible_kind=collectible.kind,
            value=collectible.value,
        )

        if collectible.kind == CollectibleKind.HEALTH:
            health = min(self.max_health, state.health + collectible.value)
            new_state = state.model_copy(update={'health': health})
            return CombatOutcome(new_state, [
                picked,
                HealthRestored(amount=health - state.health, health=health),
            ])

        score = state.score + collectible.value
        new_state = state.model_copy(update={'score': score})
        return CombatOutcome(new_state, [
            picked,
            ScoreChanged(delta=collectible.value, score=score),
        ])
