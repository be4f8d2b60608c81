"""
Player movement policies.

The genre decides how input becomes velocity:
- PlatformerMovement: horizontal run, jump from the ground, gravity
- TopDownMovement: free 4-way movement, no gravity

Policies only compute velocity. Integrating position and resolving
collisions is the caller's job; the collision system reports contact
with the ground back through PlayerBody.on_ground.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Union

from pydantic import BaseModel, ConfigDict

from models import Point2D, Vector2D

from arcadegen import config
from arcadegen.generation.genre import Genre, coerce_genre


class InputState(BaseModel):
    """Directional and jump inputs held during a tick."""
    left: bool = False
    right: bool = False
    up: bool = False
    down: bool = False
    jump: bool = False

    model_config = ConfigDict(frozen=True)


@dataclass
class PlayerBody:
    """The player's physical body in world units."""
    x: float
    y: float
    vx: float = 0.0
    vy: float = 0.0
    on_ground: bool = False

    @property
    def position(self) -> Point2D:
        return Point2D(x=self.x, y=self.y)

    @property
    def velocity(self) -> Vector2D:
        return Vector2D(x=self.vx, y=self.vy)

    def stop(self) -> None:
        self.vx = 0.0
        self.vy = 0.0

    def advance(self, dt: float) -> None:
        self.x += self.vx * dt
        self.y += self.vy * dt


class MovementPolicy(ABC):
    """Turns held inputs into player velocity."""

    has_gravity: bool = False

    def __init__(self, speed: float = config.PLAYER_SPEED):
        self.speed = speed

    @abstractmethod
    def apply(self, body: PlayerBody, inputs: InputState, dt: float) -> Vector2D:
        """Update the body's velocity for this tick and return it."""
        ...

    def _axis(self, negative: bool, positive: bool, positive_wins: bool = False) -> float:
        # Negative direction wins when both are held, unless positive_wins
        if positive and (positive_wins or not negative):
            return self.speed
        if negative:
            return -self.speed
        return 0.0


class PlatformerMovement(MovementPolicy):
    """Side-view movement with gravity.

    Left/right set the horizontal velocity outright. Up or jump launch
    the player only while on_ground. Gravity pulls every tick; landing
    is reported by the collision system via on_ground.
    """

    has_gravity = True

    def __init__(
        self,
        speed: float = config.PLAYER_SPEED,
        jump_impulse: float = config.JUMP_IMPULSE,
        gravity: float = config.GRAVITY,
    ):
        super().__init__(speed)
        self.jump_impulse = jump_impulse
        self.gravity = gravity

    def apply(self, body: PlayerBody, inputs: InputState, dt: float) -> Vector2D:
        body.vx = self._axis(inputs.left, inputs.right)
        if (inputs.up or inputs.jump) and body.on_ground:
            body.vy = -self.jump_impulse
            body.on_ground = False
        body.vy += self.gravity * dt
        return body.velocity


class TopDownMovement(MovementPolicy):
    """Overhead movement: each axis driven only by its own inputs.

    Opposite keys held together resolve to right and down.
    """

    def apply(self, body: PlayerBody, inputs: InputState, dt: float) -> Vector2D:
        body.vx = self._axis(inputs.left, inputs.right, positive_wins=True)
        body.vy = self._axis(inputs.up, inputs.down, positive_wins=True)
        return body.velocity


def movement_for_genre(genre: Union[Genre, str, None]) -> MovementPolicy:
    """Pick the movement policy for a genre."""
    if coerce_genre(genre).has_gravity:
        return PlatformerMovement()
    return TopDownMovement()
