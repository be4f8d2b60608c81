"""
Shared primitive data types for the generator and runtime core.

This module provides the basic coordinate types used throughout the
codebase: tile-grid positions for level layouts and world-space points
for entities moving between tiles.
"""

import math

from pydantic import BaseModel, ConfigDict


class GridPosition(BaseModel):
    """Immutable integer tile coordinate inside a level layout.

    Attributes:
        x: Column index (0 = left edge)
        y: Row index (0 = top row)

    Examples:
        >>> spawn = GridPosition(x=2, y=2)
        >>> spawn.to_world(64)
        Point2D(x=160.00, y=160.00)
    """
    x: int
    y: int

    model_config = ConfigDict(frozen=True)

    def to_world(self, tile_size: float) -> 'Point2D':
        """Return the world-space center of this tile."""
        return Point2D(
            x=self.x * tile_size + tile_size / 2,
            y=self.y * tile_size + tile_size / 2,
        )

    def __str__(self) -> str:
        return f"GridPosition({self.x}, {self.y})"


class Point2D(BaseModel):
    """Immutable 2D point/vector for positions and velocities.

    Used for any world-space coordinate: entity positions, player
    position, velocity vectors.

    Attributes:
        x: X coordinate (horizontal, grows right)
        y: Y coordinate (vertical, grows down)

    Examples:
        >>> a = Point2D(x=0.0, y=0.0)
        >>> a.distance_to(Point2D(x=3.0, y=4.0))
        5.0
    """
    x: float
    y: float

    model_config = ConfigDict(frozen=True)

    def distance_to(self, other: 'Point2D') -> float:
        """Euclidean distance to another point."""
        return math.hypot(other.x - self.x, other.y - self.y)

    def angle_to(self, other: 'Point2D') -> float:
        """Heading in radians from this point toward another."""
        return math.atan2(other.y - self.y, other.x - self.x)

    def __str__(self) -> str:
        return f"Point2D(x={self.x:.2f}, y={self.y:.2f})"

    def __repr__(self) -> str:
        return str(self)


# Alias used where the value is a velocity rather than a position
Vector2D = Point2D
