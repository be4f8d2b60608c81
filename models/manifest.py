"""
Manifest models - the inbound contract from the generation collaborator.

A manifest describes one generated game: palette, asset descriptors,
AI-authored fallback levels and optional dynamic entity definitions.
The wire format uses camelCase keys; Python code uses snake_case.
"""

import re
from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from pydantic.alias_generators import to_camel

from .level import LevelDescription
from .primitives import GridPosition

_HEX_COLOR = re.compile(r'^#[0-9a-fA-F]{6}$')


class _WireModel(BaseModel):
    """Base for manifest models: camelCase on the wire, immutable."""
    model_config = ConfigDict(
        frozen=True,
        alias_generator=to_camel,
        populate_by_name=True,
    )


class AssetType(str, Enum):
    SPRITE = "sprite"
    TILE = "tile"
    ENEMY = "enemy"
    MODEL = "model"


class AssetDescriptor(_WireModel):
    """An asset the rendering collaborator loads before the first tick."""
    type: AssetType
    name: str
    url: str
    frames: int = Field(default=1, ge=1)


class SpawnArea(_WireModel):
    """Inclusive grid rectangle an entity may spawn in."""
    x_min: int
    x_max: int
    y_min: int
    y_max: int

    @model_validator(mode='after')
    def validate_bounds(self) -> 'SpawnArea':
        if self.x_min > self.x_max:
            raise ValueError(f'x_min ({self.x_min}) must not exceed x_max ({self.x_max})')
        if self.y_min > self.y_max:
            raise ValueError(f'y_min ({self.y_min}) must not exceed y_max ({self.y_max})')
        return self


class BehaviorDescriptor(BaseModel):
    """Behavior name plus numeric parameters.

    Unknown parameters are kept (``extra='allow'``) so generated manifests
    can carry tuning values the runtime does not read yet.
    """
    name: str
    speed: float = Field(default=50.0, gt=0)
    direction: Optional[int] = None

    model_config = ConfigDict(frozen=True, extra='allow')


class DynamicEntityDefinition(_WireModel):
    """A non-player entity to spawn in addition to the level's enemies.

    Position comes from the first explicit spawn coordinate if any,
    otherwise from a uniform pick inside the spawn area.
    """
    type: str
    spawn_area: Optional[SpawnArea] = None
    spawn_coords: List[GridPosition] = Field(default_factory=list)
    behavior: BehaviorDescriptor


class Manifest(_WireModel):
    """A generated game description.

    Attributes:
        game_id: Game identifier (also used to infer the genre)
        genre: Explicit genre tag, free text
        palette: Ordered hex colors (``#RRGGBB``)
        assets: Asset descriptors
        levels: AI-authored levels (fallback path only)
        dynamic_entities: Optional extra non-player entities
    """
    game_id: str
    genre: Optional[str] = None
    palette: List[str] = Field(default_factory=list)
    assets: List[AssetDescriptor] = Field(default_factory=list)
    levels: List[LevelDescription] = Field(default_factory=list)
    dynamic_entities: List[DynamicEntityDefinition] = Field(default_factory=list)

    @field_validator('palette')
    @classmethod
    def validate_palette(cls, v: List[str]) -> List[str]:
        """Validate palette entries are #RRGGBB strings."""
        for color in v:
            if not _HEX_COLOR.match(color):
                raise ValueError(f'Palette entry must be a #RRGGBB hex color, got {color!r}')
        return v
