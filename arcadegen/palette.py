"""
Palette handling for generated games.

Manifests carry their palette as ``#RRGGBB`` strings. GamePalette turns
that list into RGB tuples and assigns drawing roles (background, walls,
player, enemies, pickups) by brightness, so any palette the generator
picks stays readable.
"""

from typing import Iterator, List, Optional, Sequence, Tuple

# Type alias for RGB color
Color = Tuple[int, int, int]

# Palette used when a manifest provides none
DEFAULT_PALETTE: List[str] = [
    '#FF6B6B',  # Coral
    '#4ECDC4',  # Teal
    '#45B7D1',  # Sky
    '#96CEB4',  # Sage
    '#FFEAA7',  # Cream
    '#DDA0DD',  # Plum
]


def hex_to_rgb(value: str) -> Color:
    """Parse ``#RRGGBB`` (leading # optional) into an RGB tuple.

    Raises:
        ValueError: If the string is not a 6-digit hex color
    """
    digits = value[1:] if value.startswith('#') else value
    if len(digits) != 6:
        raise ValueError(f"Expected #RRGGBB color, got {value!r}")
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgb_to_hex(color: Color) -> str:
    return '#{:02X}{:02X}{:02X}'.format(*color)


def brightness(color: Color) -> int:
    return sum(color)


def darken(color: Color, factor: float = 0.5) -> Color:
    return tuple(int(channel * factor) for channel in color)  # type: ignore[return-value]


class GamePalette:
    """Manages a game's colors and the roles they are drawn in."""

    def __init__(self, colors: Optional[Sequence[str]] = None):
        """
        Initialize palette.

        Args:
            colors: Hex color strings from the manifest (default: DEFAULT_PALETTE)
        """
        self.hex_colors = list(colors) if colors else DEFAULT_PALETTE.copy()
        self.colors: List[Color] = [hex_to_rgb(c) for c in self.hex_colors]
        # Brightest first
        self._by_brightness = sorted(self.colors, key=brightness, reverse=True)

    def _pick(self, rank: int) -> Color:
        return self._by_brightness[min(rank, len(self._by_brightness) - 1)]

    @property
    def background(self) -> Color:
        """Darkest palette color at quarter brightness."""
        return darken(min(self.colors, key=brightness), 0.25)

    @property
    def floor(self) -> Color:
        return darken(min(self.colors, key=brightness), 0.5)

    @property
    def wall(self) -> Color:
        return self.colors[0]

    @property
    def player(self) -> Color:
        return self._pick(0)

    @property
    def enemy(self) -> Color:
        return self._pick(1)

    @property
    def coin(self) -> Color:
        return self._pick(2)

    @property
    def health(self) -> Color:
        return self._pick(3)

    def __len__(self) -> int:
        return len(self.colors)

    def __iter__(self) -> Iterator[Color]:
        return iter(self.colors)
