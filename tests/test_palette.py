"""
Tests for palette parsing and color roles.

Run with: pytest tests/test_palette.py -v
"""

import pytest

from arcadegen.palette import (
    DEFAULT_PALETTE,
    GamePalette,
    brightness,
    darken,
    hex_to_rgb,
    rgb_to_hex,
)


class TestColorHelpers:
    """Test hex parsing and color math."""

    def test_hex_to_rgb(self):
        assert hex_to_rgb('#FF6B6B') == (255, 107, 107)
        assert hex_to_rgb('4ecdc4') == (78, 205, 196)

    def test_bad_hex(self):
        """Short or non-hex strings are rejected."""
        with pytest.raises(ValueError):
            hex_to_rgb('#FFF')
        with pytest.raises(ValueError):
            hex_to_rgb('#GGGGGG')

    def test_rgb_to_hex(self):
        assert rgb_to_hex((26, 26, 46)) == '#1A1A2E'

    def test_darken(self):
        assert darken((200, 100, 50)) == (100, 50, 25)
        assert brightness((1, 2, 3)) == 6


class TestGamePalette:
    """Test role assignment."""

    def test_default(self):
        """No colors means the default palette."""
        palette = GamePalette()
        assert palette.hex_colors == DEFAULT_PALETTE
        assert len(palette) == 6

    def test_roles_by_brightness(self):
        """Bright colors draw actors; the darkest color backs the scene."""
        palette = GamePalette(['#1A1A2E', '#E94560', '#0F3460', '#FFFFFF'])

        assert palette.player == (255, 255, 255)
        assert palette.enemy == (233, 69, 96)
        assert palette.coin == (15, 52, 96)
        assert palette.health == (26, 26, 46)
        assert palette.wall == (26, 26, 46)
        assert palette.background == (6, 6, 11)
        assert palette.floor == (13, 13, 23)

    def test_short_palette_repeats_last_role(self):
        """A one-color palette still fills every role."""
        palette = GamePalette(['#E94560'])
        assert palette.player == palette.enemy == palette.health == (233, 69, 96)
        assert list(palette) == [(233, 69, 96)]
