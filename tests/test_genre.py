"""Genre resolution tests."""

import pytest

from arcadegen.generation import Genre, coerce_genre, infer_genre, resolve_genre


class TestInferGenre:
    """Test keyword inference."""

    @pytest.mark.parametrize("text,expected", [
        ("platformer", Genre.PLATFORMER),
        ("Retro Platform Jumper", Genre.PLATFORMER),
        ("maze", Genre.MAZE),
        ("spooky-dungeon-42", Genre.MAZE),
        ("Top-Down Shooter", Genre.TOP_DOWN_SHOOTER),
        ("space shooter", Genre.TOP_DOWN_SHOOTER),
        ("arena", Genre.ARENA),
    ])
    def test_keywords(self, text, expected):
        """Known keywords map to their genre."""
        assert infer_genre(text) == expected

    def test_no_match(self):
        """Unrelated text infers nothing."""
        assert infer_genre("1700000000000") is None
        assert infer_genre("") is None
        assert infer_genre(None) is None


class TestResolveGenre:
    """Test explicit field / game id resolution."""

    def test_explicit_field_wins(self):
        """The genre field is tried before the game id."""
        assert resolve_genre("platformer", "dungeon-crawl") == Genre.PLATFORMER

    def test_game_id_fallback(self):
        """An unknown genre field falls back to the game id."""
        assert resolve_genre("puzzle", "dungeon-crawl") == Genre.MAZE
        assert resolve_genre(None, "dungeon-crawl") == Genre.MAZE

    def test_default_arena(self):
        """Nothing recognizable resolves to arena."""
        assert resolve_genre(None, "1700000000000") == Genre.ARENA
        assert resolve_genre(None) == Genre.ARENA

    def test_coerce(self):
        """coerce_genre accepts enums and free text."""
        assert coerce_genre(Genre.MAZE) is Genre.MAZE
        assert coerce_genre("top-down shooter") == Genre.TOP_DOWN_SHOOTER
        assert coerce_genre(None) == Genre.ARENA

    def test_gravity(self):
        """Only platformers fall."""
        assert Genre.PLATFORMER.has_gravity
        assert not Genre.MAZE.has_gravity
        assert not Genre.ARENA.has_gravity
        assert not Genre.TOP_DOWN_SHOOTER.has_gravity
