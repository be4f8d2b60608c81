"""
Genre resolution.

Genre controls both level shape rules and movement physics. It comes from
the manifest's explicit genre field when that names a known genre, and
is otherwise inferred from keywords in the game identifier.
"""

from enum import Enum
from typing import Optional, Union


class Genre(str, Enum):
    """Coarse gameplay mode."""
    PLATFORMER = "platformer"
    MAZE = "maze"
    ARENA = "arena"
    TOP_DOWN_SHOOTER = "top-down shooter"

    @property
    def has_gravity(self) -> bool:
        return self is Genre.PLATFORMER


# Checked in order; first match wins
_KEYWORDS = (
    (('platformer', 'platform'), Genre.PLATFORMER),
    (('maze', 'dungeon'), Genre.MAZE),
    (('shooter', 'top-down'), Genre.TOP_DOWN_SHOOTER),
    (('arena',), Genre.ARENA),
)


def infer_genre(text: Optional[str]) -> Optional[Genre]:
    """Infer a genre from free text by keyword matching.

    Returns:
        The matched Genre, or None if no keyword matches
    """
    if not text:
        return None
    lowered = text.lower()
    for keywords, genre in _KEYWORDS:
        if any(keyword in lowered for keyword in keywords):
            return genre
    return None


def resolve_genre(genre: Optional[str], game_id: Optional[str] = None) -> Genre:
    """Resolve the genre of a game.

    Args:
        genre: Explicit genre field (free text, may be None)
        game_id: Game identifier used as a fallback hint

    Returns:
        Resolved Genre (ARENA when nothing matches)

    Examples:
        >>> resolve_genre('Platformer')
        <Genre.PLATFORMER: 'platformer'>
        >>> resolve_genre(None, 'spooky-dungeon-42')
        <Genre.MAZE: 'maze'>
        >>> resolve_genre(None, '1700000000000')
        <Genre.ARENA: 'arena'>
    """
    return infer_genre(genre) or infer_genre(game_id) or Genre.ARENA


def coerce_genre(genre: Union[Genre, str, None]) -> Genre:
    """Accept a Genre or free text and return a Genre."""
    if isinstance(genre, Genre):
        return genre
    return resolve_genre(genre)
