"""
Arcadegen

Runtime core for AI-generated 2D games: seeded level synthesis,
patrol/wander/chase entity behaviors, genre-specific movement and
combat/scoring rules. Rendering and asset loading live outside the
package; dev_game.py shows a minimal pygame front end.
"""

__version__ = '0.1.0'

__all__ = ['__version__']
