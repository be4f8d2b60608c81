"""2D value noise used to shape terrain.

Pure and deterministic: the same (x, y, seed) always gives the same
value, with no module state.
"""

import math

_MASK = 0xFFFFFFFF


def _lattice_hash(ix: int, iy: int, seed: int) -> float:
    """Hash an integer lattice point to [0, 1) with 32-bit mixing."""
    h = (seed + ix * 374761393 + iy * 668265263) & _MASK
    h = ((h ^ (h >> 13)) * 1274126177) & _MASK
    h ^= h >> 16
    return h / 4294967296.0


def _smoothstep(t: float) -> float:
    return t * t * (3 - 2 * t)


def noise2d(x: float, y: float, seed: int = 0) -> float:
    """Smooth value noise at a real-valued coordinate.

    The four lattice points around (x, y) are hashed and bilinearly
    interpolated with smoothstep easing on the fractional offsets.

    Args:
        x: Horizontal sample coordinate
        y: Vertical sample coordinate
        seed: Integer seed selecting the noise field

    Returns:
        Noise value in [0, 1)
    """
    xi = math.floor(x)
    yi = math.floor(y)
    sx = _smoothstep(x - xi)
    sy = _smoothstep(y - yi)

    n00 = _lattice_hash(xi, yi, seed)
    n10 = _lattice_hash(xi + 1, yi, seed)
    n01 = _lattice_hash(xi, yi + 1, seed)
    n11 = _lattice_hash(xi + 1, yi + 1, seed)

    nx0 = n00 * (1 - sx) + n10 * sx
    nx1 = n01 * (1 - sx) + n11 * sx
    return nx0 * (1 - sy) + nx1 * sy
