"""Noise primitives for synthesising scalar fields over a grid.

Every function in this module operates on plain ``(x, y)`` coordinates
and returns a ``float``.  :mod:`hexdomains.fields` samples them at cell
centres to build the competing fields that
:func:`~hexdomains.fields.dirichlet_regions` turns into an identity
field.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Callable

from opensimplex import OpenSimplex


@lru_cache(maxsize=32)
def _noise_source(seed: int) -> Callable[[float, float], float]:
    """Return a 2-D noise function seeded with *seed*."""
    return OpenSimplex(seed=seed).noise2


def fbm(
    x: float,
    y: float,
    *,
    octaves: int = 4,
    lacunarity: float = 2.0,
    persistence: float = 0.5,
    frequency: float = 1.0,
    seed: int = 42,
) -> float:
    """Fractal Brownian Motion: layered multi-octave noise.

    Parameters
    ----------
    x, y : float
        Sample coordinates.
    octaves : int
        Number of noise layers (more = finer detail).
    lacunarity : float
        Frequency multiplier between octaves (typically ~2.0).
    persistence : float
        Amplitude multiplier between octaves (typically ~0.5).
    frequency : float
        Base spatial frequency (larger = more zoomed-in features).
    seed : int
        Random seed for the noise source.

    Returns
    -------
    float
        A value in approximately ``[−1, 1]``.
    """
    if octaves < 1:
        raise ValueError("octaves must be >= 1")
    noise2 = _noise_source(seed)
    value = 0.0
    amplitude = 1.0
    freq = frequency
    max_amp = 0.0

    for _ in range(octaves):
        value += amplitude * noise2(x * freq, y * freq)
        max_amp += amplitude
        amplitude *= persistence
        freq *= lacunarity

    return value / max_amp
