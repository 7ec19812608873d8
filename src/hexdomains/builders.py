from __future__ import annotations

from typing import List, Tuple

from .hexgrid import HexGrid, cells_from_axial


def build_hex_grid(rings: int, spacing: float = 1.0) -> HexGrid:
    """Build a hexagon-shaped grid of pointy-top cells using axial coordinates.

    rings=0 produces a single hex. rings=1 produces 7 hexes, etc.
    Cells are indexed in order of ``q`` then ``r``.
    """
    if rings < 0:
        raise ValueError("rings must be >= 0")
    coords = _hex_area(rings)
    return HexGrid(
        cells_from_axial(coords, spacing),
        spacing=spacing,
        metadata={"shape": "hexagon", "rings": rings},
    )


def build_parallelogram_grid(width: int, height: int, spacing: float = 1.0) -> HexGrid:
    """Build a *width* x *height* rhombus of cells (``q`` in [0, width), ``r`` in [0, height))."""
    if width < 1 or height < 1:
        raise ValueError("width and height must be >= 1")
    coords = [(q, r) for q in range(width) for r in range(height)]
    return HexGrid(
        cells_from_axial(coords, spacing),
        spacing=spacing,
        metadata={"shape": "parallelogram", "width": width, "height": height},
    )


def hex_cell_count(rings: int) -> int:
    if rings < 0:
        raise ValueError("rings must be >= 0")
    return 1 + 3 * rings * (rings + 1)


def _hex_area(rings: int) -> List[Tuple[int, int]]:
    coords: List[Tuple[int, int]] = []
    for q in range(-rings, rings + 1):
        r1 = max(-rings, -q - rings)
        r2 = min(rings, -q + rings)
        for r in range(r1, r2 + 1):
            coords.append((q, r))
    return coords
