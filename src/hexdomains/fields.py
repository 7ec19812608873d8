"""Identity fields: turning scalar data into per-cell domain identities.

The extraction core only needs one identity value per cell.  This
module provides the ways such fields are produced in practice:

- :func:`dirichlet_regions`: winner-takes-all over several competing
  scalar fields (e.g. the concentrations of a pattern-forming model).
- :func:`get_contours`: cells lying on the threshold contour of each
  field.
- :func:`sample_noise_fields`: synthetic competing fields from fbm
  noise, for demos and tests.
- :func:`partition_angular` / :func:`partition_flood_fill`: direct
  geometric and topological partitions.
"""

from __future__ import annotations

import math
import random
from typing import Dict, List, Optional, Sequence

import numpy as np

from .algorithms import cell_adjacency
from .hexgrid import HexGrid
from .noise import fbm


def dirichlet_regions(fields: Sequence[Sequence[float]]) -> np.ndarray:
    """Mark each cell with the index of the field that is largest there.

    The index is scaled to ``i / N`` for *N* fields.  Ties go to the
    lowest index.

    Parameters
    ----------
    fields : sequence of sequences
        *N* fields, each with one value per cell.

    Returns
    -------
    numpy.ndarray
        One identity value per cell, in ``[0, 1)``.
    """
    data = np.asarray(fields, dtype=float)
    if data.ndim != 2 or data.shape[0] == 0:
        raise ValueError("fields must be a non-empty 2-D array (n_fields x n_cells)")
    n = data.shape[0]
    return np.argmax(data, axis=0).astype(float) / n


def get_contours(
    grid: HexGrid,
    fields: Sequence[Sequence[float]],
    threshold: float,
) -> List[List[int]]:
    """Return, per field, the cells on its *threshold* contour.

    All fields are normalised together to ``[0, 1]`` using the min and
    max over non-boundary cells.  A non-boundary cell is on the contour
    if it exceeds *threshold* and at least one neighbour falls below it.
    Boundary cells exceeding *threshold* are always included.
    """
    data = np.asarray(fields, dtype=float)
    if data.ndim != 2 or data.shape[1] != grid.num_cells():
        raise ValueError("fields must have shape (n_fields, num_cells)")

    interior = [c for c in range(grid.num_cells()) if not grid.is_boundary(c)]
    if not interior:
        raise ValueError("grid has no interior cells to normalise against")
    sample = data[:, interior]
    lo, hi = float(sample.min()), float(sample.max())
    if hi == lo:
        raise ValueError("fields are constant over the grid interior")
    norm = (data - lo) / (hi - lo)

    contours: List[List[int]] = []
    for row in norm:
        cells: List[int] = []
        for cell in range(grid.num_cells()):
            if row[cell] <= threshold:
                continue
            if grid.is_boundary(cell):
                cells.append(cell)
            elif any(row[n] < threshold for n in grid.neighbors(cell)):
                cells.append(cell)
        contours.append(cells)
    return contours


def sample_noise_fields(
    grid: HexGrid,
    n_fields: int,
    *,
    seed: int = 42,
    frequency: float = 0.15,
    octaves: int = 3,
) -> np.ndarray:
    """Sample *n_fields* independent fbm fields at the cell centres.

    Field ``i`` uses noise seed ``seed + i``.  Coordinates are divided
    by the grid spacing so the result does not depend on its scale.
    """
    if n_fields < 1:
        raise ValueError("n_fields must be >= 1")
    scale = grid.characteristic_spacing()
    out = np.empty((n_fields, grid.num_cells()), dtype=float)
    for i in range(n_fields):
        for cell in range(grid.num_cells()):
            x, y = grid.cell_center(cell)
            out[i, cell] = fbm(
                x / scale,
                y / scale,
                octaves=octaves,
                frequency=frequency,
                seed=seed + i,
            )
    return out


def partition_angular(
    grid: HexGrid,
    n_sections: int = 3,
    *,
    offset_deg: float = 10.0,
) -> List[int]:
    """Identity ``i`` for cells whose centre falls in angular sector *i*.

    Sectors are equal wedges around the grid centroid, starting at
    *offset_deg* from east.  The offset keeps sector edges off the
    lattice axes, where cell centres would sit exactly on a boundary.
    """
    if n_sections < 1:
        raise ValueError("n_sections must be >= 1")

    centres = [grid.cell_center(c) for c in range(grid.num_cells())]
    gcx = sum(p[0] for p in centres) / len(centres)
    gcy = sum(p[1] for p in centres) / len(centres)
    offset = math.radians(offset_deg)
    width = 2.0 * math.pi / n_sections

    identity: List[int] = []
    for cx, cy in centres:
        angle = (math.atan2(cy - gcy, cx - gcx) - offset) % (2.0 * math.pi)
        identity.append(int(angle / width) % n_sections)
    return identity


def partition_flood_fill(
    grid: HexGrid,
    seed_cells: Sequence[int],
    *,
    rng: Optional[random.Random] = None,
) -> List[int]:
    """Competitive flood-fill from seed cells; cell identity is the seed's index.

    Each seed expands outward one ring at a time; when two seeds
    contest the same cell, the one that reaches it first wins.  Ties
    are broken randomly.
    """
    if not seed_cells:
        raise ValueError("At least one seed cell required")
    for sid in seed_cells:
        if not 0 <= sid < grid.num_cells():
            raise KeyError(f"Seed cell {sid!r} not in grid")
    if len(set(seed_cells)) != len(seed_cells):
        raise ValueError("Seed cells must be distinct")

    if rng is None:
        rng = random.Random(42)

    adjacency = cell_adjacency(grid)
    owner: Dict[int, int] = {}
    frontiers: List[List[int]] = [[] for _ in seed_cells]
    for i, sid in enumerate(seed_cells):
        owner[sid] = i
        frontiers[i].append(sid)

    while any(frontiers):
        candidates: Dict[int, List[int]] = {}
        for i, frontier in enumerate(frontiers):
            for cell in frontier:
                for nid in adjacency[cell]:
                    if nid not in owner:
                        candidates.setdefault(nid, []).append(i)
        if not candidates:
            break

        new_frontiers: List[List[int]] = [[] for _ in seed_cells]
        clist = sorted(candidates.items())
        rng.shuffle(clist)
        for cell, claimants in clist:
            winner = claimants[0] if len(claimants) == 1 else rng.choice(claimants)
            owner[cell] = winner
            new_frontiers[winner].append(cell)
        frontiers = new_frontiers

    # Cells unreachable from any seed join region 0.
    return [owner.get(cell, 0) for cell in range(grid.num_cells())]
