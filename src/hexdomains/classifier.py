"""Dirichlet vertex classification.

Scans every cell of a grid and records the corners at which distinct
identities meet:

- **Boundary vertices** sit on the outer edge of the grid where a cell,
  one neighbour of a different identity and the grid exterior meet.
  One slot of their neighbour pair holds :data:`NO_NEIGHBOUR`.
- **Internal vertices** sit where three cells of three different
  identities meet.

Every cell touching a junction records its own copy of that corner, so
each domain finds a vertex carrying its own identity there.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Set

import structlog

from .config import DEFAULT_CONFIG, ShapeConfig
from .hexgrid import HexGrid
from .models import NO_NEIGHBOUR, DirichVertex, Direction

logger = structlog.get_logger()


def slot_identity(grid: HexGrid, identity: Sequence[float], cell: int, direction: Direction) -> float:
    """Identity of the neighbour of *cell* in *direction*, or :data:`NO_NEIGHBOUR`."""
    if not grid.neighbor_present(cell, direction):
        return NO_NEIGHBOUR
    return identity[grid.neighbor(cell, direction)]


def distinct_identities(grid: HexGrid, identity: Sequence[float], cell: int) -> Set[float]:
    """Distinct identities among *cell* and its present neighbours."""
    ids = {identity[cell]}
    for d in Direction:
        if grid.neighbor_present(cell, d):
            ids.add(identity[grid.neighbor(cell, d)])
    return ids


def validate_identity(grid: HexGrid, identity: Sequence[float]) -> None:
    if len(identity) != grid.num_cells():
        raise ValueError(
            f"identity has {len(identity)} values but grid has {grid.num_cells()} cells"
        )
    for cell in range(grid.num_cells()):
        if identity[cell] == NO_NEIGHBOUR:
            raise ValueError(
                f"Cell {cell} carries the reserved identity {NO_NEIGHBOUR}"
            )


def corner_qualifies(
    home: float,
    f1: float,
    other_id: float,
    n_ids: int,
    first_hit_only: bool = False,
) -> bool:
    """Whether a corner flanked by a side of identity *f1* is a junction.

    *other_id* is the identity across the corner's second flanking side.
    The corner is a junction if that side faces the exterior or a third
    identity.  The legacy scan only takes exterior corners on two-identity
    cells and only third-identity corners on cells with more identities.
    """
    absent = other_id == NO_NEIGHBOUR
    third = not absent and other_id not in (home, f1)
    if first_hit_only:
        return absent if n_ids == 2 else third
    return absent or third


def cell_vertices(
    grid: HexGrid,
    identity: Sequence[float],
    cell: int,
    first_hit_only: bool = False,
) -> List[DirichVertex]:
    """Dirichlet vertices at the corners of a single cell."""
    home = identity[cell]
    n_ids = len(distinct_identities(grid, identity, cell))
    on_boundary = grid.is_boundary(cell)
    if n_ids < 2 or (n_ids == 2 and not on_boundary):
        return []

    found: List[DirichVertex] = []
    seen: Set[Direction] = set()
    for ni in Direction:
        if not grid.neighbor_present(cell, ni):
            continue
        f1 = identity[grid.neighbor(cell, ni)]
        if f1 == home:
            continue

        # Either corner flanking side ni can be a junction.
        for corner, other in ((ni, ni.succ), (ni.pred, ni.pred)):
            if corner in seen:
                continue
            other_id = slot_identity(grid, identity, cell, other)
            if not corner_qualifies(home, f1, other_id, n_ids, first_hit_only):
                continue
            seen.add(corner)
            found.append(DirichVertex(
                position=grid.corner_coordinate(cell, corner),
                domain_id=home,
                neighbor_ids=(
                    slot_identity(grid, identity, cell, corner.succ),
                    slot_identity(grid, identity, cell, corner),
                ),
                home_cell=cell,
            ))
            if first_hit_only:
                return found

    return found


def classify_vertices(
    grid: HexGrid,
    identity: Sequence[float],
    config: Optional[ShapeConfig] = None,
) -> List[DirichVertex]:
    """Return every Dirichlet vertex of *identity* on *grid*, in cell order.

    The result is unordered with respect to domains; pass it to
    :func:`~hexdomains.assembler.assemble_domains` to group and order
    it into perimeters.
    """
    config = config or DEFAULT_CONFIG
    validate_identity(grid, identity)

    vertices: List[DirichVertex] = []
    for cell in range(grid.num_cells()):
        vertices.extend(cell_vertices(grid, identity, cell, config.first_hit_only))

    n_boundary = sum(1 for v in vertices if v.is_boundary)
    logger.info(
        "Classified Dirichlet vertices",
        cells=grid.num_cells(),
        vertices=len(vertices),
        boundary=n_boundary,
        internal=len(vertices) - n_boundary,
    )
    return vertices
