"""Edge walking between Dirichlet vertices.

An *edge* is the chain of cell sides separating identity ``A`` from
identity ``B``.  Starting at a vertex, :func:`walk_edge` follows that
chain corner by corner, pivoting around the ``A`` cells, until a cell of
some third identity appears.  That corner is the next Dirichlet vertex.

``B`` may be :data:`NO_NEIGHBOUR`, in which case the walk follows the
outer boundary of the grid.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import structlog

from .classifier import slot_identity
from .config import DEFAULT_CONFIG, ShapeConfig
from .errors import MalformedTopology
from .geometry import points_close
from .hexgrid import HexGrid
from .models import DirichVertex, Direction, Point, Rotation

logger = structlog.get_logger()


def _corner_at(grid: HexGrid, cell: int, position: Point, tol: float) -> Optional[Direction]:
    for corner in Direction:
        if points_close(grid.corner_coordinate(cell, corner), position, tol):
            return corner
    return None


def _anchor(
    grid: HexGrid,
    identity: Sequence[float],
    vertex: DirichVertex,
    edge_identities: Tuple[float, float],
    tol: float,
) -> Tuple[int, Direction, Rotation]:
    """Find the ``A`` cell at the vertex, the side facing ``B`` and the rotation.

    The home cell need not carry ``A`` (walks to a neighbour start from
    the inside of another domain), so its neighbours are searched too.
    """
    a_id, b_id = edge_identities
    candidates = [vertex.home_cell] + grid.neighbors(vertex.home_cell)
    for cell in candidates:
        if identity[cell] != a_id:
            continue
        k = _corner_at(grid, cell, vertex.position, tol)
        if k is None:
            continue
        # Corner k is flanked by sides k and k.succ.
        if slot_identity(grid, identity, cell, k) == b_id:
            return cell, k, Rotation.CLOCKWISE
        if slot_identity(grid, identity, cell, k.succ) == b_id:
            return cell, k.succ, Rotation.ANTICLOCKWISE
        raise MalformedTopology(
            f"No cell with identity {b_id!r} next to identity {a_id!r} "
            f"at {vertex.position}",
            vertex=vertex,
            edge_identities=edge_identities,
        )
    raise MalformedTopology(
        f"No cell with identity {a_id!r} at {vertex.position}",
        vertex=vertex,
        edge_identities=edge_identities,
    )


def walk_edge(
    grid: HexGrid,
    identity: Sequence[float],
    vertex: DirichVertex,
    edge_identities: Tuple[float, float],
    path: List[Point],
    config: Optional[ShapeConfig] = None,
) -> Tuple[Point, float]:
    """Trace the ``A|B`` edge leaving *vertex* and return the vertex it ends at.

    Corner coordinates along the way are appended to *path*; the last
    one appended is the returned position.

    Returns
    -------
    (next_position, next_domain_id)
        Position of the next Dirichlet vertex and the identity of the
        third cell found there (:data:`NO_NEIGHBOUR` at the grid edge).

    Raises
    ------
    MalformedTopology
        If the cells around *vertex* do not carry both edge identities,
        or the walk exceeds the configured step limit.
    """
    config = config or DEFAULT_CONFIG
    tol = config.tolerance(grid)
    a_id, b_id = edge_identities

    cell, side, rot = _anchor(grid, identity, vertex, edge_identities, tol)
    logger.debug(
        "Walking edge",
        edge=edge_identities,
        start=vertex.position,
        cell=cell,
        side=side.name,
        rotation=rot.value,
    )

    for _ in range(config.walk_limit(grid)):
        # Side `side` spans corners side.pred and side.
        far = side.pred if rot is Rotation.CLOCKWISE else side
        corner = grid.corner_coordinate(cell, far)
        path.append(corner)

        ahead = side.step(rot)
        ahead_id = slot_identity(grid, identity, cell, ahead)
        if ahead_id == b_id:
            side = ahead
        elif ahead_id == a_id:
            # The B cell now sits one step back from the new pivot.
            cell = grid.neighbor(cell, ahead)
            side = side.step(rot.reverse)
        else:
            return corner, ahead_id

    raise MalformedTopology(
        f"Edge walk from {vertex.position} along {edge_identities!r} "
        f"did not reach a vertex within {config.walk_limit(grid)} steps",
        vertex=vertex,
        edge_identities=edge_identities,
    )


def walk_to_next(
    grid: HexGrid,
    identity: Sequence[float],
    vertex: DirichVertex,
    config: Optional[ShapeConfig] = None,
) -> Tuple[Point, float]:
    """Walk the edge between the vertex's domain and ``neighbor_ids[1]``.

    This is the next edge along the domain perimeter.  Fills
    ``vertex.path_to_next``.
    """
    vertex.path_to_next = []
    edge = (vertex.domain_id, vertex.neighbor_ids[1])
    return walk_edge(grid, identity, vertex, edge, vertex.path_to_next, config)


def walk_to_neighbour(
    grid: HexGrid,
    identity: Sequence[float],
    vertex: DirichVertex,
    config: Optional[ShapeConfig] = None,
) -> Tuple[Point, float]:
    """Walk the edge between the vertex's domain and ``neighbor_ids[0]``.

    Fills ``vertex.path_to_neighbor``.
    """
    vertex.path_to_neighbor = []
    edge = (vertex.domain_id, vertex.neighbor_ids[0])
    return walk_edge(grid, identity, vertex, edge, vertex.path_to_neighbor, config)
