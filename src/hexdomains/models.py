from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import Iterator, List, Optional, Tuple

Point = Tuple[float, float]

# Identity recorded for a neighbour slot that has no cell (grid exterior).
NO_NEIGHBOUR = -1


class Rotation(Enum):
    """Sense in which an edge walk advances around its pivot cell."""

    CLOCKWISE = "clockwise"
    ANTICLOCKWISE = "anticlockwise"

    @property
    def reverse(self) -> "Rotation":
        if self is Rotation.CLOCKWISE:
            return Rotation.ANTICLOCKWISE
        return Rotation.CLOCKWISE


class Direction(IntEnum):
    """The six neighbour directions of a pointy-top hex, anticlockwise from east.

    Corner ``k`` of a cell lies between neighbour directions ``k`` and
    ``k.succ``.
    """

    E = 0
    NE = 1
    NW = 2
    W = 3
    SW = 4
    SE = 5

    @property
    def succ(self) -> "Direction":
        """Next direction anticlockwise."""
        return Direction((self + 1) % 6)

    @property
    def pred(self) -> "Direction":
        """Next direction clockwise."""
        return Direction((self - 1) % 6)

    @property
    def opposite(self) -> "Direction":
        return Direction((self + 3) % 6)

    def step(self, rotation: Rotation) -> "Direction":
        return self.succ if rotation is Rotation.ANTICLOCKWISE else self.pred


@dataclass(frozen=True)
class HexCell:
    index: int
    q: int
    r: int
    x: float
    y: float


@dataclass(eq=False)
class DirichVertex:
    """A cell corner where two (boundary) or three (internal) identities meet.

    *neighbor_ids* is ordered ``(first, second)``: looking anticlockwise
    around the corner from the home cell, *second* is the next slot and
    *first* the one after it.  A slot outside the grid holds
    :data:`NO_NEIGHBOUR`.

    Records compare by identity; use :meth:`same_position` to test
    whether two records sit on the same corner.
    """

    position: Point
    domain_id: float
    neighbor_ids: Tuple[float, float]
    home_cell: int
    path_to_next: List[Point] = field(default_factory=list)
    path_to_neighbor: List[Point] = field(default_factory=list)

    @property
    def is_boundary(self) -> bool:
        return NO_NEIGHBOUR in self.neighbor_ids

    def same_position(self, point: Point, tol: float) -> bool:
        return (
            abs(self.position[0] - point[0]) <= tol
            and abs(self.position[1] - point[1]) <= tol
        )

    def __repr__(self) -> str:
        x, y = self.position
        return (
            f"DirichVertex(({x:.4f}, {y:.4f}), domain={self.domain_id!r}, "
            f"neighbors={self.neighbor_ids!r}, cell={self.home_cell})"
        )


@dataclass
class Domain:
    """One closed domain perimeter, vertices in walk order."""

    domain_id: float
    vertices: List[DirichVertex] = field(default_factory=list)

    def positions(self) -> List[Point]:
        return [v.position for v in self.vertices]

    def boundary(self) -> List[Point]:
        """Closed polyline through every corner of the perimeter.

        Each vertex contributes its own position followed by the
        intermediate corners of its path to the next vertex.  The
        closing point is not repeated.
        """
        points: List[Point] = []
        for v in self.vertices:
            points.append(v.position)
            points.extend(v.path_to_next[:-1])
        return points

    def signed_area(self) -> float:
        """Shoelace area of :meth:`boundary`; negative when walked clockwise."""
        from .geometry import polygon_signed_area

        return polygon_signed_area(self.boundary())

    def __len__(self) -> int:
        return len(self.vertices)

    def __iter__(self) -> Iterator[DirichVertex]:
        return iter(self.vertices)

    def __repr__(self) -> str:
        return f"Domain(id={self.domain_id!r}, vertices={len(self.vertices)})"


@dataclass
class DomainAssembly:
    """Result of assembling vertices into domains.

    *failures* holds one :class:`~hexdomains.errors.ShapeAnalysisError`
    per perimeter that could not be closed.
    """

    domains: List[Domain] = field(default_factory=list)
    failures: List[Exception] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures

    @property
    def failure_count(self) -> int:
        return len(self.failures)

    def domain_ids(self) -> List[float]:
        return [d.domain_id for d in self.domains]

    def find(self, domain_id: float) -> Optional[Domain]:
        """Return the first domain with *domain_id*, or ``None``."""
        for d in self.domains:
            if d.domain_id == domain_id:
                return d
        return None

    def __len__(self) -> int:
        return len(self.domains)

    def __iter__(self) -> Iterator[Domain]:
        return iter(self.domains)
