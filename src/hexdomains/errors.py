"""Failures raised while walking domain perimeters."""

from __future__ import annotations

from typing import Optional, Tuple

from .models import DirichVertex, Point


class ShapeAnalysisError(Exception):
    """Base class for topological failures in domain extraction."""


class MalformedTopology(ShapeAnalysisError):
    """An edge walk could not find the cells its identity pair requires.

    Signals that the identity field and the grid adjacency disagree, for
    instance when the field is not a connected partition.
    """

    def __init__(
        self,
        message: str,
        vertex: Optional[DirichVertex] = None,
        edge_identities: Optional[Tuple[float, float]] = None,
    ) -> None:
        super().__init__(message)
        self.vertex = vertex
        self.edge_identities = edge_identities


class UnclosedPerimeter(ShapeAnalysisError):
    """A perimeter walk found no continuation vertex for the next corner."""

    def __init__(
        self,
        message: str,
        vertex: Optional[DirichVertex] = None,
        position: Optional[Point] = None,
        walked: int = 0,
    ) -> None:
        super().__init__(message)
        self.vertex = vertex
        self.position = position
        self.walked = walked

    @property
    def domain_id(self) -> Optional[float]:
        return self.vertex.domain_id if self.vertex is not None else None
