"""Domain assembly: ordering Dirichlet vertices into closed perimeters.

:func:`assemble_domains` consumes the unordered vertex list produced by
:func:`~hexdomains.classifier.classify_vertices`.  It repeatedly takes
a seed vertex and walks from vertex to vertex along the seed's domain
perimeter until the walk arrives back at the seed.  Vertices are
removed from the working list as they are folded into a domain, so
the loop always terminates.

A perimeter that cannot be closed is dropped and recorded as a
failure; the remaining vertices are still processed.  Vertices already
consumed by the failed walk are not returned to the working list.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

import structlog

from .classifier import classify_vertices
from .config import DEFAULT_CONFIG, ShapeConfig
from .errors import ShapeAnalysisError, UnclosedPerimeter
from .geometry import points_close
from .hexgrid import HexGrid
from .models import DirichVertex, Domain, DomainAssembly, Point
from .walker import walk_to_neighbour, walk_to_next

logger = structlog.get_logger()


def _take_continuation(
    vertices: List[DirichVertex],
    current: DirichVertex,
    position: Point,
    next_domain_id: float,
    tol: float,
) -> Optional[DirichVertex]:
    """Remove and return the vertex that continues the perimeter at *position*."""
    for i, candidate in enumerate(vertices):
        if not candidate.same_position(position, tol):
            continue
        if (
            candidate.domain_id == current.domain_id
            and candidate.neighbor_ids[0] == current.neighbor_ids[1]
            and candidate.neighbor_ids[1] == next_domain_id
        ):
            return vertices.pop(i)
    return None


def process_domain(
    grid: HexGrid,
    identity: Sequence[float],
    seed: DirichVertex,
    vertices: List[DirichVertex],
    config: Optional[ShapeConfig] = None,
) -> Domain:
    """Walk the perimeter starting at *seed*, consuming vertices from *vertices*.

    *seed* must already have been removed from *vertices*.

    Raises
    ------
    UnclosedPerimeter
        If no continuation vertex matches the corner reached.
    MalformedTopology
        If an edge walk fails.
    """
    config = config or DEFAULT_CONFIG
    tol = config.tolerance(grid)
    first_position = seed.position
    domain = Domain(domain_id=seed.domain_id)

    current = seed
    while True:
        walk_to_neighbour(grid, identity, current, config)
        next_position, next_domain_id = walk_to_next(grid, identity, current, config)
        domain.vertices.append(current)

        if points_close(next_position, first_position, tol):
            logger.debug(
                "Perimeter closed",
                domain=seed.domain_id,
                vertices=len(domain.vertices),
            )
            return domain

        following = _take_continuation(vertices, current, next_position, next_domain_id, tol)
        if following is None:
            raise UnclosedPerimeter(
                f"No vertex of domain {seed.domain_id!r} continues the perimeter "
                f"at {next_position} (neighbours {current.neighbor_ids[1]!r}, "
                f"{next_domain_id!r})",
                vertex=seed,
                position=next_position,
                walked=len(domain.vertices),
            )
        current = following


def assemble_domains(
    grid: HexGrid,
    identity: Sequence[float],
    vertices: List[DirichVertex],
    config: Optional[ShapeConfig] = None,
) -> DomainAssembly:
    """Group and order *vertices* into closed domain perimeters.

    *vertices* is consumed: it is empty when this returns.

    Parameters
    ----------
    grid : HexGrid
    identity : sequence
        One identity value per cell.
    vertices : list of DirichVertex
        Unordered vertices, as returned by :func:`classify_vertices`.
    config : ShapeConfig, optional
        ``config.strict`` re-raises the first failure instead of
        recording it.

    Returns
    -------
    DomainAssembly
        The closed domains plus one error per perimeter that failed.
    """
    config = config or DEFAULT_CONFIG
    result = DomainAssembly()

    while vertices:
        seed = vertices.pop(0)
        try:
            domain = process_domain(grid, identity, seed, vertices, config)
        except ShapeAnalysisError as exc:
            if config.strict:
                raise
            logger.warning(
                "Dropped unclosed domain",
                domain=seed.domain_id,
                seed=seed.position,
                error=str(exc),
            )
            result.failures.append(exc)
            continue
        result.domains.append(domain)

    logger.info(
        "Assembled domains",
        domains=len(result.domains),
        failures=len(result.failures),
    )
    return result


def find_dirichlet_domains(
    grid: HexGrid,
    identity: Sequence[float],
    config: Optional[ShapeConfig] = None,
) -> DomainAssembly:
    """Classify the vertices of *identity* and assemble them into domains."""
    vertices = classify_vertices(grid, identity, config)
    return assemble_domains(grid, identity, vertices, config)
