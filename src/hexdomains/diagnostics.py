from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from .algorithms import connected_component, label_components
from .config import DEFAULT_CONFIG, ShapeConfig
from .errors import MalformedTopology, UnclosedPerimeter
from .geometry import bounding_box, polyline_length
from .hexgrid import HexGrid
from .models import Domain, DomainAssembly


@dataclass
class DomainValidation:
    ok: bool
    errors: List[str] = field(default_factory=list)


def domain_closure_error(domain: Domain) -> float:
    """Distance between where the perimeter walk ended and where it began.

    Returns ``inf`` for a domain whose last vertex has no recorded path.
    """
    if not domain.vertices or not domain.vertices[-1].path_to_next:
        return math.inf
    end = domain.vertices[-1].path_to_next[-1]
    start = domain.vertices[0].position
    return math.hypot(end[0] - start[0], end[1] - start[1])


def duplicate_positions(domain: Domain, tol: float) -> List[Tuple[int, int]]:
    """Index pairs of vertices in *domain* that sit on the same corner."""
    pairs: List[Tuple[int, int]] = []
    verts = domain.vertices
    for i in range(len(verts)):
        for j in range(i + 1, len(verts)):
            if verts[i].same_position(verts[j].position, tol):
                pairs.append((i, j))
    return pairs


def domain_cells(grid: HexGrid, identity: Sequence[float], domain: Domain) -> List[int]:
    """Cells of the connected same-identity region the perimeter encloses."""
    if not domain.vertices:
        return []
    return connected_component(grid, identity, domain.vertices[0].home_cell)


def domain_area_ratio(grid: HexGrid, identity: Sequence[float], domain: Domain) -> float:
    """Enclosed polygon area divided by the area of the domain's cells.

    Exactly ``1.0`` (up to round-off) for a perimeter that runs along
    every outer side of its region.
    """
    cells = domain_cells(grid, identity, domain)
    if not cells:
        return 0.0
    return abs(domain.signed_area()) / (len(cells) * grid.cell_area())


def check_continuity(domain: Domain) -> List[str]:
    """Consecutive vertices must share the edge between them."""
    errors: List[str] = []
    verts = domain.vertices
    for i, v in enumerate(verts):
        nxt = verts[(i + 1) % len(verts)]
        if nxt.domain_id != domain.domain_id:
            errors.append(f"vertex {i + 1} carries domain {nxt.domain_id!r}")
        if len(verts) > 1 and nxt.neighbor_ids[0] != v.neighbor_ids[1]:
            errors.append(
                f"vertex {i} -> {(i + 1) % len(verts)}: "
                f"{v.neighbor_ids!r} does not continue into {nxt.neighbor_ids!r}"
            )
    return errors


def check_domains(
    grid: HexGrid,
    identity: Sequence[float],
    assembly: DomainAssembly,
    config: Optional[ShapeConfig] = None,
    area_rel_tol: float = 1e-6,
) -> DomainValidation:
    """Check every assembled domain for closure, ordering and area.

    Recorded assembly failures are reported as errors too.
    """
    config = config or DEFAULT_CONFIG
    tol = config.tolerance(grid)
    errors: List[str] = []

    for idx, domain in enumerate(assembly.domains):
        label = f"domain #{idx} (id {domain.domain_id!r})"
        closure = domain_closure_error(domain)
        if closure > tol:
            errors.append(f"{label}: perimeter does not close (gap {closure:.6f})")
        for i, j in duplicate_positions(domain, tol):
            errors.append(f"{label}: vertices {i} and {j} share a position")
        for message in check_continuity(domain):
            errors.append(f"{label}: {message}")
        if domain.signed_area() >= 0:
            errors.append(f"{label}: perimeter is not walked clockwise")
        ratio = domain_area_ratio(grid, identity, domain)
        if abs(ratio - 1.0) > area_rel_tol:
            errors.append(f"{label}: area ratio {ratio:.6f} != 1")

    for failure in assembly.failures:
        errors.append(f"{type(failure).__name__}: {failure}")

    return DomainValidation(ok=not errors, errors=errors)


def diagnostics_report(
    grid: HexGrid,
    identity: Sequence[float],
    assembly: DomainAssembly,
    config: Optional[ShapeConfig] = None,
) -> Dict[str, object]:
    """Build a structured diagnostics report suitable for JSON export."""
    config = config or DEFAULT_CONFIG
    tol = config.tolerance(grid)

    domain_payload = []
    for domain in assembly.domains:
        domain_payload.append({
            "domain_id": domain.domain_id,
            "vertices": len(domain),
            "boundary_vertices": sum(1 for v in domain if v.is_boundary),
            "positions": [list(p) for p in domain.positions()],
            "signed_area": domain.signed_area(),
            "perimeter": polyline_length(domain.boundary(), closed=True),
            "bbox": list(bounding_box(domain.boundary())),
            "area_ratio": domain_area_ratio(grid, identity, domain),
            "closure_error": domain_closure_error(domain),
            "duplicates": len(duplicate_positions(domain, tol)),
        })

    failure_payload = []
    for failure in assembly.failures:
        entry: Dict[str, object] = {
            "type": type(failure).__name__,
            "message": str(failure),
        }
        if isinstance(failure, UnclosedPerimeter):
            entry["domain_id"] = failure.domain_id
            entry["walked"] = failure.walked
            if failure.position is not None:
                entry["position"] = list(failure.position)
        elif isinstance(failure, MalformedTopology) and failure.edge_identities is not None:
            entry["edge_identities"] = list(failure.edge_identities)
        failure_payload.append(entry)

    validation = check_domains(grid, identity, assembly, config)
    return {
        "cells": grid.num_cells(),
        "regions": len(set(label_components(grid, identity))),
        "domain_count": len(assembly),
        "failure_count": assembly.failure_count,
        "ok": validation.ok,
        "errors": validation.errors,
        "domains": domain_payload,
        "failures": failure_payload,
    }
