"""Tests for diagnostics module."""

import json
import math

from hexdomains import (
    build_hex_grid,
    check_domains,
    classify_vertices,
    assemble_domains,
    diagnostics_report,
    domain_area_ratio,
    domain_closure_error,
    duplicate_positions,
    find_dirichlet_domains,
)
from hexdomains.diagnostics import check_continuity, domain_cells
from hexdomains.models import Domain


def _diagonal(grid):
    return [1 if c.q >= 1 else 0 for c in grid.cells]


def test_closed_domains_pass():
    grid = build_hex_grid(3)
    identity = _diagonal(grid)
    assembly = find_dirichlet_domains(grid, identity)
    result = check_domains(grid, identity, assembly)
    assert result.ok, result.errors
    for domain in assembly:
        assert domain_closure_error(domain) < 1e-9
        assert duplicate_positions(domain, 1e-3) == []
        assert check_continuity(domain) == []


def test_area_ratio():
    grid = build_hex_grid(3)
    identity = _diagonal(grid)
    assembly = find_dirichlet_domains(grid, identity)
    for domain in assembly:
        assert abs(domain_area_ratio(grid, identity, domain) - 1.0) < 1e-9
    assert len(domain_cells(grid, identity, assembly.find(0))) == 22


def test_empty_domain():
    grid = build_hex_grid(1)
    domain = Domain(0)
    assert domain_closure_error(domain) == float("inf")
    assert domain_area_ratio(grid, [0] * 7, domain) == 0.0


def test_failures_reported():
    grid = build_hex_grid(3)
    identity = _diagonal(grid)
    top = grid.find_cell(0, 3)
    vertices = [v for v in classify_vertices(grid, identity) if v.home_cell != top]
    assembly = assemble_domains(grid, identity, vertices)
    result = check_domains(grid, identity, assembly)
    assert not result.ok
    assert any(e.startswith("UnclosedPerimeter") for e in result.errors)


def test_broken_chain_flagged():
    grid = build_hex_grid(3)
    identity = _diagonal(grid)
    assembly = find_dirichlet_domains(grid, identity)
    v = assembly.find(1).vertices[1]
    v.neighbor_ids = (7, v.neighbor_ids[1])
    errors = check_domains(grid, identity, assembly).errors
    assert any("does not continue" in e for e in errors)


def test_truncated_path_flagged():
    grid = build_hex_grid(3)
    identity = _diagonal(grid)
    assembly = find_dirichlet_domains(grid, identity)
    assembly.find(0).vertices[-1].path_to_next.pop()
    errors = check_domains(grid, identity, assembly).errors
    assert any("does not close" in e for e in errors)


def test_diagnostics_report_json():
    grid = build_hex_grid(3)
    identity = _diagonal(grid)
    identity[grid.find_cell(0, 0)] = 2
    assembly = find_dirichlet_domains(grid, identity)
    report = diagnostics_report(grid, identity, assembly)
    assert report["ok"]
    assert report["cells"] == 37
    assert report["regions"] == 3
    assert report["domain_count"] == 3
    assert report["failure_count"] == 0
    assert sorted(d["vertices"] for d in report["domains"]) == [2, 4, 4]
    (island,) = [d for d in report["domains"] if d["domain_id"] == 2]
    assert abs(island["perimeter"] - 2 * math.sqrt(3)) < 1e-9
    json.dumps(report)


def test_diagnostics_report_failures():
    grid = build_hex_grid(3)
    identity = _diagonal(grid)
    top = grid.find_cell(0, 3)
    vertices = [v for v in classify_vertices(grid, identity) if v.home_cell != top]
    assembly = assemble_domains(grid, identity, vertices)
    report = diagnostics_report(grid, identity, assembly)
    assert not report["ok"]
    (failure,) = report["failures"]
    assert failure["type"] == "UnclosedPerimeter"
    assert failure["domain_id"] == 0
    assert failure["walked"] == 1
