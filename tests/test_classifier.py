"""Tests for Dirichlet vertex classification."""

from __future__ import annotations

import random
from typing import List

import numpy as np
import pytest

from hexdomains import (
    LEGACY_CONFIG,
    NO_NEIGHBOUR,
    Direction,
    HexGrid,
    build_hex_grid,
    classify_vertices,
    partition_angular,
)
from hexdomains.classifier import cell_vertices, distinct_identities, slot_identity
from hexdomains.geometry import points_close, unique_points


# ═══════════════════════════════════════════════════════════════════
# Fixtures
# ═══════════════════════════════════════════════════════════════════


@pytest.fixture
def grid() -> HexGrid:
    return build_hex_grid(3)


@pytest.fixture
def diagonal(grid: HexGrid) -> List[int]:
    """Cells with q >= 1 belong to domain 1, the rest to domain 0."""
    return [1 if c.q >= 1 else 0 for c in grid.cells]


@pytest.fixture
def island(grid: HexGrid, diagonal: List[int]) -> List[int]:
    """The diagonal split with the centre cell relabelled 2."""
    identity = list(diagonal)
    identity[grid.find_cell(0, 0)] = 2
    return identity


def _at(vertices, grid, q, r):
    cell = grid.find_cell(q, r)
    return [v for v in vertices if v.home_cell == cell]


# ═══════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════


class TestSlots:
    def test_slot_identity(self, grid: HexGrid, diagonal: List[int]) -> None:
        top = grid.find_cell(0, 3)
        assert slot_identity(grid, diagonal, top, Direction.SE) == 1
        assert slot_identity(grid, diagonal, top, Direction.W) == 0
        assert slot_identity(grid, diagonal, top, Direction.NE) == NO_NEIGHBOUR

    def test_distinct_identities(self, grid: HexGrid, island: List[int]) -> None:
        assert distinct_identities(grid, island, grid.find_cell(0, 0)) == {0, 1, 2}
        assert distinct_identities(grid, island, grid.find_cell(-3, 0)) == {0}


# ═══════════════════════════════════════════════════════════════════
# Two domains
# ═══════════════════════════════════════════════════════════════════


class TestDiagonalSplit:
    def test_boundary_vertices_only(self, grid: HexGrid, diagonal: List[int]) -> None:
        vertices = classify_vertices(grid, diagonal)
        assert len(vertices) == 4
        assert all(v.is_boundary for v in vertices)
        tol = 1e-9
        assert len(unique_points([v.position for v in vertices], tol)) == 2

    def test_one_record_per_domain_per_corner(self, grid: HexGrid, diagonal: List[int]) -> None:
        vertices = classify_vertices(grid, diagonal)
        by_domain = {0: [], 1: []}
        for v in vertices:
            by_domain[v.domain_id].append(v)
        assert len(by_domain[0]) == 2
        assert len(by_domain[1]) == 2

    def test_neighbour_pairs(self, grid: HexGrid, diagonal: List[int]) -> None:
        vertices = classify_vertices(grid, diagonal)
        (top0,) = _at(vertices, grid, 0, 3)
        (top1,) = _at(vertices, grid, 1, 2)
        (bot0,) = _at(vertices, grid, 0, -3)
        (bot1,) = _at(vertices, grid, 1, -3)
        assert top0.neighbor_ids == (NO_NEIGHBOUR, 1)
        assert top1.neighbor_ids == (0, NO_NEIGHBOUR)
        assert bot0.neighbor_ids == (1, NO_NEIGHBOUR)
        assert bot1.neighbor_ids == (NO_NEIGHBOUR, 0)
        assert points_close(top0.position, top1.position, 1e-9)
        assert points_close(bot0.position, bot1.position, 1e-9)
        assert points_close(
            top0.position,
            grid.corner_coordinate(grid.find_cell(0, 3), Direction.SE),
            1e-12,
        )

    def test_cell_order(self, grid: HexGrid, diagonal: List[int]) -> None:
        vertices = classify_vertices(grid, diagonal)
        cells = [v.home_cell for v in vertices]
        assert cells == sorted(cells)

    def test_numpy_identity(self, grid: HexGrid, diagonal: List[int]) -> None:
        vertices = classify_vertices(grid, np.asarray(diagonal, dtype=float))
        assert len(vertices) == 4


# ═══════════════════════════════════════════════════════════════════
# Three domains
# ═══════════════════════════════════════════════════════════════════


class TestIsland:
    def test_counts(self, grid: HexGrid, island: List[int]) -> None:
        vertices = classify_vertices(grid, island)
        assert len(vertices) == 10
        assert sum(1 for v in vertices if v.is_boundary) == 4
        assert sum(1 for v in vertices if v.domain_id == 0) == 4
        assert sum(1 for v in vertices if v.domain_id == 1) == 4
        assert sum(1 for v in vertices if v.domain_id == 2) == 2

    def test_island_corners(self, grid: HexGrid, island: List[int]) -> None:
        vertices = classify_vertices(grid, island)
        centre = grid.find_cell(0, 0)
        own = _at(vertices, grid, 0, 0)
        assert [v.neighbor_ids for v in own] == [(0, 1), (1, 0)]
        assert points_close(own[0].position, grid.corner_coordinate(centre, Direction.E), 1e-12)
        assert points_close(own[1].position, grid.corner_coordinate(centre, Direction.SW), 1e-12)

    def test_internal_vertices_have_three_identities(self, grid: HexGrid, island: List[int]) -> None:
        for v in classify_vertices(grid, island):
            if v.is_boundary:
                continue
            assert len({v.domain_id, *v.neighbor_ids}) == 3

    def test_first_hit_only(self, grid: HexGrid, island: List[int]) -> None:
        vertices = classify_vertices(grid, island, LEGACY_CONFIG)
        assert len(vertices) == 9
        own = cell_vertices(grid, island, grid.find_cell(0, 0), first_hit_only=True)
        assert len(own) == 1
        assert own[0].neighbor_ids == (0, 1)


class TestNoVertices:
    def test_uniform_field(self, grid: HexGrid) -> None:
        assert classify_vertices(grid, [5] * grid.num_cells()) == []

    def test_enclosed_island_of_two_identities(self, grid: HexGrid) -> None:
        identity = [0] * grid.num_cells()
        identity[grid.find_cell(0, 0)] = 1
        assert classify_vertices(grid, identity) == []


class TestValidation:
    def test_length_mismatch(self, grid: HexGrid) -> None:
        with pytest.raises(ValueError):
            classify_vertices(grid, [0, 1, 2])

    def test_reserved_identity(self, grid: HexGrid, diagonal: List[int]) -> None:
        identity = list(diagonal)
        identity[5] = NO_NEIGHBOUR
        with pytest.raises(ValueError):
            classify_vertices(grid, identity)


# ═══════════════════════════════════════════════════════════════════
# One record per incident domain at every junction
# ═══════════════════════════════════════════════════════════════════


def _junction_corners(grid: HexGrid, identity) -> List:
    """``(cell, corner)`` for every corner where identities meet."""
    corners = []
    for cell in range(grid.num_cells()):
        home = identity[cell]
        for k in Direction:
            a = slot_identity(grid, identity, cell, k)
            b = slot_identity(grid, identity, cell, k.succ)
            present = [x for x in (a, b) if x != NO_NEIGHBOUR]
            if len(present) == 2 and len({home, a, b}) == 3:
                corners.append((cell, k))
            elif len(present) == 1 and present[0] != home:
                corners.append((cell, k))
    return corners


def _emitted_corners(grid: HexGrid, identity, vertices) -> List:
    corners = []
    for v in vertices:
        (k,) = [
            k for k in Direction
            if points_close(v.position, grid.corner_coordinate(v.home_cell, k), 1e-9)
        ]
        assert v.domain_id == identity[v.home_cell]
        assert v.neighbor_ids == (
            slot_identity(grid, identity, v.home_cell, k.succ),
            slot_identity(grid, identity, v.home_cell, k),
        )
        corners.append((v.home_cell, k))
    return corners


class TestEveryJunction:
    def _check(self, grid: HexGrid, identity) -> None:
        emitted = _emitted_corners(grid, identity, classify_vertices(grid, identity))
        assert len(emitted) == len(set(emitted))
        assert sorted(emitted) == sorted(_junction_corners(grid, identity))

    def test_two_junctions_on_one_side(self) -> None:
        grid = build_hex_grid(1)
        identity = [1, 1, 1, 2, 0, 2, 0]
        self._check(grid, identity)
        # Both corners flanking the west side of (0, 1) are junctions.
        own = cell_vertices(grid, identity, grid.find_cell(0, 1))
        assert len(own) == 2

    def test_island(self, grid: HexGrid, island: List[int]) -> None:
        self._check(grid, island)

    @pytest.mark.parametrize("sections", [2, 3, 4, 5])
    def test_sectors(self, grid: HexGrid, sections: int) -> None:
        self._check(grid, partition_angular(grid, sections))

    @pytest.mark.parametrize("seed", range(6))
    def test_random_identities(self, seed: int) -> None:
        grid = build_hex_grid(2)
        rng = random.Random(seed)
        self._check(grid, [rng.randrange(4) for _ in range(grid.num_cells())])

    def test_legacy_skips_second_junction(self) -> None:
        grid = build_hex_grid(1)
        identity = [1, 1, 1, 2, 0, 2, 0]
        own = cell_vertices(grid, identity, grid.find_cell(0, 1), first_hit_only=True)
        assert len(own) == 1
        assert own[0].neighbor_ids == (2, 1)

    def test_legacy_needs_third_identity_on_busy_cells(self) -> None:
        grid = build_hex_grid(1)
        identity = [1, 1, 1, 2, 0, 2, 0]
        cell = grid.find_cell(1, -1)
        assert len(distinct_identities(grid, identity, cell)) == 3
        assert len(cell_vertices(grid, identity, cell)) == 2
        assert cell_vertices(grid, identity, cell, first_hit_only=True) == []
