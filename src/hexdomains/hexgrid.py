from __future__ import annotations

import json
import math
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .models import Direction, HexCell, Point

# Axial (dq, dr) offset for each neighbour direction.
AXIAL_OFFSETS: Dict[Direction, Tuple[int, int]] = {
    Direction.E: (1, 0),
    Direction.NE: (0, 1),
    Direction.NW: (-1, 1),
    Direction.W: (-1, 0),
    Direction.SW: (0, -1),
    Direction.SE: (1, -1),
}


def axial_to_pixel(q: int, r: int, spacing: float) -> Point:
    """Centre of the pointy-top hex at axial ``(q, r)``."""
    x = spacing * (q + r / 2.0)
    y = spacing * (math.sqrt(3) / 2.0) * r
    return x, y


class HexGrid:
    """Index-arena container for pointy-top hexagonal cells.

    Cells are addressed by their integer index.  Neighbours are looked
    up by :class:`Direction`; a missing neighbour means the cell sits on
    the outer boundary of the grid.

    This is the grid adapter consumed by the classifier, walker and
    assembler.  Any object exposing the same read-only methods can be
    used in its place.
    """

    VERSION = "1.0"

    def __init__(
        self,
        cells: Iterable[HexCell],
        spacing: float = 1.0,
        metadata: Optional[dict] = None,
    ) -> None:
        if spacing <= 0:
            raise ValueError("spacing must be > 0")
        self.cells: List[HexCell] = sorted(cells, key=lambda c: c.index)
        for i, cell in enumerate(self.cells):
            if cell.index != i:
                raise ValueError(f"Cell indices must be 0..n-1, got {cell.index} at {i}")
        self.spacing = float(spacing)
        self.metadata = metadata or {}
        self._radius = self.spacing / math.sqrt(3)
        self._neighbors = self._link_neighbors()

    def _link_neighbors(self) -> List[List[Optional[int]]]:
        by_axial = {(c.q, c.r): c.index for c in self.cells}
        table: List[List[Optional[int]]] = []
        for cell in self.cells:
            row: List[Optional[int]] = []
            for d in Direction:
                dq, dr = AXIAL_OFFSETS[d]
                row.append(by_axial.get((cell.q + dq, cell.r + dr)))
            table.append(row)
        return table

    # ── Adapter interface ───────────────────────────────────────────

    def num_cells(self) -> int:
        return len(self.cells)

    def neighbor_present(self, cell: int, direction: Direction) -> bool:
        return self._neighbors[cell][direction] is not None

    def neighbor(self, cell: int, direction: Direction) -> int:
        """Index of the neighbour of *cell* in *direction*, or raise ``KeyError``."""
        idx = self._neighbors[cell][direction]
        if idx is None:
            raise KeyError(f"Cell {cell} has no neighbour to the {Direction(direction).name}")
        return idx

    def is_boundary(self, cell: int) -> bool:
        return any(n is None for n in self._neighbors[cell])

    def corner_coordinate(self, cell: int, corner: Direction) -> Point:
        """Position of corner *corner*, between directions ``corner`` and ``corner.succ``."""
        c = self.cells[cell]
        angle = math.radians(30.0 + 60.0 * int(corner))
        return (c.x + self._radius * math.cos(angle), c.y + self._radius * math.sin(angle))

    def characteristic_spacing(self) -> float:
        """Centre-to-centre distance between adjacent cells."""
        return self.spacing

    # ── Convenience ─────────────────────────────────────────────────

    def neighbors(self, cell: int) -> List[int]:
        """Indices of all present neighbours of *cell*, in direction order."""
        return [n for n in self._neighbors[cell] if n is not None]

    def cell_center(self, cell: int) -> Point:
        c = self.cells[cell]
        return c.x, c.y

    def cell_area(self) -> float:
        """Area of one hexagonal cell."""
        return 1.5 * math.sqrt(3) * self._radius ** 2

    def cells_on_boundary(self) -> List[int]:
        return [c.index for c in self.cells if self.is_boundary(c.index)]

    def find_cell(self, q: int, r: int) -> int:
        """Index of the cell at axial ``(q, r)``, or raise ``KeyError``."""
        for c in self.cells:
            if c.q == q and c.r == r:
                return c.index
        raise KeyError(f"No cell at axial ({q}, {r})")

    def validate(self) -> list[str]:
        errors: list[str] = []
        for cell in self.cells:
            expected = axial_to_pixel(cell.q, cell.r, self.spacing)
            if math.hypot(expected[0] - cell.x, expected[1] - cell.y) > 1e-9 * self.spacing + 1e-12:
                errors.append(f"Cell {cell.index} centre does not match axial ({cell.q}, {cell.r})")
            for d in Direction:
                n = self._neighbors[cell.index][d]
                if n is None:
                    continue
                back = self._neighbors[n][d.opposite]
                if back != cell.index:
                    errors.append(
                        f"Cell {cell.index} -> {n} ({d.name}) is not mirrored by {d.opposite.name}"
                    )
        return errors

    # ── Serialisation ───────────────────────────────────────────────

    def to_dict(self) -> dict:
        return {
            "version": self.VERSION,
            "spacing": self.spacing,
            "metadata": self.metadata,
            "cells": [
                {"index": c.index, "q": c.q, "r": c.r, "x": c.x, "y": c.y}
                for c in self.cells
            ],
        }

    @classmethod
    def from_dict(cls, payload: dict) -> "HexGrid":
        spacing = payload.get("spacing", 1.0)
        cells = []
        for cell in payload.get("cells", []):
            q, r = int(cell["q"]), int(cell["r"])
            if "x" in cell and "y" in cell:
                x, y = float(cell["x"]), float(cell["y"])
            else:
                x, y = axial_to_pixel(q, r, spacing)
            cells.append(HexCell(index=int(cell["index"]), q=q, r=r, x=x, y=y))
        return cls(cells, spacing=spacing, metadata=payload.get("metadata", {}))

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, sort_keys=True)

    @classmethod
    def from_json(cls, json_data: str) -> "HexGrid":
        return cls.from_dict(json.loads(json_data))

    def __len__(self) -> int:
        return len(self.cells)

    def __repr__(self) -> str:
        return f"HexGrid(cells={len(self.cells)}, spacing={self.spacing})"


def cells_from_axial(coords: Sequence[Tuple[int, int]], spacing: float) -> List[HexCell]:
    cells = []
    for idx, (q, r) in enumerate(coords):
        x, y = axial_to_pixel(q, r, spacing)
        cells.append(HexCell(index=idx, q=q, r=r, x=x, y=y))
    return cells
