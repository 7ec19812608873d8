from __future__ import annotations

from collections import deque
from typing import TYPE_CHECKING, Dict, List, Sequence

if TYPE_CHECKING:
    from .hexgrid import HexGrid


def cell_adjacency(grid: "HexGrid") -> Dict[int, List[int]]:
    """Return ``{cell: [neighbour cells]}`` for every cell of *grid*."""
    return {cell: sorted(grid.neighbors(cell)) for cell in range(grid.num_cells())}


def connected_component(
    grid: "HexGrid",
    identity: Sequence[float],
    start_cell: int,
) -> List[int]:
    """Cells reachable from *start_cell* through neighbours of equal identity."""
    target = identity[start_cell]
    visited = {start_cell}
    queue = deque([start_cell])
    while queue:
        cell = queue.popleft()
        for neighbor in grid.neighbors(cell):
            if neighbor in visited or identity[neighbor] != target:
                continue
            visited.add(neighbor)
            queue.append(neighbor)
    return sorted(visited)


def label_components(grid: "HexGrid", identity: Sequence[float]) -> List[int]:
    """Label each cell with the index of its same-identity connected component.

    Components are numbered in order of their lowest cell index.
    """
    labels = [-1] * grid.num_cells()
    next_label = 0
    for cell in range(grid.num_cells()):
        if labels[cell] != -1:
            continue
        for member in connected_component(grid, identity, cell):
            labels[member] = next_label
        next_label += 1
    return labels
