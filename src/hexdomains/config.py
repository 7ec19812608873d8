"""Tuneable parameters for vertex classification and perimeter walks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from .hexgrid import HexGrid


@dataclass(frozen=True)
class ShapeConfig:
    """All tuneable parameters for domain extraction.

    Attributes
    ----------
    tolerance_fraction : float
        Absolute tolerance for matching corner coordinates, as a
        fraction of the grid's characteristic spacing.  Absorbs the
        round-off from reconstructing the same corner from different
        cells.
    first_hit_only : bool
        If *True*, each cell emits at most one vertex (the first
        qualifying neighbour direction).  Two-identity boundary cells
        only take corners facing the exterior, and cells seeing more
        identities only take corners with a third neighbour identity.
        Cells touching two junctions then leave one of them unrecorded.
    strict : bool
        If *True*, the assembler re-raises the first perimeter failure
        instead of recording it and moving on.
    max_walk_steps : int, optional
        Upper bound on corners visited by a single edge walk.  Defaults
        to ``6 * num_cells + 6``.
    """

    tolerance_fraction: float = 1e-3
    first_hit_only: bool = False
    strict: bool = False
    max_walk_steps: Optional[int] = None

    def __post_init__(self) -> None:
        if self.tolerance_fraction <= 0:
            raise ValueError("tolerance_fraction must be > 0")
        if self.max_walk_steps is not None and self.max_walk_steps < 1:
            raise ValueError("max_walk_steps must be >= 1")

    def tolerance(self, grid: "HexGrid") -> float:
        return self.tolerance_fraction * grid.characteristic_spacing()

    def walk_limit(self, grid: "HexGrid") -> int:
        if self.max_walk_steps is not None:
            return self.max_walk_steps
        return 6 * grid.num_cells() + 6


# ═══════════════════════════════════════════════════════════════════
# Preset configs
# ═══════════════════════════════════════════════════════════════════

DEFAULT_CONFIG = ShapeConfig()

LEGACY_CONFIG = ShapeConfig(first_hit_only=True)

STRICT_CONFIG = ShapeConfig(strict=True)
