"""hexdomains: Dirichlet domain extraction on hexagonal grids.

Public API is organised into layers:

- **Core**: models, grid container, algorithms, I/O
- **Extraction**: vertex classification, edge walking, domain assembly
- **Fields**: producing identity fields from scalar data
- **Diagnostics**: closure and area checks and reports
"""

# ── Core ────────────────────────────────────────────────────────────
from .models import (
    NO_NEIGHBOUR,
    Direction,
    DirichVertex,
    Domain,
    DomainAssembly,
    HexCell,
    Rotation,
)
from .hexgrid import HexGrid, axial_to_pixel
from .builders import build_hex_grid, build_parallelogram_grid, hex_cell_count
from .algorithms import cell_adjacency, connected_component, label_components
from .io import load_identity, load_json, save_identity, save_json

# ── Extraction ──────────────────────────────────────────────────────
from .config import DEFAULT_CONFIG, LEGACY_CONFIG, STRICT_CONFIG, ShapeConfig
from .errors import MalformedTopology, ShapeAnalysisError, UnclosedPerimeter
from .classifier import classify_vertices
from .walker import walk_edge, walk_to_neighbour, walk_to_next
from .assembler import assemble_domains, find_dirichlet_domains, process_domain

# ── Fields ──────────────────────────────────────────────────────────
from .noise import fbm
from .fields import (
    dirichlet_regions,
    get_contours,
    partition_angular,
    partition_flood_fill,
    sample_noise_fields,
)

# ── Diagnostics ─────────────────────────────────────────────────────
from .diagnostics import (
    DomainValidation,
    check_domains,
    diagnostics_report,
    domain_area_ratio,
    domain_closure_error,
    duplicate_positions,
)

__all__ = [
    # Core
    "NO_NEIGHBOUR",
    "Direction",
    "DirichVertex",
    "Domain",
    "DomainAssembly",
    "HexCell",
    "Rotation",
    "HexGrid",
    "axial_to_pixel",
    "build_hex_grid",
    "build_parallelogram_grid",
    "hex_cell_count",
    "cell_adjacency",
    "connected_component",
    "label_components",
    "load_json",
    "save_json",
    "load_identity",
    "save_identity",
    # Extraction
    "ShapeConfig",
    "DEFAULT_CONFIG",
    "LEGACY_CONFIG",
    "STRICT_CONFIG",
    "ShapeAnalysisError",
    "MalformedTopology",
    "UnclosedPerimeter",
    "classify_vertices",
    "walk_edge",
    "walk_to_next",
    "walk_to_neighbour",
    "assemble_domains",
    "process_domain",
    "find_dirichlet_domains",
    # Fields
    "fbm",
    "dirichlet_regions",
    "get_contours",
    "sample_noise_fields",
    "partition_angular",
    "partition_flood_fill",
    # Diagnostics
    "DomainValidation",
    "check_domains",
    "diagnostics_report",
    "domain_area_ratio",
    "domain_closure_error",
    "duplicate_positions",
]
