"""hexdomains command-line interface."""

from __future__ import annotations

import argparse
import json
import logging
import sys
from pathlib import Path
from typing import List, Optional, Sequence

import structlog

from .io import load_identity, load_json, save_identity, save_json

logger = structlog.get_logger()


def configure_logging(level: str = "WARNING") -> None:
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level.upper())
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Hex-grid Dirichlet domain extraction")
    parser.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    sub = parser.add_subparsers(dest="command", required=True)

    build_hex = sub.add_parser("build-hex", help="Build a hexagon-shaped hex grid")
    build_hex.add_argument("--rings", type=int, required=True)
    build_hex.add_argument("--spacing", type=float, default=1.0)
    build_hex.add_argument("--out", dest="output_path", required=True)

    validate = sub.add_parser("validate", help="Validate a grid file")
    validate.add_argument("--in", dest="input_path", required=True)

    domains = sub.add_parser("domains", help="Extract Dirichlet domains")
    source = domains.add_mutually_exclusive_group(required=True)
    source.add_argument("--in", dest="input_path", help="Grid JSON file")
    source.add_argument("--rings", type=int, help="Build a hexagon grid with N rings")

    field = domains.add_mutually_exclusive_group(required=True)
    field.add_argument("--sectors", type=int, help="Angular partition into K sectors")
    field.add_argument("--noise-fields", type=int, help="Winner of K competing noise fields")
    field.add_argument("--identity", dest="identity_path", help="Identity field JSON file")

    domains.add_argument("--seed", type=int, default=42)
    domains.add_argument("--frequency", type=float, default=0.15)
    domains.add_argument("--legacy", action="store_true",
                         help="Record at most one vertex per cell")
    domains.add_argument("--strict", action="store_true",
                         help="Stop at the first unclosed perimeter")
    domains.add_argument("--identity-out", dest="identity_out")
    domains.add_argument("--diagnose-json", dest="diagnose_json")

    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    if args.command == "build-hex":
        _cmd_build_hex(args)

    elif args.command == "validate":
        grid = load_json(args.input_path)
        errors = grid.validate()
        if errors:
            for error in errors:
                print(error)
            raise SystemExit(1)
        print("OK")

    elif args.command == "domains":
        _cmd_domains(args)


def _cmd_build_hex(args) -> None:
    from .builders import build_hex_grid

    grid = build_hex_grid(args.rings, spacing=args.spacing)
    save_json(grid, args.output_path)
    print(f"Saved {args.output_path} ({grid.num_cells()} cells)")


def _cmd_domains(args) -> None:
    from .assembler import find_dirichlet_domains
    from .builders import build_hex_grid
    from .config import ShapeConfig
    from .diagnostics import diagnostics_report
    from .errors import ShapeAnalysisError
    from .fields import dirichlet_regions, partition_angular, sample_noise_fields

    if args.input_path:
        grid = load_json(args.input_path)
    else:
        grid = build_hex_grid(args.rings)

    if args.sectors is not None:
        identity: List[float] = [float(v) for v in partition_angular(grid, args.sectors)]
    elif args.noise_fields is not None:
        fields = sample_noise_fields(
            grid, args.noise_fields, seed=args.seed, frequency=args.frequency,
        )
        identity = [float(v) for v in dirichlet_regions(fields)]
    else:
        identity = load_identity(args.identity_path)

    if args.identity_out:
        save_identity(identity, args.identity_out)

    config = ShapeConfig(first_hit_only=args.legacy, strict=args.strict)
    try:
        assembly = find_dirichlet_domains(grid, identity, config)
    except ShapeAnalysisError as exc:
        print(f"{type(exc).__name__}: {exc}")
        raise SystemExit(1)

    for domain in assembly:
        area = abs(domain.signed_area())
        print(f"domain {domain.domain_id:g}: {len(domain)} vertices, area {area:.4f}")
    print(f"{len(assembly)} domains, {assembly.failure_count} failures")

    if args.diagnose_json:
        report = diagnostics_report(grid, identity, assembly, config)
        Path(args.diagnose_json).write_text(json.dumps(report, indent=2), encoding="utf-8")
        logger.info("Wrote diagnostics", path=args.diagnose_json)


if __name__ == "__main__":
    main()
