from __future__ import annotations

import json
from pathlib import Path
from typing import List, Sequence, Union

from .hexgrid import HexGrid


PathLike = Union[str, Path]


def load_json(path: PathLike) -> HexGrid:
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    return HexGrid.from_dict(data)


def save_json(grid: HexGrid, path: PathLike) -> None:
    Path(path).write_text(grid.to_json(), encoding="utf-8")


def load_identity(path: PathLike) -> List[float]:
    """Read an identity field stored as a JSON list (or ``{"identity": [...]}``)."""
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data["identity"]
    return [float(v) for v in data]


def save_identity(identity: Sequence[float], path: PathLike) -> None:
    payload = {"identity": [float(v) for v in identity]}
    Path(path).write_text(json.dumps(payload, indent=2), encoding="utf-8")
