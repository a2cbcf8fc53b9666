"""
JSON artifacts written by a pipeline run.

- ``<data>/raw/<source>-raw.json``: records exactly as each source collected them
- ``<data>/clean/tools-clean.json``: the deduplicated, filtered candidate list
"""

from __future__ import annotations

from dataclasses import asdict, is_dataclass
import json
from pathlib import Path
from typing import Any

from ..core.types import CandidateTool


def write_json(path: Path, payload: Any) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        f"{json.dumps(_to_jsonable(payload), ensure_ascii=False, indent=2)}\n",
        encoding="utf-8",
    )
    return path


def raw_dump_path(raw_dir: Path, source_name: str) -> Path:
    return raw_dir / f"{source_name}-raw.json"


def write_raw_dump(raw_dir: Path, source_name: str, records: list[Any]) -> Path:
    return write_json(raw_dump_path(raw_dir, source_name), records)


def write_clean(path: Path, tools: list[CandidateTool]) -> Path:
    return write_json(path, [tool.to_dict() for tool in tools])


def load_clean(path: Path) -> list[CandidateTool]:
    """Load a cleaned candidate list written by ``write_clean``.

    Raises:
        ValueError: If the file does not hold a JSON list of objects
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, list):
        raise ValueError(f"{path} does not contain a list of tools")
    return [CandidateTool.from_dict(item) for item in data]


def _to_jsonable(value: Any) -> Any:
    if is_dataclass(value) and not isinstance(value, type):
        return asdict(value)
    if isinstance(value, list):
        return [_to_jsonable(item) for item in value]
    return value
