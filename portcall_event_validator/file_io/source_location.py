from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional

from ..utils.json_path import JsonPath, parse_path

SourceMap = Dict[str, Dict[str, int]]


@dataclass(frozen=True)
class SourceLocation:
    file_path: Optional[Path] = None
    json_path: Optional[str] = None
    line: Optional[int] = None  # 1-based
    column: Optional[int] = None  # 1-based


def lookup_source(
    source_map: Optional[SourceMap],
    json_path: Optional[str],
    file_path: Optional[Path] = None,
) -> SourceLocation:
    """Locate *json_path* in a file.

    A path with no entry of its own (typically a missing field) resolves to
    its closest recorded ancestor.
    """
    if not source_map or json_path is None:
        return SourceLocation(file_path=file_path, json_path=json_path)

    try:
        path = parse_path(json_path)
    except ValueError:
        return SourceLocation(file_path=file_path, json_path=json_path)

    tokens = path.tokens
    while True:
        entry = source_map.get(str(JsonPath(tokens)))
        if entry or not tokens:
            break
        tokens = tokens[:-1]

    if not entry:
        return SourceLocation(file_path=file_path, json_path=json_path)

    return SourceLocation(
        file_path=file_path,
        json_path=json_path,
        line=entry.get("line"),
        column=entry.get("column"),
    )

