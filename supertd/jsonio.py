"""Reading and writing JSON and JSON-lines files."""

from __future__ import annotations

import dataclasses
import io
import json
from collections.abc import Iterable, Iterator
from enum import Enum
from pathlib import Path, PurePath
from typing import IO, Any

import zstandard

__all__ = [
    "read_file_lines",
    "read_file_lines_unordered",
    "write_json_lines",
    "write_json_per_line",
    "parse_key_val",
]


def _is_zstd(filename: Path) -> bool:
    return filename.suffix == ".zst"


def _iter_lines(filename: Path) -> Iterator[str]:
    with open(filename, "rb") as raw:
        stream: IO[bytes] = raw
        if _is_zstd(filename):
            stream = zstandard.ZstdDecompressor().stream_reader(raw)
        text = io.TextIOWrapper(stream, encoding="utf-8", newline="\n")
        for line in text:
            if line.endswith("\n"):
                line = line[:-1]
                if line.endswith("\r"):
                    line = line[:-1]
            yield line


def _parse_all(filename: Path) -> list[Any]:
    result = []
    for line in _iter_lines(filename):
        try:
            result.append(json.loads(line))
        except ValueError as exc:
            raise ValueError(f"When parsing: {line}: {exc}") from exc
    return result


def read_file_lines(filename: str | Path) -> list[Any]:
    """Read a file holding one JSON value per line, in file order.

    Files ending in ``.zst`` are decompressed with zstd.
    """
    path = Path(filename)
    try:
        return _parse_all(path)
    except ValueError as exc:
        raise ValueError(f"When reading file `{path}`: {exc}") from exc


def read_file_lines_unordered(filename: str | Path) -> list[Any]:
    """Read a file holding one JSON value per line; the order is not guaranteed."""
    path = Path(filename)
    try:
        return _parse_all(path)
    except ValueError as exc:
        raise ValueError(f"When reading JSON-lines file `{path}`: {exc}") from exc


def _default(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return dataclasses.asdict(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, PurePath):
        return str(obj)
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def _dumps(value: Any) -> str:
    return json.dumps(value, separators=(",", ":"), ensure_ascii=False, default=_default)


def _flush(out: IO[str]) -> None:
    flush = getattr(out, "flush", None)
    if flush is not None:
        flush()


def write_json_lines(out: IO[str], items: Iterable[Any]) -> None:
    """Write each item as compact JSON on its own line."""
    for item in items:
        out.write(_dumps(item))
        out.write("\n")
    _flush(out)


def write_json_per_line(out: IO[str], items: Iterable[Any]) -> None:
    """Write a JSON array with each element on a line of its own."""
    it = iter(items)
    out.write("[")
    first = next(it, _MISSING)
    if first is not _MISSING:
        out.write("\n  ")
        out.write(_dumps(first))
        for item in it:
            out.write(",\n  ")
            out.write(_dumps(item))
        out.write("\n")
    out.write("]\n")
    _flush(out)


_MISSING = object()


def parse_key_val(s: str) -> tuple[str, str]:
    """Split ``KEY=value`` at the first ``=``."""
    key, sep, value = s.partition("=")
    if not sep:
        raise ValueError(f"invalid KEY=value: no `=` found in `{s}`")
    return key, value