"""Opening files for writing with a useful error message."""

from __future__ import annotations

import os
from typing import BinaryIO

__all__ = ["file_writer"]


def file_writer(file_path: str | os.PathLike[str]) -> BinaryIO:
    """Open ``file_path`` for buffered binary writing, truncating it."""
    try:
        return open(file_path, "wb")
    except OSError as exc:
        raise OSError(
            exc.errno,
            f"Unable to open file `{os.fspath(file_path)}` for writing: {exc.strerror}",
        ) from exc