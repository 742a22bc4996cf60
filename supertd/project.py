"""The projects a verifiable can come from."""

from __future__ import annotations

import os
import subprocess
from enum import Enum
from pathlib import Path

__all__ = ["TdProject", "get_repo_root"]


class TdProject(str, Enum):
    """A source project; values are the lower-case names used on the wire."""

    CONFIGERATOR = "configerator"
    FBCODE = "fbcode"
    FBANDROID = "fbandroid"
    FBOBJC = "fbobjc"
    MOBILE = "mobile"
    RL = "rl"
    WAANDROID = "waandroid"
    WACOMMON = "wacommon"
    WAMETA = "wameta"
    WASERVER = "waserver"
    WAVOIP = "wavoip"
    WWW = "www"
    XPLAT = "xplat"

    def __str__(self) -> str:
        return self.value

    def is_mobile(self) -> bool:
        """True for the mobile app projects."""
        return self in (TdProject.FBANDROID, TdProject.FBOBJC)


def get_repo_root() -> Path:
    """Return the repository root as reported by ``hg root``.

    Raises ``OSError`` if the command cannot be started.
    """
    completed = subprocess.run(["hg", "root"], capture_output=True, check=False)
    stdout = completed.stdout.rstrip(b" \t\n\r\x0b\x0c")
    return Path(os.fsdecode(stdout))