"""Helpers for cross-platform (mobile) job metadata."""

from __future__ import annotations

import json
from collections.abc import Sequence

from supertd.project import TdProject

__all__ = ["unpack_project_metadata"]

_CONFIG_KEYS = {
    TdProject.FBANDROID: "fbandroid.test_selection_config",
    TdProject.FBOBJC: "fbobjc.test_selection_config",
}


def _unpack_json_metadata(
    job_metadata: Sequence[tuple[str, str]], metadata_key: str
) -> list[tuple[str, str]]:
    raw = next((value for key, value in job_metadata if key == metadata_key), None)
    if raw is None:
        return []
    try:
        parsed = json.loads(raw)
    except ValueError:
        return []
    if not isinstance(parsed, dict) or not all(
        isinstance(v, str) for v in parsed.values()
    ):
        return []
    return list(parsed.items())


def unpack_project_metadata(
    project: TdProject, job_metadata: Sequence[tuple[str, str]]
) -> list[tuple[str, str]]:
    """Expand a project's JSON test-selection config into key/value pairs.

    For mobile projects the entries of the project's config blob come first,
    followed by the original metadata; other projects get the metadata as is.
    """
    key = _CONFIG_KEYS.get(project)
    if key is None:
        return list(job_metadata)
    return _unpack_json_metadata(job_metadata, key) + list(job_metadata)