"""Parsing of build directives attached to a CI job."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from supertd.project import TdProject

__all__ = [
    "BUILD_ALL_DIRECTIVE",
    "BUILD_ALL_FBANDROID_DIRECTIVE",
    "BUILD_ALL_FBOBJC_DIRECTIVE",
    "get_app_specific_build_directives",
    "app_specific_build_directives_matches_name",
    "should_build_all",
    "should_build_all_fbobjc",
    "should_build_all_fbandroid",
]

BUILD_ALL_DIRECTIVE = "#buildall"
BUILD_ALL_FBANDROID_DIRECTIVE = "#buildall-fbandroid"
BUILD_ALL_FBOBJC_DIRECTIVE = "#buildall-fbobjc"

_BUILD_PREFIX = "@build["
_BUILD_SUFFIX = "]"


def get_app_specific_build_directives(
    directives: Iterable[str] | None,
) -> list[str] | None:
    """Extract the comma separated names inside ``@build[...]`` directives."""
    if directives is None:
        return None
    result: list[str] = []
    for directive in directives:
        if not (directive.startswith(_BUILD_PREFIX) and directive.endswith(_BUILD_SUFFIX)):
            continue
        inner = directive[len(_BUILD_PREFIX) : len(directive) - len(_BUILD_SUFFIX)]
        if len(directive) < len(_BUILD_PREFIX) + len(_BUILD_SUFFIX) or not inner:
            continue
        result.extend(inner.split(","))
    return result


def app_specific_build_directives_matches_name(
    app_specific_build_directives: Sequence[str] | None,
    name: str,
    exactly: bool,
    project: TdProject,
) -> bool:
    """Whether ``name`` is selected by any of the app-specific directives."""
    if app_specific_build_directives is None:
        return False

    def matches(directive: str) -> bool:
        if exactly and project != TdProject.FBOBJC:
            return name == directive
        return name.startswith(directive) or name.endswith(directive)

    return any(matches(d) for d in app_specific_build_directives)


def _contains(directives: Iterable[str] | None, wanted: str) -> bool:
    return directives is not None and any(d == wanted for d in directives)


def should_build_all(directives: Iterable[str] | None) -> bool:
    """Whether the generic build-all directive is present."""
    return _contains(directives, BUILD_ALL_DIRECTIVE)


def should_build_all_fbobjc(directives: Iterable[str] | None, project: TdProject) -> bool:
    """Whether the fbobjc build-all directive applies to ``project``."""
    return project == TdProject.FBOBJC and _contains(directives, BUILD_ALL_FBOBJC_DIRECTIVE)


def should_build_all_fbandroid(directives: Iterable[str] | None, project: TdProject) -> bool:
    """Whether the fbandroid build-all directive applies to ``project``."""
    return project == TdProject.FBANDROID and _contains(
        directives, BUILD_ALL_FBANDROID_DIRECTIVE
    )