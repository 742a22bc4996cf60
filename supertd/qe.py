"""Checking parameters of a quick-experiment universe."""

from __future__ import annotations

from supertd.events import Step

__all__ = ["evaluate_qe"]


async def evaluate_qe(
    phabricator_version_number: int,
    universe: str,
    param: str,
    expect: bool | str | int,
    step: Step,
) -> bool:
    """Whether ``param`` in ``universe`` has the expected value for this version.

    ``expect`` must be a bool, string or integer. No experiment service is
    available here, so the check never passes.
    """
    if not isinstance(expect, (bool, str, int)):
        raise TypeError(
            f"expected value must be bool, str or int, not {type(expect).__name__}"
        )
    return False