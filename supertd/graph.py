"""Dependency-graph queries: transitive closure sizes and sudo propagation."""

from __future__ import annotations

from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field

__all__ = [
    "USES_SUDO_LABEL",
    "TargetNode",
    "TargetsSize",
    "GraphSize",
    "requires_sudo_recursively",
]

USES_SUDO_LABEL = "uses_sudo"


@dataclass(frozen=True)
class TargetNode:
    """A target in the build graph: its label, dependencies and labels."""

    label: str
    deps: tuple[str, ...] = ()
    labels: frozenset[str] = field(default_factory=frozenset)

    def __post_init__(self) -> None:
        object.__setattr__(self, "deps", tuple(self.deps))
        object.__setattr__(self, "labels", frozenset(self.labels))

    @property
    def name(self) -> str:
        """The target name, the part of the label after the last ``:``."""
        return self.label.rpartition(":")[2]


class TargetsSize:
    """Answers how many targets each target transitively depends on."""

    def __init__(self, targets: Iterable[TargetNode]) -> None:
        self._deps: dict[str, tuple[str, ...]] = {t.label: t.deps for t in targets}

    def get(self, label: str) -> int:
        """Number of distinct targets reachable from ``label``, itself included."""
        visited = {label}
        stack = [label]
        while stack:
            current = stack.pop()
            for dep in self._deps.get(current, ()):
                if dep not in visited:
                    visited.add(dep)
                    stack.append(dep)
        return len(visited)


class GraphSize:
    """Graph sizes of targets before and after a change."""

    def __init__(self, base: Iterable[TargetNode], diff: Iterable[TargetNode]) -> None:
        self.base = TargetsSize(base)
        self.diff = TargetsSize(diff)

    def sizes(self, label: str) -> tuple[int, int]:
        """The ``(before, after)`` transitive sizes of ``label``."""
        return self.base.get(label), self.diff.get(label)


def requires_sudo_recursively(targets: Iterable[TargetNode]) -> set[str]:
    """Labels of targets that use sudo or depend, transitively, on one that does."""
    rdeps: dict[str, list[TargetNode]] = defaultdict(list)
    todo: list[TargetNode] = []
    sudos: set[str] = set()

    for target in targets:
        for dep in target.deps:
            rdeps[dep].append(target)
        if USES_SUDO_LABEL in target.labels:
            todo.append(target)
            sudos.add(target.label)

    while todo:
        current = todo.pop()
        for parent in rdeps.get(current.label, ()):
            if parent.label not in sudos:
                sudos.add(parent.label)
                todo.append(parent)

    return sudos