"""The schedule types and continuous run modes CI can run under."""

from __future__ import annotations

from enum import Enum

__all__ = ["ScheduleType", "ContinuousRunMode"]


def _lookup(enum_cls, value: str, aliases: dict[str, str]):
    key = value.lower()
    key = aliases.get(key, key)
    for member in enum_cls:
        if member.value == key:
            return member
    raise ValueError(f"invalid {enum_cls.__name__} value: {value!r}")


class ScheduleType(str, Enum):
    """The phases of validation where CI runs. The default is ``DIFF``."""

    DIFF = "diff"
    CONTINUOUS = "continuous"
    CONTINUOUS_STABLE = "continuous_stable"
    LANDCASTLE = "landcastle"
    POSTCOMMIT = "postcommit"
    TESTWARDEN = "testwarden"
    GREENWARDEN = "greenwarden"
    DISABLED = "disabled"
    MASTER = "master"
    RELBRANCH = "relbranch"
    COVERAGE = "coverage"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def _missing_(cls, value):
        if value == "land":
            return cls.LANDCASTLE
        return None

    @classmethod
    def from_name(cls, value: str) -> ScheduleType:
        """Parse a name case-insensitively, accepting ``land`` as an alias."""
        return _lookup(cls, value, {"land": "landcastle"})

    def is_changeset_schedule_type(self) -> bool:
        """Whether this schedule builds for a changeset."""
        return self in (
            ScheduleType.DIFF,
            ScheduleType.LANDCASTLE,
            ScheduleType.MASTER,
            ScheduleType.POSTCOMMIT,
            ScheduleType.RELBRANCH,
        )

    def is_trunk_schedule_type(self) -> bool:
        """Whether this schedule runs on trunk."""
        return self in (
            ScheduleType.CONTINUOUS,
            ScheduleType.CONTINUOUS_STABLE,
            ScheduleType.TESTWARDEN,
            ScheduleType.GREENWARDEN,
            ScheduleType.DISABLED,
        )

    def accepts(self, other: ScheduleType) -> bool:
        """Whether a run with this schedule accepts a target configured for ``other``."""
        if self is ScheduleType.CONTINUOUS:
            return other in (ScheduleType.CONTINUOUS, ScheduleType.DIFF)
        if self is ScheduleType.TESTWARDEN:
            return other in (
                ScheduleType.TESTWARDEN,
                ScheduleType.CONTINUOUS,
                ScheduleType.DIFF,
            )
        if self is ScheduleType.CONTINUOUS_STABLE:
            return other in (
                ScheduleType.CONTINUOUS_STABLE,
                ScheduleType.CONTINUOUS,
                ScheduleType.DIFF,
            )
        return other is self


_TRANSLATOR_RUN_TYPES = {
    "translator_hourly": "hourly",
    "translator_nightly": "nightly",
    "translator_weekend": "weekend",
    "translator_continuous_for_multisect": "diff",
}


class ContinuousRunMode(str, Enum):
    """Trunk runs with a specific purpose. The default is ``DEV``."""

    AARCH64 = "aarch64"
    ASIC_HOURLY = "asic_hourly"
    CI_WORKFLOWS = "ci_workflows"
    DEV = "dev"
    OPT = "opt"
    OPT_HOURLY = "opt_hourly"
    OPT_EARLY_ADOPTOR = "opt_early_adoptor"
    OPT_ADHOC = "opt_adhoc"
    RUNWAY_SHADOW = "runway_shadow"
    RUNWAY_COVERAGE = "runway_coverage"
    RUNWAY_ONLY_RUN_DISABLED_TESTS = "runway_only_run_disabled_tests"
    TRANSLATOR_HOURLY = "translator_hourly"
    TRANSLATOR_NIGHTLY = "translator_nightly"
    TRANSLATOR_WEEKEND = "translator_weekend"
    # Used when scheduling translator jobs for multisect.
    TRANSLATOR_CONTINUOUS_FOR_MULTISECT = "translator_continuous_for_multisect"
    FLAKY_TESTS_DEV = "flaky_tests_dev"
    SUPPLEMENTAL = "supplemental"

    def __str__(self) -> str:
        return self.value

    @classmethod
    def from_name(cls, value: str) -> ContinuousRunMode:
        """Parse a mode name case-insensitively."""
        return _lookup(cls, value, {})

    def to_translator_run_type(self) -> str:
        """The translator run type for this mode, or ``Unknown``."""
        return _TRANSLATOR_RUN_TYPES.get(self.value, "Unknown")

    @classmethod
    def from_translator_run_type(cls, value: str) -> ContinuousRunMode:
        """Parse a translator run type.

        ``diff`` is deliberately not accepted, since that run type is
        used in several contexts.
        """
        mapping = {
            "hourly": cls.TRANSLATOR_HOURLY,
            "nightly": cls.TRANSLATOR_NIGHTLY,
            "weekend": cls.TRANSLATOR_WEEKEND,
        }
        try:
            return mapping[value]
        except KeyError:
            raise ValueError(f"unknown translator run type: {value!r}") from None