"""Enumerations with human-readable labels and a JSON form based on those labels."""

from __future__ import annotations

import enum
from typing import Any


class LabeledEnum(enum.Enum):
    """An enum whose members carry a label used for display and JSON.

    Members are declared as ``NAME = (number, "label")``.  The member with
    number 0 is the fallback: it serialises to ``None`` and is what unknown
    labels decode to.
    """

    label: str

    def __new__(cls, value: int, label: str) -> LabeledEnum:
        member = object.__new__(cls)
        member._value_ = value
        member.label = label
        return member

    def __str__(self) -> str:
        return self.label

    def to_json(self) -> str | None:
        """Return the JSON value for this member: its label, or None for member 0."""
        if self.value == 0:
            return None
        return self.label

    @classmethod
    def from_json(cls, value: Any) -> LabeledEnum:
        """Decode a JSON value; None and unknown labels give member 0."""
        if value is None:
            return cls(0)
        if not isinstance(value, str):
            raise TypeError(f"cannot decode {value!r} as {cls.__name__}")
        for member in cls:
            if member.label == value:
                return member
        return cls(0)


class MeasurementType(LabeledEnum):
    """The kind of data a measurement holds."""

    INVALID = (0, "INVALID LOG ENTRY TYPE")
    NOTE = (1, "Note")
    DURATION = (2, "Duration")
    VALUE = (3, "Value")


class Stat(LabeledEnum):
    """A statistic that can be asked of a Stats."""

    INVALID = (0, "INVALID STAT")
    MIN = (1, "Min")
    MAX = (2, "Max")
    MEAN = (3, "Mean")
    MEDIAN = (4, "Median")
    STD_DEV = (5, "StdDev")


class StatsType(LabeledEnum):
    """Whether a Stats summarises values or durations."""

    INVALID = (0, "INVALID STATS TYPE")
    VALUE = (1, "StatsTypeValue")
    DURATION = (2, "StatsTypeDuration")


class RankingCriteria(LabeledEnum):
    """The criterion by which stats are ranked."""

    LOWER_MEAN_IS_BETTER = (0, "Lower Mean is Better")
    HIGHER_MEAN_IS_BETTER = (1, "Higher Mean is Better")
    LOWER_MEDIAN_IS_BETTER = (2, "Lower Median is Better")
    HIGHER_MEDIAN_IS_BETTER = (3, "Higher Median is Better")
    LOWER_MIN_IS_BETTER = (4, "Lower Mins is Better")
    HIGHER_MIN_IS_BETTER = (5, "Higher Min is Better")
    LOWER_MAX_IS_BETTER = (6, "Lower Max is Better")
    HIGHER_MAX_IS_BETTER = (7, "Higher Max is Better")