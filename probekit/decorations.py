"""Decorations attached to recorded data points, precision settings and sampling settings."""

from __future__ import annotations

import dataclasses
import json
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Iterable

from probekit.durations import to_nanoseconds


class Units(str):
    """Units for a value measurement; ignored for durations."""


class Annotation(str):
    """An annotation attached to a single recorded data point."""


class Style(str):
    """A style tag such as "{{blue}}" used when rendering reports."""


@dataclass(frozen=True)
class PrecisionBundle:
    """How to round durations (nanoseconds) and format values for display."""

    duration: int = 100_000
    value_format: str = "%.3f"


DEFAULT_PRECISION_BUNDLE = PrecisionBundle()


def precision(p: int | timedelta) -> PrecisionBundle:
    """Precision from an int (decimal places for values) or a timedelta (rounding for durations)."""
    if isinstance(p, timedelta):
        return dataclasses.replace(DEFAULT_PRECISION_BUNDLE, duration=to_nanoseconds(p))
    if isinstance(p, int) and not isinstance(p, bool):
        return dataclasses.replace(DEFAULT_PRECISION_BUNDLE, value_format=f"%.{p}f")
    raise TypeError("invalid precision type, must be timedelta or int")


@dataclass
class SamplingConfig:
    """Limits on sampling: count, total time, spacing between samples and parallelism.

    Time limits accept nanoseconds or a timedelta and are stored as nanoseconds.
    """

    n: int = 0
    duration: int | timedelta = 0
    min_sampling_interval: int | timedelta = 0
    num_parallel: int = 0

    def __post_init__(self) -> None:
        self.duration = to_nanoseconds(self.duration)
        self.min_sampling_interval = to_nanoseconds(self.min_sampling_interval)


@dataclass
class Decorations:
    """The decorations picked out of a recording call's extra arguments."""

    annotation: Annotation = field(default_factory=Annotation)
    units: Units = field(default_factory=Units)
    precision_bundle: PrecisionBundle = DEFAULT_PRECISION_BUNDLE
    style: Style = field(default_factory=Style)


def _describe(arg: Any) -> str:
    if isinstance(arg, str):
        return json.dumps(arg)
    return repr(arg)


def extract_decorations(args: Iterable[Any]) -> Decorations:
    """Sort decoration arguments by type; a later one of a type replaces an earlier one."""
    out = Decorations()
    for arg in args:
        kind = type(arg)
        if kind is Annotation:
            out.annotation = arg
        elif kind is Units:
            out.units = arg
        elif kind is PrecisionBundle:
            out.precision_bundle = arg
        elif kind is Style:
            out.style = arg
        else:
            raise ValueError(f"unrecognized argument {_describe(arg)}")
    return out