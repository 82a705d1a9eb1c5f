"""Durations held as integer nanoseconds: conversion, rounding and display."""

from __future__ import annotations

from datetime import timedelta

_NANOSECOND = 1
_MICROSECOND = 1_000
_MILLISECOND = 1_000_000
_SECOND = 1_000_000_000


def to_nanoseconds(value: int | timedelta) -> int:
    """Return value as whole nanoseconds; ints are taken as nanoseconds already."""
    if isinstance(value, timedelta):
        return (value.days * 86_400 + value.seconds) * _SECOND + value.microseconds * _MICROSECOND
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    raise TypeError(f"cannot interpret {value!r} as a duration")


def round_duration(nanoseconds: int, multiple: int) -> int:
    """Round to the nearest multiple, halves away from zero; a non-positive multiple leaves it unchanged."""
    if multiple <= 0:
        return nanoseconds
    remainder = abs(nanoseconds) % multiple
    if nanoseconds < 0:
        if remainder + remainder < multiple:
            return nanoseconds + remainder
        return nanoseconds - multiple + remainder
    if remainder + remainder < multiple:
        return nanoseconds - remainder
    return nanoseconds + multiple - remainder


def _decimal(whole: int, fraction: int, digits: int) -> str:
    if fraction == 0:
        return str(whole)
    return f"{whole}." + str(fraction).zfill(digits).rstrip("0")


def format_duration(nanoseconds: int) -> str:
    """Render a duration such as "1.5s", "2m3.1s", "1h0m0s" or "250ms"."""
    if nanoseconds == 0:
        return "0s"
    sign = "-" if nanoseconds < 0 else ""
    magnitude = abs(nanoseconds)

    if magnitude < _SECOND:
        if magnitude < _MICROSECOND:
            return f"{sign}{magnitude}ns"
        if magnitude < _MILLISECOND:
            whole, fraction = divmod(magnitude, _MICROSECOND)
            return sign + _decimal(whole, fraction, 3) + "µs"
        whole, fraction = divmod(magnitude, _MILLISECOND)
        return sign + _decimal(whole, fraction, 6) + "ms"

    total_seconds, fraction = divmod(magnitude, _SECOND)
    total_minutes, seconds = divmod(total_seconds, 60)
    hours, minutes = divmod(total_minutes, 60)
    seconds_text = _decimal(seconds, fraction, 9) + "s"
    if hours:
        return f"{sign}{hours}h{minutes}m{seconds_text}"
    if minutes:
        return f"{sign}{minutes}m{seconds_text}"
    return sign + seconds_text