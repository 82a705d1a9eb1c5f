"""A matcher applying per-field matchers to a structured record."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass, field
from typing import Any

from probekit.matching import Matcher, Options, format_message
from probekit.nested_errors import AggregateError, NestingMatcher, nest


def _struct_items(actual: Any) -> list[tuple[str, Any]] | None:
    if dataclasses.is_dataclass(actual) and not isinstance(actual, type):
        return [(f.name, getattr(actual, f.name)) for f in dataclasses.fields(actual)]
    if isinstance(actual, tuple) and hasattr(actual, "_fields"):
        return list(zip(actual._fields, actual))
    return None


def _check(matcher: Matcher, value: Any) -> Exception | None:
    try:
        if matcher.match(value):
            return None
    except Exception as exc:  # a failing nested matcher is reported, not raised
        return exc
    if isinstance(matcher, NestingMatcher):
        return AggregateError(matcher.failures())
    return ValueError(matcher.failure_message(value))


@dataclass
class FieldsMatcher(NestingMatcher):
    """Matches each field of a dataclass instance or named tuple against its own matcher."""

    fields: dict[str, Matcher] = field(default_factory=dict)
    ignore_extras: bool = False
    ignore_missing: bool = False
    _failures: list[Exception] = field(default_factory=list, init=False, repr=False)

    def match(self, actual: Any) -> bool:
        items = _struct_items(actual)
        if items is None:
            raise TypeError(f"{actual!r} is type {type(actual).__name__}, expected struct")
        self._failures = self._match_fields(actual, items)
        return not self._failures

    def _match_fields(self, actual: Any, items: list[tuple[str, Any]]) -> list[Exception]:
        errors: list[Exception] = []
        seen = set()
        for name, value in items:
            seen.add(name)
            matcher = self.fields.get(name)
            if matcher is None:
                if not self.ignore_extras:
                    errors.append(
                        nest("." + name, ValueError(f"unexpected field {name}: {actual!r}"))
                    )
                continue
            err = _check(matcher, value)
            if err is not None:
                errors.append(nest("." + name, err))

        if not self.ignore_missing:
            errors.extend(
                ValueError(f"missing expected field {name}")
                for name in self.fields
                if name not in seen
            )
        return errors

    def failure_message(self, actual: Any) -> str:
        listed = "\n".join(str(e) for e in self._failures)
        return format_message(type(actual).__name__, f"to match fields: {{\n{listed}\n}}\n")

    def negated_failure_message(self, actual: Any) -> str:
        return format_message(actual, "not to match fields")

    def failures(self) -> list[Exception]:
        return self._failures


def match_all_fields(fields: dict[str, Matcher]) -> FieldsMatcher:
    """Match every field, failing on extra or missing fields."""
    return FieldsMatcher(fields=fields)


def match_fields(options: Options | int, fields: dict[str, Matcher]) -> FieldsMatcher:
    """Match fields, optionally ignoring extra and/or missing fields."""
    return FieldsMatcher(
        fields=fields,
        ignore_extras=bool(options & Options.IGNORE_EXTRAS),
        ignore_missing=bool(options & Options.IGNORE_MISSING),
    )