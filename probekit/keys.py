"""A matcher applying per-key matchers to a mapping."""

from __future__ import annotations

import json
from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Hashable

from probekit.matching import Matcher, Options, format_message
from probekit.nested_errors import AggregateError, NestingMatcher, nest


def _describe_key(key: Any) -> str:
    if isinstance(key, str):
        return json.dumps(key)
    return repr(key)


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
class KeysMatcher(NestingMatcher):
    """Matches the value under each key of a mapping against its own matcher."""

    keys: dict[Hashable, Matcher] = field(default_factory=dict)
    ignore_extras: bool = False
    ignore_missing: bool = False
    _failures: list[Exception] = field(default_factory=list, init=False, repr=False)

    def match(self, actual: Any) -> bool:
        if not isinstance(actual, Mapping):
            raise TypeError(f"{actual!r} is type {type(actual).__name__}, expected map")
        self._failures = self._match_keys(actual)
        return not self._failures

    def _match_keys(self, actual: Mapping) -> list[Exception]:
        errors: list[Exception] = []
        for key, value in actual.items():
            path = "." + _describe_key(key)
            matcher = self.keys.get(key)
            if matcher is None:
                if not self.ignore_extras:
                    errors.append(nest(path, ValueError(f"unexpected key {key}: {actual!r}")))
                continue
            err = _check(matcher, value)
            if err is not None:
                errors.append(nest(path, err))

        if not self.ignore_missing:
            errors.extend(
                ValueError(f"missing expected key {key}")
                for key in self.keys
                if key not in actual
            )
        return errors

    def failure_message(self, actual: Any) -> str:
        listed = "\n".join(str(e) for e in self._failures)
        return format_message(type(actual).__name__, f"to match keys: {{\n{listed}\n}}\n")

    def negated_failure_message(self, actual: Any) -> str:
        return format_message(actual, "not to match keys")

    def failures(self) -> list[Exception]:
        return self._failures


def match_all_keys(keys: dict[Hashable, Matcher]) -> KeysMatcher:
    """Match every key, failing on extra or missing keys."""
    return KeysMatcher(keys=keys)


def match_keys(options: Options | int, keys: dict[Hashable, Matcher]) -> KeysMatcher:
    """Match keys, optionally ignoring extra and/or missing keys."""
    return KeysMatcher(
        keys=keys,
        ignore_extras=bool(options & Options.IGNORE_EXTRAS),
        ignore_missing=bool(options & Options.IGNORE_MISSING),
    )