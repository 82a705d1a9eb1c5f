"""Matcher protocol, matching options and the unconditional matchers."""

from __future__ import annotations

import abc
import enum
from dataclasses import dataclass
from typing import Any


class Options(enum.IntFlag):
    """Flags that relax how the collection matchers compare."""

    IGNORE_EXTRAS = 1
    IGNORE_MISSING = 2
    ALLOW_DUPLICATES = 4


class Matcher(abc.ABC):
    """A matcher decides whether a value matches and explains why not.

    ``match`` returns a bool and raises an exception when the value cannot be
    matched at all (for example, when it has the wrong type).
    """

    @abc.abstractmethod
    def match(self, actual: Any) -> bool:
        """Return True when actual matches."""

    @abc.abstractmethod
    def failure_message(self, actual: Any) -> str:
        """Explain why actual did not match."""

    @abc.abstractmethod
    def negated_failure_message(self, actual: Any) -> str:
        """Explain why actual matched when it should not have."""


def _format_object(value: Any, indentation: int = 1) -> str:
    indent = "    " * indentation
    text = value if isinstance(value, str) else repr(value)
    return f"{indent}<{type(value).__name__}>: {text}"


def format_message(actual: Any, message: str) -> str:
    """Build a standard "Expected <actual> <message>" failure text."""
    return f"Expected\n{_format_object(actual)}\n{message}"


@dataclass
class IgnoreMatcher(Matcher):
    """A matcher that always succeeds or always fails."""

    succeed: bool

    def match(self, actual: Any) -> bool:
        return self.succeed

    def failure_message(self, actual: Any) -> str:
        return "Unconditional failure"

    def negated_failure_message(self, actual: Any) -> str:
        return "Unconditional success"


def ignore() -> IgnoreMatcher:
    """Return a matcher that ignores the value and always succeeds."""
    return IgnoreMatcher(True)


def reject() -> IgnoreMatcher:
    """Return a matcher that ignores the value and always fails."""
    return IgnoreMatcher(False)