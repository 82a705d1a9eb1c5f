"""Errors that carry a path into nested data, and errors that group other errors."""

from __future__ import annotations

import abc
from typing import Iterable, Iterator

from probekit.matching import Matcher


class NestingMatcher(Matcher):
    """A matcher built from other matchers that keeps their failures."""

    @abc.abstractmethod
    def failures(self) -> list[Exception]:
        """Return the failures recorded by the last match."""


class NestedError(Exception):
    """An error labelled with the path where it occurred."""

    def __init__(self, path: str, err: Exception) -> None:
        super().__init__(path, err)
        self.path = path
        self.err = err

    def __str__(self) -> str:
        indented = str(self.err).replace("\n", "\n\t")
        return f"{self.path}:\n\t{indented}"


class AggregateError(Exception):
    """Several errors treated as one."""

    def __init__(self, errors: Iterable[Exception] = ()) -> None:
        self.errors = list(errors)
        super().__init__(*self.errors)

    def __iter__(self) -> Iterator[Exception]:
        return iter(self.errors)

    def __len__(self) -> int:
        return len(self.errors)

    def __str__(self) -> str:
        if not self.errors:
            return ""
        if len(self.errors) == 1:
            return str(self.errors[0])
        return "[" + ", ".join(str(e) for e in self.errors) + "]"


def nest(path: str, err: Exception) -> Exception:
    """Label err with path, prefixing existing paths and nesting each aggregated error."""
    if isinstance(err, AggregateError):
        return AggregateError(nest(path, e) for e in err)
    if isinstance(err, NestedError):
        return NestedError(path + err.path, err.err)
    return NestedError(path, err)