"""A matcher applying per-element matchers to a sequence, keyed by an identifier function."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable

from probekit.matching import Matcher, Options, format_message
from probekit.nested_errors import AggregateError, NestingMatcher, nest

IndexedIdentifier = Callable[[int, Any], str]


def index_identity(index: int, element: Any) -> str:
    """Identify an element by its position in the sequence."""
    return str(index)


def _drop_index(identifier: Callable[[Any], str]) -> IndexedIdentifier:
    def identify(index: int, element: Any) -> str:
        return identifier(element)

    return identify


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
class ElementsMatcher(NestingMatcher):
    """Matches each element of a list or tuple against the matcher its identifier maps it to.

    ``identifier`` is called with the element's index and the element and
    returns the key of the matcher in ``elements``.
    """

    elements: dict[str, Matcher] = field(default_factory=dict)
    identifier: IndexedIdentifier = index_identity
    ignore_extras: bool = False
    ignore_missing: bool = False
    allow_duplicates: bool = False
    _failures: list[Exception] = field(default_factory=list, init=False, repr=False)

    def match(self, actual: Any) -> bool:
        if not isinstance(actual, (list, tuple)):
            raise TypeError(f"{actual!r} is type {type(actual).__name__}, expected slice")
        self._failures = self._match_elements(actual)
        return not self._failures

    def _match_elements(self, actual: list | tuple) -> list[Exception]:
        errors: list[Exception] = []
        seen: set[str] = set()
        try:
            for index, element in enumerate(actual):
                key = self.identifier(index, element)
                if key in seen and not self.allow_duplicates:
                    errors.append(ValueError(f"found duplicate element ID {key}"))
                    continue
                seen.add(key)

                matcher = self.elements.get(key)
                if matcher is None:
                    if not self.ignore_extras:
                        errors.append(ValueError(f"unexpected element {key}"))
                    continue

                err = _check(matcher, element)
                if err is not None:
                    errors.append(nest(f"[{key}]", err))

            if not self.ignore_missing:
                errors.extend(
                    ValueError(f"missing expected element {key}")
                    for key in self.elements
                    if key not in seen
                )
        except Exception as exc:  # report identifier failures as match failures
            errors.append(ValueError(f"panic checking {actual!r}: {exc}"))
        return errors

    def failure_message(self, actual: Any) -> str:
        return format_message(actual, f"to match elements: {AggregateError(self._failures)}")

    def negated_failure_message(self, actual: Any) -> str:
        return format_message(actual, "not to match elements")

    def failures(self) -> list[Exception]:
        return self._failures


def match_all_elements(
    identifier: Callable[[Any], str], elements: dict[str, Matcher]
) -> ElementsMatcher:
    """Match every element by identifier(element), failing on extra, missing or duplicate ones."""
    return ElementsMatcher(elements=elements, identifier=_drop_index(identifier))


def match_all_elements_with_index(
    identifier: IndexedIdentifier, elements: dict[str, Matcher]
) -> ElementsMatcher:
    """Match every element by identifier(index, element), failing on extra, missing or duplicate ones."""
    return ElementsMatcher(elements=elements, identifier=identifier)


def match_elements(
    identifier: Callable[[Any], str], options: Options | int, elements: dict[str, Matcher]
) -> ElementsMatcher:
    """Match elements by identifier(element), relaxed by the given options."""
    return match_elements_with_index(_drop_index(identifier), options, elements)


def match_elements_with_index(
    identifier: IndexedIdentifier, options: Options | int, elements: dict[str, Matcher]
) -> ElementsMatcher:
    """Match elements by identifier(index, element), relaxed by the given options."""
    return ElementsMatcher(
        elements=elements,
        identifier=identifier,
        ignore_extras=bool(options & Options.IGNORE_EXTRAS),
        ignore_missing=bool(options & Options.IGNORE_MISSING),
        allow_duplicates=bool(options & Options.ALLOW_DUPLICATES),
    )