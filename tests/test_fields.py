from collections import namedtuple
from dataclasses import dataclass

import pytest

from probekit.fields import match_all_fields, match_fields
from probekit.matching import Matcher, Options, format_message
from probekit.nested_errors import AggregateError, NestedError


class Equal(Matcher):
    def __init__(self, expected):
        self.expected = expected

    def match(self, actual):
        return actual == self.expected

    def failure_message(self, actual):
        return format_message(
            actual, f"to equal\n    <{type(self.expected).__name__}>: {self.expected}"
        )

    def negated_failure_message(self, actual):
        return format_message(actual, "not to equal")


class Explodes(Matcher):
    def match(self, actual):
        raise ValueError("boom")

    def failure_message(self, actual):
        return "never"

    def negated_failure_message(self, actual):
        return "never"


@dataclass
class AB:
    A: str = ""
    B: str = ""


@dataclass
class OnlyA:
    A: str = ""


@dataclass
class ABC:
    A: str = ""
    B: str = ""
    C: str = ""


@dataclass
class AC:
    A: str = ""
    C: str = ""


@dataclass
class Empty:
    pass


all_fields = AB("a", "b")
missing_fields = OnlyA("a")
extra_fields = ABC("a", "b", "c")
empty_fields = AB()


def ab_matchers(b="b"):
    return {"B": Equal(b), "A": Equal("a")}


def test_strictly_matches_all_fields():
    m = match_all_fields(ab_matchers())
    assert m.match(all_fields) is True
    assert m.match(missing_fields) is False
    assert m.match(extra_fields) is False
    assert m.match(empty_fields) is False

    m = match_all_fields(ab_matchers("fail"))
    assert m.match(all_fields) is False


def test_handles_empty_structs():
    m = match_all_fields({})
    assert m.match(Empty()) is True
    assert m.match(all_fields) is False


def test_ignores_missing_fields():
    m = match_fields(Options.IGNORE_MISSING, ab_matchers())
    assert m.match(all_fields) is True
    assert m.match(missing_fields) is True
    assert m.match(extra_fields) is False
    assert m.match(empty_fields) is False


def test_ignores_extra_fields():
    m = match_fields(Options.IGNORE_EXTRAS, ab_matchers())
    assert m.match(all_fields) is True
    assert m.match(missing_fields) is False
    assert m.match(extra_fields) is True
    assert m.match(empty_fields) is False


def test_ignores_missing_and_extra_fields():
    m = match_fields(Options.IGNORE_MISSING | Options.IGNORE_EXTRAS, ab_matchers())
    assert m.match(all_fields) is True
    assert m.match(missing_fields) is True
    assert m.match(extra_fields) is True
    assert m.match(empty_fields) is False

    m = match_fields(Options.IGNORE_MISSING | Options.IGNORE_EXTRAS, ab_matchers("fail"))
    assert m.match(all_fields) is False


def test_sensible_error_messages():
    m = match_all_fields(ab_matchers())
    actual = AC(A="b", C="c")
    assert m.match(actual) is False
    message = m.failure_message(actual)
    assert message.startswith("Expected\n    <str>: AC\nto match fields: {\n")
    assert ".A:\n\tExpected\n\t    <str>: b\n\tto equal\n\t    <str>: a\n" in message
    assert "missing expected field B\n" in message
    assert f".C:\n\tunexpected field C: {actual!r}" in message
    assert message.endswith("\n}\n")


def test_failures_are_nested_errors_with_paths():
    m = match_all_fields(ab_matchers())
    m.match(AC(A="b", C="c"))
    failures = m.failures()
    assert len(failures) == 3
    assert [f.path for f in failures if isinstance(f, NestedError)] == [".A", ".C"]


def test_nested_matchers_prefix_paths():
    @dataclass
    class Inner:
        x: int

    @dataclass
    class Outer:
        inner: Inner

    m = match_all_fields({"inner": match_all_fields({"x": Equal(1)})})
    assert m.match(Outer(Inner(1))) is True
    assert m.match(Outer(Inner(2))) is False
    (failure,) = m.failures()
    assert isinstance(failure, AggregateError)
    assert str(failure).startswith(".inner.x:\n\tExpected")


def test_raising_matcher_becomes_failure():
    m = match_all_fields({"A": Explodes(), "B": Equal("b")})
    assert m.match(all_fields) is False
    (failure,) = m.failures()
    assert str(failure) == ".A:\n\tboom"


def test_named_tuples_are_supported():
    Pair = namedtuple("Pair", "A B")
    m = match_all_fields(ab_matchers())
    assert m.match(Pair("a", "b")) is True
    assert m.match(Pair("a", "x")) is False


def test_non_struct_raises():
    with pytest.raises(TypeError, match="expected struct"):
        match_all_fields({}).match(5)


def test_negated_failure_message():
    m = match_all_fields(ab_matchers())
    assert m.negated_failure_message("x") == "Expected\n    <str>: x\nnot to match fields"