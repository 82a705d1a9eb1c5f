import pytest

from probekit.elements import (
    ElementsMatcher,
    index_identity,
    match_all_elements,
    match_all_elements_with_index,
    match_elements,
    match_elements_with_index,
)
from probekit.matching import Matcher, Options, format_message
from probekit.nested_errors import AggregateError, NestedError


class Equal(Matcher):
    def __init__(self, expected):
        self.expected = expected

    def match(self, actual):
        return actual == self.expected

    def failure_message(self, actual):
        return format_message(actual, f"to equal\n    {self.expected}")

    def negated_failure_message(self, actual):
        return format_message(actual, f"not to equal\n    {self.expected}")


class ContainSubstring(Matcher):
    def __init__(self, substring):
        self.substring = substring

    def match(self, actual):
        return self.substring in actual

    def failure_message(self, actual):
        return format_message(actual, f"to contain substring {self.substring}")

    def negated_failure_message(self, actual):
        return format_message(actual, f"not to contain substring {self.substring}")


def ident(element):
    return element


def non_unique_id(element):
    return element[0:1]


ALL = ["a", "b"]
MISSING = ["a"]
EXTRA = ["a", "b", "c"]
DUPLICATE = ["a", "a", "b"]
EMPTY: list = []


def test_strictly_matches_all_elements():
    m = match_all_elements(ident, {"b": Equal("b"), "a": Equal("a")})
    assert m.match(ALL) is True
    assert m.match(MISSING) is False
    assert m.match(EXTRA) is False
    assert m.match(DUPLICATE) is False
    assert m.match(EMPTY) is False


def test_runs_nested_matchers():
    m = match_all_elements(ident, {"a": Equal("a"), "b": Equal("fail")})
    assert m.match(ALL) is False


def test_empty_element_map():
    m = match_all_elements(ident, {})
    assert m.match(EMPTY) is True
    assert m.match(ALL) is False
    assert m.match(()) is True


def test_ignore_extras():
    m = match_elements(ident, Options.IGNORE_EXTRAS, {"b": Equal("b"), "a": Equal("a")})
    assert m.match(ALL) is True
    assert m.match(MISSING) is False
    assert m.match(EXTRA) is True
    assert m.match(DUPLICATE) is False
    assert m.match(EMPTY) is False


def test_ignore_missing():
    m = match_elements(ident, Options.IGNORE_MISSING, {"a": Equal("a"), "b": Equal("b")})
    assert m.match(ALL) is True
    assert m.match(MISSING) is True
    assert m.match(EXTRA) is False
    assert m.match(DUPLICATE) is False
    assert m.match(EMPTY) is True


def test_ignore_missing_and_extras():
    opts = Options.IGNORE_MISSING | Options.IGNORE_EXTRAS
    m = match_elements(ident, opts, {"a": Equal("a"), "b": Equal("b")})
    assert m.match(ALL) is True
    assert m.match(MISSING) is True
    assert m.match(EXTRA) is True
    assert m.match(DUPLICATE) is False
    assert m.match(EMPTY) is True

    m = match_elements(ident, opts, {"a": Equal("a"), "b": Equal("fail")})
    assert m.match(ALL) is False


SHARED_ALL = ["a123", "a213", "b321"]
SHARED_BAD = ["a123", "b123", "b5555"]
SHARED_EXTRA = ["a123", "b1234", "c345"]
SHARED_MISSING = ["b123", "b1234", "b1345"]


def _shared(options):
    return match_elements(
        non_unique_id, options, {"a": ContainSubstring("1"), "b": ContainSubstring("1")}
    )


def test_allow_duplicates_strict():
    m = _shared(Options.ALLOW_DUPLICATES)
    assert m.match(SHARED_ALL) is True
    assert m.match(SHARED_BAD) is False
    assert m.match(SHARED_EXTRA) is False
    assert m.match(SHARED_MISSING) is False
    assert m.match(EMPTY) is False


def test_allow_duplicates_ignore_missing():
    m = _shared(Options.ALLOW_DUPLICATES | Options.IGNORE_MISSING)
    assert m.match(SHARED_ALL) is True
    assert m.match(SHARED_BAD) is False
    assert m.match(SHARED_EXTRA) is False
    assert m.match(SHARED_MISSING) is True
    assert m.match(EMPTY) is True


def test_allow_duplicates_ignore_extras():
    m = _shared(Options.ALLOW_DUPLICATES | Options.IGNORE_EXTRAS)
    assert m.match(SHARED_ALL) is True
    assert m.match(SHARED_BAD) is False
    assert m.match(SHARED_EXTRA) is True
    assert m.match(SHARED_MISSING) is False
    assert m.match(EMPTY) is False


def test_allow_duplicates_ignore_missing_and_extras():
    m = _shared(Options.ALLOW_DUPLICATES | Options.IGNORE_EXTRAS | Options.IGNORE_MISSING)
    assert m.match(SHARED_ALL) is True
    assert m.match(SHARED_BAD) is False
    assert m.match(SHARED_EXTRA) is True
    assert m.match(SHARED_MISSING) is True
    assert m.match(EMPTY) is True


def test_index_identifier():
    m = match_all_elements_with_index(index_identity, {"0": Equal("a"), "1": Equal("b")})
    assert m.match(ALL) is True
    assert m.match(MISSING) is False
    assert m.match(EXTRA) is False
    assert m.match(DUPLICATE) is False
    assert m.match(EMPTY) is False

    m = match_all_elements_with_index(index_identity, {"0": Equal("a"), "1": Equal("fail")})
    assert m.match(ALL) is False

    m = match_all_elements_with_index(index_identity, {})
    assert m.match(EMPTY) is True
    assert m.match(ALL) is False


def test_match_elements_with_index_ignore_extras():
    m = match_elements_with_index(index_identity, Options.IGNORE_EXTRAS, {"0": Equal("a")})
    assert m.match(EXTRA) is True
    assert m.match(["z"]) is False


def test_index_identity_values():
    assert index_identity(0, "x") == "0"
    assert index_identity(12, None) == "12"


def test_non_sequence_raises_type_error():
    m = match_all_elements(ident, {})
    with pytest.raises(TypeError, match="expected slice"):
        m.match({"a": 1})
    with pytest.raises(TypeError, match="expected slice"):
        m.match("ab")


def test_failure_details():
    m = match_all_elements(ident, {"a": Equal("a"), "b": Equal("b")})
    assert m.match(["a", "a", "c"]) is False
    messages = [str(e) for e in m.failures()]
    assert "found duplicate element ID a" in messages
    assert "unexpected element c" in messages
    assert "missing expected element b" in messages


def test_nested_failure_path():
    m = match_all_elements(ident, {"a": Equal("a"), "b": Equal("fail")})
    assert m.match(ALL) is False
    (err,) = m.failures()
    assert isinstance(err, NestedError)
    assert err.path == "[b]"
    assert str(err).startswith("[b]:\n\tExpected\n\t    <str>: b")


def test_failure_message_lists_failures():
    m = match_all_elements(ident, {"a": Equal("a")})
    assert m.match(["a", "z"]) is False
    message = m.failure_message(["a", "z"])
    assert message.startswith("Expected\n    <list>: ['a', 'z']\nto match elements: ")
    assert message.endswith("unexpected element z")


def test_negated_failure_message():
    m = match_all_elements(ident, {})
    assert m.negated_failure_message([]) == "Expected\n    <list>: []\nnot to match elements"


def test_nested_elements_matcher_aggregates_paths():
    inner = match_all_elements(ident, {"a": Equal("a"), "b": Equal("fail")})
    outer = match_all_elements(lambda e: str(len(e)), {"2": inner})
    assert outer.match([["a", "b"]]) is False
    (err,) = outer.failures()
    assert isinstance(err, AggregateError)
    assert str(err).startswith("[2][b]:\n\t")


def test_identifier_failure_is_reported():
    m = match_all_elements(non_unique_id, {"a": Equal("a")})
    assert m.match([1]) is False
    assert str(m.failures()[-1]).startswith("panic checking [1]: ")


def test_failures_reset_between_matches():
    m = ElementsMatcher(elements={"0": Equal("a")})
    assert m.match(["b"]) is False
    assert len(m.failures()) == 1
    assert m.match(["a"]) is True
    assert m.failures() == []