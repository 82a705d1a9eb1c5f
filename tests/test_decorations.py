from datetime import timedelta

import pytest

from probekit.decorations import (
    DEFAULT_PRECISION_BUNDLE,
    Annotation,
    PrecisionBundle,
    SamplingConfig,
    Style,
    Units,
    extract_decorations,
    precision,
)
from probekit.durations import to_nanoseconds


def test_default_precision():
    assert DEFAULT_PRECISION_BUNDLE.value_format == "%.3f"
    assert DEFAULT_PRECISION_BUNDLE.duration == to_nanoseconds(timedelta(microseconds=100))


def test_integer_precision_sets_value_format_only():
    bundle = precision(2)
    assert bundle.value_format == "%.2f"
    assert bundle.duration == DEFAULT_PRECISION_BUNDLE.duration
    assert precision(0).value_format == "%.0f"


def test_timedelta_precision_sets_duration_only():
    bundle = precision(timedelta(milliseconds=100))
    assert bundle.duration == to_nanoseconds(timedelta(milliseconds=100))
    assert bundle.value_format == DEFAULT_PRECISION_BUNDLE.value_format


@pytest.mark.parametrize("bad", ["aardvark", 1.5, True, None])
def test_invalid_precision_is_rejected(bad):
    with pytest.raises(TypeError, match="invalid precision type"):
        precision(bad)


def test_no_arguments_give_defaults():
    decorations = extract_decorations([])
    assert decorations.annotation == ""
    assert decorations.units == ""
    assert decorations.style == ""
    assert decorations.precision_bundle == DEFAULT_PRECISION_BUNDLE


def test_each_decoration_is_picked_up():
    decorations = extract_decorations(
        [Annotation("first"), Units("widgets"), precision(0), Style("{{yellow}}")]
    )
    assert decorations.annotation == "first"
    assert decorations.units == "widgets"
    assert decorations.style == "{{yellow}}"
    assert decorations.precision_bundle == PrecisionBundle(value_format="%.0f")


def test_later_decoration_wins():
    decorations = extract_decorations([Annotation("a"), Annotation("b")])
    assert decorations.annotation == "b"


def test_unrecognized_argument_is_rejected():
    with pytest.raises(ValueError) as info:
        extract_decorations(["boom"])
    assert str(info.value) == 'unrecognized argument "boom"'


def test_sampling_config_normalises_time_limits():
    config = SamplingConfig(n=3, duration=timedelta(seconds=1), min_sampling_interval=5)
    assert config.duration == to_nanoseconds(timedelta(seconds=1))
    assert config.min_sampling_interval == 5
    assert config.n == 3
    assert config.num_parallel == 0