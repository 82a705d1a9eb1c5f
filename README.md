# probekit

Tools for measuring code and for checking nested data in tests. It needs
nothing outside the Python standard library.

## Measuring

An `Experiment` (in `probekit.experiment`) records named measurements:
durations, plain values and notes. Durations are integer nanoseconds; a
`datetime.timedelta` is accepted wherever a duration is recorded.

```python
from datetime import timedelta

from probekit.experiment import Experiment
from probekit.decorations import Annotation, Units, Style, SamplingConfig, precision

experiment = Experiment("sorting")
experiment.record_note("baseline run", Style("{{blue}}"))
experiment.record_value("items", 1024, Units("elements"))
experiment.record_duration("setup", timedelta(milliseconds=250), precision(timedelta(milliseconds=10)))
experiment.measure_duration("runtime", lambda: sorted(range(100_000)))
experiment.sample_value("ratio", lambda idx: idx * 1.5, SamplingConfig(n=10), precision(2))

print(experiment)                      # a plain table
print(experiment.colorable_string())   # the same table with {{style}} tags
stats = experiment.get_stats("ratio")  # min, max, mean, median, standard deviation
```

Decorations are passed as extra arguments: `Annotation`, `Units`, `Style` and
the `PrecisionBundle` returned by `precision()` (an int gives decimal places for
values, a timedelta gives the rounding for durations). Any other argument raises
`ValueError`. Units, style and precision are taken from the first recording of
a name; recording a value under a name already used for durations (or the other
way round) raises `ValueError`.

`SamplingConfig` limits sampling by count (`n`), total time (`duration`), the
minimum time between samples (`min_sampling_interval`) and the number of
parallel workers (`num_parallel`). At least one of `n` and `duration` must be
given, and `min_sampling_interval` cannot be combined with `num_parallel`
greater than 1; both mistakes raise `ValueError`. `sample`, `sample_duration`,
`sample_annotated_duration`, `sample_value` and `sample_annotated_value` call
your callback with indices 0, 1, 2, …

### Stopwatch

To record several durations along one code path, use a stopwatch:

```python
stopwatch = experiment.new_stopwatch()
# ... first step ...
stopwatch.record("step one", Annotation("cold")).reset()
# ... second step ...
stopwatch.pause()
# ... work that should not be counted ...
stopwatch.resume()
stopwatch.record("step two")
```

Recording or pausing a paused stopwatch, or resuming a running one, raises
`RuntimeError`.

### Statistics and ranking

`Measurement.stats()` returns a `Stats` (in `probekit.stats`) with `value_for`,
`duration_for`, `float_for` and `string_for`, keyed by the `Stat` enum from
`probekit.enums`. `str(stats)` gives a one-line summary such as
`3.14 < [8.97] | <8.56> ±3.59 < 14.25`.

`probekit.rank.rank_stats(criteria, *stats)` orders stats by a
`RankingCriteria` (for example `RankingCriteria.LOWER_MEAN_IS_BETTER`);
`Ranking.winner()` returns the best one and `str(ranking)` renders a table.

Helpers in `probekit.durations` convert (`to_nanoseconds`), round
(`round_duration`) and display (`format_duration`, giving text like `1.5s`,
`2m3.1s` or `250ms`) durations. `probekit.table` holds the plain-text table
renderer used by the reports.

### Caching experiments

`probekit.cache.ExperimentCache(path)` keeps experiments in a directory, one
`.experiment-cache` file per name (the directory is created if missing; a path
that is a file raises `NotADirectoryError`):

```python
from probekit.cache import ExperimentCache

cache = ExperimentCache("./measurements")
cache.save("sorting", 1, experiment)
again = cache.load("sorting", 1)   # None if absent or stored with a lower version
cache.list()                        # [CachedExperimentHeader(name="sorting", version=1)]
cache.delete("sorting")
cache.clear()
```

## Matching nested data

A matcher subclasses `probekit.matching.Matcher` and provides `match`,
`failure_message` and `negated_failure_message`. The structural matchers check
each part of a value with its own matcher:

- `probekit.fields`: `match_all_fields` / `match_fields` for dataclass
  instances and named tuples;
- `probekit.keys`: `match_all_keys` / `match_keys` for mappings;
- `probekit.elements`: `match_all_elements`, `match_elements` and their
  `_with_index` variants for lists and tuples, where an identifier function
  maps each element (or index and element, see `index_identity`) to a key.

Combine `Options.IGNORE_EXTRAS`, `Options.IGNORE_MISSING` and
`Options.ALLOW_DUPLICATES` to relax the checks. Failures are kept as
`NestedError` and `AggregateError` values (in `probekit.nested_errors`), whose
text shows the path to each problem.

```python
from dataclasses import dataclass

from probekit.fields import match_fields
from probekit.matching import Matcher, Options, format_message, ignore


class Equal(Matcher):
    def __init__(self, expected):
        self.expected = expected

    def match(self, actual):
        return actual == self.expected

    def failure_message(self, actual):
        return format_message(actual, f"to equal {self.expected!r}")

    def negated_failure_message(self, actual):
        return format_message(actual, f"not to equal {self.expected!r}")


@dataclass
class Point:
    x: int
    y: int
    label: str


matcher = match_fields(Options.IGNORE_EXTRAS, {"x": Equal(1), "y": ignore()})
matcher.match(Point(1, 5, "a"))   # True
```

`ignore()` and `reject()` always succeed or always fail.

## What it does not do

probekit is a library only: it has no command-line program. Apart from
`ignore()`, `reject()` and the structural matchers, it ships no value matchers
(equality, containment and the like) and no assertion functions; you supply
your own `Matcher` subclasses and decide what to do with a failed match.