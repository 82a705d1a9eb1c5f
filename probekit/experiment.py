"""Experiments: named collections of measurements, with recording, sampling and reports."""

from __future__ import annotations

import dataclasses
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass, field
from datetime import timedelta
from typing import Any, Callable

from probekit.decorations import (
    Annotation,
    Decorations,
    SamplingConfig,
    extract_decorations,
)
from probekit.durations import to_nanoseconds
from probekit.enums import MeasurementType
from probekit.measurement import Measurement, index_with_name
from probekit.stats import Stats
from probekit.stopwatch import Stopwatch
from probekit.table import Divider, Table, cell, row

_STYLE_RESET = "{{/}}"


def _sample_loop(
    dispatch: Callable[[int], None], config: SamplingConfig, num_parallel: int
) -> None:
    now = time.perf_counter_ns
    max_time = now() + config.duration if config.duration > 0 else None
    max_n = config.n if config.n > 0 else None
    min_interval = config.min_sampling_interval

    idx = 0
    avg_dt = 0
    while True:
        started = now()
        dispatch(idx)
        dt = now() - started
        if num_parallel == 1 and dt < min_interval:
            time.sleep((min_interval - dt) / 1e9)
            dt = now() - started
        if idx >= num_parallel:
            done = idx - num_parallel
            avg_dt = (avg_dt * done + dt) // (done + 1)
        idx += 1
        if max_n is not None and idx >= max_n:
            return
        if max_time is not None and now() + avg_dt > max_time:
            return


@dataclass
class Experiment:
    """A named set of measurements that can be recorded from several threads.

    Durations are integer nanoseconds; a timedelta is accepted wherever a
    duration is recorded.
    """

    name: str = ""
    measurements: list[Measurement] = field(default_factory=list)
    _lock: threading.Lock = field(
        default_factory=threading.Lock, init=False, repr=False, compare=False
    )

    def report(self, enable_styling: bool) -> str:
        """Render a table summarising every measurement."""
        table = Table()
        table.table_style.enable_text_styling = enable_styling
        table.append_row(
            row(
                cell("Name"),
                cell("N"),
                cell("Min"),
                cell("Median"),
                cell("Mean"),
                cell("StdDev"),
                cell("Max"),
                Divider("="),
                "{{bold}}",
            )
        )
        for measurement in self.measurements:
            r = row(measurement.style)
            table.append_row(r)
            if measurement.type is MeasurementType.NOTE:
                r.append_cell(cell(measurement.note))
            elif measurement.type in (MeasurementType.VALUE, MeasurementType.DURATION):
                name = measurement.name
                if measurement.units:
                    name += f" [{measurement.units}]"
                r.append_cell(cell(name))
                r.append_cell(*measurement.stats().cells())

        out = self.name + "\n"
        if enable_styling:
            out = "{{bold}}" + out + _STYLE_RESET
        return out + table.render()

    def colorable_string(self) -> str:
        """Return the report with style tags."""
        return self.report(True)

    def __str__(self) -> str:
        return self.report(False)

    def record_note(self, note: str, *args: Any) -> None:
        """Record a textual note; accepts a Style decoration."""
        decorations = extract_decorations(args)
        with self._lock:
            self.measurements.append(
                Measurement(
                    type=MeasurementType.NOTE,
                    experiment_name=self.name,
                    note=note,
                    style=str(decorations.style),
                )
            )

    def record_duration(self, name: str, duration: int | timedelta, *args: Any) -> None:
        """Record a duration on the duration measurement called name."""
        self._record_duration(name, to_nanoseconds(duration), extract_decorations(args))

    def measure_duration(self, name: str, callback: Callable[[], Any], *args: Any) -> int:
        """Time callback, record the duration and return it in nanoseconds."""
        started = time.perf_counter_ns()
        callback()
        duration = time.perf_counter_ns() - started
        self.record_duration(name, duration, *args)
        return duration

    def sample_duration(
        self,
        name: str,
        callback: Callable[[int], Any],
        sampling_config: SamplingConfig,
        *args: Any,
    ) -> None:
        """Repeatedly time callback(idx) and record each duration."""
        decorations = extract_decorations(args)

        def run(idx: int) -> None:
            started = time.perf_counter_ns()
            callback(idx)
            self._record_duration(name, time.perf_counter_ns() - started, decorations)

        self.sample(run, sampling_config)

    def sample_annotated_duration(
        self,
        name: str,
        callback: Callable[[int], str],
        sampling_config: SamplingConfig,
        *args: Any,
    ) -> None:
        """Repeatedly time callback(idx), recording each duration with the annotation it returns."""
        decorations = extract_decorations(args)

        def run(idx: int) -> None:
            started = time.perf_counter_ns()
            annotation = callback(idx)
            elapsed = time.perf_counter_ns() - started
            self._record_duration(
                name,
                elapsed,
                dataclasses.replace(decorations, annotation=Annotation(annotation)),
            )

        self.sample(run, sampling_config)

    def _record_duration(self, name: str, duration: int, decorations: Decorations) -> None:
        with self._lock:
            idx = index_with_name(self.measurements, name)
            if idx is None:
                self.measurements.append(
                    Measurement(
                        type=MeasurementType.DURATION,
                        experiment_name=self.name,
                        name=name,
                        units="duration",
                        durations=[duration],
                        precision_bundle=decorations.precision_bundle,
                        style=str(decorations.style),
                        annotations=[str(decorations.annotation)],
                    )
                )
                return
            measurement = self.measurements[idx]
            if measurement.type is not MeasurementType.DURATION:
                raise ValueError(
                    f"attempting to record duration with name '{name}'.  "
                    "That name is already in-use for recording values."
                )
            measurement.durations.append(duration)
            measurement.annotations.append(str(decorations.annotation))

    def new_stopwatch(self) -> Stopwatch:
        """Return a running stopwatch that records on this experiment."""
        return Stopwatch(self)

    def record_value(self, name: str, value: float, *args: Any) -> None:
        """Record a value on the value measurement called name."""
        self._record_value(name, float(value), extract_decorations(args))

    def measure_value(self, name: str, callback: Callable[[], float], *args: Any) -> float:
        """Record the value callback returns, and return it."""
        value = callback()
        self.record_value(name, value, *args)
        return value

    def sample_value(
        self,
        name: str,
        callback: Callable[[int], float],
        sampling_config: SamplingConfig,
        *args: Any,
    ) -> None:
        """Repeatedly record the value callback(idx) returns."""
        decorations = extract_decorations(args)

        def run(idx: int) -> None:
            self._record_value(name, float(callback(idx)), decorations)

        self.sample(run, sampling_config)

    def sample_annotated_value(
        self,
        name: str,
        callback: Callable[[int], tuple[float, str]],
        sampling_config: SamplingConfig,
        *args: Any,
    ) -> None:
        """Repeatedly record the (value, annotation) pair callback(idx) returns."""
        decorations = extract_decorations(args)

        def run(idx: int) -> None:
            value, annotation = callback(idx)
            self._record_value(
                name,
                float(value),
                dataclasses.replace(decorations, annotation=Annotation(annotation)),
            )

        self.sample(run, sampling_config)

    def _record_value(self, name: str, value: float, decorations: Decorations) -> None:
        with self._lock:
            idx = index_with_name(self.measurements, name)
            if idx is None:
                self.measurements.append(
                    Measurement(
                        type=MeasurementType.VALUE,
                        experiment_name=self.name,
                        name=name,
                        style=str(decorations.style),
                        units=str(decorations.units),
                        precision_bundle=decorations.precision_bundle,
                        values=[value],
                        annotations=[str(decorations.annotation)],
                    )
                )
                return
            measurement = self.measurements[idx]
            if measurement.type is not MeasurementType.VALUE:
                raise ValueError(
                    f"attempting to record value with name '{name}'.  "
                    "That name is already in-use for recording durations."
                )
            measurement.values.append(value)
            measurement.annotations.append(str(decorations.annotation))

    def sample(self, callback: Callable[[int], Any], sampling_config: SamplingConfig) -> None:
        """Call callback with indices 0, 1, 2, ... until the sampling limits are reached."""
        config = sampling_config
        if config.n == 0 and config.duration == 0:
            raise ValueError(
                "you must specify at least one of SamplingConfig.N and SamplingConfig.Duration"
            )
        if config.min_sampling_interval > 0 and config.num_parallel > 1:
            raise ValueError(
                "you cannot specify both SamplingConfig.MinSamplingInterval "
                "and SamplingConfig.NumParallel"
            )
        num_parallel = max(1, config.num_parallel)
        if num_parallel == 1:
            _sample_loop(callback, config, 1)
            return

        slots = threading.BoundedSemaphore(num_parallel)
        futures: list[Future] = []

        def work(idx: int) -> None:
            try:
                callback(idx)
            finally:
                slots.release()

        with ThreadPoolExecutor(max_workers=num_parallel) as pool:

            def dispatch(idx: int) -> None:
                slots.acquire()
                futures.append(pool.submit(work, idx))

            _sample_loop(dispatch, config, num_parallel)
        for future in futures:
            future.result()

    def get(self, name: str) -> Measurement:
        """Return the measurement called name, or an empty Measurement."""
        with self._lock:
            idx = index_with_name(self.measurements, name)
            if idx is None:
                return Measurement()
            return self.measurements[idx]

    def get_stats(self, name: str) -> Stats:
        """Return the Stats of the measurement called name."""
        measurement = self.get(name)
        with self._lock:
            return measurement.stats()

    def to_json(self) -> dict[str, Any]:
        """Return a JSON-ready dict of the experiment."""
        with self._lock:
            return {
                "Name": self.name,
                "Measurements": [m.to_json() for m in self.measurements],
            }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Experiment:
        """Build an experiment from the dict produced by to_json."""
        return cls(
            name=data.get("Name") or "",
            measurements=[Measurement.from_json(m) for m in data.get("Measurements") or ()],
        )