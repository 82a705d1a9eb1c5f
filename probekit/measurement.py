"""A named collection of recorded values or durations, with statistics and reports."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Any, Iterable

from probekit.decorations import PrecisionBundle
from probekit.durations import format_duration, round_duration
from probekit.enums import MeasurementType, Stat, StatsType
from probekit.stats import Stats
from probekit.table import AlignType, Divider, Table, cell, row

_STYLE_RESET = "{{/}}"


def _truncating_div(total: int, n: int) -> int:
    quotient = abs(total) // n
    return quotient if total >= 0 else -quotient


@dataclass
class Measurement:
    """All data captured for one measurement of an experiment.

    Notes carry only ``note``; value and duration measurements carry a name,
    their data points (durations in integer nanoseconds) and one annotation
    per data point ("" where none was given).
    """

    type: MeasurementType = MeasurementType.INVALID
    experiment_name: str = ""
    note: str = ""
    name: str = ""
    style: str = ""
    units: str = ""
    precision_bundle: PrecisionBundle = field(default_factory=PrecisionBundle)
    durations: list[int] = field(default_factory=list)
    values: list[float] = field(default_factory=list)
    annotations: list[str] = field(default_factory=list)

    def stats(self) -> Stats:
        """Summarise the measurement; notes and invalid measurements give an empty Stats."""
        if self.type in (MeasurementType.INVALID, MeasurementType.NOTE):
            return Stats()

        out = Stats(
            experiment_name=self.experiment_name,
            measurement_name=self.name,
            style=self.style,
            units=self.units,
            precision_bundle=self.precision_bundle,
        )
        if self.type is MeasurementType.VALUE:
            out.type = StatsType.VALUE
            self._fill_value_stats(out)
        elif self.type is MeasurementType.DURATION:
            out.type = StatsType.DURATION
            self._fill_duration_stats(out)
        return out

    def _fill_value_stats(self, out: Stats) -> None:
        values = self.values
        n = out.n = len(values)
        if n == 0:
            return
        order = sorted(range(n), key=values.__getitem__)
        mean = sum(values) / n
        if n % 2 == 0:
            median = (values[order[n // 2]] + values[order[n // 2 - 1]]) / 2.0
        else:
            median = values[order[(n - 1) // 2]]
        variance = sum((v - mean) * (v - mean) for v in values) / n
        out.value_bundle = {
            Stat.MIN: values[order[0]],
            Stat.MAX: values[order[-1]],
            Stat.MEAN: mean,
            Stat.MEDIAN: median,
            Stat.STD_DEV: math.sqrt(variance),
        }
        out.annotation_bundle = {
            Stat.MIN: self.annotations[order[0]],
            Stat.MAX: self.annotations[order[-1]],
        }

    def _fill_duration_stats(self, out: Stats) -> None:
        durations = self.durations
        n = out.n = len(durations)
        if n == 0:
            return
        order = sorted(range(n), key=durations.__getitem__)
        mean = _truncating_div(sum(durations), n)
        if n % 2 == 0:
            median = _truncating_div(durations[order[n // 2]] + durations[order[n // 2 - 1]], 2)
        else:
            median = durations[order[(n - 1) // 2]]
        squares = 0.0
        for d in durations:
            deviation = float(d - mean)
            squares += deviation * deviation
        out.duration_bundle = {
            Stat.MIN: durations[order[0]],
            Stat.MAX: durations[order[-1]],
            Stat.MEAN: mean,
            Stat.MEDIAN: median,
            Stat.STD_DEV: int(math.sqrt(squares / n)),
        }
        out.annotation_bundle = {
            Stat.MIN: self.annotations[order[0]],
            Stat.MAX: self.annotations[order[-1]],
        }

    def report(self, enable_styling: bool) -> str:
        """Render a summary line and a table of every data point."""
        style = self.style if enable_styling else ""

        if self.type is MeasurementType.NOTE:
            out = f"{self.experiment_name} - Note\n{self.note}\n"
            if style:
                out = style + out + _STYLE_RESET
            return out

        out = ""
        if self.type in (MeasurementType.VALUE, MeasurementType.DURATION):
            out = f"{self.experiment_name} - {self.name}"
            if self.units:
                out += f" [{self.units}]"
            if style:
                out = style + out + _STYLE_RESET
            out += "\n" + str(self.stats()) + "\n"

        table = Table()
        table.table_style.enable_text_styling = enable_styling
        if self.type is MeasurementType.VALUE:
            table.append_row(
                row(
                    cell("Value", AlignType.CENTER),
                    cell("Annotation", AlignType.CENTER),
                    Divider("="),
                    style,
                )
            )
            for value, annotation in zip(self.values, self.annotations):
                table.append_row(
                    row(
                        cell(self.precision_bundle.value_format % value, AlignType.RIGHT),
                        cell(annotation, "{{gray}}", AlignType.LEFT),
                    )
                )
        elif self.type is MeasurementType.DURATION:
            table.append_row(
                row(
                    cell("Duration", AlignType.CENTER),
                    cell("Annotation", AlignType.CENTER),
                    Divider("="),
                    style,
                )
            )
            for duration, annotation in zip(self.durations, self.annotations):
                text = format_duration(round_duration(duration, self.precision_bundle.duration))
                table.append_row(
                    row(
                        cell(text, style, AlignType.RIGHT),
                        cell(annotation, "{{gray}}", AlignType.LEFT),
                    )
                )
        return out + table.render()

    def colorable_string(self) -> str:
        """Return the report with style tags."""
        return self.report(True)

    def __str__(self) -> str:
        return self.report(False)

    def to_json(self) -> dict[str, Any]:
        """Return a JSON-ready dict of this measurement."""
        return {
            "Type": self.type.to_json(),
            "ExperimentName": self.experiment_name,
            "Note": self.note,
            "Name": self.name,
            "Style": self.style,
            "Units": self.units,
            "PrecisionBundle": {
                "Duration": self.precision_bundle.duration,
                "ValueFormat": self.precision_bundle.value_format,
            },
            "Durations": list(self.durations),
            "Values": list(self.values),
            "Annotations": list(self.annotations),
        }

    @classmethod
    def from_json(cls, data: dict[str, Any]) -> Measurement:
        """Build a measurement from the dict produced by to_json; missing keys take zero values."""
        bundle = data.get("PrecisionBundle") or {}
        return cls(
            type=MeasurementType.from_json(data.get("Type")),
            experiment_name=data.get("ExperimentName") or "",
            note=data.get("Note") or "",
            name=data.get("Name") or "",
            style=data.get("Style") or "",
            units=data.get("Units") or "",
            precision_bundle=PrecisionBundle(
                duration=int(bundle.get("Duration") or 0),
                value_format=bundle.get("ValueFormat") or "",
            ),
            durations=[int(d) for d in data.get("Durations") or ()],
            values=[float(v) for v in data.get("Values") or ()],
            annotations=[str(a) for a in data.get("Annotations") or ()],
        )


def index_with_name(measurements: Iterable[Measurement], name: str) -> int | None:
    """Return the position of the first measurement called name, or None."""
    for idx, measurement in enumerate(measurements):
        if measurement.name == name:
            return idx
    return None