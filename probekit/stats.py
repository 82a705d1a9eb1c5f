"""Summary statistics for a measurement."""

from __future__ import annotations

from dataclasses import dataclass, field

from probekit.decorations import PrecisionBundle
from probekit.durations import format_duration, round_duration
from probekit.enums import Stat, StatsType
from probekit.table import Cell, cell

_CELL_STATS = (Stat.MIN, Stat.MEDIAN, Stat.MEAN, Stat.STD_DEV, Stat.MAX)


@dataclass
class Stats:
    """Key statistics of a value or duration measurement.

    Durations are integer nanoseconds.
    """

    type: StatsType = StatsType.INVALID
    experiment_name: str = ""
    measurement_name: str = ""
    units: str = ""
    style: str = ""
    precision_bundle: PrecisionBundle = field(default_factory=PrecisionBundle)
    n: int = 0
    value_bundle: dict[Stat, float] = field(default_factory=dict)
    duration_bundle: dict[Stat, int] = field(default_factory=dict)
    annotation_bundle: dict[Stat, str] = field(default_factory=dict)

    def __str__(self) -> str:
        return (
            f"{self.string_for(Stat.MIN)} < [{self.string_for(Stat.MEDIAN)}] | "
            f"<{self.string_for(Stat.MEAN)}> ±{self.string_for(Stat.STD_DEV)} < "
            f"{self.string_for(Stat.MAX)}"
        )

    def value_for(self, stat: Stat) -> float:
        """Return the value recorded for stat, or 0.0."""
        return self.value_bundle.get(stat, 0.0)

    def duration_for(self, stat: Stat) -> int:
        """Return the duration in nanoseconds recorded for stat, or 0."""
        return self.duration_bundle.get(stat, 0)

    def float_for(self, stat: Stat) -> float:
        """Return stat as a float, whether these stats hold values or durations."""
        if self.type is StatsType.VALUE:
            return self.value_for(stat)
        if self.type is StatsType.DURATION:
            return float(self.duration_for(stat))
        return 0.0

    def string_for(self, stat: Stat) -> str:
        """Return stat formatted with the configured precision."""
        if self.type is StatsType.VALUE:
            return self.precision_bundle.value_format % self.value_for(stat)
        if self.type is StatsType.DURATION:
            rounded = round_duration(self.duration_for(stat), self.precision_bundle.duration)
            return format_duration(rounded)
        return ""

    def cells(self) -> list[Cell]:
        """Return table cells for N, min, median, mean, standard deviation and max."""
        out = [cell(str(self.n))]
        for stat in _CELL_STATS:
            content = self.string_for(stat)
            annotation = self.annotation_bundle.get(stat, "")
            if annotation:
                content += "\n" + annotation
            out.append(cell(content))
        return out