"""
Summary statistics over blood pressure readings.
"""
import math
from dataclasses import dataclass
from typing import Iterable, Optional

METRICS = ('systolic', 'diastolic', 'heart_rate')


def round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


@dataclass(frozen=True)
class MetricSummary:
    average: float
    minimum: int
    maximum: int

    @property
    def rounded_average(self) -> int:
        return round_half_up(self.average)


@dataclass(frozen=True)
class StatisticsSummary:
    count: int
    systolic: MetricSummary
    diastolic: MetricSummary
    heart_rate: MetricSummary

    def to_dict(self):
        data = {'total': self.count}
        for name in METRICS:
            metric = getattr(self, name)
            data[f'avg_{name}'] = metric.average
            data[f'min_{name}'] = metric.minimum
            data[f'max_{name}'] = metric.maximum
        return data


def summarize(readings: Iterable) -> Optional[StatisticsSummary]:
    """Compute count, average, min and max for each metric in one pass.

    Returns None when there are no readings, so callers can show a
    "no data" message instead of a table of zeros.
    """
    count = 0
    totals = dict.fromkeys(METRICS, 0)
    lows = {}
    highs = {}

    for reading in readings:
        count += 1
        for name in METRICS:
            value = getattr(reading, name)
            totals[name] += value
            lows[name] = value if name not in lows else min(lows[name], value)
            highs[name] = value if name not in highs else max(highs[name], value)

    if count == 0:
        return None

    metrics = {
        name: MetricSummary(average=totals[name] / count, minimum=lows[name], maximum=highs[name])
        for name in METRICS
    }
    return StatisticsSummary(count=count, **metrics)
