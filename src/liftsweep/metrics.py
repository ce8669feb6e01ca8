from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from typing import List, Sequence

from .passenger import Passenger


def _json_safe(values: dict) -> dict:
    return {key: None if isinstance(value, float) and math.isnan(value) else value for key, value in values.items()}


def average(values: Sequence[int]) -> float:
    """Mean of ``values``; NaN when there are none."""
    if not values:
        return math.nan
    return sum(values) / len(values)


def percentile(values: Sequence[int], fraction: float) -> float:
    if not values:
        return math.nan
    sorted_vals = sorted(values)
    k = (len(sorted_vals) - 1) * fraction
    f = math.floor(k)
    c = math.ceil(k)
    if f == c:
        return float(sorted_vals[int(k)])
    d0 = sorted_vals[int(f)] * (c - k)
    d1 = sorted_vals[int(c)] * (k - f)
    return float(d0 + d1)


@dataclass
class MetricsSnapshot:
    time_step: int
    average_wait: float
    wait_p95: float
    average_travel: float
    travel_p95: float
    delivered: int

    def to_dict(self) -> dict:
        return _json_safe(asdict(self))


@dataclass
class SimulationReport:
    """Outcome of a finished run."""

    total_passengers: int
    delivered_passengers: int
    final_time: int
    average_wait: float
    average_travel: float
    wait_p95: float
    travel_p95: float
    max_wait: int
    max_travel: int

    @property
    def consistent(self) -> bool:
        return self.total_passengers == self.delivered_passengers

    def to_dict(self) -> dict:
        return _json_safe(asdict(self))


class MetricsTracker:
    """Running wait and travel aggregates over delivered passengers."""

    def __init__(self) -> None:
        self.wait_times: List[int] = []
        self.travel_times: List[int] = []

    @property
    def delivered(self) -> int:
        return len(self.travel_times)

    def record_delivery(self, passenger: Passenger) -> None:
        self.wait_times.append(passenger.wait_time)
        self.travel_times.append(passenger.travel_time)

    def snapshot(self, time_step: int) -> MetricsSnapshot:
        return MetricsSnapshot(
            time_step=time_step,
            average_wait=average(self.wait_times),
            wait_p95=percentile(self.wait_times, 0.95),
            average_travel=average(self.travel_times),
            travel_p95=percentile(self.travel_times, 0.95),
            delivered=self.delivered,
        )

    def report(self, total_passengers: int, final_time: int) -> SimulationReport:
        return SimulationReport(
            total_passengers=total_passengers,
            delivered_passengers=self.delivered,
            final_time=final_time,
            average_wait=average(self.wait_times),
            average_travel=average(self.travel_times),
            wait_p95=percentile(self.wait_times, 0.95),
            travel_p95=percentile(self.travel_times, 0.95),
            max_wait=max(self.wait_times, default=0),
            max_travel=max(self.travel_times, default=0),
        )
