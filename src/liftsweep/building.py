from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Callable, Deque, Dict, Iterable, List, Optional

from .config import ElevatorConstraints
from .elevator import Elevator
from .errors import ConfigurationError, ConsistencyError, InvalidFloorError, SimulationStalledError
from .floor import Floor
from .metrics import MetricsTracker, SimulationReport
from .passenger import Passenger

logger = logging.getLogger(__name__)


@dataclass
class Building:
    """Floors, elevators and the arrival feed, advanced one tick at a time."""

    num_floors: int
    elevators: List[Elevator] = field(default_factory=list)
    arrivals: Iterable[Passenger] = ()
    elevator_constraints: Optional[ElevatorConstraints] = None
    floors: List[Floor] = field(init=False)
    current_time: int = field(default=0, init=False)
    metrics: MetricsTracker = field(init=False)
    total_passengers: int = field(default=0, init=False)
    event_hooks: Dict[str, List[Callable[[dict], None]]] = field(default_factory=dict, init=False)
    _feed: Deque[Passenger] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not 2 <= self.num_floors <= 100:
            raise ConfigurationError(f"a building needs between 2 and 100 floors, got {self.num_floors}")
        if not self.elevators:
            raise ConfigurationError("a building needs at least one elevator")
        ids = [elevator.elevator_id for elevator in self.elevators]
        if len(set(ids)) != len(ids):
            raise ConfigurationError(f"duplicate elevator ids: {ids}")

        self.floors = [Floor(number) for number in range(1, self.num_floors + 1)]
        self.metrics = MetricsTracker()
        self._apply_constraints()

        passengers = list(self.arrivals)
        for passenger in passengers:
            self._check_in_range(passenger)
        self._feed = deque(passengers)
        self.total_passengers = len(passengers)
        self.arrivals = ()

    @property
    def pending_arrivals(self) -> int:
        return len(self._feed)

    @property
    def delivered_passengers(self) -> int:
        return sum(len(floor.delivered) for floor in self.floors)

    def add_arrival(self, passenger: Passenger) -> None:
        """Queue a passenger that has not arrived yet, keeping the feed in tick order."""
        self._check_in_range(passenger)
        if passenger.arrival_time < self.current_time:
            raise ConfigurationError(
                f"passenger {passenger.passenger_id} arrives at tick {passenger.arrival_time}, "
                f"which is before the current tick {self.current_time}"
            )
        if self._feed and self._feed[-1].arrival_time > passenger.arrival_time:
            self._feed = deque(sorted([*self._feed, passenger], key=lambda p: p.arrival_time))
        else:
            self._feed.append(passenger)
        self.total_passengers += 1

    def on_event(self, event: str, callback: Callable[[dict], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def is_complete(self) -> bool:
        if any(floor.has_waiting() for floor in self.floors):
            return False
        if any(elevator.has_passengers() for elevator in self.elevators):
            return False
        return not self._feed

    def step(self) -> None:
        self._release_arrivals()
        for elevator in self.elevators:
            if elevator.is_active(self.current_time):
                elevator.update(self.current_time, self.num_floors, self.floors, self._on_elevator_event)
        self._emit("tick", {"time": self.current_time})
        self.current_time += 1

    def simulate(self, max_ticks: Optional[int] = None) -> SimulationReport:
        """Step until every passenger is delivered and return the final report.

        Raises ``SimulationStalledError`` if ``max_ticks`` is reached first and
        ``ConsistencyError`` if the delivered count does not match the feed.
        """
        logger.debug(
            "simulating %d floors, %d elevators, %d passengers",
            self.num_floors,
            len(self.elevators),
            self.total_passengers,
        )
        while not self.is_complete():
            if max_ticks is not None and self.current_time >= max_ticks:
                raise SimulationStalledError(max_ticks, self.total_passengers - self.delivered_passengers)
            self.step()

        report = self.report()
        if report.delivered_passengers != report.total_passengers:
            raise ConsistencyError(report.total_passengers, report.delivered_passengers)
        logger.debug("simulation complete at tick %d", self.current_time)
        self._emit("complete", {"time": self.current_time, "report": report})
        return report

    def report(self) -> SimulationReport:
        report = self.metrics.report(self.total_passengers, self.current_time)
        report.delivered_passengers = self.delivered_passengers
        return report

    def snapshot(self) -> dict:
        return {
            "time": self.current_time,
            "floors": [len(floor) for floor in self.floors],
            "delivered": [len(floor.delivered) for floor in self.floors],
            "elevators": [elevator.snapshot() for elevator in self.elevators],
            "pending_arrivals": self.pending_arrivals,
        }

    def _release_arrivals(self) -> None:
        while self._feed and self._feed[0].arrival_time <= self.current_time:
            passenger = self._feed.popleft()
            self.floors[passenger.origin - 1].add_waiting(passenger)
            self._emit("arrival", {"time": self.current_time, "floor": passenger.origin, "passenger": passenger})

    def _on_elevator_event(self, event: str, payload: dict) -> None:
        if event == "discharge":
            self.metrics.record_delivery(payload["passenger"])
        self._emit(event, payload)

    def _emit(self, event: str, payload: dict) -> None:
        for callback in self.event_hooks.get(event, []):
            callback(payload)

    def _check_in_range(self, passenger: Passenger) -> None:
        for floor in (passenger.origin, passenger.destination):
            if floor > self.num_floors:
                raise InvalidFloorError(
                    f"passenger {passenger.passenger_id}: floor {floor} is above the top floor {self.num_floors}"
                )

    def _apply_constraints(self) -> None:
        if self.elevator_constraints is None:
            return
        for elevator in self.elevators:
            elevator.capacity = self.elevator_constraints.capacity
            elevator.speed_ticks_per_floor = self.elevator_constraints.speed_ticks_per_floor
            elevator.stop_duration_ticks = self.elevator_constraints.stop_duration_ticks
