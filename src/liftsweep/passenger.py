from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .errors import InvalidArrivalError, InvalidFloorError, PassengerStateError
from .state import Direction

MIN_FLOOR = 1
MAX_FLOOR = 100


@dataclass
class Passenger:
    """A single trip request and the timing outcomes of serving it."""

    passenger_id: int
    arrival_time: int
    origin: int
    destination: int
    direction: Direction = field(init=False)
    wait_time: int = field(default=0, init=False)
    travel_time: int = field(default=0, init=False)
    board_time: Optional[int] = field(default=None, init=False)
    discharge_time: Optional[int] = field(default=None, init=False)
    elevator_id: Optional[int] = field(default=None, init=False)

    def __post_init__(self) -> None:
        for floor in (self.origin, self.destination):
            if not MIN_FLOOR <= floor <= MAX_FLOOR:
                raise InvalidFloorError(
                    f"passenger {self.passenger_id}: floor {floor} outside [{MIN_FLOOR}, {MAX_FLOOR}]"
                )
        if self.origin == self.destination:
            raise InvalidFloorError(
                f"passenger {self.passenger_id}: origin and destination are both floor {self.origin}"
            )
        if self.arrival_time < 0:
            raise InvalidArrivalError(f"passenger {self.passenger_id}: negative arrival time {self.arrival_time}")
        self.direction = Direction.UP if self.origin < self.destination else Direction.DOWN

    @property
    def boarded(self) -> bool:
        return self.board_time is not None

    @property
    def delivered(self) -> bool:
        return self.discharge_time is not None

    def record_boarding(self, time_step: int, elevator_id: Optional[int] = None) -> None:
        if self.boarded:
            raise PassengerStateError(f"passenger {self.passenger_id} boarded twice")
        self.board_time = time_step
        self.elevator_id = elevator_id
        self.wait_time = time_step - self.arrival_time

    def record_discharge(self, time_step: int) -> None:
        if not self.boarded or self.delivered:
            raise PassengerStateError(f"passenger {self.passenger_id} discharged without a matching boarding")
        self.discharge_time = time_step
        self.travel_time = time_step - (self.arrival_time + self.wait_time)

