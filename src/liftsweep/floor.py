from __future__ import annotations

from collections import deque
from dataclasses import dataclass, field
from typing import Deque, List

from .errors import InvalidFloorError
from .passenger import Passenger
from .state import Direction


@dataclass
class Floor:
    """Holding area for passengers waiting at, or delivered to, one floor."""

    number: int
    waiting: Deque[Passenger] = field(default_factory=deque)
    delivered: List[Passenger] = field(default_factory=list)

    def __post_init__(self) -> None:
        if not 0 <= self.number <= 100:
            raise InvalidFloorError(f"floor number {self.number} outside [0, 100]")

    def add_waiting(self, passenger: Passenger) -> None:
        self.waiting.append(passenger)

    def has_waiting(self) -> bool:
        return bool(self.waiting)

    def waiting_in_direction(self, direction: Direction) -> bool:
        return any(p.direction == direction for p in self.waiting)

    def board_passengers(self, direction: Direction, free_space: int) -> List[Passenger]:
        """Remove and return, in queue order, up to ``free_space`` passengers heading ``direction``.

        Passengers heading the other way keep their place in the queue.
        """
        boarded: List[Passenger] = []
        if free_space <= 0:
            return boarded
        remaining: Deque[Passenger] = deque()
        while self.waiting:
            passenger = self.waiting.popleft()
            if passenger.direction == direction and len(boarded) < free_space:
                boarded.append(passenger)
            else:
                remaining.append(passenger)
        self.waiting = remaining
        return boarded

    def deliver(self, passenger: Passenger) -> None:
        self.delivered.append(passenger)

    def __len__(self) -> int:
        return len(self.waiting)
