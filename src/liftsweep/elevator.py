from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Sequence

from .floor import Floor
from .passenger import Passenger
from .state import Direction, ElevatorState

Notify = Callable[[str, dict], None]


def _ignore(event: str, payload: dict) -> None:
    pass


@dataclass
class Elevator:
    """A single car that sweeps the building, stopping for riders on the way.

    ``update`` is called once per tick by the building. Floors are lent for
    the duration of the call only; the elevator keeps no reference to them.
    """

    elevator_id: int
    speed_ticks_per_floor: int = 10
    stop_duration_ticks: int = 2
    capacity: int = 8
    activation_tick: int = 0
    current_floor: int = 1
    direction: Direction = Direction.UP
    state: ElevatorState = ElevatorState.STOPPED
    next_action_tick: int = 0
    passengers: List[Passenger] = field(default_factory=list)

    def is_active(self, current_tick: int) -> bool:
        return current_tick >= self.activation_tick

    def has_passengers(self) -> bool:
        return bool(self.passengers)

    def update(
        self,
        current_tick: int,
        floor_count: int,
        floors: Sequence[Floor],
        notify: Optional[Notify] = None,
    ) -> None:
        _STATE_HANDLERS[self.state](self, current_tick, floor_count, floors, notify or _ignore)

    def snapshot(self) -> dict:
        return {
            "id": self.elevator_id,
            "floor": self.current_floor,
            "direction": self.direction.name,
            "state": self.state.value,
            "next_action_tick": self.next_action_tick,
            "passenger_count": len(self.passengers),
            "destinations": sorted({p.destination for p in self.passengers}),
            "active_from": self.activation_tick,
        }

    def _update_stopped(self, tick: int, floor_count: int, floors: Sequence[Floor], notify: Notify) -> None:
        floor = floors[self.current_floor - 1]
        self._discharge(floor, tick, notify)

        if (self.current_floor == 1 and self.direction is Direction.DOWN) or (
            self.current_floor == floor_count and self.direction is Direction.UP
        ):
            self._reverse(tick, notify)

        self._board(floor, tick, notify)
        self.state = ElevatorState.MOVING_UP if self.direction is Direction.UP else ElevatorState.MOVING_DOWN
        self.next_action_tick = tick + self.speed_ticks_per_floor

    def _update_stopping(self, tick: int, floor_count: int, floors: Sequence[Floor], notify: Notify) -> None:
        if tick >= self.next_action_tick:
            self.state = ElevatorState.STOPPED

    def _update_moving_up(self, tick: int, floor_count: int, floors: Sequence[Floor], notify: Notify) -> None:
        self._advance(tick, 1, floor_count, floors, notify)

    def _update_moving_down(self, tick: int, floor_count: int, floors: Sequence[Floor], notify: Notify) -> None:
        self._advance(tick, -1, floor_count, floors, notify)

    def _advance(self, tick: int, step: int, floor_count: int, floors: Sequence[Floor], notify: Notify) -> None:
        if tick < self.next_action_tick:
            return

        self.current_floor += step
        end_of_sweep = self.current_floor == (floor_count if step > 0 else 1)
        if end_of_sweep:
            self._reverse(tick, notify)

        floor = floors[self.current_floor - 1]
        if self._should_stop(floor):
            self.state = ElevatorState.STOPPING
            # STOPPED needs one more tick to run after the STOPPING edge.
            self.next_action_tick = tick + self.stop_duration_ticks - 1
            notify("stop", {"time": tick, "elevator_id": self.elevator_id, "floor": self.current_floor})
            return

        if end_of_sweep:
            self.state = ElevatorState.MOVING_DOWN if step > 0 else ElevatorState.MOVING_UP
        self.next_action_tick = tick + self.speed_ticks_per_floor

    def _should_stop(self, floor: Floor) -> bool:
        if any(p.destination == floor.number for p in self.passengers):
            return True
        if len(self.passengers) >= self.capacity:
            return False
        return floor.waiting_in_direction(self.direction)

    def _reverse(self, tick: int, notify: Notify) -> None:
        self.direction = self.direction.reverse()
        notify(
            "reverse",
            {
                "time": tick,
                "elevator_id": self.elevator_id,
                "floor": self.current_floor,
                "direction": self.direction.name,
            },
        )

    def _board(self, floor: Floor, tick: int, notify: Notify) -> None:
        boarded = floor.board_passengers(self.direction, self.capacity - len(self.passengers))
        for passenger in boarded:
            passenger.record_boarding(tick, self.elevator_id)
            self.passengers.append(passenger)
            notify(
                "board",
                {"time": tick, "elevator_id": self.elevator_id, "floor": floor.number, "passenger": passenger},
            )

    def _discharge(self, floor: Floor, tick: int, notify: Notify) -> None:
        remaining: List[Passenger] = []
        for passenger in self.passengers:
            if passenger.destination != floor.number:
                remaining.append(passenger)
                continue
            passenger.record_discharge(tick)
            floor.deliver(passenger)
            notify(
                "discharge",
                {"time": tick, "elevator_id": self.elevator_id, "floor": floor.number, "passenger": passenger},
            )
        self.passengers = remaining


_STATE_HANDLERS: Dict[ElevatorState, Callable[..., None]] = {
    ElevatorState.STOPPED: Elevator._update_stopped,
    ElevatorState.STOPPING: Elevator._update_stopping,
    ElevatorState.MOVING_UP: Elevator._update_moving_up,
    ElevatorState.MOVING_DOWN: Elevator._update_moving_down,
}
