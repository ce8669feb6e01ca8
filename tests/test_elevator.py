from typing import List

from liftsweep import Direction, Elevator, ElevatorState, Floor, Passenger


def make_floors(count: int) -> List[Floor]:
    return [Floor(number) for number in range(1, count + 1)]


def boarded(passenger_id: int, origin: int, destination: int, tick: int = 0) -> Passenger:
    passenger = Passenger(passenger_id, 0, origin, destination)
    passenger.record_boarding(tick)
    return passenger


def test_initial_state():
    elevator = Elevator(0)
    assert elevator.state is ElevatorState.STOPPED
    assert elevator.current_floor == 1
    assert elevator.direction is Direction.UP
    assert elevator.capacity == 8
    assert not elevator.has_passengers()


def test_idle_elevator_starts_sweeping_up():
    elevator = Elevator(0, speed_ticks_per_floor=10)
    elevator.update(0, 5, make_floors(5))
    assert elevator.state is ElevatorState.MOVING_UP
    assert elevator.next_action_tick == 10


def test_moving_is_a_no_op_until_next_action_tick():
    elevator = Elevator(0, speed_ticks_per_floor=10)
    floors = make_floors(5)
    elevator.update(0, 5, floors)
    for tick in range(1, 10):
        elevator.update(tick, 5, floors)
        assert elevator.current_floor == 1
    elevator.update(10, 5, floors)
    assert elevator.current_floor == 2
    assert elevator.next_action_tick == 20


def test_stopped_at_top_floor_heads_down():
    elevator = Elevator(0, speed_ticks_per_floor=3, current_floor=5)
    elevator.update(7, 5, make_floors(5))
    assert elevator.direction is Direction.DOWN
    assert elevator.state is ElevatorState.MOVING_DOWN
    assert elevator.next_action_tick == 10


def test_turning_round_while_stopped_is_reported():
    events = []
    elevator = Elevator(0, current_floor=5)
    elevator.update(7, 5, make_floors(5), lambda event, payload: events.append((event, payload["direction"])))
    assert events == [("reverse", "DOWN")]

    events.clear()
    elevator = Elevator(0, current_floor=1, direction=Direction.UP)
    elevator.update(7, 5, make_floors(5), lambda event, payload: events.append((event, payload)))
    assert events == []


def test_reaching_top_floor_without_demand_reverses():
    elevator = Elevator(
        0, speed_ticks_per_floor=2, current_floor=4, state=ElevatorState.MOVING_UP, next_action_tick=6
    )
    elevator.update(6, 5, make_floors(5))
    assert elevator.current_floor == 5
    assert elevator.direction is Direction.DOWN
    assert elevator.state is ElevatorState.MOVING_DOWN
    assert elevator.next_action_tick == 8


def test_reaching_bottom_floor_without_demand_reverses():
    elevator = Elevator(
        0,
        speed_ticks_per_floor=2,
        current_floor=2,
        direction=Direction.DOWN,
        state=ElevatorState.MOVING_DOWN,
        next_action_tick=4,
    )
    elevator.update(4, 5, make_floors(5))
    assert elevator.current_floor == 1
    assert elevator.direction is Direction.UP
    assert elevator.state is ElevatorState.MOVING_UP


def test_passenger_waiting_at_top_floor_is_collected():
    floors = make_floors(5)
    waiting = Passenger(1, 0, 5, 1)
    floors[4].add_waiting(waiting)
    elevator = Elevator(
        0,
        speed_ticks_per_floor=1,
        stop_duration_ticks=1,
        current_floor=4,
        state=ElevatorState.MOVING_UP,
        next_action_tick=10,
    )

    elevator.update(10, 5, floors)
    assert elevator.state is ElevatorState.STOPPING
    assert elevator.next_action_tick == 10
    elevator.update(11, 5, floors)
    assert elevator.state is ElevatorState.STOPPED
    elevator.update(12, 5, floors)

    assert elevator.passengers == [waiting]
    assert waiting.wait_time == 12
    assert elevator.state is ElevatorState.MOVING_DOWN


def test_stop_duration_gates_the_stopped_transition():
    floors = make_floors(5)
    rider = Passenger(1, 0, 2, 4)
    floors[1].add_waiting(rider)
    elevator = Elevator(0, speed_ticks_per_floor=1, stop_duration_ticks=3)

    elevator.update(0, 5, floors)
    elevator.update(1, 5, floors)
    assert elevator.state is ElevatorState.STOPPING
    assert elevator.next_action_tick == 3

    elevator.update(2, 5, floors)
    assert elevator.state is ElevatorState.STOPPING
    elevator.update(3, 5, floors)
    assert elevator.state is ElevatorState.STOPPED
    # Servicing happens on the tick after the elevator has stopped.
    assert len(floors[1]) == 1
    elevator.update(4, 5, floors)
    assert elevator.passengers == [rider]
    assert len(floors[1]) == 0


def test_full_elevator_passes_waiting_passengers():
    floors = make_floors(6)
    floors[2].add_waiting(Passenger(9, 0, 3, 6))
    elevator = Elevator(
        0,
        capacity=2,
        current_floor=2,
        state=ElevatorState.MOVING_UP,
        next_action_tick=5,
        passengers=[boarded(1, 1, 5), boarded(2, 1, 6)],
    )
    elevator.update(5, 6, floors)
    assert elevator.current_floor == 3
    assert elevator.state is ElevatorState.MOVING_UP


def test_full_elevator_still_stops_to_discharge():
    floors = make_floors(6)
    elevator = Elevator(
        0,
        capacity=2,
        current_floor=2,
        state=ElevatorState.MOVING_UP,
        next_action_tick=5,
        passengers=[boarded(1, 1, 3), boarded(2, 1, 6)],
    )
    elevator.update(5, 6, floors)
    assert elevator.state is ElevatorState.STOPPING


def test_elevator_below_capacity_stops_only_for_matching_direction():
    floors = make_floors(6)
    floors[2].add_waiting(Passenger(9, 0, 3, 1))
    elevator = Elevator(0, current_floor=2, state=ElevatorState.MOVING_UP, next_action_tick=5)
    elevator.update(5, 6, floors)
    assert elevator.state is ElevatorState.MOVING_UP


def test_discharge_appends_to_delivered_and_records_travel():
    floors = make_floors(6)
    rider = boarded(1, 1, 4, tick=2)
    staying = boarded(2, 1, 6, tick=2)
    elevator = Elevator(0, current_floor=4, passengers=[rider, staying])

    elevator.update(9, 6, floors)

    assert floors[3].delivered == [rider]
    assert rider.travel_time == 7
    assert elevator.passengers == [staying]


def test_events_are_reported():
    floors = make_floors(3)
    floors[0].add_waiting(Passenger(1, 0, 1, 3))
    events = []
    elevator = Elevator(0, speed_ticks_per_floor=1, stop_duration_ticks=1)

    for tick in range(6):
        elevator.update(tick, 3, floors, lambda event, payload: events.append((event, payload["time"])))

    assert events == [("board", 0), ("reverse", 2), ("stop", 2), ("discharge", 4)]


def test_snapshot():
    elevator = Elevator(3, activation_tick=100, passengers=[boarded(1, 1, 7), boarded(2, 1, 4)])
    snapshot = elevator.snapshot()
    assert snapshot["id"] == 3
    assert snapshot["state"] == "stopped"
    assert snapshot["direction"] == "UP"
    assert snapshot["passenger_count"] == 2
    assert snapshot["destinations"] == [4, 7]
    assert snapshot["active_from"] == 100
