from __future__ import annotations

from typing import List, Sequence

from liftsweep import Building, Elevator, Passenger


def make_building(
    num_floors: int,
    trips: Sequence[tuple],
    elevator_count: int = 1,
    speed: int = 1,
    stop_duration: int = 1,
    activation_offsets: Sequence[int] = (),
) -> Building:
    """Build from ``(arrival, origin, destination)`` trips, numbering passengers from 1."""
    passengers: List[Passenger] = [
        Passenger(passenger_id=i, arrival_time=arrival, origin=origin, destination=destination)
        for i, (arrival, origin, destination) in enumerate(trips, start=1)
    ]
    elevators = [
        Elevator(
            i,
            speed_ticks_per_floor=speed,
            stop_duration_ticks=stop_duration,
            activation_tick=activation_offsets[i] if i < len(activation_offsets) else 0,
        )
        for i in range(elevator_count)
    ]
    return Building(num_floors=num_floors, elevators=elevators, arrivals=passengers)
