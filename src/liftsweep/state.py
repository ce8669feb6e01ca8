from __future__ import annotations

from enum import Enum, IntEnum


class Direction(IntEnum):
    """Travel direction; +1 for up, -1 for down."""

    UP = 1
    DOWN = -1

    def reverse(self) -> "Direction":
        return Direction.DOWN if self is Direction.UP else Direction.UP


class ElevatorState(str, Enum):
    STOPPED = "stopped"
    STOPPING = "stopping"
    MOVING_UP = "moving_up"
    MOVING_DOWN = "moving_down"
