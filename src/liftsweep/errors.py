"""Exceptions raised by the simulation."""

from __future__ import annotations


class LiftSweepError(Exception):
    """Base class for every error raised by liftsweep."""


class InvalidFloorError(LiftSweepError, ValueError):
    """A floor or passenger was constructed with an out-of-range floor."""


class InvalidArrivalError(LiftSweepError, ValueError):
    """A passenger was given an arrival tick before the start of the run."""


class ConfigurationError(LiftSweepError, ValueError):
    """A building or scenario cannot be set up with the given parameters."""


class ArrivalFormatError(LiftSweepError, ValueError):
    def __init__(self, line_number: int, message: str) -> None:
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


class PassengerStateError(LiftSweepError, RuntimeError):
    """A passenger timing outcome was recorded more than once."""


class ConsistencyError(LiftSweepError, RuntimeError):
    """Delivered passengers do not add up to the passengers fed in."""

    def __init__(self, total: int, delivered: int) -> None:
        super().__init__(f"{total} passengers entered the simulation but {delivered} were delivered")
        self.total = total
        self.delivered = delivered


class SimulationStalledError(LiftSweepError, RuntimeError):
    """The tick limit was reached before every passenger was delivered."""

    def __init__(self, max_ticks: int, remaining: int) -> None:
        super().__init__(f"simulation did not complete within {max_ticks} ticks ({remaining} passengers outstanding)")
        self.max_ticks = max_ticks
        self.remaining = remaining
