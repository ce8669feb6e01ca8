"""Tick-based elevator dispatch simulation."""

from .arrivals import ArrivalRecord, load_arrivals, parse_arrivals, to_passengers
from .building import Building
from .config import ElevatorConstraints, ScenarioConfig
from .elevator import Elevator
from .errors import (
    ArrivalFormatError,
    ConfigurationError,
    ConsistencyError,
    InvalidArrivalError,
    InvalidFloorError,
    LiftSweepError,
    PassengerStateError,
    SimulationStalledError,
)
from .floor import Floor
from .metrics import MetricsSnapshot, MetricsTracker, SimulationReport
from .passenger import Passenger
from .state import Direction, ElevatorState

__all__ = [
    "ArrivalFormatError",
    "ArrivalRecord",
    "Building",
    "ConfigurationError",
    "ConsistencyError",
    "Direction",
    "Elevator",
    "ElevatorConstraints",
    "ElevatorState",
    "Floor",
    "InvalidArrivalError",
    "InvalidFloorError",
    "LiftSweepError",
    "MetricsSnapshot",
    "MetricsTracker",
    "Passenger",
    "PassengerStateError",
    "ScenarioConfig",
    "SimulationReport",
    "SimulationStalledError",
    "load_arrivals",
    "parse_arrivals",
    "to_passengers",
]
