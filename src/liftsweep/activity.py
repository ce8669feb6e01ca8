"""Human-readable activity log fed by building events."""

from __future__ import annotations

import contextlib
import logging
from pathlib import Path
from typing import Iterator, Optional, Union

from .building import Building

ACTIVITY_LOGGER = "liftsweep.activity"


class ActivityLog:
    """Writes one line per arrival, boarding, discharge, stop and reversal."""

    def __init__(self, building: Building, logger: Optional[logging.Logger] = None, label: str = "") -> None:
        self.logger = logger or logging.getLogger(ACTIVITY_LOGGER)
        self.prefix = f"[{label}] " if label else ""
        building.on_event("arrival", self._arrival)
        building.on_event("board", self._board)
        building.on_event("discharge", self._discharge)
        building.on_event("stop", self._stop)
        building.on_event("reverse", self._reverse)
        building.on_event("complete", self._complete)

    def _log(self, time: int, message: str, *args: object) -> None:
        self.logger.info("%st=%d " + message, self.prefix, time, *args)

    def _arrival(self, payload: dict) -> None:
        passenger = payload["passenger"]
        self._log(
            payload["time"],
            "passenger %d waiting at floor %d for floor %d",
            passenger.passenger_id,
            passenger.origin,
            passenger.destination,
        )

    def _board(self, payload: dict) -> None:
        passenger = payload["passenger"]
        self._log(
            payload["time"],
            "elevator %d picked up passenger %d at floor %d (waited %d)",
            payload["elevator_id"],
            passenger.passenger_id,
            payload["floor"],
            passenger.wait_time,
        )

    def _discharge(self, payload: dict) -> None:
        passenger = payload["passenger"]
        self._log(
            payload["time"],
            "elevator %d dropped off passenger %d at floor %d (travelled %d)",
            payload["elevator_id"],
            passenger.passenger_id,
            payload["floor"],
            passenger.travel_time,
        )

    def _stop(self, payload: dict) -> None:
        self._log(payload["time"], "elevator %d stopping at floor %d", payload["elevator_id"], payload["floor"])

    def _reverse(self, payload: dict) -> None:
        self._log(
            payload["time"],
            "elevator %d now heading %s at floor %d",
            payload["elevator_id"],
            payload["direction"],
            payload["floor"],
        )

    def _complete(self, payload: dict) -> None:
        report = payload["report"]
        self._log(
            payload["time"],
            "all %d passengers delivered",
            report.delivered_passengers,
        )


@contextlib.contextmanager
def activity_file(path: Union[str, Path]) -> Iterator[logging.Handler]:
    """Send activity lines to ``path`` while the block runs."""
    handler = logging.FileHandler(path, mode="w", encoding="utf-8")
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger = logging.getLogger(ACTIVITY_LOGGER)
    previous_level, previous_propagate = logger.level, logger.propagate
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)
    logger.propagate = False
    try:
        yield handler
    finally:
        logger.removeHandler(handler)
        handler.close()
        logger.setLevel(previous_level)
        logger.propagate = previous_propagate
