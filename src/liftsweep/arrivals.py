"""Loading passenger arrival records from delimited text."""

from __future__ import annotations

import csv
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, List, Optional, Union

from .errors import ArrivalFormatError, InvalidFloorError
from .passenger import Passenger


@dataclass(frozen=True)
class ArrivalRecord:
    arrival_time: int
    origin: int
    destination: int
    passenger_id: Optional[int] = None


def parse_arrivals(lines: Iterable[str], has_header: bool = True) -> List[ArrivalRecord]:
    """Parse ``arrival_tick,origin_floor,destination_floor`` rows.

    Blank rows are skipped. Each record is numbered from 1 in file order, then
    the records come back sorted by arrival tick; rows with the same tick keep
    their file order.
    """
    records: List[ArrivalRecord] = []
    for line_number, row in enumerate(csv.reader(lines), start=1):
        if has_header and line_number == 1:
            continue
        if not row or all(not cell.strip() for cell in row):
            continue
        if len(row) != 3:
            raise ArrivalFormatError(line_number, f"expected 3 fields, got {len(row)}")
        try:
            arrival_time, origin, destination = (int(cell) for cell in row)
        except ValueError as exc:
            raise ArrivalFormatError(line_number, f"non-integer field in {row!r}") from exc
        if arrival_time < 0:
            raise ArrivalFormatError(line_number, f"negative arrival tick {arrival_time}")
        record = ArrivalRecord(arrival_time, origin, destination, passenger_id=len(records) + 1)
        try:
            make_passenger(record, record.passenger_id)
        except InvalidFloorError as exc:
            raise ArrivalFormatError(line_number, str(exc)) from exc
        records.append(record)
    return sorted(records, key=lambda r: r.arrival_time)


def load_arrivals(path: Union[str, Path]) -> List[ArrivalRecord]:
    with open(path, newline="", encoding="utf-8") as handle:
        return parse_arrivals(handle)


def make_passenger(record: ArrivalRecord, passenger_id: int) -> Passenger:
    return Passenger(
        passenger_id=passenger_id,
        arrival_time=record.arrival_time,
        origin=record.origin,
        destination=record.destination,
    )


def to_passengers(records: Iterable[ArrivalRecord], first_id: int = 1) -> List[Passenger]:
    """Fresh passengers for one run.

    A record that already carries an id keeps it; the others are numbered by
    their position in the feed.
    """
    return [
        make_passenger(record, record.passenger_id if record.passenger_id is not None else position)
        for position, record in enumerate(records, start=first_id)
    ]
