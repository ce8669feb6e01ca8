from __future__ import annotations

import json
from pathlib import Path
from typing import Dict, List, Optional, Sequence, Union

from .activity import ActivityLog
from .arrivals import ArrivalRecord, to_passengers
from .building import Building
from .config import ScenarioConfig
from .elevator import Elevator

# Elevators come online in stages, as in the reference two-building comparison.
DEFAULT_ACTIVATION_OFFSETS = [0, 100, 500, 700]


def default_scenarios(speeds: Sequence[int] = (10, 5)) -> List[ScenarioConfig]:
    return [
        ScenarioConfig(
            name=f"Building {index}: {speed} ticks for an elevator to move between floors",
            num_floors=100,
            elevator_count=4,
            speed=speed,
            stop_duration=2,
            activation_offsets=DEFAULT_ACTIVATION_OFFSETS,
        )
        for index, speed in enumerate(speeds, start=1)
    ]


def load_scenarios(path: Union[str, Path]) -> List[ScenarioConfig]:
    """Read one scenario object, a list of them, or ``{"scenarios": [...]}``."""
    data = json.loads(Path(path).read_text())
    if isinstance(data, dict) and "scenarios" in data:
        data = data["scenarios"]
    if isinstance(data, dict):
        data = [data]
    return [ScenarioConfig.model_validate(item) for item in data]


def build_building(config: ScenarioConfig, arrivals: Sequence[ArrivalRecord] = ()) -> Building:
    elevators = [Elevator(i, activation_tick=config.offset_for(i)) for i in range(config.elevator_count)]
    return Building(
        num_floors=config.num_floors,
        elevators=elevators,
        arrivals=to_passengers(arrivals),
        elevator_constraints=config.constraints(),
    )


def run_scenario(
    config: ScenarioConfig,
    arrivals: Sequence[ArrivalRecord],
    activity: bool = False,
    max_ticks: Optional[int] = None,
) -> Dict:
    building = build_building(config, arrivals)
    if activity:
        ActivityLog(building, label=config.name)
    report = building.simulate(max_ticks=max_ticks if max_ticks is not None else config.max_ticks)
    return {
        "scenario": config.name,
        "config": config.model_dump(),
        "report": report.to_dict(),
    }


def format_report(result: Dict) -> str:
    report = result["report"]
    lines = [result["scenario"]]
    for label, key in (("Average wait time", "average_wait"), ("Average travel time", "average_travel")):
        value = report[key]
        lines.append(f"{label}: {'n/a' if value is None else f'{value:.2f}'}")
    lines.append(f"Total passengers: {report['total_passengers']}")
    lines.append(f"Delivered passengers: {report['delivered_passengers']}")
    lines.append(f"Finished at tick: {report['final_time']}")
    return "\n".join(lines)
