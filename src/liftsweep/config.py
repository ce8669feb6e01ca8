from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from pydantic import BaseModel, Field, model_validator


@dataclass
class ElevatorConstraints:
    """Physical constraints shared by every elevator in a building."""

    capacity: int = 8
    speed_ticks_per_floor: int = 10
    stop_duration_ticks: int = 2

    def __post_init__(self) -> None:
        if self.capacity < 1:
            raise ValueError("capacity must be at least 1")
        if self.speed_ticks_per_floor < 1:
            raise ValueError("speed must be at least one tick per floor")
        if self.stop_duration_ticks < 1:
            raise ValueError("stop duration must be at least one tick")


class ScenarioConfig(BaseModel):
    """A building configuration as supplied by a JSON file or an API request."""

    name: str = "building"
    num_floors: int = Field(100, ge=2, le=100)
    elevator_count: int = Field(4, ge=1)
    speed: int = Field(10, ge=1)
    stop_duration: int = Field(2, ge=1)
    capacity: int = Field(8, ge=1)
    activation_offsets: List[int] = Field(default_factory=list)
    max_ticks: Optional[int] = Field(None, ge=1)

    @model_validator(mode="after")
    def _check_offsets(self) -> "ScenarioConfig":
        if len(self.activation_offsets) > self.elevator_count:
            raise ValueError(
                f"{len(self.activation_offsets)} activation offsets given for {self.elevator_count} elevators"
            )
        if any(offset < 0 for offset in self.activation_offsets):
            raise ValueError("activation offsets must be non-negative")
        return self

    def constraints(self) -> ElevatorConstraints:
        return ElevatorConstraints(
            capacity=self.capacity,
            speed_ticks_per_floor=self.speed,
            stop_duration_ticks=self.stop_duration,
        )

    def offset_for(self, index: int) -> int:
        if index < len(self.activation_offsets):
            return self.activation_offsets[index]
        return 0
