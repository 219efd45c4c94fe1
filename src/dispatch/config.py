from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional


@dataclass
class ControllerConfig:
    """Fleet size, floor bounds and scheduler selection for a controller."""

    elevator_count: int = 1
    top_floor: Optional[int] = None
    scheduler_name: str = "scan"
    scheduler_options: dict = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.elevator_count < 0:
            raise ValueError(f"elevator_count must be >= 0, got {self.elevator_count}")
        if self.top_floor is not None and self.top_floor < 1:
            raise ValueError(f"top_floor must be >= 1, got {self.top_floor}")
