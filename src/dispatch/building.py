from __future__ import annotations

from dataclasses import dataclass, field

from .config import ControllerConfig
from .controller import ElevatorController


@dataclass
class Building:
    """Names a building and sizes the controller that serves it."""

    name: str
    num_floors: int
    elevator_count: int
    scheduler_name: str = "scan"
    scheduler_options: dict = field(default_factory=dict)
    controller: ElevatorController = field(init=False)

    def __post_init__(self) -> None:
        config = ControllerConfig(
            elevator_count=self.elevator_count,
            top_floor=self.num_floors,
            scheduler_name=self.scheduler_name,
            scheduler_options=self.scheduler_options,
        )
        self.controller = ElevatorController.from_config(config)

    @property
    def scheduler(self) -> str:
        return self.controller.scheduler_name

    def set_scheduler(self, name: str, **options) -> None:
        self.controller.set_scheduler(name, **options)
        self.scheduler_name = name
        self.scheduler_options = options

    def snapshot(self) -> dict:
        state = self.controller.snapshot()
        state["name"] = self.name
        state["num_floors"] = self.num_floors
        return state
