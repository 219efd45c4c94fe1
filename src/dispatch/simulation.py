from __future__ import annotations

import logging
from typing import Callable, Dict, List, Optional

from scheduler import Direction

from .building import Building
from .controller import ElevatorController
from .elevator import Elevator
from .observer import ElevatorEvent, EventRecorder

logger = logging.getLogger(__name__)


class Simulation:
    """Step-driven driver around a building's controller.

    Every elevator transition is recorded in ``events`` and forwarded to
    hooks registered with ``on_event`` under ``"state"`` or ``"floor"``.
    ``"step"``, ``"maintenance"`` and ``"restore"`` hooks receive a dict
    payload.
    """

    def __init__(self, building: Building) -> None:
        self.building = building
        self.current_step: int = 0
        self.event_hooks: Dict[str, List[Callable[[object], None]]] = {}
        self._recorder = EventRecorder(self._forward)
        building.controller.subscribe(self._recorder)

    @property
    def controller(self) -> ElevatorController:
        return self.building.controller

    @property
    def events(self) -> List[ElevatorEvent]:
        return self._recorder.events

    def on_event(self, event: str, callback: Callable[[object], None]) -> None:
        self.event_hooks.setdefault(event, []).append(callback)

    def request_elevator(self, elevator_id: int, floor: int, direction: Direction) -> bool:
        return self.controller.request_elevator(elevator_id, floor, direction)

    def request_floor(self, elevator_id: int, floor: int) -> bool:
        return self.controller.request_floor(elevator_id, floor)

    def step(self) -> None:
        self.controller.step()
        self.current_step += 1
        self._emit("step", {"step": self.current_step, "building": self.building.snapshot()})

    def run(self, steps: int) -> None:
        for _ in range(steps):
            self.step()

    def run_until_idle(self, max_steps: int = 100) -> int:
        """Step until no elevator has pending requests; returns the steps taken."""

        taken = 0
        while not self.is_idle() and taken < max_steps:
            self.step()
            taken += 1
        if not self.is_idle():
            logger.warning(f"Simulation still busy after {max_steps} steps")
        return taken

    def is_idle(self) -> bool:
        return self.controller.is_idle()

    def start_maintenance(self, elevator_id: int) -> bool:
        if not self.controller.start_maintenance(elevator_id):
            return False
        self._emit("maintenance", {"elevator_id": elevator_id, "step": self.current_step})
        return True

    def restore_elevator(self, elevator_id: int) -> bool:
        if not self.controller.restore_elevator(elevator_id):
            return False
        self._emit("restore", {"elevator_id": elevator_id, "step": self.current_step})
        return True

    def elevator(self, elevator_id: int) -> Optional[Elevator]:
        return self.controller.get_elevator_by_id(elevator_id)

    def _forward(self, event: ElevatorEvent) -> None:
        self._emit(event.kind, event)

    def _emit(self, event: str, payload: object) -> None:
        for callback in list(self.event_hooks.get(event, [])):
            try:
                callback(payload)
            except Exception:
                logger.exception(f"Hook {callback!r} failed on {event} event at step {self.current_step}")
