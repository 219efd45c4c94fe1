from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Callable, List, Optional, Protocol

from scheduler import Direction

from .elevator import ElevatorState

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .elevator import Elevator

logger = logging.getLogger(__name__)


class ElevatorObserver(Protocol):
    """Passive listener for elevator transitions; never influences scheduling."""

    def on_state_change(self, elevator: "Elevator", new_state: ElevatorState) -> None:
        ...

    def on_floor_change(self, elevator: "Elevator", new_floor: int) -> None:
        ...


@dataclass(frozen=True)
class ElevatorEvent:
    kind: str  # "state" or "floor"
    elevator_id: int
    floor: int
    state: str
    direction: Direction


class EventRecorder:
    """Turns observer callbacks into ElevatorEvent records.

    Every event is appended to ``events`` and, when given, passed to
    ``callback`` as well.
    """

    def __init__(self, callback: Optional[Callable[[ElevatorEvent], None]] = None) -> None:
        self.events: List[ElevatorEvent] = []
        self._callback = callback

    def on_state_change(self, elevator: "Elevator", new_state: ElevatorState) -> None:
        self._record("state", elevator, elevator.current_floor, new_state.value)

    def on_floor_change(self, elevator: "Elevator", new_floor: int) -> None:
        self._record("floor", elevator, new_floor, elevator.state.value)

    def floors_visited(self, elevator_id: int) -> List[int]:
        return [e.floor for e in self.events if e.kind == "floor" and e.elevator_id == elevator_id]

    def _record(self, kind: str, elevator: "Elevator", floor: int, state: str) -> None:
        event = ElevatorEvent(
            kind=kind,
            elevator_id=elevator.elevator_id,
            floor=floor,
            state=state,
            direction=elevator.direction,
        )
        self.events.append(event)
        if self._callback is not None:
            self._callback(event)


class LoggingDisplay:
    """Status display that writes elevator activity to the log."""

    def __init__(self, display_id: str = "DISPLAY", enabled: bool = True) -> None:
        if not display_id or not display_id.strip():
            raise ValueError("Display ID cannot be empty")
        self.display_id = display_id
        self.enabled = enabled

    def set_enabled(self, enabled: bool) -> None:
        self.enabled = enabled
        logger.info(f"[{self.display_id}] Display {'ENABLED' if enabled else 'DISABLED'}")

    def on_state_change(self, elevator: "Elevator", new_state: ElevatorState) -> None:
        if not self.enabled:
            return
        logger.info(
            f"[{self.display_id}] Elevator {elevator.elevator_id} state: {new_state.value} "
            f"at floor {elevator.current_floor} ({elevator.direction.value})"
        )
        if new_state is ElevatorState.MAINTENANCE:
            logger.warning(f"[{self.display_id}] Elevator {elevator.elevator_id} entered MAINTENANCE mode")

    def on_floor_change(self, elevator: "Elevator", new_floor: int) -> None:
        if not self.enabled:
            return
        logger.info(f"[{self.display_id}] Elevator {elevator.elevator_id} floor update: {new_floor}")
        if any(request.floor == new_floor for request in elevator.pending_requests):
            logger.info(
                f"[{self.display_id}] Elevator {elevator.elevator_id} arrived at destination floor {new_floor}"
            )
