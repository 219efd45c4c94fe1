from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, List, Tuple

from scheduler import MIN_FLOOR, Direction, ElevatorSnapshot, InvalidFloor, Request
from scheduler.utils import direction_towards

if TYPE_CHECKING:  # pragma: no cover - import cycle safe typing
    from .observer import ElevatorObserver

logger = logging.getLogger(__name__)


class ElevatorState(str, Enum):
    STOPPED = "STOPPED"
    RUNNING = "RUNNING"
    MAINTENANCE = "MAINTENANCE"


@dataclass
class Elevator:
    """A single car with a FIFO stop queue and observer fan-out.

    State only changes through ``add_request``, ``move_to_next_floor`` and
    ``complete_arrival`` (plus the maintenance toggles). Observers are told
    about every state transition and every floor passed.
    """

    elevator_id: int
    current_floor: int = 1
    direction: Direction = Direction.IDLE
    state: ElevatorState = ElevatorState.STOPPED
    _requests: List[Request] = field(default_factory=list, init=False, repr=False)
    _observers: List["ElevatorObserver"] = field(default_factory=list, init=False, repr=False)

    def __post_init__(self) -> None:
        if self.current_floor < MIN_FLOOR:
            raise InvalidFloor(
                self.current_floor, f"elevator {self.elevator_id} cannot start below floor {MIN_FLOOR}"
            )

    @property
    def pending_requests(self) -> Tuple[Request, ...]:
        return tuple(self._requests)

    def has_pending_requests(self) -> bool:
        return bool(self._requests)

    def has_request_at(self, floor: int) -> bool:
        return any(request.floor == floor for request in self._requests)

    def in_service(self) -> bool:
        return self.state is not ElevatorState.MAINTENANCE

    def subscribe(self, observer: "ElevatorObserver") -> None:
        if observer not in self._observers:
            self._observers.append(observer)

    def unsubscribe(self, observer: "ElevatorObserver") -> None:
        if observer in self._observers:
            self._observers.remove(observer)

    def snapshot(self) -> ElevatorSnapshot:
        return ElevatorSnapshot(
            elevator_id=self.elevator_id,
            current_floor=self.current_floor,
            direction=self.direction,
            pending_requests=tuple(self._requests),
        )

    def add_request(self, request: Request) -> bool:
        """Queue a stop. Returns False when it was dropped."""

        if not self.in_service():
            logger.warning(f"Elevator {self.elevator_id} is in maintenance; dropping request for floor {request.floor}")
            return False
        if request in self._requests:
            logger.debug(f"Elevator {self.elevator_id} already has a stop at floor {request.floor}")
            return False

        self._requests.append(request)
        if self.state is ElevatorState.STOPPED and len(self._requests) == 1:
            self.direction = direction_towards(self.current_floor, request.floor)
            self._set_state(ElevatorState.RUNNING)
        return True

    def apply_direction(self, direction: Direction) -> None:
        """Adopt the travel direction chosen by the scheduler."""

        if direction is Direction.IDLE and self._requests:
            return
        self.direction = direction

    def move_to_next_floor(self, target_floor: int) -> bool:
        """Travel floor by floor to ``target_floor`` and complete the arrival.

        A car that is not RUNNING, or a target below the ground floor, leaves the
        car where it is and False is returned.
        """

        if self.state is not ElevatorState.RUNNING:
            logger.warning(f"Elevator {self.elevator_id} is not running (state: {self.state.value})")
            return False
        if target_floor < MIN_FLOOR:
            logger.warning(
                f"Elevator {self.elevator_id} cannot move to floor {target_floor}; lowest floor is {MIN_FLOOR}"
            )
            return False

        heading = direction_towards(self.current_floor, target_floor)
        if target_floor != self.current_floor and heading is not self.direction:
            logger.debug(
                f"Elevator {self.elevator_id} heading {self.direction.value} but floor {target_floor} "
                f"is {heading.value}; realigning"
            )
            self.direction = heading

        logger.info(
            f"Elevator {self.elevator_id} moving from floor {self.current_floor} "
            f"to floor {target_floor} (direction: {self.direction.value})"
        )
        step = 1 if self.direction is Direction.UP else -1
        while self.current_floor != target_floor:
            self.current_floor += step
            logger.debug(f"Elevator {self.elevator_id} now at floor {self.current_floor}")
            self._notify_floor_change()

        self.complete_arrival()
        return True

    def complete_arrival(self) -> None:
        """Stop, clear every request for this floor and decide whether to keep going."""

        if self.state is ElevatorState.MAINTENANCE:
            logger.warning(
                f"Elevator {self.elevator_id} is in maintenance; ignoring arrival at floor {self.current_floor}"
            )
            return
        self._set_state(ElevatorState.STOPPED)
        self._requests = [r for r in self._requests if r.floor != self.current_floor]
        if self._requests:
            self._set_state(ElevatorState.RUNNING)
        else:
            self.direction = Direction.IDLE

    def start_maintenance(self) -> bool:
        if self.state is not ElevatorState.STOPPED:
            logger.warning(
                f"Elevator {self.elevator_id} cannot enter maintenance while {self.state.value}"
            )
            return False
        self._set_state(ElevatorState.MAINTENANCE)
        return True

    def restore_service(self) -> bool:
        if self.state is not ElevatorState.MAINTENANCE:
            return False
        self.direction = Direction.IDLE
        self._set_state(ElevatorState.STOPPED)
        return True

    def _set_state(self, state: ElevatorState) -> None:
        self.state = state
        for observer in list(self._observers):
            try:
                observer.on_state_change(self, state)
            except Exception:
                logger.exception(f"Observer {observer!r} failed on state change of elevator {self.elevator_id}")

    def _notify_floor_change(self) -> None:
        for observer in list(self._observers):
            try:
                observer.on_floor_change(self, self.current_floor)
            except Exception:
                logger.exception(f"Observer {observer!r} failed on floor change of elevator {self.elevator_id}")
