from __future__ import annotations

import logging
from typing import List, Optional, Tuple

from scheduler import Direction, InvalidFloor, Request, RequestOrigin, SchedulingStrategy, get_scheduler
from scheduler.utils import direction_towards

from .config import ControllerConfig
from .elevator import Elevator
from .errors import ElevatorNotFound
from .observer import ElevatorObserver

logger = logging.getLogger(__name__)


class ElevatorController:
    """Owns a fixed fleet, routes requests to it and drives simulation steps.

    Elevators are numbered ``0..elevator_count-1`` and all start at floor 1,
    STOPPED and IDLE. Request methods never raise for an unknown elevator or a
    bad floor: they log a warning and return False.
    """

    def __init__(
        self,
        elevator_count: int,
        scheduler_name: str = "scan",
        scheduler_options: Optional[dict] = None,
        top_floor: Optional[int] = None,
        scheduler: Optional[SchedulingStrategy] = None,
    ) -> None:
        if elevator_count < 0:
            raise ValueError(f"elevator_count must be >= 0, got {elevator_count}")
        self._elevators: List[Elevator] = [Elevator(i) for i in range(elevator_count)]
        self.top_floor = top_floor
        self.scheduler_name = scheduler_name
        self.scheduler_options = dict(scheduler_options or {})
        if scheduler is not None:
            self.scheduler = scheduler
            self.scheduler_name = getattr(scheduler, "name", type(scheduler).__name__)
        else:
            self.scheduler = get_scheduler(scheduler_name, **self.scheduler_options)

    @classmethod
    def from_config(cls, config: ControllerConfig) -> "ElevatorController":
        return cls(
            config.elevator_count,
            scheduler_name=config.scheduler_name,
            scheduler_options=config.scheduler_options,
            top_floor=config.top_floor,
        )

    @property
    def elevators(self) -> Tuple[Elevator, ...]:
        return tuple(self._elevators)

    def set_scheduler(self, name: str, **options) -> None:
        self.scheduler = get_scheduler(name, **options)
        self.scheduler_name = name
        self.scheduler_options = options

    def get_elevator_by_id(self, elevator_id: int) -> Optional[Elevator]:
        for elevator in self._elevators:
            if elevator.elevator_id == elevator_id:
                return elevator
        return None

    def elevator(self, elevator_id: int) -> Elevator:
        elevator = self.get_elevator_by_id(elevator_id)
        if elevator is None:
            raise ElevatorNotFound(elevator_id)
        return elevator

    def subscribe(self, observer: ElevatorObserver, elevator_id: Optional[int] = None) -> bool:
        """Attach an observer to one elevator, or to the whole fleet when no id is given."""

        if elevator_id is None:
            for elevator in self._elevators:
                elevator.subscribe(observer)
            return True
        elevator = self.get_elevator_by_id(elevator_id)
        if elevator is None:
            logger.warning(f"Elevator {elevator_id} not found; observer not attached")
            return False
        elevator.subscribe(observer)
        return True

    def request_elevator(self, elevator_id: int, floor: int, direction: Direction) -> bool:
        """Hall call: someone on ``floor`` wants to travel in ``direction``."""

        try:
            direction = Direction(direction)
            logger.info(f"External request: elevator {elevator_id} to floor {floor} ({direction.value})")
            elevator = self.elevator(elevator_id)
            request = self._build_request(elevator, floor, direction, RequestOrigin.EXTERNAL)
        except (ElevatorNotFound, ValueError) as exc:
            logger.warning(f"Dropping external request: {exc}")
            return False
        return elevator.add_request(request)

    def request_floor(self, elevator_id: int, floor: int) -> bool:
        """Cabin request: a passenger inside ``elevator_id`` pressed ``floor``."""

        logger.info(f"Internal request: elevator {elevator_id} to floor {floor}")
        try:
            elevator = self.elevator(elevator_id)
            direction = direction_towards(elevator.current_floor, floor)
            request = self._build_request(elevator, floor, direction, RequestOrigin.INTERNAL)
        except (ElevatorNotFound, InvalidFloor) as exc:
            logger.warning(f"Dropping internal request: {exc}")
            return False
        return elevator.add_request(request)

    def step(self) -> None:
        """Advance every elevator with pending requests to its next stop."""

        for elevator in self._elevators:
            if not elevator.has_pending_requests() or not elevator.in_service():
                continue
            decision = self.scheduler.get_next_stop(elevator.snapshot())
            elevator.apply_direction(decision.direction)
            if decision.floor != elevator.current_floor:
                elevator.move_to_next_floor(decision.floor)
            elif elevator.has_request_at(elevator.current_floor):
                # Stop requested at the floor the car is standing on.
                elevator.complete_arrival()

    def start_maintenance(self, elevator_id: int) -> bool:
        try:
            elevator = self.elevator(elevator_id)
        except ElevatorNotFound as exc:
            logger.warning(str(exc))
            return False
        if not elevator.start_maintenance():
            return False
        logger.info(f"Elevator {elevator_id} taken out of service")
        return True

    def restore_elevator(self, elevator_id: int) -> bool:
        try:
            elevator = self.elevator(elevator_id)
        except ElevatorNotFound as exc:
            logger.warning(str(exc))
            return False
        if not elevator.restore_service():
            return False
        logger.info(f"Elevator {elevator_id} back in service")
        return True

    def is_idle(self) -> bool:
        return not any(elevator.has_pending_requests() for elevator in self._elevators)

    def snapshot(self) -> dict:
        return {
            "scheduler": self.scheduler_name,
            "elevators": [
                {
                    "id": elevator.elevator_id,
                    "floor": elevator.current_floor,
                    "direction": elevator.direction.value,
                    "state": elevator.state.value,
                    "pending": [
                        {
                            "floor": request.floor,
                            "direction": request.direction.value,
                            "origin": request.origin.value,
                        }
                        for request in elevator.pending_requests
                    ],
                }
                for elevator in self._elevators
            ],
        }

    def _build_request(
        self, elevator: Elevator, floor: int, direction: Direction, origin: RequestOrigin
    ) -> Request:
        if self.top_floor is not None and floor > self.top_floor:
            raise InvalidFloor(floor, f"building tops out at floor {self.top_floor}")
        return Request(floor=floor, direction=direction, elevator_id=elevator.elevator_id, origin=origin)
