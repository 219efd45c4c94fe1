from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import NamedTuple, Protocol, Tuple

MIN_FLOOR = 1


class InvalidFloor(ValueError):
    """Raised when a floor falls outside the serviceable range."""

    def __init__(self, floor: int, reason: str) -> None:
        super().__init__(f"Invalid floor {floor}: {reason}")
        self.floor = floor
        self.reason = reason


class Direction(str, Enum):
    UP = "UP"
    DOWN = "DOWN"
    IDLE = "IDLE"


class RequestOrigin(str, Enum):
    """Where a request was raised: cabin panel or hall call button."""

    INTERNAL = "INTERNAL"
    EXTERNAL = "EXTERNAL"


@dataclass(frozen=True)
class Request:
    """A single desired stop for one elevator.

    Two requests are the same stop when floor, owning elevator and origin
    match; the requested direction is informational only.
    """

    floor: int
    direction: Direction = field(compare=False)
    elevator_id: int
    origin: RequestOrigin

    def __post_init__(self) -> None:
        if self.floor < MIN_FLOOR:
            raise InvalidFloor(self.floor, f"floor must be >= {MIN_FLOOR}")

    @property
    def is_internal(self) -> bool:
        return self.origin is RequestOrigin.INTERNAL


@dataclass(frozen=True)
class ElevatorSnapshot:
    """Lightweight view of an elevator for scheduling decisions."""

    elevator_id: int
    current_floor: int
    direction: Direction
    pending_requests: Tuple[Request, ...]


class StopDecision(NamedTuple):
    floor: int
    direction: Direction


class SchedulingStrategy(Protocol):
    """Strategy interface for picking an elevator's next stop."""

    def get_next_stop(self, elevator: ElevatorSnapshot) -> StopDecision:
        """
        Return the next floor to visit and the direction to travel in.

        Implementations must not mutate the elevator; the caller applies the
        returned direction. When nothing needs servicing the current floor is
        returned with the direction unchanged.
        """
        ...
