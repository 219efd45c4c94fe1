from typing import Iterable

import pytest

from dispatch import ElevatorController, EventRecorder
from scheduler import Direction, ElevatorSnapshot, Request, RequestOrigin


def build_snapshot(current_floor: int, direction: Direction, floors: Iterable[int]) -> ElevatorSnapshot:
    requests = tuple(
        Request(floor=floor, direction=Direction.UP, elevator_id=0, origin=RequestOrigin.EXTERNAL)
        for floor in floors
    )
    return ElevatorSnapshot(
        elevator_id=0,
        current_floor=current_floor,
        direction=direction,
        pending_requests=requests,
    )


@pytest.fixture
def make_snapshot():
    return build_snapshot


@pytest.fixture
def controller():
    return ElevatorController(2)


@pytest.fixture
def recorder(controller):
    recorder = EventRecorder()
    controller.subscribe(recorder)
    return recorder
