from __future__ import annotations

from typing import Iterable, List, Tuple

from .interface import Direction, Request


def direction_towards(current_floor: int, target_floor: int) -> Direction:
    """UP when the target lies above, DOWN otherwise (including the same floor)."""

    return Direction.UP if target_floor > current_floor else Direction.DOWN


def split_requests_by_direction(
    requests: Iterable[Request], current_floor: int
) -> Tuple[List[Request], List[Request]]:
    """Partition requests into those above and below the current floor.

    Requests at the current floor belong to neither side: they are satisfied
    on arrival and must not steer the car.
    """

    above: List[Request] = []
    below: List[Request] = []
    for request in requests:
        if request.floor > current_floor:
            above.append(request)
        elif request.floor < current_floor:
            below.append(request)
    return above, below


def sort_requests_in_direction(requests: Iterable[Request], direction: Direction) -> List[Request]:
    """Sort requests nearest-first for a sweep in the given direction."""

    key = (lambda req: -req.floor) if direction is Direction.DOWN else (lambda req: req.floor)
    return sorted(requests, key=key)
