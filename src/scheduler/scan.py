from __future__ import annotations

from .interface import Direction, ElevatorSnapshot, StopDecision
from .utils import sort_requests_in_direction, split_requests_by_direction


class ScanScheduler:
    """Implements the LOOK variant of the elevator SCAN algorithm.

    The car keeps its direction while any request lies ahead, stopping at the
    nearest one first. Once nothing is left ahead it reverses and takes the
    nearest request on the other side.
    """

    name = "scan"

    def get_next_stop(self, elevator: ElevatorSnapshot) -> StopDecision:
        current_floor = elevator.current_floor
        direction = elevator.direction
        if not elevator.pending_requests:
            return StopDecision(current_floor, direction)

        above, below = split_requests_by_direction(elevator.pending_requests, current_floor)
        above = sort_requests_in_direction(above, Direction.UP)
        below = sort_requests_in_direction(below, Direction.DOWN)

        if direction is Direction.UP and above:
            return StopDecision(above[0].floor, Direction.UP)
        if direction is Direction.DOWN and below:
            return StopDecision(below[0].floor, Direction.DOWN)

        # Nothing ahead (or the car was idle): turn toward whatever is left.
        if above:
            return StopDecision(above[0].floor, Direction.UP)
        if below:
            return StopDecision(below[0].floor, Direction.DOWN)
        return StopDecision(current_floor, direction)
