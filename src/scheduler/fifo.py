from __future__ import annotations

from .interface import Direction, ElevatorSnapshot, StopDecision


class FifoScheduler:
    """Sends the car to the oldest outstanding request, ignoring the rest.

    The direction is recomputed from the head of the queue on every call
    rather than tracked between steps:

    * an idle car heads toward the head-of-queue floor;
    * a car going UP whose head lies below turns DOWN;
    * otherwise, a head below the car sets UP.

    The last rule means a car already travelling DOWN toward a lower head is
    reported as UP. Movement follows the target floor, so the car still
    arrives; only the reported direction differs.
    """

    name = "fifo"

    def get_next_stop(self, elevator: ElevatorSnapshot) -> StopDecision:
        current_floor = elevator.current_floor
        direction = elevator.direction
        if not elevator.pending_requests:
            return StopDecision(current_floor, direction)

        next_stop = elevator.pending_requests[0].floor
        if next_stop == current_floor:
            return StopDecision(current_floor, direction)

        if direction is Direction.IDLE:
            direction = Direction.UP if current_floor < next_stop else Direction.DOWN
        elif direction is Direction.UP and current_floor > next_stop:
            direction = Direction.DOWN
        elif next_stop < current_floor:
            direction = Direction.UP
        return StopDecision(next_stop, direction)
