"""Failure types raised by the dispatch core.

None of these are fatal to a simulation: controller entry points catch them,
log a warning and report the request as not accepted.
"""
from __future__ import annotations

from scheduler.interface import InvalidFloor

__all__ = ["DispatchError", "ElevatorNotFound", "InvalidFloor"]


class DispatchError(Exception):
    """Base class for dispatch failures."""


class ElevatorNotFound(DispatchError, LookupError):
    def __init__(self, elevator_id: int) -> None:
        super().__init__(f"Elevator {elevator_id} not found")
        self.elevator_id = elevator_id

