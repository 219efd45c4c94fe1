"""Elevator dispatch core: fleet, controller and step-driven simulation."""

from .building import Building
from .config import ControllerConfig
from .controller import ElevatorController
from .elevator import Elevator, ElevatorState
from .errors import DispatchError, ElevatorNotFound, InvalidFloor
from .observer import ElevatorEvent, ElevatorObserver, EventRecorder, LoggingDisplay
from .simulation import Simulation

__all__ = [
    "Building",
    "ControllerConfig",
    "DispatchError",
    "Elevator",
    "ElevatorController",
    "ElevatorEvent",
    "ElevatorNotFound",
    "ElevatorObserver",
    "ElevatorState",
    "EventRecorder",
    "InvalidFloor",
    "LoggingDisplay",
    "Simulation",
]
