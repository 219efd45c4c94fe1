from __future__ import annotations

from typing import Dict, Type

from .fifo import FifoScheduler
from .interface import (
    MIN_FLOOR,
    Direction,
    ElevatorSnapshot,
    InvalidFloor,
    Request,
    RequestOrigin,
    SchedulingStrategy,
    StopDecision,
)
from .scan import ScanScheduler

__all__ = [
    "MIN_FLOOR",
    "Direction",
    "ElevatorSnapshot",
    "FifoScheduler",
    "InvalidFloor",
    "Request",
    "RequestOrigin",
    "ScanScheduler",
    "SchedulingStrategy",
    "StopDecision",
    "get_scheduler",
]


SCHEDULER_REGISTRY: Dict[str, Type[SchedulingStrategy]] = {
    "fifo": FifoScheduler,
    "fcfs": FifoScheduler,
    "scan": ScanScheduler,
    "look": ScanScheduler,
}


def get_scheduler(name: str, **kwargs) -> SchedulingStrategy:
    cls = SCHEDULER_REGISTRY.get(name.lower())
    if cls is None:
        raise ValueError(f"Unknown scheduler '{name}'. Available: {', '.join(SCHEDULER_REGISTRY)}")
    return cls(**kwargs)
