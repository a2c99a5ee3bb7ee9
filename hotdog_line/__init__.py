"""Bounded-buffer coordination between making and packing machine thread pools."""

from hotdog_line.buffer import BoundedBuffer, OccupancySample, Unit
from hotdog_line.config import ConfigError, RunConfig, WorkModel, no_work, sleep_work
from hotdog_line.coordinator import Coordinator, RunPhase, RunResult, WorkerError, run
from hotdog_line.events import EventKind, EventLog, LogEntry

__all__ = [
    "BoundedBuffer",
    "ConfigError",
    "Coordinator",
    "EventKind",
    "EventLog",
    "LogEntry",
    "OccupancySample",
    "RunConfig",
    "RunPhase",
    "RunResult",
    "Unit",
    "WorkModel",
    "WorkerError",
    "no_work",
    "run",
    "sleep_work",
]

__version__ = "0.1.0"
