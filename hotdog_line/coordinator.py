import logging
from dataclasses import dataclass, field
from enum import Enum

from hotdog_line.buffer import BoundedBuffer, OccupancySample
from hotdog_line.config import RunConfig
from hotdog_line.events import EventLog, LogEntry
from hotdog_line.workers import join_threads, maker, packer, start_threads

logger = logging.getLogger(__name__)


class WorkerError(RuntimeError):
    """A maker or packer thread died with an exception."""


class RunPhase(Enum):
    STARTING = "starting"
    PRODUCING = "producing"
    DRAINING = "draining"
    DONE = "done"


@dataclass
class RunResult:
    """`entries` and `occupancy` are empty unless the run recorded its history."""

    config: RunConfig
    made: list[int]
    packed: list[int]
    max_occupied: int
    entries: list[LogEntry]
    occupancy: list[OccupancySample]
    phases: list[RunPhase] = field(default_factory=list)

    @property
    def total_made(self) -> int:
        return sum(self.made)

    @property
    def total_packed(self) -> int:
        return sum(self.packed)


# ==================================================================================================
# Logging in terminal
# ==================================================================================================

def log_run_parameters(config: RunConfig) -> None:
    """Log the parameters the run is using."""
    logger.info(f"The line will make {config.order} hot dogs through a pool of capacity {config.capacity}.")
    logger.info(f"There are {config.makers} making machines and {config.packers} packing machines.")


def log_results(result: RunResult) -> None:
    """Log a summary of total made and packed units."""
    logger.info(f"Made {result.total_made}, packed {result.total_packed}, "
                f"peak pool occupancy {result.max_occupied}/{result.config.capacity}.")


# ==================================================================================================
# Run coordinator
# ==================================================================================================

class Coordinator:
    def __init__(self, config: RunConfig, log: EventLog) -> None:
        self.config = config
        self.log = log
        self.buffer = BoundedBuffer(config.capacity, config.order, config.makers, config.packers,
                                    sample=config.record_history or log.keeps_entries)
        self.phases: list[RunPhase] = []
        self._enter(RunPhase.STARTING)

    @property
    def phase(self) -> RunPhase:
        return self.phases[-1]

    def _enter(self, phase: RunPhase) -> None:
        logger.debug(f"Run phase -> {phase.value}")
        self.phases.append(phase)

    def run(self) -> RunResult:
        config = self.config
        work = config.work()
        errors: list[Exception] = []

        log_run_parameters(config)
        self.log.header(config.order, config.capacity, config.makers, config.packers)

        self._enter(RunPhase.PRODUCING)
        args = (self.buffer, self.log, work)
        makers = start_threads(config.makers, maker, args, errors, self.buffer.mark_production_finished)
        packers = start_threads(config.packers, packer, args, errors, self.buffer.mark_production_finished)

        join_threads(makers)
        self._enter(RunPhase.DRAINING)
        self.buffer.mark_production_finished()

        join_threads(packers)
        if errors:
            raise WorkerError(f"{len(errors)} worker thread(s) failed") from errors[0]

        made, packed = self.buffer.tallies()
        self.log.summary(made, packed)
        self._enter(RunPhase.DONE)

        result = RunResult(
            config=config,
            made=made,
            packed=packed,
            max_occupied=self.buffer.max_occupied,
            entries=self.log.entries,
            occupancy=self.buffer.occupancy_samples(),
            phases=list(self.phases),
        )
        log_results(result)
        return result


def run(config: RunConfig, log: EventLog | None = None) -> RunResult:
    """
    Validate `config` and run the line to completion.

    Without an explicit `log` the trace goes to `config.log_path`; failing to open
    it raises OSError before any worker is started. Per-event history is kept in
    memory only with `config.record_history` or an explicit in-memory `log`.
    """
    config.validate()
    if log is not None:
        return Coordinator(config, log).run()
    with EventLog.open(config.log_path, keep_entries=config.record_history) as file_log:
        return Coordinator(config, file_log).run()
