import logging
import threading
from typing import Callable

from hotdog_line.buffer import BoundedBuffer, Unit
from hotdog_line.config import WorkModel
from hotdog_line.events import EventLog

logger = logging.getLogger(__name__)


# ==================================================================================================
# Thread target functions
# ==================================================================================================

def maker(index: int, buffer: BoundedBuffer, log: EventLog, work: WorkModel) -> None:
    """Build units until every sequence id has been reserved."""
    while True:
        work.build()
        sequence_id = buffer.reserve_slot()
        if sequence_id is None:
            break
        work.send()
        buffer.enqueue(Unit(sequence_id, index),
                       on_commit=lambda unit: log.produce(unit.sequence_id, unit.producer_index))
    logger.debug(f"Maker m{index + 1} stopped.")


def packer(index: int, buffer: BoundedBuffer, log: EventLog, work: WorkModel) -> None:
    """Drain units from the buffer until production is over and the buffer is empty."""
    while True:
        unit = buffer.dequeue(index)
        if unit is None:
            break
        work.finish()
        log.consume(unit.sequence_id, unit.producer_index, index)
    logger.debug(f"Packer p{index + 1} stopped.")


# ==================================================================================================
# Thread management functions
# ==================================================================================================

def start_threads(n_threads: int, target: Callable, args: tuple, errors: list[Exception],
                  on_error: Callable[[], None] | None = None) -> list[threading.Thread]:
    """
    Create and start `n_threads` threads running `target(i, *args)`.

    A thread that raises has its exception appended to `errors` and then runs
    `on_error`, so the remaining workers are not left waiting on it.
    """
    logger.info(f"Starting {n_threads} {target.__name__} threads.")

    def guarded(*call_args) -> None:
        try:
            target(*call_args)
        except Exception as exc:
            errors.append(exc)
            logger.error(f"Worker {threading.current_thread().name} failed: {exc!r}")
            if on_error is not None:
                on_error()

    thread_list = []
    for i in range(n_threads):
        thread = threading.Thread(target=guarded, args=(i,) + args,
                                  name=f"{target.__name__}-{i + 1}", daemon=True)
        thread.start()
        thread_list.append(thread)
    return thread_list


def join_threads(thread_list: list[threading.Thread]) -> None:
    """Wait for all threads in the list to complete."""
    for thread in thread_list:
        thread.join()
