import threading
import time
from dataclasses import dataclass
from typing import Callable


@dataclass(frozen=True)
class Unit:
    sequence_id: int
    producer_index: int


@dataclass(frozen=True)
class OccupancySample:
    occupied: int
    timestamp: float


class BoundedBuffer:
    """
    Fixed-capacity circular queue shared by every maker and packer.

    One lock covers the slots, the production and consumption ledgers and the
    per-worker tallies. Makers wait on `not_full`, packers on `not_empty`; both
    conditions share that lock, so a wait releases it and re-acquires it on wake.

    Units leave in the order they were committed by `enqueue`. With several
    makers that can differ from sequence id order, since a maker may commit a
    later id before another maker commits an earlier one.

    With `sample` set, every transition is also recorded as an
    `OccupancySample`; `max_occupied` is tracked either way.
    """

    def __init__(self, capacity: int, order: int, makers: int, packers: int,
                 sample: bool = False) -> None:
        self.capacity = capacity
        self.order = order

        self._slots: list[Unit | None] = [None] * capacity
        self._head = 0
        self._tail = 0
        self._occupied = 0

        self._total_reserved = 0
        self._total_committed = 0
        self._total_consumed = 0
        self._production_finished = False

        self._made = [0] * makers
        self._packed = [0] * packers

        self._max_occupied = 0
        self.sample = sample
        self._samples = [OccupancySample(0, time.time())] if sample else []

        self._lock = threading.Lock()
        self._not_full = threading.Condition(self._lock)
        self._not_empty = threading.Condition(self._lock)

    # ==============================================================================================
    # Maker side
    # ==============================================================================================

    def reserve_slot(self) -> int | None:
        """Claim the next sequence id, or return None once all `order` ids are taken."""
        with self._lock:
            if self._total_reserved >= self.order:
                return None
            self._total_reserved += 1
            return self._total_reserved

    def enqueue(self, unit: Unit, on_commit: Callable[[Unit], None] | None = None) -> bool:
        """
        Block until there is room, then append `unit` at the tail.

        `on_commit` runs while the lock is still held, after the unit is in the
        buffer and before any packer can see it.
        """
        with self._not_full:
            while self._occupied == self.capacity and not self._production_finished:
                self._not_full.wait()
            if self._total_committed >= self.order or self._occupied == self.capacity:
                return False

            self._slots[self._tail] = unit
            self._tail = (self._tail + 1) % self.capacity
            self._occupied += 1
            self._total_committed += 1
            self._made[unit.producer_index] += 1
            self._record_occupancy()

            if on_commit is not None:
                on_commit(unit)
            self._not_empty.notify()
            return True

    def mark_production_finished(self) -> None:
        """Set the finished flag once and wake every waiter so each re-checks its stop condition."""
        with self._lock:
            if self._production_finished:
                return
            self._production_finished = True
            self._not_empty.notify_all()
            self._not_full.notify_all()

    # ==============================================================================================
    # Packer side
    # ==============================================================================================

    def dequeue(self, consumer_index: int) -> Unit | None:
        """Remove the unit at the head, or return None when nothing is left and nothing is coming."""
        with self._not_empty:
            while (self._occupied == 0 and not self._production_finished
                   and self._total_consumed < self.order):
                self._not_empty.wait()
            if self._occupied == 0:
                return None

            unit = self._slots[self._head]
            self._slots[self._head] = None
            self._head = (self._head + 1) % self.capacity
            self._occupied -= 1
            self._total_consumed += 1
            self._packed[consumer_index] += 1
            self._record_occupancy()

            self._not_full.notify()
            if self._total_consumed == self.order:
                self._not_empty.notify_all()
            return unit

    # ==============================================================================================
    # Accounting
    # ==============================================================================================

    def _record_occupancy(self) -> None:
        self._max_occupied = max(self._max_occupied, self._occupied)
        if self.sample:
            self._samples.append(OccupancySample(self._occupied, time.time()))

    def __len__(self) -> int:
        with self._lock:
            return self._occupied

    @property
    def total_reserved(self) -> int:
        with self._lock:
            return self._total_reserved

    @property
    def total_consumed(self) -> int:
        with self._lock:
            return self._total_consumed

    @property
    def production_finished(self) -> bool:
        with self._lock:
            return self._production_finished

    @property
    def max_occupied(self) -> int:
        with self._lock:
            return self._max_occupied

    def tallies(self) -> tuple[list[int], list[int]]:
        """Return copies of the per-maker and per-packer counts."""
        with self._lock:
            return list(self._made), list(self._packed)

    def occupancy_samples(self) -> list[OccupancySample]:
        with self._lock:
            return list(self._samples)
