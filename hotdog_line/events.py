"""
Serialized trace of everything that happens on the line.

Lines written to the sink can also be kept as `LogEntry` records so a finished
run can be audited or plotted without re-reading the file.
"""

import threading
import time
from dataclasses import dataclass
from enum import Enum
from typing import TextIO

SEPARATOR = "-----"


class EventKind(Enum):
    HEADER = "header"
    PRODUCE = "produce"
    CONSUME = "consume"
    SUMMARY = "summary"


@dataclass(frozen=True)
class LogEntry:
    kind: EventKind
    text: str
    timestamp: float
    unit_id: int | None = None
    maker: int | None = None
    packer: int | None = None


class EventLog:
    """
    Line sink guarded by its own lock.

    Entries are kept in memory only when `keep_entries` is set. It defaults to
    on for a log without a stream and off for a file or stream sink, so a long
    run writing to disk holds no per-event state.
    """

    def __init__(self, stream: TextIO | None = None, owns_stream: bool = False,
                 keep_entries: bool | None = None) -> None:
        self._stream = stream
        self._owns_stream = owns_stream
        self.keeps_entries = stream is None if keep_entries is None else keep_entries
        self._lock = threading.Lock()
        self._entries: list[LogEntry] = []

    @classmethod
    def open(cls, path: str, keep_entries: bool = False) -> "EventLog":
        """Open `path` for writing; an OSError here is a setup failure."""
        return cls(open(path, "w", encoding="utf-8"), owns_stream=True, keep_entries=keep_entries)

    def close(self) -> None:
        with self._lock:
            if self._owns_stream and self._stream is not None:
                self._stream.close()
                self._stream = None

    def __enter__(self) -> "EventLog":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    # ----------------------------------------------------------------------------------------------
    # Writers
    # ----------------------------------------------------------------------------------------------

    def _write(self, entry: LogEntry) -> None:
        with self._lock:
            if self._stream is not None:
                self._stream.write(entry.text + "\n")
                self._stream.flush()
            if self.keeps_entries:
                self._entries.append(entry)

    def header(self, order: int, capacity: int, makers: int, packers: int) -> None:
        for text in (f"order:{order}", f"capacity:{capacity}", f"making machines:{makers}",
                     f"packing machines:{packers}", SEPARATOR):
            self._write(LogEntry(EventKind.HEADER, text, time.time()))

    def produce(self, unit_id: int, maker: int) -> None:
        self._write(LogEntry(EventKind.PRODUCE, f"m{maker + 1} puts {unit_id}", time.time(),
                             unit_id=unit_id, maker=maker))

    def consume(self, unit_id: int, maker: int, packer: int) -> None:
        self._write(LogEntry(EventKind.CONSUME, f"p{packer + 1} gets {unit_id} from m{maker + 1}",
                             time.time(), unit_id=unit_id, maker=maker, packer=packer))

    def summary(self, made: list[int], packed: list[int]) -> None:
        lines = [SEPARATOR, "summary:"]
        lines += [f"m{i + 1} made {count}" for i, count in enumerate(made)]
        lines += [f"p{j + 1} packed {count}" for j, count in enumerate(packed)]
        for text in lines:
            self._write(LogEntry(EventKind.SUMMARY, text, time.time()))

    # ----------------------------------------------------------------------------------------------
    # Readers
    # ----------------------------------------------------------------------------------------------

    @property
    def entries(self) -> list[LogEntry]:
        with self._lock:
            return list(self._entries)

    @property
    def lines(self) -> list[str]:
        return [entry.text for entry in self.entries]

    def of_kind(self, kind: EventKind) -> list[LogEntry]:
        return [entry for entry in self.entries if entry.kind is kind]
