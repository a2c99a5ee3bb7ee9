import time
from dataclasses import dataclass, field
from typing import Callable


MAX_PACKERS = 30

# Units of work per phase, relative to one another
BUILD_UNITS = 4
SEND_UNITS = 1
TAKE_UNITS = 1
PACK_UNITS = 2


class ConfigError(ValueError):
    """Raised when the run parameters cannot describe a valid run."""


# ==================================================================================================
# Work phase cost model
# ==================================================================================================

def no_work(units: int) -> None:
    """Skip the work phase entirely."""


def sleep_work(unit_seconds: float) -> Callable[[int], None]:
    """Return a work function that blocks for `unit_seconds` per unit of work."""
    if unit_seconds <= 0:
        return no_work

    def work(units: int) -> None:
        time.sleep(units * unit_seconds)

    return work


@dataclass(frozen=True)
class WorkModel:
    work: Callable[[int], None] = no_work

    def build(self) -> None:
        self.work(BUILD_UNITS)

    def send(self) -> None:
        self.work(SEND_UNITS)

    def finish(self) -> None:
        self.work(TAKE_UNITS)
        self.work(PACK_UNITS)


# ==================================================================================================
# Run configuration
# ==================================================================================================

@dataclass(frozen=True)
class RunConfig:
    order: int
    capacity: int
    makers: int
    packers: int

    unit_seconds: float = 0.0
    log_path: str = "log.txt"
    record_history: bool = False
    work_model: WorkModel | None = field(default=None, compare=False)

    def work(self) -> WorkModel:
        """Return the injected work model, or one built from `unit_seconds`."""
        if self.work_model is not None:
            return self.work_model
        return WorkModel(sleep_work(self.unit_seconds))

    def validate(self) -> "RunConfig":
        """Check the parameter constraints and return self so calls can be chained."""
        for name in ("order", "capacity", "makers", "packers"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
                raise ConfigError(f"{name} must be a positive integer, got {value!r}")
        if self.order <= self.capacity:
            raise ConfigError(f"order ({self.order}) must be greater than capacity ({self.capacity})")
        if self.packers > MAX_PACKERS:
            raise ConfigError(f"packing machines cannot exceed {MAX_PACKERS}, got {self.packers}")
        if self.unit_seconds < 0:
            raise ConfigError(f"unit_seconds must not be negative, got {self.unit_seconds}")
        return self
