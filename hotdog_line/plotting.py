import matplotlib.pyplot as plt
import numpy as np

from hotdog_line.buffer import OccupancySample
from hotdog_line.coordinator import RunResult
from hotdog_line.events import EventKind, LogEntry


# ==================================================================================================
# Diagram generation
# ==================================================================================================

def event_rates(
    start_time: float,
    entries: list[LogEntry],
    bucket_size: float = 1.0,
    smooth_window: int = 3,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Return bucket centers and smoothed produce/consume counts per bucket."""

    # --- Extract timestamps per kind ---
    def extract_times(kind):
        return [entry.timestamp - start_time for entry in entries if entry.kind is kind]

    produced = extract_times(EventKind.PRODUCE)
    consumed = extract_times(EventKind.CONSUME)

    # --- Determine histogram bin edges ---
    max_t = max(produced + consumed + [0])
    bins = np.arange(0, max_t + bucket_size, bucket_size)
    if len(bins) < 2:
        bins = np.array([0, bucket_size])

    # --- Apply smoothing (rolling mean) ---
    def smooth(arr):
        if smooth_window <= 1 or len(arr) < smooth_window:
            return arr
        kernel = np.ones(smooth_window) / smooth_window
        return np.convolve(arr, kernel, mode="same")

    produced_rate = smooth(np.histogram(produced, bins=bins)[0])
    consumed_rate = smooth(np.histogram(consumed, bins=bins)[0])

    # Use the *bucket centers* for nicer alignment
    return bins[:-1] + bucket_size / 2, produced_rate, consumed_rate


def plot_production_rates(ax: plt.Axes, start_time: float, entries: list[LogEntry],
                          bucket_size: float = 1.0, smooth_window: int = 3) -> None:
    t, produced_rate, consumed_rate = event_rates(start_time, entries, bucket_size, smooth_window)

    ax.plot(t, produced_rate, "-o", label="Made", color="blue", markersize=4, alpha=0.85)
    ax.plot(t, consumed_rate, "-o", label="Packed", color="red", markersize=4, alpha=0.85)

    ax.set(
        xlabel="Time (seconds)",
        ylabel="Hot dogs per bucket",
        title=f"Making & Packing Rates (bucket={bucket_size}s, smooth={smooth_window})"
    )
    ax.grid(alpha=0.4, linestyle=":")
    ax.legend()


def plot_occupancy_over_time(ax: plt.Axes, start_time: float, samples: list[OccupancySample],
                             capacity: int) -> None:
    times = np.array([sample.timestamp - start_time for sample in samples])
    occupied = np.array([sample.occupied for sample in samples])

    ax.step(times, occupied, where="post", label="Pool occupancy", color="green", alpha=0.8)
    ax.axhline(capacity, color="orange", linestyle="--", label="Capacity")
    ax.set(
        xlabel="Time (seconds)",
        ylabel="Hot dogs in pool",
        title="Pool Occupancy Over Time"
    )
    ax.grid(alpha=0.4, linestyle=":")
    ax.legend()


def plot_results(result: RunResult, path: str | None = None, bucket_size: float | None = None) -> plt.Figure:
    """
    Create one figure containing both subplots; save it to `path` or show it.

    A saved figure is closed before it is returned. A shown one is left open and
    closing it is up to the caller.
    """
    if not result.entries:
        raise ValueError("run has no recorded history; set RunConfig.record_history")
    start_time = result.occupancy[0].timestamp if result.occupancy else 0.0
    if bucket_size is None:
        duration = max((entry.timestamp - start_time for entry in result.entries), default=0.0)
        bucket_size = max(duration / 20, 1e-3)

    fig, (ax1, ax2) = plt.subplots(nrows=1, ncols=2, figsize=(12, 4), sharex=False)
    plot_production_rates(ax1, start_time, result.entries, bucket_size=bucket_size)
    plot_occupancy_over_time(ax2, start_time, result.occupancy, result.config.capacity)

    plt.tight_layout()
    if path is None:
        plt.show()
    else:
        fig.savefig(path)
        plt.close(fig)
    return fig
