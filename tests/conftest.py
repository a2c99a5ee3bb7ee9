import matplotlib

matplotlib.use("Agg")

import pytest

from hotdog_line import EventLog, RunConfig, run


@pytest.fixture
def memory_log():
    return EventLog()


@pytest.fixture
def run_line():
    """Run the line with no work delay and an in-memory trace."""
    def _run(order, capacity, makers, packers, **kwargs):
        log = EventLog()
        result = run(RunConfig(order, capacity, makers, packers, **kwargs), log=log)
        return result, log
    return _run
