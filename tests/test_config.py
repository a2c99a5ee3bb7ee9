import time

import pytest

from hotdog_line import ConfigError, RunConfig, WorkModel, no_work, sleep_work


def test_valid_config_returns_itself():
    config = RunConfig(5, 2, 1, 1)
    assert config.validate() is config


@pytest.mark.parametrize(
    "args, message",
    [
        ((0, 2, 1, 1), "order must be a positive integer"),
        ((5, -1, 1, 1), "capacity must be a positive integer"),
        ((5, 2, 0, 1), "makers must be a positive integer"),
        ((5, 2, 1, 0), "packers must be a positive integer"),
        ((2, 2, 1, 1), "must be greater than capacity"),
        ((5, 2, 1, 31), "cannot exceed 30"),
        ((5.0, 2, 1, 1), "order must be a positive integer"),
    ],
)
def test_invalid_parameters_are_rejected(args, message):
    with pytest.raises(ConfigError, match=message):
        RunConfig(*args).validate()


def test_negative_unit_seconds_rejected():
    with pytest.raises(ConfigError, match="unit_seconds"):
        RunConfig(5, 2, 1, 1, unit_seconds=-0.1).validate()


def test_config_error_is_a_value_error():
    assert issubclass(ConfigError, ValueError)


def test_zero_cost_model_is_no_work():
    assert sleep_work(0) is no_work
    assert RunConfig(5, 2, 1, 1).work().work is no_work


def test_sleep_work_blocks_per_unit():
    work = sleep_work(0.01)
    started = time.monotonic()
    work(3)
    assert time.monotonic() - started >= 0.025


def test_work_model_phase_costs():
    calls = []
    model = WorkModel(calls.append)
    model.build()
    model.send()
    model.finish()
    assert calls == [4, 1, 1, 2]


def test_injected_work_model_wins_over_unit_seconds():
    model = WorkModel(no_work)
    assert RunConfig(5, 2, 1, 1, unit_seconds=1.0, work_model=model).work() is model
