import logging

import pytest

from hotdog_line.cli import main
from hotdog_line.events import EventLog


def test_completed_run_exits_zero(tmp_path):
    path = tmp_path / "log.txt"
    assert main(["5", "2", "1", "1", "--log", str(path)]) == 0
    assert path.read_text().splitlines()[-2:] == ["m1 made 5", "p1 packed 5"]


def test_invalid_parameters_exit_non_zero(tmp_path, caplog):
    path = tmp_path / "log.txt"
    with caplog.at_level(logging.ERROR):
        assert main(["2", "2", "1", "1", "--log", str(path)]) == 1
    assert "greater than capacity" in caplog.text
    assert not path.exists()


def test_too_many_packers_exit_non_zero(tmp_path):
    assert main(["50", "2", "1", "31", "--log", str(tmp_path / "log.txt")]) == 1


def test_unavailable_trace_file_exits_non_zero(tmp_path, caplog):
    with caplog.at_level(logging.ERROR):
        assert main(["5", "2", "1", "1", "--log", str(tmp_path / "nope" / "log.txt")]) == 1
    assert "Failed to open trace file" in caplog.text


def test_missing_arguments_is_a_usage_error():
    with pytest.raises(SystemExit) as excinfo:
        main(["5", "2"])
    assert excinfo.value.code != 0


def test_plot_is_saved(tmp_path):
    plot_path = tmp_path / "rates.png"
    assert main(["30", "3", "2", "2", "--log", str(tmp_path / "log.txt"), "--plot", str(plot_path)]) == 0
    assert plot_path.stat().st_size > 0


def test_write_failure_is_not_reported_as_open_failure(tmp_path, caplog, monkeypatch):
    def disk_full(self, made, packed):
        raise OSError("No space left on device")

    monkeypatch.setattr(EventLog, "summary", disk_full)
    with caplog.at_level(logging.ERROR):
        assert main(["5", "2", "1", "1", "--log", str(tmp_path / "log.txt")]) == 1
    assert "Failed to write trace file" in caplog.text
    assert "Failed to open trace file" not in caplog.text
