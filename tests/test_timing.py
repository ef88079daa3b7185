"""Tests for the timing harness."""

from __future__ import annotations

import io
import math
from typing import Any

import pytest

from tolerance_kit.timing import (
    REPORT_COLUMNS,
    BaseTimingTask,
    NamedTimingTask,
    TimingResult,
    TimingService,
    TimingTask,
    check_task,
    results_frame,
)


class _SquareTask(BaseTimingTask):
    def __init__(self, values: list[int]) -> None:
        super().__init__("square")
        self.values = values
        self.checked: list[tuple[int, Any]] = []

    @property
    def size(self) -> int:
        return len(self.values)

    def get_data(self, index: int) -> int:
        return self.values[index]

    def run(self, data: int) -> int:
        return data * data

    def check(self, index: int, result: Any) -> None:
        self.checked.append((index, result))
        assert result == self.values[index] ** 2


def _service_with_results() -> TimingService:
    service = TimingService()
    service.add(TimingResult.named("fast", [10, 20]))
    service.add(TimingResult.named("slower", [20, 40]))
    return service


def test_tasks_satisfy_the_protocol() -> None:
    assert isinstance(_SquareTask([1]), TimingTask)
    assert isinstance(NamedTimingTask("x"), TimingTask)


def test_base_task_requires_data_and_work() -> None:
    task = BaseTimingTask("base")
    assert task.name == "base"
    assert task.check(0, None) is None
    with pytest.raises(NotImplementedError):
        _ = task.size
    with pytest.raises(NotImplementedError):
        task.run(1)


def test_named_task_has_no_data() -> None:
    task = NamedTimingTask("external")
    assert task.size == 0
    with pytest.raises(RuntimeError, match="This task has no data"):
        task.get_data(0)
    with pytest.raises(RuntimeError, match="This task has no data"):
        task.run(None)


def test_named_task_resolves_callable_name_once() -> None:
    calls: list[int] = []

    def supplier() -> str:
        calls.append(1)
        return "lazy"

    task = NamedTimingTask(supplier)
    assert calls == []
    assert task.name == "lazy"
    assert task.name == "lazy"
    assert calls == [1]


def test_timing_result_statistics() -> None:
    result = TimingResult.named("a", [30, 10, 20])
    assert result.size == 3
    assert result.min == 10
    assert result.mean == pytest.approx(20.0)

    empty = TimingResult.named("empty", [])
    assert empty.min == 0
    assert empty.mean == 0.0


def test_runs_must_be_positive() -> None:
    with pytest.raises(ValueError, match="runs must be at least 1"):
        TimingService(runs=0)
    service = TimingService()
    with pytest.raises(ValueError):
        service.runs = -1
    assert service.runs == 5


def test_execute_records_one_time_per_run() -> None:
    service = TimingService(runs=3)
    task = _SquareTask([1, 2, 3])
    result = service.execute(task, check=True)

    assert result.size == 3
    assert all(elapsed >= 0 for elapsed in result.times)
    assert service.size == 1
    assert service.get(-1) is result
    assert service.get(0) is result
    assert task.checked == [(0, 1), (1, 4), (2, 9)]


def test_execute_without_check_skips_check() -> None:
    task = _SquareTask([2])
    TimingService(runs=1).execute(task)
    assert task.checked == []


def test_repeat_and_clear_results() -> None:
    service = TimingService(runs=2)
    service.execute(_SquareTask([1]))
    service.execute(_SquareTask([2]))

    assert service.repeat() == 2
    assert service.size == 4
    assert service.repeat(1) == 1
    assert service.size == 5
    assert service.results[4].task is service.results[0].task

    service.clear_results()
    assert service.size == 0
    assert service.results == []


def test_check_runs_every_recorded_task() -> None:
    task = _SquareTask([4, 5])
    service = TimingService(runs=1)
    service.execute(task)
    service.check()
    assert task.checked == [(0, 16), (1, 25)]

    other = _SquareTask([6])
    check_task(other)
    assert other.checked == [(0, 36)]


def test_results_frame_relative_to_first_task() -> None:
    frame = _service_with_results().to_frame()
    assert tuple(frame.columns) == REPORT_COLUMNS
    assert frame["name"].tolist() == ["fast", "slower"]
    assert frame["min"].tolist() == [10, 20]
    assert frame["min_relative"].tolist() == [1.0, 2.0]
    assert frame["mean_relative"].tolist() == [1.0, 2.0]
    assert frame["fastest_min"].tolist() == [True, False]
    assert frame["fastest_mean"].tolist() == [True, False]


def test_results_frame_handles_zero_base() -> None:
    frame = results_frame([TimingResult.named("zero", [0]), TimingResult.named("one", [5])])
    assert math.isnan(frame["min_relative"].iloc[0])
    assert math.isinf(frame["min_relative"].iloc[1])


def test_results_frame_empty() -> None:
    frame = results_frame([])
    assert frame.empty
    assert tuple(frame.columns) == REPORT_COLUMNS


def test_report_marks_fastest() -> None:
    buffer = io.StringIO()
    _service_with_results().report(buffer)
    lines = buffer.getvalue().splitlines()

    assert len(lines) == 2
    assert lines[0].startswith("fast   : ")
    assert lines[0].endswith("*")
    assert "(   1.000)*" in lines[0]
    assert lines[1].startswith("slower : ")
    assert "(   2.000) " in lines[1]
    assert "*" not in lines[1]


def test_report_last_n_selects_most_recent() -> None:
    buffer = io.StringIO()
    _service_with_results().report(buffer, last_n=1)
    lines = buffer.getvalue().splitlines()
    assert len(lines) == 1
    assert lines[0].startswith("slower : ")
    assert "(   1.000)*" in lines[0]


def test_get_report() -> None:
    service = _service_with_results()
    report = service.get_report()
    assert report.startswith("\nfast")
    assert not report.endswith("\n")
    assert len(report.splitlines()) == 3

    assert service.get_report(leading_new_line=False).startswith("fast")
    assert service.get_report(last_n=0) == ""
    assert TimingService().get_report(leading_new_line=False) == ""
