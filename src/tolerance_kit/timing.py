"""A small timing harness for comparing implementations inside tests.

A :class:`TimingTask` supplies a fixed set of data items and a function to run on
each. :class:`TimingService` runs every item once per run, records the elapsed
wall time of each run and reports the fastest task by minimum and mean time.
"""

from __future__ import annotations

import io
import logging
import math
import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from typing import Any, Protocol, TextIO, runtime_checkable

import pandas as pd

logger = logging.getLogger(__name__)

DEFAULT_RUNS = 5

REPORT_COLUMNS = (
    "name",
    "min",
    "min_relative",
    "mean",
    "mean_relative",
    "fastest_min",
    "fastest_mean",
)


@runtime_checkable
class TimingTask(Protocol):
    """Work to be timed: ``run`` is applied to ``get_data(i)`` for each index."""

    @property
    def name(self) -> str: ...

    @property
    def size(self) -> int: ...

    def get_data(self, index: int) -> Any: ...

    def run(self, data: Any) -> Any: ...

    def check(self, index: int, result: Any) -> None: ...


class BaseTimingTask:
    """Named task with a no-op ``check``; subclasses supply the data and work."""

    def __init__(self, name: str) -> None:
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    @property
    def size(self) -> int:
        raise NotImplementedError

    def get_data(self, index: int) -> Any:
        raise NotImplementedError

    def run(self, data: Any) -> Any:
        raise NotImplementedError

    def check(self, index: int, result: Any) -> None:
        return None


class NamedTimingTask(BaseTimingTask):
    """A task with only a name, used to attach externally measured times.

    The name may be given as a callable which is resolved on first access.
    """

    def __init__(self, name: str | Callable[[], str]) -> None:
        if callable(name):
            super().__init__("")
            self._name_supplier: Callable[[], str] | None = name
        else:
            super().__init__(name)
            self._name_supplier = None

    @property
    def name(self) -> str:
        if self._name_supplier is not None:
            self._name = self._name_supplier()
            self._name_supplier = None
        return self._name

    @property
    def size(self) -> int:
        return 0

    def get_data(self, index: int) -> Any:
        raise RuntimeError("This task has no data")

    def run(self, data: Any) -> Any:
        raise RuntimeError("This task has no data")


@dataclass(frozen=True)
class TimingResult:
    """Elapsed nanoseconds of each run of a task."""

    task: TimingTask
    times: tuple[int, ...] = field(default_factory=tuple)

    @classmethod
    def named(cls, name: str | Callable[[], str], times: Sequence[int]) -> TimingResult:
        return cls(NamedTimingTask(name), tuple(times))

    @property
    def size(self) -> int:
        return len(self.times)

    @property
    def min(self) -> int:
        return min(self.times) if self.times else 0

    @property
    def mean(self) -> float:
        return sum(self.times) / len(self.times) if self.times else 0.0


def _ratio(value: float, base: float) -> float:
    if base == 0:
        return math.nan if value == 0 else math.inf
    return value / base


class TimingService:
    """Execute timing tasks and keep their results for reporting."""

    def __init__(self, runs: int = DEFAULT_RUNS) -> None:
        self.runs = runs
        self._results: list[TimingResult] = []

    @property
    def runs(self) -> int:
        return self._runs

    @runs.setter
    def runs(self, value: int) -> None:
        if value < 1:
            raise ValueError(f"runs must be at least 1: {value}")
        self._runs = value

    @property
    def size(self) -> int:
        return len(self._results)

    @property
    def results(self) -> list[TimingResult]:
        return list(self._results)

    def get(self, index: int) -> TimingResult:
        """Return a result; negative indices count from the most recent."""
        return self._results[index]

    def clear_results(self) -> None:
        self._results.clear()

    def add(self, result: TimingResult) -> None:
        self._results.append(result)

    def execute(self, task: TimingTask, check: bool = False) -> TimingResult:
        """Time ``runs`` passes over the task data and record the result.

        Data is fetched before the clock starts. With ``check`` the results of the
        final run are passed to ``task.check``.
        """
        size = task.size
        times: list[int] = []
        results: list[Any] = []
        for _ in range(self._runs):
            data = [task.get_data(index) for index in range(size)]
            start = time.perf_counter_ns()
            results = [task.run(item) for item in data]
            times.append(time.perf_counter_ns() - start)

        if check:
            for index, result in enumerate(results):
                task.check(index, result)

        timing = TimingResult(task, tuple(times))
        self._results.append(timing)
        logger.debug(
            "Timed %s over %d runs: min=%d ns",
            task.name,
            self._runs,
            timing.min,
            extra={"task": task.name, "runs": self._runs, "elapsed_ns": timing.min},
        )
        return timing

    def repeat(self, count: int | None = None) -> int:
        """Execute again the tasks of the first ``count`` results (all by default)."""
        count = self.size if count is None else count
        for index in range(count):
            self.execute(self._results[index].task)
        return count

    def check(self) -> None:
        """Run every recorded task once and pass each output to its ``check``."""
        for result in list(self._results):
            check_task(result.task)

    def _select(self, last_n: int | None) -> list[TimingResult]:
        if last_n is None or last_n >= len(self._results):
            return list(self._results)
        if last_n <= 0:
            return []
        return self._results[-last_n:]

    def report(self, out: TextIO, last_n: int | None = None) -> None:
        """Write one line per result; ``*`` marks the fastest min and mean."""
        write_report(out, self._select(last_n))

    def get_report(self, last_n: int | None = None, leading_new_line: bool = True) -> str:
        if last_n is not None and last_n <= 0:
            return ""
        buffer = io.StringIO()
        if leading_new_line:
            buffer.write("\n")
        self.report(buffer, last_n)
        return buffer.getvalue().removesuffix("\n")

    def to_frame(self, last_n: int | None = None) -> pd.DataFrame:
        """Tabulate results with times relative to the first selected task."""
        return results_frame(self._select(last_n))


def check_task(task: TimingTask) -> None:
    for index in range(task.size):
        task.check(index, task.run(task.get_data(index)))


def results_frame(results: Sequence[TimingResult]) -> pd.DataFrame:
    if not results:
        return pd.DataFrame(columns=list(REPORT_COLUMNS))

    mins = [result.min for result in results]
    means = [result.mean for result in results]
    fastest_min = min(mins)
    fastest_mean = min(means)
    records = [
        {
            "name": result.task.name,
            "min": mins[index],
            "min_relative": _ratio(mins[index], mins[0]),
            "mean": means[index],
            "mean_relative": _ratio(means[index], means[0]),
            "fastest_min": mins[index] == fastest_min,
            "fastest_mean": means[index] == fastest_mean,
        }
        for index, result in enumerate(results)
    ]
    return pd.DataFrame.from_records(records, columns=list(REPORT_COLUMNS))


def write_report(out: TextIO, results: Sequence[TimingResult]) -> None:
    if not results:
        return
    frame = results_frame(results)
    width = max(1, *(len(name) for name in frame["name"]))
    for row in frame.itertuples(index=False):
        min_marker = "*" if row.fastest_min else " "
        mean_marker = "*" if row.fastest_mean else " "
        out.write(
            f"{row.name:<{width}} : {int(row.min):15d} ({float(row.min_relative):8.3f})"
            f"{min_marker}: {float(row.mean):15f} ({float(row.mean_relative):8.3f})"
            f"{mean_marker}\n"
        )
