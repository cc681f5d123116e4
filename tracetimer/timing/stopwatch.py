"""按标签记录时间点并输出区间耗时轨迹的 Stopwatch。"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from time import perf_counter_ns
from typing import Iterator, List, Optional, Tuple

import pandas as pd

from tracetimer.timing.records import (
    Measurement,
    SampleCount,
    elapsed_microseconds,
    format_seconds,
    per_sample_seconds,
    to_seconds,
)
from tracetimer.utils.logging import get_logger

START_LABEL = "start"
TABLE_COLUMNS = ["previous", "current", "seconds", "samples", "per_sample"]

_LOGGER = logging.getLogger(__name__)


class Stopwatch:
    """记录一系列带标签的时间点，并计算相邻时间点之间的耗时。

    创建时立即记录 ``"start"``。之后每次调用 :meth:`add_measurement`
    追加一个时间点；:meth:`get_timing_trace` 按插入顺序输出各区间耗时，
    对携带样本数的测量点额外输出平均到每个样本的耗时。

    实例不做线程同步，多线程场景请为每个线程单独创建。
    """

    def __init__(self) -> None:
        self._measurements: list[Measurement] = [Measurement(START_LABEL, perf_counter_ns())]
        self._samples: list[SampleCount] = []

    @property
    def measurements(self) -> tuple[Measurement, ...]:
        return tuple(self._measurements)

    @property
    def samples(self) -> tuple[SampleCount, ...]:
        return tuple(self._samples)

    def __len__(self) -> int:
        return len(self._measurements)

    def __str__(self) -> str:
        return self.get_timing_trace()

    def add_measurement(self, label: str, samples: int | None = None) -> None:
        """以当前时间追加一个测量点。

        Args:
            label: 测量点标签，不要求唯一。
            samples: 可选的样本数量，例如该区间内执行的循环次数。
                不做校验，0 或负数会在轨迹中产生退化的数值。
        """

        now = perf_counter_ns()
        self._measurements.append(Measurement(label, now))
        if samples is not None:
            self._samples.append(SampleCount(label, samples))
        _LOGGER.debug("Recorded measurement %r (samples=%s)", label, samples)

    @contextmanager
    def measure(self, label: str, samples: int | None = None) -> Iterator["Stopwatch"]:
        """在代码块结束时记录测量点，异常会照常向外抛出。"""

        try:
            yield self
        finally:
            self.add_measurement(label, samples)

    def get_timing_trace(self) -> str:
        """生成多行耗时轨迹文本。

        第一行是从 ``start`` 到调用时刻的总耗时，随后每个相邻测量点一行，
        样本数匹配到当前标签时再追加 ``per sample`` 行（每个匹配一行）。

        Returns:
            每行以换行符结尾的轨迹文本。
        """

        now = perf_counter_ns()
        total = to_seconds(elapsed_microseconds(self._measurements[0].timestamp, now))
        lines = [f"Total; {START_LABEL} -> now: {format_seconds(total)}s"]

        for previous, current, seconds, matches in self._iter_intervals():
            lines.append(f"{previous.label} -> {current.label}: {format_seconds(seconds)}s")
            for sample in matches:
                average = per_sample_seconds(seconds, sample.count)
                lines.append(
                    f"{previous.label} -> {current.label} per sample: {format_seconds(average)}s"
                )

        return "".join(line + "\n" for line in lines)

    def log_trace(self, logger: Optional[logging.Logger] = None, level: int = logging.INFO) -> str:
        """将轨迹逐行写入日志，并返回轨迹文本。

        Args:
            logger: 目标 logger，缺省时通过 :func:`get_logger` 取得本模块的 logger。
            level: 日志级别。

        Returns:
            与 :meth:`get_timing_trace` 相同的文本。
        """

        target = logger or get_logger(__name__)
        trace = self.get_timing_trace()
        for line in trace.splitlines():
            target.log(level, line)
        return trace

    def interval_table(self) -> "pd.DataFrame":
        """以 DataFrame 形式返回各区间耗时。

        每个区间一行；同一区间匹配到多个样本数时，除第一个匹配外每个再追加一行。
        无样本数的行 ``samples`` 为 ``<NA>``、``per_sample`` 为 ``NaN``。
        """

        rows: list[tuple[str, str, float, int | None, float]] = []
        for previous, current, seconds, matches in self._iter_intervals():
            if not matches:
                rows.append((previous.label, current.label, seconds, None, float("nan")))
                continue
            for sample in matches:
                rows.append(
                    (
                        previous.label,
                        current.label,
                        seconds,
                        sample.count,
                        per_sample_seconds(seconds, sample.count),
                    )
                )

        frame = pd.DataFrame(rows, columns=TABLE_COLUMNS)
        frame["seconds"] = frame["seconds"].astype("float64")
        frame["samples"] = frame["samples"].astype("Int64")
        frame["per_sample"] = frame["per_sample"].astype("float64")
        return frame

    def _iter_intervals(
        self,
    ) -> Iterator[Tuple[Measurement, Measurement, float, List[SampleCount]]]:
        for index in range(1, len(self._measurements)):
            previous = self._measurements[index - 1]
            current = self._measurements[index]
            seconds = to_seconds(elapsed_microseconds(previous.timestamp, current.timestamp))
            matches = [sample for sample in self._samples if sample.label == current.label]
            yield previous, current, seconds, matches
