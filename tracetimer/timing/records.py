"""Stopwatch 使用的计时记录类型与数值辅助函数。"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

NANOS_PER_MICRO = 1_000
MICROS_PER_SECOND = 1_000_000


@dataclass(frozen=True)
class Measurement:
    """带标签的单调时间点，``timestamp`` 以纳秒为单位。"""

    label: str
    timestamp: int


@dataclass(frozen=True)
class SampleCount:
    """某个测量点覆盖的样本数量（例如循环迭代次数）。"""

    label: str
    count: int


def elapsed_microseconds(start: int, end: int) -> int:
    """返回两个纳秒时间点之间的整微秒数，向零截断。

    Args:
        start: 较早的时间点（纳秒）。
        end: 较晚的时间点（纳秒）。

    Returns:
        ``end - start`` 折算后的微秒数。
    """

    delta = end - start
    if delta < 0:
        return -((-delta) // NANOS_PER_MICRO)
    return delta // NANOS_PER_MICRO


def to_seconds(micros: int) -> float:
    """将微秒换算为小数秒。"""

    return micros / MICROS_PER_SECOND


def per_sample_seconds(seconds: float, count: int) -> float:
    """按样本数均分区间耗时。

    样本数不做校验：为 0 时得到 ``inf``（区间也为 0 时得到 ``nan``），
    为负数时得到负值，不会抛出异常。

    Args:
        seconds: 区间耗时（秒）。
        count: 样本数量。

    Returns:
        每个样本的平均耗时（秒）。
    """

    with np.errstate(divide="ignore", invalid="ignore"):
        return float(np.float64(seconds) / count)


def format_seconds(seconds: float) -> str:
    """按 ``%g`` 规则（6 位有效数字）渲染秒数，例如 ``1.23457``、``0``、``1.2e-05``。"""

    return f"{float(seconds):g}"
