"""测试共享的 fixture。"""

from __future__ import annotations

import pytest

from tracetimer.timing import stopwatch as stopwatch_module


@pytest.fixture
def fake_clock(monkeypatch):
    """把 Stopwatch 使用的时钟替换为按顺序返回给定纳秒值的假时钟。"""

    def install(*ticks: int):
        values = iter(ticks)
        monkeypatch.setattr(stopwatch_module, "perf_counter_ns", lambda: next(values))

    return install
