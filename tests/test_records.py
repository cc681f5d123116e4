"""计时记录辅助函数的测试。"""

from __future__ import annotations

import math

from tracetimer.timing.records import (
    elapsed_microseconds,
    format_seconds,
    per_sample_seconds,
    to_seconds,
)


def test_elapsed_microseconds_truncates_toward_zero():
    assert elapsed_microseconds(0, 1_999) == 1
    assert elapsed_microseconds(1_999, 0) == -1
    assert elapsed_microseconds(5, 5) == 0


def test_to_seconds_and_format():
    assert to_seconds(1_500_000) == 1.5
    assert format_seconds(to_seconds(12)) == "1.2e-05"
    assert format_seconds(2) == "2"
    assert format_seconds(1.234567) == "1.23457"
    assert format_seconds(0.0) == "0"


def test_per_sample_seconds_degenerate_counts():
    assert per_sample_seconds(1.0, 4) == 0.25
    assert math.isinf(per_sample_seconds(1.0, 0))
    assert math.isnan(per_sample_seconds(0.0, 0))
    assert per_sample_seconds(1.0, -4) == -0.25
