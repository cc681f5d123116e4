"""tracetimer：记录带标签的时间点并输出区间耗时轨迹。"""

from tracetimer.timing.records import Measurement, SampleCount
from tracetimer.timing.stopwatch import Stopwatch

__all__ = ["Measurement", "SampleCount", "Stopwatch"]
__version__ = "0.1.0"
