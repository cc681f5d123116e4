"""计时核心：记录类型与 Stopwatch。"""
