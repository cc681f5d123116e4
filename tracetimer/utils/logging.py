"""tracetimer 的日志工具。"""

from __future__ import annotations

import logging
from typing import Optional, Union

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def get_logger(name: str, level: Union[int, str, None] = None) -> "logging.Logger":
    """返回带统一格式的 logger，重复调用不会叠加 handler。

    Args:
        name: 调用模块希望使用的日志名称。
        level: 可选日志级别（如 ``"DEBUG"`` 或 ``logging.DEBUG``），
            提供时总会覆盖当前级别。

    Returns:
        配置了基础格式化器的 :class:`logging.Logger` 实例。
    """

    logger = logging.getLogger(name)
    if logger.handlers:
        if level is not None:
            logger.setLevel(_coerce_level(level))
        return logger

    logger.setLevel(_coerce_level(level) if level is not None else logging.INFO)
    handler: Optional[logging.Handler] = logging.StreamHandler()
    formatter = logging.Formatter(fmt=LOG_FORMAT, datefmt=DATE_FORMAT)
    handler.setFormatter(formatter)
    logger.addHandler(handler)
    logger.propagate = False
    return logger


def _coerce_level(level: Union[int, str]) -> int:
    """把字符串级别名转换为 ``logging`` 的整数级别。"""

    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved
