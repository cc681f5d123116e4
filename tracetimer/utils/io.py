"""读取 YAML 配置的 IO 辅助函数。"""

from __future__ import annotations

from pathlib import Path
from typing import Any, Dict, Union

import yaml


def read_yaml(path: Union[str, Path]) -> Dict[str, Any]:
    """读取 YAML 配置文件，顶层必须是映射。

    Args:
        path: YAML 文件路径，例如 ``tracetimer/config/defaults.yaml``。

    Returns:
        解析后的字典；文件不存在或内容为空时返回空字典。

    Raises:
        ValueError: 文件顶层不是映射（例如列表或标量）。
    """

    yaml_path = Path(path)
    if not yaml_path.exists():
        return {}
    with yaml_path.open("r", encoding="utf-8") as handle:
        payload = yaml.safe_load(handle)
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValueError(f"{yaml_path}: expected a mapping at the top level, got {type(payload).__name__}")
    return payload
