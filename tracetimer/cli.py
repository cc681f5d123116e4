"""tracetimer 的命令行接口模块。"""

from __future__ import annotations

import argparse
import shlex
import subprocess
from pathlib import Path
from typing import Any, Dict

from tracetimer.timing import stopwatch as stopwatch_module
from tracetimer.timing.stopwatch import Stopwatch
from tracetimer.utils.io import read_yaml
from tracetimer.utils.logging import get_logger

DEFAULT_CONFIG = Path(__file__).resolve().parent / "config" / "defaults.yaml"
EXIT_NOT_FOUND = 127


def _build_parser() -> "argparse.ArgumentParser":
    """构建 ``run`` 子命令的解析器。"""

    parser = argparse.ArgumentParser(description="Time shell commands and print an elapsed-time trace")
    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run commands in order and trace the time between them")
    run_parser.add_argument("commands", nargs="+", metavar="CMD", help="Command line to execute and time.")
    run_parser.add_argument(
        "--config",
        type=str,
        default=str(DEFAULT_CONFIG),
        help="Path to the YAML configuration file.",
    )
    run_parser.add_argument(
        "--repeat",
        type=_positive_int,
        default=None,
        help="Run each command N times and report the per-sample average.",
    )
    run_parser.add_argument("--table", action="store_true", help="Also print the interval table.")
    run_parser.add_argument("--log-level", type=str, default=None, help="Override logging.level from the config.")
    run_parser.set_defaults(func=handle_run)

    return parser


def handle_run(args: "argparse.Namespace") -> None:
    """处理 ``run`` 子命令：依次执行命令，每条命令结束后记录一个测量点。

    空命令或无法启动的命令（找不到、无执行权限、是目录等）会中止后续执行，
    输出已有轨迹后以 127 退出。
    """

    config = _load_config(args.config)
    run_cfg = config.get("run", {}) or {}
    repeat = args.repeat if args.repeat is not None else int(run_cfg.get("repeat", 1))
    if repeat < 1:
        raise ValueError(f"run.repeat must be a positive integer, got {repeat}")
    show_table = args.table or bool(run_cfg.get("table", False))
    level = args.log_level or (config.get("logging", {}) or {}).get("level", "INFO")

    logger = get_logger("tracetimer.cli", level)
    get_logger(stopwatch_module.__name__, level)

    stopwatch = Stopwatch()
    exit_code = 0
    for command in args.commands:
        argv = shlex.split(command)
        if not argv:
            logger.error("Cannot launch %r: empty command", command)
            exit_code = EXIT_NOT_FOUND
            break
        try:
            _run_repeated(command, argv, repeat, logger)
        except OSError as exc:
            logger.error("Cannot launch %r: %s", command, exc)
            exit_code = EXIT_NOT_FOUND
            break
        stopwatch.add_measurement(command, repeat if repeat > 1 else None)

    print(stopwatch.get_timing_trace(), end="")
    if show_table:
        print(stopwatch.interval_table().to_string(index=False))
    if exit_code:
        raise SystemExit(exit_code)


def _run_repeated(command: str, argv: list[str], repeat: int, logger) -> None:
    """执行 ``argv`` 共 ``repeat`` 次，非零退出码只记录警告，启动失败时抛出 :class:`OSError`。"""

    for attempt in range(1, repeat + 1):
        result = subprocess.run(argv, check=False)
        if result.returncode != 0:
            logger.warning(
                "Command %r exited with status %d (run %d/%d)",
                command,
                result.returncode,
                attempt,
                repeat,
            )


def _positive_int(value: str) -> int:
    """argparse 类型函数：只接受 >= 1 的整数。"""

    try:
        parsed = int(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"expected an integer, got {value!r}") from None
    if parsed < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got {parsed}")
    return parsed


def main() -> None:
    """CLI 入口函数，负责拼接解析器与各个处理函数。"""

    parser = _build_parser()
    args = parser.parse_args()
    handler = getattr(args, "func", None)
    if handler is None:
        parser.print_help()
        return
    handler(args)


def _load_config(path: str) -> Dict[str, Any]:
    """读取内置默认配置，再叠加 ``path`` 指向的用户配置（``path`` 为空时只用默认值）。"""

    defaults = read_yaml(DEFAULT_CONFIG)
    if not path:
        return defaults

    user_path = _find_config(path)
    if user_path is None:
        raise FileNotFoundError(
            f"Config file '{path}' not found relative to current directory or package root."
        )
    return _merge_dicts(defaults, read_yaml(user_path))


def _find_config(path: str) -> Path | None:
    """依次在当前目录与包根目录下查找配置文件。"""

    for candidate in (Path(path), DEFAULT_CONFIG.parent.parent.parent / path):
        if candidate.is_file():
            return candidate
    return None


def _merge_dicts(base: Dict[str, Any], overrides: Dict[str, Any]) -> Dict[str, Any]:
    """递归地合并两份配置字典。"""

    merged = dict(base)
    for key, value in overrides.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = _merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


if __name__ == "__main__":
    main()
