"""CLI 的冒烟测试。"""

from __future__ import annotations

import shlex
import sys

import pytest

from tracetimer import cli

NOOP = f"{shlex.quote(sys.executable)} -c pass"
FAIL = f"{shlex.quote(sys.executable)} -c \"raise SystemExit(3)\""


def test_cli_main_entrypoint_exists():
    """确认 CLI 入口可被导入。"""

    assert callable(cli.main)


def test_run_prints_trace(capsys):
    parser = cli._build_parser()
    args = parser.parse_args(["run", NOOP, FAIL])
    args.func(args)

    lines = capsys.readouterr().out.splitlines()
    assert lines[0].startswith("Total; start -> now: ")
    assert lines[1].startswith(f"start -> {NOOP}: ")
    assert lines[2].startswith(f"{NOOP} -> {FAIL}: ")
    assert len(lines) == 3


def test_run_repeat_adds_per_sample_lines_and_table(capsys):
    parser = cli._build_parser()
    args = parser.parse_args(["run", "--repeat", "2", "--table", NOOP])
    args.func(args)

    out = capsys.readouterr().out
    assert f"start -> {NOOP} per sample: " in out
    assert "per_sample" in out


def test_run_reads_repeat_from_config(tmp_path, capsys):
    config_path = tmp_path / "config.yaml"
    config_path.write_text("run:\n  repeat: 2\n", encoding="utf-8")

    parser = cli._build_parser()
    args = parser.parse_args(["run", "--config", str(config_path), NOOP])
    args.func(args)
    assert "per sample" in capsys.readouterr().out


def test_run_rejects_non_positive_repeat():
    parser = cli._build_parser()
    with pytest.raises(SystemExit) as excinfo:
        parser.parse_args(["run", "--repeat", "0", NOOP])
    assert excinfo.value.code == 2


def test_run_missing_config_raises(tmp_path):
    parser = cli._build_parser()
    args = parser.parse_args(["run", "--config", str(tmp_path / "nope.yaml"), NOOP])
    with pytest.raises(FileNotFoundError):
        args.func(args)


def test_run_unlaunchable_command_exits_127(capsys):
    parser = cli._build_parser()
    args = parser.parse_args(["run", NOOP, "tracetimer-no-such-binary-xyz", NOOP])
    with pytest.raises(SystemExit) as excinfo:
        args.func(args)

    assert excinfo.value.code == cli.EXIT_NOT_FOUND
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[1].startswith(f"start -> {NOOP}: ")


def test_run_directory_command_exits_127(tmp_path, capsys):
    """把目录当作命令执行时输出已有轨迹并以 127 退出。"""

    parser = cli._build_parser()
    args = parser.parse_args(["run", NOOP, shlex.quote(str(tmp_path))])
    with pytest.raises(SystemExit) as excinfo:
        args.func(args)

    assert excinfo.value.code == cli.EXIT_NOT_FOUND
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[1].startswith(f"start -> {NOOP}: ")


def test_run_empty_command_exits_127(capsys):
    parser = cli._build_parser()
    args = parser.parse_args(["run", NOOP, "", NOOP])
    with pytest.raises(SystemExit) as excinfo:
        args.func(args)

    assert excinfo.value.code == cli.EXIT_NOT_FOUND
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 2
    assert lines[0].startswith("Total; start -> now: ")


def test_run_without_user_config_uses_defaults(capsys):
    parser = cli._build_parser()
    args = parser.parse_args(["run", "--config", "", NOOP])
    args.func(args)
    assert "per sample" not in capsys.readouterr().out
