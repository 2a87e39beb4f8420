from __future__ import annotations

import json
import subprocess
import sys
from pathlib import Path

import numpy as np
import pytest

from homtran.cli.main import main

EXAMPLE_CONFIG = Path(__file__).resolve().parent.parent / "examples" / "arm.yaml"


def test_cli_help() -> None:
    out = subprocess.check_output([sys.executable, "-m", "homtran.cli", "--help"]).decode()
    assert "inspect" in out and "transform" in out and "relative" in out


def test_cli_transform_subprocess() -> None:
    result = subprocess.run(
        [
            sys.executable,
            "-m",
            "homtran.cli",
            "transform",
            "-c",
            str(EXAMPLE_CONFIG),
            "-f",
            "camera",
            "-p",
            "0",
            "0",
            "1",
        ],
        capture_output=True,
        text=True,
        check=False,
    )
    assert result.returncode == 0
    np.testing.assert_allclose([float(v) for v in result.stdout.split()], [2.0, 2.4, 0.6], atol=1e-8)


def test_cli_missing_command() -> None:
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code != 0


def test_cli_inspect_json(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["inspect", "-c", str(EXAMPLE_CONFIG), "--json"]) == 0
    matrices = json.loads(capsys.readouterr().out)

    assert list(matrices) == ["base", "shoulder", "wrist", "camera"]
    base = np.array(matrices["base"])
    np.testing.assert_array_equal(base[:3, 3], [1.0, 2.0, 0.0])
    np.testing.assert_array_equal(np.array(matrices["camera"])[3], [0.0, 0.0, 0.0, 1.0])


def test_cli_inspect_text(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["inspect", "-c", str(EXAMPLE_CONFIG)]) == 0
    out = capsys.readouterr().out
    for name in ["base", "shoulder", "wrist", "camera"]:
        assert f"{name}:" in out


def test_cli_transform_round_trip(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["transform", "-c", str(EXAMPLE_CONFIG), "-f", "wrist", "-p", "1", "2", "3"]) == 0
    world = capsys.readouterr().out.split()

    assert main(["transform", "-c", str(EXAMPLE_CONFIG), "-f", "wrist", "--inverse", "-p", *world]) == 0
    local = [float(v) for v in capsys.readouterr().out.split()]
    np.testing.assert_allclose(local, [1.0, 2.0, 3.0], atol=1e-7)


def test_cli_relative(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["relative", "-c", str(EXAMPLE_CONFIG), "-f", "wrist", "-t", "shoulder"]) == 0
    out = capsys.readouterr().out
    rows = [[float(v) for v in line.strip(" []").split()] for line in out.strip().splitlines()]
    np.testing.assert_allclose(
        np.array(rows),
        [[1, 0, 0, 0.4], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]],
        atol=1e-6,
    )


def test_cli_unknown_frame(capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["transform", "-c", str(EXAMPLE_CONFIG), "-f", "gripper", "-p", "0", "0", "0"]) == 1
    assert "Unknown frame 'gripper'" in capsys.readouterr().err


def test_cli_missing_config(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    assert main(["inspect", "-c", str(tmp_path / "nope.yaml")]) == 1
    assert "Config file not found" in capsys.readouterr().err


def test_cli_log_file(tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
    log_path = tmp_path / "logs" / "run.jsonl"
    assert main(["--verbose", "--log-file", str(log_path), "inspect", "-c", str(EXAMPLE_CONFIG)]) == 0
    capsys.readouterr()

    records = [json.loads(line) for line in log_path.read_text().splitlines()]
    messages = [r["message"] for r in records]
    assert "Loaded frame config" in messages
    assert all(r["name"].startswith("homtran") for r in records)
