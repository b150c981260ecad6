#!/usr/bin/env python3
"""Unit tests for sequential pipeline execution."""

import shutil
import subprocess
from types import SimpleNamespace

import pytest

from edacation.cli.tool_runner import ToolRunner
from edacation.exceptions import ToolExecutionError
from edacation.project.worker import WorkerStep


@pytest.fixture
def calls(monkeypatch, tmp_path):
    """Record every subprocess.run call; exit codes come from ``returncodes``."""
    recorded = []
    returncodes = {}

    monkeypatch.setattr(shutil, "which", lambda tool: str(tmp_path / "bin" / tool))

    def fake_run(cmd, cwd=None, check=False):
        script = tmp_path / "design.ys"
        recorded.append(
            {
                "cmd": cmd,
                "cwd": cwd,
                "check": check,
                "script": script.read_text() if script.exists() else None,
            }
        )
        return SimpleNamespace(returncode=returncodes.get(cmd[0], 0))

    monkeypatch.setattr(subprocess, "run", fake_run)
    return SimpleNamespace(recorded=recorded, returncodes=returncodes)


class TestToolRunner:
    def test_argument_step(self, calls, tmp_path):
        runner = ToolRunner(tmp_path)
        runner.run([WorkerStep("run", "vvp", ["simulator.vvp"])])

        assert calls.recorded == [
            {"cmd": ["vvp", "simulator.vvp"], "cwd": str(tmp_path), "check": False, "script": None}
        ]

    def test_script_step_written_then_removed(self, calls, tmp_path):
        step = WorkerStep("synth", "yosys", commands=['read_json "a.json";', "synth_ecp5;"])
        ToolRunner(tmp_path).run([step], target="ECP5", device="LFE5U-25 (caBGA381)")

        call = calls.recorded[0]
        assert call["cmd"] == ["yosys", "design.ys"]
        assert "# Target: ECP5" in call["script"]
        assert 'read_json "a.json";\nsynth_ecp5;\n' in call["script"]
        assert not (tmp_path / "design.ys").exists()

    def test_steps_run_in_order(self, calls, tmp_path):
        steps = [
            WorkerStep("compile", "iverilog", ["-o", "sim.vvp", "a.v"]),
            WorkerStep("run", "vvp", ["sim.vvp"]),
        ]
        ToolRunner(tmp_path).run(steps)
        assert [c["cmd"][0] for c in calls.recorded] == ["iverilog", "vvp"]

    def test_failure_aborts_pipeline(self, calls, tmp_path):
        calls.returncodes["iverilog"] = 2
        steps = [
            WorkerStep("compile", "iverilog", ["a.v"]),
            WorkerStep("run", "vvp", ["sim.vvp"]),
        ]

        with pytest.raises(ToolExecutionError) as exc_info:
            ToolRunner(tmp_path).run(steps)

        assert exc_info.value.tool == "iverilog"
        assert exc_info.value.returncode == 2
        assert len(calls.recorded) == 1

    def test_failed_script_step_still_removes_script(self, calls, tmp_path):
        calls.returncodes["yosys"] = 1
        step = WorkerStep("prepare", "yosys", commands=["proc;"])

        with pytest.raises(ToolExecutionError):
            ToolRunner(tmp_path).run_step(step)
        assert not (tmp_path / "design.ys").exists()

    def test_missing_tool(self, monkeypatch, tmp_path):
        monkeypatch.setattr(shutil, "which", lambda _: None)

        def fail_run(*args, **kwargs):
            raise AssertionError("subprocess.run should not be called")

        monkeypatch.setattr(subprocess, "run", fail_run)

        with pytest.raises(ToolExecutionError) as exc_info:
            ToolRunner(tmp_path).run_step(WorkerStep("pnr", "nextpnr-ecp5", ["--25k"]))
        assert exc_info.value.returncode is None
        assert "not found" in str(exc_info.value)

    def test_get_command(self, tmp_path):
        runner = ToolRunner(tmp_path)
        assert runner.get_command(WorkerStep("pack", "ecppack", ["a", "b"])) == [
            "ecppack",
            "a",
            "b",
        ]
        assert runner.get_command(WorkerStep("rtl", "yosys", commands=["proc;"])) == [
            "yosys",
            "design.ys",
        ]
