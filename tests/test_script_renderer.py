#!/usr/bin/env python3
"""Tests for step script rendering."""

import pytest

from edacation.exceptions import ScriptRenderError
from edacation.project.worker import WorkerStep
from edacation.string_utils import SCRIPT_HEADER_BAR
from edacation.templating import ScriptRenderer


@pytest.fixture
def renderer():
    return ScriptRenderer()


class TestScriptRenderer:
    def test_yosys_script(self, renderer):
        step = WorkerStep("synth", "yosys", commands=['read_json "p.json";', "synth_ecp5;"])
        text = renderer.render_step(step, target="ECP5", device="LFE5U-25 (caBGA381)")

        lines = text.splitlines()
        assert lines[0] == SCRIPT_HEADER_BAR
        assert lines[1] == "# Yosys synth script"
        assert "# Target: ECP5" in lines
        assert "# Device: LFE5U-25 (caBGA381)" in lines
        assert lines[-2:] == ['read_json "p.json";', "synth_ecp5;"]
        assert text.endswith("\n")

    def test_commands_not_escaped(self, renderer):
        step = WorkerStep("rtl", "yosys", commands=['tee -q -o "s.json" stat -json -width *;'])
        assert 'tee -q -o "s.json" stat -json -width *;' in renderer.render_step(step)

    def test_argument_step_rejected(self, renderer):
        with pytest.raises(ScriptRenderError):
            renderer.render_step(WorkerStep("run", "vvp", ["sim.vvp"]))

    def test_unknown_tool_rejected(self, renderer):
        with pytest.raises(ScriptRenderError):
            renderer.render_step(WorkerStep("x", "abc", commands=["strash"]))

    def test_broken_template(self, tmp_path):
        scripts = tmp_path / "scripts"
        scripts.mkdir()
        (scripts / "yosys.ys.j2").write_text("{{ missing_variable }}\n")

        renderer = ScriptRenderer(template_dir=tmp_path)
        with pytest.raises(ScriptRenderError) as exc_info:
            renderer.render_step(WorkerStep("synth", "yosys", commands=["synth;"]))
        assert "scripts/yosys.ys.j2" in str(exc_info.value)

    def test_write_step_script(self, renderer, tmp_path):
        path = renderer.write_step_script(
            WorkerStep("prepare", "yosys", commands=["proc;"]), tmp_path / "design.ys"
        )
        assert path.read_text(encoding="utf-8").splitlines()[-1] == "proc;"
