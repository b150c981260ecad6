#!/usr/bin/env python3
"""Unit tests for Icarus Verilog simulation pipeline generation."""

import pytest

from edacation.exceptions import MissingTestbenchError
from edacation.project import settings
from edacation.project.files import InputFileType, ProjectInputFile
from edacation.project.iverilog import get_iverilog_worker_options, get_waveform_file


class TestIVerilogPipeline:
    def test_compile_then_run(self, configuration, simulation_files):
        worker = get_iverilog_worker_options(configuration, "default", simulation_files)

        compile_step, run_step = worker.steps
        assert compile_step.id == "compile"
        assert compile_step.tool == "iverilog"
        assert compile_step.arguments == ["-o", "simulator.vvp", "counter.v", "counter_tb.v"]
        assert run_step.id == "run"
        assert run_step.tool == "vvp"
        assert run_step.arguments == ["simulator.vvp"]

    def test_outputs(self, configuration, simulation_files):
        worker = get_iverilog_worker_options(configuration, "default", simulation_files)
        assert worker.input_files == ["counter.v", "counter_tb.v"]
        assert worker.output_files == ["simulator.vvp", "counter_tb.vcd"]

    def test_missing_testbench(self, configuration, verilog_files):
        with pytest.raises(MissingTestbenchError):
            get_iverilog_worker_options(configuration, "default", verilog_files)

    def test_explicit_testbench_wins(self, configuration, simulation_files):
        files = simulation_files + [ProjectInputFile("tb/alt_tb.v")]
        settings.set_iverilog_testbench_file(configuration, "default", "tb/alt_tb.v")
        worker = get_iverilog_worker_options(configuration, "default", files)

        assert worker.steps[0].arguments == ["-o", "simulator.vvp", "counter.v", "tb/alt_tb.v"]
        assert worker.output_files[-1] == "alt_tb.vcd"

    def test_first_testbench_chosen(self, configuration):
        files = [
            ProjectInputFile("a_tb.v", InputFileType.TESTBENCH),
            ProjectInputFile("b_tb.v", InputFileType.TESTBENCH),
            ProjectInputFile("dut.v"),
        ]
        worker = get_iverilog_worker_options(configuration, "default", files)
        assert worker.steps[0].arguments[-1] == "a_tb.v"

    def test_vhdl_ignored(self, configuration, simulation_files):
        files = simulation_files + [ProjectInputFile("legacy.vhd")]
        worker = get_iverilog_worker_options(configuration, "default", files)
        assert "legacy.vhd" not in worker.steps[0].arguments

    def test_simulator_in_target_directory(self, make_configuration, make_target, simulation_files):
        configuration = make_configuration([make_target(directory="sim")])
        worker = get_iverilog_worker_options(configuration, "default", simulation_files)
        assert worker.steps[1].arguments == ["sim/simulator.vvp"]

    def test_argument_overrides_on_compile_only(
        self, make_configuration, make_target, simulation_files
    ):
        configuration = make_configuration(
            [make_target(iverilog={"arguments": {"values": ["-g2012 -Wall"]}})]
        )
        worker = get_iverilog_worker_options(configuration, "default", simulation_files)

        assert worker.steps[0].arguments[-2:] == ["-g2012", "-Wall"]
        assert worker.steps[1].arguments == ["simulator.vvp"]


class TestWaveformFile:
    @pytest.mark.parametrize(
        "testbench,expected",
        [
            ("counter_tb.v", "counter_tb.vcd"),
            ("tb/alu_tb.sv", "alu_tb.vcd"),
            ("noext", "noext.vcd"),
        ],
    )
    def test_named_from_testbench(self, testbench, expected):
        assert get_waveform_file(testbench) == expected
