#!/usr/bin/env python3
"""Unit tests for bitstream packing and flashing pipeline generation."""

import pytest

from edacation.exceptions import UnsupportedArchitectureError
from edacation.project import settings
from edacation.project.flasher import get_flasher_worker_options


class TestFlasherPipeline:
    def test_ecp5(self, configuration):
        worker = get_flasher_worker_options(configuration, "default")

        pack, flash = worker.steps
        assert (pack.id, pack.tool, pack.arguments) == (
            "pack",
            "ecppack",
            ["ecp5.config", "ecp5.bit"],
        )
        assert (flash.id, flash.tool, flash.arguments) == (
            "flash",
            "openFPGALoader",
            ["ecp5.bit"],
        )
        assert worker.input_files == ["ecp5.config"]
        assert worker.output_files == ["ecp5.bit"]

    def test_ice40(self, make_configuration, make_target):
        configuration = make_configuration(
            [make_target(family="ice40", device="ice40hx1k", package="tq144")]
        )
        worker = get_flasher_worker_options(configuration, "default")

        assert worker.steps[0].tool == "icepack"
        assert worker.steps[0].arguments == ["ice40.asc", "ice40.bin"]
        assert worker.steps[1].arguments == ["ice40.bin"]

    def test_board_selection(self, configuration):
        settings.set_flasher_board(configuration, "default", "ulx3s")
        worker = get_flasher_worker_options(configuration, "default")
        assert worker.steps[1].arguments == ["-b", "ulx3s", "ecp5.bit"]

    def test_board_from_defaults(self, make_configuration):
        configuration = make_configuration(defaults={"flasher": {"options": {"board": "ecp5_evn"}}})
        worker = get_flasher_worker_options(configuration, "default")
        assert worker.steps[1].arguments[:2] == ["-b", "ecp5_evn"]

    def test_argument_overrides(self, make_configuration, make_target):
        configuration = make_configuration(
            [
                make_target(
                    flasher={
                        "packerArguments": {"values": ["--compress"]},
                        "flasherArguments": {"values": ["--verify"]},
                    }
                )
            ]
        )
        worker = get_flasher_worker_options(configuration, "default")
        assert worker.steps[0].arguments == ["ecp5.config", "ecp5.bit", "--compress"]
        assert worker.steps[1].arguments == ["ecp5.bit", "--verify"]

    @pytest.mark.parametrize(
        "vendor,family,device,package",
        [
            ("gowin", "gw1n", "gw1n-4", "QN48"),
            ("lattice", "nexus", "lifcl-40", "caBGA400"),
            ("generic", "generic", "generic", "generic"),
        ],
    )
    def test_unsupported_architectures(
        self, make_configuration, make_target, vendor, family, device, package
    ):
        configuration = make_configuration(
            [make_target(vendor=vendor, family=family, device=device, package=package)]
        )
        with pytest.raises(UnsupportedArchitectureError) as exc_info:
            get_flasher_worker_options(configuration, "default")
        assert exc_info.value.tool == "flasher"
