#!/usr/bin/env python3
"""Unit tests for the explicit configuration setters."""

import pytest

from edacation.exceptions import InvalidReferenceError
from edacation.project import settings
from edacation.project.configuration import (
    FlasherOptions,
    NextpnrOptions,
    TargetValueListConfiguration,
    YosysOptions,
    parse_configuration,
    serialize_configuration,
)


class TestOptionSetters:
    """Setters create missing blocks before assigning."""

    def test_set_top_level_module_creates_blocks(self, configuration):
        settings.set_yosys_top_level_module(configuration, "default", "top")

        worker = configuration.get_target("default").get_worker("yosys")
        assert worker.options == YosysOptions(top_level_module="top")

    def test_empty_string_clears_option(self, configuration):
        settings.set_yosys_top_level_module(configuration, "default", "top")
        settings.set_yosys_top_level_module(configuration, "default", "")

        options = configuration.get_target("default").get_worker("yosys").options
        assert options.top_level_module is None

    def test_nextpnr_flags(self, configuration):
        settings.set_nextpnr_placed_svg(configuration, "default", False)
        settings.set_nextpnr_routed_json(configuration, "default", False)
        settings.set_nextpnr_pin_config_file(configuration, "default", "pins.lpf")

        options = configuration.get_target("default").get_worker("nextpnr").options
        assert options == NextpnrOptions(
            placed_svg=False, routed_json=False, pin_config_file="pins.lpf"
        )

    def test_flasher_board(self, configuration):
        settings.set_flasher_board(configuration, "default", "ulx3s")
        options = configuration.get_target("default").get_worker("flasher").options
        assert options == FlasherOptions(board="ulx3s")

    def test_existing_options_preserved(self, make_configuration, make_target):
        configuration = make_configuration(
            [make_target(yosys={"options": {"optimize": False}})]
        )
        settings.set_yosys_top_level_module(configuration, "default", "top")

        options = configuration.get_target("default").get_worker("yosys").options
        assert options == YosysOptions(optimize=False, top_level_module="top")

    def test_unknown_target(self, configuration):
        with pytest.raises(InvalidReferenceError):
            settings.set_flasher_board(configuration, "missing", "ulx3s")
        assert configuration.get_target("default").workers == {}

    def test_target_directory(self, configuration):
        settings.set_target_directory(configuration, "default", "build")
        assert configuration.get_target("default").directory == "build"


class TestValueListSetters:
    def test_target_value_list_created(self, configuration):
        settings.set_value_list_values(
            configuration, "default", "nextpnr", "arguments", ["--seed 1"]
        )
        settings.set_value_list_use_default(configuration, "default", "nextpnr", "arguments", False)

        value_list = (
            configuration.get_target("default").get_worker("nextpnr").get_value_list("arguments")
        )
        assert value_list == TargetValueListConfiguration(values=["--seed 1"], use_default=False)

    def test_unknown_key_rejected(self, configuration):
        with pytest.raises(ValueError):
            settings.set_value_list_values(configuration, "default", "yosys", "arguments", [])

    def test_unknown_key_creates_nothing(self, configuration):
        with pytest.raises(ValueError):
            settings.set_value_list_use_generated(
                configuration, "default", "flasher", "arguments", False
            )
        with pytest.raises(ValueError):
            settings.set_default_value_list_values(configuration, "yosys", "arguments", ["-q"])

        assert configuration.get_target("default").workers == {}
        assert configuration.defaults is None

    def test_unknown_worker_rejected(self, configuration):
        with pytest.raises(ValueError):
            settings.set_value_list_values(configuration, "default", "vivado", "inputFiles", [])

    def test_default_value_list_creates_defaults(self, configuration):
        assert configuration.defaults is None
        settings.set_default_value_list_values(configuration, "yosys", "commands", ["stat;"])
        settings.set_default_value_list_use_generated(configuration, "yosys", "commands", False)

        value_list = configuration.defaults.get_worker("yosys").get_value_list("commands")
        assert value_list.values == ["stat;"]
        assert value_list.use_generated is False

    def test_result_still_serializes(self, configuration):
        settings.set_value_list_use_generated(configuration, "default", "yosys", "inputFiles", False)
        settings.set_iverilog_testbench_file(configuration, "default", "tb.v")

        assert parse_configuration(serialize_configuration(configuration)) == configuration
