#!/usr/bin/env python3
"""Unit tests for configuration parsing and serialization."""

import pytest

from edacation.exceptions import SchemaValidationError
from edacation.project.configuration import (
    DEFAULT_CONFIGURATION_DATA,
    NextpnrOptions,
    TargetValueListConfiguration,
    ValueListConfiguration,
    YosysOptions,
    default_configuration,
    parse_configuration,
    serialize_configuration,
    validate_configuration,
)


class TestParseConfiguration:
    """Parsing fills in documented defaults."""

    def test_minimal_target(self, make_target):
        configuration = parse_configuration({"targets": [make_target()]})

        assert configuration.defaults is None
        assert len(configuration.targets) == 1
        target = configuration.targets[0]
        assert target.id == "default"
        assert target.directory is None
        assert target.workers == {}

    def test_value_list_defaults(self, make_target):
        raw = make_target(yosys={"inputFiles": {}})
        configuration = parse_configuration({"targets": [raw]})

        value_list = configuration.targets[0].get_worker("yosys").get_value_list("inputFiles")
        assert isinstance(value_list, TargetValueListConfiguration)
        assert value_list.use_generated is None
        assert value_list.use_default is True
        assert value_list.values == []

    def test_default_level_lists_have_no_use_default(self, make_target):
        raw = {
            "targets": [make_target()],
            "defaults": {"nextpnr": {"arguments": {"values": ["--seed 1"]}}},
        }
        configuration = parse_configuration(raw)

        value_list = configuration.defaults.get_worker("nextpnr").get_value_list("arguments")
        assert type(value_list) is ValueListConfiguration
        assert value_list.values == ["--seed 1"]

    def test_options_parsed(self, make_target):
        raw = make_target(
            yosys={"options": {"optimize": False, "topLevelModule": "top"}},
            nextpnr={"options": {"placedSvg": False}},
        )
        target = parse_configuration({"targets": [raw]}).targets[0]

        assert target.get_worker("yosys").options == YosysOptions(
            optimize=False, top_level_module="top"
        )
        assert target.get_worker("nextpnr").options == NextpnrOptions(placed_svg=False)

    def test_unknown_keys_ignored(self, make_target):
        raw = make_target(comment="kept out", yosys={"unknown": 1})
        target = parse_configuration({"targets": [raw]}).targets[0]
        assert target.get_worker("yosys").value_lists == {}


class TestValidationErrors:
    """Malformed data is rejected with every problem listed."""

    def test_missing_targets(self):
        with pytest.raises(SchemaValidationError) as exc_info:
            parse_configuration({})
        assert "targets" in exc_info.value.errors[0]

    def test_not_an_object(self):
        with pytest.raises(SchemaValidationError):
            parse_configuration(["targets"])

    def test_missing_target_fields(self, make_target):
        raw = make_target()
        del raw["package"]
        with pytest.raises(SchemaValidationError) as exc_info:
            parse_configuration({"targets": [raw]})
        assert "package" in str(exc_info.value)

    def test_wrong_types_reported_together(self, make_target):
        raw = make_target(
            yosys={"options": {"optimize": "yes"}},
            nextpnr={"arguments": {"values": "not a list"}},
        )
        configuration, result = validate_configuration({"targets": [raw]})

        assert configuration is None
        assert len(result.errors) == 2
        assert any("targets[0].yosys.options.optimize" in e for e in result.errors)
        assert any("targets[0].nextpnr.arguments.values" in e for e in result.errors)

    def test_non_string_value_entries(self, make_target):
        raw = make_target(iverilog={"arguments": {"values": ["-g2012", 3]}})
        with pytest.raises(SchemaValidationError) as exc_info:
            parse_configuration({"targets": [raw]})
        assert "values[1]" in str(exc_info.value)

    def test_bool_is_not_a_string(self, make_target):
        raw = make_target(flasher={"options": {"board": True}})
        with pytest.raises(SchemaValidationError):
            parse_configuration({"targets": [raw]})

    def test_duplicate_target_ids(self, make_target):
        with pytest.raises(SchemaValidationError) as exc_info:
            parse_configuration({"targets": [make_target("a"), make_target("a")]})
        assert "duplicate" in str(exc_info.value)


class TestSerializeConfiguration:
    def test_round_trip(self, make_target):
        raw = {
            "defaults": {
                "yosys": {"commands": {"useGenerated": True, "values": ["stat;"]}},
            },
            "targets": [
                make_target(
                    directory="build",
                    nextpnr={
                        "arguments": {"useGenerated": True, "useDefault": False, "values": []},
                        "options": {"pinConfigFile": "pins.lpf"},
                    },
                )
            ],
        }
        configuration = parse_configuration(raw)
        data = serialize_configuration(configuration)

        assert parse_configuration(data) == configuration
        assert data["targets"][0]["directory"] == "build"
        assert data["targets"][0]["nextpnr"]["options"] == {"pinConfigFile": "pins.lpf"}

    def test_serialized_shape_omits_unset_use_generated(self, make_target):
        raw = make_target(yosys={"inputFiles": {"values": ["extra.v"]}})
        configuration = parse_configuration({"targets": [raw]})
        data = serialize_configuration(configuration)

        assert parse_configuration(data) == configuration
        assert data["targets"][0]["yosys"]["inputFiles"] == {
            "useDefault": True,
            "values": ["extra.v"],
        }


class TestDefaultConfiguration:
    def test_default_target(self):
        configuration = default_configuration()
        assert [t.id for t in configuration.targets] == ["default"]
        assert configuration.targets[0].family == "ecp5"

    def test_fresh_copy_each_time(self):
        first = default_configuration()
        first.targets[0].name = "changed"
        assert default_configuration().targets[0].name != "changed"
        assert DEFAULT_CONFIGURATION_DATA["targets"][0]["name"] != "changed"
