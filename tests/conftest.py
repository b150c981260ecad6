#!/usr/bin/env python3
"""Shared fixtures for the EDAcation test suite."""

import copy

import pytest

from edacation.project import ProjectInputFile, parse_configuration
from edacation.project.files import InputFileType

ECP5_TARGET = {
    "id": "default",
    "name": "ECP5 - LFE5U-25 - caBGA381",
    "vendor": "lattice",
    "family": "ecp5",
    "device": "lfe5u-25",
    "package": "caBGA381",
}


@pytest.fixture
def make_target():
    """Factory for raw target dictionaries (ECP5 LFE5U-25 unless overridden)."""

    def _make(target_id="default", **overrides):
        data = copy.deepcopy(ECP5_TARGET)
        data["id"] = target_id
        data.update(overrides)
        return data

    return _make


@pytest.fixture
def make_configuration(make_target):
    """Factory for parsed configurations from raw targets and defaults."""

    def _make(targets=None, defaults=None):
        raw = {"targets": targets if targets is not None else [make_target()]}
        if defaults is not None:
            raw["defaults"] = defaults
        return parse_configuration(raw)

    return _make


@pytest.fixture
def configuration(make_configuration):
    return make_configuration()


@pytest.fixture
def verilog_files():
    return [ProjectInputFile("counter.v")]


@pytest.fixture
def simulation_files():
    return [
        ProjectInputFile("counter.v"),
        ProjectInputFile("counter_tb.v", InputFileType.TESTBENCH),
    ]
