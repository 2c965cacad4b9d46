# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Unit tests for codegen argument validation and defaults."""

import pytest

from irforge.codegen.flags import (
    CODEGEN_FLAGS,
    DEFAULT_CODEGEN_ARGS,
    GeneratorMode,
    generator_mode,
    merge_defaults,
    uses_system_verilog,
    validate_args,
    validate_verilog_filename,
)
from irforge.errors import BadExtensionError, ConfigurationError, UnknownOptionError


class TestDefaults:

    def test_default_values(self):
        assert dict(DEFAULT_CODEGEN_ARGS) == {
            "delay_model": "unit",
            "use_system_verilog": "True",
        }

    def test_defaults_are_read_only(self):
        with pytest.raises(TypeError):
            DEFAULT_CODEGEN_ARGS["delay_model"] = "asap7"

    def test_defaults_are_recognized_flags(self):
        assert set(DEFAULT_CODEGEN_ARGS) <= CODEGEN_FLAGS


class TestMergeDefaults:

    def test_user_value_wins(self):
        merged = merge_defaults({"delay_model": "sky130"})
        assert merged["delay_model"] == "sky130"
        assert merged["use_system_verilog"] == "True"

    def test_does_not_modify_inputs(self):
        user = {"top": "adder"}
        merge_defaults(user)
        assert user == {"top": "adder"}
        assert "top" not in DEFAULT_CODEGEN_ARGS

    def test_defaults_come_first(self):
        merged = merge_defaults({"top": "adder", "delay_model": "sky130"})
        assert list(merged) == ["delay_model", "use_system_verilog", "top"]

    def test_result_is_read_only(self):
        merged = merge_defaults({})
        with pytest.raises(TypeError):
            merged["top"] = "adder"


class TestValidateArgs:

    def test_accepts_known_flags(self):
        args = {"pipeline_stages": "2", "reset": "rst", "module_name": "adder"}
        assert validate_args(args) is args

    def test_empty_is_valid(self):
        assert validate_args({}) == {}

    def test_reports_first_unknown_key(self):
        with pytest.raises(UnknownOptionError) as exc_info:
            validate_args({"top": "adder", "frobnicate": "1", "zzz": "2"})
        assert exc_info.value.key == "frobnicate"
        assert str(exc_info.value) == "Unrecognized argument: frobnicate."

    def test_unknown_option_is_configuration_error(self):
        with pytest.raises(ConfigurationError):
            validate_args({"output_verilog_path": "x.sv"})

    def test_custom_allow_list(self):
        with pytest.raises(UnknownOptionError):
            validate_args({"top": "adder"}, allowed=frozenset({"delay_model"}))

    @pytest.mark.parametrize("flag", [
        "clock_period_ps", "generator", "use_system_verilog", "streaming_channel_valid_suffix",
        "flop_inputs_kind", "reset_data_path", "umulp_format", "ram_configurations",
    ])
    def test_flag_set_members(self, flag):
        assert flag in CODEGEN_FLAGS


class TestGeneratorMode:

    def test_combinational(self):
        mode = generator_mode({"generator": "combinational"})
        assert mode is GeneratorMode.COMBINATIONAL
        assert not mode.produces_schedule

    def test_pipeline(self):
        assert generator_mode({"generator": "pipeline"}) is GeneratorMode.PIPELINE

    def test_absent_generator_still_schedules(self):
        mode = generator_mode({})
        assert mode is GeneratorMode.OTHER
        assert mode.produces_schedule

    def test_match_is_exact(self):
        assert generator_mode({"generator": "Combinational"}) is GeneratorMode.OTHER


class TestVerilogDialect:

    @pytest.mark.parametrize("value,expected", [
        ("True", True),
        ("true", True),
        ("False", False),
        ("", False),
    ])
    def test_uses_system_verilog(self, value, expected):
        assert uses_system_verilog({"use_system_verilog": value}) is expected

    def test_missing_means_verilog(self):
        assert uses_system_verilog({}) is False

    def test_system_verilog_requires_sv(self):
        validate_verilog_filename("adder.sv", True)
        with pytest.raises(BadExtensionError) as exc_info:
            validate_verilog_filename("adder.v", True)
        assert "SystemVerilog filename must contain the 'sv' extension" in str(exc_info.value)

    def test_verilog_requires_v(self):
        validate_verilog_filename("adder.v", False)
        with pytest.raises(BadExtensionError) as exc_info:
            validate_verilog_filename("adder.sv", False)
        assert "Verilog filename must contain the 'v' extension" in str(exc_info.value)

    def test_missing_extension_fails(self):
        with pytest.raises(BadExtensionError):
            validate_verilog_filename("adder", True)

    def test_extension_is_case_sensitive(self):
        with pytest.raises(BadExtensionError):
            validate_verilog_filename("adder.SV", True)
