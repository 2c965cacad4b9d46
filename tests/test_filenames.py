# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Unit tests for output filename derivation."""

import pytest

from irforge.codegen.filenames import (
    ArtifactRole,
    append_generated_filenames,
    derive_filename,
    get_generated_filenames,
    split_filename,
    strip_role_suffix,
)


class TestSplitFilename:

    def test_simple(self):
        assert split_filename("adder.sv") == ("adder", "sv")

    def test_only_last_dot_splits(self):
        assert split_filename("adder.opt.v") == ("adder.opt", "v")

    def test_missing_extension(self):
        assert split_filename("adder") == ("adder", "")

    def test_dots_in_directory_are_kept(self):
        assert split_filename("rtl.v2/adder") == ("rtl.v2/adder", "")
        assert split_filename("rtl.v2/adder.sv") == ("rtl.v2/adder", "sv")

    def test_hidden_file_has_no_extension(self):
        assert split_filename(".sv") == (".sv", "")


class TestDeriveFilename:

    @pytest.mark.parametrize("role,expected", [
        (ArtifactRole.MODULE_SIGNATURE, "adder.sig.textproto"),
        (ArtifactRole.SCHEDULE, "adder.schedule.textproto"),
        (ArtifactRole.VERILOG_LINE_MAP, "adder.verilog_line_map.textproto"),
        (ArtifactRole.BLOCK_IR, "adder.block.ir"),
        (ArtifactRole.VERILOG, "adder.sv"),
    ])
    def test_default_names(self, role, expected):
        assert derive_filename("adder", role) == expected

    def test_plain_verilog_extension(self):
        assert derive_filename("adder", ArtifactRole.VERILOG, "v") == "adder.v"

    def test_rejects_non_verilog_extension(self):
        with pytest.raises(ValueError):
            derive_filename("adder", ArtifactRole.VERILOG, "vhd")

    @pytest.mark.parametrize("role", list(ArtifactRole))
    def test_strip_recovers_basename(self, role):
        """Deriving and then stripping the role suffix is the identity."""
        for basename in ("adder", "lib/fifo.opt", "x"):
            assert strip_role_suffix(derive_filename(basename, role), role) == basename

    def test_strip_rejects_foreign_suffix(self):
        with pytest.raises(ValueError, match="does not end with"):
            strip_role_suffix("adder.block.ir", ArtifactRole.SCHEDULE)


class TestArtifactRole:

    def test_attributes_match_rule_attributes(self):
        assert {r.attribute for r in ArtifactRole} == {
            "verilog_file",
            "module_sig_file",
            "schedule_file",
            "verilog_line_map_file",
            "block_ir_file",
        }

    def test_output_flags(self):
        assert ArtifactRole.MODULE_SIGNATURE.output_flag == "output_signature_path"
        assert ArtifactRole.VERILOG.output_flag == "output_verilog_path"

    def test_verilog_has_no_suffix(self):
        assert ArtifactRole.VERILOG.suffix is None
        assert ArtifactRole.BLOCK_IR.suffix == ".block.ir"


class TestGeneratedFilenames:

    def test_fills_in_defaults(self):
        args = append_generated_filenames({}, "adder", {})
        assert args == {
            "module_sig_file": "adder.sig.textproto",
            "block_ir_file": "adder.block.ir",
            "schedule_file": "adder.schedule.textproto",
            "verilog_line_map_file": "adder.verilog_line_map.textproto",
        }

    def test_keeps_caller_entries(self):
        args = append_generated_filenames({"block_ir_file": "custom.ir"}, "adder", {})
        assert args["block_ir_file"] == "custom.ir"

    def test_combinational_has_no_schedule(self):
        codegen_args = {"generator": "combinational"}
        args = append_generated_filenames({}, "adder", codegen_args)
        assert "schedule_file" not in args
        assert get_generated_filenames(args, codegen_args) == [
            "adder.sig.textproto",
            "adder.block.ir",
            "adder.verilog_line_map.textproto",
        ]

    def test_lists_schedule_for_pipeline(self):
        codegen_args = {"generator": "pipeline"}
        args = append_generated_filenames({}, "adder", codegen_args)
        assert get_generated_filenames(args, codegen_args)[-1] == "adder.schedule.textproto"
