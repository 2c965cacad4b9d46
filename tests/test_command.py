# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for the CommandLineBuilder."""

from irforge.codegen.command import CommandLineBuilder


def test_tool_only():
    builder = CommandLineBuilder("bin/tool")
    assert builder.generate() == ["bin/tool"]
    assert len(builder) == 1


def test_empty_builder():
    builder = CommandLineBuilder()
    assert builder.render() == ""
    assert len(builder) == 0


def test_chaining_preserves_call_order():
    builder = (
        CommandLineBuilder("bin/tool")
        .arg("in.ir")
        .flag("top", "adder")
        .arg("more.ir")
    )
    assert builder.generate() == ["bin/tool", "in.ir", "--top=adder", "more.ir"]


def test_flags_are_sorted_by_name():
    first = CommandLineBuilder().flags({"top": "a", "delay_model": "unit", "reset": "rst"})
    second = CommandLineBuilder().flags({"reset": "rst", "top": "a", "delay_model": "unit"})
    assert first.render() == "--delay_model=unit --reset=rst --top=a"
    assert first.generate() == second.generate()


def test_optional_flag_skips_unset_values():
    builder = (
        CommandLineBuilder()
        .optional_flag("a", None)
        .optional_flag("b", "")
        .optional_flag("c", "3")
    )
    assert builder.generate() == ["--c=3"]


def test_values_are_stringified():
    builder = CommandLineBuilder().flag("pipeline_stages", 2).flag("use_system_verilog", True)
    assert builder.render() == "--pipeline_stages=2 --use_system_verilog=True"


def test_docstring_example():
    builder = CommandLineBuilder("bin/codegen_main")
    builder.arg("adder.opt.ir")
    builder.flags({"pipeline_stages": "2", "delay_model": "unit"})
    builder.flag("output_verilog_path", "out/adder.sv")
    assert builder.render() == (
        "bin/codegen_main adder.opt.ir --delay_model=unit --pipeline_stages=2 "
        "--output_verilog_path=out/adder.sv"
    )
