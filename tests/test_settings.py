# Copyright (c) Microsoft Corporation.
# Licensed under the MIT License.

"""Tests for settings loading and project config detection."""

from pathlib import Path

import pytest
import yaml
from pydantic import ValidationError

from irforge.settings import IrforgeSettings, get_config, load_config, reset_config
from irforge.settings.schema import _find_project_config


def _write_project(directory: Path, content: str) -> Path:
    directory.mkdir(parents=True, exist_ok=True)
    config = directory / "irforge.yaml"
    config.write_text(content)
    return config


class TestProjectConfigDetection:

    def test_project_dir_env(self, tmp_path, monkeypatch):
        config = _write_project(tmp_path / "proj", "bin_dir: out\n")
        monkeypatch.setenv("IRFORGE_PROJECT_DIR", str(tmp_path / "proj"))
        assert _find_project_config() == config.resolve()

    def test_project_dir_env_without_file(self, tmp_path, monkeypatch):
        monkeypatch.setenv("IRFORGE_PROJECT_DIR", str(tmp_path))
        assert _find_project_config() is None

    def test_walks_up_from_cwd(self, tmp_path, monkeypatch):
        config = _write_project(tmp_path, "bin_dir: out\n")
        nested = tmp_path / "a" / "b"
        nested.mkdir(parents=True)
        monkeypatch.delenv("IRFORGE_PROJECT_DIR")
        monkeypatch.chdir(nested)
        assert _find_project_config() == config.resolve()


class TestDefaults:

    def test_defaults(self):
        settings = IrforgeSettings()
        assert settings.codegen_tool is None
        assert settings.benchmark_codegen_tool is None
        assert settings.tool_runfiles == []
        assert settings.bin_dir == "irforge-out/bin"
        assert settings.logging.level == "normal"
        assert settings.project_file is None

    def test_unknown_field_rejected(self):
        with pytest.raises(ValidationError):
            IrforgeSettings(not_a_field=1)

    def test_bad_log_level(self):
        with pytest.raises(ValidationError):
            IrforgeSettings(logging={"level": "chatty"})

    def test_log_level_is_normalized(self):
        assert IrforgeSettings(logging={"level": "DEBUG"}).logging.level == "debug"


class TestPriority:

    def test_yaml_values(self, tmp_path):
        config = _write_project(tmp_path, "bin_dir: build/bin\nlogging:\n  level: verbose\n")
        settings = load_config(project_file=config)
        assert settings.bin_dir == "build/bin"
        assert settings.logging.level == "verbose"
        assert settings.project_file == config
        assert settings.project_dir == tmp_path.resolve()

    def test_env_beats_yaml(self, tmp_path, monkeypatch):
        config = _write_project(tmp_path, "bin_dir: build/bin\n")
        monkeypatch.setenv("IRFORGE_BIN_DIR", "env/bin")
        assert load_config(project_file=config).bin_dir == "env/bin"

    def test_nested_env(self, monkeypatch):
        monkeypatch.setenv("IRFORGE_LOGGING__LEVEL", "debug")
        assert load_config().logging.level == "debug"

    def test_log_level_shorthand(self, monkeypatch):
        monkeypatch.setenv("IRFORGE_LOG_LEVEL", "quiet")
        assert load_config().logging.level == "quiet"

    def test_cli_beats_env(self, monkeypatch):
        monkeypatch.setenv("IRFORGE_BIN_DIR", "env/bin")
        assert load_config(bin_dir="cli/bin").bin_dir == "cli/bin"

    def test_none_overrides_ignored(self, monkeypatch):
        monkeypatch.setenv("IRFORGE_BIN_DIR", "env/bin")
        assert load_config(bin_dir=None).bin_dir == "env/bin"

    def test_env_var_expansion_in_yaml(self, tmp_path, monkeypatch):
        monkeypatch.setenv("DESIGN_OUT", "/scratch/out")
        config = _write_project(tmp_path, "bin_dir: ${DESIGN_OUT}/bin\n")
        assert load_config(project_file=config).bin_dir == "/scratch/out/bin"


class TestPaths:

    def test_cli_tool_path_resolves_against_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        settings = load_config(codegen_tool="tools/codegen_main")
        assert settings.codegen_tool == (tmp_path / "tools" / "codegen_main").resolve()

    def test_yaml_tool_path_resolves_against_project(self, tmp_path, monkeypatch):
        config = _write_project(tmp_path / "proj", "codegen_tool: tools/codegen_main\n")
        monkeypatch.chdir(tmp_path)
        settings = load_config(project_file=config)
        assert settings.codegen_tool == Path("tools/codegen_main")
        resolved = settings.resolve_path(settings.codegen_tool)
        assert resolved == (tmp_path / "proj" / "tools" / "codegen_main").resolve()

    def test_absolute_path_unchanged(self, tmp_path):
        settings = IrforgeSettings()
        assert settings.resolve_path(tmp_path) == tmp_path

    def test_project_dir_defaults_to_cwd(self, tmp_path, monkeypatch):
        monkeypatch.chdir(tmp_path)
        assert IrforgeSettings().project_dir == Path.cwd()


class TestErrors:

    def test_yaml_syntax_error_has_location(self, tmp_path):
        config = _write_project(tmp_path, "bin_dir: [unclosed\n")
        with pytest.raises(yaml.YAMLError, match="line"):
            load_config(project_file=config)

    def test_invalid_value_reported(self, tmp_path):
        config = _write_project(tmp_path, "tool_runfiles: 12\n")
        with pytest.raises(ValidationError):
            load_config(project_file=config)


class TestCaching:

    def test_get_config_is_cached(self):
        assert get_config() is get_config()

    def test_reset_config(self, monkeypatch):
        first = get_config()
        monkeypatch.setenv("IRFORGE_BIN_DIR", "changed")
        assert get_config() is first
        reset_config()
        assert get_config().bin_dir == "changed"
