"""Unit tests for the binconf CLI."""

import json
import tomllib
from pathlib import Path

import pytest
from click.testing import CliRunner

from binconf.entrypoints.cli import cli
from tests.helpers import (
    assert_command_failed,
    assert_command_success,
    assert_output_contains,
)


@pytest.fixture
def runner() -> CliRunner:
    """Create a CLI test runner."""
    return CliRunner()


def _invoke(runner: CliRunner, install_root: Path, *args: str):
    return runner.invoke(cli, ["--install-root", str(install_root), *args], obj={})


class TestShow:
    """Tests for 'binconf show'."""

    def test_show_toml(self, runner: CliRunner, install_root: Path):
        result = _invoke(runner, install_root, "show")

        assert_command_success(result, context="binconf show")
        data = tomllib.loads(result.output)
        assert data["main"]["name"] == "PrivateBin"
        assert data["traffic"]["dir"] == str(install_root / "data")

    def test_show_json_section(self, runner: CliRunner, install_root: Path):
        result = _invoke(runner, install_root, "show", "--section", "expire", "--format", "json")

        assert_command_success(result)
        assert json.loads(result.output) == {"expire": {"default": "1week", "clone": True}}

    def test_show_ini(self, runner: CliRunner, install_root: Path):
        result = _invoke(runner, install_root, "show", "-s", "model", "-f", "ini")

        assert_command_success(result)
        assert result.output == '[model]\nclass = "Filesystem"\n'

    def test_show_unknown_section(self, runner: CliRunner, install_root: Path):
        result = _invoke(runner, install_root, "show", "--section", "foo")

        assert_command_failed(result, expected_code=3)
        assert_output_contains(result, "foo")


class TestGet:
    """Tests for 'binconf get'."""

    def test_get_main_key(self, runner: CliRunner, install_root: Path):
        result = _invoke(runner, install_root, "get", "sizelimit")

        assert_command_success(result)
        assert result.output == "2097152\n"

    def test_get_boolean(self, runner: CliRunner, install_root: Path):
        result = _invoke(runner, install_root, "get", "clone", "expire")

        assert_command_success(result)
        assert result.output == "true\n"

    def test_get_unset_value(self, runner: CliRunner, install_root: Path):
        result = _invoke(runner, install_root, "get", "header", "traffic")

        assert_command_success(result)
        assert result.output == "\n"

    def test_get_unknown_key(self, runner: CliRunner, install_root: Path):
        result = _invoke(runner, install_root, "get", "foo")

        assert_command_failed(result, expected_code=4)
        assert_output_contains(result, "Invalid data key 'foo'")

    def test_get_unknown_section(self, runner: CliRunner, install_root: Path):
        result = _invoke(runner, install_root, "get", "bar", "foo")

        assert_command_failed(result, expected_code=3)

    def test_malformed_file(self, runner: CliRunner, install_root: Path):
        (install_root / "cfg" / "conf.toml").write_text("")

        result = _invoke(runner, install_root, "get", "name")

        assert_command_failed(result, expected_code=2)
        assert_output_contains(result, "[main]", "Hint:")

    def test_config_dir_option(self, runner: CliRunner, install_root: Path, tmp_path: Path):
        other = tmp_path / "other"
        other.mkdir()
        (other / "conf.toml").write_text('[main]\nname = "OtherBin"\n[model]\n[model_options]\n')

        result = _invoke(runner, install_root, "--config-dir", str(other), "get", "name")

        assert_command_success(result)
        assert result.output == "OtherBin\n"


class TestPath:
    """Tests for 'binconf path'."""

    def test_path_before_first_load(self, runner: CliRunner, install_root: Path):
        result = _invoke(runner, install_root, "path")

        assert_command_success(result)
        assert_output_contains(result, str(install_root / "cfg" / "conf.toml"), "not created")

    def test_path_respects_config_path(
        self,
        runner: CliRunner,
        install_root: Path,
        tmp_path: Path,
        monkeypatch: pytest.MonkeyPatch,
    ):
        monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "env_cfg"))

        result = _invoke(runner, install_root, "path")

        assert_command_success(result)
        assert_output_contains(result, str(tmp_path / "env_cfg" / "conf.toml"))
