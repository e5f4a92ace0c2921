"""
Tests for CLI commands — global options, package queries, installs, config.

Package manager commands never run: the runner's subprocess layer is
patched out.
"""

import json
from pathlib import Path
from unittest.mock import patch

import pytest
from click.testing import CliRunner

from osdeps.main import cli

_RUN = "osdeps.core.services.osdeps.execution.privileged_runner._run_subprocess"


def _result(stdout="", returncode=0):
    out = {"ok": returncode == 0, "returncode": returncode, "stdout": stdout, "stderr": "", "elapsed_ms": 1}
    if returncode:
        out["error"] = f"Command failed (exit {returncode})"
    return out


@pytest.fixture
def config_path(tmp_path: Path, monkeypatch) -> Path:
    monkeypatch.setenv("OSDEPS_LOCK_PATH", str(tmp_path / "install.lock"))
    monkeypatch.delenv("OSDEPS_LOG_LEVEL", raising=False)
    monkeypatch.delenv("OSDEPS_LOG_FILE", raising=False)
    return tmp_path / "osdeps.yml"


class TestCLIGlobal:
    def test_help(self):
        result = CliRunner().invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "OS package dependencies" in result.output

    def test_version(self):
        result = CliRunner().invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_managers(self):
        result = CliRunner().invoke(cli, ["managers"])
        assert result.exit_code == 0
        assert "emerge  (root, locking)" in result.output
        assert "pip" in result.output


class TestQueryCommands:
    def test_installed(self, config_path: Path):
        with patch(_RUN, return_value=_result("[ebuild   R   ] sys-apps/foo-1.2\n")) as run:
            result = CliRunner().invoke(
                cli, ["--config", str(config_path), "installed", "emerge", ">=sys-apps/foo-1.0"],
            )
        assert result.exit_code == 0
        assert "✅ >=sys-apps/foo-1.0: installed" in result.output
        cmd = run.call_args[0][0]
        assert cmd[:2] == ["emerge", "-p1"]
        assert cmd[-1] == ">=sys-apps/foo-1.0"

    def test_updated_json(self, config_path: Path):
        with patch(_RUN, return_value=_result("[ebuild     U ] sys-apps/foo-1.3\n")):
            result = CliRunner().invoke(
                cli, ["--config", str(config_path), "updated", "emerge", "--json", "sys-apps/foo"],
            )
        assert result.exit_code == 1
        assert json.loads(result.output) == {"sys-apps/foo": False}

    def test_unresolvable_package(self, config_path: Path):
        with patch(_RUN, return_value=_result(returncode=1)):
            result = CliRunner().invoke(
                cli, ["--config", str(config_path), "installed", "emerge", ">=sys-apps/nothing-1"],
            )
        assert result.exit_code == 1
        assert "not installed" in result.output

    def test_unknown_manager(self, config_path: Path):
        result = CliRunner().invoke(cli, ["--config", str(config_path), "installed", "brew", "git"])
        assert result.exit_code == 1
        assert "Unknown package manager: brew" in result.output


class TestInstallCommand:
    def test_install_with_user_manager(self, config_path: Path):
        with patch(_RUN, return_value=_result()) as run:
            result = CliRunner().invoke(
                cli, ["--config", str(config_path), "install", "pip", "numpy", "scipy"],
            )
        assert result.exit_code == 0
        assert "Installed with pip: numpy, scipy" in result.output
        assert run.call_args[0][0] == ["pip", "install", "--user", "numpy", "scipy"]

    def test_manual_mode_silent(self, config_path: Path):
        config_path.write_text("options:\n  osdeps_mode: none\n")
        with patch(_RUN) as run:
            result = CliRunner().invoke(
                cli, ["--config", str(config_path), "install", "--silent", "pip", "numpy"],
            )
        assert result.exit_code == 0
        assert "Nothing was installed" in result.output
        run.assert_not_called()

    def test_manual_mode_prompts(self, config_path: Path):
        config_path.write_text("options:\n  osdeps_mode: none\n")
        with patch(_RUN) as run:
            result = CliRunner().invoke(
                cli, ["--config", str(config_path), "install", "gem", "rake"], input="\n",
            )
        assert result.exit_code == 0
        assert "|   gem install --user-install rake" in result.output
        assert "Press ENTER to continue" in result.output
        run.assert_not_called()

    def test_force(self, config_path: Path):
        config_path.write_text("options:\n  osdeps_mode: none\n")
        with patch(_RUN, return_value=_result()) as run:
            result = CliRunner().invoke(
                cli, ["--config", str(config_path), "install", "--force", "pip", "numpy"],
            )
        assert result.exit_code == 0
        run.assert_called_once()

    def test_install_failure(self, config_path: Path):
        with patch(_RUN, return_value=_result(returncode=1)):
            result = CliRunner().invoke(
                cli, ["--config", str(config_path), "install", "pip", "numpy"],
            )
        assert result.exit_code == 0
        assert "Nothing was installed" in result.output


class TestConfigCommands:
    def test_configure_emerge(self, config_path: Path):
        result = CliRunner().invoke(cli, ["--config", str(config_path), "configure", "emerge"])
        assert result.exit_code == 0
        assert "keep emerge packages up-to-date" in result.output
        assert "emerge_update: True" in result.output

    def test_configure_without_switches(self, config_path: Path):
        result = CliRunner().invoke(cli, ["--config", str(config_path), "configure", "pip"])
        assert result.exit_code == 0
        assert "pip has no configuration switches" in result.output

    def test_set_and_show(self, config_path: Path):
        runner = CliRunner()
        result = runner.invoke(cli, ["--config", str(config_path), "config", "set", "emerge_update", "no"])
        assert result.exit_code == 0
        assert config_path.exists()

        result = runner.invoke(cli, ["--config", str(config_path), "config", "show", "--json"])
        assert result.exit_code == 0
        data = json.loads(result.output)
        assert data["emerge_update"] is False
        assert data["osdeps_mode"] == "all"

    def test_show_marks_defaults(self, config_path: Path):
        result = CliRunner().invoke(cli, ["--config", str(config_path), "config", "show"])
        assert result.exit_code == 0
        assert "osdeps_mode: all  (default)" in result.output

    def test_set_bad_boolean(self, config_path: Path):
        result = CliRunner().invoke(
            cli, ["--config", str(config_path), "config", "set", "osdeps_silent", "maybe"],
        )
        assert result.exit_code == 1
        assert "Invalid boolean value" in result.output

    def test_invalid_config_file(self, config_path: Path):
        config_path.write_text("- not a mapping\n")
        result = CliRunner().invoke(cli, ["--config", str(config_path), "config", "show"])
        assert result.exit_code == 1
        assert "Expected a YAML mapping" in result.output
