"""Tests for the runtime configuration record."""

from pathlib import Path

import pytest

from fvwm_mcp.config import DEFAULT_DESKTOPS, DEFAULT_MONITORS, Monitor, Settings


class TestMonitor:
    def test_parse(self):
        monitor = Monitor.parse(" HDMI-0:1920x1080+1920+0 ")
        assert monitor == Monitor("HDMI-0", "1920x1080+1920+0")
        assert str(monitor) == "HDMI-0 (1920x1080+1920+0)"

    @pytest.mark.parametrize("entry", ["HDMI-0", "HDMI-0:1920x1080", ":1920x1080+0+0", "DP-1:wide"])
    def test_parse_rejects_malformed_entries(self, entry):
        with pytest.raises(ValueError, match="invalid monitor entry"):
            Monitor.parse(entry)


class TestSettings:
    def test_defaults(self, monkeypatch):
        for var in ("FVWM_DIR", "FVWM_MONITORS", "FVWM_DESKTOPS", "MCP_PORT", "FVWM_MCP_LOG_LEVEL"):
            monkeypatch.delenv(var, raising=False)
        settings = Settings.from_env()
        assert settings.fvwm_dir == Path.home() / ".fvwm"
        assert settings.monitors == DEFAULT_MONITORS
        assert settings.desktops == DEFAULT_DESKTOPS
        assert settings.fvwm_command == "FvwmCommand"
        assert settings.log_level == "INFO"

    def test_from_env_overrides(self, monkeypatch, tmp_path):
        monkeypatch.setenv("FVWM_DIR", str(tmp_path / "fvwm"))
        monkeypatch.setenv("FVWM_REPO_DIR", str(tmp_path / "repo"))
        monkeypatch.setenv("FVWM_MONITORS", "eDP-1:2560x1440+0+0, DP-1:1920x1080+2560+0")
        monkeypatch.setenv("FVWM_DESKTOPS", "Main, Chat")
        monkeypatch.setenv("FVWM_COMMAND_TIMEOUT", "2.5")
        monkeypatch.setenv("MCP_PORT", "9000")
        monkeypatch.setenv("FVWM_MCP_LOG_LEVEL", "debug")

        settings = Settings.from_env()

        assert settings.fvwm_dir == tmp_path / "fvwm"
        assert settings.monitors == (Monitor("eDP-1", "2560x1440+0+0"), Monitor("DP-1", "1920x1080+2560+0"))
        assert settings.desktops == ("Main", "Chat")
        assert settings.command_timeout == 2.5
        assert settings.port == 9000
        assert settings.log_level == "DEBUG"

    def test_malformed_monitor_env_fails_at_startup(self, monkeypatch):
        monkeypatch.setenv("FVWM_MONITORS", "DP-4")
        with pytest.raises(ValueError):
            Settings.from_env()

    def test_derived_paths(self, tmp_path):
        settings = Settings(fvwm_dir=tmp_path / ".fvwm", repo_dir=tmp_path / "repo")
        assert settings.config_path == tmp_path / ".fvwm" / "config"
        assert settings.tile_state_dir == tmp_path / ".fvwm" / "tile-state"
        assert settings.smart_tile_log == tmp_path / ".fvwm" / "smart-tile-debug.log"
        assert settings.repo_config_path == tmp_path / "repo" / "fvwm3rc" / "config"
        assert settings.smart_tiling_doc == tmp_path / "repo" / "fvwm3rc" / "scripts" / "README-SMART-TILING.md"
