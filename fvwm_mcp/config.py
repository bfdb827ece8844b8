from __future__ import annotations

from dataclasses import dataclass, field
import os
from pathlib import Path
import re
from typing import List, Optional, Tuple


_GEOMETRY_RE = re.compile(r"^(\d+)x(\d+)\+(\d+)\+(\d+)$")


@dataclass(frozen=True)
class Monitor:
    name: str
    geometry: str

    @classmethod
    def parse(cls, entry: str) -> "Monitor":
        """Parse ``NAME:WxH+X+Y`` (the form xrandr prints) into a monitor."""
        name, sep, geometry = entry.strip().partition(":")
        if not sep or not name or not _GEOMETRY_RE.match(geometry.strip()):
            raise ValueError(f"invalid monitor entry {entry!r}; expected NAME:WxH+X+Y")
        return cls(name=name.strip(), geometry=geometry.strip())

    def __str__(self) -> str:
        return f"{self.name} ({self.geometry})"


DEFAULT_MONITORS: Tuple[Monitor, ...] = (
    Monitor("DP-4", "1920x1080+0+0"),
    Monitor("HDMI-0", "1920x1080+1920+0"),
    Monitor("DP-2", "1920x1080+3840+0"),
)
DEFAULT_DESKTOPS: Tuple[str, ...] = ("Principal", "Web", "Desarrollo", "Media")


def _split_list(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [item.strip() for item in raw.split(",") if item.strip()]


@dataclass
class Settings:
    """Runtime configuration for the MCP server."""

    fvwm_dir: Path = field(default_factory=lambda: Path.home() / ".fvwm")
    repo_dir: Path = field(default_factory=lambda: Path.home() / "repo" / "utils" / "desktop-settings")
    fvwm_command: str = "FvwmCommand"
    xrandr_command: str = "xrandr"
    command_timeout: float = 10.0
    monitors: Tuple[Monitor, ...] = DEFAULT_MONITORS
    desktops: Tuple[str, ...] = DEFAULT_DESKTOPS
    pages: str = "2x2"
    panel_strut: int = 120
    focus_policy: str = "ClickToFocus"
    fvwm_version: str = "1.1.5"
    host: str = "127.0.0.1"
    port: int = 8086
    log_level: str = "INFO"

    @classmethod
    def from_env(cls) -> "Settings":
        defaults = cls()
        fvwm_dir = os.getenv("FVWM_DIR")
        repo_dir = os.getenv("FVWM_REPO_DIR")
        monitors = _split_list(os.getenv("FVWM_MONITORS"))
        desktops = _split_list(os.getenv("FVWM_DESKTOPS"))
        return cls(
            fvwm_dir=Path(fvwm_dir).expanduser() if fvwm_dir else defaults.fvwm_dir,
            repo_dir=Path(repo_dir).expanduser() if repo_dir else defaults.repo_dir,
            fvwm_command=os.getenv("FVWM_COMMAND", defaults.fvwm_command),
            xrandr_command=os.getenv("FVWM_XRANDR", defaults.xrandr_command),
            command_timeout=float(os.getenv("FVWM_COMMAND_TIMEOUT", str(defaults.command_timeout))),
            monitors=tuple(Monitor.parse(entry) for entry in monitors) if monitors else defaults.monitors,
            desktops=tuple(desktops) if desktops else defaults.desktops,
            pages=os.getenv("FVWM_PAGES", defaults.pages),
            panel_strut=int(os.getenv("FVWM_PANEL_STRUT", str(defaults.panel_strut))),
            focus_policy=os.getenv("FVWM_FOCUS_POLICY", defaults.focus_policy),
            fvwm_version=os.getenv("FVWM_VERSION", defaults.fvwm_version),
            host=os.getenv("MCP_HOST", defaults.host),
            port=int(os.getenv("MCP_PORT", str(defaults.port))),
            log_level=os.getenv("FVWM_MCP_LOG_LEVEL", defaults.log_level).upper(),
        )

    # Files under the live FVWM directory
    @property
    def config_path(self) -> Path:
        return self.fvwm_dir / "config"

    @property
    def shortcuts_doc(self) -> Path:
        return self.fvwm_dir / "ATAJOS-MOVIMIENTO.md"

    @property
    def scripts_dir(self) -> Path:
        return self.fvwm_dir / "scripts"

    @property
    def tile_state_dir(self) -> Path:
        return self.fvwm_dir / "tile-state"

    @property
    def smart_tile_log(self) -> Path:
        return self.fvwm_dir / "smart-tile-debug.log"

    # Files under the version-controlled settings repository
    @property
    def repo_config_path(self) -> Path:
        return self.repo_dir / "fvwm3rc" / "config"

    @property
    def architecture_doc(self) -> Path:
        return self.repo_dir / "CLAUDE.md"

    @property
    def smart_tiling_doc(self) -> Path:
        return self.repo_dir / "fvwm3rc" / "scripts" / "README-SMART-TILING.md"

    @property
    def readme_doc(self) -> Path:
        return self.repo_dir / "fvwm3rc" / "README.md"
