"""Shared fixtures: a throwaway FVWM tree on disk and a scripted process runner."""

from __future__ import annotations

import subprocess
from pathlib import Path
from typing import Dict, List, Tuple, Union

import pytest

from fvwm_mcp.config import Settings
from fvwm_mcp.dispatch import Dispatcher
from fvwm_mcp.fvwm_client import FvwmClient

SAMPLE_CONFIG = """\
# Smart tiling
DestroyFunc SmartTileLeft
AddToFunc SmartTileLeft
+ I PipeRead "$[FVWM_USERDIR]/scripts/smart-tile.sh left $[w.id]"

Key Left A 4 SmartTileLeft
Key Return A 4 Exec exec xterm
Key q A M GotoDesk 0 0
"""

Response = Union[Tuple[int, str, str], BaseException]


class FakeRunner:
    """Stands in for ``subprocess.run``; answers by the last argv element or the program name."""

    def __init__(self) -> None:
        self.calls: List[List[str]] = []
        self.kwargs: List[dict] = []
        self.responses: Dict[str, Response] = {}

    def respond(self, key: str, stdout: str = "", stderr: str = "", returncode: int = 0) -> None:
        self.responses[key] = (returncode, stdout, stderr)

    def fail_with(self, key: str, exc: BaseException) -> None:
        self.responses[key] = exc

    def __call__(self, args, **kwargs):
        self.calls.append(list(args))
        self.kwargs.append(kwargs)
        response = self.responses.get(args[-1], self.responses.get(args[0], (0, "", "")))
        if isinstance(response, BaseException):
            raise response
        returncode, stdout, stderr = response
        return subprocess.CompletedProcess(args, returncode, stdout=stdout, stderr=stderr)


@pytest.fixture
def settings(tmp_path: Path) -> Settings:
    cfg = Settings(fvwm_dir=tmp_path / ".fvwm", repo_dir=tmp_path / "desktop-settings")
    cfg.scripts_dir.mkdir(parents=True)
    cfg.config_path.write_text(SAMPLE_CONFIG, encoding="utf-8")
    return cfg


@pytest.fixture
def runner() -> FakeRunner:
    return FakeRunner()


@pytest.fixture
def client(runner: FakeRunner) -> FvwmClient:
    return FvwmClient(runner=runner, timeout=3)


@pytest.fixture
def dispatcher(settings: Settings, client: FvwmClient) -> Dispatcher:
    return Dispatcher.from_settings(settings, client)
