from __future__ import annotations

from dataclasses import dataclass
import logging
from pathlib import Path
import subprocess
from typing import Any, Callable, List, Optional, Sequence

from fvwm_mcp.errors import AdapterFailure

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0

Runner = Callable[..., "subprocess.CompletedProcess[str]"]


@dataclass
class CommandResult:
    stdout: str
    stderr: str
    returncode: int = 0


class FvwmClient:
    """File and process access for the live FVWM session.

    Every method performs one file-system operation or one external process
    invocation and returns raw text; failures surface as :class:`AdapterFailure`.
    """

    def __init__(
        self,
        *,
        fvwm_command: str = "FvwmCommand",
        xrandr_command: str = "xrandr",
        timeout: float = DEFAULT_TIMEOUT,
        runner: Optional[Runner] = None,
    ) -> None:
        self.fvwm_command = fvwm_command
        self.xrandr_command = xrandr_command
        self.timeout = timeout
        self._runner: Runner = runner or subprocess.run

    # ------------------------------------------------------------------
    # File-system helpers
    # ------------------------------------------------------------------
    def read_file(self, path: Path) -> str:
        try:
            return Path(path).read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise AdapterFailure(f"file not found: {path}", code="NotFound", details=exc.strerror) from exc
        except (OSError, UnicodeDecodeError) as exc:
            raise AdapterFailure(f"could not read {path}", code="IOError", details=str(exc)) from exc

    def list_dir(self, path: Path) -> List[str]:
        try:
            return sorted(entry.name for entry in Path(path).iterdir() if entry.is_file())
        except FileNotFoundError as exc:
            raise AdapterFailure(f"directory not found: {path}", code="NotFound", details=exc.strerror) from exc
        except OSError as exc:
            raise AdapterFailure(f"could not list {path}", code="IOError", details=str(exc)) from exc

    def remove(self, path: Path) -> None:
        try:
            Path(path).unlink(missing_ok=True)
        except OSError as exc:
            raise AdapterFailure(f"could not remove {path}", code="IOError", details=str(exc)) from exc

    # ------------------------------------------------------------------
    # Process helpers
    # ------------------------------------------------------------------
    def run(self, argv: Sequence[str]) -> CommandResult:
        args = list(argv)
        logger.debug("running %s", args)
        try:
            proc: Any = self._runner(args, capture_output=True, text=True, timeout=self.timeout, check=False)
        except FileNotFoundError as exc:
            raise AdapterFailure(f"command not found: {args[0]}", code="CommandNotFound") from exc
        except subprocess.TimeoutExpired as exc:
            raise AdapterFailure(
                f"command timed out after {self.timeout:g}s: {args[0]}",
                code="Timeout",
            ) from exc
        except OSError as exc:
            raise AdapterFailure(f"could not run {args[0]}", code="IOError", details=str(exc)) from exc

        stdout = proc.stdout or ""
        stderr = proc.stderr or ""
        if proc.returncode != 0:
            raise AdapterFailure(
                f"{args[0]} exited with a failure status",
                code="NonZeroExit",
                details=stderr.strip() or None,
                returncode=proc.returncode,
            )
        return CommandResult(stdout=stdout, stderr=stderr, returncode=proc.returncode)

    def fvwm(self, command: str) -> CommandResult:
        command = (command or "").strip()
        if not command:
            raise ValueError("FVWM command must not be empty")
        return self.run([self.fvwm_command, command])

    def xrandr_query(self) -> str:
        return self.run([self.xrandr_command, "--query"]).stdout
