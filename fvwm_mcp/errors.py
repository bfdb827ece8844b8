"""Error taxonomy shared by the registries, the adapters and the dispatcher."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


class FvwmMcpError(Exception):
    """Base class for every failure raised by the server core."""


@dataclass
class UnknownIdentifier(FvwmMcpError):
    kind: str
    identifier: str

    def __str__(self) -> str:
        return f"Unknown {self.kind}: {self.identifier}"


@dataclass
class MissingArgument(FvwmMcpError):
    target: str
    argument: str

    def __str__(self) -> str:
        return f"Missing required argument '{self.argument}' for {self.target}"


@dataclass
class AdapterFailure(FvwmMcpError):
    message: str
    code: Optional[str] = None
    details: Optional[Any] = None
    returncode: Optional[int] = None

    def __str__(self) -> str:
        base = self.message
        if self.code:
            base = f"[{self.code}] " + base
        if self.returncode is not None:
            base += f" (exit={self.returncode})"
        if self.details:
            base += f": {self.details}"
        return base


@dataclass
class RenderError(FvwmMcpError):
    template: str
    message: str

    def __str__(self) -> str:
        return f"Failed to render prompt '{self.template}': {self.message}"


__all__ = [
    "AdapterFailure",
    "FvwmMcpError",
    "MissingArgument",
    "RenderError",
    "UnknownIdentifier",
]
