"""Request routing for the six MCP operations.

Resource reads and prompt lookups propagate their failures to the caller.
Tool calls never raise: every failure, including an unknown tool name, comes
back as an envelope with ``isError`` set so one broken tool cannot end the
session.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, List, Mapping, Optional

from fvwm_mcp.config import Settings
from fvwm_mcp.errors import FvwmMcpError
from fvwm_mcp.fvwm_client import FvwmClient
from fvwm_mcp.prompts import PromptRegistry
from fvwm_mcp.resources import ResourceRegistry
from fvwm_mcp.tools import ToolRegistry, ToolResult

logger = logging.getLogger(__name__)


class Dispatcher:
    def __init__(self, resources: ResourceRegistry, tools: ToolRegistry, prompts: PromptRegistry) -> None:
        self.resources = resources
        self.tools = tools
        self.prompts = prompts

    @classmethod
    def from_settings(cls, settings: Settings, client: Optional[FvwmClient] = None) -> "Dispatcher":
        client = client or FvwmClient(
            fvwm_command=settings.fvwm_command,
            xrandr_command=settings.xrandr_command,
            timeout=settings.command_timeout,
        )
        return cls(
            resources=ResourceRegistry(settings, client),
            tools=ToolRegistry(settings, client),
            prompts=PromptRegistry(settings),
        )

    # ---------------------------- Resources -----------------------------
    def list_resources(self) -> List[Dict[str, str]]:
        return self.resources.list_resources()

    def read_resource(self, uri: str) -> Dict[str, Any]:
        contents = self.resources.read_resource(uri)
        return {"contents": [contents.as_dict()]}

    # ------------------------------ Tools -------------------------------
    def list_tools(self) -> List[Dict[str, Any]]:
        return self.tools.list_tools()

    def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        try:
            result = self.tools.call_tool(name, arguments)
        except (FvwmMcpError, ValueError) as exc:
            logger.warning("tool %s failed: %s", name, exc)
            result = ToolResult.text(f"Error executing tool '{name}': {exc}", is_error=True)
        except Exception as exc:
            logger.exception("tool %s raised unexpectedly", name)
            result = ToolResult.text(f"Error executing tool '{name}': {exc}", is_error=True)
        return result.as_dict()

    # ----------------------------- Prompts ------------------------------
    def list_prompts(self) -> List[Dict[str, Any]]:
        return self.prompts.list_prompts()

    def get_prompt(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Dict[str, Any]:
        return self.prompts.get_prompt(name, arguments).as_dict()
