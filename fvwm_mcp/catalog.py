"""Static capability catalogs: the resources, tools and prompts this server declares.

Pure data. Listing order is declaration order. Handlers are bound to these
entries by key in :mod:`fvwm_mcp.resources`, :mod:`fvwm_mcp.tools` and
:mod:`fvwm_mcp.prompts`.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Optional, Tuple


@dataclass(frozen=True)
class ResourceSpec:
    uri: str
    name: str
    description: str
    mime_type: str

    def as_metadata(self) -> Dict[str, str]:
        return {
            "uri": self.uri,
            "name": self.name,
            "description": self.description,
            "mimeType": self.mime_type,
        }


@dataclass(frozen=True)
class ToolSpec:
    name: str
    description: str
    input_schema: Mapping[str, Any]

    @property
    def required_fields(self) -> Tuple[str, ...]:
        return tuple(self.input_schema.get("required", ()))

    def as_metadata(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "inputSchema": copy.deepcopy(dict(self.input_schema))}


@dataclass(frozen=True)
class PromptArgumentSpec:
    name: str
    description: str
    required: bool = False

    def as_metadata(self) -> Dict[str, Any]:
        return {"name": self.name, "description": self.description, "required": self.required}


@dataclass(frozen=True)
class PromptSpec:
    name: str
    description: str
    arguments: Tuple[PromptArgumentSpec, ...] = ()

    @property
    def required_arguments(self) -> Tuple[str, ...]:
        return tuple(argument.name for argument in self.arguments if argument.required)

    def as_metadata(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "arguments": [argument.as_metadata() for argument in self.arguments],
        }


def _object_schema(properties: Dict[str, Any], required: Optional[List[str]] = None) -> Dict[str, Any]:
    schema: Dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema


RESOURCE_CATALOG: Tuple[ResourceSpec, ...] = (
    # Configuration files
    ResourceSpec(
        uri="fvwm://config/main",
        name="FVWM3 Main Configuration",
        description="The complete FVWM3 configuration file (~/.fvwm/config)",
        mime_type="text/plain",
    ),
    ResourceSpec(
        uri="fvwm://config/repo",
        name="FVWM3 Repository Configuration",
        description="Version-controlled configuration from desktop-settings repo",
        mime_type="text/plain",
    ),
    # Documentation
    ResourceSpec(
        uri="fvwm://docs/claude",
        name="CLAUDE.md Architecture Documentation",
        description="Complete architecture documentation for FVWM3 setup",
        mime_type="text/markdown",
    ),
    ResourceSpec(
        uri="fvwm://docs/shortcuts",
        name="Movement Shortcuts Documentation",
        description="Spanish documentation of all movement shortcuts (ATAJOS-MOVIMIENTO.md)",
        mime_type="text/markdown",
    ),
    ResourceSpec(
        uri="fvwm://docs/smart-tiling",
        name="Smart Tiling Technical Documentation",
        description="Complete technical documentation of smart tiling system",
        mime_type="text/markdown",
    ),
    ResourceSpec(
        uri="fvwm://docs/readme",
        name="FVWM3 Configuration README",
        description="User-facing documentation and command reference",
        mime_type="text/markdown",
    ),
    # Scripts
    ResourceSpec(
        uri="fvwm://scripts/smart-tile",
        name="Smart Tiling Script",
        description="Main smart tiling implementation script",
        mime_type="text/x-shellscript",
    ),
    ResourceSpec(
        uri="fvwm://scripts/maximize-monitor",
        name="Maximize Current Monitor Script",
        description="Monitor-aware maximize script",
        mime_type="text/x-shellscript",
    ),
    ResourceSpec(
        uri="fvwm://scripts/monitor-setup",
        name="Monitor Setup Script",
        description="Multi-monitor configuration script",
        mime_type="text/x-shellscript",
    ),
    ResourceSpec(
        uri="fvwm://scripts/toggle-keyboard",
        name="Keyboard Layout Toggle Script",
        description="Toggle between US and LATAM keyboard layouts",
        mime_type="text/x-shellscript",
    ),
    # Runtime state
    ResourceSpec(
        uri="fvwm://state/monitors",
        name="Current Monitor Layout",
        description="Current monitor configuration from xrandr",
        mime_type="text/plain",
    ),
    ResourceSpec(
        uri="fvwm://state/windows",
        name="Active Windows",
        description="List of all active windows with geometry",
        mime_type="application/json",
    ),
    ResourceSpec(
        uri="fvwm://state/current-desktop",
        name="Current Desktop State",
        description="Current desktop and page information",
        mime_type="application/json",
    ),
    ResourceSpec(
        uri="fvwm://state/tile-states",
        name="Tile State Files",
        description="Current smart tiling state for all windows",
        mime_type="application/json",
    ),
    # Debug logs
    ResourceSpec(
        uri="fvwm://logs/smart-tile",
        name="Smart Tiling Debug Log",
        description="Debug log from smart tiling operations",
        mime_type="text/plain",
    ),
)


TOOL_CATALOG: Tuple[ToolSpec, ...] = (
    ToolSpec(
        name="fvwm_execute",
        description="Execute an FVWM command using FvwmCommand",
        input_schema=_object_schema(
            {
                "command": {
                    "type": "string",
                    "description": "The FVWM command to execute (e.g., 'Restart', 'Move 100p 100p')",
                },
            },
            required=["command"],
        ),
    ),
    ToolSpec(
        name="fvwm_get_window_info",
        description="Get detailed information about a specific window or all windows",
        input_schema=_object_schema(
            {
                "window_id": {
                    "type": "string",
                    "description": "Window ID in hex format (e.g., '0x9200005'). If not provided, returns all windows.",
                },
            }
        ),
    ),
    ToolSpec(
        name="fvwm_get_monitor_layout",
        description="Get current monitor layout and geometry from xrandr",
        input_schema=_object_schema({}),
    ),
    ToolSpec(
        name="fvwm_test_function",
        description="Check if a specific FVWM function exists in the configuration",
        input_schema=_object_schema(
            {
                "function_name": {
                    "type": "string",
                    "description": "Name of the FVWM function to check (e.g., 'SmartTileLeft')",
                },
            },
            required=["function_name"],
        ),
    ),
    ToolSpec(
        name="fvwm_restart",
        description="Restart FVWM3 to apply configuration changes",
        input_schema=_object_schema({}),
    ),
    ToolSpec(
        name="fvwm_validate_config",
        description="Validate FVWM3 configuration syntax without restarting",
        input_schema=_object_schema(
            {
                "config_path": {
                    "type": "string",
                    "description": "Path to config file to validate. Defaults to ~/.fvwm/config",
                },
            }
        ),
    ),
    ToolSpec(
        name="fvwm_get_keybindings",
        description="List all keyboard bindings from the configuration",
        input_schema=_object_schema(
            {
                "filter": {
                    "type": "string",
                    "description": "Optional filter string to search for specific bindings",
                },
            }
        ),
    ),
    ToolSpec(
        name="smart_tile_debug",
        description="View the smart tiling debug log (last N lines)",
        input_schema=_object_schema(
            {
                "lines": {
                    "type": "number",
                    "description": "Number of lines to retrieve from the end of the log. Default: 50",
                },
            }
        ),
    ),
    ToolSpec(
        name="smart_tile_state",
        description="View or clear smart tiling state for windows",
        input_schema=_object_schema(
            {
                "action": {
                    "type": "string",
                    "enum": ["view", "clear"],
                    "description": "Action to perform: 'view' to see states, 'clear' to reset all states",
                },
                "window_id": {
                    "type": "string",
                    "description": "Optional window ID to view/clear specific window state",
                },
            },
            required=["action"],
        ),
    ),
    ToolSpec(
        name="fvwm_get_desktop_info",
        description="Get information about the current desktop and page",
        input_schema=_object_schema({}),
    ),
)


PROMPT_CATALOG: Tuple[PromptSpec, ...] = (
    PromptSpec(
        name="create-window-function",
        description="Generate a new FVWM window manipulation function",
        arguments=(
            PromptArgumentSpec("function_name", "Name for the new function (e.g., 'MoveToCenterAndResize')", True),
            PromptArgumentSpec("description", "What the function should do", True),
        ),
    ),
    PromptSpec(
        name="add-keybinding",
        description="Generate a keybinding with conflict checking",
        arguments=(
            PromptArgumentSpec("key_combo", "Key combination (e.g., 'Super_L+m', 'Alt+Shift+w')", True),
            PromptArgumentSpec("action", "What the keybinding should do", True),
            PromptArgumentSpec("context", "Context where binding applies (default: 'A' for all)", False),
        ),
    ),
    PromptSpec(
        name="create-tiling-script",
        description="Generate a bash script for window tiling operations",
        arguments=(
            PromptArgumentSpec("script_name", "Name for the script (e.g., 'quarter-tile')", True),
            PromptArgumentSpec(
                "tiling_behavior", "Describe the tiling behavior (e.g., 'tile to top-left quarter')", True
            ),
        ),
    ),
    PromptSpec(
        name="debug-fvwm-issue",
        description="Guide for debugging FVWM configuration issues",
        arguments=(
            PromptArgumentSpec("issue_description", "Describe the problem you're experiencing", True),
        ),
    ),
    PromptSpec(
        name="create-menu",
        description="Generate an FVWM menu configuration",
        arguments=(
            PromptArgumentSpec("menu_name", "Name for the menu (e.g., 'WindowOpsMenu')", True),
            PromptArgumentSpec("menu_items", "Comma-separated list of menu items", True),
        ),
    ),
)


__all__ = [
    "PROMPT_CATALOG",
    "PromptArgumentSpec",
    "PromptSpec",
    "RESOURCE_CATALOG",
    "ResourceSpec",
    "TOOL_CATALOG",
    "ToolSpec",
]
