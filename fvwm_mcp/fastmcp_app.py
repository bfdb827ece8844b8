from __future__ import annotations

from typing import Any, Callable, Literal, Optional

from fastmcp import FastMCP
from fastmcp.exceptions import ToolError

from fvwm_mcp.config import Settings
from fvwm_mcp.dispatch import Dispatcher
from fvwm_mcp.fvwm_client import FvwmClient


def create_mcp(
    settings: Optional[Settings] = None,
    client: Optional[FvwmClient] = None,
    dispatcher: Optional[Dispatcher] = None,
) -> FastMCP:
    """Create and configure a FastMCP server exposing FVWM3 resources, tools and prompts.

    Every handler registered here delegates to a :class:`Dispatcher`; the
    catalogs in :mod:`fvwm_mcp.catalog` supply names and descriptions.
    """
    cfg = settings or Settings.from_env()
    router = dispatcher or Dispatcher.from_settings(cfg, client)

    mcp = FastMCP(
        name="mcp-server-fvwm3",
        instructions="Read, query and control the FVWM3 window manager configuration and live state.",
    )

    # ------------------------- Resources ---------------------------------
    def _resource_reader(uri: str) -> Callable[[], str]:
        def read() -> str:
            return router.read_resource(uri)["contents"][0]["text"]

        return read

    for spec in router.resources.specs():
        mcp.resource(spec.uri, name=spec.name, description=spec.description, mime_type=spec.mime_type)(
            _resource_reader(spec.uri)
        )

    # ---------------------------- Tools ----------------------------------
    tool_specs = {spec.name: spec for spec in router.tools.specs()}

    def _call(name: str, **arguments: Any) -> str:
        envelope = router.call_tool(name, {key: value for key, value in arguments.items() if value is not None})
        text = "\n".join(block["text"] for block in envelope["content"])
        if envelope["isError"]:
            raise ToolError(text)
        return text

    def _tool(name: str):
        return mcp.tool(name=name, description=tool_specs[name].description)

    @_tool("fvwm_execute")
    def fvwm_execute(command: str) -> str:
        return _call("fvwm_execute", command=command)

    @_tool("fvwm_get_window_info")
    def fvwm_get_window_info(window_id: Optional[str] = None) -> str:
        return _call("fvwm_get_window_info", window_id=window_id)

    @_tool("fvwm_get_monitor_layout")
    def fvwm_get_monitor_layout() -> str:
        return _call("fvwm_get_monitor_layout")

    @_tool("fvwm_test_function")
    def fvwm_test_function(function_name: str) -> str:
        return _call("fvwm_test_function", function_name=function_name)

    @_tool("fvwm_restart")
    def fvwm_restart() -> str:
        return _call("fvwm_restart")

    @_tool("fvwm_validate_config")
    def fvwm_validate_config(config_path: Optional[str] = None) -> str:
        return _call("fvwm_validate_config", config_path=config_path)

    @_tool("fvwm_get_keybindings")
    def fvwm_get_keybindings(filter: Optional[str] = None) -> str:  # noqa: A002 - MCP arg name compatibility
        return _call("fvwm_get_keybindings", filter=filter)

    @_tool("smart_tile_debug")
    def smart_tile_debug(lines: Optional[int] = None) -> str:
        return _call("smart_tile_debug", lines=lines)

    @_tool("smart_tile_state")
    def smart_tile_state(action: Literal["view", "clear"], window_id: Optional[str] = None) -> str:
        return _call("smart_tile_state", action=action, window_id=window_id)

    @_tool("fvwm_get_desktop_info")
    def fvwm_get_desktop_info() -> str:
        return _call("fvwm_get_desktop_info")

    # --------------------------- Prompts ---------------------------------
    prompt_specs = {spec.name: spec for spec in router.prompts.specs()}

    def _render(name: str, **arguments: Any) -> str:
        return router.get_prompt(name, arguments)["messages"][0]["content"]["text"]

    def _prompt(name: str):
        return mcp.prompt(name=name, description=prompt_specs[name].description)

    @_prompt("create-window-function")
    def create_window_function(function_name: str, description: str) -> str:
        return _render("create-window-function", function_name=function_name, description=description)

    @_prompt("add-keybinding")
    def add_keybinding(key_combo: str, action: str, context: Optional[str] = None) -> str:
        return _render("add-keybinding", key_combo=key_combo, action=action, context=context)

    @_prompt("create-tiling-script")
    def create_tiling_script(script_name: str, tiling_behavior: str) -> str:
        return _render("create-tiling-script", script_name=script_name, tiling_behavior=tiling_behavior)

    @_prompt("debug-fvwm-issue")
    def debug_fvwm_issue(issue_description: str) -> str:
        return _render("debug-fvwm-issue", issue_description=issue_description)

    @_prompt("create-menu")
    def create_menu(menu_name: str, menu_items: str) -> str:
        return _render("create-menu", menu_name=menu_name, menu_items=menu_items)

    return mcp
