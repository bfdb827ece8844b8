from __future__ import annotations

from dataclasses import dataclass, field
import logging
from pathlib import Path
from types import MappingProxyType
from typing import Any, Callable, Dict, Iterable, List, Mapping, Optional, Tuple

from fvwm_mcp._text_utils import (
    defines_function,
    find_config_issues,
    is_window_id,
    keybinding_lines,
    tail_lines,
)
from fvwm_mcp.catalog import TOOL_CATALOG, ToolSpec
from fvwm_mcp.config import Settings
from fvwm_mcp.errors import AdapterFailure, MissingArgument, UnknownIdentifier
from fvwm_mcp.fvwm_client import FvwmClient

logger = logging.getLogger(__name__)

Handler = Callable[[Mapping[str, Any]], str]

WINDOW_FIELDS = (
    'id=$[w.id] name="$[w.name]" class=$[w.class] desk=$[w.desk] '
    "x=$[w.x] y=$[w.y] w=$[w.width] h=$[w.height]"
)
DESKTOP_INFO_COMMAND = 'Echo desk=$[desk.n] page=$[page.nx]x$[page.ny] deskname="$[desk.name$[desk.n]]"'
DEFAULT_DEBUG_LINES = 50


@dataclass(frozen=True)
class TextContent:
    text: str
    type: str = "text"

    def as_dict(self) -> Dict[str, str]:
        return {"type": self.type, "text": self.text}


@dataclass(frozen=True)
class ToolResult:
    content: Tuple[TextContent, ...] = field(default_factory=tuple)
    is_error: bool = False

    @classmethod
    def text(cls, text: str, *, is_error: bool = False) -> "ToolResult":
        return cls(content=(TextContent(text),), is_error=is_error)

    def as_dict(self) -> Dict[str, Any]:
        return {"content": [block.as_dict() for block in self.content], "isError": self.is_error}


@dataclass(frozen=True)
class ToolDefinition:
    spec: ToolSpec
    handler: Handler

    @property
    def name(self) -> str:
        return self.spec.name

    def validate(self, arguments: Mapping[str, Any]) -> None:
        for required in self.spec.required_fields:
            if arguments.get(required) is None:
                raise MissingArgument(f"tool '{self.spec.name}'", required)


def _positive_int(value: Any, default: int, name: str) -> int:
    if value is None:
        return default
    if isinstance(value, bool):
        raise ValueError(f"'{name}' must be a positive integer")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"'{name}' must be a positive integer") from None
    if not number.is_integer() or number < 1:
        raise ValueError(f"'{name}' must be a positive integer")
    return int(number)


class ToolRegistry:
    def __init__(
        self,
        settings: Settings,
        client: FvwmClient,
        catalog: Iterable[ToolSpec] = TOOL_CATALOG,
    ) -> None:
        self._settings = settings
        self._client = client

        handlers: Dict[str, Handler] = {
            "fvwm_execute": self._execute,
            "fvwm_get_window_info": self._get_window_info,
            "fvwm_get_monitor_layout": self._get_monitor_layout,
            "fvwm_test_function": self._test_function,
            "fvwm_restart": self._restart,
            "fvwm_validate_config": self._validate_config,
            "fvwm_get_keybindings": self._get_keybindings,
            "smart_tile_debug": self._smart_tile_debug,
            "smart_tile_state": self._smart_tile_state,
            "fvwm_get_desktop_info": self._get_desktop_info,
        }

        tools: Dict[str, ToolDefinition] = {}
        for spec in catalog:
            if spec.name not in handlers:
                raise ValueError(f"no handler bound to tool {spec.name}")
            if spec.name in tools:
                raise ValueError(f"duplicate tool name {spec.name}")
            tools[spec.name] = ToolDefinition(spec=spec, handler=handlers[spec.name])
        self._tools: Mapping[str, ToolDefinition] = MappingProxyType(tools)

    def specs(self) -> Tuple[ToolSpec, ...]:
        return tuple(definition.spec for definition in self._tools.values())

    def list_tools(self) -> List[Dict[str, Any]]:
        return [definition.spec.as_metadata() for definition in self._tools.values()]

    def call_tool(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        """Look up, validate and run one tool.

        Raises :class:`UnknownIdentifier`, :class:`MissingArgument`,
        :class:`AdapterFailure` or ``ValueError``; turning those into an error
        envelope is the dispatcher's job.
        """
        definition = self._tools.get(name)
        if definition is None:
            raise UnknownIdentifier("tool", name)
        args = dict(arguments or {})
        definition.validate(args)
        return ToolResult.text(definition.handler(args))

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def _execute(self, arguments: Mapping[str, Any]) -> str:
        try:
            result = self._client.fvwm(str(arguments["command"]))
        except AdapterFailure as exc:
            # FvwmCommand can exit non-zero after the command already ran
            if exc.code == "NonZeroExit" and not exc.details:
                return "Command executed (no output)"
            raise
        return result.stdout or result.stderr or "Command executed successfully"

    def _get_window_info(self, arguments: Mapping[str, Any]) -> str:
        window_id = arguments.get("window_id")
        if window_id:
            self._check_window_id(window_id)
            command = f"WindowId {window_id} Echo {WINDOW_FIELDS}"
        else:
            command = f"All (CurrentPage) Echo {WINDOW_FIELDS}"
        return self._client.fvwm(command).stdout or "No windows found"

    def _get_monitor_layout(self, arguments: Mapping[str, Any]) -> str:
        output = self._client.xrandr_query()
        connected = [line for line in output.splitlines() if " connected" in line]
        return "\n".join(connected) or "No connected monitors found"

    def _test_function(self, arguments: Mapping[str, Any]) -> str:
        function_name = str(arguments["function_name"])
        config = self._client.read_file(self._settings.config_path)
        if defines_function(config, function_name):
            return f"Function '{function_name}' exists in configuration"
        return f"Function '{function_name}' NOT found in configuration"

    def _restart(self, arguments: Mapping[str, Any]) -> str:
        try:
            self._client.fvwm("Restart")
        except AdapterFailure as exc:
            # FvwmCommand loses its connection while FVWM restarts
            logger.debug("ignoring FvwmCommand failure during restart: %s", exc)
        return "FVWM3 restart command sent"

    def _validate_config(self, arguments: Mapping[str, Any]) -> str:
        config_path = arguments.get("config_path")
        path = Path(config_path).expanduser() if config_path else self._settings.config_path
        config = self._client.read_file(path)
        issues = find_config_issues(config)
        line_count = config.count("\n") + 1
        if not issues:
            return f"Configuration appears valid ({line_count} lines checked)"
        return f"Found {len(issues)} potential issues:\n" + "\n".join(issues)

    def _get_keybindings(self, arguments: Mapping[str, Any]) -> str:
        needle = arguments.get("filter")
        config = self._client.read_file(self._settings.config_path)
        bindings = keybinding_lines(config, needle)
        if bindings:
            return "\n".join(bindings)
        return "No keybindings found" + (f" matching '{needle}'" if needle else "")

    def _smart_tile_debug(self, arguments: Mapping[str, Any]) -> str:
        count = _positive_int(arguments.get("lines"), DEFAULT_DEBUG_LINES, "lines")
        try:
            log = self._client.read_file(self._settings.smart_tile_log)
        except AdapterFailure as exc:
            if exc.code != "NotFound":
                raise
            return "Debug log not found or empty"
        return tail_lines(log, count) or "Debug log is empty"

    def _smart_tile_state(self, arguments: Mapping[str, Any]) -> str:
        action = arguments["action"]
        window_id = arguments.get("window_id")
        if window_id:
            self._check_window_id(window_id)
        if action == "view":
            return self._view_tile_state(window_id)
        if action == "clear":
            return self._clear_tile_state(window_id)
        raise ValueError(f"Unknown action: {action}")

    def _get_desktop_info(self, arguments: Mapping[str, Any]) -> str:
        return self._client.fvwm(DESKTOP_INFO_COMMAND).stdout or "Unable to get desktop info"

    # ------------------------------------------------------------------
    # Tile-state helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _check_window_id(window_id: Any) -> None:
        if not isinstance(window_id, str) or not is_window_id(window_id):
            raise ValueError(f"invalid window id {window_id!r}; expected hex like '0x9200005'")

    def _state_files(self) -> List[str]:
        try:
            return self._client.list_dir(self._settings.tile_state_dir)
        except AdapterFailure as exc:
            if exc.code != "NotFound":
                raise
            return []

    def _view_tile_state(self, window_id: Optional[str]) -> str:
        state_dir = self._settings.tile_state_dir
        if window_id:
            try:
                state = self._client.read_file(state_dir / window_id)
            except AdapterFailure as exc:
                if exc.code != "NotFound":
                    raise
                return f"No tile state found for window {window_id}"
            return f"Window {window_id}: {state}"

        names = self._state_files()
        if not names:
            return "No tile states found"
        return "\n".join(f"{name}: {self._client.read_file(state_dir / name).strip()}" for name in names)

    def _clear_tile_state(self, window_id: Optional[str]) -> str:
        state_dir = self._settings.tile_state_dir
        if window_id:
            self._client.remove(state_dir / window_id)
            return f"Cleared state for window {window_id}"
        for name in self._state_files():
            self._client.remove(state_dir / name)
        return "Cleared all tile states"
