"""Prompt bodies for FVWM3 configuration work.

Each template is a pure function of the (already validated) prompt arguments
and a :class:`PromptContext` describing the desktop it is written for.
"""

from __future__ import annotations

from dataclasses import dataclass
from types import MappingProxyType
from typing import Callable, Mapping, Tuple

from fvwm_mcp._text_utils import enumerate_lines, split_items
from fvwm_mcp.config import Monitor, Settings
from fvwm_mcp.errors import MissingArgument, RenderError, UnknownIdentifier


@dataclass(frozen=True)
class PromptContext:
    monitors: Tuple[Monitor, ...]
    desktops: Tuple[str, ...]
    pages: str
    panel_strut: int
    focus_policy: str
    fvwm_version: str

    @classmethod
    def from_settings(cls, settings: Settings) -> "PromptContext":
        return cls(
            monitors=tuple(settings.monitors),
            desktops=tuple(settings.desktops),
            pages=settings.pages,
            panel_strut=settings.panel_strut,
            focus_policy=settings.focus_policy,
            fvwm_version=settings.fvwm_version,
        )

    @property
    def monitor_summary(self) -> str:
        return f"{len(self.monitors)} monitors: " + ", ".join(str(monitor) for monitor in self.monitors)

    @property
    def desktop_summary(self) -> str:
        names = ", ".join(self.desktops)
        return f"{len(self.desktops)} desktops ({names}), {self.pages} pages each"

    @property
    def monitor_list(self) -> str:
        return "\n".join(f"- {monitor.name}: {monitor.geometry}" for monitor in self.monitors)


Template = Callable[[Mapping[str, str], PromptContext], str]


def create_window_function(args: Mapping[str, str], ctx: PromptContext) -> str:
    return f"""Create a new FVWM3 window function called "{args['function_name']}" that {args['description']}.

The function should:
1. Follow FVWM3 best practices
2. Use DestroyFunc to allow reloading
3. Use proper FVWM expansion variables (e.g., $[w.id], $[w.x], $[w.width])
4. Include comments explaining the logic
5. Handle edge cases appropriately

Current FVWM3 setup context:
- {ctx.monitor_summary}
- Desktop layout: {ctx.desktop_summary}
- Panel reserves {ctx.panel_strut}px on right edge (EwmhBaseStruts 0 {ctx.panel_strut} 0 0)
- Focus policy: {ctx.focus_policy}

Provide the complete function definition ready to be added to ~/.fvwm/config."""


def add_keybinding(args: Mapping[str, str], ctx: PromptContext) -> str:
    context = args.get("context") or "A"
    return f"""Create a keybinding for {args['key_combo']} that {args['action']}.

Requirements:
1. Check for conflicts with existing keybindings in the configuration
2. Use proper FVWM Key syntax: Key <keyname> <context> <modifiers> <action>
3. Context: {context} (R=root window, W=application window, A=all)
4. Follow the project's keybinding conventions:
   - Super (Mod4) for system/WM operations
   - Alt for desktop/window movement
   - Ctrl+Alt for window positioning (shuffle, grow)

Current keybinding scheme:
- Alt+q/w/a/s: Navigate to desktops
- Alt+Shift+Q/W/A/S: Send window to desktop
- Alt+Ctrl+q/w/a/s: Move window and follow
- Super+Enter: Terminal
- Super+W: Browser
- Super+E: Editor
- Super+Space: Toggle keyboard layout
- Super+Arrow keys: Smart tiling

Provide:
1. The complete Key command
2. List of any conflicts found
3. Suggested alternatives if conflicts exist"""


def create_tiling_script(args: Mapping[str, str], ctx: PromptContext) -> str:
    return f"""Create a bash script called "{args['script_name']}.sh" that {args['tiling_behavior']}.

The script should:
1. Follow the smart tiling architecture pattern from smart-tile.sh
2. Use xrandr to detect monitor geometry
3. Handle multi-monitor setups correctly
4. Use FVWM expansion variables passed as arguments
5. Generate ResizeMove commands with absolute pixel coordinates
6. Include debug logging to ~/.fvwm/smart-tile-debug.log
7. Manage state in ~/.fvwm/tile-state/ if needed

Monitor setup:
{ctx.monitor_list}

Script should accept FVWM variables as arguments:
$1 = window_id (e.g., 0x9200005)
$2 = window_x
$3 = window_y
$4 = window_width
$5 = window_height

Output should be FVWM commands that can be used with PipeRead.

Provide:
1. Complete bash script with shebang
2. FVWM function definition to call the script
3. Example keybinding
4. Usage instructions"""


def debug_fvwm_issue(args: Mapping[str, str], ctx: PromptContext) -> str:
    return f"""I'm experiencing an issue with FVWM3: {args['issue_description']}

Please provide a systematic debugging approach:

1. **Information Gathering**
   - What FVWM resources to check (fvwm://config/main, fvwm://logs/*, etc.)
   - What tools to use (fvwm_get_window_info, fvwm_get_keybindings, etc.)
   - What logs to examine

2. **Diagnostic Steps**
   - Commands to run for diagnosis
   - Expected vs actual output
   - Common causes for this type of issue

3. **Testing**
   - How to test in isolation
   - How to verify the fix
   - How to avoid breaking other functionality

4. **Common Solutions**
   - Based on similar issues in FVWM3
   - Configuration fixes
   - Workarounds if no direct fix exists

Current setup context:
- FVWM3 version: {ctx.fvwm_version}
- {len(ctx.monitors)} monitors, {len(ctx.desktops)} desktops, {ctx.focus_policy}
- Smart tiling system installed
- Custom keybindings using QWAS scheme
- RightPanel on primary monitor

Provide step-by-step debugging instructions."""


def create_menu(args: Mapping[str, str], ctx: PromptContext) -> str:
    items = split_items(args["menu_items"])
    if not items:
        raise MissingArgument("prompt 'create-menu'", "menu_items")
    return f"""Create an FVWM menu called "{args['menu_name']}" with the following items:
{enumerate_lines(items)}

The menu should:
1. Use DestroyMenu to allow reloading
2. Follow the project's color scheme (Dracula/Nord inspired dark theme):
   - Colorset 0: Background (#282a36)
   - Colorset 1: Inactive elements (#44475a)
   - Colorset 2: Active highlights (#8be9fd)
3. Include appropriate icons if available
4. Have proper spacing and separators
5. Use meaningful shortcuts/accelerators

Menu syntax:
DestroyMenu <menu_name>
AddToMenu <menu_name> "Title" Title
+ "Item Text" Action
+ "" Nop  # Separator

Provide:
1. Complete menu definition
2. Suggested keybinding to open the menu
3. Example of how to add it to the root menu
4. Usage notes"""


TEMPLATES: Mapping[str, Template] = MappingProxyType({
    "create-window-function": create_window_function,
    "add-keybinding": add_keybinding,
    "create-tiling-script": create_tiling_script,
    "debug-fvwm-issue": debug_fvwm_issue,
    "create-menu": create_menu,
})


def render(name: str, arguments: Mapping[str, str], context: PromptContext) -> str:
    template = TEMPLATES.get(name)
    if template is None:
        raise UnknownIdentifier("prompt", name)
    try:
        return template(arguments, context)
    except (KeyError, TypeError, ValueError) as exc:
        raise RenderError(name, str(exc)) from exc


__all__ = ["PromptContext", "TEMPLATES", "render"]
