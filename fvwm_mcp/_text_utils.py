"""Small text helpers shared by the tool handlers and prompt templates."""

from __future__ import annotations

import re
from typing import Iterable, List, Optional

_TYPO_RE = re.compile(r"^(DestroyFun|AddToFun|DestroyMen|AddToMen)\s")
_WINDOW_ID_RE = re.compile(r"^0x[0-9a-fA-F]+$")


def split_items(raw: str) -> List[str]:
    """Split a comma-separated argument into trimmed, non-empty items, keeping order."""
    return [item.strip() for item in raw.split(",") if item.strip()]


def enumerate_lines(items: Iterable[str]) -> str:
    return "\n".join(f"{idx}. {item}" for idx, item in enumerate(items, start=1))


def tail_lines(text: str, count: int) -> str:
    """Return the last ``count`` lines of ``text``, the way ``tail -n`` does."""
    lines = text.splitlines(keepends=True)
    return "".join(lines[-count:]) if count > 0 else ""


def is_window_id(value: Optional[str]) -> bool:
    return bool(value) and bool(_WINDOW_ID_RE.match(value))


def find_config_issues(config: str) -> List[str]:
    """Run the superficial FVWM config checks and return one message per finding.

    FVWM3 ships no config validator, so only two heuristics apply: an odd number
    of double quotes on a line, and the truncated command names that are common
    typos of ``DestroyFunc``/``AddToFunc``/``DestroyMenu``/``AddToMenu``.
    """
    issues: List[str] = []
    for line_no, line in enumerate(config.split("\n"), start=1):
        stripped = line.strip()
        if stripped.count('"') % 2 != 0:
            issues.append(f"Line {line_no}: Unmatched double quotes")
        if _TYPO_RE.match(stripped):
            issues.append(f"Line {line_no}: Possible typo in command")
    return issues


def keybinding_lines(config: str, needle: Optional[str] = None) -> List[str]:
    return [
        line
        for line in config.split("\n")
        if line.strip().startswith("Key ") and (not needle or needle in line)
    ]


def defines_function(config: str, function_name: str) -> bool:
    return f"DestroyFunc {function_name}" in config or f"AddToFunc {function_name}" in config
