"""Controls overlay text for the board editor."""
from __future__ import annotations

from typing import Dict, List

# Controls are kept as plain data so the overlay and tests share one source.
EDITOR_CONTROLS: List[Dict[str, str]] = [
    {"keys": "Left drag", "action": "paint the selected panel (grows the board)"},
    {"keys": "Shift + left click", "action": "erase a panel and shrink the board"},
    {"keys": "Right / middle drag", "action": "pan"},
    {"keys": "Wheel", "action": "zoom around the pointer"},
    {"keys": "C", "action": "collapse the board to its panels"},
    {"keys": "F", "action": "fit the board to the window"},
    {"keys": "Ctrl + S", "action": "save now"},
    {"keys": "H", "action": "show or hide controls"},
    {"keys": "Esc", "action": "quit"},
]


def help_lines(show_all: bool) -> List[str]:
    if not show_all:
        return ["H: show controls"]
    return [f"{entry['keys']}: {entry['action']}" for entry in EDITOR_CONTROLS]
