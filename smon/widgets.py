"""Text building blocks shared by the monitor screens."""

from __future__ import annotations

import shutil

INSTRUCTIONS = "F1 Overview F2 Cpu F3 Memory F4 Disk F5 ProcessInfo F6 Quit"


def format_percent(value: float) -> str:
    """Format a percentage with two decimals and a trailing percent sign."""
    return f"{value:.2f}%"


def title_line(title: str, content: str) -> str:
    """Return the text of a title panel: the title, a space and the content."""
    return f"{title} {content}"


def usage_bar(title: str, usage: float, width: int, reserved: int, min_width: int) -> str:
    """Render a labelled usage bar filling ``width`` minus ``reserved`` columns.

    When ``width`` is at most ``min_width`` the bar collapses to a single tick.
    """
    percent = format_percent(usage)
    if width <= min_width:
        return f"{title} [|] {percent}"
    available = max(width - reserved, 0)
    filled = min(max(int(usage * available / 100), 0), available)
    bars = "|" * filled
    spaces = " " * (available - filled)
    return f"{title} [{bars}{spaces}] {percent}"


def terminal_size() -> tuple[int, int]:
    """Return the terminal size as ``(columns, rows)``."""
    size = shutil.get_terminal_size()
    return size.columns, size.lines