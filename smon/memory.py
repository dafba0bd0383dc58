"""Memory and swap usage from /proc/meminfo and the memory screen layout."""

from __future__ import annotations

import sys

from smon.widgets import INSTRUCTIONS, title_line, usage_bar

PROC_MEMINFO = "/proc/meminfo"
MAIN_TITLE = "System Metrics Monitor: Memory Usage"


def _meminfo_fields(text: str) -> dict[str, int]:
    fields: dict[str, int] = {}
    for line in text.splitlines():
        name, sep, rest = line.partition(":")
        if not sep:
            continue
        parts = rest.split()
        if parts:
            try:
                fields[name.strip()] = int(parts[0])
            except ValueError:
                continue
    return fields


def parse_meminfo_usage(text: str) -> float:
    """Return used memory as a percentage, excluding buffers and page cache."""
    fields = _meminfo_fields(text)
    total = fields.get("MemTotal", 0)
    if total == 0:
        return 0.0
    used = total - fields.get("MemFree", 0) - fields.get("Buffers", 0) - fields.get("Cached", 0)
    return used / total * 100.0


def monitor_memory(path: str = PROC_MEMINFO) -> float:
    """Read ``path`` and return the used memory percentage, 0.0 if unreadable."""
    try:
        with open(path, encoding="ascii", errors="replace") as handle:
            text = handle.read()
    except OSError:
        print(f"Failed to open {path}", file=sys.stderr)
        return 0.0
    return parse_meminfo_usage(text)


def swap_percent(total: int, free: int) -> float:
    """Return used swap as a percentage of ``total``; 0.0 when there is none."""
    if total == 0:
        return 0.0
    return (total - free) / total * 100.0


def get_swap_usage(path: str = PROC_MEMINFO) -> float:
    """Return the used swap percentage, 0.0 if it cannot be read."""
    try:
        with open(path, encoding="ascii", errors="replace") as handle:
            fields = _meminfo_fields(handle.read())
    except OSError:
        return 0.0
    return swap_percent(fields.get("SwapTotal", 0), fields.get("SwapFree", 0))


def memory_bar(title: str, usage: float, width: int) -> str:
    """Render a memory usage bar for a terminal ``width`` columns wide."""
    return usage_bar(title, usage, width, 33, 38)


def memory_screen_lines(used_percent: float, swap_used: float, width: int) -> list[str]:
    """Lay out the memory screen: title, free, used and swap bars, instructions."""
    return [
        title_line(MAIN_TITLE, ""),
        memory_bar("Free Memory:", 100.0 - used_percent, width),
        memory_bar("Used Memory:", used_percent, width),
        memory_bar("Swap Memory", swap_used, width),
        title_line(INSTRUCTIONS, ""),
    ]