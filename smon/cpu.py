"""CPU usage sampling from /proc/stat and the CPU screen layout."""

from __future__ import annotations

import time
from dataclasses import dataclass

from smon.widgets import INSTRUCTIONS, title_line, usage_bar

PROC_STAT = "/proc/stat"
MAIN_TITLE = "System Metrics Monitor: Cpu Usage"
TOO_SMALL = "Terminal window is too small to display all cores"


@dataclass(frozen=True)
class CpuTimes:
    """Cumulative jiffies of one CPU line: total busy+idle time and idle time."""

    total: int
    idle: int


def parse_cpu_times(text: str) -> list[CpuTimes]:
    """Parse the ``cpu`` lines of a /proc/stat dump, aggregate line first."""
    result = []
    for line in text.splitlines():
        fields = line.split()
        if not fields or not fields[0].startswith("cpu"):
            continue
        try:
            values = [int(v) for v in fields[1:9]]
        except ValueError:
            continue
        if len(values) < 8:
            continue
        user, nice, system, idle, iowait, irq, softirq, steal = values
        result.append(
            CpuTimes(
                total=user + nice + system + idle + iowait + irq + softirq + steal,
                idle=idle + iowait,
            )
        )
    return result


def read_cpu_times(path: str = PROC_STAT) -> list[CpuTimes]:
    """Read and parse the CPU time counters from ``path``."""
    with open(path, encoding="ascii", errors="replace") as handle:
        return parse_cpu_times(handle.read())


def compute_usage(start: list[CpuTimes], end: list[CpuTimes]) -> dict[str, float]:
    """Turn two samples into usage percentages keyed ``total``, ``CPU0``, ..."""
    usages: dict[str, float] = {}
    for index, (before, after) in enumerate(zip(start, end)):
        total_delta = after.total - before.total
        idle_delta = after.idle - before.idle
        name = "total" if index == 0 else f"CPU{index - 1}"
        usages[name] = 100.0 * (total_delta - idle_delta) / total_delta if total_delta > 0 else 0.0
    return usages


def get_cpu_usage(interval: float = 1.0, path: str = PROC_STAT) -> dict[str, float]:
    """Sample /proc/stat twice, ``interval`` seconds apart, and return usages."""
    start = read_cpu_times(path)
    time.sleep(interval)
    end = read_cpu_times(path)
    return compute_usage(start, end)


def cpu_bar(title: str, usage: float, width: int, half: bool = False) -> str:
    """Render a CPU usage bar; ``half`` lays it out for a two-column row."""
    if half:
        width //= 2
    return usage_bar(title, usage, width, 30, 35)


def _pairs(items: list[str]):
    for start in range(0, len(items), 2):
        yield items[start : start + 2]


def cpu_screen_lines(usages: dict[str, float], width: int, height: int) -> list[str]:
    """Lay out the CPU screen: title, total bar, per-core bars, instructions."""
    lines = [
        title_line(MAIN_TITLE, ""),
        cpu_bar("Total Usage: ", usages.get("total", 0.0), width),
    ]
    cores = max(len(usages) - 1, 0)
    needed_height = (cores // 2) * 3 + 9
    if needed_height > height:
        lines.append(title_line(TOO_SMALL, ""))
    else:
        bars = [
            cpu_bar(f"Core {core}:", usages.get(f"CPU{core}", 0.0), width, half=True)
            for core in range(cores)
        ]
        lines.extend("  ".join(row) for row in _pairs(bars))
    lines.append(title_line(INSTRUCTIONS, ""))
    return lines