"""Disk space usage of the root filesystem and the disk screen layout."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from smon.widgets import INSTRUCTIONS, title_line, usage_bar

MAIN_TITLE = "System Metrics Monitor: Disk Usage"
DEVICES_TITLE = "Current Devices:"
DEVICES_HEADER = "disk    size"
UNITS = ("B", "KB", "MB", "GB", "TB")

_GIB = 1024.0 * 1024.0 * 1024.0

# Sample device listing shown on the disk screen, name -> size in bytes.
DEVICES: dict[str, float] = {
    "sda1": 500.0 * _GIB,
    "sdb1": 1000.0 * _GIB,
}


@dataclass(frozen=True)
class DiskSpaceUsage:
    """Used share of a filesystem and its total and used sizes in ``unit``."""

    percentage_used: float
    sizes: tuple[float, ...] = field(default_factory=tuple)
    unit: str = "B"


def disk_space_from_counts(blocks: int, bfree: int, frsize: int) -> DiskSpaceUsage:
    """Build a usage record from statvfs block counts and fragment size."""
    total = blocks * frsize
    used = (blocks - bfree) * frsize
    if total == 0:
        return DiskSpaceUsage(0.0, (), "B")

    unit_index = 0
    size = float(total)
    while size >= 1024.0 and unit_index < len(UNITS) - 1:
        size /= 1024.0
        unit_index += 1

    scale = 1024.0**unit_index
    return DiskSpaceUsage(
        percentage_used=used / total * 100.0,
        sizes=(total / scale, used / scale),
        unit=UNITS[unit_index],
    )


def calculate_disk_space_usage(path: str = "/") -> DiskSpaceUsage:
    """Measure the filesystem holding ``path``; unit is ``Error`` on failure."""
    try:
        stat = os.statvfs(path)
    except OSError:
        return DiskSpaceUsage(0.0, (), "Error")
    return disk_space_from_counts(stat.f_blocks, stat.f_bfree, stat.f_frsize)


def device_line(name: str, size_bytes: float) -> str:
    """Describe one device with its size in gigabytes."""
    return f"{name}:   {size_bytes / _GIB:.2f} GB"


def disk_bar(title: str, usage: float, width: int) -> str:
    """Render a disk usage bar for a terminal ``width`` columns wide."""
    return usage_bar(title, usage, width, 33, 38)


def disk_screen_lines(usage: DiskSpaceUsage, width: int) -> list[str]:
    """Lay out the disk screen: title, usage bar, device list, instructions."""
    lines = [
        title_line(MAIN_TITLE, ""),
        disk_bar("Total Usage: ", usage.percentage_used, width),
        DEVICES_TITLE,
        DEVICES_HEADER,
    ]
    lines.extend(device_line(name, size) for name, size in sorted(DEVICES.items()))
    lines.append(title_line(INSTRUCTIONS, ""))
    return lines