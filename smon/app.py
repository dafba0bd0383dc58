"""Interactive full-screen monitor switching between overview and detail screens."""

from __future__ import annotations

import argparse
import curses
import enum

from smon.cpu import cpu_bar, cpu_screen_lines, get_cpu_usage
from smon.disk import calculate_disk_space_usage, disk_bar, disk_screen_lines
from smon.memory import get_swap_usage, memory_bar, memory_screen_lines, monitor_memory
from smon.processes import ProcessView, get_processes
from smon.widgets import INSTRUCTIONS, title_line

MAIN_TITLE = "System Metrics Monitor: Overview"
OVERVIEW_REFRESH_MS = 1000
REFRESH_MS = 2000


class Screen(enum.Enum):
    """The screens the monitor can show."""

    OVERVIEW = enum.auto()
    CPU = enum.auto()
    MEMORY = enum.auto()
    DISK = enum.auto()
    PROCESSES = enum.auto()


_SCREEN_KEYS = {
    curses.KEY_F1: Screen.OVERVIEW,
    curses.KEY_F2: Screen.CPU,
    curses.KEY_F3: Screen.MEMORY,
    curses.KEY_F4: Screen.DISK,
    curses.KEY_F5: Screen.PROCESSES,
}


def overview_lines(cpu_total: float, memory_used: float, disk_used: float, width: int) -> list[str]:
    """Lay out the overview screen: title, CPU, memory and disk bars, instructions."""
    return [
        title_line(MAIN_TITLE, ""),
        cpu_bar("CPU Usage:", cpu_total, width),
        memory_bar("Memory Usage:", memory_used, width),
        disk_bar("Disk Usage:", disk_used, width),
        title_line(INSTRUCTIONS, ""),
    ]


def screen_for_key(current: Screen, key: int) -> Screen | None:
    """Return the screen a key leads to, ``None`` to quit, or ``current``."""
    if key == curses.KEY_F6:
        return None
    return _SCREEN_KEYS.get(key, current)


class Monitor:
    """Drives a curses window through the monitor screens."""

    def __init__(self, stdscr) -> None:
        self.stdscr = stdscr
        self.screen = Screen.OVERVIEW
        self.processes = ProcessView(get_processes())

    def _lines(self, width: int, height: int) -> list[str]:
        if self.screen is Screen.OVERVIEW:
            return overview_lines(
                get_cpu_usage().get("total", 0.0),
                monitor_memory(),
                calculate_disk_space_usage().percentage_used,
                width,
            )
        if self.screen is Screen.CPU:
            return cpu_screen_lines(get_cpu_usage(), width, height)
        if self.screen is Screen.MEMORY:
            return memory_screen_lines(monitor_memory(), get_swap_usage(), width)
        if self.screen is Screen.DISK:
            return disk_screen_lines(calculate_disk_space_usage(), width)
        return self.processes.lines(height)

    def render(self) -> list[str]:
        """Draw the current screen and return the lines it consists of."""
        height, width = self.stdscr.getmaxyx()
        lines = self._lines(width, height)
        self.stdscr.erase()
        for row, line in enumerate(lines[:height]):
            try:
                self.stdscr.addnstr(row, 0, line, max(width - 1, 0))
            except curses.error:
                pass
        self.stdscr.refresh()
        return lines

    def handle_key(self, key: int) -> bool:
        """Act on a key, or on a refresh tick when ``key`` is ``curses.ERR``.

        Returns False when the monitor should stop.
        """
        if self.screen is Screen.PROCESSES:
            height, _ = self.stdscr.getmaxyx()
            if key == curses.ERR:
                self.processes = ProcessView(get_processes(), self.processes.start)
                return True
            if key == curses.KEY_DOWN:
                self.processes.scroll_down(height)
                return True
            if key == curses.KEY_UP:
                self.processes.scroll_up()
                return True
            if key == curses.KEY_F9:
                self.processes.sort_by_cpu()
                return True

        target = screen_for_key(self.screen, key)
        if target is None:
            return False
        if target is not self.screen:
            self.screen = target
            if target is Screen.PROCESSES:
                self.processes = ProcessView(get_processes())
        return True

    def run(self) -> None:
        """Render and react to keys until quit, refreshing on a timer."""
        self.stdscr.keypad(True)
        while True:
            self.render()
            refresh = OVERVIEW_REFRESH_MS if self.screen is Screen.OVERVIEW else REFRESH_MS
            self.stdscr.timeout(refresh)
            if not self.handle_key(self.stdscr.getch()):
                return


def _start(stdscr) -> None:
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    Monitor(stdscr).run()


def main(argv=None) -> int:
    """Start the interactive monitor."""
    parser = argparse.ArgumentParser(prog="smon", description="Terminal system metrics monitor.")
    parser.parse_args(argv)
    curses.wrapper(_start)
    return 0