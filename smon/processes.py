"""Process table rows, a sample process list and the scrollable process view."""

from __future__ import annotations

from dataclasses import dataclass

from smon.widgets import INSTRUCTIONS, title_line

MAIN_TITLE = "System Metrics Monitor: Process Usage Information"
SORT_HINT = "F9 Sort"
COLUMN_WIDTH = 5
SEPARATOR = "  "


@dataclass
class Process:
    """One row of the process table."""

    pid: int = 0
    ppid: int = 0
    user: str = ""
    command: str = ""
    cpu_usage: float = 0.0
    memory_usage: float = 0.0
    read_speed: float = 0.0
    write_speed: float = 0.0


def right_align(text: str, size: int) -> str:
    """Pad ``text`` on the left to ``size`` columns; longer text is unchanged."""
    return text.rjust(size)


def _row(pid: str, ppid: str, cpu: str, mem: str, command: str) -> str:
    columns = [right_align(value, COLUMN_WIDTH) for value in (pid, ppid, cpu, mem)]
    return SEPARATOR.join([*columns, command])


def header_row() -> str:
    """Return the header line of the process table."""
    return _row("PID", "PPID", "CPU%", "MEM%", "COMMAND")


def format_process_row(process: Process) -> str:
    """Return the table line for one process."""
    return _row(
        str(process.pid),
        str(process.ppid),
        f"{process.cpu_usage:.2f}",
        f"{process.memory_usage:.2f}",
        process.command,
    )


def get_processes() -> list[Process]:
    """Return the sample list of fifty processes shown in the table."""
    return [
        Process(
            pid=(12 * i) ^ 1002,
            ppid=i + 1000,
            user="user",
            command="/usr/bin/some_application --with-long-arguments-that-take-space",
            cpu_usage=i * 0.75,
            memory_usage=i * 0.5,
        )
        for i in range(50)
    ]


class ProcessView:
    """A window onto a process list, scrolled by a 1-based start row."""

    def __init__(self, processes: list[Process], start: int = 1) -> None:
        self.processes = list(processes)
        self.start = start

    def max_to_show(self, height: int) -> int:
        """Number of process rows that fit in a terminal ``height`` rows tall."""
        return height - 6 if height > 6 else 1

    def visible(self, height: int) -> list[Process]:
        """Processes currently on screen."""
        first = self.start - 1
        return self.processes[first : first + self.max_to_show(height)]

    def scroll_down(self, height: int) -> bool:
        """Move one row down if more rows remain below; report whether it moved."""
        if self.start < len(self.processes) - self.max_to_show(height) + 1:
            self.start += 1
            return True
        return False

    def scroll_up(self) -> bool:
        """Move one row up unless already at the top; report whether it moved."""
        if self.start > 1:
            self.start -= 1
            return True
        return False

    def sort_by_cpu(self) -> None:
        """Order by CPU usage, highest first, and return to the top."""
        self.processes.sort(key=lambda process: process.cpu_usage, reverse=True)
        self.start = 1

    def lines(self, height: int) -> list[str]:
        """Lay out the process screen for a terminal ``height`` rows tall."""
        rows = [
            title_line(MAIN_TITLE, "") + SEPARATOR + title_line(SORT_HINT, ""),
            header_row(),
        ]
        rows.extend(format_process_row(process) for process in self.visible(height))
        rows.append(title_line(INSTRUCTIONS, ""))
        return rows