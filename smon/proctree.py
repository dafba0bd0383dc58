"""Process tree built from /proc, with per-process CPU and memory usage."""

from __future__ import annotations

import argparse
import mmap
import sys
import threading
import time
from pathlib import Path

PROC_ROOT = "/proc"
MAX_PID = 32767
DEFAULT_HZ = 100.0
HEADER = "PID\tPPID\tCPU%\tMem%\tCommand"


def _pid_dirs(proc_root: str) -> list[int]:
    root = Path(proc_root)
    try:
        entries = list(root.iterdir())
    except OSError:
        return []
    pids = (int(entry.name) for entry in entries if entry.name.isdigit())
    return sorted(pid for pid in pids if 1 <= pid <= MAX_PID)


def _read_command(proc_root: str, pid: int) -> str | None:
    """Return the first NUL-separated word of a process command line."""
    try:
        data = (Path(proc_root) / str(pid) / "cmdline").read_bytes()
    except OSError:
        return None
    return data.split(b"\0", 1)[0].decode("utf-8", errors="replace")


def _mem_total(proc_root: str) -> int:
    with open(Path(proc_root) / "meminfo", encoding="ascii", errors="replace") as handle:
        for line in handle:
            if "MemTotal" in line:
                _, _, rest = line.partition(":")
                parts = rest.split()
                return int(parts[0]) if parts else 0
    return 0


def memory_usage_per_process(pid: int, proc_root: str = PROC_ROOT) -> float:
    """Return the resident memory of ``pid`` relative to total memory.

    A process without a readable statm file counts as using nothing.
    """
    try:
        lines = (Path(proc_root) / str(pid) / "statm").read_text(errors="replace").splitlines()
    except OSError:
        return 0.0

    resident = 0
    if lines:
        fields = lines[0].split()
        try:
            resident = int(fields[1])
        except (IndexError, ValueError) as exc:
            raise ValueError(f"failed to read the resident memory of process {pid}") from exc

    total = _mem_total(proc_root)
    if total == 0:
        raise ValueError("MemTotal is missing from meminfo")
    return resident * mmap.PAGESIZE / total / 10


class ProcessNode:
    """A process read from /proc, linked to the processes it started."""

    def __init__(self, pid: int, cpu_usage: float = 0.0, proc_root: str = PROC_ROOT) -> None:
        self.pid = pid
        self.ppid = 0
        self.cpu_usage = cpu_usage
        self.memory_usage = 0.0
        self.command = ""
        self.children: list[ProcessNode] = []
        self.proc_root = proc_root

    def __repr__(self) -> str:
        return f"ProcessNode(pid={self.pid}, ppid={self.ppid}, command={self.command!r})"

    def populate_info(self) -> bool:
        """Fill in memory use, parent pid and command; False if the process is unusable."""
        self.memory_usage = memory_usage_per_process(self.pid, self.proc_root)
        base = Path(self.proc_root) / str(self.pid)
        try:
            status = (base / "status").read_text(errors="replace")
        except OSError:
            return False
        for line in status.splitlines():
            name, sep, value = line.partition(":")
            if sep and name == "PPid":
                self.ppid = int(value)

        command = _read_command(self.proc_root, self.pid)
        if command is None:
            return False
        self.command = command
        return bool(command)

    def add_child(self, child: ProcessNode) -> None:
        """Record ``child`` as started by this process."""
        self.children.append(child)


def parse_stat_times(line: str) -> tuple[int, int]:
    """Return ``(utime, stime)`` from one line of a /proc/<pid>/stat file."""
    _, sep, rest = line.rpartition(")")
    try:
        if sep:
            fields = rest.split()
            return int(fields[11]), int(fields[12])
        fields = line.split()
        return int(fields[13]), int(fields[14])
    except (IndexError, ValueError) as exc:
        raise ValueError(f"malformed stat line: {line!r}") from exc


def _cpu_hz(proc_root: str) -> float:
    try:
        with open(Path(proc_root) / "cpuinfo", encoding="ascii", errors="replace") as handle:
            for line in handle:
                if "cpu MHz" in line:
                    _, _, value = line.partition(":")
                    try:
                        return float(value) * 1_000_000.0
                    except ValueError:
                        break
    except OSError:
        pass
    return DEFAULT_HZ


def _read_stat_times(proc_root: str, pid: int) -> tuple[int, int] | None:
    path = Path(proc_root) / str(pid) / "stat"
    try:
        line = path.read_text(errors="replace").partition("\n")[0]
    except OSError:
        print(f"Failed to open {path}", file=sys.stderr)
        return None
    return parse_stat_times(line)


def cpu_usage_per_process(pid: int, interval: float = 1.0, proc_root: str = PROC_ROOT) -> float:
    """Sample the CPU time of ``pid`` over ``interval`` seconds; -1.0 if unreadable."""
    start = _read_stat_times(proc_root, pid)
    if start is None:
        return -1.0
    time.sleep(interval)
    end = _read_stat_times(proc_root, pid)
    if end is None:
        return -1.0
    total_diff = sum(end) - sum(start)
    return total_diff / _cpu_hz(proc_root) * 100.0


def cpu_usage_per_processes(
    pids, interval: float = 1.0, proc_root: str = PROC_ROOT
) -> dict[int, float]:
    """Sample many processes at once; returns those finished within ``interval`` + 1 s."""
    results: dict[int, float] = {}
    lock = threading.Lock()

    def worker(pid: int) -> None:
        try:
            usage = cpu_usage_per_process(pid, interval, proc_root)
        except ValueError:
            return
        with lock:
            results[pid] = usage

    threads = [threading.Thread(target=worker, args=(pid,), daemon=True) for pid in pids]
    for thread in threads:
        thread.start()
    deadline = time.monotonic() + interval + 1.0
    for thread in threads:
        thread.join(max(0.0, deadline - time.monotonic()))
    with lock:
        return dict(results)


def current_processes(proc_root: str = PROC_ROOT) -> list[int]:
    """Return the pids, in order, whose command line can be read."""
    return [pid for pid in _pid_dirs(proc_root) if _read_command(proc_root, pid) is not None]


def max_command_length(proc_root: str = PROC_ROOT) -> int:
    """Return the length of the longest command name among running processes."""
    lengths = (len(_read_command(proc_root, pid) or "") for pid in _pid_dirs(proc_root))
    return max(lengths, default=0)


def build_tree(cpu_usages=None, proc_root: str = PROC_ROOT) -> list[ProcessNode]:
    """Read every process in pid order and link each one to its parent."""
    usages = cpu_usages or {}
    processes: list[ProcessNode] = []
    by_pid: dict[int, ProcessNode] = {}
    for pid in _pid_dirs(proc_root):
        node = ProcessNode(pid, usages.get(pid, 0.0), proc_root)
        if node.populate_info():
            processes.append(node)
            by_pid[pid] = node

    for node in processes:
        parent = by_pid.get(node.ppid)
        if parent is not None:
            parent.add_child(node)
    return processes


def format_tree(node: ProcessNode) -> list[str]:
    """Return the lines for ``node`` followed by those of all its descendants."""
    lines = [
        f"{node.pid}\t{node.ppid} \t{node.cpu_usage:g}\t{node.memory_usage:g}\t"
        f"{node.command.lstrip(' ')}"
    ]
    for child in node.children:
        lines.extend(format_tree(child))
    return lines


def main(argv=None) -> int:
    """Print the process tree and append the time taken to a log file."""
    parser = argparse.ArgumentParser(
        prog="smon-proctree", description="Print running processes with CPU and memory usage."
    )
    parser.add_argument("--proc-root", default=PROC_ROOT, help="procfs mount point")
    parser.add_argument("--interval", type=float, default=1.0, help="CPU sampling seconds")
    parser.add_argument("--log", default="log.txt", help="file the timing is appended to")
    args = parser.parse_args(argv)

    started = time.perf_counter()
    usages = cpu_usage_per_processes(
        current_processes(args.proc_root), args.interval, args.proc_root
    )
    processes = build_tree(usages, args.proc_root)

    print(HEADER)
    for process in processes:
        for line in format_tree(process):
            print(line)

    elapsed = time.perf_counter() - started
    with open(args.log, "a", encoding="utf-8") as log:
        log.write(f"Time taken: {elapsed} seconds\n")
    return 0