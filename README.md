# smon

A small full-screen terminal monitor for Linux. It reads its figures from
`/proc` and from the root filesystem and shows them as text bar gauges. The
overview refreshes every second and the other screens every two seconds.

## Installing

```
pip install .
```

It needs Python 3.10 or newer, a Linux system with `/proc` mounted, and the
standard `curses` module. It has no other dependencies.

## Running the monitor

```
smon
```

Use the function keys to move between screens:

| Key | Screen |
|-----|--------|
| F1  | Overview: total CPU, memory and disk usage |
| F2  | CPU: total usage and one gauge per core, two to a row |
| F3  | Memory: free, used and swap usage |
| F4  | Disk: usage of the root filesystem and a device list |
| F5  | Process info: a scrollable process table |
| F6  | Quit |

On the process screen the up and down arrow keys scroll the table. F9 sorts it
by CPU usage, highest first, and goes back to the top.

If the terminal is too short to show a gauge for every core, the CPU screen
shows only the total gauge and a line saying the window is too small.

Memory usage counts buffers and page cache as free. Swap usage comes from
`SwapTotal` and `SwapFree` in `/proc/meminfo`.

## Listing the process tree

```
smon-proctree [--proc-root DIR] [--interval SECONDS] [--log FILE]
```

This prints a header and then one line per process: its PID, its parent PID,
its CPU usage, its memory figure and the first word of its command line.
Processes whose command line is empty (kernel threads) are left out. Every
process is printed in PID order and is followed by its descendants, so a child
appears both on its own and again under its parent.

CPU usage is sampled for all processes at once over `--interval` seconds
(1 by default). The time the run took is appended to `--log` (`log.txt` in the
current directory by default). `--proc-root` (default `/proc`) points the
command at another procfs tree.

## Using it as a library

```python
from smon.cpu import get_cpu_usage
from smon.memory import monitor_memory, get_swap_usage
from smon.disk import calculate_disk_space_usage

print(get_cpu_usage())              # {"total": ..., "CPU0": ..., ...}
print(monitor_memory())             # used memory, in percent
print(get_swap_usage())             # used swap, in percent
print(calculate_disk_space_usage()) # DiskSpaceUsage(percentage_used=..., sizes=(total, used), unit=...)
```

The parsing steps can be called on their own, for instance
`smon.cpu.parse_cpu_times` and `smon.cpu.compute_usage` on `/proc/stat` text,
`smon.memory.parse_meminfo_usage` on `/proc/meminfo` text, and
`smon.disk.disk_space_from_counts` on statvfs block counts. The
`smon.proctree` module offers `build_tree`, `format_tree`,
`cpu_usage_per_process` and `memory_usage_per_process`.

## What it does not do

- The process screen does not list the processes running on the machine. It
  shows a fixed sample list of fifty processes from `smon.processes.get_processes`.
  Use `smon-proctree` to see real processes.
- The device list on the disk screen is a fixed sample (`sda1`, `sdb1`); it does
  not read the block devices of the machine. Only the usage gauge is measured.

## Running the tests

```
pip install .[test]
pytest
```