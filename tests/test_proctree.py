from unittest import mock

import pytest

from smon.proctree import (
    HEADER,
    ProcessNode,
    build_tree,
    cpu_usage_per_process,
    cpu_usage_per_processes,
    current_processes,
    format_tree,
    main,
    max_command_length,
    memory_usage_per_process,
    parse_stat_times,
)


def _stat(pid, utime, stime):
    return f"{pid} (my proc) S 0 1 1 0 -1 0 0 0 0 0 {utime} {stime} 0 0 20 0 1 0 0 0 0\n"


def _add_process(root, pid, ppid, cmdline, resident=0, utime=5, stime=3):
    base = root / str(pid)
    base.mkdir()
    (base / "status").write_text(f"Name:\tproc\nState:\tS\nPPid:\t{ppid}\n")
    (base / "cmdline").write_bytes(cmdline)
    (base / "statm").write_text(f"1000 {resident} 10 1 0 50 0\n")
    (base / "stat").write_text(_stat(pid, utime, stime))
    return base


@pytest.fixture
def proc_root(tmp_path):
    (tmp_path / "meminfo").write_text("MemTotal:        1000 kB\nMemFree:  500 kB\n")
    _add_process(tmp_path, 1, 0, b"/sbin/init\0splash\0")
    _add_process(tmp_path, 2, 1, b"  worker\0")
    _add_process(tmp_path, 3, 1, b"/usr/bin/longer-command\0--flag\0")
    (tmp_path / "self").mkdir()
    return tmp_path


def test_parse_stat_times_with_spaces_in_name():
    assert parse_stat_times(_stat(42, 17, 9)) == (17, 9)


def test_parse_stat_times_malformed():
    with pytest.raises(ValueError):
        parse_stat_times("42 (short) S 1")


def test_populate_info_reads_parent_and_command(proc_root):
    node = ProcessNode(3, 1.5, str(proc_root))
    assert node.populate_info() is True
    assert node.ppid == 1
    assert node.command == "/usr/bin/longer-command"
    assert node.cpu_usage == 1.5


def test_populate_info_empty_command(proc_root):
    _add_process(proc_root, 7, 1, b"")
    assert ProcessNode(7, 0.0, str(proc_root)).populate_info() is False


def test_populate_info_missing_process(proc_root):
    assert ProcessNode(99, 0.0, str(proc_root)).populate_info() is False


def test_memory_usage_missing_statm(proc_root):
    assert memory_usage_per_process(99, str(proc_root)) == 0.0


def test_memory_usage_scales_with_resident_pages(proc_root):
    _add_process(proc_root, 10, 1, b"a\0", resident=100)
    _add_process(proc_root, 11, 1, b"b\0", resident=200)
    small = memory_usage_per_process(10, str(proc_root))
    large = memory_usage_per_process(11, str(proc_root))
    assert small > 0
    assert large == pytest.approx(2 * small)


def test_memory_usage_malformed_statm(proc_root):
    (proc_root / "1" / "statm").write_text("garbage\n")
    with pytest.raises(ValueError):
        memory_usage_per_process(1, str(proc_root))


def test_cpu_usage_missing_process(proc_root):
    assert cpu_usage_per_process(99, 0.0, str(proc_root)) == -1.0


def test_cpu_usage_idle_process(proc_root):
    assert cpu_usage_per_process(1, 0.0, str(proc_root)) == 0.0


def test_cpu_usage_with_default_hz(proc_root):
    stat = proc_root / "1" / "stat"

    def advance(_seconds):
        stat.write_text(_stat(1, 15, 13))

    with mock.patch("smon.proctree.time.sleep", side_effect=advance):
        assert cpu_usage_per_process(1, 1.0, str(proc_root)) == pytest.approx(20.0)


def test_cpu_usage_depends_on_clock(proc_root):
    stat = proc_root / "1" / "stat"

    def sample(mhz):
        stat.write_text(_stat(1, 5, 3))
        (proc_root / "cpuinfo").write_text(f"processor\t: 0\ncpu MHz\t\t: {mhz}\n")

        def advance(_seconds):
            stat.write_text(_stat(1, 15, 13))

        with mock.patch("smon.proctree.time.sleep", side_effect=advance):
            return cpu_usage_per_process(1, 1.0, str(proc_root))

    slow = sample(0.001)
    fast = sample(0.002)
    assert slow > 0
    assert fast == pytest.approx(slow / 2)


def test_cpu_usage_per_processes(proc_root):
    result = cpu_usage_per_processes([1, 2, 99], 0.0, str(proc_root))
    assert set(result) == {1, 2, 99}
    assert result[1] == 0.0
    assert result[99] == -1.0


def test_current_processes(proc_root):
    assert current_processes(str(proc_root)) == [1, 2, 3]


def test_max_command_length(proc_root):
    assert max_command_length(str(proc_root)) == len("/usr/bin/longer-command")


def test_build_tree_links_children(proc_root):
    processes = build_tree({2: 4.0}, str(proc_root))
    assert [node.pid for node in processes] == [1, 2, 3]
    root = processes[0]
    assert [child.pid for child in root.children] == [2, 3]
    assert processes[1].cpu_usage == 4.0
    assert processes[2].cpu_usage == 0.0


def test_format_tree_lists_descendants(proc_root):
    processes = build_tree({2: 2.5}, str(proc_root))
    lines = format_tree(processes[0])
    assert len(lines) == 3
    assert lines[0].startswith("1\t0 \t")
    assert lines[0].endswith("\t/sbin/init")
    assert lines[1] == "2\t1 \t2.5\t0\tworker"


def test_main_prints_tree_and_logs(proc_root, tmp_path, capsys):
    log = tmp_path / "timing.log"
    assert main(["--proc-root", str(proc_root), "--interval", "0", "--log", str(log)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == HEADER
    # Every process heads its own tree and also appears under its parent.
    assert sum(line.startswith("2\t") for line in lines) == 2
    assert sum(line.startswith("1\t") for line in lines) == 1
    assert log.read_text().startswith("Time taken: ")