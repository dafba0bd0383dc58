[build-system]
requires = ["setuptools>=61.0"]
build-backend = "setuptools.build_meta"

[project]
name = "smon"
version = "0.1.0"
description = "A terminal system metrics monitor for CPU, memory, disk and process activity on Linux"
requires-python = ">=3.10"
dependencies = []
keywords = ["monitor", "system", "cpu", "memory", "disk", "processes", "terminal", "procfs", "curses"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console :: Curses",
    "Intended Audience :: System Administrators",
    "Operating System :: POSIX :: Linux",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: System :: Monitoring",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
smon = "smon.app:main"
smon-proctree = "smon.proctree:main"

[tool.setuptools.packages.find]
include = ["smon*"]

[tool.pytest.ini_options]
addopts = "-ra"
