"""Terminal system metrics monitor for Linux: CPU, memory, disk and process activity."""

__version__ = "0.1.0"
__all__ = ["__version__"]