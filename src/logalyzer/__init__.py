"""Log viewer engine: filtering, log format coloring, token and search highlighting."""

__version__ = "0.1.0"
