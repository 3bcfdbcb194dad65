"""Disk usage traversal and aggregation, glob search, marking, and the text and layout of a terminal viewer."""

__version__ = "0.1.0"