"""Output sinks for exporting reports."""

from microlend.sinks.json_file import JsonFileSink

__all__ = ["JsonFileSink"]
