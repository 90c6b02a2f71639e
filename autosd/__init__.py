"""Shut a laptop down cleanly before its battery runs flat."""

__version__ = "0.3.0"
