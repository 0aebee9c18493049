"""Homestead Transfer: export and import engine for the homestead data store."""

__version__ = "0.1.0"
