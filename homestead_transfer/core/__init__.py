"""Core models and exceptions."""
