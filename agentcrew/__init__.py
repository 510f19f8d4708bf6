"""Helpers for agent sidecars: configuration, skills, workspace validation, names, errors and messages."""

__version__ = "0.1.0"

__all__ = ["config", "skills", "validation", "names", "errors", "messages"]