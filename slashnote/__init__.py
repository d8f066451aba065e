"""Slash command interpreter for notes on issues and merge requests."""

__version__ = "0.1.0"
