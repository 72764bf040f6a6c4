"""Fault triage layer for the Alfred Todoist workflow."""

__version__ = "0.1.0"
