"""Archlint - ADR policy validator and micro-task line linter."""

__version__ = "0.3.0"
