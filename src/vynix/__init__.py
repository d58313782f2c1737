"""Vynix: cached AI generation for branching conversations."""

__version__ = "0.3.0"
