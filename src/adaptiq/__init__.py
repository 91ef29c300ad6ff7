"""Adaptive learning content service."""

__version__ = "0.1.0"
