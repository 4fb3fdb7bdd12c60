"""Periodized training plan generation and check-in adaptation."""

__version__ = "0.1.0"
