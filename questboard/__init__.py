"""Questboard: a turn-based board game engine."""

__version__ = "1.0.0"
