"""Bounded in-memory chat log exposed as a character-device style channel."""

__version__ = "1.0.0"
