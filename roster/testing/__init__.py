"""Test doubles for roster collaborators."""

from roster.testing.backend import InMemoryBackend

__all__ = ["InMemoryBackend"]
