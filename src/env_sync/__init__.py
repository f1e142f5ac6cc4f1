"""Synchronize Codex environments from a GitHub organization."""

__version__ = "0.1.0"
