from __future__ import annotations


class ProctopError(Exception):
    pass


class TerminalError(ProctopError):
    """Raised when the terminal cannot be switched to raw input mode."""
