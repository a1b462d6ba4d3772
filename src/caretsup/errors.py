"""Error types for configuration and pipeline wiring.

Parsing and rendering never raise: text that does not form a construct is
kept as literal text.
"""

from __future__ import annotations

from pathlib import Path


class RegistrationError(Exception):
    """Raised when rules, render functions, or node kinds are wired twice."""


class ConfigError(Exception):
    """Raised on a malformed or invalid configuration file."""

    def __init__(self, message: str, path: Path | None = None) -> None:
        self.message = message
        self.path = path
        super().__init__(self.format())

    def format(self) -> str:
        if self.path is None:
            return f"error: {self.message}"
        return f"error: {self.message}\n  --> {self.path}"
