"""Custom exceptions used across multiple layers.

Rules:
- Only put exceptions here if they need to be raised in one layer and caught in another.
- Boundary rule violations are never exceptions; they are Violation values.
- No I/O, no config loading, no complex logic.
"""

from __future__ import annotations


class BoundaryError(Exception):
    """Base class for errors raised by the boundary package."""


class ConfigError(BoundaryError):
    """Raised when a settings file or setting value is invalid."""


class SnapshotError(BoundaryError):
    """Raised when a project snapshot document cannot be parsed or validated."""
