"""
Interfaces package.

Input adapters turning external documents into internal DTOs. Lower layers
never import from here.
"""

from boundary.interfaces.snapshot_if import load_snapshot, parse_snapshot

__all__ = ["load_snapshot", "parse_snapshot"]
