"""
Boundary - architectural layering checks over a module graph.

Groups of modules ("boundaries") declare what they export and which other
boundaries they depend on. Every cross-module reference collected during a
build is checked against those declarations.

Architecture:
- helpers/ = stdlib-only utilities and DTOs (pure, stateless)
- components/ = normalizer, classifier and checker building blocks
- workflows/ = view building, refreshing and checking
- services/ = config, view cache, one-run orchestration
- interfaces/ = snapshot document loading
"""

from boundary.__version__ import __version__

__all__ = ["__version__"]
