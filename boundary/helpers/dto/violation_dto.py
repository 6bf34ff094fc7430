"""Violation DTO - one diagnostic produced by a boundary run."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

ViolationKind = Literal[
    "unknown_dep",
    "ignored_dep",
    "cycle",
    "unclassified_module",
    "forbidden_dep",
    "unknown_export",
    "export_not_in_boundary",
    "invalid_cross_boundary_call",
    "not_exported",
    "invalid_external_dep_call",
    "unknown_option",
    "invalid_option",
    "cant_reclassify",
    "unknown_boundary",
    "invalid_externals_mode",
    "extra_externals_in_strict_mode",
    "deps_in_ignored_boundary",
    "exports_in_ignored_boundary",
    "invalid_ignores",
    "ancestor_with_ignored_checks",
]

Severity = Literal["warning", "error"]


@dataclass(frozen=True)
class Violation:
    """
    A boundary diagnostic.

    `file`/`line` are None for build-wide violations (cycles). `subject` is
    the dep, export, option or module the violation is about.
    """

    kind: ViolationKind
    message: str
    file: str | None = None
    line: int | None = None
    severity: Severity = "warning"
    subject: str | None = None
    from_boundary: str | None = None
    to_boundary: str | None = None
    cycle: tuple[str, ...] = ()
