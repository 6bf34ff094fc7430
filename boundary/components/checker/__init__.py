"""Checker - dependency, export, cycle and reference checks over a View."""

from boundary.components.checker.cycle_detection_comp import dependency_cycles, find_cycles
from boundary.components.checker.dependency_checks_comp import (
    invalid_deps,
    invalid_exports,
    invalid_ignores,
    unclassified_module_violations,
    user_boundaries,
)
from boundary.components.checker.reference_checks_comp import check_reference, invalid_references

__all__ = [
    "check_reference",
    "dependency_cycles",
    "find_cycles",
    "invalid_deps",
    "invalid_exports",
    "invalid_ignores",
    "invalid_references",
    "unclassified_module_violations",
    "user_boundaries",
]
