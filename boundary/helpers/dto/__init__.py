"""
DTOs (Data Transfer Objects) used across multiple layers.

Each *_dto.py module holds frozen dataclasses forming the contracts between
components, workflows and services. DTOs are pure: no I/O and no logic
beyond trivial derived properties.
"""

from boundary.helpers.dto.boundary_dto import (
    Boundary,
    Dependency,
    ExportSpec,
    ExternalRule,
    ModuleInfo,
    RawDeclaration,
    Reclassification,
    SourceLocation,
)
from boundary.helpers.dto.reference_dto import Reference
from boundary.helpers.dto.view_dto import Classification, ProjectSnapshot, View
from boundary.helpers.dto.violation_dto import Violation

__all__ = [
    "Boundary",
    "Classification",
    "Dependency",
    "ExportSpec",
    "ExternalRule",
    "ModuleInfo",
    "ProjectSnapshot",
    "RawDeclaration",
    "Reclassification",
    "Reference",
    "SourceLocation",
    "View",
    "Violation",
]
