"""Check a view and a reference stream - the Checker entry point."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from boundary.components.checker.cycle_detection_comp import dependency_cycles
from boundary.components.checker.dependency_checks_comp import (
    invalid_deps,
    invalid_exports,
    invalid_ignores,
    unclassified_module_violations,
)
from boundary.components.checker.reference_checks_comp import invalid_references
from boundary.components.diagnostics.violation_comp import sort_violations
from boundary.helpers.dto.reference_dto import Reference
from boundary.helpers.dto.view_dto import View
from boundary.helpers.dto.violation_dto import Violation

logger = logging.getLogger(__name__)


def check_boundaries_workflow(view: View, references: Iterable[Reference]) -> list[Violation]:
    """
    Produce every violation of a build.

    Pure function of its inputs: definition errors recorded in the view,
    invalid deps and exports, ignore misuse in nested boundaries, cycles,
    unclassified modules and forbidden references. No violation stops the
    others from being evaluated.

    Returns:
        Violations sorted by location, build-wide ones first
    """
    violations: list[Violation] = [
        *view.errors,
        *invalid_deps(view),
        *invalid_exports(view),
        *invalid_ignores(view),
        *dependency_cycles(view),
        *unclassified_module_violations(view),
        *invalid_references(view, references),
    ]
    logger.debug(f"Boundary check produced {len(violations)} violations")
    return sort_violations(violations)
