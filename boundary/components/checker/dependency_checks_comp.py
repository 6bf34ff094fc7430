"""Declaration-level checks: deps, exports, ignored nesting and unclassified modules."""

from __future__ import annotations

from boundary.components.diagnostics.violation_comp import declaration_violation, unclassified_violation
from boundary.helpers.dto.boundary_dto import Boundary
from boundary.helpers.dto.view_dto import View
from boundary.helpers.dto.violation_dto import Violation


def user_boundaries(view: View) -> list[Boundary]:
    """Boundaries declared by user packages, sorted by name."""
    return sorted(
        (b for b in view.boundaries.values() if b.app in view.user_apps),
        key=lambda b: b.name,
    )


def invalid_deps(view: View) -> list[Violation]:
    """
    Validate every dependency declared by a user boundary.

    - unknown_dep: the target is not a boundary
    - ignored_dep: the target has ignore set
    - forbidden_dep: the target is not a sibling, the parent, a dep of some
      ancestor, or a top-level boundary of another package
    """
    violations: list[Violation] = []

    for boundary in user_boundaries(view):
        for dep_name in dict.fromkeys(boundary.dep_names):
            target = view.boundaries.get(dep_name)
            if target is None:
                violations.append(declaration_violation("unknown_dep", dep_name, boundary.location))
            elif target.ignore:
                violations.append(declaration_violation("ignored_dep", dep_name, boundary.location))
            elif not _dep_allowed(view, boundary, target):
                violations.append(declaration_violation("forbidden_dep", dep_name, boundary.location))

    return violations


def _dep_allowed(view: View, boundary: Boundary, target: Boundary) -> bool:
    if target.app != boundary.app:
        # descendants of a foreign boundary can't be depended upon directly
        return target.parent is None

    if target.name == boundary.parent or target.parent == boundary.parent:
        return True

    for ancestor_name in boundary.ancestors:
        ancestor = view.boundaries.get(ancestor_name)
        if ancestor is not None and target.name in ancestor.dep_names:
            return True

    return False


def invalid_ignores(view: View) -> list[Violation]:
    """
    Validate ignore against the boundary nesting.

    - invalid_ignores: a sub-boundary sets ignore
    - ancestor_with_ignored_checks: a sub-boundary lives inside a boundary
      that sets ignore (the nearest such ancestor is named)
    """
    violations: list[Violation] = []

    for boundary in user_boundaries(view):
        if boundary.ignore and boundary.ancestors:
            violations.append(declaration_violation("invalid_ignores", boundary.name, boundary.location))

        ignored = next((name for name in boundary.ancestors if _is_ignored(view, name)), None)
        if ignored is not None:
            violations.append(
                declaration_violation("ancestor_with_ignored_checks", boundary.name, boundary.location, ignored)
            )

    return violations


def _is_ignored(view: View, name: str) -> bool:
    boundary = view.boundaries.get(name)
    return boundary is not None and boundary.ignore


def invalid_exports(view: View) -> list[Violation]:
    """
    Validate the exports of every user boundary.

    - unknown_export: the exported module doesn't exist
    - export_not_in_boundary: the module belongs to another boundary (the
      main module of a direct child boundary may be exported by its parent)
    """
    violations: list[Violation] = []

    for boundary in user_boundaries(view):
        if boundary.implicit:
            continue

        for export in sorted(boundary.exports - {boundary.name}):
            if export not in view.module_to_app:
                violations.append(declaration_violation("unknown_export", export, boundary.location))
                continue

            exported_boundary = view.boundaries.get(export)
            if exported_boundary is not None and exported_boundary.parent == boundary.name:
                continue

            if view.module_to_boundary.get(export) != boundary.name:
                violations.append(declaration_violation("export_not_in_boundary", export, boundary.location))

    return violations


def unclassified_module_violations(view: View) -> list[Violation]:
    """One violation per unclassified module of the main package."""
    violations = []
    for module in sorted(view.unclassified):
        info = view.modules.get(module)
        violations.append(unclassified_violation(module, info.file if info is not None else None))
    return violations
