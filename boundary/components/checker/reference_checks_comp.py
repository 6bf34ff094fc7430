"""
Reference checks.

Every collected reference is resolved to a caller boundary and one or more
callee boundaries, then checked against the caller's declared deps, the
callee's exports and the caller's externals policy.
"""

from __future__ import annotations

from collections.abc import Iterable

from boundary.components.diagnostics.violation_comp import reference_violation
from boundary.helpers.dto.boundary_dto import Boundary, Dependency
from boundary.helpers.dto.reference_dto import Reference
from boundary.helpers.dto.view_dto import View
from boundary.helpers.dto.violation_dto import Violation
from boundary.helpers.names import is_prefix


def invalid_references(view: View, references: Iterable[Reference]) -> list[Violation]:
    """Check every reference; each forbidden reference yields one violation."""
    violations = []
    for reference in references:
        violation = check_reference(view, reference)
        if violation is not None:
            violations.append(violation)
    return violations


def check_reference(view: View, reference: Reference) -> Violation | None:
    """
    Check a single reference.

    References from unclassified modules are skipped (those modules are
    reported on their own), as is everything going out of an ignored
    boundary. A callee without a boundary is checked against the externals
    policy of the caller.
    """
    from_name = view.module_to_boundary.get(reference.from_module)
    if from_name is None:
        return None

    from_boundary = view.boundaries[from_name]
    if from_boundary.ignore:
        return None

    candidates = _target_boundaries(view, reference.to_module)
    if not candidates:
        return _external_reference_error(view, reference, from_boundary)

    errors = [_reference_error(view, reference, from_boundary, candidate) for candidate in candidates]
    if any(error is None for error in errors):
        return None
    return errors[0]


def _target_boundaries(view: View, module: str) -> list[Boundary]:
    """
    Boundaries that may legitimately receive a reference to `module`.

    The main module of a sub-boundary can also be reached through its
    parent, which may export it.
    """
    name = view.module_to_boundary.get(module)
    if name is None:
        return []

    boundary = view.boundaries[name]
    targets = [boundary]
    if module == boundary.name and boundary.parent is not None:
        parent = view.boundaries.get(boundary.parent)
        if parent is not None:
            targets.append(parent)
    return targets


def _reference_error(
    view: View,
    reference: Reference,
    from_boundary: Boundary,
    to_boundary: Boundary,
) -> Violation | None:
    if to_boundary.ignore or to_boundary.name == from_boundary.name:
        return None

    if to_boundary.app != from_boundary.app and not checks_package(view, from_boundary, to_boundary.app):
        return None

    if not _dependency_allows(from_boundary, to_boundary, reference):
        runtime_only = reference.mode == "runtime" and Dependency(to_boundary.name, "compile") in from_boundary.deps
        return reference_violation(
            "invalid_cross_boundary_call",
            reference,
            from_boundary.name,
            to_boundary.name,
            runtime_only=runtime_only,
        )

    if not (to_boundary.implicit or reference.to_module in to_boundary.exports):
        return reference_violation("not_exported", reference, from_boundary.name, to_boundary.name)

    return None


def _dependency_allows(from_boundary: Boundary, to_boundary: Boundary, reference: Reference) -> bool:
    # compile-only deps permit compile-time references only
    return any(
        dep.name == to_boundary.name and (dep.mode == "runtime" or reference.mode == "compile")
        for dep in from_boundary.deps
    )


def checks_package(view: View, boundary: Boundary, package: str) -> bool:
    """
    Whether references from `boundary` into `package` are subject to checks.

    True in strict externals mode, and for packages the boundary depends on,
    lists in extra_externals, or has an externals rule for.
    """
    if boundary.externals_mode == "strict":
        return True
    if package in boundary.extra_externals or package in boundary.externals:
        return True
    return any(view.module_to_app.get(dep.name) == package for dep in boundary.deps)


def _external_reference_error(view: View, reference: Reference, from_boundary: Boundary) -> Violation | None:
    package = view.module_to_app.get(reference.to_module)
    if package is None or package == from_boundary.app:
        return None

    if not checks_package(view, from_boundary, package):
        return None

    rule = from_boundary.externals.get(package)
    if rule is not None:
        matches = any(is_prefix(prefix, reference.to_module) for prefix in rule.prefixes)
        allowed = matches if rule.policy == "only" else not matches
        if allowed:
            return None

    return reference_violation("invalid_external_dep_call", reference, from_boundary.name, package)
