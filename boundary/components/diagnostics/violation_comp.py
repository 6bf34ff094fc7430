"""Violation factories - one function per diagnostic family.

Every violation message is built here so wording stays consistent across the
normalizer, classifier and checker.
"""

from __future__ import annotations

from boundary.helpers.dto.boundary_dto import SourceLocation
from boundary.helpers.dto.reference_dto import Reference
from boundary.helpers.dto.violation_dto import Violation, ViolationKind

_DECLARATION_MESSAGES: dict[str, str] = {
    "unknown_dep": "unknown boundary {subject} is listed as a dependency",
    "ignored_dep": "ignored boundary {subject} is listed as a dependency",
    "forbidden_dep": (
        "{subject} can't be listed as a dependency because it's not a sibling, a parent, or a dep of some ancestor"
    ),
    "unknown_export": "unknown module {subject} is listed as an export",
    "export_not_in_boundary": "module {subject} can't be exported because it's not a part of this boundary",
    "unknown_option": "unknown option {subject}",
    "invalid_option": "invalid value for option {subject}",
    "cant_reclassify": "only task and adapter modules can be reclassified ({subject})",
    "unknown_boundary": "unknown boundary {subject}",
    "invalid_externals_mode": "invalid externals_mode {subject}, expected strict or relaxed",
    "extra_externals_in_strict_mode": "extra_externals can't be listed in strict externals mode",
    "deps_in_ignored_boundary": "deps can't be listed if ignore is set",
    "exports_in_ignored_boundary": "can't export modules if ignore is set",
    "invalid_ignores": "can't disable checks in sub-boundary {subject}",
    "ancestor_with_ignored_checks": "sub-boundary {subject} is inside a boundary with disabled checks",
}


def declaration_violation(
    kind: ViolationKind,
    subject: str,
    location: SourceLocation,
    detail: str | None = None,
) -> Violation:
    """
    Build a violation attached to a boundary declaration.

    Args:
        kind: One of the declaration-level kinds
        subject: The dep/export/option/module the violation is about
        location: Declaration position
        detail: Optional extra explanation appended to the message
    """
    message = _DECLARATION_MESSAGES[kind].format(subject=subject)
    if detail:
        message = f"{message} ({detail})"
    return Violation(kind=kind, message=message, file=location.file, line=location.line, subject=subject)


def cycle_violation(cycle: tuple[str, ...]) -> Violation:
    """Build-wide dependency cycle violation."""
    return Violation(
        kind="cycle",
        message="dependency cycle found:\n" + " -> ".join(cycle),
        cycle=cycle,
    )


def unclassified_violation(module: str, file: str | None) -> Violation:
    return Violation(
        kind="unclassified_module",
        message=f"{module} is not included in any boundary",
        file=file,
        subject=module,
    )


def describe_callee(reference: Reference) -> str:
    """Fully-qualified callee: `Mod.fun/arity` for calls, `Mod` otherwise."""
    if reference.type == "call" and reference.to_function is not None:
        name, arity = reference.to_function
        return f"{reference.to_module}.{name}/{arity}"
    return reference.to_module


def describe_caller(reference: Reference) -> str:
    if reference.from_function is not None:
        name, arity = reference.from_function
        return f"{reference.from_module}.{name}/{arity}"
    return reference.from_module


def reference_violation(
    kind: ViolationKind,
    reference: Reference,
    from_boundary: str,
    to_boundary: str,
    runtime_only: bool = False,
) -> Violation:
    """
    Build a violation for a forbidden reference.

    Args:
        kind: invalid_cross_boundary_call, not_exported or invalid_external_dep_call
        reference: The offending reference
        from_boundary: Caller's boundary name
        to_boundary: Callee's boundary name, or package id for external calls
        runtime_only: The dependency exists but only for compile-time use
    """
    if kind == "not_exported":
        reason = f"(module {reference.to_module} is not exported by its owner boundary {to_boundary})"
    elif runtime_only:
        reason = f"(runtime references from {from_boundary} to {to_boundary} are not allowed)"
    else:
        reason = f"(references from {from_boundary} to {to_boundary} are not allowed)"

    message = (
        f"forbidden reference to {describe_callee(reference)}\n"
        f"  {reason}\n"
        f"  (reference originated from {describe_caller(reference)})"
    )
    return Violation(
        kind=kind,
        message=message,
        file=reference.file,
        line=reference.line,
        subject=reference.to_module,
        from_boundary=from_boundary,
        to_boundary=to_boundary,
    )


def sort_violations(violations: list[Violation]) -> list[Violation]:
    """Sort by location; build-wide violations (no file) come first."""
    return sorted(violations, key=lambda v: (v.file or "", v.line or 0))
