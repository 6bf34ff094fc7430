"""
Module classification.

Classification is done one package at a time: the package's boundaries
form a trie and each of the package's modules is assigned to the deepest
boundary on its namespace path. Results accumulate into an immutable
Classification, so external packages classified in an earlier run can be
reused and user packages classified on top of them.
"""

from __future__ import annotations

import logging
from collections.abc import Collection, Iterable, Mapping
from dataclasses import replace

from boundary.components.classifier.boundary_trie_comp import (
    build_trie,
    find_boundary,
    lookup_boundary,
    walk_boundaries,
)
from boundary.components.diagnostics.violation_comp import declaration_violation
from boundary.helpers.dto.boundary_dto import Boundary, ModuleInfo, Reclassification
from boundary.helpers.dto.view_dto import Classification
from boundary.helpers.dto.violation_dto import Violation
from boundary.helpers.names import is_prefix

logger = logging.getLogger(__name__)


def classify(
    classification: Classification,
    modules: Iterable[str],
    boundaries: Iterable[Boundary],
    reclassifications: Iterable[Reclassification] = (),
) -> tuple[Classification, list[Violation]]:
    """
    Classify the modules of one package against that package's boundaries.

    Args:
        classification: Accumulated classification of previously handled packages
        modules: Module names of the package
        boundaries: Normalized boundaries of the package
        reclassifications: Manual classify_to assignments of the package

    Returns:
        (new classification, errors). A classify_to target that is not a
        boundary of the package yields an `unknown_boundary` error and the
        module stays unclassified.
    """
    trie = build_trie(boundaries)
    package_boundaries = {boundary.name: boundary for boundary in walk_boundaries(trie)}
    manual = {r.module: r for r in reclassifications}

    errors: list[Violation] = []
    assigned: dict[str, str] = {}

    for module in modules:
        reclassification = manual.get(module)
        if reclassification is not None:
            target = lookup_boundary(trie, reclassification.target)
            if target is None:
                errors.append(
                    declaration_violation("unknown_boundary", reclassification.target, reclassification.location)
                )
                continue
            assigned[module] = target.name
            continue

        owner = find_boundary(trie, module)
        if owner is not None:
            assigned[module] = owner.name

    package_boundaries = _expand_exports(package_boundaries, assigned)

    logger.debug(f"Classified {len(assigned)} modules into {len(package_boundaries)} boundaries")

    merged = Classification(
        boundaries={**classification.boundaries, **package_boundaries},
        modules={**classification.modules, **assigned},
    )
    return merged, errors


def _expand_exports(boundaries: dict[str, Boundary], assigned: Mapping[str, str]) -> dict[str, Boundary]:
    """
    Resolve prefix exports and implicit-boundary exports to module names.

    A prefix export covers the modules owned by the boundary under that
    prefix plus the main modules of its direct child boundaries. Implicit
    boundaries export everything they own.
    """
    owned: dict[str, set[str]] = {}
    for module, boundary_name in assigned.items():
        owned.setdefault(boundary_name, set()).add(module)

    children: dict[str, set[str]] = {}
    for boundary in boundaries.values():
        if boundary.parent is not None:
            children.setdefault(boundary.parent, set()).add(boundary.name)

    expanded: dict[str, Boundary] = {}
    for name, boundary in boundaries.items():
        if boundary.implicit:
            exports = set(boundary.exports) | owned.get(name, set())
            expanded[name] = replace(boundary, exports=frozenset(exports))
            continue

        if not boundary.export_specs:
            expanded[name] = boundary
            continue

        exports = set(boundary.exports)
        candidates = owned.get(name, set()) | children.get(name, set())
        for spec in boundary.export_specs:
            excluded = set(spec.excluded)
            exports.update(m for m in candidates if is_prefix(spec.module, m) and m not in excluded)
        expanded[name] = replace(boundary, exports=frozenset(exports))

    return expanded


def delete_apps(classification: Classification, apps: Collection[str]) -> Classification:
    """Drop the boundaries of the given packages and every module assigned to them."""
    boundaries = {name: b for name, b in classification.boundaries.items() if b.app not in apps}
    modules = {module: name for module, name in classification.modules.items() if name in boundaries}
    return Classification(boundaries=boundaries, modules=modules)


def unclassified_modules(
    main_app: str,
    modules: Iterable[ModuleInfo],
    module_to_boundary: Mapping[str, str],
) -> frozenset[str]:
    """Main-package modules without a boundary, adapter modules excepted."""
    return frozenset(
        module.name
        for module in modules
        if module.app == main_app and module.kind != "adapter" and module.name not in module_to_boundary
    )
