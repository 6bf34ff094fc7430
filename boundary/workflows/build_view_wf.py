"""
Build a View from scratch.

1. Normalize the declarations of the user packages
2. Load and classify every external package the user boundaries reach
3. Classify the user packages on top of the external classification
"""

from __future__ import annotations

import logging

from boundary.components.classifier.classify_modules_comp import classify, unclassified_modules
from boundary.components.classifier.external_boundaries_comp import (
    external_fingerprint,
    load_external_packages,
)
from boundary.components.definition.normalize_definition_comp import (
    NormalizedDefinitions,
    normalize_definitions,
)
from boundary.helpers.dto.boundary_dto import Boundary
from boundary.helpers.dto.view_dto import Classification, ProjectSnapshot, View
from boundary.helpers.dto.violation_dto import Violation

logger = logging.getLogger(__name__)


def build_view_workflow(snapshot: ProjectSnapshot) -> View:
    """
    Build the view of a project snapshot without any cached state.

    Args:
        snapshot: Module universe and raw declarations of every package

    Returns:
        Complete view, including definition and classification errors of
        the user packages
    """
    user_apps = snapshot.all_user_apps
    user_definitions = normalize_user_definitions(snapshot)
    boundaries = user_boundary_list(user_definitions)

    classification = Classification()
    packages = load_external_packages(boundaries, snapshot.modules, snapshot.declarations, user_apps)
    for package in packages:
        classification, _ = classify(classification, package.modules, package.boundaries, package.reclassifications)
        logger.debug(f"Classified external package {package.app} ({len(package.boundaries)} boundaries)")

    module_to_app = {module.name: module.app for module in snapshot.modules}
    fingerprint = external_fingerprint(boundaries, module_to_app, user_apps)

    logger.info(f"Built boundary view: {len(packages)} external packages, {len(boundaries)} user boundaries")
    return complete_view(snapshot, classification, user_definitions, fingerprint)


def normalize_user_definitions(snapshot: ProjectSnapshot) -> dict[str, NormalizedDefinitions]:
    """Normalize the declarations of every user package, keyed by package id."""
    kinds = {module.name: module.kind for module in snapshot.modules}
    return {
        app: normalize_definitions((d for d in snapshot.declarations if d.app == app), kinds)
        for app in sorted(snapshot.all_user_apps)
    }


def user_boundary_list(user_definitions: dict[str, NormalizedDefinitions]) -> list[Boundary]:
    return [boundary for definitions in user_definitions.values() for boundary in definitions.boundaries]


def complete_view(
    snapshot: ProjectSnapshot,
    classification: Classification,
    user_definitions: dict[str, NormalizedDefinitions],
    fingerprint: frozenset[tuple[str, str]],
) -> View:
    """
    Classify the user packages on top of an external classification and assemble the view.

    The classification passed in must not contain user-package entries.
    """
    errors: list[Violation] = []

    for app, definitions in user_definitions.items():
        errors.extend(definitions.errors)
        app_modules = [module.name for module in snapshot.modules if module.app == app]
        classification, classify_errors = classify(
            classification,
            app_modules,
            definitions.boundaries,
            definitions.reclassifications,
        )
        errors.extend(classify_errors)

    return View(
        main_app=snapshot.main_app,
        user_apps=snapshot.all_user_apps,
        boundaries=classification.boundaries,
        module_to_boundary=classification.modules,
        unclassified=unclassified_modules(snapshot.main_app, snapshot.modules, classification.modules),
        module_to_app={module.name: module.app for module in snapshot.modules},
        modules={module.name: module for module in snapshot.modules},
        external_deps=fingerprint,
        errors=tuple(errors),
    )
