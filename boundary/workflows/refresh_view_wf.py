"""
Incremental view refresh.

A cached view keeps the classification of external packages. As long as
the user boundaries reach the same external dependencies (same
fingerprint), only the user packages are reclassified.
"""

from __future__ import annotations

import logging
from collections.abc import Collection
from dataclasses import replace

from boundary.components.classifier.classify_modules_comp import delete_apps
from boundary.components.classifier.external_boundaries_comp import external_fingerprint
from boundary.helpers.dto.view_dto import Classification, ProjectSnapshot, View
from boundary.workflows.build_view_wf import complete_view, normalize_user_definitions, user_boundary_list

logger = logging.getLogger(__name__)


def refresh_view_workflow(cached: View, snapshot: ProjectSnapshot) -> View | None:
    """
    Refresh a cached view for a new snapshot.

    Args:
        cached: View from a previous run (user packages may already be pruned)
        snapshot: Current project snapshot

    Returns:
        Refreshed view, or None when the cache can't be used (different main
        package or changed external dependencies) and a full build is needed
    """
    if cached.main_app != snapshot.main_app:
        logger.debug(f"Cached view belongs to {cached.main_app}, not {snapshot.main_app}")
        return None

    user_apps = snapshot.all_user_apps
    user_definitions = normalize_user_definitions(snapshot)
    module_to_app = {module.name: module.app for module in snapshot.modules}
    fingerprint = external_fingerprint(user_boundary_list(user_definitions), module_to_app, user_apps)

    if fingerprint != cached.external_deps:
        logger.debug("External dependencies changed, cached view discarded")
        return None

    present_apps = {module.app for module in snapshot.modules}
    removed_apps = {boundary.app for boundary in cached.boundaries.values()} - present_apps
    if removed_apps:
        logger.info(f"Pruning removed packages from cached view: {', '.join(sorted(removed_apps))}")

    classification = delete_apps(
        Classification(boundaries=cached.boundaries, modules=cached.module_to_boundary),
        removed_apps | user_apps,
    )
    return complete_view(snapshot, classification, user_definitions, fingerprint)


def prune_view_workflow(view: View, apps: Collection[str]) -> View:
    """
    Drop every trace of the given packages from a view.

    Used to store a view without its user packages, which are reclassified
    on every run anyway.
    """
    classification = delete_apps(
        Classification(boundaries=view.boundaries, modules=view.module_to_boundary),
        apps,
    )
    return replace(
        view,
        boundaries=classification.boundaries,
        module_to_boundary=classification.modules,
        unclassified=frozenset(),
        module_to_app={module: app for module, app in view.module_to_app.items() if app not in apps},
        modules={name: info for name, info in view.modules.items() if info.app not in apps},
        errors=(),
    )
