#!/usr/bin/env python3
# ======================================================================
#  View Cache Service - Cross-run cache of the boundary view
#  - Reuses the classification of unchanged external packages
#  - Rebuilds when the external dependency fingerprint changes
#  - Stores the view without user packages, replaced atomically
# ======================================================================

from __future__ import annotations

import logging
import threading
from typing import Protocol

from boundary.helpers.dto.view_dto import ProjectSnapshot, View
from boundary.workflows.build_view_wf import build_view_workflow
from boundary.workflows.refresh_view_wf import prune_view_workflow, refresh_view_workflow


class ViewStore(Protocol):
    """Persistence collaborator for the pruned view."""

    def load(self) -> View | None: ...

    def save(self, view: View) -> None: ...

    def clear(self) -> None: ...


class InMemoryViewStore:
    """ViewStore keeping the last saved view in memory."""

    def __init__(self) -> None:
        self._view: View | None = None

    def load(self) -> View | None:
        return self._view

    def save(self, view: View) -> None:
        self._view = view

    def clear(self) -> None:
        self._view = None


class ViewCacheService:
    """
    Service owning the cached boundary view across runs.

    Each refresh either derives the view from the cached one (same external
    dependencies) or rebuilds it. The stored copy never contains user
    packages or packages that left the project, and it is swapped in only
    after a successful refresh.
    """

    def __init__(self, store: ViewStore | None = None) -> None:
        self._store: ViewStore = store if store is not None else InMemoryViewStore()
        self._cached: View | None = None
        self._lock = threading.Lock()
        self._logger = logging.getLogger(__name__)

    @property
    def cached_view(self) -> View | None:
        """The stored (pruned) view, if any."""
        return self._cached

    def refresh(self, snapshot: ProjectSnapshot, force: bool = False) -> View:
        """
        Get the view for a snapshot, reusing cached state when possible.

        Args:
            snapshot: Current project snapshot
            force: Ignore cached state and rebuild

        Returns:
            Complete view for the snapshot
        """
        with self._lock:
            view = None
            cached = None if force else self._load_cached()

            if cached is not None:
                view = refresh_view_workflow(cached, snapshot)
                if view is not None:
                    self._logger.info("[ViewCache] Refreshed cached boundary view")

            if view is None:
                reason = "forced" if force else ("cache miss" if cached is None else "external deps changed")
                self._logger.info(f"[ViewCache] Building boundary view ({reason})")
                view = build_view_workflow(snapshot)

            stored = prune_view_workflow(view, view.user_apps)
            self._store.save(stored)
            self._cached = stored
            return view

    def clear(self) -> None:
        """Forget the cached view, in memory and in the store."""
        with self._lock:
            self._cached = None
            self._store.clear()
            self._logger.info("[ViewCache] Cleared cached boundary view")

    def _load_cached(self) -> View | None:
        if self._cached is not None:
            return self._cached
        return self._store.load()
