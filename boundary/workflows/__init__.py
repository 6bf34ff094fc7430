"""
Workflows package.

Workflows orchestrate components into the three operations of a run:
building a view, refreshing a cached view, and checking references.
"""

from boundary.workflows.build_view_wf import build_view_workflow
from boundary.workflows.check_boundaries_wf import check_boundaries_workflow
from boundary.workflows.refresh_view_wf import prune_view_workflow, refresh_view_workflow

__all__ = [
    "build_view_workflow",
    "check_boundaries_workflow",
    "prune_view_workflow",
    "refresh_view_workflow",
]
