#!/usr/bin/env python3
# ======================================================================
#  Boundary Check Service - one boundary run
#  - Refreshes the view through the view cache
#  - Checks the collected references
#  - Applies the warnings-as-errors policy
# ======================================================================

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Literal

from boundary.helpers.dto.reference_dto import Reference
from boundary.helpers.dto.view_dto import ProjectSnapshot, View
from boundary.helpers.dto.violation_dto import Violation
from boundary.helpers.logging_helper import configure_logging
from boundary.services.config_service import ConfigService
from boundary.services.view_cache_svc import ViewCacheService
from boundary.workflows.check_boundaries_wf import check_boundaries_workflow

RunStatus = Literal["ok", "error"]


@dataclass(frozen=True)
class CheckResult:
    """Outcome of one run."""

    view: View
    violations: list[Violation] = field(default_factory=list)
    status: RunStatus = "ok"


class BoundaryCheckService:
    """Runs boundary checks for successive builds of one project."""

    def __init__(
        self,
        config_service: ConfigService | None = None,
        view_cache: ViewCacheService | None = None,
        setup_logging: bool = False,
    ) -> None:
        self._config = config_service or ConfigService()
        self._view_cache = view_cache or ViewCacheService()
        self._logger = logging.getLogger(__name__)

        if setup_logging:
            configure_logging(self._config.settings().log_level)

    def run(self, snapshot: ProjectSnapshot, references: Iterable[Reference]) -> CheckResult:
        """
        Check one build.

        Args:
            snapshot: Module universe and declarations of the build
            references: De-duplicated references collected during the build

        Returns:
            CheckResult; status is "error" only with warnings_as_errors set
            and at least one violation
        """
        settings = self._config.settings()
        if settings.user_apps:
            snapshot = replace(snapshot, user_apps=snapshot.user_apps | set(settings.user_apps))

        view = self._view_cache.refresh(snapshot, force=settings.force)
        violations = check_boundaries_workflow(view, references)

        if settings.warnings_as_errors and violations:
            violations = [replace(v, severity="error") for v in violations]
            status: RunStatus = "error"
        else:
            status = "ok"

        if violations:
            counts = Counter(v.kind for v in violations)
            summary = ", ".join(f"{kind}={count}" for kind, count in sorted(counts.items()))
            self._logger.warning(f"[BoundaryCheck] {len(violations)} boundary violations ({summary})")
        else:
            self._logger.info("[BoundaryCheck] No boundary violations")

        return CheckResult(view=view, violations=violations, status=status)
