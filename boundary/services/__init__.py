"""
Services package.

Long-lived state and wiring: settings, the cross-run view cache, and the
service running one boundary check.
"""

from boundary.services.boundary_check_svc import BoundaryCheckService, CheckResult
from boundary.services.config_service import BoundarySettings, ConfigService
from boundary.services.view_cache_svc import InMemoryViewStore, ViewCacheService, ViewStore

__all__ = [
    "BoundaryCheckService",
    "BoundarySettings",
    "CheckResult",
    "ConfigService",
    "InMemoryViewStore",
    "ViewCacheService",
    "ViewStore",
]
