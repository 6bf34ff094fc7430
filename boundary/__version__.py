"""Version information for Boundary."""

# Semantic versioning: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to declaration options or violation kinds
# MINOR: New checks or options, backward compatible
# PATCH: Bug fixes, backward compatible

__version__ = "0.2.0"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.2.0 - Incremental view cache
#         - Cached classification of external packages across builds
#         - Pruning of packages removed from the project
#         - Externals policy (only/except prefixes, strict/relaxed mode)
# 0.1.0 - Initial release
#         - Nested boundaries, implicit boundaries for external packages
#         - Dependency, export, cycle and reference checks
