"""Definition Normalizer - raw declarations to canonical Boundary records."""

from boundary.components.definition.normalize_definition_comp import (
    NormalizedDefinitions,
    normalize_definition,
    normalize_definitions,
)

__all__ = ["NormalizedDefinitions", "normalize_definition", "normalize_definitions"]
