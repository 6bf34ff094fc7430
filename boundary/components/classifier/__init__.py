"""Classifier - assigns every known module to exactly one owning boundary."""

from boundary.components.classifier.boundary_trie_comp import (
    TrieNode,
    build_trie,
    find_boundary,
    lookup_boundary,
    walk_boundaries,
)
from boundary.components.classifier.classify_modules_comp import (
    classify,
    delete_apps,
    unclassified_modules,
)
from boundary.components.classifier.external_boundaries_comp import (
    ExternalPackage,
    external_fingerprint,
    external_packages,
    implicit_boundary,
    load_external_packages,
)

__all__ = [
    "ExternalPackage",
    "TrieNode",
    "build_trie",
    "classify",
    "delete_apps",
    "external_fingerprint",
    "external_packages",
    "find_boundary",
    "implicit_boundary",
    "load_external_packages",
    "lookup_boundary",
    "unclassified_modules",
    "walk_boundaries",
]
