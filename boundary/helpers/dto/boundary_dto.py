"""Boundary definition DTOs."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any, Literal

DependencyMode = Literal["compile", "runtime"]
ExternalsMode = Literal["strict", "relaxed"]
ExternalPolicy = Literal["only", "except"]
ModuleKind = Literal["module", "adapter", "task"]

DEPENDENCY_MODES: frozenset[str] = frozenset({"compile", "runtime"})
EXTERNALS_MODES: frozenset[str] = frozenset({"strict", "relaxed"})


@dataclass(frozen=True)
class SourceLocation:
    """Best-effort source position of a declaration."""

    file: str | None = None
    line: int | None = None


@dataclass(frozen=True)
class Dependency:
    """A declared dependency on another boundary."""

    name: str
    mode: DependencyMode = "runtime"


@dataclass(frozen=True)
class ExportSpec:
    """
    Export entry that expands to many modules once classification is known.

    `module` is absolute (already prefixed with the boundary name); every
    module owned by the boundary under that prefix is exported, except the
    absolute names in `excluded`.
    """

    module: str
    excluded: tuple[str, ...] = ()


@dataclass(frozen=True)
class ExternalRule:
    """Access policy for one external package."""

    policy: ExternalPolicy
    prefixes: tuple[str, ...]


@dataclass(frozen=True)
class ModuleInfo:
    """
    One module of the module universe.

    kind:
    - "module": ordinary module
    - "adapter": auto-generated adapter (protocol implementation); never
      reported as unclassified, may be reclassified
    - "task": manually registered task-style module; may be reclassified
    """

    name: str
    app: str
    kind: ModuleKind = "module"
    file: str | None = None


@dataclass(frozen=True)
class RawDeclaration:
    """Per-module boundary declaration as collected by the front-end."""

    module: str
    app: str
    options: Mapping[str, Any] = field(default_factory=dict)
    file: str | None = None
    line: int | None = None

    @property
    def location(self) -> SourceLocation:
        return SourceLocation(self.file, self.line)


@dataclass(frozen=True)
class Reclassification:
    """Manual assignment of a module to a named boundary (`classify_to`)."""

    module: str
    app: str
    target: str
    location: SourceLocation = field(default_factory=SourceLocation)


@dataclass(frozen=True)
class Boundary:
    """
    Canonical boundary record.

    Built by the definition normalizer, then completed by the classifier
    (ancestors, expanded exports). Immutable for the duration of a run.

    Attributes:
        name: Dotted boundary name, also the name of its main module
        app: Owning package id
        deps: Declared dependencies, declaration order, no duplicates
        exports: Exported module names; always contains `name`
        export_specs: Prefix exports expanded after classification
        externals: Package id -> access rule
        extra_externals: Packages checked even without a declared dependency
        externals_mode: "strict" denies unlisted packages, "relaxed" allows them
        ignore: Skip every check into and out of this boundary
        ancestors: Enclosing boundary names, nearest first
        top_level: Detach from the namespace parent
        implicit: Synthesized for an external package without declarations
        location: Declaration position for diagnostics
    """

    name: str
    app: str
    deps: tuple[Dependency, ...] = ()
    exports: frozenset[str] = frozenset()
    export_specs: tuple[ExportSpec, ...] = ()
    externals: Mapping[str, ExternalRule] = field(default_factory=dict)
    extra_externals: frozenset[str] = frozenset()
    externals_mode: ExternalsMode = "relaxed"
    ignore: bool = False
    ancestors: tuple[str, ...] = ()
    top_level: bool = False
    implicit: bool = False
    location: SourceLocation = field(default_factory=SourceLocation)

    @property
    def parent(self) -> str | None:
        """Nearest enclosing boundary name, None for top-level boundaries."""
        return self.ancestors[0] if self.ancestors else None

    @property
    def dep_names(self) -> tuple[str, ...]:
        return tuple(dep.name for dep in self.deps)
