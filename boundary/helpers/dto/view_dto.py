"""View DTOs - inputs and results of classification."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field

from boundary.helpers.dto.boundary_dto import Boundary, ModuleInfo, RawDeclaration
from boundary.helpers.dto.violation_dto import Violation


@dataclass(frozen=True)
class ProjectSnapshot:
    """
    Everything known about the project at the start of a run.

    `user_apps` lists extra user-owned packages (local path deps); the main
    package is always a user package.
    """

    main_app: str
    modules: tuple[ModuleInfo, ...] = ()
    declarations: tuple[RawDeclaration, ...] = ()
    user_apps: frozenset[str] = frozenset()

    @property
    def all_user_apps(self) -> frozenset[str]:
        return self.user_apps | {self.main_app}


@dataclass(frozen=True)
class Classification:
    """Boundaries plus module -> boundary name assignments."""

    boundaries: Mapping[str, Boundary] = field(default_factory=dict)
    modules: Mapping[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class View:
    """
    Classification result for one run.

    Attributes:
        main_app: Package whose unclassified modules are reported
        user_apps: User-owned packages (never cached)
        boundaries: Boundary name -> boundary, every loaded package
        module_to_boundary: Module -> owning boundary name
        unclassified: Main package modules without a boundary
        module_to_app: Module -> owning package id
        modules: Module -> module info
        external_deps: Fingerprint of external dependencies used to build the view
        errors: Definition and classification errors of user packages
    """

    main_app: str
    user_apps: frozenset[str] = frozenset()
    boundaries: Mapping[str, Boundary] = field(default_factory=dict)
    module_to_boundary: Mapping[str, str] = field(default_factory=dict)
    unclassified: frozenset[str] = frozenset()
    module_to_app: Mapping[str, str] = field(default_factory=dict)
    modules: Mapping[str, ModuleInfo] = field(default_factory=dict)
    external_deps: frozenset[tuple[str, str]] = frozenset()
    errors: tuple[Violation, ...] = ()
