"""
External package boundaries.

User boundaries reach into external packages through their deps,
`extra_externals` and `externals` options. Every such package is loaded:
if it declares boundaries of its own those are used, otherwise one implicit
boundary is synthesized per dep target that lives in the package.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable, Mapping
from dataclasses import dataclass, field

from boundary.components.definition.normalize_definition_comp import normalize_definitions
from boundary.helpers.dto.boundary_dto import Boundary, ModuleInfo, RawDeclaration, Reclassification

# Fingerprint target used for packages named by extra_externals/externals rather than a dep
PACKAGE_TARGET = "*"


@dataclass
class ExternalPackage:
    """One external package ready for classification."""

    app: str
    modules: list[str] = field(default_factory=list)
    boundaries: list[Boundary] = field(default_factory=list)
    reclassifications: list[Reclassification] = field(default_factory=list)


def implicit_boundary(name: str, app: str) -> Boundary:
    """Synthesize the boundary of a dep target in a package without declarations."""
    return Boundary(
        name=name,
        app=app,
        exports=frozenset({name}),
        implicit=True,
        top_level=True,
    )


def _external_dep_targets(
    user_boundaries: Iterable[Boundary],
    module_to_app: Mapping[str, str],
    user_apps: Collection[str],
) -> dict[str, str]:
    """Dep target -> owning package, for targets outside the user packages."""
    targets: dict[str, str] = {}
    for boundary in user_boundaries:
        for dep in boundary.deps:
            app = module_to_app.get(dep.name)
            if app is not None and app not in user_apps:
                targets[dep.name] = app
    return targets


def _named_packages(user_boundaries: Iterable[Boundary], user_apps: Collection[str]) -> set[str]:
    """Packages named through extra_externals or externals entries."""
    packages: set[str] = set()
    for boundary in user_boundaries:
        packages.update(boundary.extra_externals)
        packages.update(boundary.externals)
    return packages - set(user_apps)


def external_packages(
    user_boundaries: Collection[Boundary],
    module_to_app: Mapping[str, str],
    user_apps: Collection[str],
) -> set[str]:
    """Every external package the user boundaries depend on or check."""
    dep_packages = set(_external_dep_targets(user_boundaries, module_to_app, user_apps).values())
    return dep_packages | _named_packages(user_boundaries, user_apps)


def external_fingerprint(
    user_boundaries: Collection[Boundary],
    module_to_app: Mapping[str, str],
    user_apps: Collection[str],
) -> frozenset[tuple[str, str]]:
    """
    Fingerprint of the external dependencies used by the user boundaries.

    Pairs of (dep target, package), plus (PACKAGE_TARGET, package) for
    packages named only through extra_externals/externals. Two runs with the
    same fingerprint load the same external boundaries.
    """
    pairs = set(_external_dep_targets(user_boundaries, module_to_app, user_apps).items())
    pairs.update((PACKAGE_TARGET, package) for package in _named_packages(user_boundaries, user_apps))
    return frozenset(pairs)


def load_external_packages(
    user_boundaries: Collection[Boundary],
    modules: Iterable[ModuleInfo],
    declarations: Iterable[RawDeclaration],
    user_apps: Collection[str],
) -> list[ExternalPackage]:
    """
    Build the classification input of every external package in use.

    Packages are returned sorted by id. Declaration errors of external
    packages are not the user's concern and are dropped.
    """
    modules = list(modules)
    module_to_app = {module.name: module.app for module in modules}
    targets = _external_dep_targets(user_boundaries, module_to_app, user_apps)
    packages = external_packages(user_boundaries, module_to_app, user_apps)

    modules_by_app: dict[str, list[ModuleInfo]] = {}
    for module in modules:
        modules_by_app.setdefault(module.app, []).append(module)

    declarations_by_app: dict[str, list[RawDeclaration]] = {}
    for declaration in declarations:
        declarations_by_app.setdefault(declaration.app, []).append(declaration)

    loaded: list[ExternalPackage] = []
    for app in sorted(packages):
        app_modules = modules_by_app.get(app, [])
        package = ExternalPackage(app=app, modules=[module.name for module in app_modules])

        app_declarations = declarations_by_app.get(app, [])
        if app_declarations:
            kinds = {module.name: module.kind for module in app_modules}
            normalized = normalize_definitions(app_declarations, kinds)
            package.boundaries = normalized.boundaries
            package.reclassifications = normalized.reclassifications

        if not package.boundaries:
            package.boundaries = [
                implicit_boundary(target, app) for target, target_app in sorted(targets.items()) if target_app == app
            ]

        loaded.append(package)

    return loaded
