"""
Definition normalization.

Turns a RawDeclaration (plain option mapping collected by the front-end)
into a canonical Boundary or a Reclassification. Option errors are returned
as violations; a bad option never prevents the rest of the declaration, or
any other declaration, from being normalized.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any

from boundary.components.diagnostics.violation_comp import declaration_violation
from boundary.helpers.dto.boundary_dto import (
    DEPENDENCY_MODES,
    EXTERNALS_MODES,
    Boundary,
    Dependency,
    ExportSpec,
    ExternalRule,
    ModuleKind,
    RawDeclaration,
    Reclassification,
    SourceLocation,
)
from boundary.helpers.dto.violation_dto import Violation
from boundary.helpers.names import join_name

KNOWN_OPTIONS = frozenset(
    {
        "deps",
        "exports",
        "externals",
        "extra_externals",
        "externals_mode",
        "ignore",
        "top_level",
        "classify_to",
    }
)

# Only these module kinds may be moved into another boundary with classify_to
RECLASSIFIABLE_KINDS = frozenset({"adapter", "task"})

EXPORT_ALL = "all"


@dataclass
class NormalizedDefinition:
    """Result of normalizing one declaration: a boundary, a reclassification, or neither."""

    boundary: Boundary | None = None
    reclassification: Reclassification | None = None
    errors: list[Violation] = field(default_factory=list)


@dataclass
class NormalizedDefinitions:
    """Normalized declarations of one package."""

    boundaries: list[Boundary] = field(default_factory=list)
    reclassifications: list[Reclassification] = field(default_factory=list)
    errors: list[Violation] = field(default_factory=list)


def normalize_definitions(
    declarations: Iterable[RawDeclaration],
    module_kinds: Mapping[str, ModuleKind] | None = None,
) -> NormalizedDefinitions:
    """
    Normalize every declaration of a package.

    Args:
        declarations: Raw declarations, one per declaring module
        module_kinds: Module name -> kind, used to validate classify_to

    Returns:
        Boundaries, reclassifications and all option errors, in declaration order
    """
    module_kinds = module_kinds or {}
    result = NormalizedDefinitions()

    for declaration in declarations:
        normalized = normalize_definition(declaration, module_kinds.get(declaration.module, "module"))
        if normalized.boundary is not None:
            result.boundaries.append(normalized.boundary)
        if normalized.reclassification is not None:
            result.reclassifications.append(normalized.reclassification)
        result.errors.extend(normalized.errors)

    return result


def normalize_definition(declaration: RawDeclaration, module_kind: ModuleKind = "module") -> NormalizedDefinition:
    """
    Normalize a single declaration.

    Defaults: no deps, only the boundary's own module exported, relaxed
    externals mode, not ignored, not top-level.
    """
    options = dict(declaration.options)
    location = declaration.location

    if "classify_to" in options:
        return _normalize_reclassification(declaration, options, module_kind)

    errors: list[Violation] = [
        declaration_violation("unknown_option", str(key), location) for key in options if key not in KNOWN_OPTIONS
    ]

    ignore = _bool_option(options, "ignore", errors, location)
    top_level = _bool_option(options, "top_level", errors, location)

    deps = _normalize_deps(options.get("deps"), errors, location)
    if ignore and deps:
        errors.append(declaration_violation("deps_in_ignored_boundary", declaration.module, location))
        deps = ()

    exports, export_specs = _normalize_exports(declaration.module, options.get("exports"), errors, location)
    if ignore and (len(exports) > 1 or export_specs):
        errors.append(declaration_violation("exports_in_ignored_boundary", declaration.module, location))
        exports, export_specs = frozenset({declaration.module}), ()

    externals = _normalize_externals(options.get("externals"), errors, location)
    extra_externals = _normalize_str_list(options.get("extra_externals"), "extra_externals", errors, location)

    externals_mode = options.get("externals_mode", "relaxed")
    if not isinstance(externals_mode, str) or externals_mode not in EXTERNALS_MODES:
        errors.append(declaration_violation("invalid_externals_mode", str(externals_mode), location))
        externals_mode = "relaxed"

    if externals_mode == "strict" and extra_externals:
        errors.append(declaration_violation("extra_externals_in_strict_mode", declaration.module, location))
        extra_externals = ()

    boundary = Boundary(
        name=declaration.module,
        app=declaration.app,
        deps=deps,
        exports=exports,
        export_specs=export_specs,
        externals=externals,
        extra_externals=frozenset(extra_externals),
        externals_mode=externals_mode,
        ignore=ignore,
        top_level=top_level,
        location=location,
    )
    return NormalizedDefinition(boundary=boundary, errors=errors)


def _normalize_reclassification(
    declaration: RawDeclaration,
    options: dict[str, Any],
    module_kind: ModuleKind,
) -> NormalizedDefinition:
    location = declaration.location
    errors: list[Violation] = []

    for key in options:
        if key == "classify_to":
            continue
        if key in KNOWN_OPTIONS:
            errors.append(
                declaration_violation("invalid_option", str(key), location, "can't be combined with classify_to")
            )
        else:
            errors.append(declaration_violation("unknown_option", str(key), location))

    target = options["classify_to"]
    if not isinstance(target, str) or not target:
        errors.append(declaration_violation("invalid_option", "classify_to", location))
        return NormalizedDefinition(errors=errors)

    if module_kind not in RECLASSIFIABLE_KINDS:
        errors.append(declaration_violation("cant_reclassify", declaration.module, location))
        return NormalizedDefinition(errors=errors)

    reclassification = Reclassification(
        module=declaration.module,
        app=declaration.app,
        target=target,
        location=location,
    )
    return NormalizedDefinition(reclassification=reclassification, errors=errors)


def _bool_option(options: Mapping[str, Any], key: str, errors: list[Violation], location: SourceLocation) -> bool:
    value = options.get(key, False)
    if isinstance(value, bool):
        return value
    errors.append(declaration_violation("invalid_option", key, location, f"expected a boolean, got {value!r}"))
    return False


def _normalize_deps(raw: Any, errors: list[Violation], location: SourceLocation) -> tuple[Dependency, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)):
        errors.append(declaration_violation("invalid_option", "deps", location, "expected a list"))
        return ()

    deps: dict[tuple[str, str], Dependency] = {}
    for entry in raw:
        dep = _parse_dep(entry)
        if dep is None:
            errors.append(declaration_violation("invalid_option", "deps", location, f"invalid entry {entry!r}"))
            continue
        deps.setdefault((dep.name, dep.mode), dep)

    return tuple(deps.values())


def _parse_dep(entry: Any) -> Dependency | None:
    if isinstance(entry, str):
        name, mode = entry, "runtime"
    elif isinstance(entry, (list, tuple)) and len(entry) == 2:
        name, mode = entry
    elif isinstance(entry, Mapping) and "name" in entry:
        name, mode = entry["name"], entry.get("mode", "runtime")
    else:
        return None

    if not isinstance(name, str) or not name or not isinstance(mode, str) or mode not in DEPENDENCY_MODES:
        return None
    return Dependency(name=name, mode=mode)


def _normalize_exports(
    boundary_name: str,
    raw: Any,
    errors: list[Violation],
    location: SourceLocation,
) -> tuple[frozenset[str], tuple[ExportSpec, ...]]:
    exports = {boundary_name}
    specs: list[ExportSpec] = []

    if raw is None:
        return frozenset(exports), ()
    if raw == EXPORT_ALL:
        return frozenset(exports), (ExportSpec(module=boundary_name),)
    if not isinstance(raw, (list, tuple)):
        errors.append(declaration_violation("invalid_option", "exports", location, "expected a list or 'all'"))
        return frozenset(exports), ()

    for entry in raw:
        if isinstance(entry, str) and entry:
            exports.add(join_name(boundary_name, entry))
        elif isinstance(entry, Mapping) and set(entry) <= {"module", "except"}:
            module = entry.get("module", "")
            excluded = entry.get("except", [])
            if (
                not isinstance(module, str)
                or not isinstance(excluded, (list, tuple))
                or not all(isinstance(e, str) for e in excluded)
            ):
                errors.append(declaration_violation("invalid_option", "exports", location, f"invalid entry {entry!r}"))
                continue
            prefix = join_name(boundary_name, module)
            specs.append(ExportSpec(module=prefix, excluded=tuple(join_name(prefix, e) for e in excluded)))
        else:
            errors.append(declaration_violation("invalid_option", "exports", location, f"invalid entry {entry!r}"))

    return frozenset(exports), tuple(specs)


def _normalize_externals(
    raw: Any,
    errors: list[Violation],
    location: SourceLocation,
) -> dict[str, ExternalRule]:
    if raw is None:
        return {}
    if not isinstance(raw, Mapping):
        errors.append(declaration_violation("invalid_option", "externals", location, "expected a mapping"))
        return {}

    externals: dict[str, ExternalRule] = {}
    for package, rule in raw.items():
        if not isinstance(rule, Mapping) or len(rule) != 1:
            errors.append(declaration_violation("invalid_option", "externals", location, f"invalid rule for {package}"))
            continue

        ((policy, prefixes),) = rule.items()
        if policy not in ("only", "except") or not isinstance(prefixes, (list, tuple)):
            errors.append(declaration_violation("invalid_option", "externals", location, f"invalid rule for {package}"))
            continue
        if not all(isinstance(prefix, str) and prefix for prefix in prefixes):
            errors.append(declaration_violation("invalid_option", "externals", location, f"invalid rule for {package}"))
            continue

        externals[str(package)] = ExternalRule(policy=policy, prefixes=tuple(prefixes))

    return externals


def _normalize_str_list(raw: Any, key: str, errors: list[Violation], location: SourceLocation) -> tuple[str, ...]:
    if raw is None:
        return ()
    if not isinstance(raw, (list, tuple)) or not all(isinstance(item, str) and item for item in raw):
        errors.append(declaration_violation("invalid_option", key, location, "expected a list of package ids"))
        return ()
    return tuple(dict.fromkeys(raw))
