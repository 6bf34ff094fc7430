"""
Project snapshot document types.

External contract for the document handed over by the reference collector:
module universe, raw boundary declarations and collected references.

Architecture:
- These types are owned by the interface layer
- They validate the document shape and transform it into internal DTOs
  via .to_dto() methods
- Services and lower layers should NOT import from this module
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from boundary.helpers.dto.boundary_dto import ModuleInfo, RawDeclaration
from boundary.helpers.dto.reference_dto import Reference
from boundary.helpers.dto.view_dto import ProjectSnapshot

# ──────────────────────────────────────────────────────────────────────
# Modules and declarations
# ──────────────────────────────────────────────────────────────────────


class ModuleItem(BaseModel):
    """One module of the universe."""

    name: str
    app: str
    kind: Literal["module", "adapter", "task"] = "module"
    file: str | None = None

    def to_dto(self) -> ModuleInfo:
        return ModuleInfo(name=self.name, app=self.app, kind=self.kind, file=self.file)


class DeclarationItem(BaseModel):
    """
    Raw boundary declaration of one module.

    `app` defaults to the app of the declaring module.
    """

    module: str
    app: str | None = None
    options: dict[str, Any] = Field(default_factory=dict)
    file: str | None = None
    line: int | None = None

    def to_dto(self, module_apps: dict[str, str]) -> RawDeclaration:
        app = self.app or module_apps.get(self.module)
        if app is None:
            raise ValueError(f"declaration of {self.module} has no app and the module is unknown")
        return RawDeclaration(module=self.module, app=app, options=self.options, file=self.file, line=self.line)


# ──────────────────────────────────────────────────────────────────────
# References
# ──────────────────────────────────────────────────────────────────────


class FunctionItem(BaseModel):
    name: str
    arity: int = Field(ge=0)


class ReferenceItem(BaseModel):
    """One collected reference. `from` is a reserved word, hence the alias."""

    model_config = ConfigDict(populate_by_name=True)

    from_module: str = Field(alias="from")
    to: str
    file: str
    line: int = Field(ge=0)
    mode: Literal["compile", "runtime"] = "runtime"
    type: Literal["call", "struct_expansion", "alias_reference"] = "call"
    from_function: FunctionItem | None = None
    to_function: FunctionItem | None = None

    def to_dto(self) -> Reference:
        return Reference(
            from_module=self.from_module,
            to_module=self.to,
            file=self.file,
            line=self.line,
            mode=self.mode,
            type=self.type,
            from_function=(self.from_function.name, self.from_function.arity) if self.from_function else None,
            to_function=(self.to_function.name, self.to_function.arity) if self.to_function else None,
        )


# ──────────────────────────────────────────────────────────────────────
# Snapshot document
# ──────────────────────────────────────────────────────────────────────


class SnapshotDocument(BaseModel):
    """Top-level snapshot document."""

    main_app: str
    user_apps: list[str] = Field(default_factory=list)
    modules: list[ModuleItem] = Field(default_factory=list)
    declarations: list[DeclarationItem] = Field(default_factory=list)
    references: list[ReferenceItem] = Field(default_factory=list)

    def to_snapshot(self) -> ProjectSnapshot:
        module_apps = {module.name: module.app for module in self.modules}
        return ProjectSnapshot(
            main_app=self.main_app,
            modules=tuple(module.to_dto() for module in self.modules),
            declarations=tuple(declaration.to_dto(module_apps) for declaration in self.declarations),
            user_apps=frozenset(self.user_apps),
        )

    def to_references(self) -> list[Reference]:
        """References in document order, exact duplicates dropped."""
        return list(dict.fromkeys(reference.to_dto() for reference in self.references))
