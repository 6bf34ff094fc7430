"""
Pytest fixtures and configuration for the test suite.

Strategy:
- Projects are described in memory with ProjectBuilder (no compiler, no files)
- Views are built through the real workflows
- Only tmp_path is used for file-based tests (settings, snapshot documents)
"""

from __future__ import annotations

import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest

# Add project root to path so tests can import the boundary package
project_root = Path(__file__).parent.parent
if str(project_root) not in sys.path:
    sys.path.insert(0, str(project_root))

from boundary.helpers.dto.boundary_dto import ModuleInfo, RawDeclaration  # noqa: E402
from boundary.helpers.dto.reference_dto import Reference  # noqa: E402
from boundary.helpers.dto.view_dto import ProjectSnapshot, View  # noqa: E402
from boundary.workflows.build_view_wf import build_view_workflow  # noqa: E402

MAIN_APP = "my_system"


class ProjectBuilder:
    """
    Fluent description of a project snapshot.

    Example:
        project.boundary("Foo", deps=["Bar"]).boundary("Bar").module("Bar.Baz")
    """

    def __init__(self, main_app: str = MAIN_APP) -> None:
        self.main_app = main_app
        self.user_apps: set[str] = set()
        self._modules: dict[str, ModuleInfo] = {}
        self._declarations: list[RawDeclaration] = []

    def module(
        self,
        name: str,
        app: str | None = None,
        kind: str = "module",
        file: str | None = None,
    ) -> ProjectBuilder:
        info = ModuleInfo(name=name, app=app or self.main_app, kind=kind, file=file)  # type: ignore[arg-type]
        self._modules[name] = info
        return self

    def modules(self, *names: str, app: str | None = None) -> ProjectBuilder:
        for name in names:
            self.module(name, app=app)
        return self

    def declare(
        self,
        module: str,
        app: str | None = None,
        file: str | None = "lib/boundaries.ex",
        line: int | None = 1,
        **options: Any,
    ) -> ProjectBuilder:
        """Add a raw declaration for an existing (or implicit plain) module."""
        app = app or (self._modules[module].app if module in self._modules else self.main_app)
        if module not in self._modules:
            self.module(module, app=app)
        self._declarations.append(RawDeclaration(module=module, app=app, options=options, file=file, line=line))
        return self

    def boundary(self, name: str, app: str | None = None, **options: Any) -> ProjectBuilder:
        """Add a boundary module with its declaration."""
        self.module(name, app=app)
        return self.declare(name, app=app, **options)

    def snapshot(self) -> ProjectSnapshot:
        return ProjectSnapshot(
            main_app=self.main_app,
            modules=tuple(self._modules.values()),
            declarations=tuple(self._declarations),
            user_apps=frozenset(self.user_apps),
        )

    def view(self) -> View:
        return build_view_workflow(self.snapshot())


def make_reference(
    from_module: str,
    to_module: str,
    mode: str = "runtime",
    type: str = "call",
    function: tuple[str, int] | None = ("fun", 0),
    caller: tuple[str, int] | None = None,
    file: str = "lib/source.ex",
    line: int = 1,
) -> Reference:
    return Reference(
        from_module=from_module,
        to_module=to_module,
        file=file,
        line=line,
        mode=mode,  # type: ignore[arg-type]
        type=type,  # type: ignore[arg-type]
        from_function=caller,
        to_function=function if type == "call" else None,
    )


@pytest.fixture
def project() -> ProjectBuilder:
    """Empty project with the default main app."""
    return ProjectBuilder()


@pytest.fixture
def ref() -> Callable[..., Reference]:
    """Reference factory: ref("Foo", "Bar", mode="compile")."""
    return make_reference


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> pytest.MonkeyPatch:
    """Remove BOUNDARY_* environment variables for config tests."""
    import os

    for key in list(os.environ):
        if key.startswith("BOUNDARY_"):
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


# === PYTEST MARKERS ===


def pytest_configure(config):
    """Register custom pytest markers."""
    config.addinivalue_line("markers", "unit: mark test as a fast unit test")
    config.addinivalue_line("markers", "integration: mark test as exercising several layers together")
