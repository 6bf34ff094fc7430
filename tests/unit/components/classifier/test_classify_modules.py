"""Unit tests for module classification."""

import pytest

from boundary.components.classifier.classify_modules_comp import classify, delete_apps, unclassified_modules
from boundary.helpers.dto.boundary_dto import Boundary, ExportSpec, ModuleInfo, Reclassification, SourceLocation
from boundary.helpers.dto.view_dto import Classification


class TestClassify:
    @pytest.mark.unit
    def test_assigns_modules_to_owning_boundaries(self) -> None:
        result, errors = classify(
            Classification(),
            ["A", "A.X", "A.B", "A.B.Y", "C"],
            [Boundary(name="A", app="app"), Boundary(name="A.B", app="app")],
        )

        assert errors == []
        assert result.modules == {"A": "A", "A.X": "A", "A.B": "A.B", "A.B.Y": "A.B"}
        assert result.boundaries["A.B"].ancestors == ("A",)

    @pytest.mark.unit
    def test_is_deterministic(self) -> None:
        modules = ["A.B.Y", "A", "A.X", "A.B"]
        bounds = [Boundary(name="A.B", app="app"), Boundary(name="A", app="app")]

        first, _ = classify(Classification(), modules, bounds)
        second, _ = classify(Classification(), list(reversed(modules)), list(reversed(bounds)))

        assert first == second

    @pytest.mark.unit
    def test_merges_into_existing_classification(self) -> None:
        existing, _ = classify(Classification(), ["Ext.Mod"], [Boundary(name="Ext", app="ext")])
        result, _ = classify(existing, ["A.X"], [Boundary(name="A", app="app")])

        assert result.modules == {"Ext.Mod": "Ext", "A.X": "A"}
        assert set(result.boundaries) == {"Ext", "A"}

    @pytest.mark.unit
    def test_reclassification_short_circuits_walk(self) -> None:
        result, errors = classify(
            Classification(),
            ["A", "B", "Proto.B.Impl"],
            [Boundary(name="A", app="app"), Boundary(name="B", app="app")],
            [Reclassification(module="Proto.B.Impl", app="app", target="A")],
        )

        assert errors == []
        assert result.modules["Proto.B.Impl"] == "A"

    @pytest.mark.unit
    def test_reclassification_to_unknown_boundary(self) -> None:
        """A classify_to target that isn't a boundary is a fatal error for that module."""
        location = SourceLocation("lib/impl.ex", 4)
        result, errors = classify(
            Classification(),
            ["A", "A.Impl"],
            [Boundary(name="A", app="app")],
            [Reclassification(module="A.Impl", app="app", target="Nowhere", location=location)],
        )

        assert [e.kind for e in errors] == ["unknown_boundary"]
        assert (errors[0].file, errors[0].line) == ("lib/impl.ex", 4)
        assert "A.Impl" not in result.modules

    @pytest.mark.unit
    def test_reclassification_requires_exact_boundary_name(self) -> None:
        _, errors = classify(
            Classification(),
            ["Impl"],
            [Boundary(name="A", app="app")],
            [Reclassification(module="Impl", app="app", target="A.Sub")],
        )
        assert [e.kind for e in errors] == ["unknown_boundary"]


class TestExportExpansion:
    @pytest.mark.unit
    def test_prefix_export_with_exceptions(self) -> None:
        boundary = Boundary(
            name="A",
            app="app",
            exports=frozenset({"A"}),
            export_specs=(ExportSpec(module="A.Schemas", excluded=("A.Schemas.Internal",)),),
        )
        result, _ = classify(
            Classification(),
            ["A", "A.Schemas.User", "A.Schemas.Post", "A.Schemas.Internal", "A.Repo"],
            [boundary],
        )

        assert result.boundaries["A"].exports == frozenset({"A", "A.Schemas.User", "A.Schemas.Post"})

    @pytest.mark.unit
    def test_export_all_includes_child_boundary_main_modules_only(self) -> None:
        parent = Boundary(name="A", app="app", exports=frozenset({"A"}), export_specs=(ExportSpec(module="A"),))
        child = Boundary(name="A.B", app="app", exports=frozenset({"A.B"}))
        result, _ = classify(Classification(), ["A", "A.X", "A.B", "A.B.Y"], [parent, child])

        assert result.boundaries["A"].exports == frozenset({"A", "A.X", "A.B"})

    @pytest.mark.unit
    def test_implicit_boundary_exports_everything_it_owns(self) -> None:
        implicit = Boundary(name="Ecto", app="ecto", exports=frozenset({"Ecto"}), implicit=True, top_level=True)
        result, _ = classify(Classification(), ["Ecto", "Ecto.Query", "Ecto.Changeset"], [implicit])

        assert result.boundaries["Ecto"].exports == frozenset({"Ecto", "Ecto.Query", "Ecto.Changeset"})


class TestDeleteApps:
    @pytest.mark.unit
    def test_drops_boundaries_and_their_modules(self) -> None:
        classification, _ = classify(Classification(), ["Ext.Mod"], [Boundary(name="Ext", app="ext")])
        classification, _ = classify(classification, ["A.X"], [Boundary(name="A", app="app")])

        result = delete_apps(classification, {"ext"})

        assert set(result.boundaries) == {"A"}
        assert result.modules == {"A.X": "A"}


class TestUnclassifiedModules:
    @pytest.mark.unit
    def test_main_app_modules_without_boundary(self) -> None:
        modules = [
            ModuleInfo("A.X", "app"),
            ModuleInfo("Loose", "app"),
            ModuleInfo("Proto.Impl", "app", kind="adapter"),
            ModuleInfo("Ext.Mod", "ext"),
        ]
        assert unclassified_modules("app", modules, {"A.X": "A"}) == frozenset({"Loose"})
