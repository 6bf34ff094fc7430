"""
Unit tests for reference checks.

Tests cover:
- Undeclared cross-boundary references
- Export gating
- Compile-only dependencies
- Externals policy (strict, relaxed, extra_externals, only/except rules)
- Ignored boundaries and unclassified callers
"""

import pytest

from boundary.components.checker.reference_checks_comp import check_reference, checks_package, invalid_references


@pytest.mark.unit
class TestCrossBoundaryReferences:
    def test_undeclared_dependency(self, project, ref):
        view = project.boundary("Foo").boundary("Bar").view()
        violation = check_reference(view, ref("Foo", "Bar", caller=("run", 1)))

        assert violation is not None
        assert violation.kind == "invalid_cross_boundary_call"
        assert (violation.from_boundary, violation.to_boundary) == ("Foo", "Bar")
        assert violation.message == (
            "forbidden reference to Bar.fun/0\n"
            "  (references from Foo to Bar are not allowed)\n"
            "  (reference originated from Foo.run/1)"
        )

    def test_declared_dependency(self, project, ref):
        view = project.boundary("Foo", deps=["Bar"]).boundary("Bar").view()
        assert check_reference(view, ref("Foo", "Bar")) is None

    def test_same_boundary(self, project, ref):
        view = project.boundary("Foo").module("Foo.Impl").view()
        assert check_reference(view, ref("Foo", "Foo.Impl")) is None

    def test_struct_reference_has_no_function(self, project, ref):
        view = project.boundary("Foo").boundary("Bar").view()
        violation = check_reference(view, ref("Foo", "Bar", type="struct_expansion"))

        assert violation.message.startswith("forbidden reference to Bar\n")
        assert "(reference originated from Foo)" in violation.message

    def test_location_is_taken_from_reference(self, project, ref):
        view = project.boundary("Foo").boundary("Bar").view()
        violation = check_reference(view, ref("Foo", "Bar", file="lib/foo.ex", line=12))
        assert (violation.file, violation.line) == ("lib/foo.ex", 12)


@pytest.mark.unit
class TestExports:
    def test_export_gating(self, project, ref):
        view = project.boundary("Foo", deps=["Bar"]).boundary("Bar").module("Bar.Baz").view()

        assert check_reference(view, ref("Foo", "Bar")) is None
        violation = check_reference(view, ref("Foo", "Bar.Baz"))
        assert violation.kind == "not_exported"
        assert "(module Bar.Baz is not exported by its owner boundary Bar)" in violation.message

    def test_explicit_export(self, project, ref):
        view = project.boundary("Foo", deps=["Bar"]).boundary("Bar", exports=["Baz"]).module("Bar.Baz").view()
        assert check_reference(view, ref("Foo", "Bar.Baz")) is None

    def test_prefix_export_with_exception(self, project, ref):
        project.boundary("Foo", deps=["Bar"])
        project.boundary("Bar", exports=[{"module": "Schemas", "except": ["Secret"]}])
        project.modules("Bar.Schemas.User", "Bar.Schemas.Secret")
        view = project.view()

        assert check_reference(view, ref("Foo", "Bar.Schemas.User")) is None
        assert check_reference(view, ref("Foo", "Bar.Schemas.Secret")).kind == "not_exported"

    def test_sub_boundary_reached_through_parent_export(self, project, ref):
        project.boundary("A", exports=["B"]).boundary("A.B").module("A.B.Inner")
        project.boundary("C", deps=["A"])
        view = project.view()

        assert check_reference(view, ref("C", "A.B")) is None
        assert check_reference(view, ref("C", "A.B.Inner")).kind == "invalid_cross_boundary_call"

    def test_sub_boundary_not_exported_by_parent(self, project, ref):
        project.boundary("A").boundary("A.B").boundary("C", deps=["A"])
        violation = check_reference(project.view(), ref("C", "A.B"))

        # the first candidate (the sub-boundary itself) is reported
        assert violation.kind == "invalid_cross_boundary_call"
        assert violation.to_boundary == "A.B"


@pytest.mark.unit
class TestCompileOnlyDeps:
    def build(self, project):
        return project.module("Mix", app="mix").boundary("Foo", deps=[["Mix", "compile"]]).view()

    def test_compile_time_reference_allowed(self, project, ref):
        view = self.build(project)
        assert check_reference(view, ref("Foo", "Mix", mode="compile", function=("env", 0))) is None

    def test_runtime_reference_rejected(self, project, ref):
        view = self.build(project)
        violation = check_reference(view, ref("Foo", "Mix", function=("env", 0)))

        assert violation.kind == "invalid_cross_boundary_call"
        assert "(runtime references from Foo to Mix are not allowed)" in violation.message

    def test_runtime_dep_allows_both(self, project, ref):
        view = project.module("Mix", app="mix").boundary("Foo", deps=["Mix"]).view()
        assert check_reference(view, ref("Foo", "Mix")) is None
        assert check_reference(view, ref("Foo", "Mix", mode="compile")) is None


@pytest.mark.unit
class TestExternals:
    def test_relaxed_mode_ignores_unlisted_packages(self, project, ref):
        view = project.module("Logger", app="logger").boundary("Foo").view()
        assert check_reference(view, ref("Foo", "Logger", function=("info", 1))) is None

    def test_strict_mode_rejects_unlisted_packages(self, project, ref):
        view = project.module("Logger", app="logger").boundary("Foo", externals_mode="strict").view()
        violation = check_reference(view, ref("Foo", "Logger", function=("info", 1)))

        assert violation.kind == "invalid_external_dep_call"
        assert violation.to_boundary == "logger"
        assert "(references from Foo to logger are not allowed)" in violation.message

    def test_strict_mode_allows_declared_dep(self, project, ref):
        project.module("Logger", app="logger")
        view = project.boundary("Foo", externals_mode="strict", deps=["Logger"]).view()
        assert check_reference(view, ref("Foo", "Logger", function=("info", 1))) is None

    def test_extra_externals_checked_in_relaxed_mode(self, project, ref):
        view = project.module("Logger", app="logger").boundary("Foo", extra_externals=["logger"]).view()
        assert check_reference(view, ref("Foo", "Logger")).kind == "invalid_external_dep_call"

    def test_only_rule(self, project, ref):
        project.modules("Plug.Conn", "Plug.Conn.Query", "Plug.Router", app="plug")
        view = project.boundary("Foo", externals={"plug": {"only": ["Plug.Conn"]}}).view()

        assert check_reference(view, ref("Foo", "Plug.Conn")) is None
        assert check_reference(view, ref("Foo", "Plug.Conn.Query")) is None
        assert check_reference(view, ref("Foo", "Plug.Router")).kind == "invalid_external_dep_call"

    def test_only_rule_matches_whole_segments(self, project, ref):
        project.modules("Plug.Conn", "Plug.Connection", app="plug")
        view = project.boundary("Foo", externals={"plug": {"only": ["Plug.Conn"]}}).view()
        assert check_reference(view, ref("Foo", "Plug.Connection")) is not None

    def test_except_rule(self, project, ref):
        project.modules("Ecto.Query", "Ecto.Adapters.SQL", app="ecto")
        view = project.boundary("Foo", externals={"ecto": {"except": ["Ecto.Adapters"]}}).view()

        assert check_reference(view, ref("Foo", "Ecto.Query")) is None
        assert check_reference(view, ref("Foo", "Ecto.Adapters.SQL")).kind == "invalid_external_dep_call"

    def test_unknown_module_is_skipped(self, project, ref):
        view = project.boundary("Foo", externals_mode="strict").view()
        assert check_reference(view, ref("Foo", "Kernel.Unknown")) is None

    def test_unclassified_module_of_same_package_is_skipped(self, project, ref):
        view = project.boundary("Foo", externals_mode="strict").module("Loose").view()
        assert check_reference(view, ref("Foo", "Loose")) is None

    def test_foreign_declared_sub_boundary(self, project, ref):
        project.boundary("Plug", app="plug").boundary("Plug.Router", app="plug")
        view = project.boundary("Foo", deps=["Plug"]).view()

        assert check_reference(view, ref("Foo", "Plug")) is None
        violation = check_reference(view, ref("Foo", "Plug.Router"))
        assert violation.kind == "invalid_cross_boundary_call"
        assert violation.to_boundary == "Plug.Router"

    def test_checks_package(self, project):
        project.module("Jason", app="jason")
        view = project.boundary("Foo", deps=["Jason"]).boundary("Bar", externals_mode="strict").view()

        assert checks_package(view, view.boundaries["Foo"], "jason")
        assert not checks_package(view, view.boundaries["Foo"], "logger")
        assert checks_package(view, view.boundaries["Bar"], "logger")


@pytest.mark.unit
class TestSkippedReferences:
    def test_ignored_callee(self, project, ref):
        view = project.boundary("Foo").boundary("Bar", ignore=True).view()
        assert check_reference(view, ref("Foo", "Bar")) is None

    def test_ignored_caller(self, project, ref):
        view = project.boundary("Foo").boundary("Bar", ignore=True).view()
        assert check_reference(view, ref("Bar", "Foo")) is None

    def test_unclassified_caller(self, project, ref):
        view = project.boundary("Foo").module("Loose").view()
        assert check_reference(view, ref("Loose", "Foo.Impl")) is None

    def test_invalid_references_collects_only_errors(self, project, ref):
        view = project.boundary("Foo", deps=["Bar"]).boundary("Bar").boundary("Baz").view()
        violations = invalid_references(view, [ref("Foo", "Bar"), ref("Foo", "Baz"), ref("Bar", "Baz")])
        assert [(v.from_boundary, v.to_boundary) for v in violations] == [("Foo", "Baz"), ("Bar", "Baz")]
