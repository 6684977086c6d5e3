"""Tests for individual module dependency checks."""

import pytest

from bundledeps.exceptions import (
    DuplicateDependencyDeclarationError,
    FailureKind,
    IdentifierMismatchError,
    InvalidDeliveryOrderingError,
    MissingRootModuleError,
    OnDemandRootModuleError,
    SelfDependencyError,
    UnknownModuleReferenceError,
)
from bundledeps.graph import DependencyMap, build_dependency_map
from bundledeps.validation.checks import (
    check_has_base_module,
    check_modules_have_unique_dependencies,
    check_no_install_time_to_on_demand_dependencies,
    check_no_reflexive_dependencies,
    check_referenced_modules_exist,
    check_split_ids,
)


class TestCheckHasBaseModule:
    """Test check_has_base_module."""

    def test_base_present(self, make_module):
        check_has_base_module([make_module("a"), make_module("base")])

    def test_base_missing(self, make_module):
        with pytest.raises(MissingRootModuleError, match="Mandatory 'base' module is missing."):
            check_has_base_module([make_module("a"), make_module("b")])

    def test_empty_module_set(self):
        with pytest.raises(MissingRootModuleError):
            check_has_base_module([])

    def test_on_demand_base(self, make_module):
        with pytest.raises(OnDemandRootModuleError) as exc_info:
            check_has_base_module([make_module("base", on_demand=True), make_module("feature")])

        assert exc_info.value.kind == FailureKind.ON_DEMAND_ROOT_MODULE
        assert exc_info.value.modules == ("base",)
        assert str(exc_info.value) == (
            "The base module 'base' must be delivered at install time, but it is declared on-demand."
        )

    def test_custom_base_name_in_message(self, make_module):
        with pytest.raises(MissingRootModuleError, match="'main'"):
            check_has_base_module([make_module("a")], "main")


class TestCheckSplitIds:
    """Test check_split_ids."""

    def test_absent_split_ids(self, make_module):
        check_split_ids([make_module("base"), make_module("a")])

    def test_split_id_equal_to_name(self, make_module):
        check_split_ids([make_module("base"), make_module("a", split_id="a")])

    def test_base_declares_split_id(self, make_module):
        with pytest.raises(IdentifierMismatchError) as exc_info:
            check_split_ids([make_module("base", split_id="base")])

        assert str(exc_info.value) == (
            "The base module should not declare split ID in the manifest, but it is set to 'base'."
        )

    def test_split_id_differs_from_name(self, make_module):
        with pytest.raises(IdentifierMismatchError) as exc_info:
            check_split_ids([make_module("base"), make_module("a", split_id="b")])

        assert "Module 'a' declares in its manifest that the split ID is 'b'." in str(exc_info.value)
        assert exc_info.value.modules == ("a",)


class TestCheckNoReflexiveDependencies:
    """Test check_no_reflexive_dependencies."""

    def test_base_self_edge_allowed(self, make_module):
        check_no_reflexive_dependencies(build_dependency_map([make_module("base")]))

    def test_module_depends_on_itself(self, make_module):
        dependency_map = build_dependency_map([make_module("base"), make_module("a", "a")])

        with pytest.raises(SelfDependencyError) as exc_info:
            check_no_reflexive_dependencies(dependency_map)

        assert str(exc_info.value) == "Module 'a' depends on itself via <uses-split>."


class TestCheckModulesHaveUniqueDependencies:
    """Test check_modules_have_unique_dependencies."""

    def test_unique(self, make_module):
        dependency_map = build_dependency_map(
            [make_module("base"), make_module("a", "b", "c"), make_module("b"), make_module("c")]
        )
        check_modules_have_unique_dependencies(dependency_map)

    def test_repeated_dependency(self, make_module):
        dependency_map = build_dependency_map(
            [make_module("base"), make_module("a", "b", "c", "b"), make_module("b"), make_module("c")]
        )

        with pytest.raises(DuplicateDependencyDeclarationError) as exc_info:
            check_modules_have_unique_dependencies(dependency_map)

        assert str(exc_info.value) == "Module 'a' declares dependency on module 'b' multiple times."
        assert exc_info.value.modules == ("a", "b")


class TestCheckReferencedModulesExist:
    """Test check_referenced_modules_exist."""

    def test_all_exist(self, make_module):
        dependency_map = build_dependency_map([make_module("base"), make_module("a", "b"), make_module("b")])
        check_referenced_modules_exist(dependency_map)

    def test_dangling_reference(self, make_module):
        dependency_map = build_dependency_map([make_module("base"), make_module("a", "ghost")])

        with pytest.raises(UnknownModuleReferenceError) as exc_info:
            check_referenced_modules_exist(dependency_map)

        assert str(exc_info.value) == "Module 'ghost' is referenced by <uses-split> but does not exist."
        assert exc_info.value.modules == ("ghost",)

    def test_dangling_reference_in_raw_map(self):
        dependency_map = DependencyMap("base", {"base": ["base"], "a": ["base", "nowhere"]})

        with pytest.raises(UnknownModuleReferenceError, match="'nowhere'"):
            check_referenced_modules_exist(dependency_map)


class TestCheckDeliveryOrdering:
    """Test check_no_install_time_to_on_demand_dependencies."""

    def test_install_time_depends_on_on_demand(self, make_module):
        modules = [make_module("base"), make_module("a", "b"), make_module("b", on_demand=True)]

        with pytest.raises(InvalidDeliveryOrderingError) as exc_info:
            check_no_install_time_to_on_demand_dependencies(modules, build_dependency_map(modules))

        assert str(exc_info.value) == (
            "Install-time module 'a' declares dependency on on-demand module 'b'."
        )
        assert exc_info.value.modules == ("a", "b")

    def test_both_on_demand(self, make_module):
        modules = [
            make_module("base"),
            make_module("a", "b", on_demand=True),
            make_module("b", on_demand=True),
        ]
        check_no_install_time_to_on_demand_dependencies(modules, build_dependency_map(modules))

    def test_on_demand_depends_on_install_time(self, make_module):
        modules = [make_module("base"), make_module("a", "b", on_demand=True), make_module("b")]
        check_no_install_time_to_on_demand_dependencies(modules, build_dependency_map(modules))
