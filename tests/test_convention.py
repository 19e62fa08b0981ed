"""
Test 1: Convention Parser (controller/convention.py, controller/locator.py)

Tests ConventionParser.parse/resolve, ControllerRegistry, ControllerLocator.
"""

import pytest

from passer.controller import (
    ControllerLocator,
    ControllerRegistry,
    ConventionParser,
    DEFAULT_ROOT_NAMESPACE,
    join_namespace,
    snake_case,
)
from passer.faults import ControllerNotFoundFault, InvalidConventionFault

from conftest import SAMPLE_PACKAGE


# ============================================================================
# Grammar
# ============================================================================

class TestParseValid:

    def test_plain_controller(self):
        parsed = ConventionParser().parse("AdminController@index")
        assert parsed.fqn == r"App\Controllers\AdminController"
        assert parsed.controller == "AdminController"
        assert parsed.action == "index"
        assert parsed.namespace == ()
        assert parsed.class_name == "AdminController"

    def test_namespaced_controller(self):
        parsed = ConventionParser().parse(r"Admin\UserController@show")
        assert parsed.fqn == r"App\Controllers\Admin\UserController"
        assert parsed.action == "show"
        assert parsed.namespace == ("Admin",)
        assert parsed.class_name == "UserController"

    def test_nested_namespace(self):
        parsed = ConventionParser().parse(r"Admin\Reports\DailyController@runAll")
        assert parsed.fqn == r"App\Controllers\Admin\Reports\DailyController"
        assert parsed.namespace == ("Admin", "Reports")
        assert parsed.action == "runAll"

    def test_multi_word_controller(self):
        parsed = ConventionParser().parse("UserProfileController@edit")
        assert parsed.controller == "UserProfileController"

    def test_multi_word_namespace_segment(self):
        parsed = ConventionParser().parse(r"UserAdmin\ListController@index")
        assert parsed.fqn == r"App\Controllers\UserAdmin\ListController"
        assert parsed.namespace == ("UserAdmin",)
        assert parsed.class_name == "ListController"

    @pytest.mark.parametrize("action", ["x", "show2", "edit_form", "edit-form", "listAll"])
    def test_action_characters(self, action):
        parsed = ConventionParser().parse(f"HomeController@{action}")
        assert parsed is not None
        assert parsed.action == action

    def test_custom_root_namespace(self):
        parser = ConventionParser(root_namespace="Shop\\Http\\")
        assert parser.root_namespace == r"Shop\Http"
        assert parser.parse("CartController@add").fqn == r"Shop\Http\CartController"


class TestParseInvalid:

    @pytest.mark.parametrize("subject", [
        "userController@Index",
        "AdminController@Index",
        "AdminController@",
        "AdminController",
        "Controller@index",
        "ADMINController@index",
        "Admin1Controller@index",
        "AdminController@1index",
        "AdminController@_index",
        "AdminController@index\n",
        " AdminController@index",
        "AdminController@@index",
        "Admin\\User@index",
        "Admin\\",
        "admin\\UserController@index",
        "Admin\\userController@index",
        "Admin\\\\UserController@index",
        "App.Controllers.AdminController@index",
        "",
    ])
    def test_rejected(self, subject):
        assert ConventionParser().parse(subject) is None

    @pytest.mark.parametrize("subject", [None, 42, b"HomeController@index"])
    def test_non_string(self, subject):
        assert ConventionParser().parse(subject) is None


# ============================================================================
# Resolve
# ============================================================================

class TestResolve:

    def test_invalid_string_raises_with_fragments(self):
        parser = ConventionParser(locator=ControllerLocator())
        with pytest.raises(InvalidConventionFault) as exc_info:
            parser.resolve("userController@Index")

        fault = exc_info.value
        assert "userController@Index" in fault.message
        assert "XxxController@action" in fault.message
        assert fault.metadata["controller"] == "userController"
        assert fault.metadata["action"] == "Index"

    def test_resolve_from_registry(self, registry):
        @registry.controller()
        class HomeController:
            def index(self):
                return "home"

        parser = ConventionParser(locator=ControllerLocator(package=None, registry=registry))
        target = parser.resolve("HomeController@index")
        assert target.controller_class is HomeController
        assert target.fqn == r"App\Controllers\HomeController"
        assert target.action == "index"

    def test_resolve_from_package(self):
        parser = ConventionParser(locator=ControllerLocator(package=SAMPLE_PACKAGE))
        target = parser.resolve(r"Admin\UserController@show")
        assert target.controller_class.__name__ == "UserController"
        assert target.controller_class.__module__ == f"{SAMPLE_PACKAGE}.admin"

    def test_missing_class(self):
        parser = ConventionParser(locator=ControllerLocator(package=SAMPLE_PACKAGE))
        with pytest.raises(ControllerNotFoundFault) as exc_info:
            parser.resolve("GhostController@index")
        assert exc_info.value.message == r"Namespace or class does not exist: App\Controllers\GhostController"

    def test_missing_namespace(self):
        parser = ConventionParser(locator=ControllerLocator(package=SAMPLE_PACKAGE))
        with pytest.raises(ControllerNotFoundFault):
            parser.resolve(r"Billing\InvoiceController@index")

    def test_resolve_requires_locator(self):
        with pytest.raises(RuntimeError):
            ConventionParser().resolve("HomeController@index")


# ============================================================================
# Registry & Locator
# ============================================================================

class TestRegistry:

    def test_register_under_namespace(self, registry):
        class UserController:
            pass

        registry.register(UserController, namespace=r"App\Controllers\Admin")
        assert r"App\Controllers\Admin\UserController" in registry
        assert registry.get(r"App\Controllers\Admin\UserController") is UserController
        assert len(registry) == 1

    def test_reregister_same_class_is_idempotent(self, registry):
        class HomeController:
            pass

        registry.register(HomeController)
        registry.register(HomeController)
        assert registry.names() == [r"App\Controllers\HomeController"]

    def test_conflicting_registration(self, registry):
        class HomeController:
            pass

        registry.register(HomeController)

        class HomeController:  # noqa: F811
            pass

        with pytest.raises(ValueError):
            registry.register(HomeController)

    def test_register_non_class(self, registry):
        with pytest.raises(TypeError):
            registry.register(lambda: None)


class TestLocator:

    def test_module_path(self):
        locator = ControllerLocator(package="app.controllers")
        assert locator.module_path(r"App\Controllers\HomeController") == ("app.controllers", "HomeController")
        assert locator.module_path(r"App\Controllers\Admin\UserController") == (
            "app.controllers.admin", "UserController",
        )
        assert locator.module_path(r"App\Controllers\UserAdmin\ListController") == (
            "app.controllers.user_admin", "ListController",
        )

    def test_outside_root(self):
        locator = ControllerLocator(package="app.controllers")
        with pytest.raises(ControllerNotFoundFault):
            locator.module_path(r"Other\HomeController")

    def test_no_package_and_not_registered(self, registry):
        locator = ControllerLocator(package=None, registry=registry)
        with pytest.raises(ControllerNotFoundFault):
            locator.locate(r"App\Controllers\HomeController")

    def test_registry_wins_over_package(self, registry):
        class HomeController:
            pass

        registry.register(HomeController)
        locator = ControllerLocator(package=SAMPLE_PACKAGE, registry=registry)
        assert locator.locate(r"App\Controllers\HomeController") is HomeController

    def test_broken_import_propagates(self):
        locator = ControllerLocator(package=SAMPLE_PACKAGE)
        with pytest.raises(ModuleNotFoundError):
            locator.locate(r"App\Controllers\Broken\PageController")

    def test_non_class_attribute(self):
        locator = ControllerLocator(package=SAMPLE_PACKAGE)
        with pytest.raises(ControllerNotFoundFault):
            locator.locate(r"App\Controllers\DEFAULT_GREETING")


class TestHelpers:

    def test_snake_case(self):
        assert snake_case("Admin") == "admin"
        assert snake_case("UserAdmin") == "user_admin"

    def test_join_namespace(self):
        assert join_namespace(DEFAULT_ROOT_NAMESPACE, r"Admin\UserController") == (
            r"App\Controllers\Admin\UserController"
        )
        assert join_namespace("App\\", "", "HomeController") == r"App\HomeController"
