"""Tests for the flat ``semroute`` namespace."""

import importlib

import pytest

import semroute


class TestRegistry:
    @pytest.mark.parametrize(("name", "module_path"), sorted(semroute._LAZY_IMPORTS.items()))
    def test_name_comes_from_its_module(self, name: str, module_path: str) -> None:
        module = importlib.import_module(module_path)
        assert getattr(semroute, name) is getattr(module, name)

    def test_all_matches_registry(self) -> None:
        assert semroute.__all__ == sorted(semroute._LAZY_IMPORTS)

    def test_every_registered_module_is_inside_the_package(self) -> None:
        assert all(path.startswith("semroute.") for path in semroute._LAZY_IMPORTS.values())


class TestPublicSurface:
    def test_router_and_config_in_one_import(self) -> None:
        from semroute import VersioningConfig, VersionRouter

        router = VersionRouter({"^1": lambda request: "ok"}, VersioningConfig())
        assert router.available_versions == ("^1",)

    def test_error_types_share_a_base(self) -> None:
        for name in ("MissingVersion", "InvalidVersionFormat", "VersionNotFound"):
            assert issubclass(getattr(semroute, name), semroute.VersioningError)

    def test_unknown_name(self) -> None:
        with pytest.raises(AttributeError, match="has no attribute 'route'"):
            semroute.route  # noqa: B018

    def test_version_string(self) -> None:
        assert semroute.__version__ == "0.1.0"
