"""
Tests for the import hook: synthetic namespaces, hooked real modules and module __getattr__.
"""
import importlib
import inspect
import sys
import textwrap
import types

import pytest

from exception_factory.core.import_hook import LazyExceptionFinder, install_lazy_getattr


def _write_package(root, name, init_source="", modules=None):
    package_dir = root / name
    package_dir.mkdir()
    (package_dir / "__init__.py").write_text(textwrap.dedent(init_source))
    for module_name, source in (modules or {}).items():
        (package_dir / f"{module_name}.py").write_text(textwrap.dedent(source))
    return package_dir


class TestSyntheticNamespaces:

    def test_missing_namespace_is_synthesized(self, registry, prefix):
        module = importlib.import_module(f"{prefix}.data")

        assert module.__name__ == f"{prefix}.data"
        assert module.__path__ == []
        assert "lazily generated exceptions" in module.__doc__

    def test_from_import_generates_type(self, registry, prefix):
        module = __import__(f"{prefix}.data", fromlist=["NotFoundException"])

        exc_type = module.NotFoundException

        assert issubclass(exc_type, Exception)
        assert registry.registered_types() == {f"{prefix}.data.NotFoundException": exc_type}

    def test_attribute_without_marker_raises_attribute_error(self, registry, prefix):
        module = importlib.import_module(f"{prefix}.data")

        assert not hasattr(module, "Widget")
        with pytest.raises(AttributeError, match="has no attribute 'Widget'"):
            module.Widget

    def test_from_import_of_declined_name_fails(self, registry, prefix):
        importlib.import_module(f"{prefix}.data")

        with pytest.raises(ImportError, match="Widget"):
            exec(f"from {prefix}.data import Widget", {})
        assert f"{prefix}.data.Widget" not in sys.modules

    def test_nested_namespaces_under_synthetic_parent(self, registry, prefix):
        module = importlib.import_module(f"{prefix}.data.archive")

        assert module.ArchiveException.__module__ == f"{prefix}.data.archive"

    def test_exception_names_are_never_modules(self, registry, prefix):
        with pytest.raises(ModuleNotFoundError):
            importlib.import_module(f"{prefix}.data.NotFoundException")

    def test_unmanaged_names_are_left_alone(self, registry):
        assert registry.finder.find_spec("lazyother_unmanaged", None) is None

    def test_finder_repr_lists_prefixes(self, registry, prefix):
        assert prefix in repr(registry.finder)
        assert isinstance(registry.finder, LazyExceptionFinder)


class TestRealModules:

    def test_real_module_is_hooked(self, registry, prefix, tmp_path, monkeypatch):
        _write_package(tmp_path, prefix, modules={"models": """
            class HandWrittenException(KeyError):
                pass

            VALUE = 1
        """})
        monkeypatch.syspath_prepend(str(tmp_path))

        models = importlib.import_module(f"{prefix}.models")

        assert models.VALUE == 1
        assert models.HandWrittenException.__bases__ == (KeyError,)
        generated = models.MissingException
        assert generated.__module__ == f"{prefix}.models"
        assert inspect.getsource(models).strip().startswith("class HandWrittenException")

    def test_module_getattr_is_consulted_first(self, registry, prefix, tmp_path, monkeypatch):
        _write_package(tmp_path, prefix, modules={"legacy": """
            def __getattr__(name):
                if name == "OldException":
                    return LookupError
                raise AttributeError(name)
        """})
        monkeypatch.syspath_prepend(str(tmp_path))

        legacy = importlib.import_module(f"{prefix}.legacy")

        assert legacy.OldException is LookupError
        assert legacy.NewException.__module__ == f"{prefix}.legacy"

    def test_modules_imported_before_prefix_is_added(self, registry, prefix, tmp_path, monkeypatch):
        late = f"{prefix}_late"
        _write_package(tmp_path, late, init_source="ANSWER = 42\n")
        monkeypatch.syspath_prepend(str(tmp_path))
        package = importlib.import_module(late)
        assert not hasattr(package, "LateException")

        registry.add_package_prefix(late)

        assert package.ANSWER == 42
        assert issubclass(package.LateException, Exception)

    def test_parent_can_be_a_real_class(self, registry, prefix, tmp_path, monkeypatch):
        _write_package(tmp_path, prefix, modules={"api": "", "errors": """
            class AppError(Exception):
                code = 500
        """})
        monkeypatch.syspath_prepend(str(tmp_path))
        registry.set_parent_override("NotFoundException", f"{prefix}.errors.AppError")

        exc_type = registry.resolve(f"{prefix}.api.NotFoundException")

        assert exc_type.code == 500
        assert exc_type.__bases__[0].__name__ == "AppError"

    def test_missing_submodule_of_real_package_is_not_synthesized(self, registry, prefix, tmp_path, monkeypatch):
        _write_package(tmp_path, prefix)
        monkeypatch.syspath_prepend(str(tmp_path))

        with pytest.raises(ModuleNotFoundError):
            importlib.import_module(f"{prefix}.helpers")
        assert registry.resolve(f"{prefix}.helpers.HelperException") is None

    def test_from_import_typo_in_real_package_fails(self, registry, prefix, tmp_path, monkeypatch):
        _write_package(tmp_path, prefix, init_source="def helper():\n    return 1\n")
        monkeypatch.syspath_prepend(str(tmp_path))

        with pytest.raises(ImportError):
            exec(f"from {prefix} import helpr", {})
        assert f"{prefix}.helpr" not in sys.modules

    def test_from_import_typo_in_library_package_fails(self, registry):
        with pytest.raises(ImportError):
            exec("from exception_factory import intialize", {})
        assert "exception_factory.intialize" not in sys.modules


class TestInstallLazyGetattr:

    def test_install_is_idempotent(self, registry, prefix):
        module = types.ModuleType(f"{prefix}.manual")
        sys.modules[module.__name__] = module

        assert install_lazy_getattr(module, registry) is True
        assert install_lazy_getattr(module, registry) is False
        assert module.ManualException.__module__ == f"{prefix}.manual"

    def test_two_registries_chain(self, registry, prefix, import_state):
        from exception_factory.core.config import RegistryConfig
        from exception_factory.core.registry import ExceptionRegistry

        second = ExceptionRegistry(RegistryConfig(package_prefixes=(prefix,), error_marker="Error"))
        second.initialize()
        module = importlib.import_module(f"{prefix}.shared")

        assert module.SharedException is registry.registered_types()[f"{prefix}.shared.SharedException"]
        assert module.SharedError is second.registered_types()[f"{prefix}.shared.SharedError"]
