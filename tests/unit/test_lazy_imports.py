"""Tests for lazy import system in tzmeta.__init__."""

from __future__ import annotations

import importlib
import sys
from collections.abc import Iterator

import pytest


@pytest.fixture
def fresh_tzmeta() -> Iterator[None]:
    """Drop cached tzmeta modules, restoring them afterwards.

    Other test modules hold references to the imported classes; restoring
    keeps ``isinstance`` checks in later tests working.
    """
    saved = {name: module for name, module in sys.modules.items() if name.startswith("tzmeta")}
    for name in saved:
        del sys.modules[name]
    yield
    for name in [name for name in sys.modules if name.startswith("tzmeta")]:
        del sys.modules[name]
    sys.modules.update(saved)


class TestLazyImports:
    """Test PEP 562 lazy loading in tzmeta.__init__."""

    def test_lazy_import_does_not_eagerly_load(self, fresh_tzmeta: None) -> None:
        """Importing tzmeta does not load its subpackages."""
        importlib.import_module("tzmeta")

        assert "tzmeta.core" not in sys.modules
        assert "tzmeta.models" not in sys.modules
        assert "tzmeta.chain" not in sys.modules
        assert "tzmeta.resolver" not in sys.modules

    def test_lazy_import_resolves_on_access(self) -> None:
        from tzmeta import MetadataResolver
        from tzmeta.resolver.resolver import MetadataResolver as DirectResolver

        assert MetadataResolver is DirectResolver

    def test_lazy_import_caches_after_first_access(self) -> None:
        """Resolved attributes are cached in the module globals."""
        import tzmeta

        _ = tzmeta.classify

        assert "classify" in vars(tzmeta)

    def test_lazy_import_invalid_attribute(self) -> None:
        import tzmeta

        with pytest.raises(AttributeError, match="no_such_thing"):
            _ = getattr(tzmeta, "no_such_thing")  # noqa: B009

    def test_all_exports_are_in_lazy_imports(self) -> None:
        import tzmeta

        assert set(tzmeta.__all__) == set(tzmeta._LAZY_IMPORTS)

    def test_every_export_resolves(self) -> None:
        import tzmeta

        for name in tzmeta.__all__:
            assert getattr(tzmeta, name) is not None

    def test_dir_returns_all(self) -> None:
        import tzmeta

        assert dir(tzmeta) == tzmeta.__all__

    def test_version_is_accessible(self) -> None:
        """__version__ is read from package metadata."""
        import tzmeta

        assert isinstance(tzmeta.__version__, str)
        assert tzmeta.__version__
