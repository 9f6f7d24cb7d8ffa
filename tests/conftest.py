"""Shared pytest fixtures for swatch tests."""

from collections.abc import Callable
from typing import Any

import pytest
from fakes import FakeEngine, FakeReader

from swatch.catalog import ComponentCatalog
from swatch.config import CatalogConfig


@pytest.fixture
def engine() -> FakeEngine:
    return FakeEngine()


@pytest.fixture
def reader() -> FakeReader:
    return FakeReader()


@pytest.fixture
def make_catalog(engine: FakeEngine, reader: FakeReader) -> Callable[..., ComponentCatalog]:
    """Factory: ``make_catalog(items, files={...}, **config_fields)``.

    The catalog uses the ``engine`` and ``reader`` fixtures, so tests can
    inspect calls and read counts afterwards.
    """

    def _make(
        items: Any = (),
        *,
        files: dict[str, str] | None = None,
        loader: Any = None,
        **config: Any,
    ) -> ComponentCatalog:
        reader.files.update(files or {})
        return ComponentCatalog(
            items,
            config=CatalogConfig(**config),
            engine=engine,
            reader=reader,
            loader=loader,
        )

    return _make
