"""The component catalog: root of the entity tree and public entry point.

Usage::

    from swatch import CatalogConfig, ComponentCatalog

    catalog = ComponentCatalog.from_directory(
        "components",
        CatalogConfig(preview_layout="@preview"),
    )
    button = catalog.find("@button")
    html = await catalog.render_preview(button)

The catalog owns global settings (``CatalogConfig``), the template engine,
and the load barrier every render waits on.  Navigation comes from
``EntityTree``; rendering is delegated to ``RenderPipeline``.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Awaitable, Callable, Iterable, Mapping, Sequence
from typing import Any

import anyio

from swatch._internal.invoke import invoke
from swatch._internal.once import AsyncOnce
from swatch.assets import AssetCollection, collect_assets
from swatch.config import CatalogConfig
from swatch.context import resolve_context
from swatch.entities import Component, ReadText
from swatch.errors import MissingEntityError, TemplateSourceError
from swatch.files import FileClassifier, FileLike
from swatch.render import RenderPipeline
from swatch.status import StatusRecord
from swatch.templating.engine import KidaEngine, TemplateEngine
from swatch.tree import EntityTree, TreeItem

logger = logging.getLogger("swatch.catalog")

# Builds the tree: returns the top-level items (sync or async)
type TreeLoader = Callable[[], Iterable[TreeItem] | Awaitable[Iterable[TreeItem]]]


async def read_text(path: str) -> str:
    """Default template reader (UTF-8)."""
    try:
        return await anyio.Path(path).read_text(encoding="utf-8")
    except OSError as exc:
        raise TemplateSourceError(path, exc.strerror or str(exc)) from exc


class ComponentCatalog(EntityTree):
    """Root of a component library.

    Args:
        items: Initial top-level components and collections.
        config: Catalog settings; defaults to ``CatalogConfig()``.
        engine: Template engine; defaults to a kida engine built from *config*.
        loader: Builds the tree on first ``load()``; its result replaces *items*.
        reader: Coroutine reading template files; defaults to ``read_text``.
    """

    def __init__(
        self,
        items: Iterable[TreeItem] = (),
        *,
        config: CatalogConfig | None = None,
        engine: TemplateEngine | None = None,
        loader: TreeLoader | None = None,
        reader: ReadText | None = None,
    ) -> None:
        super().__init__(items)
        self.config = config if config is not None else CatalogConfig()
        self.engine = engine if engine is not None else KidaEngine.from_config(self.config)
        self.files = FileClassifier(ext=self.config.ext, splitter=self.config.splitter)
        self._loader = loader
        self._loaded: AsyncOnce[None] = AsyncOnce()
        self._reader = reader if reader is not None else read_text
        self._pipeline = RenderPipeline(self)

    @classmethod
    def from_directory(
        cls,
        root: str | os.PathLike[str],
        config: CatalogConfig | None = None,
        *,
        engine: TemplateEngine | None = None,
        reader: ReadText | None = None,
    ) -> ComponentCatalog:
        """Build a catalog whose tree is loaded from *root* on first use."""
        from swatch.loader import DirectoryLoader

        config = config if config is not None else CatalogConfig()
        if engine is None:
            engine = KidaEngine.from_config(config, search_paths=[root])
        return cls(
            config=config,
            engine=engine,
            loader=DirectoryLoader(root, config),
            reader=reader,
        )

    # -- Loading ----------------------------------------------------------

    async def load(self) -> ComponentCatalog:
        """Wait until the tree is ready.  The loader runs at most once."""
        if self._loader is not None:
            await self._loaded.get(self._run_loader)
        return self

    async def _run_loader(self) -> None:
        items = await invoke(self._loader)
        self.set_items(items)
        logger.debug("Loaded %d components", len(self.flatten()))

    async def read_text(self, path: str) -> str:
        return await self._reader(path)

    # -- Rendering --------------------------------------------------------

    async def resolve(self, context: Any) -> Any:
        """Resolve ``@handle`` references in *context* against this catalog."""
        return await resolve_context(context, self)

    async def render(
        self,
        entity: Any,
        context: Mapping[str, Any] | None = None,
        *,
        use_layout: bool = False,
    ) -> str | None:
        """Render a component, a variant, or a template file path.

        Components render their default variant, or every variant joined
        by newlines when collated.  With *use_layout* the result is
        wrapped in the entity's preview layout.

        Returns ``None`` when rendering failed and ``render_errors`` is
        ``"log"`` (the failure is logged).
        """
        return await self._pipeline.render(entity, context, use_layout=use_layout)

    async def render_preview(self, entity: Any) -> str | None:
        """Render *entity* with its own context, wrapped in its preview layout."""
        if entity is None:
            raise MissingEntityError()
        return await self.render(entity, getattr(entity, "context", None), use_layout=True)

    async def render_string(self, source: str, context: Any = None) -> str:
        """Render raw template source; no entity or layout involved."""
        ctx = await self.resolve(context)
        return await self.engine.render(None, source, ctx)

    # -- Aggregation ------------------------------------------------------

    def assets(self) -> AssetCollection:
        """Every component's assets, component order then asset order."""
        return collect_assets(self.flatten())

    def status_info(self, handle: str | Sequence[str] | None) -> StatusRecord | None:
        return self.config.statuses.info(handle)

    def component_status(self, component: Component) -> StatusRecord | None:
        """Aggregate status of a component's variants (mixed when they differ)."""
        fallback = component.status or self.config.status
        handles = [variant.status or fallback for variant in component.variants]
        return self.status_info(handles or fallback)

    # -- File classification ----------------------------------------------

    def is_view(self, file: FileLike) -> bool:
        return self.files.is_view(file)

    def is_var_view(self, file: FileLike) -> bool:
        return self.files.is_var_view(file)

    def is_config(self, file: FileLike) -> bool:
        return self.files.is_config(file)

    def is_readme(self, file: FileLike) -> bool:
        return self.files.is_readme(file)

    def is_asset(self, file: FileLike) -> bool:
        return self.files.is_asset(file)
