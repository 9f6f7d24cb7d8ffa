"""Render pipeline: entity dispatch, collation, and layout wrapping.

Pipeline for ``render(entity, context, use_layout=...)``::

    1. Plain path string -> read it and render directly (no entity model)
    2. Wait for the catalog's load barrier
    3. Dispatch on entity.kind
         component, collated   -> render every variant concurrently, join
         component             -> render its default variant
         variant               -> render it
    4. use_layout and a preview handle -> wrap in the preview layout
    5. Any failure in 2-4 is logged and None returned (render_errors="log")
       or re-raised (render_errors="raise")

Variant render::

    context (explicit or the variant's own)
      -> load content (once per variant)
      -> resolve references
      -> inject _self
      -> engine.render(view_path, content, context)

Layout wrap::

    find(layout handle) -> default variant if a component
      -> resolve the layout's own context
      -> fill missing keys from the caller's context (layout wins)
      -> inject the wrapped markup under config.preview_yield
      -> engine.render(...)
"""

from __future__ import annotations

import logging
import os
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

import anyio
from kida.template import Markup

from swatch._internal.invoke import invoke
from swatch.entities import Component, EntityKind, Variant
from swatch.errors import ContextResolutionError, MissingEntityError, UnsupportedEntityError

if TYPE_CHECKING:
    from swatch.catalog import ComponentCatalog

logger = logging.getLogger("swatch.render")


def _describe(entity: Any) -> str:
    kind = getattr(entity, "kind", None)
    handle = getattr(entity, "handle", None)
    if kind is None or handle is None:
        return repr(entity)
    return f"{kind} {handle!r}"


class RenderPipeline:
    """Turns catalog entities into markup using the catalog's engine."""

    __slots__ = ("_catalog",)

    def __init__(self, catalog: ComponentCatalog) -> None:
        self._catalog = catalog

    async def render(
        self,
        entity: Any,
        context: Mapping[str, Any] | None = None,
        *,
        use_layout: bool = False,
    ) -> str | None:
        """Render a component, variant, or template path.

        Raises:
            MissingEntityError: If *entity* is ``None`` or empty.  Raised
                before the error policy applies.
        """
        if entity is None or (isinstance(entity, str) and not entity):
            raise MissingEntityError()
        catalog = self._catalog
        if isinstance(entity, (str, os.PathLike)):
            path = os.fspath(entity)
            source = await catalog.read_text(path)
            return await catalog.engine.render(path, source, dict(context or {}))

        try:
            return await self._render_entity(entity, context, use_layout)
        except Exception:
            if catalog.config.render_errors == "raise":
                raise
            logger.exception("Failed to render %s", _describe(entity))
            return None

    async def _render_entity(
        self,
        entity: Any,
        context: Mapping[str, Any] | None,
        use_layout: bool,
    ) -> str:
        await self._catalog.load()
        match getattr(entity, "kind", None):
            case EntityKind.COMPONENT if entity.collated:
                rendered = await self._render_collated(entity, context)
            case EntityKind.COMPONENT:
                entity = entity.variants.default()
                rendered = await self._render_variant(entity, context)
            case EntityKind.VARIANT:
                rendered = await self._render_variant(entity, context)
            case None:
                raise UnsupportedEntityError(type(entity).__name__)
            case kind:
                raise UnsupportedEntityError(kind)
        if use_layout and entity.preview:
            return await self._wrap_in_layout(
                rendered, entity.preview, {"_target": entity.to_dict()}
            )
        return rendered

    async def _render_variant(
        self,
        variant: Variant,
        context: Mapping[str, Any] | None,
    ) -> str:
        catalog = self._catalog
        if context is None:
            context = variant.context
        content = await variant.get_content(catalog.read_text)
        ctx = _as_context(await catalog.resolve(context))
        ctx["_self"] = variant.to_dict()
        return await catalog.engine.render(variant.view_path, content, ctx)

    async def _render_collated(
        self,
        component: Component,
        context: Mapping[str, Any] | None,
    ) -> str:
        """Render all variants concurrently and join them in declared order.

        ``context["@<variant handle>"]`` overrides a variant's own context.
        A configured collator post-processes each variant's markup.  When
        several variants fail under ``render_errors="raise"``, the first
        failure in declared order is raised.
        """
        catalog = self._catalog
        context = context or {}
        collator = catalog.config.collator
        variants = component.variants.to_list()
        results: list[str] = [""] * len(variants)
        errors: list[Exception | None] = [None] * len(variants)

        async def _render_one(index: int, variant: Variant) -> None:
            try:
                override = context.get(f"@{variant.handle}")
                ctx = await catalog.resolve(variant.context if override is None else override)
                markup = await self.render(variant, ctx) or ""
                if collator is not None:
                    markup = await invoke(collator, markup, variant)
                results[index] = markup
            except Exception as exc:
                errors[index] = exc

        async with anyio.create_task_group() as tg:
            for index, variant in enumerate(variants):
                tg.start_soon(_render_one, index, variant)

        for error in errors:
            if error is not None:
                raise error
        return "\n".join(results)

    async def _wrap_in_layout(
        self,
        content: str,
        preview_handle: str,
        context: Mapping[str, Any] | None,
    ) -> str:
        catalog = self._catalog
        layout = catalog.find(preview_handle)
        if layout is None:
            logger.warning("Preview layout %s not found.", preview_handle)
            return content
        if layout.kind is EntityKind.COMPONENT:
            layout = layout.variants.default()
        layout_ctx = _as_context(await catalog.resolve(layout.context))
        layout_content = await layout.get_content(catalog.read_text)
        for key, value in (context or {}).items():
            layout_ctx.setdefault(key, value)
        layout_ctx[catalog.config.preview_yield] = Markup(content)
        return await catalog.engine.render(layout.view_path, layout_content, layout_ctx)


def _as_context(resolved: Any) -> dict[str, Any]:
    if not isinstance(resolved, Mapping):
        raise ContextResolutionError(
            f"Render context must be a mapping, got {type(resolved).__name__}"
        )
    return dict(resolved)
