"""Context resolution.

Template contexts may point at other catalog entities.  A string value of
the form ``"@handle"`` is replaced by that entity's (resolved) context, and
``"@handle.some.key"`` narrows it to a nested value::

    # button config
    {"text": "Save", "theme": "@themes.primary"}

    # resolves to
    {"text": "Save", "theme": {"bg": "#05f", "fg": "#fff"}}

Awaitable values are awaited, so a context can carry deferred data.  Each
awaitable is awaited once; later resolves (a second render, a layout
wrap, another entity's reference) reuse its result.
The input is never mutated: containers are rebuilt on the way through.
"""

from __future__ import annotations

import inspect
import logging
import weakref
from collections.abc import Mapping
from typing import TYPE_CHECKING, Any

from swatch._internal.once import AsyncOnce
from swatch.errors import ContextResolutionError

if TYPE_CHECKING:
    from swatch.tree import EntityTree

logger = logging.getLogger("swatch.context")

_MISSING = object()

# Results of awaitables found in contexts, keyed by the awaitable itself
_settled: weakref.WeakKeyDictionary[Any, AsyncOnce[Any]] = weakref.WeakKeyDictionary()


async def resolve_context(context: Any, tree: EntityTree) -> Any:
    """Resolve entity references in *context* against *tree*.

    Args:
        context: Raw context, usually a dict from a component config.
        tree: The scope references are looked up in (the catalog).

    Returns:
        A new structure with every reference expanded.  ``None`` becomes
        an empty dict.

    Raises:
        ContextResolutionError: If references form a cycle.
    """
    if context is None:
        return {}
    return await _resolve(context, tree, frozenset())


async def _resolve(value: Any, tree: EntityTree, stack: frozenset[object]) -> Any:
    if inspect.isawaitable(value):
        value = await _settle(value)
    if isinstance(value, Mapping):
        return {key: await _resolve(item, tree, stack) for key, item in value.items()}
    if isinstance(value, list):
        return [await _resolve(item, tree, stack) for item in value]
    if isinstance(value, tuple):
        return tuple([await _resolve(item, tree, stack) for item in value])
    if isinstance(value, str) and len(value) > 1 and value.startswith("@"):
        return await _resolve_reference(value, tree, stack)
    return value


async def _settle(awaitable: Any) -> Any:
    try:
        once = _settled.setdefault(awaitable, AsyncOnce())
    except TypeError:
        # Not weak-referenceable: nothing to key the result on
        return await awaitable
    return await once.get(lambda: awaitable)


async def _resolve_reference(ref: str, tree: EntityTree, stack: frozenset[object]) -> Any:
    handle, _, path = ref.partition(".")
    entity = tree.find(handle)
    if entity is None:
        logger.debug("Context reference %s matched no entity; left as-is", ref)
        return ref
    if entity in stack:
        raise ContextResolutionError(f"Circular context reference via {handle}")
    resolved = await _resolve(entity.context, tree, stack | {entity})
    if not path:
        return resolved
    value = _get_path(resolved, path.split("."))
    if value is _MISSING:
        logger.debug("Context reference %s has no value at %r", ref, path)
        return None
    return value


def _get_path(value: Any, keys: list[str]) -> Any:
    for key in keys:
        if isinstance(value, Mapping):
            value = value.get(key, _MISSING)
        elif isinstance(value, (list, tuple)) and key.isdigit() and int(key) < len(value):
            value = value[int(key)]
        else:
            return _MISSING
        if value is _MISSING:
            return _MISSING
    return value
