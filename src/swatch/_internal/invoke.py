"""Invoke helpers: call sync or async hooks uniformly.

User hooks such as the collator or a tree loader may be ``def`` or
``async def``. Any code that calls one goes through ``invoke`` so the
sync/async check lives in exactly one place::

    from swatch._internal.invoke import invoke

    markup = await invoke(config.collator, markup, variant)
"""

import inspect
from typing import Any


async def invoke(hook: Any, *args: Any, **kwargs: Any) -> Any:
    """Call *hook* and await the result if it's awaitable.

    Works with both kinds of callable::

        def collator(markup, variant):
            return f"<h2>{variant.label}</h2>{markup}"

        async def collator(markup, variant):
            return await decorate(markup, variant)
    """
    result = hook(*args, **kwargs)
    if inspect.isawaitable(result):
        result = await result
    return result
