"""Template engine protocol and the kida-backed default.

The render pipeline talks to an engine through a single coroutine::

    markup = await engine.render(view_path, source, context)

``view_path`` identifies the template (``None`` for ad hoc strings) and
``source`` is the already-loaded template text.  Anything implementing
that method can stand in for kida, which is how the tests drive the
pipeline with fakes.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from os import PathLike
from typing import Any, Protocol, runtime_checkable

from kida import ChoiceLoader, Environment, FileSystemLoader

from swatch.config import CatalogConfig
from swatch.templating.filters import BUILTIN_FILTERS


@runtime_checkable
class TemplateEngine(Protocol):
    """Renders template source with a context."""

    async def render(self, view_path: str | None, source: str, context: dict[str, Any]) -> str: ...


def create_environment(
    config: CatalogConfig,
    search_paths: Iterable[str | PathLike[str]] = (),
    filters: dict[str, Callable[..., Any]] | None = None,
    globals_: dict[str, Any] | None = None,
) -> Environment:
    """Create a kida Environment for rendering component views.

    *search_paths* are usually the component library root so views can
    ``{% include %}`` each other by relative path.
    """
    loaders = [FileSystemLoader(str(path)) for path in search_paths]
    options: dict[str, Any] = {"autoescape": config.autoescape}
    if loaders:
        options["loader"] = ChoiceLoader(loaders)
    env = Environment(**options)

    env.update_filters(BUILTIN_FILTERS)

    # User filters may override built-ins
    if filters:
        env.update_filters(filters)

    for name, value in (globals_ or {}).items():
        env.add_global(name, value)

    return env


class KidaEngine:
    """Compile template source with kida and render it.

    One compiled template is kept per ``view_path``, together with the
    source it came from.  An edited source recompiles and replaces the
    entry, so the cache never grows past the number of views.  Ad hoc
    strings (``view_path is None``) are compiled every time.
    """

    __slots__ = ("_cache", "env")

    def __init__(self, env: Environment | None = None) -> None:
        self.env = env if env is not None else Environment()
        self._cache: dict[str, tuple[str, Any]] = {}

    @classmethod
    def from_config(cls, config: CatalogConfig, **kwargs: Any) -> KidaEngine:
        return cls(create_environment(config, **kwargs))

    def _compile(self, view_path: str | None, source: str) -> Any:
        if view_path is None:
            return self.env.from_string(source)
        cached = self._cache.get(view_path)
        if cached is not None and cached[0] == source:
            return cached[1]
        template = self.env.from_string(source)
        self._cache[view_path] = (source, template)
        return template

    async def render(self, view_path: str | None, source: str, context: dict[str, Any]) -> str:
        return self._compile(view_path, source).render(context)
