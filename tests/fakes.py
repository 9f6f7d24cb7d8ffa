"""In-memory stand-ins for the template engine and the file reader.

``FakeEngine`` renders with ``str.format_map`` so expectations stay
readable (``"<b>{text}</b>"`` + ``{"text": "Hi"}`` -> ``"<b>Hi</b>"``)
and records every call once its delay has elapsed.  ``FakeReader``
serves template sources from a dict and counts reads per path.
"""

from collections import Counter
from typing import Any

import anyio

from swatch.errors import TemplateSourceError


class FakeEngine:
    def __init__(self, delays: dict[str, float] | None = None) -> None:
        self.calls: list[tuple[str | None, str, dict[str, Any]]] = []
        self.delays = delays or {}

    async def render(self, view_path: str | None, source: str, context: dict[str, Any]) -> str:
        delay = self.delays.get(view_path or "")
        if delay:
            await anyio.sleep(delay)
        self.calls.append((view_path, source, dict(context)))
        return source.format_map(context)


class FakeReader:
    def __init__(self, files: dict[str, str] | None = None, delay: float = 0.0) -> None:
        self.files = dict(files or {})
        self.delay = delay
        self.reads: Counter[str] = Counter()

    async def __call__(self, path: str) -> str:
        self.reads[path] += 1
        await anyio.sleep(self.delay)
        if path not in self.files:
            raise TemplateSourceError(path, "No such file")
        return self.files[path]
