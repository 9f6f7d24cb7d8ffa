"""Catalog configuration.

CatalogConfig is a frozen dataclass: immutable after creation,
IDE-autocompletable, no string-key dict lookups.
"""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any, Literal

from swatch.errors import ConfigurationError
from swatch.status import DEFAULT_STATUSES, StatusTaxonomy

# Receives (markup, variant) and returns the markup to collate (sync or async)
type Collator = Callable[[str, Any], str | Awaitable[str]]

type RenderErrorPolicy = Literal["log", "raise"]

# Characters that would turn the splitter into a glob wildcard
_GLOB_CHARS = frozenset("*?{},!")


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Catalog configuration. Immutable after creation.

    All fields have sensible defaults. Override what you need::

        config = CatalogConfig(ext=".kida", preview_layout="@preview")
    """

    # Status
    status: str = "ready"  # Default status handle for entities without one
    statuses: StatusTaxonomy = DEFAULT_STATUSES

    # Preview
    preview_layout: str | None = None  # Handle of the layout component, e.g. "@preview"
    preview_yield: str = "yield"  # Context key the layout reads the wrapped markup from
    collator: Collator | None = None

    # Components
    collated: bool = False  # Collate all variants when a component doesn't say
    prefix: str | None = None  # Prepended to component handles: "<prefix>-<handle>"

    # Files
    ext: str = ".html"
    splitter: str = "--"

    # Templates
    autoescape: bool = True

    # What render() does with a failure inside the pipeline
    render_errors: RenderErrorPolicy = "log"

    def __post_init__(self) -> None:
        if not self.ext.startswith(".") or len(self.ext) < 2:
            raise ConfigurationError(f"ext must look like '.html', got {self.ext!r}")
        if not self.splitter or _GLOB_CHARS.intersection(self.splitter):
            raise ConfigurationError(f"Invalid variant splitter {self.splitter!r}")
        if not self.preview_yield:
            raise ConfigurationError("preview_yield must be a non-empty context key")
        if self.render_errors not in ("log", "raise"):
            raise ConfigurationError(
                f"render_errors must be 'log' or 'raise', got {self.render_errors!r}"
            )
        if self.status not in self.statuses.options:
            raise ConfigurationError(f"Default status {self.status!r} is not a known option")
