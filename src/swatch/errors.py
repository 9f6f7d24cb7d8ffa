"""Swatch exception hierarchy.

Shared across the catalog, loader, context resolver, and render pipeline
so every module raises and catches the same types.
"""


class SwatchError(Exception):
    """Base for all swatch-specific errors."""


class ConfigurationError(SwatchError):
    """Raised when catalog configuration is invalid.

    Typically raised from ``CatalogConfig.__post_init__`` or while the
    loader reads a component's config file.
    """


class EntityError(SwatchError):
    """Raised when an entity is structurally unusable (e.g. no variants)."""


class MissingEntityError(EntityError):
    """Raised when ``render()`` is called without an entity."""

    def __init__(self, detail: str = "No entity supplied to render") -> None:
        super().__init__(detail)


class UnsupportedEntityError(EntityError):
    """Raised when asked to render something that is not a component or variant."""

    def __init__(self, kind: object) -> None:
        self.kind = kind
        super().__init__(f"Cannot render entity of type {kind}")


class ContextResolutionError(SwatchError):
    """Raised when a context reference cannot be resolved (e.g. a cycle)."""


class TemplateSourceError(SwatchError):
    """A template source could not be read from disk.

    Raised by the default reader around ``OSError`` so the failing path
    travels with the error.
    """

    def __init__(self, path: str, detail: str = "") -> None:
        self.path = path
        self.detail = detail
        super().__init__(path, detail)

    def __str__(self) -> str:
        if self.detail:
            return f"{self.path}: {self.detail}"
        return self.path
