"""Swatch: render component libraries for previews and documentation.

A catalog holds components, their variants, and collections.  Rendering
resolves each entity's context, picks the right variant (or collates all
of them), and optionally wraps the result in a preview layout.

Basic usage::

    from swatch import CatalogConfig, ComponentCatalog

    catalog = ComponentCatalog.from_directory("components")
    await catalog.load()

    button = catalog.find("@button")
    html = await catalog.render(button)

Command line::

    swatch render components @button --preview
"""

__version__ = "0.1.0-dev"
__all__ = [
    "Asset",
    "AssetCollection",
    "CatalogConfig",
    "Collection",
    "Component",
    "ComponentCatalog",
    "ConfigurationError",
    "DirectoryLoader",
    "EntityKind",
    "FileClassifier",
    "KidaEngine",
    "StatusRecord",
    "StatusTaxonomy",
    "SwatchError",
    "TemplateEngine",
    "Variant",
]


def __getattr__(name: str) -> object:
    """Lazy imports for public API.

    Keeps ``import swatch`` fast (no kida import) while providing a clean
    top-level API.
    """
    if name == "ComponentCatalog":
        from swatch.catalog import ComponentCatalog

        return ComponentCatalog

    if name == "CatalogConfig":
        from swatch.config import CatalogConfig

        return CatalogConfig

    if name in ("Asset", "Component", "EntityKind", "Variant"):
        from swatch import entities as _entities

        return getattr(_entities, name)

    if name == "AssetCollection":
        from swatch.assets import AssetCollection

        return AssetCollection

    if name == "Collection":
        from swatch.tree import Collection

        return Collection

    if name == "DirectoryLoader":
        from swatch.loader import DirectoryLoader

        return DirectoryLoader

    if name == "FileClassifier":
        from swatch.files import FileClassifier

        return FileClassifier

    if name in ("KidaEngine", "TemplateEngine"):
        from swatch.templating import engine as _engine

        return getattr(_engine, name)

    if name in ("StatusRecord", "StatusTaxonomy"):
        from swatch import status as _status

        return getattr(_status, name)

    if name in ("ConfigurationError", "SwatchError"):
        from swatch import errors as _errors

        return getattr(_errors, name)

    msg = f"module {__name__!r} has no attribute {name!r}"
    raise AttributeError(msg)
