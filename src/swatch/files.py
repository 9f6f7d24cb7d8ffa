"""File classification predicates.

Decides what a file inside a component library *is*: a component view,
a named variant's view, a config file, a readme, or a plain asset.
The loader calls these while walking the tree, and the catalog re-exposes
them for outer tooling.

Given ``ext=".html"`` and ``splitter="--"``::

    button.html          -> view
    button--large.html   -> variant view
    button.config.yaml   -> config
    README.md            -> readme
    button.css           -> asset
"""

from __future__ import annotations

import os
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

from swatch._internal.glob import compile_matcher

_CONFIG_PATTERN = "**/*.config.{js,json,yaml,yml}"
_README_PATTERN = "**/readme.md"


class HasPath(Protocol):
    path: str | os.PathLike[str]


type FileLike = str | os.PathLike[str] | HasPath


def file_path(file: FileLike) -> str:
    """Extract a normalised string path from a path or file-like record."""
    if isinstance(file, (str, os.PathLike)):
        return os.fspath(file)
    return os.fspath(file.path)


@dataclass(frozen=True, slots=True)
class FileClassifier:
    """Glob-backed predicates parameterised by view extension and splitter."""

    ext: str = ".html"
    splitter: str = "--"
    _view: Callable[[str], bool] = field(init=False, repr=False, compare=False)
    _var_view: Callable[[str], bool] = field(init=False, repr=False, compare=False)
    _config: Callable[[str], bool] = field(init=False, repr=False, compare=False)
    _readme: Callable[[str], bool] = field(init=False, repr=False, compare=False)
    _asset: Callable[[str], bool] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        ext = self.ext
        var_view = f"**/*{self.splitter}*{ext}"
        object.__setattr__(self, "_view", compile_matcher([f"**/*{ext}", f"!{var_view}"]))
        object.__setattr__(self, "_var_view", compile_matcher(var_view))
        object.__setattr__(self, "_config", compile_matcher(_CONFIG_PATTERN))
        object.__setattr__(self, "_readme", compile_matcher(_README_PATTERN))
        object.__setattr__(
            self,
            "_asset",
            compile_matcher(
                ["**/*.*", f"!**/*{ext}", f"!{_CONFIG_PATTERN}", f"!{_README_PATTERN}"]
            ),
        )

    def is_view(self, file: FileLike) -> bool:
        """True for a component's primary view template."""
        return self._view(file_path(file))

    def is_var_view(self, file: FileLike) -> bool:
        """True for a view that belongs to a named variant (contains the splitter)."""
        return self._var_view(file_path(file))

    def is_config(self, file: FileLike) -> bool:
        return self._config(file_path(file))

    def is_readme(self, file: FileLike) -> bool:
        return self._readme(file_path(file))

    def is_asset(self, file: FileLike) -> bool:
        """True for any dotted file that is not a view, config, or readme."""
        return self._asset(file_path(file))
