"""Tests for swatch.loader: building the entity tree from a directory."""

import json
import logging
from pathlib import Path

import pytest
from fakes import FakeEngine

from swatch.catalog import ComponentCatalog
from swatch.config import CatalogConfig
from swatch.errors import ConfigurationError
from swatch.loader import DirectoryLoader, deep_merge, read_config

BUTTON_CONFIG = """\
label: Action button
status: wip
context:
  text: Save
  theme:
    bg: blue
variants:
  - name: large
    context:
      theme:
        size: lg
  - name: ghost
    label: Ghost button
    status: prototype
"""


def _write(root: Path, rel: str, text: str = "") -> Path:
    path = root / rel
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def library(tmp_path: Path) -> Path:
    root = tmp_path / "components"
    _write(root, "button/button.html", "<button>{text}</button>")
    _write(root, "button/button--large.html", "<button class='{theme[size]}'>{text}</button>")
    _write(root, "button/button.config.yaml", BUTTON_CONFIG)
    _write(root, "button/README.md", "# Button\n")
    _write(root, "button/button.css", ".button {}")
    _write(root, "button/button.js", "")
    _write(root, "button/img/icon.svg", "<svg/>")
    _write(root, "button/_private.css", "")
    _write(root, "button/.cache/stale.css", "")
    _write(root, "forms/input.html", "<input name='{name}'>")
    _write(root, "forms/input.config.json", json.dumps({"collated": True, "context": {"name": "q"}}))
    (root / "forms" / "fieldsets").mkdir()
    _write(root, "_drafts/draft.html", "")
    _write(root, "legacy.html", "<p>old</p>")
    _write(root, "legacy.config.js", "module.exports = {label: 'Old'};")
    _write(root, "preview.html", "<main>{yield}</main>")
    return root


def _load(root: Path, **config: object) -> list:
    return DirectoryLoader(root, CatalogConfig(**config)).load()


class TestTreeShape:
    def test_top_level_order(self, library: Path) -> None:
        items = _load(library)
        assert [item.handle for item in items] == ["legacy", "preview", "button", "forms"]

    def test_kinds(self, library: Path) -> None:
        kinds = {item.handle: item.kind for item in _load(library)}
        assert kinds == {
            "legacy": "component",
            "preview": "component",
            "button": "component",
            "forms": "collection",
        }

    def test_underscore_directories_are_skipped(self, library: Path) -> None:
        tree = ComponentCatalog(_load(library), engine=FakeEngine())
        assert tree.find("draft") is None

    def test_empty_directories_are_skipped(self, library: Path) -> None:
        forms = _load(library)[3]
        assert [item.handle for item in forms] == ["input"]
        assert forms.path == str(library.resolve() / "forms")

    def test_missing_root(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            _load(tmp_path / "nope")

    def test_duplicate_handles_rejected(self, tmp_path: Path) -> None:
        _write(tmp_path, "card.html")
        _write(tmp_path, "card/card.html")
        with pytest.raises(ConfigurationError, match="card"):
            _load(tmp_path)

    def test_library_below_dot_directory(self, tmp_path: Path) -> None:
        root = tmp_path / ".design" / "components"
        _write(root, "card/card.html")
        _write(root, "card/card.css")
        (card,) = _load(root)
        assert card.handle == "card"
        assert [a.name for a in card.assets] == ["card.css"]

    def test_prefix(self, library: Path) -> None:
        assert [item.handle for item in _load(library, prefix="ui")][:3] == [
            "ui-legacy",
            "ui-preview",
            "ui-button",
        ]


class TestComponentDirectory:
    @pytest.fixture
    def button(self, library: Path):
        return _load(library)[2]

    def test_component_fields(self, button) -> None:
        assert button.label == "Action button"
        assert button.status == "wip"
        assert button.notes == "# Button\n"
        assert button.path.endswith("button")

    def test_variant_order(self, button) -> None:
        assert [v.handle for v in button.variants] == ["default", "large", "ghost"]
        assert button.variants.default().handle == "default"

    def test_variant_views(self, button) -> None:
        default, large, ghost = button.variants
        assert default.view_path.endswith("button.html")
        assert large.view_path.endswith("button--large.html")
        assert ghost.view_path == default.view_path

    def test_variant_context_is_deep_merged(self, button) -> None:
        assert button.variants.find("large").context == {
            "text": "Save",
            "theme": {"bg": "blue", "size": "lg"},
        }
        assert button.variants.find("ghost").context == {"text": "Save", "theme": {"bg": "blue"}}

    def test_variant_labels_and_status(self, button) -> None:
        large, ghost = button.variants.find("large"), button.variants.find("ghost")
        assert (large.label, large.status) == ("Large", "wip")
        assert (ghost.label, ghost.status) == ("Ghost button", "prototype")
        assert all(v.component == "button" for v in button.variants)

    def test_assets(self, button) -> None:
        assert [a.name for a in button.assets] == ["button.css", "button.js", "icon.svg"]
        assert [a.ext for a in button.assets] == [".css", ".js", ".svg"]


class TestComponentConfig:
    def test_json_config(self, library: Path) -> None:
        (input_,) = _load(library)[3]
        assert input_.collated is True
        assert input_.context == {"name": "q"}
        assert input_.assets == ()
        assert input_.notes is None

    def test_js_config_is_skipped(self, library: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="swatch.loader"):
            legacy = _load(library)[0]
        assert legacy.label == "Legacy"
        assert "JavaScript config files are not supported" in caplog.text

    def test_config_defaults(self, library: Path) -> None:
        preview = _load(library, status="prototype", preview_layout="@preview", collated=True)[1]
        assert preview.status == "prototype"
        assert preview.preview == "@preview"
        assert preview.variants.default().preview == "@preview"
        assert preview.collated is True

    def test_handle_and_default_override(self, tmp_path: Path) -> None:
        _write(tmp_path, "btn/btn.html")
        _write(tmp_path, "btn/btn--primary.html")
        _write(tmp_path, "btn/btn.config.yml", "handle: action\ndefault: primary\n")
        (component,) = _load(tmp_path)
        assert component.handle == "action"
        assert component.variants.default().handle == "primary"

    def test_variant_view_key(self, tmp_path: Path) -> None:
        _write(tmp_path, "btn/btn.html")
        _write(tmp_path, "btn/alt.html")
        _write(tmp_path, "btn/btn.config.yaml", "variants:\n  - name: alt\n    view: alt.html\n")
        (component,) = _load(tmp_path)
        assert component.variants.find("alt").view_path.endswith("alt.html")

    def test_variant_without_name(self, tmp_path: Path) -> None:
        _write(tmp_path, "btn.html")
        _write(tmp_path, "btn.config.yaml", "variants:\n  - label: Nameless\n")
        with pytest.raises(ConfigurationError, match="without a name"):
            _load(tmp_path)

    def test_custom_ext_and_splitter(self, tmp_path: Path) -> None:
        _write(tmp_path, "tag.hbs")
        _write(tmp_path, "tag~red.hbs")
        _write(tmp_path, "tag.html")
        (component,) = _load(tmp_path, ext=".hbs", splitter="~")
        assert [v.handle for v in component.variants] == ["default", "red"]


class TestReadConfig:
    def test_empty_yaml(self, tmp_path: Path) -> None:
        assert read_config(_write(tmp_path, "a.config.yaml", "")) == {}

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="Invalid component config"):
            read_config(_write(tmp_path, "a.config.yaml", "key: [unclosed"))

    def test_invalid_json(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError):
            read_config(_write(tmp_path, "a.config.json", "{nope"))

    def test_non_mapping(self, tmp_path: Path) -> None:
        with pytest.raises(ConfigurationError, match="must be a mapping"):
            read_config(_write(tmp_path, "a.config.yaml", "- one\n- two\n"))


class TestDeepMerge:
    def test_nested(self) -> None:
        base = {"a": {"x": 1, "y": 2}, "b": 1}
        assert deep_merge(base, {"a": {"y": 3}, "c": 4}) == {"a": {"x": 1, "y": 3}, "b": 1, "c": 4}
        assert base == {"a": {"x": 1, "y": 2}, "b": 1}

    def test_non_dict_replaces(self) -> None:
        assert deep_merge({"a": {"x": 1}}, {"a": [1]}) == {"a": [1]}


class TestFromDirectory:
    async def test_loads_and_renders(self, library: Path) -> None:
        catalog = ComponentCatalog.from_directory(
            library, CatalogConfig(render_errors="raise"), engine=FakeEngine()
        )
        await catalog.load()
        assert await catalog.render(catalog.find("@large")) == "<button class='lg'>Save</button>"
        assert await catalog.render(catalog.find("@input")) == "<input name='q'>"

    async def test_preview_layout(self, library: Path) -> None:
        catalog = ComponentCatalog.from_directory(
            library, CatalogConfig(preview_layout="@preview"), engine=FakeEngine()
        )
        await catalog.load()
        html = await catalog.render_preview(catalog.find("@legacy"))
        assert html == "<main><p>old</p></main>"

    async def test_assets_and_status(self, library: Path) -> None:
        catalog = ComponentCatalog.from_directory(library, engine=FakeEngine())
        await catalog.load()
        assert [a.name for a in catalog.assets().filter_by_ext("css")] == ["button.css"]
        assert catalog.component_status(catalog.find("@button")).handle == "mixed"
