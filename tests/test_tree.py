"""Tests for swatch.tree: flatten, components, variants, and find()."""

import pytest

from swatch.entities import Component, Variant, VariantCollection
from swatch.tree import Collection, EntityTree


def _component(handle: str, *variants: str, **fields: object) -> Component:
    return Component(handle, variants=[Variant(v) for v in variants or ("default",)], **fields)


@pytest.fixture
def tree() -> EntityTree:
    return EntityTree(
        [
            _component("button", "default", "large", path="lib/button"),
            Collection(
                "forms",
                [
                    _component("input", "default", "error"),
                    Collection("deep", [_component("select", "default", "multi")]),
                ],
            ),
            _component("card", "default", "compact", status="wip"),
        ]
    )


class TestFlatten:
    def test_depth_first_preorder(self, tree: EntityTree) -> None:
        assert [c.handle for c in tree.flatten()] == ["button", "input", "select", "card"]

    def test_components_are_direct_only(self, tree: EntityTree) -> None:
        assert [c.handle for c in tree.components()] == ["button", "card"]

    def test_collections(self, tree: EntityTree) -> None:
        assert [c.handle for c in tree.collections()] == ["forms"]

    def test_variants_keep_component_then_variant_order(self, tree: EntityTree) -> None:
        assert [(v.component, v.handle) for v in tree.variants()] == [
            ("button", "default"),
            ("button", "large"),
            ("input", "default"),
            ("input", "error"),
            ("select", "default"),
            ("select", "multi"),
            ("card", "default"),
            ("card", "compact"),
        ]

    def test_variants_returns_new_collection(self, tree: EntityTree) -> None:
        variants = tree.variants()
        assert isinstance(variants, VariantCollection)
        assert variants is not tree.variants()

    def test_variants_allow_repeated_handles(self, tree: EntityTree) -> None:
        variants = tree.variants()
        assert len(variants) == 8
        assert variants.find("@default").component == "button"
        assert [v.component for v in variants if v.handle == "default"] == [
            "button",
            "input",
            "select",
            "card",
        ]


class TestFind:
    def test_handle_sigil_top_level(self, tree: EntityTree) -> None:
        assert tree.find("@card").handle == "card"

    def test_handle_sigil_nested(self, tree: EntityTree) -> None:
        assert tree.find("@select").handle == "select"

    def test_handle_sigil_falls_back_to_variants(self, tree: EntityTree) -> None:
        found = tree.find("@compact")
        assert isinstance(found, Variant)
        assert found.component == "card"

    def test_handle_sigil_finds_nested_variants(self, tree: EntityTree) -> None:
        found = tree.find("@multi")
        assert isinstance(found, Variant)
        assert found.component == "select"

    def test_component_match_beats_variant(self) -> None:
        tree = EntityTree([_component("a", "default", "b"), _component("b")])
        assert isinstance(tree.find("@b"), Component)

    def test_plain_string_matches_handle(self, tree: EntityTree) -> None:
        assert tree.find("input").handle == "input"

    def test_plain_string_does_not_search_variants(self, tree: EntityTree) -> None:
        assert tree.find("compact") is None

    def test_key_value_pair(self, tree: EntityTree) -> None:
        assert tree.find("path", "lib/button").handle == "button"
        assert tree.find("status", "wip").handle == "card"

    def test_predicate(self, tree: EntityTree) -> None:
        assert tree.find(lambda c: len(c.variants) == 2 and c.handle.startswith("s")).handle == "select"

    def test_first_match_wins(self) -> None:
        tree = EntityTree([_component("x", status="wip"), _component("y", status="wip")])
        assert tree.find("status", "wip").handle == "x"

    def test_no_match(self, tree: EntityTree) -> None:
        assert tree.find("@missing") is None

    def test_empty_tree(self) -> None:
        assert EntityTree().find("@anything") is None

    def test_no_arguments(self, tree: EntityTree) -> None:
        assert tree.find() is None

    def test_too_many_arguments(self, tree: EntityTree) -> None:
        with pytest.raises(TypeError):
            tree.find("a", "b", "c")


class TestCollection:
    def test_collection_find_is_scoped(self, tree: EntityTree) -> None:
        forms = tree.collections()[0]
        assert forms.find("@button") is None
        assert forms.find("@input").handle == "input"

    def test_set_items_replaces_contents(self) -> None:
        tree = EntityTree()
        tree.set_items([_component("a")])
        assert [c.handle for c in tree.flatten()] == ["a"]

    def test_to_dict(self) -> None:
        col = Collection("forms", [_component("input")])
        data = col.to_dict()
        assert data["type"] == "collection"
        assert data["items"][0]["handle"] == "input"
