"""Built-in swatch template filters.

Auto-registered on every kida Environment the catalog creates.  They
cover the patterns component previews and documentation pages keep
needing: optional attributes, modifier class names, and context dumps.
"""

import html
import json
from typing import Any

from kida.template import Markup


def attr(value: Any, name: str) -> str | Markup:
    """Output an HTML attribute when value is truthy, else empty string.

    Example:
        <button{{ disabled | attr("disabled") }}>{{ text }}</button>
        → <button disabled="True">Save</button>   (when disabled is true)
        → <button>Save</button>                   (when disabled is falsy)

    """
    if not value:
        return ""
    return Markup(f' {name}="{html.escape(str(value))}"')


def bem(block: str, modifier: str = "", cls: str = "") -> str:
    """Build a BEM class string for a component block.

    Example:
        class="{{ "button" | bem(modifier=size) }}"
        → "button button--large"

    """
    parts = [block]
    if modifier:
        parts.append(f"{block}--{modifier}")
    if cls:
        parts.append(cls)
    return " ".join(parts)


def to_json(value: Any, indent: int | None = 2) -> Markup:
    """Serialize a context value as escaped JSON for documentation pages.

    Example:
        <pre>{{ _self.context | to_json }}</pre>

    """
    return Markup(html.escape(json.dumps(value, indent=indent, default=str, sort_keys=True)))


def pluralize(count: int, singular: str, plural: str | None = None) -> str:
    """Pluralize a word based on count.

    Example:
        {{ component.variants | length | pluralize("variant") }}  → "3 variants"

    """
    if plural is None:
        plural = singular + "s"
    word = singular if count == 1 else plural
    return f"{count} {word}"


BUILTIN_FILTERS: dict[str, Any] = {
    "attr": attr,
    "bem": bem,
    "pluralize": pluralize,
    "to_json": to_json,
}
