"""Small glob matcher for file classification.

Supports exactly what the classifier patterns need:

- ``*`` matches within a single path segment, ``?`` one character
- ``**/`` matches zero or more leading directories
- ``{a,b,c}`` brace expansion (groups without a comma stay literal)
- ``!pattern`` negation when several patterns are combined

Wildcards never match a path segment that starts with ``.``: ``*.css``
skips ``.hidden.css`` and ``**/`` does not descend into ``.cache/``.
A literal dot in the pattern (``.config/*``) still matches.

Matching is case-insensitive and treats ``\\`` as ``/``.

Usage::

    from swatch._internal.glob import match

    match(["**/*.html", "!**/*--*.html"], "button/button.html")  # True
"""

import re
from collections.abc import Callable, Sequence
from functools import lru_cache

_BRACE_RE = re.compile(r"\{([^{}]*,[^{}]*)\}")
_NO_DOT = r"(?!\.)"


def expand_braces(pattern: str) -> list[str]:
    """Expand ``{a,b}`` groups into one pattern per alternative.

    Groups expand left to right, so ``{a,b}.{x,y}`` yields four patterns
    in ``a.x, a.y, b.x, b.y`` order.
    """
    found = _BRACE_RE.search(pattern)
    if found is None:
        return [pattern]
    head, tail = pattern[: found.start()], pattern[found.end() :]
    expanded: list[str] = []
    for option in found.group(1).split(","):
        expanded.extend(expand_braces(f"{head}{option}{tail}"))
    return expanded


def translate(pattern: str) -> str:
    """Translate a single brace-free glob into a regular expression body."""
    parts: list[str] = []
    i = 0
    while i < len(pattern):
        # A wildcard opening a segment must not match a leading dot
        segment_start = i == 0 or pattern[i - 1] == "/"
        guard = _NO_DOT if segment_start else ""
        if pattern.startswith("**/", i) and segment_start:
            parts.append(f"(?:{_NO_DOT}[^/]*/)*")
            i += 3
        elif pattern.startswith("**", i) and segment_start:
            parts.append(f"(?:{_NO_DOT}[^/]*(?:/{_NO_DOT}[^/]*)*)?")
            i += 2
        elif pattern[i] == "*":
            parts.append(f"{guard}[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append(f"{guard}[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1
    return "".join(parts)


@lru_cache(maxsize=256)
def _compile(pattern: str) -> re.Pattern[str]:
    body = "|".join(f"(?:{translate(p)})" for p in expand_braces(pattern))
    return re.compile(body, re.IGNORECASE | re.DOTALL)


def _normalise(path: str) -> str:
    path = path.replace("\\", "/")
    while path.startswith("./"):
        path = path[2:]
    return path


def compile_matcher(patterns: str | Sequence[str]) -> Callable[[str], bool]:
    """Build a predicate from one or more patterns.

    A path matches when at least one positive pattern matches and no
    ``!``-prefixed pattern does.
    """
    if isinstance(patterns, str):
        patterns = [patterns]
    positive = [_compile(p) for p in patterns if not p.startswith("!")]
    negative = [_compile(p[1:]) for p in patterns if p.startswith("!")]

    def matcher(path: str) -> bool:
        path = _normalise(path)
        if not any(regex.fullmatch(path) for regex in positive):
            return False
        return not any(regex.fullmatch(path) for regex in negative)

    return matcher


def match(patterns: str | Sequence[str], path: str) -> bool:
    """Return True if *path* satisfies *patterns* (see ``compile_matcher``)."""
    return compile_matcher(patterns)(path)
