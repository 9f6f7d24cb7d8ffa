"""Status taxonomy and lookup.

Components and variants carry status handles such as ``"ready"`` or
``"wip"``.  The taxonomy maps handles to display records.  A component
whose variants disagree gets the *mixed* record, which lists every
underlying status.

Lookups never fail: an unknown handle logs a warning and falls back to
the taxonomy's default option so a typo in a config file cannot abort
a render.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field, replace
from types import MappingProxyType

logger = logging.getLogger("swatch.status")


@dataclass(frozen=True, slots=True)
class StatusRecord:
    """A single status descriptor.

    Attributes:
        handle: Short identifier used in config files (``"wip"``).
        label: Human readable name (``"WIP"``).
        description: Longer explanation for documentation pages.
        color: Display colour, e.g. ``"#FF9233"``.
        statuses: Only populated on a derived mixed record.
    """

    handle: str
    label: str
    description: str = ""
    color: str | None = None
    statuses: tuple[StatusRecord, ...] = ()

    def to_dict(self) -> dict[str, object]:
        data: dict[str, object] = {
            "handle": self.handle,
            "label": self.label,
            "description": self.description,
            "color": self.color,
        }
        if self.statuses:
            data["statuses"] = [s.to_dict() for s in self.statuses]
        return data


@dataclass(frozen=True, slots=True)
class StatusTaxonomy:
    """The set of known statuses plus the default and mixed records."""

    default: str
    mixed: StatusRecord
    options: Mapping[str, StatusRecord] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "options", MappingProxyType(dict(self.options)))

    def info(self, handle: str | Sequence[str] | None) -> StatusRecord | None:
        """Resolve one or more handles into a status record.

        - ``None`` or an empty list returns ``None``.
        - A list collapsing to one distinct handle behaves like that handle.
        - A list of several distinct handles returns a copy of the mixed
          record whose ``statuses`` lists each resolved record in order.
        - An unknown handle logs a warning and returns the default option.
        """
        if handle is None:
            return None
        if not isinstance(handle, str):
            handles = list(dict.fromkeys(handle))
            if not handles:
                return None
            if len(handles) == 1:
                return self.info(handles[0])
            statuses = [self.info(h) for h in handles if h]
            return replace(self.mixed, statuses=tuple(s for s in statuses if s is not None))
        if handle == self.mixed.handle:
            return self.mixed
        record = self.options.get(handle)
        if record is None:
            logger.warning("Status %r is not a known option.", handle)
            return self.options.get(self.default)
        return record


DEFAULT_STATUSES = StatusTaxonomy(
    default="ready",
    mixed=StatusRecord(
        handle="mixed",
        label="Multiple",
        description="Variants have mixed statuses",
        color="#666666",
    ),
    options={
        "prototype": StatusRecord(
            handle="prototype",
            label="Prototype",
            description="Do not implement.",
            color="#FF3333",
        ),
        "wip": StatusRecord(
            handle="wip",
            label="WIP",
            description="Work in progress. Implement with caution.",
            color="#FF9233",
        ),
        "ready": StatusRecord(
            handle="ready",
            label="Ready",
            description="Ready to implement.",
            color="#29CC29",
        ),
    },
)
