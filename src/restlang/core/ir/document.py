"""
Document type for restlang IR.

The compiled form of a source: its entries in declaration order.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Any

from pydantic import BaseModel, Field

from .entries import Emitter, Entry, Receiver, Resource


class Document(BaseModel):
    """
    Ordered collection of top-level entries.

    Attributes:
        entries: Resources, receivers and emitters in source order
    """

    entries: list[Entry] = Field(default_factory=list)

    def __iter__(self) -> Iterator[Entry]:  # type: ignore[override]
        return iter(self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __getitem__(self, index: int) -> Entry:
        return self.entries[index]

    @property
    def resources(self) -> list[Resource]:
        return [e for e in self.entries if isinstance(e, Resource)]

    @property
    def receivers(self) -> list[Receiver]:
        return [e for e in self.entries if isinstance(e, Receiver)]

    @property
    def emitters(self) -> list[Emitter]:
        return [e for e in self.entries if isinstance(e, Emitter)]

    def get_resource(self, name: str) -> Resource | None:
        """Get the first resource with a name."""
        for resource in self.resources:
            if resource.name == name:
                return resource
        return None

    def to_list(self) -> list[dict[str, Any]]:
        """Convert to the serializable array form, dropping absent parts."""
        return [entry.model_dump(exclude_none=True) for entry in self.entries]
