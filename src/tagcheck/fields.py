"""Member model: declaring constrained fields and introspecting records.

Records are dataclass instances. Constraints live in field metadata:

    @dataclass
    class Account:
        name: str = constrained("nonzero,max=64")
        email: str = constrained("regexp=@", alias="emailAddress")
"""

import dataclasses
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Iterator

DEFAULT_METADATA_KEY = "validate"
DEFAULT_ALIAS_KEY = "alias"
EMBEDDED_KEY = "embedded"

# Sequences that are scalars as far as traversal is concerned
_TEXT_TYPES = (str, bytes, bytearray)


def constrained(
    line: str = "",
    *,
    alias: str | None = None,
    embedded: bool = False,
    key: str = DEFAULT_METADATA_KEY,
    alias_key: str = DEFAULT_ALIAS_KEY,
    metadata: Mapping[str, Any] | None = None,
    **field_kwargs: Any,
) -> Any:
    """Create a dataclass field carrying a constraint line.

    Args:
        line: Constraint line, e.g. "nonzero,min=3"
        alias: Alternate name used for error paths under alias naming
        embedded: Traverse the member even when private; with an empty alias
            under alias naming its members are reported at the owner's level
        key: Metadata key the line is stored under
        alias_key: Metadata key the alias is stored under
        metadata: Extra metadata merged into the field's metadata
        **field_kwargs: Passed through to dataclasses.field()

    Returns:
        A dataclasses.field()
    """
    meta: dict[str, Any] = dict(metadata or {})
    if line:
        meta[key] = line
    if alias is not None:
        meta[alias_key] = alias
    if embedded:
        meta[EMBEDDED_KEY] = True
    return dataclasses.field(metadata=meta, **field_kwargs)


@dataclass(frozen=True)
class Member:
    """One declared member of a record, as seen by the traversal."""

    name: str
    metadata: Mapping[str, Any]

    @property
    def private(self) -> bool:
        return self.name.startswith("_")

    @property
    def embedded(self) -> bool:
        return bool(self.metadata.get(EMBEDDED_KEY, False))

    def line(self, key: str) -> str:
        return self.metadata.get(key) or ""

    def alias(self, key: str) -> str | None:
        return self.metadata.get(key)


def is_record(value: Any) -> bool:
    """True for dataclass instances (not dataclass types)."""
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def is_sequence(value: Any) -> bool:
    """True for ordered, indexable containers other than text."""
    return isinstance(value, Sequence) and not isinstance(value, _TEXT_TYPES)


def is_mapping(value: Any) -> bool:
    return isinstance(value, Mapping)


def iter_members(record: Any) -> Iterator[Member]:
    """Yield the members of a record in declaration order.

    Inherited dataclass fields come first, as dataclasses.fields() orders
    them.
    """
    for f in dataclasses.fields(record):
        yield Member(name=f.name, metadata=f.metadata)
