"""Data models for object store listings, object properties and content."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

DIRECTORY_CONTENT_TYPE = "application/x-directory"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
EXTENSION_SEPARATOR = "."


class ObjectKind(Enum):
    FILE = "file"
    DIRECTORY = "directory"

    @classmethod
    def from_name(cls, name: str) -> ObjectKind:
        """Names containing an extension separator are files, everything else a directory."""
        if EXTENSION_SEPARATOR in name:
            return cls.FILE
        return cls.DIRECTORY


@dataclass
class ObjectRecord:
    """A single entry from a listing response."""

    key: str | None
    size: int | None = None
    last_modified: str | None = None


@dataclass
class ListingResult:
    """Accumulated entries and common prefixes from a paginated listing.

    Attributes:
        entries: Object records in the order the backend returned them.
        common_prefixes: Directory-like groupings up to the next delimiter.
        base_prefix: Prefix the listing was issued for, without its trailing
            separator.
    """

    entries: list[ObjectRecord] = field(default_factory=list)
    common_prefixes: list[str] = field(default_factory=list)
    base_prefix: str = ""


@dataclass
class ObjectMetadata:
    """Metadata of one object, either fetched directly or derived from a tree leaf."""

    content_type: str
    content_length: int | None
    checksum: str
    last_modified: str
    user_metadata: dict[str, str] | None = None
    object_kind: ObjectKind = ObjectKind.FILE


@dataclass
class ObjectContent:
    """Body and metadata returned by a get."""

    body: bytes
    metadata: ObjectMetadata
