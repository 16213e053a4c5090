"""Unit tests for storage/models.py: listing and metadata models."""

from blobpath.storage.models import ListingResult, ObjectKind, ObjectMetadata, ObjectRecord


class TestObjectKind:
    def test_from_name(self) -> None:
        assert ObjectKind.from_name("a.txt") is ObjectKind.FILE
        assert ObjectKind.from_name(".env") is ObjectKind.FILE
        assert ObjectKind.from_name("docs") is ObjectKind.DIRECTORY
        assert ObjectKind.from_name("") is ObjectKind.DIRECTORY


class TestListingResult:
    def test_defaults(self) -> None:
        listing = ListingResult()
        assert listing.entries == []
        assert listing.common_prefixes == []
        assert listing.base_prefix == ""

    def test_default_factories_independent(self) -> None:
        a = ListingResult()
        b = ListingResult()
        a.entries.append(ObjectRecord(key="x"))
        a.common_prefixes.append("p/")
        assert b.entries == []
        assert b.common_prefixes == []


class TestObjectMetadata:
    def test_equality(self) -> None:
        a = ObjectMetadata("text/plain", 1, "etag", "2024-01-01")
        b = ObjectMetadata("text/plain", 1, "etag", "2024-01-01")
        assert a == b
        assert a.object_kind is ObjectKind.FILE
        assert a.user_metadata is None
