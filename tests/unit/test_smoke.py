"""Smoke tests: the package imports and exposes its public names."""

import blobpath


def test_version() -> None:
    assert blobpath.__version__ == "0.1.0"


def test_public_names_exported() -> None:
    from blobpath import BlobPath, BlobPathError, ErrorKind, PathSpec

    assert PathSpec.from_path("s3://bucket/key").container == "bucket"
    assert issubclass(BlobPathError, Exception)
    assert ErrorKind.OBJECT_DOES_NOT_EXIST.message == "No such file or directory."
    assert BlobPath.__name__ == "BlobPath"
