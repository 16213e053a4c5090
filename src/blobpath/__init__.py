"""Filesystem-style paths and directory trees over an object store namespace."""

from blobpath.errors import BlobPathError, ErrorKind
from blobpath.path.handle import BlobPath
from blobpath.path.spec import PathSpec

__version__ = "0.1.0"

__all__ = ["BlobPath", "BlobPathError", "ErrorKind", "PathSpec", "__version__"]
