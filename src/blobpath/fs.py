"""Filesystem-style operations on object store paths.

Every function accepts either a BlobPath or a path string. Strings are
resolved with the given client, or with one built from the environment
configuration when no client is passed. Strings without a scheme or a
leading "/" are read as "container/key".
"""

from __future__ import annotations

import logging
from collections.abc import Iterator

from blobpath.config import load_config
from blobpath.errors import BlobPathError, ErrorKind
from blobpath.path.handle import BlobPath
from blobpath.path.spec import SEPARATOR, is_qualified
from blobpath.storage.client import BlobStoreClient, blob_store_client_from_config
from blobpath.storage.models import ObjectMetadata

logger = logging.getLogger(__name__)


def copy(
    src: BlobPath | str, dest: BlobPath | str, client: BlobStoreClient | None = None
) -> int | None:
    """Copy one object to another path, overwriting the destination.

    The source body and its user metadata are written to the destination.

    Returns:
        Content length of the copied object.

    Raises:
        BlobPathError: OBJECT_DOES_NOT_EXIST if the source does not exist.
    """
    source = _resolve(src, client)
    target = _resolve(dest, source.client)
    source.try_exists()

    content = source.client.get(source.container, source.key)
    target.client.put(
        target.container,
        target.key,
        content_length=content.metadata.content_length,
        body=content.body,
        user_metadata=content.metadata.user_metadata,
        content_type=content.metadata.content_type,
    )
    logger.info("[copy] copied object; src:%s;dest:%s", source, target)
    return content.metadata.content_length


def create_dir(path: BlobPath | str, client: BlobStoreClient | None = None) -> str:
    """Create a directory marker; the parent must exist and the target must not.

    Returns:
        The created path as a string.

    Raises:
        BlobPathError: OBJECT_DOES_NOT_EXIST if the parent is missing,
            OBJECT_ALREADY_EXISTS if the path exists.
    """
    target = _resolve(path, client)
    parent = target.parent
    if parent is not None:
        parent.try_exists()
    if target.exists():
        raise BlobPathError(ErrorKind.OBJECT_ALREADY_EXISTS, path=str(target))
    return _write_marker(target)


def create_dir_all(path: BlobPath | str, client: BlobStoreClient | None = None) -> str:
    """Create a directory marker unless the path exists; parents are implied by the key."""
    target = _resolve(path, client)
    if target.exists():
        return str(target)
    return _write_marker(target)


def metadata(path: BlobPath | str, client: BlobStoreClient | None = None) -> ObjectMetadata:
    """Return the metadata of the object or directory at path.

    Raises:
        BlobPathError: OBJECT_DOES_NOT_EXIST if the path does not exist.
    """
    return _resolve(path, client).metadata()


def read(path: BlobPath | str, client: BlobStoreClient | None = None) -> bytes:
    """Return the full body of an object.

    Raises:
        BlobPathError: OBJECT_DOES_NOT_EXIST if the object does not exist.
    """
    source = _resolve(path, client)
    source.try_exists()
    return source.client.get(source.container, source.key).body


def write(
    path: BlobPath | str,
    data: bytes,
    user_metadata: dict[str, str] | None = None,
    client: BlobStoreClient | None = None,
) -> int:
    """Write data to an object, replacing any existing content.

    Returns:
        Number of bytes written.
    """
    target = _resolve(path, client)
    target.client.put(
        target.container,
        target.key,
        content_length=len(data),
        body=data,
        user_metadata=user_metadata,
    )
    return len(data)


def read_dir(path: BlobPath | str, client: BlobStoreClient | None = None) -> Iterator[BlobPath]:
    """Return an iterator over the entries directly under a directory.

    One listing answers both whether the path is a directory and what it
    contains. Objects come first, then common prefixes, each in listing
    order. The directory's own marker is not an entry.

    Raises:
        BlobPathError: OBJECT_DOES_NOT_EXIST if the path does not exist,
            NOT_A_DIRECTORY if it is not a directory.
    """
    directory = _resolve(path, client)
    directory.try_exists()

    prefix = directory.spec.full_key or ""
    listing = directory.client.list_objects(directory.container, prefix)
    if not directory.tree_from_listing(listing).is_dir():
        raise BlobPathError(ErrorKind.NOT_A_DIRECTORY, path=str(directory))

    keys = [entry.key for entry in listing.entries if entry.key and entry.key != prefix]
    keys.extend(listing.common_prefixes)
    entries = [
        BlobPath(
            f"{SEPARATOR}{directory.container}{SEPARATOR}{key}",
            client=directory.client,
            eager=directory.eager,
        )
        for key in keys
    ]
    logger.info("[read_dir] listed directory; path:%s;entry_count:%d", directory, len(entries))
    return iter(entries)


# ------------------------------------------------------------------
# Private helpers
# ------------------------------------------------------------------


def _resolve(path: BlobPath | str, client: BlobStoreClient | None) -> BlobPath:
    if isinstance(path, BlobPath):
        return path
    raw = str(path)
    if not is_qualified(raw):
        raw = SEPARATOR + raw
    if client is None:
        client = blob_store_client_from_config(load_config())
    return BlobPath(raw, client=client)


def _write_marker(target: BlobPath) -> str:
    marker = target.spec.full_key
    if not marker:
        raise BlobPathError(
            ErrorKind.INVALID_PATH, detail="A container is not a directory marker.", path=str(target)
        )
    target.client.put(
        target.container,
        marker,
        content_length=0,
        content_type=target.client.directory_content_type,
    )
    logger.info("[create_dir] created directory marker; path:%s", target)
    return str(target)
