"""Filesystem-style path handle over an object store namespace."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import TYPE_CHECKING

from blobpath.config import load_config
from blobpath.errors import BlobPathError, ErrorKind
from blobpath.path.spec import SEPARATOR, PathSpec, is_qualified
from blobpath.storage.client import BlobStoreClient, blob_store_client_from_config
from blobpath.storage.models import (
    EXTENSION_SEPARATOR,
    ListingResult,
    ObjectKind,
    ObjectMetadata,
)
from blobpath.tree.builder import build_tree_from_listing
from blobpath.tree.models import TreeNode

if TYPE_CHECKING:
    from blobpath.config import AppConfig

logger = logging.getLogger(__name__)


class BlobPath:
    """A path to an object or directory-like prefix in a container.

    Handles run in one of two modes fixed at construction:

    - lazy (default): every query is answered with a fresh round trip;
    - eager: existence is probed once at construction and, if the path
      exists, one listing is turned into a directory tree that answers all
      later type and metadata queries.
    """

    def __init__(
        self,
        path: str,
        client: BlobStoreClient | None = None,
        eager: bool = False,
    ) -> None:
        """Create a path handle.

        Args:
            path: Scheme-qualified ("s3://container/key") or absolute
                ("/container/key") path.
            client: Storage client to issue requests with. Built from the
                environment configuration when omitted.
            eager: Resolve and cache the directory tree now.

        Raises:
            BlobPathError: INVALID_PATH for relative or unparseable paths.
        """
        raw = str(path)
        if not is_qualified(raw):
            raise BlobPathError(
                ErrorKind.INVALID_PATH,
                detail="Found a relative path. BlobPath only works with absolute paths.",
                path=raw,
            )
        self._spec = PathSpec.from_path(raw)
        self._client = client if client is not None else blob_store_client_from_config(load_config())
        self._eager = eager
        self._exists: bool | None = None
        self._tree: TreeNode | None = None

        if eager:
            self._exists = self._probe()
            if self._exists:
                self._tree = self.tree_from_listing(self._list())

    @classmethod
    def from_spec(
        cls, spec: PathSpec, client: BlobStoreClient | None = None, eager: bool = False
    ) -> BlobPath:
        """Create a path handle from an already parsed PathSpec.

        Args:
            spec: Parsed container and key.
            client: Storage client, as for the constructor.
            eager: Resolve and cache the directory tree now.

        Returns:
            BlobPath addressing the same location as spec.
        """
        return cls(str(spec), client=client, eager=eager)

    # ------------------------------------------------------------------
    # Path parts
    # ------------------------------------------------------------------

    @property
    def spec(self) -> PathSpec:
        """Parsed container and key of this path."""
        return self._spec

    @property
    def container(self) -> str:
        """Container (bucket) name."""
        return self._spec.container

    @property
    def key(self) -> str:
        """Key addressing the object, without a trailing separator."""
        return self._spec.object_key

    @property
    def client(self) -> BlobStoreClient:
        """Storage client used for every round trip of this handle."""
        return self._client

    @property
    def eager(self) -> bool:
        """True if the handle resolved its tree at construction."""
        return self._eager

    @property
    def name(self) -> str:
        """Final key segment, or the container name for a container path."""
        segments = self._spec.segments
        return segments[-1] if segments else self._spec.container

    @property
    def extension(self) -> str | None:
        """Text after the last "." of the final segment, or None."""
        if not self._spec.segments or EXTENSION_SEPARATOR not in self.name:
            return None
        return self.name.rsplit(EXTENSION_SEPARATOR, 1)[-1]

    @property
    def parent(self) -> BlobPath | None:
        """The enclosing path, or None for a path naming only a container.

        The parent shares this handle's client and mode, so the parent of an
        eager handle probes and lists on construction.
        """
        return self._parent(self._eager)

    def ancestors(self) -> Ancestors:
        """Return this path followed by each of its parents up to the container.

        The parents are lazy handles whatever this handle's mode, so
        iterating makes no round trips.
        """
        return Ancestors(self)

    def joinpath(self, *parts: str) -> BlobPath:
        """Append key segments to this path; empty parts and stray separators are ignored.

        Returns:
            New BlobPath sharing this handle's client and mode.
        """
        segments = [part.strip(SEPARATOR) for part in parts if part.strip(SEPARATOR)]
        joined = SEPARATOR.join([str(self), *segments])
        return BlobPath(joined, client=self._client, eager=self._eager)

    def __truediv__(self, part: str) -> BlobPath:
        return self.joinpath(part)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def exists(self) -> bool:
        """Return True if the path exists. Backend errors count as "does not exist"."""
        if self._eager:
            return bool(self._exists)
        return self._probe()

    def _probe(self) -> bool:
        try:
            return self.try_exists()
        except BlobPathError as exc:
            logger.debug("[exists] existence check failed; path:%s;kind:%s", self, exc.kind.name)
            return False

    def try_exists(self) -> bool:
        """Return True if the path exists.

        A directory-style path is also found through its "/"-terminated
        directory marker.

        Raises:
            BlobPathError: The classified failure, e.g. OBJECT_DOES_NOT_EXIST.
        """
        if self._eager and self._exists:
            return True

        container, key = self._spec.container, self._spec.object_key
        try:
            return self._client.head(container, key)
        except BlobPathError as exc:
            if exc.kind is not ErrorKind.OBJECT_DOES_NOT_EXIST or not key:
                raise
            return self._client.head(container, self._spec.full_key or key)

    def is_dir(self) -> bool:
        """Return True if the path is a directory.

        In lazy mode this lists the prefix once. Both modes decide with
        tree_from_listing.
        """
        if self._eager:
            return self._tree is not None and self._tree.is_dir()
        return self.tree_from_listing(self._list()).is_dir()

    def is_file(self) -> bool:
        """Return True if the path is not a directory."""
        return not self.is_dir()

    def metadata(self) -> ObjectMetadata:
        """Return the metadata of the object the path points to.

        Raises:
            BlobPathError: OBJECT_DOES_NOT_EXIST if the path does not exist,
                UNKNOWN if the cached tree cannot describe it.
        """
        if self._eager:
            if self._tree is None:
                raise BlobPathError(ErrorKind.OBJECT_DOES_NOT_EXIST, path=str(self))
            return self._leaf_metadata(self._tree)

        if not self._spec.object_key:
            return self._leaf_metadata(self.tree_from_listing(self._list()))

        container, key = self._spec.container, self._spec.object_key
        try:
            return self._client.get_metadata(container, key)
        except BlobPathError as exc:
            if exc.kind is not ErrorKind.OBJECT_DOES_NOT_EXIST or self._spec.full_key is None:
                raise
            return self._client.get_metadata(container, self._spec.full_key)

    def tree(self) -> TreeNode:
        """Return the directory tree for this path, cached in eager mode."""
        if self._eager and self._tree is not None:
            return self._tree
        return self.tree_from_listing(self._list())

    def tree_from_listing(self, listing: ListingResult) -> TreeNode:
        """Build the directory tree of this path from a listing of its prefix.

        A path with a key and nothing listed below it is an object, whatever
        its name looks like, so its leaf is marked as a file. A container
        path is always a directory.

        Args:
            listing: Listing of this path's directory prefix.

        Returns:
            Root node of the tree; its leaf describes this path.
        """
        tree = build_tree_from_listing(self.name, listing)
        leaf = tree.leaf()
        if (
            leaf is not None
            and self._spec.object_key
            and not listing.entries
            and not listing.common_prefixes
        ):
            leaf.metadata.kind = ObjectKind.FILE
        return tree

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------

    def _list(self) -> ListingResult:
        return self._client.list_objects(self._spec.container, self._spec.full_key or "")

    def _parent(self, eager: bool) -> BlobPath | None:
        segments = self._spec.segments
        if not segments:
            return None
        parent = SEPARATOR.join([self._spec.container, *segments[:-1]])
        return BlobPath(SEPARATOR + parent, client=self._client, eager=eager)

    def _leaf_metadata(self, tree: TreeNode) -> ObjectMetadata:
        leaf = tree.leaf()
        if leaf is None:
            raise BlobPathError(
                ErrorKind.UNKNOWN, detail="Path type is indeterminate.", path=str(self)
            )
        return leaf.to_object_metadata()

    def __str__(self) -> str:
        return str(self._spec)

    def __repr__(self) -> str:
        return f"BlobPath({str(self)!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, BlobPath):
            return NotImplemented
        return str(self) == str(other)

    def __hash__(self) -> int:
        return hash(str(self))


class Ancestors:
    """Restartable iterable over a path and its parents, the path itself first."""

    def __init__(self, path: BlobPath) -> None:
        self._path = path

    def __iter__(self) -> Iterator[BlobPath]:
        current: BlobPath | None = self._path
        while current is not None:
            yield current
            current = current._parent(False)


def blob_path_from_config(path: str, config: AppConfig) -> BlobPath:
    """Construct a BlobPath whose client and loading mode come from configuration.

    Args:
        path: Scheme-qualified or absolute path.
        config: Application configuration instance.

    Returns:
        Configured BlobPath instance.
    """
    return BlobPath(
        path,
        client=blob_store_client_from_config(config),
        eager=config.eager_loading,
    )
