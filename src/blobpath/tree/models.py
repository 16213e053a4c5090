"""Tree nodes projected from a flat object listing."""

from __future__ import annotations

import mimetypes
from collections.abc import Iterator
from dataclasses import dataclass, field

from blobpath.storage.models import (
    DEFAULT_CONTENT_TYPE,
    DIRECTORY_CONTENT_TYPE,
    EXTENSION_SEPARATOR,
    ObjectKind,
    ObjectMetadata,
    ObjectRecord,
)


@dataclass
class NodeMetadata:
    """Type and size information attached to a tree node."""

    last_modified: str | None = None
    size: int | None = None
    extension: str | None = None
    kind: ObjectKind = ObjectKind.DIRECTORY

    @classmethod
    def synthesize(cls, name: str, records: list[ObjectRecord]) -> NodeMetadata:
        """Derive metadata for a node name from the records of one listing.

        The kind and extension come from the name alone. Size and timestamp
        are copied from the first record whose key ends with the name.
        """
        metadata = cls(kind=ObjectKind.from_name(name))
        if metadata.kind is ObjectKind.FILE:
            metadata.extension = name.rsplit(EXTENSION_SEPARATOR, 1)[-1]

        for record in records:
            if record.key is not None and record.key.endswith(name):
                metadata.size = record.size
                metadata.last_modified = record.last_modified
                break
        return metadata


@dataclass
class TreeNode:
    """One entry of a directory tree.

    Parents are referenced by id rather than by object, so a tree owns its
    children and nothing points back up.

    Attributes:
        id: Full path of the node from the root, "/"-joined.
        display_name: Last segment of the id.
        parent_id: Id of the parent node, None for the root.
        children: Owned child nodes in insertion order.
        origin_prefix: Id of the node the tree was built to describe.
        metadata: Kind, extension, size and timestamp of the node.
    """

    id: str
    display_name: str
    parent_id: str | None = None
    children: list[TreeNode] = field(default_factory=list)
    origin_prefix: str = ""
    metadata: NodeMetadata = field(default_factory=NodeMetadata)

    @property
    def kind(self) -> ObjectKind:
        return self.metadata.kind

    def add_child(self, child: TreeNode) -> bool:
        """Insert a child unless a node with the same id is already in this subtree.

        Returns:
            True if the child was inserted, False if it was skipped.
        """
        if self.find(child.id) is not None:
            return False
        self.children.append(child)
        return True

    def add_children(self, children: list[TreeNode]) -> None:
        for child in children:
            self.add_child(child)

    def find(self, node_id: str) -> TreeNode | None:
        """Depth-first search for the first node with the given id."""
        if self.id == node_id:
            return self
        for child in self.children:
            found = child.find(node_id)
            if found is not None:
                return found
        return None

    def leaf(self) -> TreeNode | None:
        """Return the node whose id equals the tree's origin prefix.

        None means the type of the described path is indeterminate, not
        that the path does not exist.
        """
        return self.find(self.origin_prefix)

    def is_dir(self) -> bool:
        leaf = self.leaf()
        return leaf is not None and leaf.kind is ObjectKind.DIRECTORY

    def walk(self) -> Iterator[TreeNode]:
        """Yield this node and every descendant, depth first."""
        yield self
        for child in self.children:
            yield from child.walk()

    def to_object_metadata(self) -> ObjectMetadata:
        """Describe this node as ObjectMetadata, guessing a content type for files."""
        if self.kind is ObjectKind.DIRECTORY:
            content_type = DIRECTORY_CONTENT_TYPE
        else:
            content_type = mimetypes.guess_type(self.display_name)[0] or DEFAULT_CONTENT_TYPE
        return ObjectMetadata(
            content_type=content_type,
            content_length=self.metadata.size,
            checksum="",
            last_modified=self.metadata.last_modified or "",
            object_kind=self.kind,
        )
