"""Projection of a flat, delimiter-scoped listing into a directory tree."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from blobpath.path.spec import SEPARATOR
from blobpath.storage.models import ListingResult, ObjectRecord
from blobpath.tree.models import NodeMetadata, TreeNode

logger = logging.getLogger(__name__)


def build_tree(
    origin_name: str,
    entries: Sequence[ObjectRecord],
    base_prefix: str,
    common_prefixes: Sequence[str],
) -> TreeNode:
    """Build the directory tree for one listing.

    The root stands for the listed prefix itself and is the tree's leaf.
    Below it, the single deepest path found among the base prefix, the
    common prefixes and the entry keys is materialized as a chain of nodes,
    one per segment, each the only child of the previous one.

    Args:
        origin_name: Name of the path the tree is built for (its last
            segment); entries whose key equals it are ignored.
        entries: Object records from the listing, possibly empty.
        base_prefix: Prefix the listing was issued with.
        common_prefixes: Common prefixes reported by the listing.

    Returns:
        Root TreeNode. Building twice from the same input yields equal trees.
    """
    root_name = origin_name.strip(SEPARATOR)
    records = [entry for entry in entries if entry.key is not None and entry.key != origin_name]
    root_id = base_prefix.strip(SEPARATOR) or root_name

    candidates = [base_prefix, *common_prefixes, *(record.key for record in records)]
    deepest = deepest_path(candidates, base_prefix, root_name)

    root = TreeNode(
        id=root_id,
        display_name=root_name,
        origin_prefix=root_id,
        metadata=NodeMetadata.synthesize(root_name, records),
    )

    head: TreeNode | None = None
    previous: TreeNode | None = None
    for segment in deepest:
        parent_id = previous.id if previous is not None else root.id
        node = TreeNode(
            id=f"{parent_id}{SEPARATOR}{segment}",
            display_name=segment,
            parent_id=parent_id,
            origin_prefix=root_id,
            metadata=NodeMetadata.synthesize(segment, records),
        )
        if previous is None:
            head = node
        else:
            previous.add_child(node)
        previous = node

    if head is not None:
        root.add_child(head)

    logger.debug(
        "[build_tree] built tree; origin:%s;base_prefix:%s;depth:%d",
        origin_name,
        base_prefix,
        len(deepest),
    )
    return root


def build_tree_from_listing(origin_name: str, listing: ListingResult) -> TreeNode:
    """Build the directory tree for a ListingResult returned by the storage client."""
    return build_tree(
        origin_name,
        listing.entries,
        listing.base_prefix,
        listing.common_prefixes,
    )


def deepest_path(candidates: Iterable[str], base_prefix: str, origin_name: str) -> list[str]:
    """Select the most specific path among the candidates, as segments.

    Each candidate is made relative to the base prefix, then empty segments
    and segments equal to the origin name are dropped. The greatest segment
    list in lexicographic order wins, so ["a", "z"] beats ["a", "b", "c"].

    Returns:
        Segments of the selected path, or an empty list when no candidate
        reaches below the base prefix.
    """
    base_segments = _split(base_prefix)
    selected: list[str] = []
    for candidate in candidates:
        segments = _split(candidate)
        if segments[: len(base_segments)] == base_segments:
            segments = segments[len(base_segments) :]
        segments = [segment for segment in segments if segment != origin_name]
        if segments > selected:
            selected = segments
    return selected


def _split(path: str) -> list[str]:
    return [segment for segment in path.split(SEPARATOR) if segment]
