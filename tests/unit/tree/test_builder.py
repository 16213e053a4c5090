"""Unit tests for tree/builder.py: flat listing to directory tree projection."""

from blobpath.storage.models import ListingResult, ObjectKind, ObjectRecord
from blobpath.tree.builder import build_tree, build_tree_from_listing, deepest_path

# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _records(*keys: str) -> list[ObjectRecord]:
    return [ObjectRecord(key=key) for key in keys]


def _ids(tree) -> list[str]:  # type: ignore[no-untyped-def]
    return [node.id for node in tree.walk()]


# ---------------------------------------------------------------------------
# build_tree tests
# ---------------------------------------------------------------------------


class TestBuildTree:
    def test_nested_listing_produces_directory_leaf_and_file_node(self) -> None:
        tree = build_tree(
            "dir",
            _records("root/dir/file1.txt", "root/dir/sub/file2.png"),
            "root/dir/",
            ["root/dir/sub/"],
        )

        leaf = tree.leaf()
        assert leaf is not None
        assert leaf.id == "root/dir"
        assert leaf.kind is ObjectKind.DIRECTORY

        node = tree.find("root/dir/sub/file2.png")
        assert node is not None
        assert node.kind is ObjectKind.FILE
        assert node.metadata.extension == "png"
        assert node.parent_id == "root/dir/sub"

    def test_leaf_is_directory_and_entry_is_file(self) -> None:
        tree = build_tree(
            "b",
            [ObjectRecord(key="a/b/c.txt", size=12, last_modified="2024-01-01T00:00:00+00:00")],
            "a/b/",
            [],
        )

        assert tree.origin_prefix == "a/b"
        leaf = tree.leaf()
        assert leaf is not None
        assert leaf.kind is ObjectKind.DIRECTORY

        node = tree.find("a/b/c.txt")
        assert node is not None
        assert node is not leaf
        assert node.kind is ObjectKind.FILE
        assert node.metadata.extension == "txt"
        assert node.metadata.size == 12
        assert node.metadata.last_modified == "2024-01-01T00:00:00+00:00"

    def test_every_node_id_is_parent_id_plus_name(self) -> None:
        tree = build_tree("a", _records("a/x/y/z.csv"), "a/", ["a/x/"])
        for node in tree.walk():
            if node.parent_id is None:
                continue
            assert node.id == f"{node.parent_id}/{node.display_name}"

    def test_chain_is_single_path(self) -> None:
        tree = build_tree("a", _records("a/x/y/z.csv"), "a/", [])
        assert _ids(tree) == ["a", "a/x", "a/x/y", "a/x/y/z.csv"]
        for node in tree.walk():
            assert len(node.children) <= 1

    def test_self_reference_is_dropped(self) -> None:
        tree = build_tree("data", [ObjectRecord(key="data", size=99)], "", [])
        assert _ids(tree) == ["data"]
        assert tree.metadata.size is None

    def test_records_without_key_are_ignored(self) -> None:
        tree = build_tree("a", [ObjectRecord(key=None, size=5)], "a/", [])
        assert _ids(tree) == ["a"]

    def test_empty_listing_yields_root_only(self) -> None:
        tree = build_tree("a", [], "a/", [])
        assert _ids(tree) == ["a"]
        assert tree.leaf() is tree

    def test_file_path_listing_yields_file_leaf(self) -> None:
        tree = build_tree("c.txt", [], "a/b/c.txt/", [])
        leaf = tree.leaf()
        assert leaf is not None
        assert leaf.id == "a/b/c.txt"
        assert leaf.kind is ObjectKind.FILE
        assert tree.is_dir() is False

    def test_container_root_listing_uses_origin_name_as_root(self) -> None:
        tree = build_tree("bucket", _records("top.txt"), "", [])
        assert tree.id == "bucket"
        assert tree.find("bucket/top.txt") is not None

    def test_all_nodes_share_origin_prefix(self) -> None:
        tree = build_tree("a", _records("a/x/y.txt"), "a/", [])
        assert {node.origin_prefix for node in tree.walk()} == {"a"}

    def test_metadata_first_matching_record_wins(self) -> None:
        tree = build_tree(
            "a",
            [
                ObjectRecord(key="a/f.txt", size=1),
                ObjectRecord(key="a/g/f.txt", size=2),
            ],
            "a/",
            [],
        )
        # Matching is by key suffix, so the chain's f.txt takes the first record's size.
        node = tree.find("a/g/f.txt")
        assert node is not None
        assert node.metadata.size == 1

    def test_building_twice_yields_equal_trees(self) -> None:
        records = _records("root/dir/file1.txt", "root/dir/sub/file2.png")
        first = build_tree("dir", records, "root/dir/", ["root/dir/sub/"])
        second = build_tree("dir", records, "root/dir/", ["root/dir/sub/"])
        assert first == second

    def test_build_from_listing_matches_build(self) -> None:
        listing = ListingResult(
            entries=_records("a/b/c.txt"), common_prefixes=["a/b/d/"], base_prefix="a/b"
        )
        assert build_tree_from_listing("b", listing) == build_tree(
            "b", listing.entries, "a/b", ["a/b/d/"]
        )


# ---------------------------------------------------------------------------
# deepest_path tests
# ---------------------------------------------------------------------------


class TestDeepestPath:
    def test_longer_path_with_same_start_wins(self) -> None:
        assert deepest_path(["a/x/", "a/x/y"], "a/", "a") == ["x", "y"]

    def test_lexicographic_order_beats_depth(self) -> None:
        # "z" sorts after "b", so the shallower path is selected.
        assert deepest_path(["a/b/c/d", "a/z"], "a/", "a") == ["z"]

    def test_origin_name_segments_are_dropped(self) -> None:
        assert deepest_path(["dir/x/dir/y"], "", "dir") == ["x", "y"]

    def test_no_candidate_below_base(self) -> None:
        assert deepest_path(["a/"], "a/", "a") == []

    def test_candidates_outside_base_are_kept_whole(self) -> None:
        assert deepest_path(["q/r"], "a/", "a") == ["q", "r"]
