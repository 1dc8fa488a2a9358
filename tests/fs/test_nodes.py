"""Tests for tree nodes.

Files and directories are one ``Node`` record distinguished by a
``kind`` tag.  Files store blocks, directories store children, and
every node knows its parent — which gives it a path.
"""

import pytest

from py_memfs.errors import InvalidArgumentError
from py_memfs.fs.blocks import BLOCK_SIZE
from py_memfs.fs.nodes import Node, NodeKind, new_root


def _tree() -> Node:
    """Build ``/docs/readme`` and ``/docs/sub/`` under a fresh root."""
    root = new_root("root")
    docs = Node.new_directory("docs", "root")
    root.attach(docs)
    docs.attach(Node.new_file("readme", "alice"))
    docs.attach(Node.new_directory("sub", "root"))
    return root


class TestNodeCreation:
    """Verify node constructors."""

    def test_root_is_named_slash(self) -> None:
        """The root directory is called '/' and has no parent."""
        root = new_root("root")
        assert root.name == "/"
        assert root.parent is None
        assert root.is_directory

    def test_new_file(self) -> None:
        """A new file is empty, owned, and has no children."""
        node = Node.new_file("a.txt", "alice")
        assert node.kind is NodeKind.FILE
        assert node.owner == "alice"
        assert node.size == 0
        assert node.blocks == []

    def test_new_directory(self) -> None:
        """A new directory has no children."""
        node = Node.new_directory("docs", "alice")
        assert node.kind is NodeKind.DIRECTORY
        assert node.children == {}

    def test_nodes_compare_by_identity(self) -> None:
        """Two identical-looking nodes are still different nodes."""
        assert Node.new_file("a", "root") != Node.new_file("a", "root")


class TestFileContents:
    """Verify block-backed reads and writes."""

    def test_write_then_read(self) -> None:
        """Written bytes read back unchanged."""
        node = Node.new_file("f", "root")
        node.write(b"Hello", append=False)
        assert node.read() == b"Hello"

    def test_overwrite_replaces(self) -> None:
        """A non-appending write discards previous content."""
        node = Node.new_file("f", "root")
        node.write(b"Initial content", append=False)
        node.write(b"New", append=False)
        assert node.read() == b"New"

    def test_append_extends(self) -> None:
        """An appending write adds after the existing bytes."""
        node = Node.new_file("f", "root")
        node.write(b"Hello, ", append=False)
        node.write(b"World!", append=True)
        assert node.read() == b"Hello, World!"

    def test_empty_write_truncates(self) -> None:
        """Writing nothing without append leaves zero blocks."""
        node = Node.new_file("f", "root")
        node.write(b"data", append=False)
        node.write(b"", append=False)
        assert node.blocks == []
        assert node.size == 0

    def test_large_write_spans_blocks(self) -> None:
        """Content over BLOCK_SIZE is spread across several blocks."""
        node = Node.new_file("f", "root")
        payload = b"x" * (2 * BLOCK_SIZE + 10)
        node.write(payload, append=False)
        assert [len(b) for b in node.blocks] == [BLOCK_SIZE, BLOCK_SIZE, 10]
        assert node.size == len(payload)
        assert node.read() == payload

    def test_directory_write_raises(self) -> None:
        """Directories hold no bytes."""
        node = Node.new_directory("d", "root")
        with pytest.raises(InvalidArgumentError, match="Is a directory"):
            node.write(b"x", append=False)

    def test_directory_read_raises(self) -> None:
        """Directories cannot be read as files."""
        node = Node.new_directory("d", "root")
        with pytest.raises(InvalidArgumentError, match="Is a directory"):
            node.read()


class TestTreeStructure:
    """Verify parent handles, paths and traversal."""

    def test_attach_sets_parent(self) -> None:
        """Attaching links both directions."""
        root = new_root("root")
        child = Node.new_file("f", "root")
        root.attach(child)
        assert root.children["f"] is child
        assert child.parent is root

    def test_path_follows_parents(self) -> None:
        """A nested node reports its absolute path."""
        root = _tree()
        assert root.children["docs"].children["readme"].path == "/docs/readme"

    def test_root_path(self) -> None:
        """The root's path is '/'."""
        assert new_root("root").path == "/"

    def test_detach_unlinks(self) -> None:
        """Detaching removes the entry and clears the parent handle."""
        root = _tree()
        docs = root.children["docs"]
        docs.detach()
        assert "docs" not in root.children
        assert docs.parent is None

    def test_is_ancestor_of(self) -> None:
        """A directory is an ancestor of itself and its descendants only."""
        root = _tree()
        docs = root.children["docs"]
        sub = docs.children["sub"]
        assert docs.is_ancestor_of(sub)
        assert docs.is_ancestor_of(docs)
        assert not sub.is_ancestor_of(docs)

    def test_walk_is_preorder_with_depth(self) -> None:
        """walk yields children sorted by name, each followed by its subtree."""
        root = _tree()
        root.children["docs"].children["sub"].attach(Node.new_file("deep", "root"))
        seen = [(node.name, depth) for node, depth in root.walk()]
        assert seen == [("docs", 0), ("readme", 1), ("sub", 1), ("deep", 2)]


class TestClone:
    """Verify deep copies."""

    def test_clone_file_copies_bytes(self) -> None:
        """A cloned file has equal content but separate blocks."""
        original = Node.new_file("f", "root")
        original.write(b"payload", append=False)
        copy = original.clone(name="g", owner="alice")
        assert copy.read() == b"payload"
        assert copy.blocks[0] is not original.blocks[0]
        copy.blocks[0].data[0] = ord("P")
        assert original.read() == b"payload"

    def test_clone_sets_name_and_owner(self) -> None:
        """The copy takes the given name and owner, and is detached."""
        copy = Node.new_file("f", "root").clone(name="g", owner="alice")
        assert copy.name == "g"
        assert copy.owner == "alice"
        assert copy.metadata.permission_strings() == {"alice": "rwx"}
        assert copy.parent is None

    def test_clone_directory_is_deep(self) -> None:
        """Every nested node is copied and owned by the new owner."""
        root = _tree()
        copy = root.children["docs"].clone(name="docs2", owner="bob")
        names = [(node.name, node.owner) for node, _ in copy.walk()]
        assert names == [("readme", "bob"), ("sub", "bob")]
        assert copy.children["readme"].parent is copy


class TestInfo:
    """Verify stat snapshots."""

    def test_to_info(self) -> None:
        """The snapshot mirrors the node's metadata."""
        root = _tree()
        readme = root.children["docs"].children["readme"]
        readme.write(b"12345", append=False)
        info = readme.to_info()
        assert info.path == "/docs/readme"
        assert info.kind is NodeKind.FILE
        assert info.owner == "alice"
        assert info.size == 5
        assert info.permissions == {"alice": "rwx"}
