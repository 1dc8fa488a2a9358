"""Tests for data blocks.

A file's content is stored as a list of fixed-capacity blocks.  These
tests pin down the capacity limit, the splitting rule, and that copies
never share bytes with their original.
"""

from array import array

import pytest

from py_memfs.errors import InvalidArgumentError
from py_memfs.fs.blocks import BLOCK_SIZE, Block, byte_view, split_into_blocks


class TestBlock:
    """Verify a single block."""

    def test_block_size_constant(self) -> None:
        """Blocks hold 4096 bytes."""
        assert BLOCK_SIZE == 4096

    def test_empty_block(self) -> None:
        """A default block is empty."""
        block = Block()
        assert len(block) == 0

    def test_full_block_is_allowed(self) -> None:
        """Exactly BLOCK_SIZE bytes fits."""
        block = Block(bytearray(BLOCK_SIZE))
        assert len(block) == BLOCK_SIZE

    def test_oversized_block_raises(self) -> None:
        """More than BLOCK_SIZE bytes is rejected."""
        with pytest.raises(InvalidArgumentError, match="4096"):
            Block(bytearray(BLOCK_SIZE + 1))

    def test_copy_is_independent(self) -> None:
        """Mutating a copy leaves the original untouched."""
        original = Block(bytearray(b"data"))
        clone = original.copy()
        clone.data[0] = ord("X")
        assert original.data == bytearray(b"data")
        assert clone.data == bytearray(b"Xata")

    def test_block_does_not_alias_caller_buffer(self) -> None:
        """The block keeps its own copy of the caller's bytearray."""
        payload = bytearray(b"hello")
        block = Block(payload)
        payload[0] = ord("J")
        assert block.data == bytearray(b"hello")


class TestSplitIntoBlocks:
    """Verify how buffers are chunked."""

    def test_empty_buffer_yields_no_blocks(self) -> None:
        """Nothing to store means no blocks."""
        assert split_into_blocks(b"") == []

    def test_small_buffer_is_one_block(self) -> None:
        """A buffer under the capacity fits in one block."""
        blocks = split_into_blocks(b"Hello")
        assert len(blocks) == 1
        assert bytes(blocks[0].data) == b"Hello"

    def test_exact_capacity_is_one_block(self) -> None:
        """BLOCK_SIZE bytes fill exactly one block."""
        blocks = split_into_blocks(b"a" * BLOCK_SIZE)
        assert [len(b) for b in blocks] == [BLOCK_SIZE]

    def test_one_byte_over_spills_into_second_block(self) -> None:
        """BLOCK_SIZE + 1 bytes needs a second, one-byte block."""
        blocks = split_into_blocks(b"a" * (BLOCK_SIZE + 1))
        assert [len(b) for b in blocks] == [BLOCK_SIZE, 1]

    def test_chunks_preserve_order(self) -> None:
        """Concatenating the blocks gives back the original buffer."""
        payload = bytes(range(256)) * 40
        blocks = split_into_blocks(payload)
        assert b"".join(bytes(b.data) for b in blocks) == payload
        assert all(len(b) <= BLOCK_SIZE for b in blocks)

    def test_accepts_memoryview(self) -> None:
        """Any bytes-like buffer can be split."""
        blocks = split_into_blocks(memoryview(b"view"))
        assert bytes(blocks[0].data) == b"view"

    def test_wide_items_are_counted_in_bytes(self) -> None:
        """A view of 4-byte integers is chunked by bytes, not by items."""
        payload = array("i", range(2048))
        blocks = split_into_blocks(memoryview(payload))
        assert [len(b) for b in blocks] == [BLOCK_SIZE, BLOCK_SIZE]
        assert b"".join(bytes(b.data) for b in blocks) == payload.tobytes()


class TestByteView:
    """Verify flattening of bytes-like buffers."""

    def test_view_is_unsigned_bytes(self) -> None:
        """Any item format comes back as format 'B' with the same byte count."""
        payload = array("d", [1.5, 2.5])
        view = byte_view(payload)
        assert view.format == "B"
        assert view.nbytes == len(view) == payload.itemsize * 2

    def test_strided_view_is_copied(self) -> None:
        """Non-contiguous views are flattened into their visible bytes."""
        view = byte_view(memoryview(b"abcdef")[::2])
        assert bytes(view) == b"ace"
