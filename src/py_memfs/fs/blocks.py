"""Fixed-capacity data blocks — the storage unit behind every file.

A file's bytes are never kept in one big buffer.  They are split into
**blocks** of at most ``BLOCK_SIZE`` bytes, just as a disk stores a
file in fixed-size sectors.  A file is then an ordered list of blocks,
and its size is the sum of their lengths.

Blocks are mutable (``bytearray``) and owned by exactly one file.
Copying a file must therefore copy each block, never share it.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from py_memfs.errors import InvalidArgumentError

BLOCK_SIZE = 4096
"""Maximum number of bytes held by a single block."""


@dataclass
class Block:
    """A byte buffer of at most ``BLOCK_SIZE`` bytes."""

    data: bytearray = field(default_factory=bytearray)

    def __post_init__(self) -> None:
        """Normalise the payload to a private bytearray and check capacity."""
        self.data = bytearray(self.data)
        if len(self.data) > BLOCK_SIZE:
            msg = f"Block holds at most {BLOCK_SIZE} bytes, got {len(self.data)}"
            raise InvalidArgumentError(msg)

    def __len__(self) -> int:
        """Return the number of bytes stored."""
        return len(self.data)

    def copy(self) -> Block:
        """Return an independent clone with the same bytes."""
        return Block(bytearray(self.data))


def byte_view(buffer: bytes | bytearray | memoryview) -> memoryview:
    """Return a flat, unsigned-byte view of *buffer*.

    Contiguous buffers are viewed in place; a strided view is copied
    first, since only contiguous memory can be recast.
    """
    view = memoryview(buffer)
    if not view.c_contiguous:
        view = memoryview(view.tobytes())
    return view.cast("B")


def split_into_blocks(buffer: bytes | bytearray | memoryview) -> list[Block]:
    """Split *buffer* into consecutive blocks of at most ``BLOCK_SIZE`` bytes.

    Sizes are counted in bytes, whatever the item format of *buffer*.
    An empty buffer yields no blocks.

    Examples::

        10 bytes    → [Block(10)]
        4096 bytes  → [Block(4096)]
        4097 bytes  → [Block(4096), Block(1)]

    """
    view = byte_view(buffer)
    return [
        Block(bytearray(view[start : start + BLOCK_SIZE]))
        for start in range(0, len(view), BLOCK_SIZE)
    ]
