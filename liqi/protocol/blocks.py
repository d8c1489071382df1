"""
Block Splitter — cut a sub-frame into tagged blocks.

Layout of a sub-frame (same tag scheme as protobuf wire fields):

    [tag:1][body]...    tag = (block_id << 3) | block_type

    block_type 0: body is a base-128 varint
    block_type 2: body is [varint length][length bytes]

A well-formed sub-frame holds exactly two blocks: the method/type name and
the encoded payload.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum

from liqi.errors import FormatError

MAX_VARINT_BYTES = 10  # enough for any 64-bit value


class BlockType(IntEnum):
    VARINT = 0
    BYTES = 2


@dataclass
class Block:
    """One tagged span inside a sub-frame."""
    block_id: int
    block_type: int
    data: bytes
    begin: int  # offset of the tag byte

    def __repr__(self) -> str:
        return f"Block(id={self.block_id}, type={self.block_type}, @{self.begin}, {len(self.data)}b)"


def read_varint(buf: bytes, pos: int) -> tuple[int, int]:
    """Read a little-endian base-128 varint at `pos`. Returns (value, new_pos)."""
    value = 0
    shift = 0
    start = pos
    while True:
        if pos >= len(buf):
            raise FormatError(f"Truncated varint at offset {start}")
        if pos - start >= MAX_VARINT_BYTES:
            raise FormatError(f"Varint too long at offset {start}")
        b = buf[pos]
        pos += 1
        value |= (b & 0x7F) << shift
        shift += 7
        if not b & 0x80:
            break
    if value >> 64:
        raise FormatError(f"Varint overflows 64 bits at offset {start}")
    return value, pos


def split_blocks(buf: bytes) -> list[Block]:
    """Split `buf` into blocks, in encounter order, consuming it exactly."""
    blocks: list[Block] = []
    i = 0
    n = len(buf)
    while i < n:
        begin = i
        tag = buf[i]
        blk_type = tag & 0x07
        blk_id = tag >> 3
        i += 1
        match blk_type:
            case BlockType.VARINT:
                value, i = read_varint(buf, i)
                data = value.to_bytes(8, "big")
            case BlockType.BYTES:
                length, i = read_varint(buf, i)
                if i + length > n:
                    raise FormatError(
                        f"Block at offset {begin} wants {length} bytes, {n - i} left"
                    )
                data = bytes(buf[i:i + length])
                i += length
            case _:
                raise FormatError(f"Invalid block type: {blk_type}")
        blocks.append(Block(blk_id, blk_type, data, begin))
    return blocks


def split_method_data(buf: bytes) -> tuple[bytes, bytes]:
    """Split a sub-frame into (name_bytes, payload_bytes)."""
    blocks = split_blocks(buf)
    if len(blocks) > 2:
        raise FormatError(
            f"Invalid number of blocks: {len(blocks)} (extra block at offset {blocks[2].begin})"
        )
    if len(blocks) != 2:
        raise FormatError(f"Invalid number of blocks: {len(blocks)}")
    method_block, data_block = blocks
    return method_block.data, data_block.data
