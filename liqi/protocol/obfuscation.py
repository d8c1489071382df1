"""Keyed XOR layer wrapped around the action payload of game notifications."""

from __future__ import annotations

KEYS = (0x84, 0x5E, 0x4E, 0x42, 0x39, 0xA2, 0x1F, 0x60, 0x1C)


def deobfuscate(data: bytes) -> bytes:
    """Strip the XOR layer. Applying it again restores the input.

    The key stream depends on len(data), so a buffer must be transformed
    as a whole.
    """
    d = len(data)
    base = 23 ^ d
    return bytes(
        b ^ ((base + 5 * i + KEYS[i % len(KEYS)]) & 0xFF)
        for i, b in enumerate(data)
    )
