"""
liqi — receive-side decoder for the liqi game protocol.

Components:
    protocol/blocks.py       — sub-frame block splitter (varint tags)
    protocol/obfuscation.py  — XOR layer on nested action payloads
    protocol/parser.py       — per-connection frame decoder
    schema/resolver.py       — descriptor + service index lookup
    schema/catalog.py        — load the schema catalog from disk
    data/correlation.py      — pending request table
"""

from liqi.errors import (
    LiqiError, FormatError, InvalidMessageType, NotFoundError, EncodingError, SchemaError,
)
from liqi.protocol import LiqiMessage, MessageType, Parser
from liqi.schema import SchemaResolver, load_resolver

__all__ = [
    "LiqiError", "FormatError", "InvalidMessageType", "NotFoundError", "EncodingError", "SchemaError",
    "LiqiMessage", "MessageType", "Parser",
    "SchemaResolver", "load_resolver",
]
