"""
Message Types — the three frame kinds and the decoded message record.

Frame layouts (first byte is the kind):

    NOTIFY    [01][sub-frame: name=".lq.<Type>", payload]
    REQUEST   [02][id:u16le][sub-frame: name=".lq.<Service>.<method>", payload]
    RESPONSE  [03][id:u16le][sub-frame: name="", payload]
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import IntEnum

from liqi.errors import InvalidMessageType

ID_SIZE = 2  # request/response id, u16le after the kind byte


class MessageType(IntEnum):
    NOTIFY = 1
    REQUEST = 2
    RESPONSE = 3

    @classmethod
    def from_frame(cls, frame: bytes) -> MessageType:
        """Classify a frame by its leading byte."""
        if not frame:
            raise InvalidMessageType(None)
        try:
            return cls(frame[0])
        except ValueError:
            raise InvalidMessageType(frame[0]) from None


@dataclass
class LiqiMessage:
    """A decoded frame."""
    id: int
    msg_type: MessageType
    method_name: str
    data: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "type": self.msg_type.name,
            "method": self.method_name,
            "data": self.data,
        }

    def __repr__(self) -> str:
        return f"[{self.msg_type.name} #{self.id}] {self.method_name} ({len(self.data)} fields)"
