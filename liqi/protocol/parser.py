"""
Liqi Parser — decode raw frames of one connection into LiqiMessages.

Flow per frame:
  kind byte → split sub-frame into (name, payload) → resolve schema by name
  → decode payload → (NOTIFY) unwrap nested action / (REQUEST) remember the
  response type / (RESPONSE) recall it.

One Parser per connection: it owns the pending-request table and the frame
counter that NOTIFY ids are drawn from. The SchemaResolver can be shared.
"""

from __future__ import annotations

import logging
import struct
from typing import Iterable, Iterator

from liqi.data.correlation import PendingRequest, PendingRequests
from liqi.errors import EncodingError, FormatError, SchemaError
from liqi.protocol.blocks import split_method_data
from liqi.protocol.message_types import ID_SIZE, LiqiMessage, MessageType
from liqi.schema.resolver import SchemaResolver

log = logging.getLogger("liqi")


def _decode_name(raw: bytes) -> str:
    try:
        return raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EncodingError(f"Method name is not valid UTF-8: {raw!r}") from e


def _name_segments(name: str, count: int) -> list[str]:
    """Split '.lq.Lobby.login' into ['', 'lq', 'Lobby', 'login'], checking length."""
    parts = name.split(".")
    if len(parts) < count:
        raise FormatError(f"Malformed method name: {name!r}")
    return parts


def _read_id(frame: bytes) -> int:
    if len(frame) < 1 + ID_SIZE:
        raise FormatError(f"Frame too short for message id ({len(frame)} bytes)")
    return struct.unpack_from("<H", frame, 1)[0]


class Parser:
    """Stateful decoder for the frames of a single connection."""

    def __init__(self, resolver: SchemaResolver):
        self.resolver = resolver
        self.total = 0  # frames decoded successfully
        self.pending = PendingRequests()

    def parse(self, frame: bytes) -> LiqiMessage:
        """Decode one frame. Raises a LiqiError subclass on any failure."""
        msg_type = MessageType.from_frame(frame)
        match msg_type:
            case MessageType.NOTIFY:
                msg = self._parse_notify(frame)
            case MessageType.REQUEST:
                msg = self._parse_request(frame)
            case MessageType.RESPONSE:
                msg = self._parse_response(frame)
        self.total += 1
        log.debug("%r", msg)
        return msg

    def parse_many(self, frames: Iterable[bytes]) -> Iterator[LiqiMessage]:
        for frame in frames:
            yield self.parse(frame)

    # ---- per-kind decoding ----

    def _parse_notify(self, frame: bytes) -> LiqiMessage:
        method, payload = split_method_data(frame[1:])
        method_name = _decode_name(method)
        type_name = _name_segments(method_name, 3)[2]

        data = self.resolver.decode(self.resolver.resolve(type_name), payload)

        # Game-event wrappers carry the real action as {"name": ..., "data": <base64>}
        encoded = data.get("data")
        if isinstance(encoded, str):
            action_name = data.get("name")
            if not isinstance(action_name, str):
                raise SchemaError(f"{type_name}: action name field invalid")
            data["data"] = self.resolver.decode_action(action_name, encoded)

        return LiqiMessage(self.total, MessageType.NOTIFY, method_name, data)

    def _parse_request(self, frame: bytes) -> LiqiMessage:
        msg_id = _read_id(frame)
        method, payload = split_method_data(frame[1 + ID_SIZE:])
        method_name = _decode_name(method)
        _, domain, service, rpc = _name_segments(method_name, 4)[:4]

        req_name, res_name = self.resolver.method_types(domain, service, rpc)
        data = self.resolver.decode(self.resolver.resolve(req_name), payload)
        res_type = self.resolver.resolve(res_name)
        self.pending.insert(msg_id, PendingRequest(method_name, res_type))

        return LiqiMessage(msg_id, MessageType.REQUEST, method_name, data)

    def _parse_response(self, frame: bytes) -> LiqiMessage:
        msg_id = _read_id(frame)
        method, payload = split_method_data(frame[1 + ID_SIZE:])
        if method:
            raise FormatError(f"Response {msg_id} carries a method name: {method!r}")

        entry = self.pending.take(msg_id)
        data = self.resolver.decode(entry.response_type, payload)
        return LiqiMessage(msg_id, MessageType.RESPONSE, entry.method_name, data)

    def stats(self) -> dict:
        return {
            "frames": self.total,
            "pending": len(self.pending),
        }
