"""
Schema Resolver — name-driven lookup of message schemas.

Two sources:
  - a protobuf DescriptorPool holding every message type of the protocol
  - the service index (protobufjs JSON layout) mapping
    domain → service → method to its request/response type names

All string-keyed dispatch lives here; callers get Descriptor handles back.
"""

from __future__ import annotations

import base64
import binascii

from google.protobuf import json_format, message_factory
from google.protobuf.descriptor import Descriptor
from google.protobuf.descriptor_pool import DescriptorPool
from google.protobuf.message import DecodeError

from liqi.errors import EncodingError, NotFoundError, SchemaError
from liqi.protocol.obfuscation import deobfuscate

DEFAULT_NAMESPACE = "lq"


def to_fqn(name: str, namespace: str = DEFAULT_NAMESPACE) -> str:
    """Fully-qualified message name: 'ReqLogin' → 'lq.ReqLogin'."""
    return f"{namespace}.{name}"


class SchemaResolver:
    """Resolve type names and method paths to descriptors, decode payloads.

    Read-only after construction apart from the message class cache, so one
    instance can back any number of parsers.
    """

    def __init__(self, pool: DescriptorPool, service_index: dict, namespace: str = DEFAULT_NAMESPACE):
        self.pool = pool
        self.service_index = service_index
        self.namespace = namespace
        self._classes: dict[str, type] = {}

    def resolve(self, name: str) -> Descriptor:
        """Look up a bare type name, e.g. 'ActionDiscardTile'."""
        fqn = to_fqn(name, self.namespace)
        try:
            return self.pool.FindMessageTypeByName(fqn)
        except KeyError:
            raise NotFoundError(f"Unknown message type: {name}", name) from None

    def method_types(self, domain: str, service: str, method: str) -> tuple[str, str]:
        """Request and response type names declared for domain.service.method."""
        path = f"{domain}.{service}.{method}"
        try:
            rpc = self.service_index["nested"][domain]["nested"][service]["methods"][method]
        except (KeyError, TypeError):
            raise NotFoundError(f"Unknown method: {path}", path) from None

        req_type = rpc.get("requestType") if isinstance(rpc, dict) else None
        res_type = rpc.get("responseType") if isinstance(rpc, dict) else None
        if not isinstance(req_type, str):
            raise NotFoundError(f"Invalid request type for {path}", path)
        if not isinstance(res_type, str):
            raise NotFoundError(f"Invalid response type for {path}", path)
        return req_type, res_type

    def message_class(self, descriptor: Descriptor) -> type:
        cls = self._classes.get(descriptor.full_name)
        if cls is None:
            cls = message_factory.GetMessageClass(descriptor)
            self._classes[descriptor.full_name] = cls
        return cls

    def decode(self, descriptor: Descriptor, payload: bytes) -> dict:
        """Parse payload as `descriptor` and render it as a JSON-like dict.

        Field names keep their .proto spelling and default-valued scalars
        are included.
        """
        msg = self.message_class(descriptor)()
        try:
            msg.ParseFromString(payload)
        except DecodeError as e:
            raise SchemaError(f"Cannot decode {descriptor.full_name}: {e}") from e
        return json_format.MessageToDict(
            msg,
            preserving_proto_field_name=True,
            always_print_fields_with_no_presence=True,
        )

    def decode_action(self, name: str, encoded: str) -> dict:
        """Decode the base64 + XOR wrapped action payload of type `name`."""
        try:
            raw = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise EncodingError(f"Invalid base64 in action {name}: {e}") from e
        descriptor = self.resolve(name)
        return self.decode(descriptor, deobfuscate(raw))
