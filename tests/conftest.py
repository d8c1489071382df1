"""Shared fixtures for liqi tests: a small in-memory schema catalog."""

import pytest
from google.protobuf import descriptor_pb2
from google.protobuf.descriptor_pool import DescriptorPool

from liqi.schema.resolver import SchemaResolver

F = descriptor_pb2.FieldDescriptorProto

# (message name, [(field name, number, type, label, type_name)])
_MESSAGES = [
    ("Error", [("code", 1, F.TYPE_UINT32, F.LABEL_OPTIONAL, "")]),
    ("ActionPrototype", [
        ("step", 1, F.TYPE_UINT32, F.LABEL_OPTIONAL, ""),
        ("name", 2, F.TYPE_STRING, F.LABEL_OPTIONAL, ""),
        ("data", 3, F.TYPE_BYTES, F.LABEL_OPTIONAL, ""),
    ]),
    ("ActionDiscardTile", [
        ("seat", 1, F.TYPE_UINT32, F.LABEL_OPTIONAL, ""),
        ("tile", 2, F.TYPE_STRING, F.LABEL_OPTIONAL, ""),
        ("is_liqi", 3, F.TYPE_BOOL, F.LABEL_OPTIONAL, ""),
    ]),
    # action wrappers with the wrong field types
    ("NotifyNumberedAction", [
        ("name", 1, F.TYPE_UINT32, F.LABEL_OPTIONAL, ""),
        ("data", 2, F.TYPE_BYTES, F.LABEL_OPTIONAL, ""),
    ]),
    ("NotifyTextAction", [
        ("name", 1, F.TYPE_STRING, F.LABEL_OPTIONAL, ""),
        ("data", 2, F.TYPE_STRING, F.LABEL_OPTIONAL, ""),
    ]),
    ("NotifyPlayerLoadGameReady", [
        ("ready_id_list", 1, F.TYPE_UINT32, F.LABEL_REPEATED, ""),
    ]),
    ("ReqLogin", [
        ("account", 1, F.TYPE_STRING, F.LABEL_OPTIONAL, ""),
        ("password", 2, F.TYPE_STRING, F.LABEL_OPTIONAL, ""),
        ("reconnect", 3, F.TYPE_BOOL, F.LABEL_OPTIONAL, ""),
    ]),
    ("ResLogin", [
        ("error", 1, F.TYPE_MESSAGE, F.LABEL_OPTIONAL, ".lq.Error"),
        ("account_id", 2, F.TYPE_UINT32, F.LABEL_OPTIONAL, ""),
        ("nickname", 3, F.TYPE_STRING, F.LABEL_OPTIONAL, ""),
    ]),
    ("ReqHeartbeat", [
        ("no_operation_counter", 1, F.TYPE_UINT32, F.LABEL_OPTIONAL, ""),
    ]),
    ("ResCommon", [
        ("error", 1, F.TYPE_MESSAGE, F.LABEL_OPTIONAL, ".lq.Error"),
    ]),
]

SERVICE_INDEX = {
    "nested": {
        "lq": {
            "nested": {
                "Lobby": {
                    "methods": {
                        "login": {"requestType": "ReqLogin", "responseType": "ResLogin"},
                        "heatbeat": {"requestType": "ReqHeartbeat", "responseType": "ResCommon"},
                        "broken": {"requestType": "ReqLogin", "responseType": "ResMissing"},
                    },
                },
            },
        },
    },
}


def build_file_proto() -> descriptor_pb2.FileDescriptorProto:
    fp = descriptor_pb2.FileDescriptorProto(name="liqi_test.proto", package="lq", syntax="proto3")
    for msg_name, fields in _MESSAGES:
        mp = fp.message_type.add(name=msg_name)
        for name, number, ftype, label, type_name in fields:
            fd = mp.field.add(name=name, number=number, type=ftype, label=label)
            if type_name:
                fd.type_name = type_name
    return fp


@pytest.fixture(scope="session")
def file_proto() -> descriptor_pb2.FileDescriptorProto:
    return build_file_proto()


@pytest.fixture(scope="session")
def pool(file_proto) -> DescriptorPool:
    p = DescriptorPool()
    p.Add(file_proto)
    return p


@pytest.fixture
def resolver(pool) -> SchemaResolver:
    return SchemaResolver(pool, SERVICE_INDEX)


@pytest.fixture
def encode(resolver):
    """encode("ReqLogin", account="a") → serialized payload bytes."""
    def _encode(type_name: str, **fields) -> bytes:
        cls = resolver.message_class(resolver.resolve(type_name))
        return cls(**fields).SerializeToString()
    return _encode


@pytest.fixture
def service_index() -> dict:
    return SERVICE_INDEX
