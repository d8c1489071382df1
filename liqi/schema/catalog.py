"""
Catalog Loader — build a SchemaResolver from files on disk.

Expected inputs:
  liqi.desc  serialized FileDescriptorSet
             (protoc --include_imports --descriptor_set_out=liqi.desc liqi.proto)
  liqi.json  protobufjs JSON export of the same .proto (service index)
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from google.protobuf import descriptor_pb2
from google.protobuf.descriptor_pool import DescriptorPool
from google.protobuf.message import DecodeError

from liqi.errors import SchemaError
from liqi.schema.resolver import DEFAULT_NAMESPACE, SchemaResolver

log = logging.getLogger("liqi")


@dataclass
class CatalogConfig:
    """Where the schema catalog lives."""
    descriptor_path: Path = Path("proto/liqi.desc")
    index_path: Path = Path("proto/liqi.json")
    namespace: str = DEFAULT_NAMESPACE

    @classmethod
    def from_env(cls) -> CatalogConfig:
        """Override defaults with LIQI_DESC_PATH / LIQI_JSON_PATH / LIQI_NAMESPACE."""
        cfg = cls()
        if path := os.environ.get("LIQI_DESC_PATH"):
            cfg.descriptor_path = Path(path)
        if path := os.environ.get("LIQI_JSON_PATH"):
            cfg.index_path = Path(path)
        if ns := os.environ.get("LIQI_NAMESPACE"):
            cfg.namespace = ns
        return cfg


def load_descriptor_pool(path: str | Path) -> DescriptorPool:
    """Load a serialized FileDescriptorSet into a fresh pool."""
    fds = descriptor_pb2.FileDescriptorSet()
    try:
        raw = Path(path).read_bytes()
    except OSError as e:
        raise SchemaError(f"Cannot read descriptor set {path}: {e}") from e
    try:
        fds.ParseFromString(raw)
    except DecodeError as e:
        raise SchemaError(f"Invalid descriptor set {path}: {e}") from e

    pool = DescriptorPool()
    for file_proto in fds.file:
        try:
            pool.Add(file_proto)
        except TypeError as e:
            raise SchemaError(f"Cannot add {file_proto.name} from {path}: {e}") from e
    log.info("Loaded %d proto files from %s", len(fds.file), path)
    return pool


def load_service_index(path: str | Path) -> dict:
    try:
        index = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
        raise SchemaError(f"Cannot load service index {path}: {e}") from e
    log.info("Loaded service index from %s", path)
    return index


def load_resolver(
    descriptor_path: str | Path,
    index_path: str | Path,
    namespace: str = DEFAULT_NAMESPACE,
) -> SchemaResolver:
    return SchemaResolver(
        load_descriptor_pool(descriptor_path),
        load_service_index(index_path),
        namespace=namespace,
    )


def resolver_from_config(cfg: CatalogConfig | None = None) -> SchemaResolver:
    cfg = cfg or CatalogConfig.from_env()
    return load_resolver(cfg.descriptor_path, cfg.index_path, cfg.namespace)
