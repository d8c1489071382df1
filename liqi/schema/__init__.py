from .catalog import CatalogConfig, load_resolver, resolver_from_config
from .resolver import DEFAULT_NAMESPACE, SchemaResolver, to_fqn

__all__ = [
    "CatalogConfig", "load_resolver", "resolver_from_config",
    "DEFAULT_NAMESPACE", "SchemaResolver", "to_fqn",
]
