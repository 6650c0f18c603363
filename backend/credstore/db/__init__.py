from .registry_schema import ACCOUNTS_SCHEMA, REGISTRY_MIGRATIONS, SCHEMA_VERSION

__all__ = [
    "ACCOUNTS_SCHEMA",
    "REGISTRY_MIGRATIONS",
    "SCHEMA_VERSION"
]
