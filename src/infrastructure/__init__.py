"""Infrastructure layer for cross-cutting concerns."""

from .schema_migration_service import SchemaMigrationService

__all__ = [
    "SchemaMigrationService",
]
