"""Schema migration hosted service.

Upgrades the stored tasks and task types to the current schema version when
the application starts, before any request is served:
- start_async(): migrates every collection, failing the start-up on error
- stop_async(): no-op
"""

import logging
from typing import TYPE_CHECKING

from neuroglia.dependency_injection import ServiceProviderBase
from neuroglia.hosting.abstractions import HostedService

from application.settings import app_settings
from domain.repositories import TaskRepository, TaskTypeRepository
from observability import documents_migrated

if TYPE_CHECKING:
    from neuroglia.hosting.web import WebApplicationBuilder

log = logging.getLogger(__name__)


class SchemaMigrationService(HostedService):
    """Hosted service that migrates the stored documents on startup.

    The repositories are scoped services, so they are resolved from a scope
    created for the migration.
    """

    def __init__(self, service_provider: ServiceProviderBase, schema_version: str) -> None:
        self._service_provider = service_provider
        self._schema_version = schema_version
        self.migrated: dict[str, int] = {}

    async def start_async(self) -> None:
        """Migrate the task types and the tasks to the current schema.

        A failure is logged and raised, so the service does not start over
        documents it cannot read.
        """
        try:
            async with self._service_provider.create_async_scope() as scope:
                task_type_repository: TaskTypeRepository = scope.get_required_service(TaskTypeRepository)
                task_repository: TaskRepository = scope.get_required_service(TaskRepository)
                self.migrated["taskTypes"] = await task_type_repository.migrate_documents_to_current_version()
                self.migrated["tasks"] = await task_repository.migrate_documents_to_current_version()
        except Exception as e:
            log.error(f"❌ Migration to the schema {self._schema_version} failed: {e}")
            raise

        for collection, count in self.migrated.items():
            if count:
                documents_migrated.add(count, {"collection": collection, "schema_version": self._schema_version})
        log.info(f"✅ Stored documents are on the schema {self._schema_version} (migrated: {self.migrated})")

    async def stop_async(self) -> None:
        pass

    @staticmethod
    def configure(builder: "WebApplicationBuilder") -> "WebApplicationBuilder":
        """Register the migration as a HostedService when enabled in the settings.

        Args:
            builder: The WebApplicationBuilder to configure

        Returns:
            The builder instance for fluent chaining
        """
        if not app_settings.migrate_on_startup:
            log.info("Schema migration on startup is disabled")
            return builder

        def create_service(sp: ServiceProviderBase) -> SchemaMigrationService:
            return SchemaMigrationService(sp, app_settings.schema_version)

        builder.services.add_singleton(HostedService, implementation_factory=create_service)
        log.info("🔧 SchemaMigrationService configured")
        return builder
