"""Main application entry point with SubApp mounting."""

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from neuroglia.data.infrastructure.mongo import MotorRepository
from neuroglia.hosting.web import SubAppConfig, WebApplicationBuilder
from neuroglia.mapping import Mapper
from neuroglia.mediation import Mediator
from neuroglia.observability import Observability
from neuroglia.serialization.json import JsonSerializer

from api.services import configure_api_openapi
from application.services import configure_logging
from application.settings import app_settings
from domain.models import Task, TaskType
from domain.repositories import TaskRepository, TaskTypeRepository
from infrastructure import SchemaMigrationService
from integration.repositories import TASK_TYPES_COLLECTION, TASKS_COLLECTION, MotorTaskRepository, MotorTaskTypeRepository

configure_logging(log_level=app_settings.log_level)
log = logging.getLogger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application.

    The REST API is mounted as a sub-app at the /api prefix.

    Returns:
        Configured FastAPI application
    """
    log.debug("🚀 Creating Task Manager application...")

    builder = WebApplicationBuilder(app_settings=app_settings)

    # Configure core services
    Mediator.configure(builder, ["application.commands", "application.queries"])
    Mapper.configure(builder, ["application.commands", "application.queries"])
    JsonSerializer.configure(builder, ["domain.models"])
    Observability.configure(builder)

    # Configure repositories (MongoDB via MotorRepository) and the schema migration run at startup
    MotorRepository.configure(
        builder,
        entity_type=Task,
        key_type=str,
        database_name=app_settings.database_name,
        collection_name=TASKS_COLLECTION,
        domain_repository_type=TaskRepository,
        implementation_type=MotorTaskRepository,
    )
    MotorRepository.configure(
        builder,
        entity_type=TaskType,
        key_type=str,
        database_name=app_settings.database_name,
        collection_name=TASK_TYPES_COLLECTION,
        domain_repository_type=TaskTypeRepository,
        implementation_type=MotorTaskTypeRepository,
    )
    SchemaMigrationService.configure(builder)

    # Add SubApp for API with controllers
    builder.add_sub_app(
        SubAppConfig(
            path="/api",
            name="api",
            title=f"{app_settings.app_name} API",
            description="Tasks, task types, transactions and messages REST API",
            version=app_settings.app_version,
            controllers=["api.controllers"],
            custom_setup=lambda app, service_provider: configure_api_openapi(app, app_settings, mount_path="/api"),
            docs_url="/docs",
        )
    )

    # Build the application
    app = builder.build_app_with_lifespan(
        title=app_settings.app_name,
        description="Manage the tasks of the WeNet platform",
        version=app_settings.app_version,
        debug=app_settings.debug,
    )

    if app_settings.enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=app_settings.cors_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    log.info("✅ Application created successfully!")
    log.info(f"   - API Docs: http://{app_settings.app_host}:{app_settings.app_port}/api/docs")
    return app


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:create_app",
        factory=True,
        host=app_settings.app_host,
        port=app_settings.app_port,
        reload=app_settings.debug,
    )
