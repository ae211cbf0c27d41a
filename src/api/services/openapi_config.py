"""OpenAPI/Swagger configuration of the task manager API."""

import logging
from pathlib import Path
from typing import Any

from fastapi import FastAPI
from fastapi.openapi.utils import get_openapi

from application.settings import Settings

log = logging.getLogger(__name__)

DESCRIPTION_FILE = Path(__file__).parent.parent / "description.md"

# Tags of the controllers, in the order they are listed in the Swagger UI
OPENAPI_TAGS = [
    {"name": "Tasks", "description": "Create, search, modify and delete tasks, and add transactions and messages to them"},
    {"name": "Messages", "description": "Search the messages sent while doing the task transactions"},
    {"name": "TaskTypes", "description": "Create, search, modify and delete the types of the tasks"},
    {"name": "Profiles", "description": "Remove the information of the deleted profiles"},
    {"name": "Help", "description": "Information about the API implementation"},
    {"name": "Versions", "description": "Versions of the API implementation"},
]


def load_api_description(default: str) -> str:
    if DESCRIPTION_FILE.exists():
        return DESCRIPTION_FILE.read_text(encoding="utf-8")
    log.warning(f"API description file not found: {DESCRIPTION_FILE}")
    return default


def configure_api_openapi(app: FastAPI, settings: Settings, mount_path: str = "/api") -> None:
    """Configure the OpenAPI schema and the Swagger UI of the API sub-app.

    The sub-app is mounted under ``mount_path``, so the schema declares it
    as the server URL to make the "Try it out" requests reach the API.

    Args:
        app: The API sub-app
        settings: Application settings, used for the published version
        mount_path: Path where the sub-app is mounted in the root application
    """
    app.description = load_api_description(app.description)

    def custom_openapi() -> dict[str, Any]:
        if app.openapi_schema:
            return app.openapi_schema

        schema = get_openapi(
            title=app.title,
            version=settings.app_version,
            description=app.description,
            routes=app.routes,
            tags=OPENAPI_TAGS,
        )
        server_url = mount_path.rstrip("/")
        if server_url:
            schema["servers"] = [{"url": server_url}]
        app.openapi_schema = schema
        return app.openapi_schema

    app.openapi = custom_openapi  # type: ignore
    app.swagger_ui_parameters = {
        **(app.swagger_ui_parameters or {}),
        "docExpansion": "list",
        "defaultModelsExpandDepth": 0,
    }
