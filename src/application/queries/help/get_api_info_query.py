"""Queries of the information about the API implementation."""

from dataclasses import dataclass
from typing import Any

from neuroglia.core import OperationResult
from neuroglia.mediation import Query, QueryHandler

from application.settings import app_settings


@dataclass
class GetApiInfoQuery(Query[OperationResult[dict[str, Any]]]):
    """Query to retrieve the name, versions, vendor and license of the API."""


@dataclass
class GetVersionQuery(Query[OperationResult[dict[str, Any]]]):
    """Query to retrieve the versions of the API, in the format of the first releases."""


class GetApiInfoQueryHandler(QueryHandler[GetApiInfoQuery, OperationResult[dict[str, Any]]]):
    async def handle_async(self, request: GetApiInfoQuery) -> OperationResult[dict[str, Any]]:
        return self.ok(
            {
                "name": app_settings.api_name,
                "apiVersion": app_settings.app_version,
                "softwareVersion": app_settings.service_version,
                "vendor": app_settings.api_vendor,
                "license": app_settings.api_license,
            }
        )


class GetVersionQueryHandler(QueryHandler[GetVersionQuery, OperationResult[dict[str, Any]]]):
    async def handle_async(self, request: GetVersionQuery) -> OperationResult[dict[str, Any]]:
        return self.ok({"api": app_settings.app_version, "software": app_settings.service_version, "vendor": app_settings.api_vendor})
