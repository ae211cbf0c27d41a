"""Application settings configuration."""

from neuroglia.hosting.abstractions import ApplicationSettings


class Settings(ApplicationSettings):
    """Application settings with MongoDB persistence and observability."""

    # Debugging Configuration
    debug: bool = True
    environment: str = "development"  # development, production
    log_level: str = "INFO"

    # Application Configuration
    app_name: str = "WeNet Task Manager"
    app_version: str = "0.6.0"
    app_host: str = "127.0.0.1"  # Uvicorn bind address (override in production as needed)
    app_port: int = 8080  # Uvicorn port
    # Published by /help/info and /versions
    api_name: str = "wenet/task-manager"
    api_vendor: str = "UDT-IA, IIIA-CSIC"
    api_license: str = "MIT"

    # Observability Configuration
    service_name: str = "task-manager"
    service_version: str = app_version
    deployment_environment: str = "development"

    observability_enabled: bool = True
    observability_metrics_enabled: bool = True
    observability_tracing_enabled: bool = True
    observability_logging_enabled: bool = True
    observability_health_endpoint: bool = True
    observability_metrics_endpoint: bool = True
    observability_ready_endpoint: bool = True
    observability_health_path: str = "/health"
    observability_metrics_path: str = "/metrics"
    observability_ready_path: str = "/ready"
    observability_health_checks: list[str] = []

    otel_enabled: bool = True
    otel_endpoint: str = "http://otel-collector:4317"
    otel_protocol: str = "grpc"
    otel_timeout: int = 10
    otel_console_export: bool = False
    otel_instrument_fastapi: bool = True
    otel_instrument_logging: bool = True

    # CORS Configuration
    enable_cors: bool = True
    cors_origins: list[str] = ["http://localhost:8080", "http://localhost:3000"]

    # Persistence Configuration
    database_name: str = "wenet_task_manager"
    connection_strings: dict[str, str] = {"mongo": "mongodb://localhost:27017"}
    # Version of the stored documents, older documents are migrated at start-up
    schema_version: str = "0.6.0"
    migrate_on_startup: bool = True

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"  # Ignore extra environment variables


app_settings = Settings()
