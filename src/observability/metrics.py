"""Business metrics for the Task Manager service.

Defines OpenTelemetry metrics for:
- Tasks and their embedded transactions and messages
- Task types
- Schema migrations run at start-up
"""

from opentelemetry import metrics

meter = metrics.get_meter(__name__)

# =============================================================================
# TASK METRICS
# =============================================================================

tasks_created = meter.create_counter(
    name="task_manager.tasks.created",
    description="Total tasks created",
    unit="1",
)

tasks_updated = meter.create_counter(
    name="task_manager.tasks.updated",
    description="Total tasks updated or merged",
    unit="1",
)

tasks_deleted = meter.create_counter(
    name="task_manager.tasks.deleted",
    description="Total tasks deleted",
    unit="1",
)

task_transactions_added = meter.create_counter(
    name="task_manager.tasks.transactions_added",
    description="Total transactions added into tasks",
    unit="1",
)

task_messages_added = meter.create_counter(
    name="task_manager.tasks.messages_added",
    description="Total messages added into task transactions",
    unit="1",
)

task_processing_time = meter.create_histogram(
    name="task_manager.task.processing_time",
    description="Time to process task operations",
    unit="ms",
)

# =============================================================================
# TASK TYPE METRICS
# =============================================================================

task_types_created = meter.create_counter(
    name="task_manager.task_types.created",
    description="Total task types created",
    unit="1",
)

task_types_updated = meter.create_counter(
    name="task_manager.task_types.updated",
    description="Total task types updated or merged",
    unit="1",
)

task_types_deleted = meter.create_counter(
    name="task_manager.task_types.deleted",
    description="Total task types deleted",
    unit="1",
)

# =============================================================================
# MIGRATION METRICS
# =============================================================================

documents_migrated = meter.create_counter(
    name="task_manager.documents.migrated",
    description="Total stored documents migrated to the current schema",
    unit="1",
)
