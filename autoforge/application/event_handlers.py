"""Event handlers for domain events."""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from autoforge.domain.events import (
        ProjectCreated,
        ProjectCompleted,
        ProjectRolledBack,
        ProjectExported,
    )

logger = logging.getLogger(__name__)


class AuditLogHandler:
    """Logs all domain events for audit trail."""
    
    def handle_project_created(self, event: ProjectCreated) -> None:
        logger.info(f"[AUDIT] Project created: {event.aggregate_id} - {event.name} ({event.category})")
    
    def handle_project_completed(self, event: ProjectCompleted) -> None:
        logger.info(f"[AUDIT] Project completed: {event.aggregate_id} - {event.file_count} files in {event.directory}")
    
    def handle_project_rolled_back(self, event: ProjectRolledBack) -> None:
        logger.warning(f"[AUDIT] Project rolled back: {event.aggregate_id} - {event.reason}")
    
    def handle_project_exported(self, event: ProjectExported) -> None:
        logger.info(f"[AUDIT] Project exported: {event.aggregate_id} ({event.entry_count} files)")


def register_event_handlers():
    """Register all event handlers with the publisher."""
    from autoforge.domain.events import (
        event_publisher,
        ProjectCreated,
        ProjectCompleted,
        ProjectRolledBack,
        ProjectExported,
    )
    
    audit = AuditLogHandler()
    
    event_publisher.subscribe(ProjectCreated, audit.handle_project_created)
    event_publisher.subscribe(ProjectCompleted, audit.handle_project_completed)
    event_publisher.subscribe(ProjectRolledBack, audit.handle_project_rolled_back)
    event_publisher.subscribe(ProjectExported, audit.handle_project_exported)
