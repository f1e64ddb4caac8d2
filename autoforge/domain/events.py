"""Domain events for decoupled side effects and integrations."""
from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime
from typing import Callable, Dict, List
from uuid import uuid4

logger = logging.getLogger(__name__)


@dataclass
class DomainEvent:
    """Base class for all domain events."""
    aggregate_id: str
    event_id: str = field(default_factory=lambda: str(uuid4()), kw_only=True)
    timestamp: datetime = field(default_factory=datetime.now, kw_only=True)


@dataclass
class ProjectCreated(DomainEvent):
    """Raised when a command has been classified and a project record exists."""
    name: str
    category: str
    command: str


@dataclass
class ProjectCompleted(DomainEvent):
    """Raised when a project's files are on disk and its status is completed."""
    name: str
    file_count: int
    directory: str


@dataclass
class ProjectRolledBack(DomainEvent):
    """Raised when a failed materialization removed a half-created project."""
    name: str
    reason: str


@dataclass
class ProjectExported(DomainEvent):
    """Raised when an archive was built for download."""
    archive_path: str
    entry_count: int


class DomainEventPublisher:
    """Singleton publisher for domain events."""
    
    _instance: DomainEventPublisher | None = None
    _subscribers: Dict[type, List[Callable[[DomainEvent], None]]]
    
    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._subscribers = {}
        return cls._instance
    
    def subscribe(self, event_type: type[DomainEvent], handler: Callable[[DomainEvent], None]) -> None:
        """Subscribe a handler to an event type."""
        if event_type not in self._subscribers:
            self._subscribers[event_type] = []
        if handler not in self._subscribers[event_type]:
            self._subscribers[event_type].append(handler)
    
    def publish(self, event: DomainEvent) -> None:
        """Publish an event to all subscribers."""
        event_type = type(event)
        for handler in self._subscribers.get(event_type, []):
            try:
                handler(event)
            except Exception:
                # Log error but don't fail the main operation
                logger.exception("Event handler error for %s", event_type.__name__)
    
    def clear_subscribers(self) -> None:
        """Clear all subscribers (useful for testing)."""
        self._subscribers = {}


# Singleton instance
event_publisher = DomainEventPublisher()
