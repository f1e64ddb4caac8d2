"""Tests for domain events and event handling."""
from __future__ import annotations

import logging
from datetime import datetime
from unittest.mock import Mock

from autoforge.application.event_handlers import AuditLogHandler, register_event_handlers
from autoforge.domain.events import (
    DomainEvent, ProjectCreated, ProjectCompleted, ProjectRolledBack, ProjectExported,
    DomainEventPublisher, event_publisher
)


class TestDomainEvent:
    """Test base domain event functionality."""

    def test_domain_event_defaults(self):
        """Test domain event creation with generated id and timestamp."""
        event = DomainEvent(aggregate_id="1001")

        assert event.aggregate_id == "1001"
        assert event.event_id
        assert isinstance(event.timestamp, datetime)

    def test_event_ids_are_unique(self):
        assert DomainEvent(aggregate_id="1").event_id != DomainEvent(aggregate_id="1").event_id

    def test_domain_event_with_custom_values(self):
        """Test domain event creation with custom values."""
        custom_timestamp = datetime(2024, 1, 1, 12, 0, 0)

        event = DomainEvent(aggregate_id="1001", event_id="custom-event-id", timestamp=custom_timestamp)

        assert event.event_id == "custom-event-id"
        assert event.timestamp == custom_timestamp


class TestProjectEvents:
    """Test project lifecycle event payloads."""

    def test_project_created(self):
        event = ProjectCreated(aggregate_id="1001", name="Todo", category="web-app", command="create a todo web app")
        assert event.name == "Todo"
        assert event.category == "web-app"
        assert event.command == "create a todo web app"

    def test_project_completed(self):
        event = ProjectCompleted(aggregate_id="1001", name="Todo", file_count=9, directory="/tmp/1001")
        assert event.file_count == 9
        assert event.directory == "/tmp/1001"

    def test_project_rolled_back(self):
        event = ProjectRolledBack(aggregate_id="1001", name="Todo", reason="disk full")
        assert event.reason == "disk full"

    def test_project_exported(self):
        event = ProjectExported(aggregate_id="1001", archive_path="/tmp/1001.zip", entry_count=4)
        assert event.entry_count == 4


class TestDomainEventPublisher:
    """Test domain event publisher functionality."""

    def test_publisher_is_singleton(self):
        assert DomainEventPublisher() is event_publisher

    def test_publisher_initialization(self):
        """Subscribers are cleared between tests."""
        assert event_publisher._subscribers == {}

    def test_subscribe_handler(self):
        handler = Mock()

        event_publisher.subscribe(ProjectCreated, handler)

        assert handler in event_publisher._subscribers[ProjectCreated]

    def test_subscribe_same_handler_twice(self):
        handler = Mock()

        event_publisher.subscribe(ProjectCreated, handler)
        event_publisher.subscribe(ProjectCreated, handler)

        assert len(event_publisher._subscribers[ProjectCreated]) == 1

    def test_publish_event_with_handler(self):
        """Test publishing event with subscribed handler."""
        handler = Mock()
        event_publisher.subscribe(ProjectCompleted, handler)

        event = ProjectCompleted(aggregate_id="1001", name="Todo", file_count=3, directory="/tmp/1001")
        event_publisher.publish(event)

        handler.assert_called_once_with(event)

    def test_publish_event_no_handlers(self):
        """Publishing without subscribers is a no-op."""
        event_publisher.publish(ProjectExported(aggregate_id="1001", archive_path="/tmp/a.zip", entry_count=1))

    def test_publish_different_event_types(self):
        """Handlers only receive the event type they subscribed to."""
        created_handler = Mock()
        exported_handler = Mock()
        event_publisher.subscribe(ProjectCreated, created_handler)
        event_publisher.subscribe(ProjectExported, exported_handler)

        event_publisher.publish(ProjectCreated(aggregate_id="1", name="A", category="game", command="a game"))

        created_handler.assert_called_once()
        exported_handler.assert_not_called()

    def test_handler_exception_does_not_propagate(self, caplog):
        """A failing handler is logged and later handlers still run."""
        failing = Mock(side_effect=RuntimeError("boom"))
        healthy = Mock()
        event_publisher.subscribe(ProjectRolledBack, failing)
        event_publisher.subscribe(ProjectRolledBack, healthy)

        with caplog.at_level(logging.ERROR):
            event_publisher.publish(ProjectRolledBack(aggregate_id="1", name="A", reason="disk full"))

        healthy.assert_called_once()
        assert "Event handler error" in caplog.text


class TestAuditLogHandler:

    def test_register_event_handlers(self):
        register_event_handlers()
        for event_type in (ProjectCreated, ProjectCompleted, ProjectRolledBack, ProjectExported):
            assert len(event_publisher._subscribers[event_type]) == 1

    def test_audit_log_messages(self, caplog):
        audit = AuditLogHandler()

        with caplog.at_level(logging.INFO):
            audit.handle_project_created(
                ProjectCreated(aggregate_id="1001", name="Todo", category="web-app", command="todo web app")
            )
            audit.handle_project_rolled_back(ProjectRolledBack(aggregate_id="1001", name="Todo", reason="disk full"))

        assert "[AUDIT] Project created: 1001 - Todo (web-app)" in caplog.text
        assert "[AUDIT] Project rolled back: 1001 - disk full" in caplog.text
