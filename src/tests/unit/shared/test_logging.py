"""Unit tests for logging helpers."""

import json
import logging

import structlog
from structlog.testing import capture_logs

from shared.config import LogFormat
from shared.observability import bind_task_logger, log_external_call_end, setup_logging


class TestTaskLogger:
    def test_binds_task_context(self) -> None:
        with capture_logs() as logs:
            log = bind_task_logger(
                structlog.get_logger("test"),
                provider="CAPIClusterProvider:default",
                task_id="CAPIClusterProvider:default:refresh",
                task_instance_id="run-1",
            )
            log.info("Providing CAPI Cluster resources")

        assert logs[0]["provider"] == "CAPIClusterProvider:default"
        assert logs[0]["task_id"] == "CAPIClusterProvider:default:refresh"
        assert logs[0]["task_instance_id"] == "run-1"

    def test_generates_instance_id(self) -> None:
        with capture_logs() as logs:
            bind_task_logger(structlog.get_logger("test"), "p", "t").info("first")
            bind_task_logger(structlog.get_logger("test"), "p", "t").info("second")

        assert logs[0]["task_instance_id"]
        assert logs[0]["task_instance_id"] != logs[1]["task_instance_id"]


class TestExternalCallLogging:
    def test_failure_is_warning(self) -> None:
        with capture_logs() as logs:
            log_external_call_end(
                structlog.get_logger("test"),
                "kubernetes",
                "list_clusters",
                success=False,
                duration_ms=12.5,
                error="Forbidden",
            )

        assert logs[0]["log_level"] == "warning"
        assert logs[0]["duration_ms"] == 12.5
        assert logs[0]["error"] == "Forbidden"


class TestSetupLogging:
    def render(self, event: str) -> dict:
        """Run an event through the configured processor chain."""
        event_dict = {"event": event}
        for processor in structlog.get_config()["processors"]:
            event_dict = processor(logging.getLogger("test"), "info", event_dict)
        return json.loads(event_dict)

    def test_default_service_name(self) -> None:
        try:
            setup_logging(log_format=LogFormat.JSON)
            record = self.render("hello")
        finally:
            structlog.reset_defaults()

        assert record["service"] == "capi-catalog-provider"
        assert record["event"] == "hello"

    def test_service_name_override(self) -> None:
        try:
            setup_logging(service_name="catalog-sync", log_format=LogFormat.JSON)
            record = self.render("hello")
        finally:
            structlog.reset_defaults()

        assert record["service"] == "catalog-sync"
