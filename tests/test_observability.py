# tests/test_observability.py

from __future__ import annotations

import logging
from collections.abc import Iterator

import pytest
import structlog
from starlette.requests import Request
from starlette.routing import Route

from taskboard.config import Settings
from taskboard.observability.logging_config import setup_logging
from taskboard.observability.metrics_middleware import route_template


@pytest.fixture()
def restore_logging() -> Iterator[None]:
    engine_logger = logging.getLogger("sqlalchemy.engine")
    level = engine_logger.level
    yield
    engine_logger.setLevel(level)
    structlog.reset_defaults()


def _request(path: str, route: Route | None = None) -> Request:
    scope = {"type": "http", "method": "PUT", "path": path, "headers": [], "query_string": b""}
    if route is not None:
        scope["route"] = route
    return Request(scope)


def test_route_template_uses_matched_route() -> None:
    route = Route("/tasks/{task_id}", endpoint=lambda request: None)

    assert route_template(_request("/tasks/0190-abc", route)) == "/tasks/{task_id}"


def test_route_template_falls_back_to_raw_path() -> None:
    assert route_template(_request("/nowhere")) == "/nowhere"


def test_log_level_comes_from_settings(restore_logging: None) -> None:
    setup_logging(Settings(LOG_LEVEL="warning"))

    with structlog.testing.capture_logs() as logs:
        logger = structlog.get_logger().bind()
        logger.info("hidden")
        logger.warning("shown")

    assert [entry["event"] for entry in logs] == ["shown"]


@pytest.mark.parametrize(("echo", "expected"), [(False, logging.WARNING), (True, logging.INFO)])
def test_sql_echo_controls_engine_logger(restore_logging: None, echo: bool, expected: int) -> None:
    setup_logging(Settings(DB_ECHO=echo))

    assert logging.getLogger("sqlalchemy.engine").level == expected
