from __future__ import annotations

import structlog

from hranalytics import __version__
from hranalytics.logging import APP_NAME, add_app_context, configure_logging


def test_add_app_context_stamps_events():
    event = add_app_context(None, "info", {"event": "analytics.summary"})

    assert event["app"] == APP_NAME
    assert event["app_version"] == __version__


def test_add_app_context_keeps_explicit_values():
    event = add_app_context(None, "info", {"event": "x", "app": "other"})

    assert event["app"] == "other"


def test_configure_logging_merges_bound_context():
    try:
        configure_logging("DEBUG")
        processors = structlog.get_config()["processors"]

        assert processors[0] is structlog.contextvars.merge_contextvars
        assert add_app_context in processors
    finally:
        structlog.reset_defaults()
