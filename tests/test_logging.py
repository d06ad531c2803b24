"""Tests for structured logging configuration."""

import io
import json
import os
import subprocess
import sys
from pathlib import Path

import pytest

from library_tree.utils.logging import configure_logging, get_logger


@pytest.fixture
def log_stream():
    stream = io.StringIO()
    yield stream
    configure_logging(level="warn")


def test_json_output(log_stream):
    configure_logging(level="info", format_type="json", stream=log_stream)

    get_logger("registry.tracker").info("edge_recorded", parent="A", child="B")

    event = json.loads(log_stream.getvalue().splitlines()[-1])
    assert event["event"] == "edge_recorded"
    assert event["logger_name"] == "registry.tracker"
    assert event["parent"] == "A"
    assert event["level"] == "info"
    assert "timestamp" in event


def test_level_filters_debug(log_stream):
    configure_logging(level="warn", format_type="json", stream=log_stream)

    logger = get_logger("cli")
    logger.debug("hidden")
    logger.info("hidden")
    logger.warning("shown")

    lines = log_stream.getvalue().splitlines()
    assert len(lines) == 1
    assert json.loads(lines[0])["event"] == "shown"


HOST_APP = """
import logging

import structlog

structlog.configure(processors=[structlog.processors.KeyValueRenderer()])

import library_tree
from library_tree import Watcher


class Loggable(Watcher):
    pass


processors = structlog.get_config()["processors"]
print(len(logging.getLogger().handlers))
print(",".join(type(p).__name__ for p in processors))
"""


def test_import_leaves_host_logging_alone():
    root = Path(__file__).resolve().parents[1]
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(filter(None, [str(root), env.get("PYTHONPATH")]))

    completed = subprocess.run(
        [sys.executable, "-c", HOST_APP],
        capture_output=True,
        text=True,
        env=env,
        check=True,
    )

    handlers, processors = completed.stdout.strip().splitlines()[-2:]
    assert handlers == "0"
    assert processors == "KeyValueRenderer"
