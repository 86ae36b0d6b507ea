from __future__ import annotations

import json
import logging
import sys

import pytest

from docstore.app.core.logging import JsonFormatter, setup_logging


def _record(msg="hello", level=logging.INFO, exc_info=None, **extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="docstore.test",
        level=level,
        pathname="test.py",
        lineno=1,
        msg=msg,
        args=(),
        exc_info=exc_info,
    )
    for k, v in extra.items():
        setattr(record, k, v)
    return record


class TestJsonFormatter:
    def test_basic_fields(self):
        payload = json.loads(JsonFormatter().format(_record()))
        assert payload["message"] == "hello"
        assert payload["level"] == "INFO"
        assert payload["logger"] == "docstore.test"
        assert "time" in payload and "pid" in payload

    def test_http_context_and_document_id(self):
        payload = json.loads(
            JsonFormatter().format(
                _record(http_method="DELETE", path="/files/abc", status_code=404, document_id="abc")
            )
        )
        assert payload["http"] == {"method": "DELETE", "path": "/files/abc", "status": 404}
        assert payload["document_id"] == "abc"

    def test_exception_context(self):
        try:
            raise ValueError("broken pipe")
        except ValueError:
            record = _record(level=logging.ERROR, exc_info=sys.exc_info())

        payload = json.loads(JsonFormatter().format(record))

        assert payload["error"]["type"] == "ValueError"
        assert payload["error"]["message"] == "broken pipe"
        assert "Traceback" in payload["error"]["stack"]


class TestSetupLogging:
    @pytest.fixture(autouse=True)
    def _restore_root(self):
        root = logging.getLogger()
        handlers, level = root.handlers[:], root.level
        yield
        root.handlers[:] = handlers
        root.setLevel(level)

    def test_explicit_level_and_json_format(self):
        setup_logging(level="warning", fmt="json")
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, JsonFormatter)

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "plain")
        setup_logging()
        root = logging.getLogger()
        assert root.level == logging.DEBUG
        assert not isinstance(root.handlers[0].formatter, JsonFormatter)
