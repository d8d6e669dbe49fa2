"""
Structured Logging Test Suite
"""

import json
import logging
import sys

from collections.abc import Generator

import pytest

from mediaguard.utils.logger import (
    JSONFormatter,
    StandardFormatter,
    add_log_context,
    get_log_level_from_string,
    setup_logging,
)


def _record(
    msg: str = "Upload rejected", level: int = logging.INFO, **extra: object
) -> logging.LogRecord:
    record = logging.LogRecord(
        name="mediaguard.test",
        level=level,
        pathname=__file__,
        lineno=10,
        msg=msg,
        args=(),
        exc_info=None,
    )
    record.__dict__.update(extra)
    return record


@pytest.fixture
def restore_logging() -> Generator[None, None, None]:
    """Undo setup_logging's changes to the root and uvicorn loggers."""
    names = ["", "uvicorn", "uvicorn.access", "uvicorn.error"]
    saved = {
        name: (
            logging.getLogger(name).level,
            list(logging.getLogger(name).handlers),
            logging.getLogger(name).propagate,
        )
        for name in names
    }
    yield
    for name, (level, handlers, propagate) in saved.items():
        target = logging.getLogger(name)
        target.setLevel(level)
        target.handlers[:] = handlers
        target.propagate = propagate


@pytest.mark.unit
class TestJSONFormatter:
    def test_basic_fields(self) -> None:
        entry = json.loads(JSONFormatter().format(_record()))

        assert entry["level"] == "INFO"
        assert entry["logger"] == "mediaguard.test"
        assert entry["message"] == "Upload rejected"
        assert "timestamp" in entry
        assert "source" not in entry

    def test_extra_fields(self) -> None:
        record = _record(file_name="payload.exe", error_codes=("dangerous_extension",))
        entry = json.loads(JSONFormatter().format(record))

        assert entry["extra"] == {
            "file_name": "payload.exe",
            "error_codes": ["dangerous_extension"],
        }

    def test_unserializable_extra_does_not_fail(self) -> None:
        entry = json.loads(JSONFormatter().format(_record(prefix=b"\x89PNG", tags={1})))

        assert entry["extra"]["prefix"] == "89504e47"
        assert entry["extra"]["tags"] == [1]

    def test_exception(self) -> None:
        try:
            raise ValueError("bad prefix")
        except ValueError:
            record = _record(level=logging.ERROR)
            record.exc_info = sys.exc_info()

        entry = json.loads(JSONFormatter().format(record))

        assert entry["exception"]["type"] == "ValueError"
        assert entry["exception"]["message"] == "bad prefix"

    def test_source_location(self) -> None:
        entry = json.loads(JSONFormatter(include_source_location=True).format(_record()))
        assert entry["source"]["lineno"] == 10


@pytest.mark.unit
class TestStandardFormatter:
    def test_format(self) -> None:
        line = StandardFormatter().format(_record())

        assert "INFO" in line
        assert "mediaguard.test: Upload rejected" in line


@pytest.mark.unit
class TestLogContext:
    def test_context_is_merged(self) -> None:
        adapter = add_log_context(logging.getLogger("mediaguard.test"), file_name="a.png")

        _, kwargs = adapter.process("msg", {"extra": {"status_code": 415}})

        assert kwargs["extra"] == {"status_code": 415, "file_name": "a.png"}

    def test_explicit_extra_wins(self) -> None:
        adapter = add_log_context(logging.getLogger("mediaguard.test"), category="image")

        _, kwargs = adapter.process("msg", {"extra": {"category": "video"}})

        assert kwargs["extra"]["category"] == "video"

    def test_caller_extra_is_left_untouched(self) -> None:
        adapter = add_log_context(logging.getLogger("mediaguard.test"), file_name="a.png")
        caller_extra = {"status_code": 413}

        _, kwargs = adapter.process("msg", {"extra": caller_extra})

        assert caller_extra == {"status_code": 413}
        assert kwargs["extra"] is not caller_extra
        assert kwargs["extra"]["file_name"] == "a.png"

    def test_records_carry_context(self, caplog: pytest.LogCaptureFixture) -> None:
        logger = logging.getLogger("mediaguard.test")
        with caplog.at_level(logging.INFO, logger="mediaguard.test"):
            add_log_context(logger, file_name="clip.mp4").info("checked")

        assert caplog.records[-1].file_name == "clip.mp4"


@pytest.mark.unit
class TestSetupLogging:
    @pytest.mark.parametrize(
        "name,expected",
        [("debug", logging.DEBUG), ("WARN", logging.WARNING), ("nonsense", logging.INFO)],
    )
    def test_level_lookup(self, name: str, expected: int) -> None:
        assert get_log_level_from_string(name) == expected

    def test_json_setup(self, restore_logging: None) -> None:
        setup_logging(log_level="warning", json_logs=True)
        root = logging.getLogger()

        assert root.level == logging.WARNING
        assert len(root.handlers) == 1
        assert isinstance(root.handlers[0].formatter, JSONFormatter)
        assert logging.getLogger("uvicorn.access").propagate is False

    def test_text_setup(self, restore_logging: None) -> None:
        setup_logging(log_level="debug", json_logs=False)

        assert isinstance(logging.getLogger().handlers[0].formatter, StandardFormatter)
        assert isinstance(logging.getLogger("uvicorn").handlers[0].formatter, StandardFormatter)
