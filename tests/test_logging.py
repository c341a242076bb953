"""Tests for the PprintLogger and setup_logging functionality.

This module verifies:
- pprint parameter defaults to True and formats complex objects
- pprint=False uses simple string conversion
- Pydantic models (spans, candidates) use model_dump_json()
- Delegation to the underlying logger works
- setup_logging names loggers and does not duplicate handlers
"""

import logging
from io import StringIO

from storylinks.document import MentionSpan
from storylinks.entity import MentionKind
from storylinks.logging import PprintLogger, setup_logging


def _capture(name: str) -> tuple[PprintLogger, StringIO]:
    logger = logging.getLogger(name)
    logger.setLevel(logging.DEBUG)
    logger.handlers.clear()
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s - %(message)s"))
    logger.addHandler(handler)
    return PprintLogger(logger), stream


class TestPprintLogger:
    """Tests for PprintLogger formatting and delegation."""

    def test_pprint_defaults_to_true(self) -> None:
        logger, stream = _capture("test_defaults")

        logger.info({"candidates": ["Elara", "Thorin"], "book": {"id": "b1"}})

        output = stream.getvalue()
        assert "'candidates'" in output
        assert "'Thorin'" in output

    def test_pprint_false_uses_str(self) -> None:
        logger, stream = _capture("test_str")

        logger.info({"key": "value"}, pprint=False)

        assert "{'key': 'value'}" in stream.getvalue()

    def test_pydantic_model_uses_model_dump_json(self) -> None:
        logger, stream = _capture("test_model")
        span = MentionSpan(text="Elara", target_kind=MentionKind.CHARACTER, target_id="c1", title="View character: Elara")

        logger.debug(span)

        output = stream.getvalue()
        assert '"target_kind": "character"' in output
        assert '"target_id": "c1"' in output

    def test_all_levels(self) -> None:
        logger, stream = _capture("test_levels")

        logger.debug("d")
        logger.info("i")
        logger.warning("w")
        logger.error("e")

        output = stream.getvalue()
        for level in ("DEBUG", "INFO", "WARNING", "ERROR"):
            assert level in output

    def test_exception_logging(self) -> None:
        logger, stream = _capture("test_exception")

        try:
            raise ValueError("scan failed")
        except ValueError:
            logger.exception({"chapter": "ch-1"})

        output = stream.getvalue()
        assert "chapter" in output
        assert "scan failed" in output

    def test_delegates_to_underlying_logger(self) -> None:
        logger, _ = _capture("test_delegate")

        logger.setLevel(logging.WARNING)

        assert logging.getLogger("test_delegate").level == logging.WARNING
        assert logger.handlers == logging.getLogger("test_delegate").handlers


class TestSetupLogging:
    """Tests for setup_logging function."""

    def test_returns_pprint_logger(self) -> None:
        assert isinstance(setup_logging(name="storylinks.test"), PprintLogger)

    def test_uses_caller_name(self) -> None:
        def my_render_function() -> PprintLogger:
            return setup_logging()

        assert my_render_function().name == "my_render_function"

    def test_does_not_duplicate_handlers(self) -> None:
        first = setup_logging(level=logging.DEBUG, name="storylinks.dup")
        second = setup_logging(level=logging.DEBUG, name="storylinks.dup")

        assert first._logger is second._logger  # pylint: disable=protected-access
        assert len(second.handlers) == 1
        assert second.level == logging.DEBUG
