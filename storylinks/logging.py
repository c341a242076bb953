import inspect
import logging
from pprint import pformat
from typing import Any

from pydantic import BaseModel


class PprintLogger:
    """A logger wrapper that adds pprint support to standard logging methods."""

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    def _format_message(self, msg: Any, pprint: bool = True) -> str:
        """Format a message, optionally using pprint.

        Pydantic models (candidates, spans, resolved documents) are rendered
        with model_dump_json() so their fields are visible. Other complex
        objects go through pformat, and pprint=False falls back to str().
        """
        if not pprint:
            return str(msg)

        if isinstance(msg, BaseModel):
            return msg.model_dump_json(indent=2)

        return pformat(msg, width=120, depth=None)

    def debug(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        """Log a debug message with optional pprint formatting."""
        self._logger.debug(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def info(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        """Log an info message with optional pprint formatting."""
        self._logger.info(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def warning(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        """Log a warning message with optional pprint formatting."""
        self._logger.warning(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def error(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        """Log an error message with optional pprint formatting."""
        self._logger.error(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def exception(self, msg: Any, *args, pprint: bool = True, **kwargs) -> None:
        """Log an exception message with optional pprint formatting."""
        self._logger.exception(self._format_message(msg, pprint=pprint), *args, stacklevel=2, **kwargs)

    def __getattr__(self, name: str) -> Any:
        """Delegate any other attributes to the underlying logger."""
        return getattr(self._logger, name)


def setup_logging(level: int = logging.INFO, name: str | None = None) -> PprintLogger:
    """Set up logging and return a PprintLogger instance.

    The logger is named after ``name`` when given, otherwise after the
    calling function (so ``MentionPipeline.__init__`` logs as ``__init__``
    unless a name is passed).
    """
    if name is None:
        frame = inspect.currentframe().f_back  # type: ignore[union-attr]
        name = frame.f_code.co_name  # type: ignore[union-attr]
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = logging.Formatter("%(asctime)s - %(pathname)s:%(lineno)d - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    return PprintLogger(logger)
