"""Structured handler logging utilities.

Responsibilities:
- Emit concise, deterministic event lines for each handler invocation.
- Route output through `loguru` without disturbing sinks the host installed.
"""

from __future__ import annotations

import sys
from typing import TextIO

from loguru import logger as _loguru_logger


def _sanitize_context_value(value: object) -> str:
    """Reduce a context value to one token safe to grep in host logs."""

    raw = str(value).strip()
    if not raw:
        return "none"
    return "".join(
        character if character.isalnum() or character in {"-", "_", ".", ":", "/"} else "_"
        for character in raw
    )


def _format_context(context: dict[str, object]) -> str:
    """Render event context as `key=value` pairs sorted by key."""

    if not context:
        return ""
    tokens = [
        f"{key}={_sanitize_context_value(context[key])}"
        for key in sorted(context.keys())
    ]
    return " " + " ".join(tokens)


class HandlerLogger:
    """Emit deterministic event lines for handler activity.

    Each instance owns one loguru sink and only its own events reach it.
    """

    def __init__(self, sink: TextIO | None = None, level: str = "INFO") -> None:
        """Attach a message-only loguru sink scoped to this logger."""

        self._sink = sink or sys.stderr
        sink_key = id(self)
        self._logger = _loguru_logger.bind(handler_sink=sink_key)
        self._sink_id = _loguru_logger.add(
            self._sink,
            format="{message}",
            level=level,
            colorize=False,
            filter=lambda record: record["extra"].get("handler_sink") == sink_key,
        )

    def close(self) -> None:
        """Detach this logger's sink from loguru."""

        _loguru_logger.remove(self._sink_id)

    def _emit(self, level: str, event: str, handler: str, **context: object) -> None:
        """Emit one structured handler log line."""

        line = f"[handler] level={level} handler={handler} event={event}{_format_context(context)}"
        self._logger.log(level, line)

    def log_skip(self, handler: str, reason: str) -> None:
        """Emit an event for an invocation the handler does not apply to."""

        self._emit("INFO", "skip", handler, reason=reason)

    def log_complete(self, handler: str, **context: object) -> None:
        """Emit a handler-complete event with summary counters."""

        self._emit("INFO", "complete", handler, **context)

    def log_failure(self, handler: str, error_type: str) -> None:
        """Emit a handler-failure event without record payload details."""

        self._emit("ERROR", "failure", handler, error_type=error_type)
