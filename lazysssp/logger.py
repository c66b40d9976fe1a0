"""Lightweight logging helpers for optional structured output."""

from __future__ import annotations

import json
import sys
from typing import Any, Dict, Protocol


class Logger(Protocol):
    """Protocol for minimal logger implementations."""

    def info(self, event: str, **fields: Any) -> None:
        """Emit an ``INFO``-level event."""
        ...

    def debug(self, event: str, **fields: Any) -> None:
        """Emit a ``DEBUG``-level event."""
        ...

    def warning(self, event: str, **fields: Any) -> None:
        """Emit a ``WARNING``-level event."""
        ...


class NoopLogger:
    """Logger that discards all events."""

    def info(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def debug(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return

    def warning(self, event: str, **fields: Any) -> None:  # pragma: no cover - noop
        return


class StdLogger:
    """Minimal logger writing ``key=value`` lines or JSON objects."""

    _levels: Dict[str, int] = {"debug": 10, "info": 20, "warning": 30}

    def __init__(
        self,
        level: str = "warning",
        json_fmt: bool = False,
        stream: Any | None = None,
    ) -> None:
        if level not in self._levels:
            raise ValueError(f"unknown log level {level!r}")
        self.level = level
        self.json_fmt = json_fmt
        self.stream = stream or sys.stderr

    def enabled(self, level: str) -> bool:
        """Return ``True`` if events at ``level`` would be written."""
        return self._levels[level] >= self._levels[self.level]

    def log(self, level: str, event: str, **fields: Any) -> None:
        """Emit a log ``event`` at ``level`` with additional ``fields``."""
        if not self.enabled(level):
            return
        if self.json_fmt:
            obj: Dict[str, Any] = {"level": level, "event": event}
            obj.update(fields)
            self.stream.write(json.dumps(obj, default=str) + "\n")
        else:
            kv = " ".join(f"{k}={v}" for k, v in fields.items())
            msg = f"{level} {event} {kv}".rstrip()
            self.stream.write(msg + "\n")

    def info(self, event: str, **fields: Any) -> None:
        self.log("info", event, **fields)

    def debug(self, event: str, **fields: Any) -> None:
        self.log("debug", event, **fields)

    def warning(self, event: str, **fields: Any) -> None:
        self.log("warning", event, **fields)
