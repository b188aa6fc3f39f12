"""Structured log entries and a JSON-lines logger."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, field, replace
from enum import IntEnum
from typing import Any, Protocol, runtime_checkable


class Level(IntEnum):
    """Severity of a log entry."""

    INFO = 0
    ERROR = 1


@dataclass(frozen=True)
class Field:
    """A key/value pair attached to a log entry."""

    key: str
    value: Any


@dataclass
class Entry:
    """A log entry waiting to be written to a logger."""

    level: Level = Level.INFO
    message: str = ""
    fields: list[Field] = field(default_factory=list)
    stack: str = ""

    def with_stack(self, stack: str) -> Entry:
        """Return a copy of this entry carrying ``stack``."""
        return replace(self, fields=list(self.fields), stack=stack)

    def write(self, logger: Logger) -> None:
        """Hand this entry to ``logger``."""
        logger.log(self)


@runtime_checkable
class Logger(Protocol):
    """Anything that accepts log entries."""

    def log(self, entry: Entry) -> None:
        """Record ``entry``."""


def err(value: BaseException) -> Field:
    """Build the conventional ``error`` field."""
    return Field("error", value)


def f(key: str, value: Any) -> Field:
    """Build a field."""
    return Field(key, value)


def encode_fields(fields: list[Field], stack: str) -> list[tuple[str, Any]]:
    """Turn fields into encoded key/value pairs, appending ``stack`` if set."""
    encoded = [
        (item.key, str(item.value) if isinstance(item.value, BaseException) else item.value)
        for item in fields
    ]
    if stack:
        encoded.append(("stack", stack))
    return encoded


class JsonLogger:
    """Writes each entry as one JSON object per line to a write syncer."""

    def __init__(self, ws: Any) -> None:
        self._ws = ws

    def log(self, entry: Entry) -> None:
        record: dict[str, Any] = {
            "level": entry.level.name.lower(),
            "ts": time.time(),
            "msg": entry.message,
        }
        record.update(encode_fields(entry.fields, entry.stack))
        self._ws.write((json.dumps(record, default=str) + "\n").encode("utf-8"))


def default_logger(ws: Any) -> Logger:
    """Build a logger that writes JSON lines to ``ws``, an object with ``write(bytes)``."""
    return JsonLogger(ws)


def info(msg: str, *args: Field) -> Entry:
    """Build an info-level entry."""
    return Entry(level=Level.INFO, message=msg, fields=list(args))


def error(msg: str, *args: Field) -> Entry:
    """Build an error-level entry."""
    return Entry(level=Level.ERROR, message=msg, fields=list(args))