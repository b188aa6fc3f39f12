"""Write syncers that forward output to test loggers and printers."""

from __future__ import annotations

from typing import Protocol

VERSION = "1.14.0-dev"


class TestingT(Protocol):
    """The part of a test object that accepts formatted log lines."""

    def logf(self, msg: str, *args: object) -> None:
        """Log a printf-style message."""


class Printer(Protocol):
    """Anything with a printf-style output method."""

    def printf(self, msg: str, *args: object) -> None:
        """Print a printf-style message."""


def _as_text(data: bytes | str) -> str:
    if isinstance(data, str):
        return data
    return bytes(data).decode("utf-8", errors="replace")


class WriteSyncer:
    """Sends everything written to it to a test logger."""

    __test__ = False

    def __init__(self, t: TestingT) -> None:
        self.t = t

    def write(self, data: bytes | str) -> int:
        """Log ``data`` through the test logger and report it all written."""
        self.t.logf("%s", _as_text(data))
        return len(data)

    def sync(self) -> None:
        """Nothing is buffered, so there is nothing to flush."""


class PrinterWriteSyncer:
    """Sends everything written to it to a printer."""

    def __init__(self, printer: Printer) -> None:
        self.printer = printer

    def write(self, data: bytes | str) -> int:
        """Print ``data`` and report it all written."""
        self.printer.printf(_as_text(data))
        return len(data)

    def sync(self) -> None:
        """Nothing is buffered, so there is nothing to flush."""


def write_syncer_from_printer(printer: Printer) -> PrinterWriteSyncer:
    """Wrap a printer so it can serve as a logger's output."""
    return PrinterWriteSyncer(printer)