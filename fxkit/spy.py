"""A logger that records entries for inspection in tests."""

from __future__ import annotations

import json
from typing import Any

from fxkit.fxlog import Entry, encode_fields


class Spy:
    """Captures every logged entry."""

    def __init__(self) -> None:
        self._entries: list[Entry] = []

    def log(self, entry: Entry) -> None:
        """Record an entry."""
        self._entries.append(entry)

    def messages(self) -> list[Entry]:
        """Return a copy of the captured entries."""
        return list(self._entries)

    def __str__(self) -> str:
        lines = []
        for entry in self._entries:
            line = entry.message
            line += "".join(f"\t{item.key}: {item.value}" for item in entry.fields)
            if entry.stack:
                line += f"\t{json.dumps(entry.stack)}"
            lines.append(line + "\n")
        return "".join(lines)

    def fields(self) -> list[tuple[str, Any]]:
        """Return the encoded fields of all captured entries, without stacks."""
        return [pair for entry in self._entries for pair in encode_fields(entry.fields, "")]

    def reset(self) -> None:
        """Forget all captured entries."""
        self._entries.clear()