"""Call-stack capture and formatting."""

from __future__ import annotations

import os
import re
import sys
from dataclasses import dataclass
from functools import lru_cache
from urllib.parse import unquote_plus

_DEFAULT_CALLERS_DEPTH = 8
_PACKAGE_PREFIX = "fxkit"
_VENDOR_RE = re.compile(r"^.*?/vendor/")


@dataclass(frozen=True)
class Frame:
    """A single frame of the call stack."""

    function: str = ""
    file: str = ""
    line: int = 0

    def __str__(self) -> str:
        text = self.function
        if self.file:
            if text:
                text += " "
            location = self.file
            if self.line > 0:
                location += f":{self.line}"
            text += f"({location})"
        return text or "unknown"


class Stack(list):
    """A list of call frames, innermost first."""

    def __str__(self) -> str:
        return "; ".join(str(frame) for frame in self)

    def format_multiline(self) -> str:
        """Render one function per line, each followed by an indented location."""
        return "".join(f"{frame.function}\n\t{frame.file}:{frame.line}\n" for frame in self)

    def caller_name(self) -> str:
        """Return the first function in the stack that is not part of this package."""
        for frame in self:
            if not should_ignore_frame(frame):
                return frame.function
        return "n/a"


def sanitize(function: str) -> str:
    """Undo URL escaping in a function name and shorten vendored paths."""
    function = unquote_plus(function)
    return _VENDOR_RE.sub("vendor/", function, count=1)


def _is_test_file(path: str) -> bool:
    name = os.path.basename(path)
    return name.endswith("_test.py") or (name.startswith("test_") and name.endswith(".py"))


def should_ignore_frame(frame: Frame) -> bool:
    """Tell whether a frame belongs to this package's own code."""
    if _is_test_file(frame.file):
        return False
    if not frame.function.startswith(_PACKAGE_PREFIX):
        return False
    rest = frame.function[len(_PACKAGE_PREFIX):]
    return rest[:1] in (".", "/")


@lru_cache(maxsize=512)
def _module_name(path: str) -> str:
    """Derive a dotted module name from a source file path."""
    if not path or path.startswith("<"):
        return ""
    directory, filename = os.path.split(os.path.abspath(path))
    stem, ext = os.path.splitext(filename)
    if ext not in (".py", ".pyc", ".pyw"):
        return ""
    parts = [] if stem == "__init__" else [stem]
    while directory and os.path.isfile(os.path.join(directory, "__init__.py")):
        directory, package = os.path.split(directory)
        parts.insert(0, package)
        if not package:
            break
    return ".".join(part for part in parts if part)


def caller_stack(skip: int = 0, depth: int = 0) -> Stack:
    """Capture up to ``depth`` frames of the caller's stack, skipping ``skip`` frames.

    A depth of zero or less means the default depth of 8.
    """
    if depth <= 0:
        depth = _DEFAULT_CALLERS_DEPTH
    try:
        frame = sys._getframe(skip + 1)
    except ValueError:
        return Stack()

    result = Stack()
    while frame is not None and len(result) < depth:
        code = frame.f_code
        module = _module_name(code.co_filename)
        qualname = code.co_qualname
        name = f"{module}.{qualname}" if module else qualname
        result.append(Frame(function=sanitize(name), file=code.co_filename, line=frame.f_lineno))
        frame = frame.f_back
    return result