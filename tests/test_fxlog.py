import collections
import json
from typing import Annotated

import pytest

from fxkit.fxlog import (
    Entry,
    Field,
    JsonLogger,
    Level,
    Logger,
    default_logger,
    encode_fields,
    err,
    error,
    f,
    info,
)
from fxkit.reflection import Out, func_name, return_types
from fxkit.spy import Spy

MOD = __name__.rsplit(".", 1)[-1]


class _Sink:
    def __init__(self):
        self.chunks = []

    def write(self, data):
        self.chunks.append(data)
        return len(data)

    def sync(self):
        return None

    def records(self):
        return [json.loads(chunk.decode("utf-8")) for chunk in self.chunks]


@pytest.fixture
def sink():
    return Spy()


def test_printf(sink):
    info("foo 42").write(sink)
    assert str(sink) == "foo 42\n"


def test_print_provide(sink):
    def new_ordered() -> collections.OrderedDict:
        return collections.OrderedDict()

    for rtype in return_types(new_ordered):
        info("providing", Field("type", rtype), Field("constructor", func_name(json.dumps))).write(sink)
    assert "providing" in str(sink)
    assert ("type", "collections.OrderedDict") in sink.fields()
    assert ("constructor", "json.dumps()") in sink.fields()


def test_print_supply(sink):
    for rtype in return_types(lambda: collections.OrderedDict()):
        info("supplying", Field("type", rtype)).write(sink)
    assert str(sink) == ""

    def supplier() -> collections.OrderedDict:
        return collections.OrderedDict()

    for rtype in return_types(supplier):
        info("supplying", Field("type", rtype)).write(sink)
    assert "supplying" in str(sink)
    assert ("type", "collections.OrderedDict") in sink.fields()


def test_print_expands_types_in_out(sink):
    class A:
        pass

    class B:
        pass

    class C:
        pass

    class Ret(Out):
        a: A
        b: B
        c: Annotated[C, {"name": "foo"}]

    def fn() -> Ret:
        return Ret()

    for rtype in return_types(fn):
        info("providing", Field("type", rtype), Field("constructor", func_name(fn))).write(sink)
    assert "providing" in str(sink)
    fields = sink.fields()
    assert ("type", f"{MOD}.A") in fields
    assert ("type", f"{MOD}.B") in fields
    assert ("type", f"{MOD}.C:foo") in fields


def test_print_handles_escaped_names(sink):
    def fn() -> str:
        return "Hi"

    fn.__qualname__ = "sample%2egit.new"
    for rtype in return_types(fn):
        info("providing", Field("type", rtype), Field("constructor", func_name(fn))).write(sink)
    assert "%2e" not in str(sink)
    assert ("constructor", f"{__name__}.sample.git.new()") in sink.fields()
    assert ("type", "str") in sink.fields()


def test_print_provide_invalid(sink):
    for rtype in return_types(collections.OrderedDict()):
        info("providing", Field("type", rtype)).write(sink)
    assert str(sink) == ""


def test_info_and_error_levels():
    assert info("a", f("k", 1)) == Entry(Level.INFO, "a", [Field("k", 1)])
    assert error("b") == Entry(Level.ERROR, "b", [])


def test_err_field():
    problem = ValueError("boom")
    assert err(problem) == Field("error", problem)


def test_with_stack_copies_entry():
    original = info("msg", f("k", "v"))
    stacked = original.with_stack("trace")
    assert stacked.stack == "trace"
    assert original.stack == ""
    assert stacked.message == "msg"
    assert stacked.fields == [Field("k", "v")]


def test_encode_fields():
    problem = RuntimeError("bad")
    assert encode_fields([f("a", 1), err(problem)], "") == [("a", 1), ("error", "bad")]
    assert encode_fields([], "trace") == [("stack", "trace")]


def test_default_logger_writes_json_lines():
    ws = _Sink()
    logger = default_logger(ws)
    assert isinstance(logger, JsonLogger)
    assert isinstance(logger, Logger)

    info("starting", f("caller", "app.main")).write(logger)
    error("failed", err(ValueError("nope"))).with_stack("a; b").write(logger)

    first, second = ws.records()
    assert first["level"] == "info"
    assert first["msg"] == "starting"
    assert first["caller"] == "app.main"
    assert isinstance(first["ts"], float)
    assert second["level"] == "error"
    assert second["msg"] == "failed"
    assert second["error"] == "nope"
    assert second["stack"] == "a; b"
    assert all(chunk.endswith(b"\n") for chunk in ws.chunks)