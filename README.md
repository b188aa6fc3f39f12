# fxkit

Building blocks for applications that run through an ordered start/stop
lifecycle, with structured logging and call-stack introspection to report
what happened and who registered it.

## Modules

- **`fxkit.lifecycle`**: `Hook` holds optional `on_start` and `on_stop`
  callbacks, each called with the context passed to `start` or `stop`;
  a callback signals failure by raising. `Lifecycle(logger)` collects hooks
  with `append`, which records the name of the registering function in
  `Hook.caller`.
  - `Lifecycle.start(ctx)` runs start callbacks in registration order and
    lets the first exception propagate; later hooks are not started.
  - `Lifecycle.stop(ctx)` runs the stop callbacks of every hook that
    started, in reverse order, and keeps going past failures. One failure is
    re-raised as is; several are raised together as an `ExceptionGroup`.
  - Each callback run is logged as a `"starting"` or `"stopping"` entry with
    a `caller` field.
- **`fxkit.fxlog`**: `info(msg, *fields)` and `error(msg, *fields)` build
  `Entry` values (`level`, `message`, `fields`, `stack`) with `Field`
  key/value pairs; `f(key, value)` and `err(exc)` build fields.
  `Entry.write(logger)` hands the entry to any object with a `log(entry)`
  method (the `Logger` protocol). `Entry.with_stack` returns a copy carrying
  a stack string. `default_logger(ws)` returns a `JsonLogger`, which writes
  one JSON object per entry (`level`, `ts`, `msg`, then the fields, then
  `stack` if set) as UTF-8 bytes to `ws.write`. `encode_fields` turns fields
  into key/value pairs, rendering exceptions as their message.
- **`fxkit.spy`**: `Spy` is a logger that keeps every entry. `messages()`
  returns a copy of them, `fields()` their encoded fields, `reset()` forgets
  them, and `str(spy)` renders one line per entry: the message, then
  `\tkey: value` for each field, then the quoted stack if any.
- **`fxkit.stack`**: `caller_stack(skip, depth)` captures up to `depth`
  frames (8 when `depth` is zero or less) of the caller's stack as a `Stack`
  of `Frame(function, file, line)`. `str(stack)` joins frames with `"; "`;
  `Stack.format_multiline()` gives one function per line followed by an
  indented `file:line`. `Stack.caller_name()` returns the first function not
  belonging to `fxkit` itself (frames in test files always count), or
  `"n/a"`. `sanitize` undoes URL escaping in a name and shortens anything up
  to `/vendor/` to `vendor/`; `should_ignore_frame` is the test used by
  `caller_name`.
- **`fxkit.reflection`**: `return_types(fn)` lists the names of the types a
  callable's return annotation provides: tuple returns are split, exception
  types are skipped, and subclasses of the `Out` marker are expanded into
  their public annotated fields (a field annotated
  `Annotated[T, {"name": "n"}]` is reported as `T:n`). Non-callables give an
  empty list. `func_name(fn)` gives `module.qualname()` for a callable and
  `str(fn)` otherwise. `caller()` names the first function outside `fxkit`
  that led to the call.
- **`fxkit.writers`**: `WriteSyncer(t)` forwards written data to
  `t.logf("%s", text)`; `write_syncer_from_printer(printer)` returns a
  `PrinterWriteSyncer` that forwards it to `printer.printf(text)`. Both
  accept bytes or str, return the length written, and have a no-op `sync()`.
  `VERSION` holds the library version string.

## Installation

```
pip install fxkit
```

## Example

```python
from fxkit.lifecycle import Hook, Lifecycle
from fxkit.spy import Spy

log = Spy()
lc = Lifecycle(log)

lc.append(Hook(
    on_start=lambda ctx: print("server up"),
    on_stop=lambda ctx: print("server down"),
))

lc.start(None)
lc.stop(None)

print(log)   # a "starting" and a "stopping" line, each with its caller
```

Writing JSON lines instead (the logger writes bytes):

```python
import sys
from fxkit.fxlog import default_logger, f, info

logger = default_logger(sys.stdout.buffer)
info("providing", f("type", "*bytes.Buffer")).write(logger)
```

## What it does not do

fxkit has no dependency-injection container and no application object: it
does not resolve constructors, invoke functions with their dependencies,
populate targets, supply values or handle shutdown signals. It provides the
lifecycle, logging and introspection pieces such a container would use, and
has no command-line interface.

## Running the tests

```
pip install -e .[test]
pytest
```