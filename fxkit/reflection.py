"""Introspection helpers for constructors and callers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, get_args, get_origin

from fxkit.stack import caller_stack, sanitize

_MISSING = object()


class Out:
    """Marker base for result objects whose public fields are provided separately.

    A field may carry a name by annotating it as ``Annotated[T, {"name": "..."}]``.
    Fields whose names start with an underscore are skipped.
    """


def _type_name(tp: Any) -> str:
    if tp is None or tp is type(None):
        return "None"
    if isinstance(tp, str):
        return tp
    if isinstance(tp, type):
        module = tp.__module__
        if module == "builtins":
            return tp.__name__
        return f"{module.rsplit('.', 1)[-1]}.{tp.__name__}"
    return str(tp).removeprefix("typing.")


def _annotated_name(metadata: tuple) -> str:
    for item in metadata:
        if isinstance(item, Mapping) and "name" in item:
            return str(item["name"])
    return ""


def _is_error(tp: Any) -> bool:
    return isinstance(tp, type) and issubclass(tp, BaseException)


def _class_fields(cls: type) -> dict[str, Any]:
    """Collect annotated fields of a class and its bases, base fields first."""
    fields: dict[str, Any] = {}
    for klass in reversed(cls.__mro__):
        if klass is object:
            continue
        annotations = getattr(klass, "__annotations__", None)
        if isinstance(annotations, Mapping):
            fields.update(annotations)
    return fields


def _traverse(tp: Any, name: str, out: list[str]) -> None:
    if get_origin(tp) is Annotated:
        name = _annotated_name(tp.__metadata__) or name
        tp = tp.__origin__

    if _is_error(tp):
        return

    if isinstance(tp, type) and issubclass(tp, Out) and tp is not Out:
        for field_name, field_type in _class_fields(tp).items():
            if field_name.startswith("_"):
                continue
            _traverse(field_type, "", out)
        return

    type_name = _type_name(tp)
    out.append(f"{type_name}:{name}" if name else type_name)


def _return_annotation(fn: Any) -> Any:
    annotations = getattr(fn, "__annotations__", None)
    if not isinstance(annotations, Mapping):
        call = getattr(type(fn), "__call__", None)
        annotations = getattr(call, "__annotations__", None)
    if not isinstance(annotations, Mapping) or "return" not in annotations:
        return _MISSING
    return annotations["return"]


def return_types(t: Any) -> list[str]:
    """Return the names of the types a constructor provides.

    Exceptions are skipped, ``Out`` results are expanded into their fields and
    anything that is not callable yields an empty list.
    """
    if not callable(t):
        return []
    annotation = t if isinstance(t, type) else _return_annotation(t)
    if annotation is _MISSING or annotation is None or annotation is type(None):
        return []
    if annotation == "None":
        return []

    items = get_args(annotation) if get_origin(annotation) is tuple else (annotation,)
    result: list[str] = []
    for item in items:
        if item is Ellipsis:
            continue
        _traverse(item, "", result)
    return result


def func_name(fn: Any) -> str:
    """Return a display name for a callable, or ``str(fn)`` for anything else."""
    if not callable(fn):
        return str(fn)
    module = getattr(fn, "__module__", None) or type(fn).__module__
    qualname = getattr(fn, "__qualname__", None) or type(fn).__qualname__
    name = f"{module}.{qualname}" if module else qualname
    return f"{sanitize(name)}()"


def caller() -> str:
    """Return the name of the first function outside this package that led here."""
    return caller_stack(1, 0).caller_name()