"""Ordered start and stop hooks for an application."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from fxkit.fxlog import Field, Logger, info
from fxkit.reflection import caller

HookCallback = Callable[[Any], None]


@dataclass(frozen=True)
class Hook:
    """A pair of start and stop callbacks, either of which may be missing.

    Each callback receives the context passed to ``start`` or ``stop`` and
    signals failure by raising. ``caller`` names the code that registered the
    hook and is filled in by ``Lifecycle.append``.
    """

    on_start: HookCallback | None = None
    on_stop: HookCallback | None = None
    caller: str = ""


class Lifecycle:
    """Coordinates application start and stop hooks."""

    def __init__(self, logger: Logger) -> None:
        self._logger = logger
        self._hooks: list[Hook] = []
        self._num_started = 0

    def append(self, hook: Hook) -> None:
        """Register a hook, recording who registered it."""
        self._hooks.append(replace(hook, caller=caller()))

    def start(self, ctx: Any = None) -> None:
        """Run every start callback in order, stopping at the first that raises."""
        for hook in self._hooks:
            if hook.on_start is not None:
                info("starting", Field("caller", hook.caller)).write(self._logger)
                hook.on_start(ctx)
            self._num_started += 1

    def stop(self, ctx: Any = None) -> None:
        """Run the stop callbacks of successfully started hooks in reverse order.

        Every stop callback runs even if an earlier one fails. A single failure
        is re-raised as is; several are raised together as an ``ExceptionGroup``.
        """
        errors: list[Exception] = []
        while self._num_started > 0:
            hook = self._hooks[self._num_started - 1]
            self._num_started -= 1
            if hook.on_stop is None:
                continue
            info("stopping", Field("caller", hook.caller)).write(self._logger)
            try:
                hook.on_stop(ctx)
            except Exception as exc:  # best-effort cleanup keeps going
                errors.append(exc)
        if len(errors) == 1:
            raise errors[0]
        if errors:
            raise ExceptionGroup("lifecycle stop failed", errors)