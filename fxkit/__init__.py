"""Lifecycle hooks, call-stack introspection, structured logging and write sinks."""

__version__ = "1.14.0.dev0"

__all__ = ["fxlog", "lifecycle", "reflection", "spy", "stack", "writers"]