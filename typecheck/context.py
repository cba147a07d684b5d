"""
Error-collection context and validation configuration.

Every check() call receives an ErrorContext holding the collected errors
and the field path of the value under inspection. parse() installs a fresh
context in a ContextVar for the duration of one call, so each thread and
asyncio task has its own slot and nested parse() calls stay isolated.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from typing import Iterator

from .types import ParseError, PathSegment, SchemaDepthError

logger = logging.getLogger(__name__)

DEFAULT_MAX_DEPTH = 256

_max_depth: ContextVar[int] = ContextVar("max_depth", default=DEFAULT_MAX_DEPTH)
_active_context: ContextVar[ErrorContext | None] = ContextVar(
    "active_context", default=None
)


@dataclass
class ErrorContext:
    """Mutable error list and field path for one top-level validation."""

    errors: list[ParseError] = field(default_factory=list)
    path: list[PathSegment] = field(default_factory=list)
    max_depth: int = DEFAULT_MAX_DEPTH
    depth: int = 0

    def add_error(self, message: str) -> None:
        self.errors.append(ParseError(tuple(self.path), message))

    @contextmanager
    def at(self, segment: PathSegment) -> Iterator[None]:
        """Push a key or index onto the path while checking a child."""
        self.path.append(segment)
        try:
            yield
        finally:
            self.path.pop()

    @contextmanager
    def descend(self) -> Iterator[None]:
        """Track nesting depth, raising SchemaDepthError past max_depth."""
        if self.depth >= self.max_depth:
            logger.warning(
                "Validation exceeded max depth %d at %r", self.max_depth, self.path
            )
            raise SchemaDepthError(
                tuple(self.path), f"maximum depth of {self.max_depth} exceeded"
            )
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def mark(self) -> int:
        """Snapshot of the error count, for rollback()."""
        return len(self.errors)

    def rollback(self, mark: int) -> None:
        del self.errors[mark:]


def get_max_depth() -> int:
    """Depth limit applied to contexts created in the current scope."""
    return _max_depth.get()


def new_context() -> ErrorContext:
    return ErrorContext(max_depth=get_max_depth())


def active_context() -> ErrorContext | None:
    """
    The context installed by the innermost parse() call, or None outside
    of parse().

    check() never writes here implicitly: only a context passed to it
    explicitly collects errors.
    """
    return _active_context.get()


@contextmanager
def error_context() -> Iterator[ErrorContext]:
    """
    Install a fresh ErrorContext, restoring the previous one on exit.

    Example:
        with error_context() as ctx:
            ok = schema.check(value, ctx)
        ctx.errors  # everything schema.check() reported
    """
    ctx = new_context()
    token = _active_context.set(ctx)
    try:
        yield ctx
    finally:
        _active_context.reset(token)


@contextmanager
def validation_context(*, max_depth: int = DEFAULT_MAX_DEPTH) -> Iterator[None]:
    """
    Context manager for validation configuration.

    Args:
        max_depth: Deepest nesting of check() calls allowed before a
                   SchemaDepthError is raised. Guards against cyclic or
                   pathologically deep input.

    Example:
        from typecheck import parse, validation_context

        with validation_context(max_depth=32):
            parse(schema, untrusted)  # SchemaDepthError past 32 levels
    """
    if max_depth < 1:
        raise ValueError(f"max_depth must be positive, got {max_depth}")
    token = _max_depth.set(max_depth)
    try:
        yield
    finally:
        _max_depth.reset(token)
