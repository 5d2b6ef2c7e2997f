"""Scope guards that end their scope however the block is left.

- ``measure(name)`` context manager for code blocks
- ``@measured`` decorator for whole functions
"""

import functools
from collections.abc import Callable
from typing import Any, ParamSpec, TypeVar

from .tracker import ScopeTracker, get_tracker

P = ParamSpec("P")
T = TypeVar("T")


class ScopeGuard:
    """Context manager that begins a scope on entry and ends it on exit.

    The scope is ended exactly once, also when the block raises; the
    exception is never suppressed.

    Example:
        >>> with measure("physics"):
        ...     step_world()
    """

    def __init__(self, name: str, tracker: ScopeTracker | None = None):
        self.name = name
        self.tracker = tracker or get_tracker()
        self._active = False
        self._used = False

    def __enter__(self) -> "ScopeGuard":
        if self._used:
            raise RuntimeError(f"scope guard {self.name!r} cannot be entered twice")
        self._used = True
        self._active = self.tracker.begin_scope(self.name) is not None
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: Any,
    ) -> None:
        if self._active:
            self._active = False
            self.tracker.end_scope(self.name)


def measure(name: str, tracker: ScopeTracker | None = None) -> ScopeGuard:
    """Create a guard timing ``name`` in the current thread's tree."""
    return ScopeGuard(name, tracker)


def measured(
    name: str | None = None, tracker: ScopeTracker | None = None
) -> Callable[[Callable[P, T]], Callable[P, T]]:
    """Decorator timing every call of a function as one scope.

    Args:
        name: Scope name (defaults to the function's qualified name).
        tracker: Tracker to record into (defaults to the global one).

    Example:
        >>> @measured("load level")
        ... def load(path):
        ...     ...
    """

    def decorator(func: Callable[P, T]) -> Callable[P, T]:
        scope_name = name or func.__qualname__

        @functools.wraps(func)
        def wrapper(*args: P.args, **kwargs: P.kwargs) -> T:
            with ScopeGuard(scope_name, tracker):
                return func(*args, **kwargs)

        return wrapper

    return decorator
