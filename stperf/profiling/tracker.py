"""Per-thread ownership of call trees.

A ``ScopeTracker`` hands every thread its own ``CallTree``, created on
first use, so scopes recorded on different threads never share a cursor.
The module-level functions drive a process-wide default tracker; code
that wants isolation (tests, embedded profilers) builds its own tracker
or uses ``CallTree`` directly.

Example usage:
    begin_scope("frame")
    update()
    end_scope()
    print(render_report())
"""

import threading
from typing import Any

import click

from ..config import ProfilerConfig, load_config
from ..errors import StackImbalanceError
from ..format import FormattingOptions, get_format
from ..perf_logging import LogCategory, get_category_logger
from ..reporter import render
from .timing import Clock
from .tree import CallNode, CallTree

logger = get_category_logger(LogCategory.TRACKER)


class ScopeTracker:
    """Owns one call tree per thread.

    Attributes:
        config: Settings controlling recording and report formatting.
    """

    def __init__(self, config: ProfilerConfig | None = None, clock: Clock | None = None):
        self._config = config
        self._clock = clock
        self._local = threading.local()

    @property
    def config(self) -> ProfilerConfig:
        if self._config is None:
            self._config = load_config()
        return self._config

    @config.setter
    def config(self, value: ProfilerConfig) -> None:
        self._config = value

    @property
    def enabled(self) -> bool:
        return self.config.enabled

    def current_tree(self) -> CallTree:
        """Return the calling thread's tree, creating it on first use."""
        tree = getattr(self._local, "tree", None)
        if tree is None:
            tree = CallTree(clock=self._clock)
            self._local.tree = tree
            logger.debug(f"Created call tree for {threading.current_thread().name}")
        return tree

    def begin_scope(self, name: str) -> CallNode | None:
        """Start timing ``name`` inside the innermost open scope."""
        if not self.enabled:
            return None
        return self.current_tree().enter(name)

    def end_scope(self, name: str | None = None) -> CallNode | None:
        """End the innermost open scope.

        Raises:
            StackImbalanceError: If no scope is open, or ``name`` is given
                and is not the innermost open scope.
        """
        if not self.enabled:
            return None
        tree = self.current_tree()
        try:
            return tree.exit(name)
        except StackImbalanceError as e:
            logger.error(
                e.message,
                extra={"region": name, "depth": tree.depth},
            )
            raise

    def reset_current_thread(self) -> None:
        """Discard everything recorded on the calling thread."""
        self.current_tree().reset()
        logger.debug(f"Reset call tree for {threading.current_thread().name}")

    def render_report(
        self, options: FormattingOptions | None = None, decimals: int | None = None
    ) -> str:
        """Render the calling thread's tree.

        Args:
            options: Glyph set; defaults to the configured format.
            decimals: ms/loop decimals; defaults to the configured value.

        Raises:
            RenderWhileOpenError: If a scope is still open.
        """
        if options is None:
            options = get_format(self.config.format)
        if decimals is None:
            decimals = self.config.decimals
        return render(self.current_tree(), options, decimals)

    def print_report(
        self, options: FormattingOptions | None = None, decimals: int | None = None
    ) -> None:
        """Write the report to stdout."""
        click.echo(self.render_report(options, decimals), nl=False)

    def snapshot(self) -> dict[str, Any]:
        """JSON-serializable view of the calling thread's tree."""
        return self.current_tree().to_dict()


_default_tracker = ScopeTracker()


def get_tracker() -> ScopeTracker:
    """Return the process-wide default tracker."""
    return _default_tracker


def current_tree() -> CallTree:
    return _default_tracker.current_tree()


def begin_scope(name: str) -> CallNode | None:
    """Start timing ``name`` in the current thread's tree."""
    return _default_tracker.begin_scope(name)


def end_scope(name: str | None = None) -> CallNode | None:
    """End the most recently started scope in the current thread's tree."""
    return _default_tracker.end_scope(name)


def reset_current_thread() -> None:
    """Clear the current thread's tree."""
    _default_tracker.reset_current_thread()


def render_report(
    options: FormattingOptions | None = None, decimals: int | None = None
) -> str:
    """Render the current thread's tree as text."""
    return _default_tracker.render_report(options, decimals)


def print_report(
    options: FormattingOptions | None = None, decimals: int | None = None
) -> None:
    """Print the current thread's report to stdout."""
    _default_tracker.print_report(options, decimals)
