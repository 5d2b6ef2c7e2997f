"""Measurement core: stopwatch and call-tree aggregation.

- **timing**: ``Timer`` stopwatch
- **tree**: ``CallNode`` and ``CallTree`` with enter/exit/reset
- **tracker**: per-thread ``ScopeTracker`` and module-level helpers
- **guard**: ``measure`` context manager and ``@measured`` decorator

``tracker`` and ``guard`` depend on the reporter and are imported from
their own modules (or from the top-level ``stperf`` package).
"""

from .timing import Timer
from .tree import CallNode, CallTree

__all__ = ["Timer", "CallNode", "CallTree"]
