"""stperf: a call-tree profiler for explicitly marked scopes.

Mark the scopes you care about, run your loop, print the tree:

    import stperf

    for _ in range(2):
        with stperf.measure("main"):
            for _ in range(2):
                with stperf.measure("inner operations"):
                    process()
            process()

    stperf.print_report()

    # ╶──┬╼ main                 - 100.0%, 300 ms/loop, 2 samples
    #    ├──┬╼ inner operations  -  66.7%, 200 ms/loop, 4 samples
    #    │  └───╼ processing     - 100.0%, 200 ms/loop, 4 samples
    #    └───╼ processing        -  33.3%, 100 ms/loop, 2 samples

Scopes are recorded per thread. Percentages are shares of the parent
scope's time; ms/loop is time per call of the top-level scope; samples
count the calls merged into each row. For real-time loops, print and
``reset_current_thread()`` on an interval to keep samples fresh.
"""

from .config import ProfilerConfig, load_config
from .errors import (
    ConfigurationError,
    ErrorCategory,
    ProfilerError,
    RenderWhileOpenError,
    StackImbalanceError,
)
from .format import (
    COMPATIBLE,
    DEBUGGING,
    DOUBLED,
    FORMATS,
    STREAMLINED,
    STREAMLINED_ROUNDED,
    FormattingOptions,
    get_format,
)
from .profiling.guard import ScopeGuard, measure, measured
from .profiling.timing import Timer
from .profiling.tracker import (
    ScopeTracker,
    begin_scope,
    current_tree,
    end_scope,
    get_tracker,
    print_report,
    render_report,
    reset_current_thread,
)
from .profiling.tree import CallNode, CallTree
from .reporter import render

__version__ = "0.4.0"

__all__ = [
    # Recording
    "begin_scope",
    "end_scope",
    "reset_current_thread",
    "current_tree",
    "measure",
    "measured",
    "ScopeGuard",
    "ScopeTracker",
    "get_tracker",
    # Reporting
    "render",
    "render_report",
    "print_report",
    "FormattingOptions",
    "FORMATS",
    "STREAMLINED",
    "STREAMLINED_ROUNDED",
    "COMPATIBLE",
    "DOUBLED",
    "DEBUGGING",
    "get_format",
    # Core types
    "Timer",
    "CallNode",
    "CallTree",
    # Configuration
    "ProfilerConfig",
    "load_config",
    # Errors
    "ProfilerError",
    "ErrorCategory",
    "StackImbalanceError",
    "RenderWhileOpenError",
    "ConfigurationError",
]
