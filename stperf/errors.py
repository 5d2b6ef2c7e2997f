"""Structured profiler errors with recovery suggestions.

Every fault the profiler raises is a usage error in the calling code,
so errors carry a category, a message and an actionable suggestion
rather than being retried or swallowed.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ErrorCategory(Enum):
    """Categories of profiler errors."""

    STACK = "stack"  # Unbalanced begin/end calls
    RENDER = "render"  # Report requested at the wrong time
    CONFIGURATION = "configuration"  # Invalid config or format name


@dataclass
class ProfilerError(Exception):
    """Base class for structured profiler errors.

    Attributes:
        category: Error category for grouping.
        message: Human-readable error message.
        suggestion: Optional actionable recovery suggestion.
        details: Optional additional details dict.
        exit_code: Exit code the CLI uses when this error terminates it.
    """

    category: ErrorCategory
    message: str
    suggestion: str | None = None
    details: dict[str, Any] | None = field(default_factory=dict)
    exit_code: int = 1

    def __post_init__(self) -> None:
        """Initialize the exception with the message."""
        super().__init__(self.message)

    def format(self, use_color: bool = True) -> str:
        """Format the error for display.

        Args:
            use_color: Whether to include ANSI color codes.

        Returns:
            Formatted error string with suggestion if available.
        """
        red = "\033[91m" if use_color else ""
        cyan = "\033[96m" if use_color else ""
        dim = "\033[2m" if use_color else ""
        reset = "\033[0m" if use_color else ""

        lines = [f"{red}Error:{reset} {self.message}"]

        if self.suggestion:
            lines.append(f"{cyan}Suggestion:{reset} {self.suggestion}")

        if self.details:
            for key, value in self.details.items():
                lines.append(f"{dim}  {key}: {value}{reset}")

        return "\n".join(lines)

    def __str__(self) -> str:
        """Return the formatted error message."""
        return self.format(use_color=False)


class StackImbalanceError(ProfilerError):
    """A scope was ended that is not the innermost open scope."""

    def __init__(self, expected: str | None = None, open_path: list[str] | None = None):
        open_path = open_path or []
        if not open_path:
            message = "end_scope() called with no open scope"
        else:
            message = (
                f"end_scope({expected!r}) does not match the innermost open "
                f"scope {open_path[-1]!r}"
            )
        super().__init__(
            category=ErrorCategory.STACK,
            message=message,
            suggestion=(
                "Scopes must end in reverse order of how they began; "
                "prefer `with stperf.measure(name):` over manual begin/end calls"
            ),
            details={"open_path": " > ".join(open_path)} if open_path else None,
        )
        self.expected = expected
        self.open_path = open_path


class RenderWhileOpenError(ProfilerError):
    """A report was requested while scopes are still being measured."""

    def __init__(self, open_path: list[str]):
        super().__init__(
            category=ErrorCategory.RENDER,
            message=f"Cannot render report: {len(open_path)} scope(s) still open",
            suggestion="Finish all open scopes or call reset_current_thread() first",
            details={"open_path": " > ".join(open_path)},
        )
        self.open_path = open_path


class ConfigurationError(ProfilerError):
    """Error in configuration file, environment or format name."""

    def __init__(
        self,
        message: str,
        config_file: str | None = None,
        suggestion: str | None = None,
    ):
        super().__init__(
            category=ErrorCategory.CONFIGURATION,
            message=message,
            suggestion=suggestion or "Check your configuration values",
            details={"config_file": config_file} if config_file else None,
            exit_code=2,
        )
