"""Render a finished call tree as an indented text report.

Each line shows a scope's share of its parent's time, its time per
top-level loop and how many samples were merged into it::

    ╶──┬╼ main                 - 100.0%, 300 ms/loop, 2 samples
       ├──┬╼ inner operations  -  66.7%, 200 ms/loop, 4 samples
       │  └───╼ processing     - 100.0%, 200 ms/loop, 4 samples
       └───╼ processing        -  33.3%, 100 ms/loop, 2 samples

Percentages are relative to the immediate parent's total time; a
top-level scope is its own reference and shows 100%. The ms/loop figure
divides a scope's total time by the sample count of its top-level
ancestor, treating each top-level call as one loop iteration.

Sibling shares add up to at most 100% below the top level only; several
top-level scopes each show 100%, so their sum exceeds it.

The name column is at least as wide as the synthetic root row
(``ending_branch`` plus ``" root"``), even when every scope name is short.
"""

from collections.abc import Iterator

from .errors import RenderWhileOpenError
from .format import STREAMLINED, FormattingOptions
from .perf_logging import LogCategory, get_category_logger
from .profiling.tree import ROOT_NAME, CallNode, CallTree

logger = get_category_logger(LogCategory.REPORT)


def percentage(node: CallNode) -> float:
    """Share of the parent's total time spent in ``node``, in percent."""
    parent = node.parent
    base = node.total_duration if parent is None or parent.is_root else parent.total_duration
    if base <= 0:
        return 0.0
    return 100.0 * node.total_duration / base


def ms_per_loop(node: CallNode, loops: int) -> float:
    """Milliseconds ``node`` took per top-level loop iteration."""
    if loops <= 0:
        return 0.0
    return node.total_duration * 1000 / loops


def _branches(
    tree: CallTree, options: FormattingOptions
) -> Iterator[tuple[CallNode, str, int]]:
    """Yield ``(node, branch, loops)`` for every node in report order."""

    def visit(node: CallNode, columns: str, loops: int) -> Iterator[tuple[CallNode, str, int]]:
        for child in node.children.values():
            last = node.is_last_child(child)
            if node.is_root:
                prefix = options.starting_branch
                child_columns = "   "
                child_loops = child.call_count
            else:
                prefix = columns + (options.turning_branch if last else options.branching_branch)
                child_columns = columns + ("   " if last else f"{options.continuing_branch}  ")
                child_loops = loops
            tail = options.turning_ending_branch if child.children else options.ending_branch
            yield child, f"{prefix}{tail} {child.name}", child_loops
            yield from visit(child, child_columns, child_loops)

    yield from visit(tree.root, "", 0)


def render(
    tree: CallTree, options: FormattingOptions = STREAMLINED, decimals: int = 0
) -> str:
    """Render ``tree`` as a text report.

    Args:
        tree: Call tree with no open scopes.
        options: Glyph set for the tree prefixes.
        decimals: Decimal places on the ms/loop figure.

    Returns:
        The report, one newline-terminated line per node; empty for an
        empty tree.

    Raises:
        RenderWhileOpenError: If any scope is still open.
    """
    if not tree.is_idle:
        raise RenderWhileOpenError(tree.open_path())

    rows = list(_branches(tree, options))
    if not rows:
        return ""

    width = max(
        len(f"{options.ending_branch} {ROOT_NAME}"),
        *(len(branch) for _, branch, _ in rows),
    ) + 1
    lines = []
    for node, branch, loops in rows:
        if node.call_count == 0:
            lines.append(f" {node.name}\n")
            continue
        lines.append(
            f"{branch:<{width}} - {percentage(node):5.1f}%, "
            f"{ms_per_loop(node, loops):.{decimals}f} ms/loop, "
            f"{node.call_count} samples\n"
        )

    logger.debug(f"Rendered {len(lines)} report line(s)")
    return "".join(lines)
