"""Call tree recording nested, named scopes.

Each node aggregates every invocation of one scope name at one position
in the tree, so the same name reached through different call paths is
kept apart while repeated calls through the same path are merged.

Example usage:
    tree = CallTree()
    for _ in range(2):
        tree.enter("main")
        tree.enter("physics")
        simulate()
        tree.exit("physics")
        tree.exit("main")

    main = tree.find("main")
    print(main.call_count, main.total_duration)
"""

import logging
from collections.abc import Iterator
from dataclasses import dataclass, field
from typing import Any

from ..errors import StackImbalanceError
from ..perf_logging import LogCategory, get_category_logger
from .timing import Clock, Timer

ROOT_NAME = "root"

logger = get_category_logger(LogCategory.TREE)


@dataclass(eq=False)
class CallNode:
    """All completed invocations of one scope at one call path.

    Attributes:
        name: Scope name supplied at the call site.
        depth: 0 for the synthetic root, 1 for top-level scopes.
        parent: Enclosing node, used only to move the cursor back on exit.
        total_duration: Seconds accumulated over all completed calls.
        call_count: Number of completed enter/exit pairs.
        overhead: Seconds spent in the profiler's own bookkeeping.
        children: Child nodes keyed by name, in first-entered order.
    """

    name: str
    depth: int = 0
    parent: "CallNode | None" = field(default=None, repr=False)
    total_duration: float = 0.0
    call_count: int = 0
    overhead: float = 0.0
    children: dict[str, "CallNode"] = field(default_factory=dict, repr=False)
    timer: Timer = field(default_factory=Timer, repr=False)

    @property
    def is_root(self) -> bool:
        return self.parent is None

    @property
    def is_open(self) -> bool:
        return self.timer.running

    @property
    def average_duration(self) -> float:
        """Mean seconds per completed call, 0 when there are none."""
        if self.call_count == 0:
            return 0.0
        return self.total_duration / self.call_count

    @property
    def path(self) -> tuple[str, ...]:
        """Scope names from the top-level scope down to this node."""
        names = []
        node: CallNode | None = self
        while node is not None and not node.is_root:
            names.append(node.name)
            node = node.parent
        return tuple(reversed(names))

    def child(self, name: str, clock: Clock | None = None) -> "CallNode":
        """Return the child called ``name``, creating it on first use."""
        existing = self.children.get(name)
        if existing is not None:
            return existing
        node = CallNode(name=name, depth=self.depth + 1, parent=self, timer=Timer(clock))
        self.children[name] = node
        return node

    def is_last_child(self, node: "CallNode") -> bool:
        if not self.children:
            return False
        return next(reversed(self.children.values())) is node

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "name": self.name,
            "total_ms": round(self.total_duration * 1000, 3),
            "average_ms": round(self.average_duration * 1000, 3),
            "call_count": self.call_count,
            "overhead_ms": round(self.overhead * 1000, 3),
            "children": [child.to_dict() for child in self.children.values()],
        }


class CallTree:
    """Per-thread call tree with a cursor on the innermost open scope.

    Not synchronized: one instance must only be driven from one thread.

    Attributes:
        root: Synthetic root node owning the top-level scopes.
        cursor: Innermost open node, or ``root`` when nothing is open.
    """

    def __init__(self, clock: Clock | None = None):
        self.clock = clock
        self.root = CallNode(name=ROOT_NAME, timer=Timer(clock))
        self.cursor = self.root

    def _now(self) -> float:
        return self.root.timer.clock()

    @property
    def is_idle(self) -> bool:
        """True when no scope is open."""
        return self.cursor is self.root

    @property
    def depth(self) -> int:
        """Number of currently open scopes."""
        return self.cursor.depth

    def open_path(self) -> list[str]:
        """Names of the open scopes, outermost first."""
        return list(self.cursor.path)

    def enter(self, name: str) -> CallNode:
        """Open scope ``name`` below the cursor and start timing it.

        Args:
            name: Scope name. Any string is accepted, including empty ones.

        Returns:
            The node now under the cursor.
        """
        began = self._now()
        node = self.cursor.child(name, self.clock)
        self.cursor = node
        node.overhead += self._now() - began
        node.timer.start()
        return node

    def exit(self, name: str | None = None) -> CallNode:
        """Close the innermost open scope and merge its elapsed time.

        Args:
            name: Optional expected scope name; when given it must match
                the innermost open scope.

        Returns:
            The node that was closed.

        Raises:
            StackImbalanceError: If no scope is open or ``name`` is not the
                innermost open scope. The tree is left untouched.
        """
        node = self.cursor
        if node is self.root or (name is not None and name != node.name):
            raise StackImbalanceError(expected=name, open_path=self.open_path())

        elapsed = node.timer.stop()
        began = self._now()
        node.total_duration += elapsed
        node.call_count += 1
        self.cursor = node.parent
        node.overhead += self._now() - began

        if logger.isEnabledFor(logging.DEBUG):
            logger.debug(
                f"Closed scope {node.name!r}",
                extra={
                    "region": node.name,
                    "depth": node.depth,
                    "duration_ms": round(elapsed * 1000, 3),
                },
            )
        return node

    def reset(self) -> None:
        """Discard every recorded node and start from an empty root."""
        self.root = CallNode(name=ROOT_NAME, timer=Timer(self.clock))
        self.cursor = self.root

    def walk(self) -> Iterator[CallNode]:
        """Yield every non-root node depth-first, siblings in entry order."""
        stack = list(reversed(self.root.children.values()))
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node.children.values()))

    def find(self, *path: str) -> CallNode | None:
        """Look a node up by its scope names from the top level down."""
        node = self.root
        for name in path:
            found = node.children.get(name)
            if found is None:
                return None
            node = found
        return None if node is self.root else node

    def is_empty(self) -> bool:
        return not self.root.children

    def to_dict(self) -> dict[str, Any]:
        """Snapshot of the recorded tree for JSON serialization."""
        return {
            "open_path": self.open_path(),
            "scopes": [child.to_dict() for child in self.root.children.values()],
        }
