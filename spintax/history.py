from collections import deque
from typing import Deque, Optional

from .tree.node import Root

DEFAULT_HISTORY_SIZE = 50


class History:
    """Bounded undo/redo stacks of whole-tree snapshots. Trees are immutable,
    so a snapshot is just a reference to the tree. When a stack is full, its
    oldest snapshot is dropped."""

    def __init__(self, capacity: int = DEFAULT_HISTORY_SIZE) -> None:
        if capacity < 1:
            raise ValueError(f"History capacity must be at least 1, got {capacity}")
        self.capacity = capacity
        # The most recent snapshot is at the right end.
        self.undo_stack: Deque[Root] = deque(maxlen=capacity)
        self.redo_stack: Deque[Root] = deque(maxlen=capacity)

    def record(self, previous: Root) -> None:
        """Remember the tree as it was before a new edit. This starts a new
        line of history, so everything that could be redone is forgotten."""
        self.undo_stack.append(previous)
        self.redo_stack.clear()

    def undo(self, current: Root) -> Optional[Root]:
        if not self.undo_stack:
            return None
        self.redo_stack.append(current)
        return self.undo_stack.pop()

    def redo(self, current: Root) -> Optional[Root]:
        if not self.redo_stack:
            return None
        self.undo_stack.append(current)
        return self.redo_stack.pop()

    def can_undo(self) -> bool:
        return bool(self.undo_stack)

    def can_redo(self) -> bool:
        return bool(self.redo_stack)

    def clear(self) -> None:
        self.undo_stack.clear()
        self.redo_stack.clear()
