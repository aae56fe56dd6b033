from random import Random
from typing import Optional, Sequence, Union

from .history import History
from .settings import Settings
from .tree import edit
from .tree.edit import EditResult, Updater
from .tree.evaluate import (
    OVERFLOW,
    VariationCount,
    count_variations,
    render_random,
    serialize,
)
from .tree.node import CHILDREN, Choice, Node, Option, Root, Text
from .tree.parse import parse_with_diagnostics
from .tree.path import Path


class Editor:
    """
    An editing session: the current tree, its undo/redo history, and the
    state derived from the tree. Every successful change records the previous
    tree in the history. Failed operations leave the tree alone and set
    `error`; the next successful operation clears it.
    """

    def __init__(self, text: str = "", settings: Optional[Settings] = None) -> None:
        self.settings = settings or Settings()
        self.history = History(self.settings.history_size)
        self.random = Random(self.settings.seed)
        self.error: Optional[str] = None
        self.last_variant = ""
        self.tree, diagnostics = parse_with_diagnostics(text)
        if diagnostics:
            self.error = diagnostics[0]

    @property
    def text(self) -> str:
        return serialize(self.tree)

    @property
    def variation_count(self) -> VariationCount:
        return count_variations(self.tree, self.settings.max_variations)

    @property
    def variation_count_text(self) -> str:
        count = self.variation_count
        if count is OVERFLOW:
            return f"over {self.settings.max_variations:,}"
        return f"{count:,}"

    def can_undo(self) -> bool:
        return self.history.can_undo()

    def can_redo(self) -> bool:
        return self.history.can_redo()

    def _set_tree(self, tree: Root) -> None:
        if tree is not self.tree:
            self.history.record(self.tree)
            self.tree = tree
        self.error = None

    def _apply(self, result: EditResult) -> bool:
        if not result.ok:
            self.error = result.error
            return False
        self._set_tree(result.tree)
        return True

    def set_text(self, text: str) -> bool:
        """Replace the whole tree by parsing text. Recovered parse problems
        are reported in `error`, but the new tree is used regardless."""
        tree, diagnostics = parse_with_diagnostics(text)
        self._set_tree(tree)
        if diagnostics:
            self.error = diagnostics[0]
        return True

    def update(self, path: Path, node_or_updater: Union[Node, Updater]) -> bool:
        return self._apply(edit.update(self.tree, path, node_or_updater))

    def delete(self, path: Path) -> bool:
        return self._apply(edit.delete(self.tree, path))

    def insert(self, path: Path, node: Node) -> bool:
        return self._apply(edit.insert(self.tree, path, node))

    def move_up(self, path: Path) -> bool:
        return self._apply(edit.move_up(self.tree, path))

    def move_down(self, path: Path) -> bool:
        return self._apply(edit.move_down(self.tree, path))

    def add_text_to_root(self, content: str = "new text") -> bool:
        return self.insert((CHILDREN, len(self.tree.children)), Text(content))

    def add_choice_to_root(self, options: Sequence[str] = ("A", "B")) -> bool:
        choice = Choice([Option(o) for o in options])
        return self.insert((CHILDREN, len(self.tree.children)), choice)

    def generate_variant(self) -> str:
        self.last_variant = render_random(self.tree, self.random)
        return self.last_variant

    def undo(self) -> bool:
        tree = self.history.undo(self.tree)
        if tree is None:
            return False
        self.tree = tree
        self.error = None
        return True

    def redo(self) -> bool:
        tree = self.history.redo(self.tree)
        if tree is None:
            return False
        self.tree = tree
        self.error = None
        return True

    def clear_all(self) -> bool:
        # Recorded even when the tree is already empty.
        self.history.record(self.tree)
        self.tree = Root()
        self.error = None
        return True
