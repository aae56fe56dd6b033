"""Structural edits of spintax trees.

Every operation takes a tree and returns an EditResult holding a new tree,
leaving its input untouched. Only the nodes on the path from the root to the
edit are rebuilt; all other subtrees are shared with the input tree. A
rejected edit returns the input tree together with the reason."""

from typing import Callable, Optional, Tuple, Union, cast

import attr

from ..error import EditRejected
from ..helpers import debug_print
from .node import Node, Root, can_hold, is_container, node_kind
from .path import Path, child_path, format_path, hop_index, resolve

Updater = Callable[[Optional[Node]], Optional[Node]]


@attr.s(frozen=True)
class EditResult:
    tree: Root = attr.ib()
    error: Optional[str] = attr.ib(default=None)

    @property
    def ok(self) -> bool:
        return self.error is None


def _children(node: Node) -> Tuple[Node, ...]:
    if not is_container(node):
        raise EditRejected(f"A {node_kind(node)} node has no children")
    return node.children  # type: ignore


def _check_index(children: Tuple[Node, ...], index: int) -> None:
    if not 0 <= index < len(children):
        raise EditRejected(
            f"Index {index} is out of bounds for {len(children)} children"
        )


def _check_holds(parent: Node, node: Node) -> None:
    if not can_hold(parent, node):
        raise EditRejected(
            f"A {node_kind(parent)} node cannot contain a {node_kind(node)} node"
        )


def _split_parent(path: Path) -> Tuple[Path, int]:
    index = hop_index(path, len(path) - 2) if len(path) >= 2 else None
    if index is None or len(path) % 2 != 0:
        raise EditRejected(f"Invalid path {format_path(path)}")
    return path[:-2], index


def _replace_at(node: Node, path: Path, fn: Callable[[Node], Node]) -> Node:
    """Return a copy of node with fn applied to the descendant at path."""
    if not path:
        return fn(node)
    index = hop_index(path, 0)
    if index is None:
        raise EditRejected(f"Invalid path {format_path(path)}")
    children = _children(node)
    _check_index(children, index)
    new_child = _replace_at(children[index], path[2:], fn)
    return attr.evolve(
        node, children=children[:index] + (new_child,) + children[index + 1 :]
    )


def _edit_parent(tree: Root, path: Path, fn: Callable[[Node, int], Node]) -> Root:
    parent_path, index = _split_parent(path)
    return cast(Root, _replace_at(tree, parent_path, lambda parent: fn(parent, index)))


def _rejected(tree: Root, what: str, path: Path, e: EditRejected) -> EditResult:
    debug_print(f"{what} at {format_path(path)} rejected: {e.message}")
    return EditResult(tree, e.message)


def update(tree: Root, path: Path, node_or_updater: Union[Node, Updater]) -> EditResult:
    """Replace the node at path. node_or_updater is either the replacement or
    a function from the current node (None if the path does not resolve) to
    the replacement; returning None aborts the update."""
    try:
        new_node: Optional[Node]
        if callable(node_or_updater):
            new_node = node_or_updater(resolve(tree, path))
            if new_node is None:
                raise EditRejected("Update aborted")
        else:
            new_node = node_or_updater

        if not path:
            if not isinstance(new_node, Root):
                raise EditRejected("The root can only be replaced by a root node")
            return EditResult(new_node)

        def replace(parent: Node, index: int) -> Node:
            children = _children(parent)
            _check_index(children, index)
            _check_holds(parent, new_node)
            return attr.evolve(
                parent,
                children=children[:index] + (new_node,) + children[index + 1 :],
            )

        return EditResult(_edit_parent(tree, path, replace))
    except EditRejected as e:
        return _rejected(tree, "Update", path, e)


def delete(tree: Root, path: Path) -> EditResult:
    try:
        if len(path) < 2:
            raise EditRejected("Cannot delete the root node")

        def remove(parent: Node, index: int) -> Node:
            children = _children(parent)
            _check_index(children, index)
            return attr.evolve(parent, children=children[:index] + children[index + 1 :])

        return EditResult(_edit_parent(tree, path, remove))
    except EditRejected as e:
        return _rejected(tree, "Delete", path, e)


def insert(tree: Root, path: Path, node: Node) -> EditResult:
    """Insert node into the children list that path points into. The index
    is clamped to the list, so e.g. a huge index appends."""
    try:
        if len(path) < 2:
            raise EditRejected("Cannot insert a node as the root")

        def add(parent: Node, index: int) -> Node:
            children = _children(parent)
            _check_holds(parent, node)
            index = max(0, min(index, len(children)))
            return attr.evolve(
                parent, children=children[:index] + (node,) + children[index:]
            )

        return EditResult(_edit_parent(tree, path, add))
    except EditRejected as e:
        return _rejected(tree, "Insert", path, e)


def move(tree: Root, path: Path, offset: int) -> EditResult:
    """Move the node at path offset places among its siblings. Moving past
    either end leaves the tree as is (the same object is returned)."""
    try:
        parent_path, index = _split_parent(path)
        parent = resolve(tree, parent_path)
        if parent is None:
            raise EditRejected(f"Invalid path {format_path(path)}")
        children = _children(parent)
        _check_index(children, index)
    except EditRejected as e:
        return _rejected(tree, "Move", path, e)

    target = index + offset
    if not 0 <= target < len(children):
        return EditResult(tree)

    removed = delete(tree, path)
    if not removed.ok:
        return removed
    return insert(removed.tree, child_path(parent_path, target), children[index])


def move_up(tree: Root, path: Path) -> EditResult:
    return move(tree, path, -1)


def move_down(tree: Root, path: Path) -> EditResult:
    return move(tree, path, 1)
