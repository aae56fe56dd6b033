from typing import List, Optional, Sequence, Tuple, Union

from .node import CHILDREN, Node, is_container

PathElem = Union[str, int]
# Alternates field names and indices, e.g. ("children", 0, "children", 2).
# The empty path is the root.
Path = Sequence[PathElem]


def hop_index(path: Path, i: int) -> Optional[int]:
    """The index of the hop starting at path[i], or None if it is malformed."""
    if i + 1 >= len(path):
        return None
    field, index = path[i], path[i + 1]
    if field != CHILDREN or not isinstance(index, int) or isinstance(index, bool):
        return None
    return index


def resolve(tree: Node, path: Path) -> Optional[Node]:
    """Find the node at path, or None if any hop of the path is invalid."""
    node = tree
    for i in range(0, len(path), 2):
        index = hop_index(path, i)
        if index is None or not is_container(node):
            return None
        children = node.children  # type: ignore
        if not 0 <= index < len(children):
            return None
        node = children[index]
    return node


def child_path(path: Path, index: int) -> Tuple[PathElem, ...]:
    return tuple(path) + (CHILDREN, index)


def parse_path(text: str) -> Tuple[PathElem, ...]:
    """Parse the dotted form of a path, "children.0.children.2". "/" and the
    empty string mean the root."""
    text = text.strip()
    if text in ("", "/"):
        return ()
    parts = text.split(".")
    if len(parts) % 2 != 0:
        raise ValueError(f"Path {text!r} must alternate field names and indices")
    ret: List[PathElem] = []
    for field, index in zip(parts[::2], parts[1::2]):
        if field != CHILDREN:
            raise ValueError(f"Unknown field {field!r} in path {text!r}")
        try:
            ret.extend([field, int(index)])
        except ValueError:
            raise ValueError(f"Bad index {index!r} in path {text!r}") from None
    return tuple(ret)


def format_path(path: Path) -> str:
    if not path:
        return "/"
    return ".".join(str(elem) for elem in path)
