"""The spintax tree. A tree is built from four kinds of immutable nodes:

 - Root: the top-level sequence of Text and Choice nodes.
 - Text: a literal run of text.
 - Choice: a set of Options, one of which is picked when rendering.
 - Option: one alternative of a Choice: literal content followed by a
   sequence of Text and Choice nodes.

Nodes are frozen, and children are stored as tuples, so a tree can be shared
freely between snapshots. Edits build new trees instead of mutating."""

from typing import Any, Dict, Mapping, Tuple, Union

import attr

from ..helpers import json_array, json_prop, static_assert_unreachable


@attr.s(frozen=True)
class Text:
    content: str = attr.ib(default="")


@attr.s(frozen=True)
class Option:
    content: str = attr.ib(default="")
    children: Tuple["SequenceNode", ...] = attr.ib(default=(), converter=tuple)


@attr.s(frozen=True)
class Choice:
    children: Tuple[Option, ...] = attr.ib(default=(), converter=tuple)


@attr.s(frozen=True)
class Root:
    children: Tuple["SequenceNode", ...] = attr.ib(default=(), converter=tuple)


# Nodes that may appear in a Root's or an Option's children.
SequenceNode = Union[Text, Choice]
Node = Union[Text, Option, Choice, Root]
Container = Union[Option, Choice, Root]

CHILDREN = "children"


def node_kind(node: Node) -> str:
    if isinstance(node, Text):
        return "text"
    if isinstance(node, Option):
        return "option"
    if isinstance(node, Choice):
        return "choice"
    if isinstance(node, Root):
        return "root"
    static_assert_unreachable(node)


def is_container(node: Node) -> bool:
    return isinstance(node, (Option, Choice, Root))


def can_hold(parent: Node, child: Node) -> bool:
    """Whether child may be placed in parent's children."""
    if isinstance(parent, Choice):
        return isinstance(child, Option)
    if isinstance(parent, (Root, Option)):
        return isinstance(child, (Text, Choice))
    if isinstance(parent, Text):
        return False
    static_assert_unreachable(parent)


def node_to_json(node: Node) -> Dict[str, Any]:
    if isinstance(node, Text):
        return {"type": "text", "content": node.content}
    if isinstance(node, Option):
        return {
            "type": "option",
            "content": node.content,
            "children": [node_to_json(c) for c in node.children],
        }
    if isinstance(node, Choice):
        return {"type": "choice", "children": [node_to_json(c) for c in node.children]}
    if isinstance(node, Root):
        return {"type": "root", "children": [node_to_json(c) for c in node.children]}
    static_assert_unreachable(node)


def node_from_json(obj: Mapping[str, object]) -> Node:
    """Build a node from its JSON form, e.g. {"type": "option", "content": "x"}.
    Raises ValueError for malformed input or children of the wrong kind."""
    kind = json_prop(obj, "type", str)
    if kind == "text":
        return Text(json_prop(obj, "content", str, ""))

    raw_children = json_array(json_prop(obj, "children", list, []), dict)
    children = [node_from_json(c) for c in raw_children]
    node: Node
    if kind == "option":
        node = Option(json_prop(obj, "content", str, ""))
    elif kind == "choice":
        node = Choice()
    elif kind == "root":
        node = Root()
    else:
        raise ValueError(f"Unknown node type {kind}")

    for child in children:
        if not can_hold(node, child):
            raise ValueError(
                f"A {kind} node cannot contain a {node_kind(child)} node"
            )
    return attr.evolve(node, children=children)
