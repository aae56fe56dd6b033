from argparse import ArgumentParser, Namespace
import json
from typing import List

from ..settings import Settings
from ..tree.node import Node, Option, Text, is_container, node_kind, node_to_json
from ..tree.parse import parse
from ..tree.path import Path, child_path, format_path
from .base import Command, add_input_argument, read_input


def format_tree(node: Node, path: Path = (), depth: int = 0) -> List[str]:
    """One line per node, indented by depth and labelled with its path."""
    line = f"{'  ' * depth}{format_path(path)}: {node_kind(node)}"
    if isinstance(node, (Text, Option)):
        line += " " + json.dumps(node.content)
    lines = [line]
    if is_container(node):
        for i, child in enumerate(node.children):  # type: ignore
            lines.extend(format_tree(child, child_path(path, i), depth + 1))
    return lines


class ShowCommand(Command):
    command = "show"
    help = "Print the parsed tree, with the path of every node."

    @staticmethod
    def add_arguments(parser: ArgumentParser) -> None:
        add_input_argument(parser)
        parser.add_argument(
            "--json",
            dest="json",
            action="store_true",
            help="Print the tree as JSON.",
        )

    @staticmethod
    def run(args: Namespace, settings: Settings) -> None:
        tree = parse(read_input(args))
        if args.json:
            print(json.dumps(node_to_json(tree), indent=2))
        else:
            print("\n".join(format_tree(tree)))
