from argparse import ArgumentParser, Namespace
import json
import sys
from typing import Callable, Dict, Optional

from ..editor import Editor
from ..helpers import exception_to_string
from ..settings import Settings
from ..tree.node import Node, node_from_json
from ..tree.path import parse_path
from .base import Command, read_file
from .show import format_tree

USAGE = """\
Commands:
  show                   print the tree, with the path of every node
  text                   print the spintax text
  count                  print the number of variations
  random                 print a random variation
  set <spintax>          replace everything with parsed <spintax>
  insert <path> <json>   insert a node, e.g.
                           insert children.0 {"type": "text", "content": "Hi "}
  update <path> <json>   replace the node at <path>
  delete <path>          delete the node at <path>
  up <path>              move a node before its previous sibling
  down <path>            move a node after its next sibling
  undo, redo             step through the edit history
  clear                  remove everything
  help, quit"""


def _report(message: Optional[str]) -> None:
    print(f"error: {message}", file=sys.stderr)


def _parse_node(text: str) -> Node:
    obj = json.loads(text)
    if not isinstance(obj, dict):
        raise ValueError("A node must be a JSON object")
    return node_from_json(obj)


def _run_edit(editor: Editor, cmd: str, arg: str) -> bool:
    path_text, _, node_text = arg.strip().partition(" ")
    path = parse_path(path_text)
    if cmd == "insert":
        return editor.insert(path, _parse_node(node_text))
    if cmd == "update":
        return editor.update(path, _parse_node(node_text))
    if cmd == "delete":
        return editor.delete(path)
    if cmd == "up":
        return editor.move_up(path)
    assert cmd == "down"
    return editor.move_down(path)


def handle_command(editor: Editor, line: str) -> bool:
    """Run one command line. Returns False when the session should end."""
    cmd, _, arg = line.strip().partition(" ")
    simple: Dict[str, Callable[[], str]] = {
        "show": lambda: "\n".join(format_tree(editor.tree)),
        "text": lambda: editor.text,
        "count": lambda: editor.variation_count_text,
        "random": editor.generate_variant,
        "help": lambda: USAGE,
    }

    if not cmd:
        return True
    if cmd == "quit":
        return False
    if cmd in simple:
        print(simple[cmd]())
        return True

    if cmd == "set":
        editor.set_text(arg)
        if editor.error:
            print(f"warning: {editor.error}", file=sys.stderr)
    elif cmd in ("insert", "update", "delete", "up", "down"):
        try:
            ok = _run_edit(editor, cmd, arg)
        except ValueError as e:
            _report(exception_to_string(e))
            return True
        if not ok:
            _report(editor.error)
            return True
    elif cmd == "undo":
        if not editor.undo():
            _report("nothing to undo")
            return True
    elif cmd == "redo":
        if not editor.redo():
            _report("nothing to redo")
            return True
    elif cmd == "clear":
        editor.clear_all()
    else:
        _report(f"unknown command {cmd!r}, try 'help'")
        return True
    print(editor.text)
    return True


class EditCommand(Command):
    command = "edit"
    help = "Edit spintax interactively, with undo and redo. Commands are read from stdin."

    @staticmethod
    def add_arguments(parser: ArgumentParser) -> None:
        parser.add_argument(
            "file",
            nargs="?",
            metavar="file",
            help="File containing the initial spintax text.",
        )

    @staticmethod
    def run(args: Namespace, settings: Settings) -> None:
        text = read_file(args.file) if args.file else ""
        editor = Editor(text, settings)
        interactive = sys.stdin.isatty()
        if interactive:
            print("Type 'help' for a list of commands.")
        while True:
            if interactive:
                print("> ", end="", flush=True)
            line = sys.stdin.readline()
            if not line or not handle_command(editor, line):
                break
