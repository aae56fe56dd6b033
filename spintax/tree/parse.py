from typing import List, Optional, Tuple
import re

from ..helpers import debug_print
from .node import Choice, Option, Root, SequenceNode, Text

LINE_BREAK_RE = re.compile(r"\r\n|\r|\n")


class _OpenChoice:
    """A choice whose closing "}" has not been seen yet."""

    def __init__(self, start: int) -> None:
        self.start = start
        self.options: List[Option] = []
        # Items of the option currently being read
        self.items: List[SequenceNode] = []

    def end_option(self) -> None:
        self.options.append(make_option(self.items))
        self.items = []

    def close(self) -> Choice:
        self.end_option()
        return Choice(self.options)


def make_option(items: List[SequenceNode]) -> Option:
    content = ""
    if items and isinstance(items[0], Text):
        content = items[0].content
        items = items[1:]
    content = content.strip()

    children: List[SequenceNode] = []
    for item in items:
        if isinstance(item, Text):
            stripped = item.content.strip()
            if stripped:
                children.append(Text(stripped))
        else:
            children.append(item)

    if not content and len(children) == 1 and isinstance(children[0], Text):
        return Option(children[0].content)
    return Option(content, children)


def scan(source: str, diagnostics: List[str]) -> List[SequenceNode]:
    """Read source in one pass. "|" and "}" are only special inside a choice;
    everywhere else they are literal text."""
    top: List[SequenceNode] = []
    stack: List[_OpenChoice] = []
    stray: Optional[int] = None
    text_start = 0

    def items() -> List[SequenceNode]:
        return stack[-1].items if stack else top

    def flush(end: int) -> None:
        if end > text_start:
            items().append(Text(source[text_start:end]))

    for i, c in enumerate(source):
        if c == "{":
            flush(i)
            if i == len(source) - 1:
                stray = i
                items().append(Text("{"))
            else:
                stack.append(_OpenChoice(i))
        elif c == "|" and stack:
            flush(i)
            stack[-1].end_option()
        elif c == "}" and stack:
            flush(i)
            choice = stack.pop().close()
            items().append(choice)
        else:
            continue
        text_start = i + 1
    flush(len(source))

    for open_choice in stack:
        diagnostics.append(
            f"Unterminated choice starting at index {open_choice.start}"
        )
    while stack:
        choice = stack.pop().close()
        items().append(choice)

    if stray is not None:
        diagnostics.append(f"Stray '{{' at index {stray}, treating it as text")
    return top


def parse_with_diagnostics(text: Optional[str]) -> Tuple[Root, List[str]]:
    """Parse a spintax string into a tree. Malformed input is never an error:
    the best-effort tree is returned together with a list of messages that
    describe what was recovered from."""
    diagnostics: List[str] = []
    if not text:
        return Root(), diagnostics
    source = LINE_BREAK_RE.sub(" ", text.strip())
    root = Root(scan(source, diagnostics))
    for message in diagnostics:
        debug_print(message)
    return root, diagnostics


def parse(text: Optional[str]) -> Root:
    return parse_with_diagnostics(text)[0]
