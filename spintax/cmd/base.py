import abc
from argparse import ArgumentParser, Namespace
import sys

from ..settings import Settings


class Command(abc.ABC):
    command: str
    help: str

    @staticmethod
    @abc.abstractmethod
    def add_arguments(parser: ArgumentParser) -> None:
        ...

    @staticmethod
    @abc.abstractmethod
    def run(args: Namespace, settings: Settings) -> None:
        ...


def add_input_argument(parser: ArgumentParser) -> None:
    parser.add_argument(
        "file",
        nargs="?",
        metavar="file",
        help="File containing spintax text. Reads from stdin if omitted.",
    )


def read_file(filename: str) -> str:
    try:
        with open(filename, encoding="utf-8") as f:
            return f.read()
    except OSError as e:
        print(f"Unable to read {filename}: {e.strerror}", file=sys.stderr)
        sys.exit(1)


def read_input(args: Namespace) -> str:
    if not args.file or args.file == "-":
        return sys.stdin.read()
    return read_file(args.file)
