from argparse import ArgumentParser, Namespace

from ..settings import Settings
from ..tree.evaluate import serialize
from ..tree.parse import parse
from .base import Command, add_input_argument, read_input


class FormatCommand(Command):
    command = "format"
    help = "Print spintax text in canonical form."

    @staticmethod
    def add_arguments(parser: ArgumentParser) -> None:
        add_input_argument(parser)

    @staticmethod
    def run(args: Namespace, settings: Settings) -> None:
        print(serialize(parse(read_input(args))))
