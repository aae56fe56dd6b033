from argparse import ArgumentParser, Namespace

from ..settings import Settings
from ..tree.evaluate import OVERFLOW, count_variations
from ..tree.parse import parse
from .base import Command, add_input_argument, read_input


class CountCommand(Command):
    command = "count"
    help = "Print the number of distinct variations."

    @staticmethod
    def add_arguments(parser: ArgumentParser) -> None:
        add_input_argument(parser)

    @staticmethod
    def run(args: Namespace, settings: Settings) -> None:
        count = count_variations(parse(read_input(args)), settings.max_variations)
        if count is OVERFLOW:
            print(f"more than {settings.max_variations}")
        else:
            print(count)
