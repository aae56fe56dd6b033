from argparse import ArgumentParser, Namespace
import itertools
from random import Random
import sys
from typing import Optional

from ..helpers import exception_to_string
from ..settings import Settings
from ..tree.evaluate import enumerate_variants
from ..tree.parse import parse
from .base import Command, add_input_argument, read_input


class EnumerateCommand(Command):
    command = "enumerate"
    help = "Print every variation, one per line."

    @staticmethod
    def add_arguments(parser: ArgumentParser) -> None:
        add_input_argument(parser)
        parser.add_argument(
            "--shuffle",
            dest="shuffle",
            action="store_true",
            help="Print variations in random order.",
        )
        parser.add_argument(
            "--seed",
            dest="seed",
            type=int,
            help="Random seed for --shuffle. Overrides the settings file.",
        )
        parser.add_argument(
            "--max",
            dest="max",
            type=int,
            help="Stop after printing this many variations.",
        )

    @staticmethod
    def run(args: Namespace, settings: Settings) -> None:
        tree = parse(read_input(args))
        random: Optional[Random] = None
        if args.shuffle:
            random = Random(args.seed if args.seed is not None else settings.seed)
        try:
            variants = enumerate_variants(tree, random, settings.max_variations)
        except ValueError as e:
            print(exception_to_string(e), file=sys.stderr)
            sys.exit(1)
        for variant in itertools.islice(variants, args.max):
            print(variant)
