from argparse import ArgumentParser, Namespace
from random import Random

from ..settings import Settings
from ..tree.evaluate import render_random
from ..tree.parse import parse
from .base import Command, add_input_argument, read_input


class RandomCommand(Command):
    command = "random"
    help = "Print random variations."

    @staticmethod
    def add_arguments(parser: ArgumentParser) -> None:
        add_input_argument(parser)
        parser.add_argument(
            "-n",
            dest="count",
            type=int,
            default=1,
            help="Number of variations to print. Default: 1.",
        )
        parser.add_argument(
            "--seed",
            dest="seed",
            type=int,
            help="Random seed, for reproducible output. Overrides the settings file.",
        )

    @staticmethod
    def run(args: Namespace, settings: Settings) -> None:
        tree = parse(read_input(args))
        seed = args.seed if args.seed is not None else settings.seed
        random = Random(seed)
        for _ in range(args.count):
            print(render_random(tree, random))
