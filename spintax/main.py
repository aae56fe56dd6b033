from argparse import ArgumentParser, RawDescriptionHelpFormatter
import sys
from typing import List, Optional

from .cmd.count import CountCommand
from .cmd.edit import EditCommand
from .cmd.enumerate import EnumerateCommand
from .cmd.format import FormatCommand
from .cmd.sample import RandomCommand
from .cmd.show import ShowCommand
from .error import SettingsError
from .helpers import enable_debug_mode
from .settings import SETTINGS_FILENAME, read_settings


def main(argv: Optional[List[str]] = None) -> None:
    # Parsing and evaluation recurse once per level of {} nesting.
    sys.setrecursionlimit(10000)

    parser = ArgumentParser(
        description="Parse, inspect and edit spintax text, e.g.\n\n"
        "  Hello {world|there}! {How are you?|What's up?}\n\n"
        "where one option of every {a|b|...} block is picked per variation.",
        formatter_class=RawDescriptionHelpFormatter,
    )

    commands = [
        FormatCommand,
        CountCommand,
        RandomCommand,
        EnumerateCommand,
        ShowCommand,
        EditCommand,
    ]

    parser.add_argument(
        "--debug",
        dest="debug",
        action="store_true",
        help="Enable debug logging of parse recovery and rejected edits.",
    )
    parser.add_argument(
        "--config",
        dest="config",
        metavar="FILE",
        help=f"Settings file to use. Default: {SETTINGS_FILENAME}, if it exists.",
    )

    subparsers = parser.add_subparsers(metavar="<command>")
    for command in commands:
        subparser = subparsers.add_parser(
            command.command,
            help=command.help,
            description=command.help,
        )
        command.add_arguments(subparser)
        subparser.set_defaults(subcommand_handler=command.run)

    args = parser.parse_args(argv)
    if args.debug:
        enable_debug_mode()

    try:
        if args.config:
            settings = read_settings(args.config, must_exist=True)
        else:
            settings = read_settings()
    except SettingsError as e:
        print(e.message, file=sys.stderr)
        sys.exit(1)

    if "subcommand_handler" in args:
        args.subcommand_handler(args, settings)
    else:
        parser.print_help()


if __name__ == "__main__":
    main()
