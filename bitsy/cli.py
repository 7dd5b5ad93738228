"""
Command-line interface for bitsy.

Provides the main entry point for the Bitsy front end with subcommands
for tokenizing, parsing and checking program files.
"""

import argparse
import logging
import sys
from pathlib import Path

from .core import Compiler
from .frontend import LexerError
from .syntax import format_tree
from .utils.settings import Settings, DEFAULT_SETTINGS, MAX_NESTING_DEPTH

logger = logging.getLogger(__name__)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI.

    Returns:
        argparse.ArgumentParser: The configured argument parser
    """
    parser = argparse.ArgumentParser(
        prog="bitsy",
        description="bitsy: front end for the Bitsy scripting language",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m bitsy tokens countdown.bitsy
  python -m bitsy parse countdown.bitsy
  python -m bitsy check countdown.bitsy --max-depth 32
        """
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    # File commands share the input and verbosity options
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "input",
        type=str,
        help="Input Bitsy program"
    )
    common.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output"
    )

    subparsers.add_parser(
        "tokens",
        parents=[common],
        help="Print the token stream of a program"
    )

    for name, help_text in (
        ("parse", "Parse a program and print its syntax tree"),
        ("check", "Parse a program and report whether it is valid"),
    ):
        command_parser = subparsers.add_parser(name, parents=[common], help=help_text)
        command_parser.add_argument(
            "--max-depth",
            type=int,
            default=DEFAULT_SETTINGS.max_nesting_depth,
            help=(f"Maximum block/expression nesting depth, 1 to {MAX_NESTING_DEPTH} "
                  f"(default: {DEFAULT_SETTINGS.max_nesting_depth})")
        )

    # Version command
    subparsers.add_parser(
        "version",
        help="Show version information"
    )

    return parser


def configure_logging(verbose: bool) -> None:
    """Route log records to stderr, at DEBUG level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="[bitsy] %(levelname)s - %(message)s",
        stream=sys.stderr,
    )


def _error(message: str) -> int:
    print(f"[bitsy] Error: {message}", file=sys.stderr)
    return 1


def handle_tokens(args: argparse.Namespace) -> int:
    """Handle the tokens command.

    Args:
        args: Parsed command-line arguments

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    compiler = Compiler()

    try:
        source = compiler.read_source(Path(args.input))
        tokens = compiler.tokenize(source)
    except (FileNotFoundError, ValueError) as e:
        return _error(str(e))
    except LexerError as e:
        return _error(f"Lexical error: {e}")

    for token in tokens:
        print(repr(token))
    return 0


def handle_parse(args: argparse.Namespace) -> int:
    """Handle the parse and check commands.

    Args:
        args: Parsed command-line arguments

    Returns:
        int: Exit code (0 for success, non-zero for failure)
    """
    try:
        settings = Settings(max_nesting_depth=args.max_depth)
    except ValueError as e:
        return _error(str(e))

    input_path = Path(args.input)
    logger.debug("Input: %s", input_path)
    logger.debug("Max nesting depth: %d", settings.max_nesting_depth)

    result = Compiler(settings).load(input_path)
    if not result.success:
        return _error(result.error_message)

    if args.command == "parse":
        print(format_tree(result.program))
    else:
        print(f"[bitsy] OK: {input_path}")
    return 0


def handle_version(args: argparse.Namespace) -> int:
    """Handle the version command.

    Args:
        args: Parsed command-line arguments

    Returns:
        int: Exit code (always 0 for version)
    """
    from . import __version__, __author__
    print(f"bitsy version {__version__}")
    print(f"Author: {__author__}")
    return 0


def main(argv: list = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Optional command-line arguments (defaults to sys.argv)

    Returns:
        int: Exit code
    """
    parser = create_parser()
    args = parser.parse_args(argv)

    configure_logging(getattr(args, "verbose", False))

    if args.command == "tokens":
        return handle_tokens(args)
    elif args.command in ("parse", "check"):
        return handle_parse(args)
    elif args.command == "version":
        return handle_version(args)
    else:
        parser.print_help()
        return 2


if __name__ == "__main__":
    sys.exit(main())
