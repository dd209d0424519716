"""Command-line argument parsing for codetree.

This module defines the command-line interface for codetree,
handling argument parsing and validation.
"""

import argparse
import sys
from pathlib import Path
from typing import FrozenSet, NoReturn, Optional

from codetree import __version__
from codetree.config import (
    DEFAULT_EXTENSIONS,
    DEFAULT_IGNORED_DIRS,
    DEFAULT_OUTPUT_PATH,
    parse_extension_list,
    parse_name_list,
)


class CodeTreeArgumentParser(argparse.ArgumentParser):
    """ArgumentParser that follows usage errors with an example invocation."""

    def format_example(self) -> str:
        return f"Example: {self.prog} ."

    def error(self, message: str) -> NoReturn:
        self.print_usage(sys.stderr)
        self.exit(2, f"{self.prog}: error: {message}\n{self.format_example()}\n")


def ignored_dirs_type(value: str) -> FrozenSet[str]:
    """Parse the comma-separated value of -i/--ignored-dirs.

    Raises:
        argparse.ArgumentTypeError: If a name contains a path separator.
    """
    names = parse_name_list(value)
    invalid = sorted(name for name in names if "/" in name or "\\" in name)
    if invalid:
        raise argparse.ArgumentTypeError(
            f"ignored directories are matched by bare name and must not contain path separators: {', '.join(invalid)}"
        )
    return names


def extensions_type(value: str) -> FrozenSet[str]:
    """Parse the comma-separated value of -e/--extensions.

    Raises:
        argparse.ArgumentTypeError: If an extension starts with a dot.
    """
    try:
        return parse_extension_list(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def create_parser(prog: Optional[str] = None) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        prog: Program name shown in usage messages. Defaults to the invoking command.

    Returns:
        An ArgumentParser instance configured with codetree's options.
    """
    description = """
    codetree: Write a directory's tree and source code into a single text file.

    The output document starts with an indented listing of every file and directory
    under the root, followed by the full text of each file whose extension is in the
    allowed set. Directories whose name is in the ignored set are skipped entirely,
    together with everything beneath them.
    """

    epilog = f"""
    Defaults:
      output file:          {DEFAULT_OUTPUT_PATH}
      ignored directories:  {",".join(sorted(DEFAULT_IGNORED_DIRS))}
      extensions:           {",".join(sorted(DEFAULT_EXTENSIONS))}

    Examples:
      # Process the current directory into code_output.txt
      codetree .

      # Choose the output file
      codetree -o project.txt /path/to/project

      # Replace the ignored directories and extensions
      codetree -i .git,dist,__pycache__ -e py,toml,md /path/to/project

      # Show progress while running
      codetree -v /path/to/project

      # Display version information and exit
      codetree -V
    """

    parser = CodeTreeArgumentParser(
        prog=prog,
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    # Version information
    parser.add_argument(
        "-V", "--version", action="version", version=f"codetree {__version__}", help="Show the version and exit"
    )

    parser.add_argument(
        "directory",
        help="The directory to process. Shown in the output exactly as typed.",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help=f"Output file path. Created or truncated before writing (default: {DEFAULT_OUTPUT_PATH}).",
    )
    parser.add_argument(
        "-i",
        "--ignored-dirs",
        type=ignored_dirs_type,
        metavar="NAMES",
        help=(
            "Comma-separated directory names to skip, together with everything beneath them. Names are "
            "matched exactly against the directory's own name, at any depth. Replaces the default set."
        ),
    )
    parser.add_argument(
        "-e",
        "--extensions",
        type=extensions_type,
        metavar="EXTS",
        help=(
            "Comma-separated file extensions, without dots, whose contents are included. Matching is exact "
            "and case-sensitive against the text after the last dot. Replaces the default set."
        ),
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Print the resolved configuration and progress information to stdout.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Args:
        args: Parsed command-line arguments.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.output is not None and args.output.is_dir():
        raise ValueError(f"Output path is a directory: {args.output}")
