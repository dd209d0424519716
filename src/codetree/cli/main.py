"""Command-line interface for codetree.

This module provides the command-line entry point, which walks a directory and writes
its tree listing and the contents of selected source files into a single text file.
It handles argument parsing, progress reporting, error reporting and signal
management for graceful interruption handling.

Exit Codes:
    0: Successful completion
    1: Runtime error (output file cannot be created, directory cannot be traversed)
    2: Command-line syntax error
    126: Permission denied
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe while writing verbose output to stdout

Example:
    # Process a directory into code_output.txt
    $ codetree /path/to/dir

    # Custom output file, ignored directories and extensions, with progress
    $ codetree /path/to/dir -o out.txt -i .git,dist -e py,toml -v
"""

import sys
from typing import List, Optional

from codetree.cli.argparser import create_parser, validate_args
from codetree.cli.safe_writer import SafeWriter
from codetree.cli.signal_handler import interrupt_handler, silence_stdout
from codetree.codetree import StreamingCodeTree
from codetree.config import Config
from codetree.exceptions import InterruptedRunError, OutputFileError, TraversalError
from codetree.file_system_tree import display_text
from codetree.types import PathType


def format_summary(analyzer: StreamingCodeTree) -> str:
    """Format the run's counts into a human-readable string.

    Args:
        analyzer: A document generator whose streams have completed.

    Returns:
        A formatted string showing all counts with appropriate labels.
    """
    return "\n".join(
        [
            f"Directories: {analyzer.directory_count}",
            f"Files: {analyzer.file_count}",
            f"Included files: {analyzer.included_file_count}",
            f"Unreadable files: {analyzer.read_error_count}",
        ]
    )


def progress_printer(message: str) -> None:
    print(message, flush=True)


def write_document(analyzer: StreamingCodeTree, output_path: PathType) -> None:
    """Write the complete document produced by an analyzer to a file.

    The output file is created, or truncated, before anything is written. Sections are
    written in their fixed order; a failure part-way leaves a partially written file.

    Args:
        analyzer: The document generator.
        output_path: Path of the output document.

    Raises:
        OutputFileError: If the output file cannot be created.
        TraversalError: If a directory cannot be enumerated.
        InterruptedRunError: If Ctrl+C was pressed before the last write.
    """
    with SafeWriter(output_path) as safe_writer:
        for chunk in analyzer.stream_document():
            safe_writer.write(chunk)


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the codetree command-line interface.

    Args:
        argv: Command-line arguments, excluding the program name. Defaults to sys.argv[1:].

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Permission denied
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe while writing verbose output to stdout
    """
    try:
        parser = create_parser()
        # argparse calls sys.exit(2) for argument errors, sys.exit(0) for --version
        args = parser.parse_args(argv)

        # Perform additional validation beyond what argparse supports directly
        validate_args(args)

        config = Config.from_args(args)
        progress = progress_printer if config.verbose else None

        with interrupt_handler:
            if config.verbose:
                print(config.describe(), flush=True)

            analyzer = StreamingCodeTree(config, progress=progress)

            write_document(analyzer, config.output_path)

            if config.verbose:
                print(format_summary(analyzer), flush=True)
                output_label = display_text(str(config.output_path))
                print(f"Successfully generated code output at: {output_label}", flush=True)

        # Ctrl+C after the last write still counts as an interruption
        if interrupt_handler.interrupted.is_set():
            raise InterruptedRunError()

    except InterruptedRunError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(130)
    except BrokenPipeError:
        # The reader of the verbose output went away; SafeWriter has already closed the file
        silence_stdout()
        sys.exit(141)
    except (OutputFileError, TraversalError) as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(126 if e.is_permission_error else 1)
    except PermissionError as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(126)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
