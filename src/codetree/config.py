"""Run configuration for codetree.

This module resolves the immutable configuration shared by every stage of a run:
where to start walking, where to write the document, which directory names to
prune, and which file extensions to include.
"""

import argparse
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import FrozenSet, Iterable, Optional

from codetree.file_system_tree.file_system_tree import display_text
from codetree.types import PathType

DEFAULT_OUTPUT_PATH = "code_output.txt"

# Build, version-control and IDE artifact directories
DEFAULT_IGNORED_DIRS: FrozenSet[str] = frozenset(
    {
        ".git",
        "node_modules",
        "target",
        ".idea",
        "venv",
        "bin",
        "obj",
        "Debug",
        "Release",
    }
)

# Source, project and configuration file extensions (no leading dot)
DEFAULT_EXTENSIONS: FrozenSet[str] = frozenset(
    {
        "rs",
        "js",
        "py",
        "cpp",
        "c",
        "java",
        "go",
        "ts",
        "cs",
        "csproj",
        "sln",
        "cshtml",
        "razor",
        "json",
        "xml",
        "config",
        "yml",
        "yaml",
    }
)


def parse_name_list(value: str) -> FrozenSet[str]:
    """Split a comma-separated list of names into a set.

    Surrounding whitespace is stripped from each item and empty items are dropped.

    Args:
        value: Comma-separated names, e.g. "node_modules, dist,.git".

    Returns:
        The set of names.

    Example:
        >>> sorted(parse_name_list("node_modules, dist,,.git"))
        ['.git', 'dist', 'node_modules']
    """
    return frozenset(item.strip() for item in value.split(",") if item.strip())


def parse_extension_list(value: str) -> FrozenSet[str]:
    """Split a comma-separated list of file extensions into a set.

    Extensions are matched exactly and case-sensitively against the text after the
    last dot of a file name, so they must be given without a leading dot.

    Args:
        value: Comma-separated extensions, e.g. "py,rs,toml".

    Returns:
        The set of extensions.

    Raises:
        ValueError: If any extension starts with a dot.

    Example:
        >>> sorted(parse_extension_list("py, rs"))
        ['py', 'rs']
    """
    extensions = parse_name_list(value)
    dotted = sorted(ext for ext in extensions if ext.startswith("."))
    if dotted:
        raise ValueError(f"Extensions must be given without a leading dot: {', '.join(dotted)}")
    return extensions


@dataclass(frozen=True)
class Config:
    """Immutable configuration for a single run.

    Attributes:
        root_path: Directory to walk. Must exist when traversal starts.
        output_path: Document to create or truncate.
        ignored_dirs: Bare directory names to prune, matched exactly.
        allowed_extensions: Extensions whose files are included, without dots.
        verbose: Whether progress information is printed to stdout.
        root_label: The root exactly as it was typed. Defaults to the root path's own spelling.

    Example:
        >>> config = Config.from_root("src")
        >>> str(config.output_path)
        'code_output.txt'
        >>> "node_modules" in config.ignored_dirs
        True
        >>> Config.from_root("foo//bar/").root_label
        'foo//bar/'
    """

    root_path: Path
    output_path: Path = field(default_factory=lambda: Path(DEFAULT_OUTPUT_PATH))
    ignored_dirs: FrozenSet[str] = DEFAULT_IGNORED_DIRS
    allowed_extensions: FrozenSet[str] = DEFAULT_EXTENSIONS
    verbose: bool = False
    root_label: Optional[str] = None

    def __post_init__(self) -> None:
        # Capture the label before Path() drops trailing and doubled separators
        if self.root_label is None:
            object.__setattr__(self, "root_label", os.fspath(self.root_path))
        # Normalize field types so callers can pass plain strings and lists
        object.__setattr__(self, "root_path", Path(self.root_path))
        object.__setattr__(self, "output_path", Path(self.output_path))
        object.__setattr__(self, "ignored_dirs", frozenset(self.ignored_dirs))
        object.__setattr__(self, "allowed_extensions", frozenset(self.allowed_extensions))

    @classmethod
    def from_root(cls, root_path: PathType) -> "Config":
        """Build the minimal configuration: a root path with every other setting defaulted."""
        return cls(root_path=root_path)

    @classmethod
    def from_args(cls, args: argparse.Namespace) -> "Config":
        """Build a configuration from parsed command-line arguments.

        Options that were not given fall back to the defaults. A supplied ignore or
        extension list replaces the corresponding default set entirely.

        Args:
            args: Namespace produced by the codetree argument parser.

        Returns:
            The resolved configuration.
        """
        ignored_dirs: Optional[Iterable[str]] = getattr(args, "ignored_dirs", None)
        extensions: Optional[Iterable[str]] = getattr(args, "extensions", None)
        output: Optional[PathType] = getattr(args, "output", None)

        return cls(
            root_path=args.directory,
            output_path=Path(output) if output is not None else Path(DEFAULT_OUTPUT_PATH),
            ignored_dirs=frozenset(ignored_dirs) if ignored_dirs is not None else DEFAULT_IGNORED_DIRS,
            allowed_extensions=frozenset(extensions) if extensions is not None else DEFAULT_EXTENSIONS,
            verbose=bool(getattr(args, "verbose", False)),
        )

    def describe(self) -> str:
        """Return a human-readable multi-line summary of the configuration."""
        return "\n".join(
            [
                f"Analyzing directory: {display_text(self.root_label or os.fspath(self.root_path))}",
                f"Output will be written to: {display_text(os.fspath(self.output_path))}",
                f"Ignored directories: {', '.join(sorted(self.ignored_dirs))}",
                f"Allowed extensions: {', '.join(sorted(self.allowed_extensions))}",
            ]
        )
