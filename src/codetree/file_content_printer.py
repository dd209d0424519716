"""File content printer for the contents section of the output document.

This module selects files by extension from a FileSystemTree and formats each
selected file as a block of the output document: a header naming the file followed
by its full text, or by an inline note when the file cannot be read.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import AbstractSet, Iterator, List, Optional, Tuple

from .file_system_tree.file_system_tree import FileSystemTree, display_text


def file_extension(name: str) -> Optional[str]:
    """Return the extension of a file name: the text after its final dot.

    Matching elsewhere is exact, so no case folding is applied and multi-dot names
    only contribute their last suffix. A name without a dot, or a dotfile whose only
    dot is the leading one, has no extension.

    Args:
        name: A bare file name.

    Returns:
        The extension without the dot, or None if the name has no extension.

    Example:
        >>> file_extension("main.rs")
        'rs'
        >>> file_extension("archive.tar.gz")
        'gz'
        >>> file_extension("Makefile") is None
        True
        >>> file_extension(".bashrc") is None
        True
    """
    stem, dot, extension = name.rpartition(".")
    if not dot or not stem:
        return None
    return extension


@dataclass(frozen=True)
class ReadError:
    """A file that was selected for inclusion but could not be read.

    Attributes:
        path: Path of the file as produced by the tree.
        reason: Description of the underlying error, safe to write as UTF-8.
    """

    path: str
    reason: str


class FileContentPrinter:
    """Formats the contents section for the files of a tree whose extension is allowed.

    Each selected file yields a header line, then either its complete text followed
    by a newline, or a single "Error reading file" line. A file is read completely
    before any of it is emitted, so a decoding error part-way through a file never
    leaves partial text behind. Read errors are recorded and never propagated; errors
    walking the tree are.

    Attributes:
        fs_tree (FileSystemTree): The filesystem tree to process.
        allowed_extensions (AbstractSet[str]): Extensions (without dots) whose files are included.
        encoding (str): The encoding used to read files.
        read_errors (List[ReadError]): Files that could not be read, in the order encountered.

    Example:
        >>> tree = FileSystemTree("src")  # doctest: +SKIP
        >>> printer = FileContentPrinter(tree, {"rs", "toml"})  # doctest: +SKIP
        >>> for path, rel_path, content in printer.yield_file_contents():  # doctest: +SKIP
        ...     for chunk in content:
        ...         print(chunk, end='')
    """

    HEADER_TEMPLATE = "\n=== File: {path} ===\n\n"
    ERROR_TEMPLATE = "Error reading file: {reason}\n"

    def __init__(
        self,
        fs_tree: FileSystemTree,
        allowed_extensions: AbstractSet[str],
        encoding: str = "utf-8",
    ) -> None:
        """Initialize the FileContentPrinter.

        Args:
            fs_tree: The filesystem tree to process.
            allowed_extensions: Extensions whose files are included, without leading dots.
            encoding: The encoding to use when reading files. Defaults to "utf-8".

        Raises:
            LookupError: If the specified encoding is not available.
        """
        # Validate encoding early to fail fast
        try:
            "test".encode(encoding).decode(encoding)
        except LookupError as e:
            raise LookupError(f"Encoding '{encoding}' is not available") from e

        self.fs_tree = fs_tree
        self.allowed_extensions = frozenset(allowed_extensions)
        self.encoding = encoding
        self.read_errors: List[ReadError] = []

    def is_included(self, name: str) -> bool:
        """Check whether a file name's extension is in the allowed set."""
        extension = file_extension(name)
        return extension is not None and extension in self.allowed_extensions

    def iterate_included_files(self) -> Iterator[Tuple[str, str]]:
        """Iterate over the files selected for the contents section.

        Yields:
            Pairs of (path, relative_path) in traversal order.

        Raises:
            TraversalError: If a directory cannot be enumerated.
        """
        for file_path, relative_path in self.fs_tree.iterate_files():
            if self.is_included(Path(file_path).name):
                yield file_path, relative_path

    def _read_text(self, file_path: str) -> str:
        with open(file_path, "r", encoding=self.encoding, newline="") as file:
            return file.read()

    def _yield_wrapped_content(self, file_path: str) -> Iterator[str]:
        """Stream a single file's block.

        Args:
            file_path: Path of the file as produced by the tree, used to open it. The
                header shows it with undecodable bytes replaced.

        Yields:
            str: The header, then the text and separator or the error line.
        """
        yield self.HEADER_TEMPLATE.format(path=display_text(file_path))

        try:
            text = self._read_text(file_path)
        except (OSError, UnicodeDecodeError) as e:
            reason = display_text(str(e))
            self.read_errors.append(ReadError(path=file_path, reason=reason))
            yield self.ERROR_TEMPLATE.format(reason=reason)
            return

        yield text
        yield "\n"

    def yield_file_contents(self) -> Iterator[Tuple[str, str, Iterator[str]]]:
        """Stream the contents section one file at a time.

        Yields:
            Tuples of (path, relative_path, content_iterator) where
            content_iterator yields the formatted pieces of the file's block.

        Raises:
            TraversalError: If a directory cannot be enumerated.
        """
        for file_path, relative_path in self.iterate_included_files():
            yield file_path, relative_path, self._yield_wrapped_content(file_path)
