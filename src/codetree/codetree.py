"""Directory tree and code contents document generation.

This module assembles the output document: a title, the root directory, the
indented tree of every visited entry, and the contents of every included file. It
provides a streaming implementation that yields the document piece by piece and a
complete implementation that holds it in memory.
"""

from typing import Callable, Iterator, Optional

from codetree.config import Config
from codetree.exclusion_rules.ignored_dirs import IgnoredDirectoryRules
from codetree.file_content_printer import FileContentPrinter
from codetree.file_system_tree.file_system_tree import FileSystemTree, display_text

ProgressCallback = Callable[[str], None]

TITLE = "Directory Tree and Code Contents\n\n"
ROOT_TEMPLATE = "Root Directory: {root}\n\n"
CONTENTS_HEADER = "\nCode Contents:\n\n"


class StreamingCodeTree:
    """Streaming generator for the directory tree and code contents document.

    The document is produced in a fixed order: the title and root line, the full tree
    section, the contents header, then the contents section. The directory walk happens
    lazily when the tree is first streamed, so a walk that fails part-way leaves
    whatever was already written in place.

    Streaming properties:
    - Each section can only be streamed once
    - The tree section is always complete before any content is produced
    - Counts are available once the tree has been streamed

    Attributes:
        config (Config): The configuration driving this run.
        progress (Optional[ProgressCallback]): Receives progress messages when set.

    Example:
        >>> analyzer = StreamingCodeTree(Config.from_root("src"))  # doctest: +SKIP
        >>> for chunk in analyzer.stream_document():  # doctest: +SKIP
        ...     print(chunk, end='')
        Directory Tree and Code Contents
        <BLANKLINE>
        Root Directory: src
        <BLANKLINE>
        ├── src
            ├── main.rs
        <BLANKLINE>
        Code Contents:
        <BLANKLINE>
        <BLANKLINE>
        === File: src/main.rs ===
        <BLANKLINE>
        fn main() {}
        <BLANKLINE>

    Raises:
        FileNotFoundError: If the root directory does not exist.
        NotADirectoryError: If the root path is not a directory.
    """

    def __init__(self, config: Config, progress: Optional[ProgressCallback] = None) -> None:
        """Initialize document generation for a configuration.

        Args:
            config: Resolved run configuration.
            progress: Optional callable receiving one progress message at a time.

        Raises:
            FileNotFoundError: If the root directory does not exist.
            NotADirectoryError: If the root path is not a directory.
        """
        self.config = config
        self.progress = progress

        if not config.root_path.exists():
            raise FileNotFoundError(f"Root path does not exist: {config.root_path}")
        if not config.root_path.is_dir():
            raise NotADirectoryError(f"Root path is not a directory: {config.root_path}")

        self._fs_tree = FileSystemTree(
            config.root_path, IgnoredDirectoryRules(config.ignored_dirs), root_label=config.root_label
        )
        self._content_printer = FileContentPrinter(self._fs_tree, config.allowed_extensions)

        self._included_file_count = 0
        self._header_complete = False
        self._tree_complete = False
        self._contents_header_complete = False
        self._contents_complete = False

    def _report(self, message: str) -> None:
        if self.progress is not None:
            self.progress(message)

    @property
    def entry_count(self) -> int:
        """Number of entries in the tree section, including the root."""
        return self._fs_tree.get_entry_count()

    @property
    def file_count(self) -> int:
        """Number of regular files visited."""
        return self._fs_tree.get_file_count()

    @property
    def directory_count(self) -> int:
        """Number of directories visited, excluding the root."""
        return self._fs_tree.get_directory_count()

    @property
    def included_file_count(self) -> int:
        """Number of file blocks written to the contents section so far."""
        return self._included_file_count

    @property
    def read_error_count(self) -> int:
        """Number of included files that could not be read so far."""
        return len(self._content_printer.read_errors)

    @property
    def streaming_complete(self) -> bool:
        """Whether every section of the document has been streamed."""
        return (
            self._header_complete
            and self._tree_complete
            and self._contents_header_complete
            and self._contents_complete
        )

    def stream_header(self) -> Iterator[str]:
        """Stream the document title and root directory line.

        Raises:
            RuntimeError: If the header has already been streamed.
        """
        if self._header_complete:
            raise RuntimeError("Header has already been streamed")

        yield TITLE
        yield ROOT_TEMPLATE.format(root=display_text(self._fs_tree.root_label))
        self._header_complete = True

    def stream_tree(self) -> Iterator[str]:
        """Stream the tree section line by line.

        Returns:
            Iterator yielding lines of the tree, each including a trailing newline.

        Raises:
            RuntimeError: If the tree has already been streamed.
            TraversalError: If a directory cannot be enumerated.
        """
        if self._tree_complete:
            raise RuntimeError("Tree has already been streamed")

        self._report("Generating directory tree...")
        for line in self._fs_tree.stream_tree_representation():
            yield line + "\n"

        self._tree_complete = True
        self._report("Directory tree generation complete!")

    def stream_contents_header(self) -> Iterator[str]:
        """Stream the line introducing the contents section.

        Raises:
            RuntimeError: If the contents header has already been streamed.
        """
        if self._contents_header_complete:
            raise RuntimeError("Contents header has already been streamed")

        yield CONTENTS_HEADER
        self._contents_header_complete = True

    def stream_contents(self) -> Iterator[str]:
        """Stream the contents section file by file.

        Returns:
            Iterator yielding the pieces of each included file's block.

        Raises:
            RuntimeError: If contents have already been streamed.
            TraversalError: If a directory cannot be enumerated.
        """
        if self._contents_complete:
            raise RuntimeError("Contents have already been streamed")

        self._report("Writing file contents...")
        for file_path, _relative_path, content_iter in self._content_printer.yield_file_contents():
            self._report(f"Processing code file: {display_text(file_path)}")
            errors_before = self.read_error_count
            yield from content_iter
            self._included_file_count += 1
            if self.read_error_count > errors_before:
                reason = self._content_printer.read_errors[-1].reason
                self._report(f"Error reading file {display_text(file_path)}: {reason}")

        self._contents_complete = True
        self._report("File content writing complete!")

    def stream_document(self) -> Iterator[str]:
        """Stream the complete document in its fixed section order."""
        yield from self.stream_header()
        yield from self.stream_tree()
        yield from self.stream_contents_header()
        yield from self.stream_contents()


class CodeTree(StreamingCodeTree):
    """Complete document generator that produces everything immediately.

    This class extends StreamingCodeTree but builds the whole document during
    initialization. It requires enough memory to hold the text of every included
    file; use StreamingCodeTree for large directories.

    Example:
        >>> document = CodeTree(Config.from_root("src")).document  # doctest: +SKIP
        >>> document.splitlines()[0]  # doctest: +SKIP
        'Directory Tree and Code Contents'
    """

    def __init__(self, config: Config, progress: Optional[ProgressCallback] = None) -> None:
        super().__init__(config, progress=progress)
        self._document = "".join(self.stream_document())

    @property
    def document(self) -> str:
        """The complete output document."""
        return self._document
