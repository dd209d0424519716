"""File system tree representation with directory pruning.

This module provides the main FileSystemTree class, which walks a directory in
pre-order, prunes directories matched by exclusion rules, and exposes the visited
entries both as an anytree structure and as a flat stream.
"""

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional, Tuple

from anytree import PreOrderIter

from codetree.exceptions import TraversalError
from codetree.exclusion_rules.base_rules import BaseExclusionRules
from codetree.file_system_tree.file_system_node import FileSystemNode
from codetree.types import FileType, PathType

INDENT = "    "
BRANCH = "├── "


def display_text(text: str) -> str:
    """Make a file name or path safe to write as UTF-8.

    Names that are not valid in the filesystem encoding reach Python as lone
    surrogates. They are turned back into their original bytes and decoded with
    replacement characters, so the entry is still shown instead of failing the write.
    The real name is still what is used to open the file.

    Args:
        text: A name, path, or message that may contain such a name.

    Returns:
        The text with undecodable bytes replaced by U+FFFD.

    Example:
        >>> display_text("bad\\udcff.rs") == "bad\\ufffd.rs"
        True
        >>> display_text("main.rs")
        'main.rs'
    """
    try:
        raw = os.fsencode(text)
    except UnicodeEncodeError:
        raw = text.encode("utf-8", "replace")
    return raw.decode("utf-8", "replace")


@dataclass(frozen=True)
class TraversalEntry:
    """A single entry visited during traversal.

    Attributes:
        path: The root as given joined with relative_path. May contain undecodable
            name bytes as surrogates; pass it through display_text before writing it.
        relative_path: Path from the root using "/" separators, "" for the root.
        depth: Distance from the root, which has depth 0.
        file_type: What kind of entry was visited.
    """

    path: str
    relative_path: str
    depth: int
    file_type: FileType


class FileSystemTree:
    """A pre-order tree of a directory structure with support for exclusion rules.

    The tree is built lazily on first access by a depth-first walk that visits each
    directory before its children and finishes one subtree before moving on to the
    next sibling. Siblings are visited in name order, so the walk is deterministic for
    a given directory state.

    Before descending into any directory below the root, the exclusion rules are
    consulted; an excluded directory is dropped together with its whole subtree. The
    root itself is never tested.

    Symbolic links are recorded as symlink entries and never followed.

    Any directory that cannot be enumerated aborts the walk with a TraversalError.

    Attributes:
        root_path (Path): The root directory.
        root_label (str): The root exactly as it was given, used as the prefix of entry paths.
        exclusion_rules (Optional[BaseExclusionRules]): Rules for pruning directories.

    Example:
        >>> tree = FileSystemTree("src")  # doctest: +SKIP
        >>> print(tree.get_tree_representation())  # doctest: +SKIP
        ├── src
            ├── main.rs
            ├── util
                ├── mod.rs
    """

    def __init__(
        self,
        root_path: PathType,
        exclusion_rules: Optional[BaseExclusionRules] = None,
        root_label: Optional[str] = None,
    ) -> None:
        self.root_path = Path(root_path)
        # Path() normalizes "foo//bar/" and "./"; entry paths keep the spelling that was given
        self.root_label = root_label if root_label is not None else os.fspath(root_path)
        self.exclusion_rules = exclusion_rules
        self._tree: Optional[FileSystemNode] = None
        self._file_count: int = 0
        self._directory_count: int = 0
        self._entry_count: int = 0

    def get_tree(self) -> Optional[FileSystemNode]:
        """Get the root node of the filesystem tree, building it if necessary.

        Returns:
            The root node of the tree.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            TraversalError: If any directory cannot be enumerated.
        """
        if self._tree is None:
            self._build_tree()
        return self._tree

    def _build_tree(self) -> None:
        """Walk the filesystem from root_path and count the visited entries.

        Raises:
            FileNotFoundError: If the root path doesn't exist.
            NotADirectoryError: If the root path isn't a directory.
            TraversalError: If any directory cannot be enumerated.
        """
        if not self.root_path.exists():
            raise FileNotFoundError(f"Root path does not exist: {self.root_path}")
        if not self.root_path.is_dir():
            raise NotADirectoryError(f"Root path is not a directory: {self.root_path}")

        root = FileSystemNode(self._root_name(), file_type=FileType.DIRECTORY)
        self._add_children(root, self.root_path)
        self._tree = root
        self._count_entries()

    def _root_name(self) -> str:
        # The last component of the root as given; "." and ".." have no name
        name = self.root_path.name
        return "" if name == ".." else name

    def _classify(self, entry: "os.DirEntry[str]") -> FileType:
        if entry.is_symlink():
            return FileType.SYMLINK
        if entry.is_dir(follow_symlinks=False):
            return FileType.DIRECTORY
        if entry.is_file(follow_symlinks=False):
            return FileType.FILE
        return FileType.OTHER

    def _add_children(self, node: FileSystemNode, path: Path) -> None:
        """Recursively attach the children of a directory node."""
        try:
            with os.scandir(path) as it:
                entries = sorted(((entry, self._classify(entry)) for entry in it), key=lambda pair: pair[0].name)
        except OSError as e:
            raise TraversalError(str(path), e) from e

        for entry, file_type in entries:
            relative_path = f"{node.relative_path}/{entry.name}" if node.relative_path else entry.name
            if (
                file_type is FileType.DIRECTORY
                and self.exclusion_rules is not None
                and self.exclusion_rules.exclude(relative_path)
            ):
                continue

            child = FileSystemNode(entry.name, parent=node, file_type=file_type, relative_path=relative_path)
            if file_type is FileType.DIRECTORY:
                self._add_children(child, path / entry.name)

    def _count_entries(self) -> None:
        """Count visited files, directories (excluding root) and all entries (including root)."""
        self._file_count = 0
        self._directory_count = 0
        self._entry_count = 0

        if self._tree is None:
            return

        for node in PreOrderIter(self._tree):
            self._entry_count += 1
            if node.is_dir:
                self._directory_count += 1
            elif node.is_file:
                self._file_count += 1
        self._directory_count -= 1  # Subtract 1 to exclude the root directory from the count

    def _display_path(self, relative_path: str) -> str:
        if not relative_path:
            return self.root_label
        return os.path.join(self.root_label, *relative_path.split("/"))

    def get_file_count(self) -> int:
        """Get the number of regular files visited."""
        if self._tree is None:
            self._build_tree()
        return self._file_count

    def get_directory_count(self) -> int:
        """Get the number of directories visited, excluding the root."""
        if self._tree is None:
            self._build_tree()
        return self._directory_count

    def get_entry_count(self) -> int:
        """Get the number of visited entries of any type, including the root."""
        if self._tree is None:
            self._build_tree()
        return self._entry_count

    def iterate_entries(self) -> Iterator[TraversalEntry]:
        """Iterate over every visited entry in pre-order, starting with the root.

        Yields:
            A TraversalEntry for each visited entry.

        Raises:
            TraversalError: If the tree has not been built yet and a directory cannot be enumerated.

        Example:
            >>> tree = FileSystemTree("src")  # doctest: +SKIP
            >>> [(e.relative_path, e.depth) for e in tree.iterate_entries()]  # doctest: +SKIP
            [('', 0), ('main.rs', 1), ('util', 1), ('util/mod.rs', 2)]
        """
        if self._tree is None:
            self._build_tree()
        if self._tree is None:
            return

        for node in PreOrderIter(self._tree):
            yield TraversalEntry(
                path=self._display_path(node.relative_path),
                relative_path=node.relative_path,
                depth=node.depth,
                file_type=node.file_type,
            )

    def iterate_files(self) -> Iterator[Tuple[str, str]]:
        """Iterate over the regular files in traversal order.

        Symlinks and special files are not included.

        Yields:
            Pairs of (path, relative_path) for each file.
        """
        for entry in self.iterate_entries():
            if entry.file_type is FileType.FILE:
                yield entry.path, entry.relative_path

    def stream_tree_representation(self) -> Iterator[str]:
        """Generate the indented tree listing one line at a time.

        Each visited entry produces one line: the indent repeated once per level of
        depth, a branch marker, then the entry's bare name. Branches are not joined;
        this is a flat indented listing.

        Yields:
            Lines of the tree representation, without trailing newlines.

        Example:
            >>> tree = FileSystemTree("src")  # doctest: +SKIP
            >>> for line in tree.stream_tree_representation():  # doctest: +SKIP
            ...     print(line)
            ├── src
                ├── main.rs
        """
        if self._tree is None:
            self._build_tree()
        if self._tree is None:
            return

        for node in PreOrderIter(self._tree):
            yield f"{INDENT * node.depth}{BRANCH}{display_text(node.name)}"

    def get_tree_representation(self) -> str:
        """Get the complete tree listing as a single string."""
        return "\n".join(self.stream_tree_representation())

    def refresh(self) -> None:
        """Discard the cached tree and walk the filesystem again."""
        self._tree = None
        self._file_count = 0
        self._directory_count = 0
        self._entry_count = 0
        self._build_tree()
