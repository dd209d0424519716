"""Node representation for file system entries in the tree."""

from typing import Any, Optional

from anytree import Node

from codetree.types import FileType


class FileSystemNode(Node):  # type: ignore
    """Node class representing a file system entry in the traversal tree.

    Extends anytree.Node with the entry type and its path relative to the traversal
    root. Depth, ancestry and pre-order iteration come from anytree; the root node
    has depth 0.

    Attributes:
        name (str): The bare name of the entry (last path component).
        parent (Optional[FileSystemNode]): The parent node in the tree.
        file_type (FileType): What kind of entry this node represents.
        relative_path (str): Path from the root using "/" separators, "" for the root.
        children (tuple[FileSystemNode]): The child nodes (inherited from anytree.Node).

    Example:
        >>> root = FileSystemNode("project", file_type=FileType.DIRECTORY)
        >>> src = FileSystemNode("src", parent=root, file_type=FileType.DIRECTORY, relative_path="src")
        >>> main = FileSystemNode("main.rs", parent=src, relative_path="src/main.rs")
        >>> main.depth
        2
        >>> src.is_dir
        True
    """

    def __init__(
        self,
        name: str,
        parent: Optional["FileSystemNode"] = None,
        file_type: FileType = FileType.FILE,
        relative_path: str = "",
        **kwargs: Any,
    ) -> None:
        super().__init__(name, parent, **kwargs)
        self.file_type = file_type
        self.relative_path = relative_path

    @property
    def is_dir(self) -> bool:
        return self.file_type is FileType.DIRECTORY

    @property
    def is_file(self) -> bool:
        return self.file_type is FileType.FILE

    @property
    def is_symlink(self) -> bool:
        return self.file_type is FileType.SYMLINK
