"""File system tree representation with directory pruning.

This module provides classes for walking a directory in pre-order, pruning ignored
directories, and rendering the visited entries as an indented listing.
"""

from .file_system_node import FileSystemNode
from .file_system_tree import FileSystemTree, TraversalEntry, display_text

__all__ = [
    "FileSystemNode",
    "FileSystemTree",
    "TraversalEntry",
    "display_text",
]
