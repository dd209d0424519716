"""Directory tree and source code concatenation utilities.

This package walks a directory, renders an indented listing of what it finds,
and gathers the text of selected source and configuration files into a single
document.
"""

from importlib.metadata import PackageNotFoundError, version

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("codetree")
except PackageNotFoundError:
    __version__ = "unknown"
