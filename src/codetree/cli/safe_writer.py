"""Safe output writing utilities for the codetree CLI.

This module provides a writing interface for the output document that creates
the file up front, stops cleanly on interruption and always releases the file.
"""

import types
from pathlib import Path
from typing import Optional, TextIO, Type

from codetree.cli.signal_handler import interrupt_handler
from codetree.exceptions import InterruptedRunError, OutputFileError
from codetree.types import PathType


class SafeWriter:
    """Safe writing interface for the output document that stops on Ctrl+C.

    The output file is created, or truncated if it already exists, when the writer is
    constructed, before anything is written. Text is written as UTF-8 with newlines
    left untranslated so file contents are reproduced verbatim.

    Attributes:
        path: The output file path.
    """

    def __init__(self, path: PathType):
        """Create or truncate the output file.

        Args:
            path: Path of the output document.

        Raises:
            OutputFileError: If the file cannot be created or truncated.
        """
        self.path = Path(path)
        self._closed = False

        try:
            self._file_obj: TextIO = self.path.open("w", encoding="utf-8", newline="")
        except OSError as e:
            raise OutputFileError(str(self.path), e) from e

    @property
    def closed(self) -> bool:
        return self._closed

    def write(self, data: str) -> None:
        """Safely write data with signal checking.

        Args:
            data: String data to write.

        Raises:
            InterruptedRunError: If SIGINT was received since the handler was installed.
            OSError: If an I/O error occurs during writing.
            ValueError: If attempting to write to a closed writer.
        """
        if self._closed:
            raise ValueError("Cannot write to closed SafeWriter")

        if interrupt_handler.interrupted.is_set():
            raise InterruptedRunError()

        self._file_obj.write(data)

    def close(self) -> None:
        """Flush and close the output file.

        The writer is marked as closed even if the underlying close fails.
        """
        if self._closed:
            return

        try:
            self._file_obj.close()
        finally:
            self._closed = True

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        """Exit the context manager and close the file.

        If closing fails while an exception is already propagating from the with
        block, the original exception takes priority.

        Args:
            exc_type: The exception type, if an exception was raised.
            exc_val: The exception value, if an exception was raised.
            exc_tb: The exception traceback, if an exception was raised.
        """
        try:
            self.close()
        except OSError:
            if exc_type is None:
                raise
