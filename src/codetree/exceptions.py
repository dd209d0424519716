from typing import Optional


class CodeTreeError(Exception):
    """
    Base class for errors that abort a codetree run.

    Per-file read failures are not represented here: they are recorded inline in the
    generated document and never interrupt processing.
    """

    pass


class TraversalError(CodeTreeError):
    """
    Exception raised when a directory cannot be enumerated during the walk.

    Traversal errors are fatal. The output document is left in whatever partial state
    it had reached when the error occurred.

    Attributes:
        path (str): The directory that could not be enumerated.
        cause (OSError): The underlying operating system error.

    Example:
        >>> error = TraversalError("/srv/project/private", PermissionError(13, "Permission denied"))
        >>> str(error)
        "Failed to traverse '/srv/project/private': [Errno 13] Permission denied"
    """

    def __init__(self, path: str, cause: OSError) -> None:
        """
        Initialize the exception with the failing directory and its cause.

        Args:
            path (str): The directory that could not be enumerated.
            cause (OSError): The error raised while listing the directory.
        """
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to traverse '{path}': {cause}")

    @property
    def is_permission_error(self) -> bool:
        return isinstance(self.cause, PermissionError)


class OutputFileError(CodeTreeError):
    """
    Exception raised when the output document cannot be created or truncated.

    Attributes:
        path (str): The output path that could not be opened for writing.
        cause (Optional[OSError]): The underlying operating system error, if any.

    Example:
        >>> error = OutputFileError("/missing/dir/out.txt", FileNotFoundError(2, "No such file or directory"))
        >>> str(error)
        "Cannot create output file '/missing/dir/out.txt': [Errno 2] No such file or directory"
    """

    def __init__(self, path: str, cause: Optional[OSError] = None) -> None:
        self.path = path
        self.cause = cause
        message = f"Cannot create output file '{path}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)

    @property
    def is_permission_error(self) -> bool:
        return isinstance(self.cause, PermissionError)


class InterruptedRunError(CodeTreeError):
    """
    Exception raised when a run is stopped by Ctrl+C before the document is complete.

    Example:
        >>> str(InterruptedRunError())
        'Interrupted before the output was complete'
    """

    def __init__(self) -> None:
        super().__init__("Interrupted before the output was complete")
