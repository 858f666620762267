from typing import Optional


class TreeReadError(Exception):
    """
    Exception raised when a workspace tree cannot be built.

    Raised for any failure during the recursive descent: the directory cannot be
    enumerated (missing, not a directory, access denied) or the type of one of its
    entries cannot be determined. The first failure aborts the whole build, so the
    caller never sees a partially populated tree.

    Attributes:
        path (str): The path whose read failed. For nested failures this is the
            offending subdirectory or entry, not the workspace root.
        cause (OSError): The underlying operating system error.
        errno (Optional[int]): Error number copied from the cause, if any.

    Example:
        >>> error = TreeReadError("/missing", FileNotFoundError(2, "No such file or directory"))
        >>> str(error)
        "Failed to read directory '/missing': No such file or directory"
        >>> error.errno
        2
    """

    def __init__(self, path: str, cause: OSError) -> None:
        """
        Initialize the exception from the failing path and the OS error.

        Args:
            path (str): The path that could not be read.
            cause (OSError): The error raised by the operating system.
        """
        self.path = path
        self.cause = cause
        self.errno: Optional[int] = cause.errno
        reason = cause.strerror or str(cause)
        super().__init__(f"Failed to read directory '{path}': {reason}")

    @property
    def is_permission_error(self) -> bool:
        """True if the read failed because access was denied."""
        return isinstance(self.cause, PermissionError)
