"""Output writer for the workspace-tree CLI.

Owns the output encoding: text is written as UTF-8 and anything that cannot be
encoded, such as a surrogate-escaped file name, is replaced instead of failing
halfway through a tree. Each write hands one complete payload to the file
descriptor.
"""

import os
import sys
import types
from typing import BinaryIO, Iterable, Optional, Type

from workspace_tree.cli.signal_handler import signal_handler
from workspace_tree.types import PathType

ENCODING = "utf-8"
ENCODING_ERRORS = "replace"


def encode_output(text: str) -> bytes:
    """Encode text for output, replacing characters UTF-8 cannot represent.

    Example:
        >>> encode_output("a\\udcffb")
        b'a?b'
    """
    return text.encode(ENCODING, ENCODING_ERRORS)


class SafeWriter:
    """Writes CLI output to stdout or to a file.

    Nothing more is written once SIGPIPE or SIGINT has been received; the
    attempt raises BrokenPipeError, as does a reader closing the pipe.

    Attributes:
        fd: File descriptor written to.
        closed: Whether close() has been called.
    """

    def __init__(self, output: Optional[PathType] = None) -> None:
        """Open the output.

        Args:
            output: File to create or truncate. None writes to stdout, which is
                left open on close.
        """
        self._file: Optional[BinaryIO] = None
        if output is None:
            self.fd = sys.stdout.fileno()
        else:
            self._file = open(os.fspath(output), "wb", buffering=0)
            self.fd = self._file.fileno()
        self.closed = False

    def write(self, text: str) -> None:
        """Write text as a single payload.

        Raises:
            BrokenPipeError: If an interrupting signal was received or the reader is gone.
            ValueError: If the writer has been closed.
            OSError: For any other I/O failure.
        """
        if self.closed:
            raise ValueError("I/O operation on closed SafeWriter")

        view = memoryview(encode_output(text))
        # os.write may accept only part of a large payload on a pipe
        while view:
            if signal_handler.interrupted:
                raise BrokenPipeError("Output interrupted by signal")
            written = os.write(self.fd, view)
            view = view[written:]

    def write_lines(self, lines: Iterable[str]) -> None:
        """Write each line followed by a newline, all in one payload."""
        self.write("".join(line + "\n" for line in lines))

    def close(self) -> None:
        if self.closed:
            return
        self.closed = True
        if self._file is not None:
            self._file.close()

    def __enter__(self) -> "SafeWriter":
        return self

    def __exit__(
        self,
        exc_type: Optional[Type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[types.TracebackType],
    ) -> None:
        self.close()
