"""Device and inode identity used to detect directory cycles."""

import os
from typing import NamedTuple


class FileIdentifier(NamedTuple):
    """Identifies a directory by device ID and inode number.

    Two paths with the same identifier refer to the same directory, which is how
    the tree builder notices a followed symlink leading back into one of its own
    ancestors.

    Note:
        On Windows, inode numbers are handled differently than on Unix systems,
        but os.stat provides values usable for the same purpose.
    """

    device_id: int
    inode_number: int

    @classmethod
    def from_path(cls, path: str) -> "FileIdentifier":
        """Stat `path`, following symlinks.

        Raises:
            OSError: If the path cannot be stat'ed.
        """
        stat_info = os.stat(path)
        return cls(stat_info.st_dev, stat_info.st_ino)
