"""Node representation for workspace entries in the tree."""

import os
from typing import Any, Dict, Iterable, Optional

from anytree import Node, TreeError


def display_text(text: str) -> str:
    """Return text that always encodes as UTF-8.

    Names that are not valid UTF-8 come back from the filesystem with surrogate
    escapes. Their undecodable bytes are shown as U+FFFD.

    Example:
        >>> display_text(os.fsdecode(b"bad\\xff.txt")) == "bad\\ufffd.txt"
        True
    """
    return os.fsencode(text).decode("utf-8", "replace")


class TreeNode(Node):  # type: ignore
    """Node class representing a file or directory in a workspace tree.

    Extends anytree.Node with the entry's full path and a directory flag. Only
    directory nodes may have children; attaching a child to a file node raises
    anytree.TreeError.

    The full path is stored as `file_path` because anytree.Node already uses
    `path` for the tuple of nodes from the tree root. The serialized form uses
    the `path` key.

    Attributes:
        name (str): Base name of the entry, exactly as enumerated.
        file_path (str): Full path of the entry, parent path joined with name.
        is_directory (bool): True if the entry is a directory.
        children (tuple[TreeNode]): Ordered child nodes (inherited from anytree.Node).

    Example:
        >>> src = TreeNode("src", "/ws/src", is_directory=True)
        >>> main = TreeNode("main.py", "/ws/src/main.py", parent=src)
        >>> src.to_dict()
        {'name': 'src', 'path': '/ws/src', 'isDirectory': True, 'children': [{'name': 'main.py', 'path': '/ws/src/main.py', 'isDirectory': False}]}
    """

    def __init__(
        self,
        name: str,
        file_path: str,
        is_directory: bool = False,
        parent: Optional["TreeNode"] = None,
        children: Optional[Iterable["TreeNode"]] = None,
        **kwargs: Any,
    ) -> None:
        # Set before Node.__init__ attaches children, so _pre_attach_children sees it
        self.file_path = file_path
        self.is_directory = is_directory
        super().__init__(name, parent=parent, children=children, **kwargs)

    def _pre_attach(self, parent: "TreeNode") -> None:
        if not getattr(parent, "is_directory", False):
            raise TreeError(f"Cannot attach {self.name!r} to non-directory {parent.name!r}")

    def to_dict(self) -> Dict[str, Any]:
        """Serialize the node and its subtree.

        The `children` key is present for every directory, possibly as an empty
        list, and absent for every other entry. Names and paths go through
        display_text, so the result is always valid UTF-8.
        """
        data: Dict[str, Any] = {
            "name": display_text(self.name),
            "path": display_text(self.file_path),
            "isDirectory": self.is_directory,
        }
        if self.is_directory:
            data["children"] = [child.to_dict() for child in self.children]
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TreeNode":
        """Rebuild a node and its subtree from the serialized form.

        Raises:
            ValueError: If a non-directory entry carries a `children` key.
        """
        is_directory = bool(data["isDirectory"])
        if not is_directory and "children" in data:
            raise ValueError(f"File entry {data['name']!r} must not have children")
        children = [cls.from_dict(child) for child in data.get("children", [])]
        return cls(data["name"], data["path"], is_directory=is_directory, children=children)
