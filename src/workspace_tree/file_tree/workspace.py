"""Workspace folders opened from the editor's folder picker."""

import logging
import os
from typing import Any, Dict, Iterable, List, Optional, Tuple

from anytree import PreOrderIter

from workspace_tree.exclusion_rules.base_rules import BaseExclusionRules
from workspace_tree.file_tree.tree_builder import build_tree
from workspace_tree.file_tree.tree_node import TreeNode, display_text
from workspace_tree.types import PathType

logger = logging.getLogger(__name__)

FILE_URL_PREFIX = "file://"


class WorkspaceFolder:
    """A folder opened as the editor workspace, together with its tree.

    This is the payload delivered to the UI when a folder is opened. The tree is
    held under a directory node carrying the folder's own name and path.

    Attributes:
        path (str): Path of the opened folder, as supplied by the picker.
        root (TreeNode): Directory node for the folder itself.
    """

    def __init__(self, path: str, tree: Iterable[TreeNode]) -> None:
        self.path = path
        self.root = TreeNode(os.path.basename(os.path.normpath(path)), path, is_directory=True, children=tree)

    @property
    def name(self) -> str:
        return str(self.root.name)

    @property
    def tree(self) -> List[TreeNode]:
        """The folder's top-level entries."""
        return list(self.root.children)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize as the `folder-opened` event payload."""
        return {"path": display_text(self.path), "tree": [node.to_dict() for node in self.root.children]}


def strip_file_url(path: str) -> str:
    """Remove a leading `file://` from a picker result.

    Example:
        >>> strip_file_url("file:///home/user/project")
        '/home/user/project'
        >>> strip_file_url("/home/user/project")
        '/home/user/project'
    """
    if path.startswith(FILE_URL_PREFIX):
        return path[len(FILE_URL_PREFIX) :]
    return path


def open_folder(
    path: Optional[PathType],
    exclusion_rules: Optional[BaseExclusionRules] = None,
    follow_symlinks: bool = False,
) -> Optional[WorkspaceFolder]:
    """Open the folder chosen in the folder picker as a workspace.

    Args:
        path: The chosen folder, or None if the picker was cancelled.
        exclusion_rules: Additional exclusion rules passed to the tree builder.
        follow_symlinks: Whether symlinked directories are expanded.

    Returns:
        The opened workspace, or None if nothing was chosen.

    Raises:
        TreeReadError: If the folder's tree cannot be built.
    """
    if path is None:
        logger.debug("Folder selection cancelled")
        return None

    folder_path = strip_file_url(os.fspath(path))
    tree = build_tree(folder_path, exclusion_rules=exclusion_rules, follow_symlinks=follow_symlinks)
    logger.debug("Opened workspace %s with %d top-level entries", folder_path, len(tree))
    return WorkspaceFolder(folder_path, tree)


def count_entries(nodes: Iterable[TreeNode]) -> Tuple[int, int]:
    """Count the directories and files in a built tree.

    Returns:
        A (directories, files) pair. Entries beyond the depth limit were never
        read and are not counted.
    """
    directories = 0
    files = 0
    for top in nodes:
        for node in PreOrderIter(top):
            if node.is_directory:
                directories += 1
            else:
                files += 1
    return directories, files
