"""Workspace directory tree utilities.

This package builds the ordered, filtered and depth-limited directory tree that
backs an editor's file-browser panel when a folder is opened as a workspace.
"""

from importlib.metadata import PackageNotFoundError, version

from workspace_tree.exceptions import TreeReadError
from workspace_tree.file_tree.tree_builder import MAX_DEPTH, build_tree, read_dir
from workspace_tree.file_tree.tree_node import TreeNode
from workspace_tree.file_tree.workspace import WorkspaceFolder, count_entries, open_folder

# Expose the version for both programmatic use and CLI
try:
    __version__ = version("workspace-tree")
except PackageNotFoundError:
    __version__ = "unknown"

__all__ = [
    "MAX_DEPTH",
    "TreeNode",
    "TreeReadError",
    "WorkspaceFolder",
    "build_tree",
    "count_entries",
    "open_folder",
    "read_dir",
]
