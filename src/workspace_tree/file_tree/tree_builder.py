"""Recursive, depth-limited builder for workspace trees.

The builder reads a workspace folder depth-first and returns its immediate
entries as ordered TreeNode subtrees. Every build reads the filesystem afresh;
nothing is cached between calls.

Ordering:
    Among siblings, directories come before files. Within each group names are
    compared after folding with str.lower(), so the order does not depend on
    the filesystem's enumeration order or on the current locale.

Depth limit:
    The workspace root is read at depth 0. A directory read at depth MAX_DEPTH
    still lists its entries, but subdirectories found there are returned with
    no children. Truncation is silent.

Symbolic Link Behavior:
    By default symlinks are not followed: a symlink to a directory is a leaf
    entry. With follow_symlinks=True the link target's type is used and linked
    directories are expanded. A linked directory that is already being read
    further up the current branch is returned with no children instead of
    being read again.

Errors:
    Any OSError while listing a directory or inspecting an entry aborts the
    whole build with TreeReadError. No partial tree is returned.
"""

import logging
import os
from typing import FrozenSet, List, Optional, Tuple

from workspace_tree.exceptions import TreeReadError
from workspace_tree.exclusion_rules.base_rules import BaseExclusionRules
from workspace_tree.exclusion_rules.composite_rules import CompositeExclusionRules
from workspace_tree.exclusion_rules.workspace_rules import WorkspaceExclusionRules
from workspace_tree.file_tree.file_identifier import FileIdentifier
from workspace_tree.file_tree.tree_node import TreeNode
from workspace_tree.types import PathType

logger = logging.getLogger(__name__)

MAX_DEPTH = 5

# (name, full path, root-relative prefix for its children, is_directory)
_Entry = Tuple[str, str, str, bool]


def build_tree(
    root_path: PathType,
    exclusion_rules: Optional[BaseExclusionRules] = None,
    follow_symlinks: bool = False,
) -> List[TreeNode]:
    """Build the workspace tree for a directory.

    The root itself is not wrapped in a node; the returned list holds the root's
    immediate entries, each carrying its own subtree.

    Args:
        root_path: Directory to read. It is not validated beforehand; a missing
            path or a regular file fails like any other read.
        exclusion_rules: Additional rules applied after the fixed policy that
            drops hidden entries and `node_modules`. They can only remove entries.
        follow_symlinks: Whether symlinked directories are expanded.

    Returns:
        Ordered top-level nodes. An empty directory gives an empty list.

    Raises:
        TreeReadError: If any directory in the walk cannot be listed or any entry's
            type cannot be determined.

    Example:
        >>> nodes = build_tree("/path/to/project")  # doctest: +SKIP
        >>> [node.name for node in nodes]  # doctest: +SKIP
        ['docs', 'src', 'README.md']
    """
    rules: BaseExclusionRules = WorkspaceExclusionRules()
    if exclusion_rules is not None:
        rules = CompositeExclusionRules([rules, exclusion_rules])

    root = os.fspath(root_path)
    logger.debug("Building workspace tree for %s", root)

    ancestors: FrozenSet[FileIdentifier] = frozenset()
    if follow_symlinks:
        ancestors = frozenset({_identify(root)})

    return _build_children(root, "", 0, rules, follow_symlinks, ancestors)


def read_dir(path: PathType) -> List[TreeNode]:
    """List a directory as a workspace tree using the default policy."""
    return build_tree(path)


def _build_children(
    dir_path: str,
    relative_path: str,
    depth: int,
    rules: BaseExclusionRules,
    follow_symlinks: bool,
    ancestors: FrozenSet[FileIdentifier],
) -> List[TreeNode]:
    if depth > MAX_DEPTH:
        logger.debug("Depth limit reached, not expanding %s", dir_path)
        return []

    entries = _read_entries(dir_path, relative_path, rules, follow_symlinks)
    # Exact name breaks ties between names that differ only in case
    entries.sort(key=lambda entry: (not entry[3], entry[0].lower(), entry[0]))

    nodes: List[TreeNode] = []
    for name, entry_path, entry_relative_path, is_dir in entries:
        if not is_dir:
            nodes.append(TreeNode(name, entry_path))
            continue

        children: List[TreeNode] = []
        if follow_symlinks:
            file_id = _identify(entry_path)
            if file_id in ancestors:
                logger.debug("Symlink loop detected at %s, not expanding", entry_path)
            else:
                children = _build_children(
                    entry_path, entry_relative_path, depth + 1, rules, follow_symlinks, ancestors | {file_id}
                )
        else:
            children = _build_children(entry_path, entry_relative_path, depth + 1, rules, follow_symlinks, ancestors)

        nodes.append(TreeNode(name, entry_path, is_directory=True, children=children))

    return nodes


def _read_entries(
    dir_path: str,
    relative_path: str,
    rules: BaseExclusionRules,
    follow_symlinks: bool,
) -> List[_Entry]:
    """List one directory, dropping excluded entries."""
    logger.debug("Reading directory %s", dir_path)
    entries: List[_Entry] = []
    try:
        with os.scandir(dir_path) as it:
            for entry in it:
                # Checked on the bare name first so hidden entries are never stat'ed
                if WorkspaceExclusionRules.exclude_name(entry.name):
                    continue

                try:
                    is_dir = entry.is_dir(follow_symlinks=follow_symlinks)
                except OSError as e:
                    raise TreeReadError(entry.path, e) from e

                entry_relative_path = f"{relative_path}{entry.name}"
                if rules.exclude(entry_relative_path + "/" if is_dir else entry_relative_path):
                    continue

                entries.append((entry.name, os.path.join(dir_path, entry.name), entry_relative_path + "/", is_dir))
    except OSError as e:
        raise TreeReadError(dir_path, e) from e

    return entries


def _identify(path: str) -> FileIdentifier:
    try:
        return FileIdentifier.from_path(path)
    except OSError as e:
        raise TreeReadError(path, e) from e
