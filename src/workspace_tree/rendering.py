"""Text and JSON output for workspace trees."""

import json
from typing import Iterator, Optional, Sequence, Union

from workspace_tree.file_tree.tree_node import TreeNode, display_text
from workspace_tree.file_tree.workspace import WorkspaceFolder


def stream_tree_representation(nodes: Sequence[TreeNode], root_name: str) -> Iterator[str]:
    """Generate a tree representation one line at a time.

    Generates output similar to the Unix 'tree' command. Nodes are written in
    the order the builder produced them; nothing is re-sorted here. Names that
    are not valid UTF-8 are shown with U+FFFD in place of the bad bytes.

    Args:
        nodes: Top-level nodes of the workspace.
        root_name: Name printed on the first line.

    Yields:
        Lines of the tree representation, including the connecting lines.

    Example:
        >>> src = TreeNode("src", "/ws/src", is_directory=True)
        >>> _ = TreeNode("main.py", "/ws/src/main.py", parent=src)
        >>> readme = TreeNode("README.md", "/ws/README.md")
        >>> for line in stream_tree_representation([src, readme], "ws"):
        ...     print(line)
        ws/
        ├── src/
        │   └── main.py
        └── README.md
    """
    yield f"{display_text(root_name)}/"
    yield from _write_nodes(nodes, "")


def _write_nodes(nodes: Sequence[TreeNode], prefix: str) -> Iterator[str]:
    for i, node in enumerate(nodes):
        is_last = i == len(nodes) - 1
        connector = "└── " if is_last else "├── "
        suffix = "/" if node.is_directory else ""
        yield f"{prefix}{connector}{display_text(node.name)}{suffix}"

        if node.is_directory:
            yield from _write_nodes(node.children, prefix + ("    " if is_last else "│   "))


def get_tree_representation(nodes: Sequence[TreeNode], root_name: str) -> str:
    """Get the complete tree representation as a string."""
    return "\n".join(stream_tree_representation(nodes, root_name))


def to_json(data: Union[Sequence[TreeNode], WorkspaceFolder], indent: Optional[int] = None) -> str:
    """Serialize a tree or an opened workspace as JSON.

    A sequence of nodes becomes a JSON array of node objects. A WorkspaceFolder
    becomes its `{"path": ..., "tree": [...]}` payload.
    """
    if isinstance(data, WorkspaceFolder):
        payload = data.to_dict()
    else:
        payload = [node.to_dict() for node in data]
    return json.dumps(payload, indent=indent, ensure_ascii=False)
