"""Command-line argument parsing for workspace-tree.

This module defines the command-line interface for workspace-tree,
handling argument parsing and validation.
"""

import argparse
from pathlib import Path
from typing import Any, List, Optional, Sequence, Type, Union

from workspace_tree import __version__
from workspace_tree.exclusion_rules.base_rules import BaseExclusionRules


def create_exclusion_action(exclusion_rules: BaseExclusionRules) -> Type[argparse.Action]:
    """Create an action class that feeds -e/-i options into an exclusion rules object.

    Rules are added while the command line is parsed, so file-based and pattern
    exclusions keep the order in which they were given.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        A custom action class for use with argparse.
    """

    class ExclusionRulesAction(argparse.Action):
        def __init__(self, option_strings: List[str], dest: str, **kwargs: Any) -> None:
            super().__init__(option_strings, dest, **kwargs)

        def __call__(
            self,
            parser: argparse.ArgumentParser,
            namespace: argparse.Namespace,
            values: Union[str, Sequence[Any], None],
            option_string: Optional[str] = None,
        ) -> None:
            if values is None:
                return

            if option_string in ("-e", "--exclude"):
                try:
                    exclusion_rules.load_rules(Path(str(values)))
                except FileNotFoundError as e:
                    parser.error(str(e))
            else:  # -i/--ignore
                exclusion_rules.add_rule(str(values))

            recorded = getattr(namespace, self.dest, None) or []
            recorded.append(values)
            setattr(namespace, self.dest, recorded)

    return ExclusionRulesAction


def create_parser(exclusion_rules: BaseExclusionRules) -> argparse.ArgumentParser:
    """Create and configure the command-line argument parser.

    Args:
        exclusion_rules: The exclusion rules object to update during parsing.

    Returns:
        An ArgumentParser instance configured with workspace-tree's options.
    """
    description = """
    workspace-tree: print the file-browser tree of a workspace folder.

    The tree lists the folder's entries recursively with directories before
    files, each group ordered by case-insensitive name. Hidden entries (names
    starting with '.') and node_modules are always left out. Directories more
    than six levels below the folder are listed without their contents.
    """

    epilog = """
    Examples:
      # Print the tree of a project
      workspace-tree /path/to/project

      # Emit the tree as JSON, as consumed by the editor UI
      workspace-tree -f json /path/to/project

      # Emit the folder-opened payload with the folder path
      workspace-tree -f json -w --indent 2 /path/to/project

      # Leave out more entries with gitignore-style rules
      workspace-tree -e .gitignore -i "*.log" /path/to/project

      # Expand symlinked directories
      workspace-tree -L /path/to/project

      # Print directory and file counts to stderr
      workspace-tree -s stderr /path/to/project
    """

    parser = argparse.ArgumentParser(
        prog="workspace-tree",
        description=description,
        epilog=epilog,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    parser.add_argument(
        "-V", "--version", action="version", version=f"workspace-tree {__version__}", help="Show the version and exit"
    )

    ExclusionAction = create_exclusion_action(exclusion_rules)

    parser.add_argument(
        "directory",
        type=Path,
        help="The workspace folder to read.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["text", "json"],
        default="text",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "-w",
        "--workspace",
        action="store_true",
        help="With --format json, wrap the tree in the folder-opened payload {\"path\", \"tree\"}.",
    )
    parser.add_argument(
        "--indent",
        type=int,
        metavar="N",
        help="Indent JSON output by N spaces (requires --format json).",
    )
    parser.add_argument(
        "-o",
        "--output",
        type=Path,
        metavar="FILE",
        help="Output file path. If not specified, output is written to stdout.",
    )
    parser.add_argument(
        "-e",
        "--exclude",
        metavar="FILE",
        action=ExclusionAction,
        help="File of gitignore-style patterns for entries to leave out (can be specified multiple times).",
    )
    parser.add_argument(
        "-i",
        "--ignore",
        metavar="PATTERN",
        action=ExclusionAction,
        help=(
            "Gitignore-style pattern for entries to leave out. Can be specified multiple times and is "
            "applied in order together with -e/--exclude. Patterns cannot bring back hidden entries "
            "or node_modules."
        ),
    )
    parser.add_argument(
        "-L",
        "--follow-symlinks",
        action="store_true",
        help="Expand symlinked directories. By default a symlink is listed as a file entry.",
    )
    parser.add_argument(
        "-s",
        "--summary",
        metavar="DEST",
        choices=["stderr", "stdout", "file"],
        help="Print directory and file counts. Valid destinations: stderr, stdout, file (requires -o)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Log each directory read to stderr.",
    )

    return parser


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Performs additional validation beyond what argparse can handle.

    Raises:
        ValueError: If any arguments fail validation.
    """
    if args.summary == "file" and not args.output:
        raise ValueError("--summary=file requires -o/--output to be specified")
    if args.format != "json":
        if args.workspace:
            raise ValueError("-w/--workspace requires --format json")
        if args.indent is not None:
            raise ValueError("--indent requires --format json")
