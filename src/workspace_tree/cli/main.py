"""Command-line interface for workspace-tree.

Reads a workspace folder with the tree builder and writes the result as a
tree diagram or as the JSON consumed by the editor's file-browser panel.

Signal Handling Notes:
    - SIGPIPE: handled when the output pipe is closed (e.g. piping to `head`) on Unix-like systems
    - SIGINT: handled for a clean exit on Ctrl+C

Exit Codes:
    0: Successful completion
    1: Runtime error, including a workspace folder that cannot be read
    2: Command-line syntax error
    126: Permission denied while reading the workspace
    130: Interrupted by SIGINT (Ctrl+C)
    141: Broken pipe (SIGPIPE) on Unix-like systems

Example:
    $ workspace-tree /path/to/project
    $ workspace-tree -f json -w /path/to/project
"""

import logging
import os
import sys
from typing import List, Optional

from workspace_tree.cli.argparser import create_parser, validate_args
from workspace_tree.cli.safe_writer import SafeWriter
from workspace_tree.cli.signal_handler import setup_signal_handling, signal_handler
from workspace_tree.exceptions import TreeReadError
from workspace_tree.exclusion_rules.git_rules import GitIgnoreExclusionRules
from workspace_tree.file_tree.tree_builder import build_tree
from workspace_tree.file_tree.workspace import WorkspaceFolder, count_entries
from workspace_tree.rendering import stream_tree_representation, to_json

logger = logging.getLogger(__name__)


def format_counts(directories: int, files: int) -> str:
    """Format the summary counts into a human-readable string."""
    return f"Directories: {directories}\nFiles: {files}"


def configure_logging(verbose: bool) -> None:
    """Send log records to stderr, at DEBUG level when verbose."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def main(argv: Optional[List[str]] = None) -> None:
    """Main entry point for the workspace-tree command-line interface.

    Exit codes:
        0: Successful completion
        1: Runtime error during execution
        2: Command-line syntax error
        126: Permission denied
        130: Interrupted by SIGINT (Ctrl+C)
        141: Broken pipe (SIGPIPE) on Unix-like systems
    """
    setup_signal_handling()

    try:
        # Populated by the -e/-i actions while parsing
        exclusion_rules = GitIgnoreExclusionRules()
        parser = create_parser(exclusion_rules)
        args = parser.parse_args(argv)
        validate_args(args)
        configure_logging(args.verbose)

        directory = os.fspath(args.directory)
        tree = build_tree(
            directory,
            exclusion_rules=exclusion_rules if exclusion_rules.has_rules() else None,
            follow_symlinks=args.follow_symlinks,
        )
        workspace = WorkspaceFolder(directory, tree)

        with SafeWriter(args.output) as safe_writer:
            try:
                # The whole document goes out in one write
                if args.format == "json":
                    payload = workspace if args.workspace else workspace.tree
                    safe_writer.write_lines([to_json(payload, indent=args.indent)])
                else:
                    safe_writer.write_lines(stream_tree_representation(workspace.tree, workspace.name))

                if args.summary:
                    counts = format_counts(*count_entries(workspace.tree))
                    if args.summary == "stderr":
                        print(counts, file=sys.stderr)
                    else:
                        safe_writer.write("\n" + counts + "\n")
            except BrokenPipeError:
                pass  # SafeWriter will automatically close in the context manager

    except TreeReadError as e:
        logger.debug("Workspace read failed", exc_info=True)
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(126 if e.is_permission_error else 1)
    except Exception as e:
        print(f"Error: {str(e)}", file=sys.stderr)
        sys.exit(1)

    exit_code = signal_handler.exit_code()
    if exit_code is not None:
        sys.exit(exit_code)


if __name__ == "__main__":
    main()
