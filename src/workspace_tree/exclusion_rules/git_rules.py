"""Implementation of exclusion rules using .gitignore pattern syntax."""

from os import PathLike
from pathlib import Path
from typing import List, Optional, Sequence, Union

from pathspec import GitIgnoreSpec

from workspace_tree.types import PathType

from .base_rules import BaseExclusionRules


class GitIgnoreExclusionRules(BaseExclusionRules):
    """Additional exclusion rules written in .gitignore pattern syntax.

    Matches root-relative workspace paths against gitignore patterns using the
    pathspec library, the same way Git does. Supports globs, directory patterns
    ending in `/`, negation with `!`, `**` and comment lines.

    These rules only ever remove more entries from a workspace tree. A negation
    pattern cannot bring back a hidden entry or `node_modules`, since the fixed
    workspace policy is checked first.

    Patterns from files and individual patterns are kept in the order they were
    added, so later patterns override earlier ones.

    Attributes:
        spec (GitIgnoreSpec): Compiled pattern matcher from the pathspec library.

    Example:
        >>> rules = GitIgnoreExclusionRules()
        >>> rules.add_rule("build/")
        >>> rules.add_rule("*.log")
        >>> rules.add_rule("!keep.log")
        >>> rules.exclude("build/")
        True
        >>> rules.exclude("logs/app.log")
        True
        >>> rules.exclude("keep.log")
        False
    """

    def __init__(self, rules_files: Optional[Union[PathType, Sequence[PathType]]] = None):
        """Initialize GitIgnoreExclusionRules with patterns from specified files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        self._lines: List[str] = []
        self.spec = GitIgnoreSpec.from_lines(self._lines)

        if rules_files is not None:
            self.load_rules(rules_files)

    def exclude(self, path: str) -> bool:
        return self.spec.match_file(path)

    def has_rules(self) -> bool:
        """True if at least one pattern has been loaded or added."""
        return bool(self.spec.patterns)

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """Load and append .gitignore patterns from one or more files.

        Args:
            rules_files: Path(s) to file(s) containing .gitignore patterns.

        Raises:
            FileNotFoundError: If any rules file does not exist.
        """
        if isinstance(rules_files, (str, PathLike)):
            rules_files = [rules_files]

        for rules_file in rules_files:
            path = Path(rules_file)
            if not path.exists():
                raise FileNotFoundError(f"Rules file not found: {path}")

            with open(path, "r") as f:
                self._lines.extend(f.read().splitlines())

        self._compile()

    def add_rule(self, rule: str) -> None:
        """Add a single .gitignore pattern, e.g. "*.pyc", "dist/" or "!keep.txt"."""
        self._lines.append(rule)
        self._compile()

    def _compile(self) -> None:
        self.spec = GitIgnoreSpec.from_lines(self._lines)
