from abc import ABC, abstractmethod
from typing import Sequence, Union

from workspace_tree.types import PathType


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for workspace exclusion rules.

    Implementations decide whether an entry found during the tree walk is dropped
    from the workspace tree. Paths handed to `exclude` are relative to the workspace
    root, use forward slashes, and carry a trailing slash when the entry is a
    directory. An excluded directory is never descended into.

    File loading and individual rule addition are optional capabilities that
    depend on the rule type.

    Example:
        >>> from workspace_tree.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> git_rules = GitIgnoreExclusionRules()
        >>> git_rules.add_rule('*.pyc')
        >>> git_rules.exclude('test.pyc')
        True
        >>> git_rules.exclude('test.py')
        False
        >>>
        >>> from workspace_tree.exclusion_rules.workspace_rules import WorkspaceExclusionRules
        >>> WorkspaceExclusionRules().exclude('src/node_modules/')
        True
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a given path should be excluded.

        Args:
            path (str): Root-relative path of the entry, with a trailing slash for
                directories.

        Returns:
            bool: True if the entry should be left out of the tree.
        """
        pass

    def load_rules(self, rules_files: Union[PathType, Sequence[PathType]]) -> None:
        """
        Load and parse exclusion rules from one or more files.

        Args:
            rules_files: Path to a file or sequence of paths containing exclusion rules.

        Raises:
            NotImplementedError: If this rule type doesn't support loading from files.
            FileNotFoundError: If any rules file does not exist (for file-supporting rule types).
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support loading rules from files.")

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        Args:
            rule (str): The exclusion rule to add, e.g. a gitignore pattern like "*.pyc".

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
