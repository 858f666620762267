"""Composite exclusion rules for combining multiple rule types."""

from typing import List, Sequence

from .base_rules import BaseExclusionRules


class CompositeExclusionRules(BaseExclusionRules):
    """Composite exclusion rules that combine multiple rule types.

    A path is excluded if ANY of the constituent rules excludes it. The tree
    builder uses this to put the fixed workspace policy in front of any rules
    supplied by the caller.

    Attributes:
        rules (List[BaseExclusionRules]): Constituent rules, evaluated in order.

    Example:
        >>> from workspace_tree.exclusion_rules.git_rules import GitIgnoreExclusionRules
        >>> from workspace_tree.exclusion_rules.workspace_rules import WorkspaceExclusionRules
        >>> git_rules = GitIgnoreExclusionRules()
        >>> git_rules.add_rule("*.log")
        >>> composite = CompositeExclusionRules([WorkspaceExclusionRules(), git_rules])
        >>> composite.exclude(".env")
        True
        >>> composite.exclude("server.log")
        True
        >>> composite.exclude("main.py")
        False
    """

    def __init__(self, rules: Sequence[BaseExclusionRules]):
        """Initialize composite exclusion rules.

        Args:
            rules: Sequence of exclusion rules to combine.

        Raises:
            ValueError: If the rules sequence is empty.
            TypeError: If any rule doesn't implement BaseExclusionRules.
        """
        if not rules:
            raise ValueError("At least one exclusion rule must be provided")

        for i, rule in enumerate(rules):
            if not isinstance(rule, BaseExclusionRules):
                raise TypeError(f"Rule at index {i} must implement BaseExclusionRules, " f"got {type(rule)}")

        self.rules: List[BaseExclusionRules] = list(rules)

    def exclude(self, path: str) -> bool:
        # Short-circuits on the first rule that excludes
        return any(rule.exclude(path) for rule in self.rules)

    def add_rule_object(self, rule: BaseExclusionRules) -> None:
        """Append another exclusion rule object to this composite.

        Raises:
            TypeError: If the rule doesn't implement BaseExclusionRules.
        """
        if not isinstance(rule, BaseExclusionRules):
            raise TypeError(f"Rule must implement BaseExclusionRules, got {type(rule)}")
        self.rules.append(rule)

    def __len__(self) -> int:
        return len(self.rules)
