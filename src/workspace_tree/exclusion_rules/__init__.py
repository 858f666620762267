"""Exclusion rules for filtering workspace entries."""

from .base_rules import BaseExclusionRules
from .composite_rules import CompositeExclusionRules
from .git_rules import GitIgnoreExclusionRules
from .workspace_rules import WorkspaceExclusionRules

__all__ = [
    "BaseExclusionRules",
    "CompositeExclusionRules",
    "GitIgnoreExclusionRules",
    "WorkspaceExclusionRules",
]
