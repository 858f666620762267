"""The fixed exclusion policy applied to every workspace tree."""

from .base_rules import BaseExclusionRules

EXCLUDED_NAMES = frozenset({"node_modules"})
HIDDEN_PREFIX = "."


class WorkspaceExclusionRules(BaseExclusionRules):
    """Excludes hidden entries and `node_modules` at any depth.

    An entry is excluded when its base name starts with a dot or is exactly
    `node_modules`. Matching is on the base name only and is case-sensitive, so
    `Node_Modules` and `node_modules_backup` are kept.

    This policy is not configurable. The tree builder always applies it, before
    any additional rules supplied by the caller.

    Example:
        >>> rules = WorkspaceExclusionRules()
        >>> rules.exclude(".git/")
        True
        >>> rules.exclude("src/.env")
        True
        >>> rules.exclude("web/node_modules/")
        True
        >>> rules.exclude("node_modules_backup/")
        False
    """

    def exclude(self, path: str) -> bool:
        return self.exclude_name(path.rstrip("/").rsplit("/", 1)[-1])

    @staticmethod
    def exclude_name(name: str) -> bool:
        """Check a bare entry name against the policy."""
        return name.startswith(HIDDEN_PREFIX) or name in EXCLUDED_NAMES
