from pathlib import PurePosixPath
from typing import FrozenSet, Iterable, Optional, Set

from .base_rules import BaseExclusionRules


class IgnoredDirectoryRules(BaseExclusionRules):
    """
    Exclusion rules that prune directories by their bare name.

    A directory is excluded when its last path component is exactly equal to one of
    the configured names. Matching is case-sensitive and uses no wildcards, so
    "build" excludes "build" and "src/build" but not "build2" or "Build".

    Attributes:
        names (FrozenSet[str]): The directory names currently excluded.

    Example:
        >>> rules = IgnoredDirectoryRules([".git", "target"])
        >>> rules.exclude("crates/core/target")
        True
        >>> rules.exclude("targets")
        False
    """

    def __init__(self, names: Optional[Iterable[str]] = None) -> None:
        self._names: Set[str] = set()
        for name in names or ():
            self.add_rule(name)

    @property
    def names(self) -> FrozenSet[str]:
        return frozenset(self._names)

    def exclude(self, path: str) -> bool:
        return PurePosixPath(path).name in self._names

    def add_rule(self, rule: str) -> None:
        """
        Add a directory name to exclude.

        Args:
            rule (str): A bare directory name. Path separators are not allowed since
                matching never considers more than the last component.

        Raises:
            ValueError: If the name is empty or contains a path separator.
        """
        if not rule:
            raise ValueError("Ignored directory name must not be empty")
        if "/" in rule or "\\" in rule:
            raise ValueError(f"Ignored directory name must not contain a path separator: {rule!r}")
        self._names.add(rule)
