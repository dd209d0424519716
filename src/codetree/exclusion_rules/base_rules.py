from abc import ABC, abstractmethod


class BaseExclusionRules(ABC):
    """
    Abstract base class defining the interface for directory exclusion rules.

    The tree walker consults an exclusion rules object before descending into each
    directory it encounters below the root. When the rules exclude a directory, the
    directory and everything beneath it are pruned from the traversal. The root
    directory itself is never tested.

    Example:
        >>> from codetree.exclusion_rules.ignored_dirs import IgnoredDirectoryRules
        >>> rules = IgnoredDirectoryRules(["node_modules"])
        >>> rules.add_rule(".git")
        >>> rules.exclude("web/node_modules")
        True
        >>> rules.exclude("src")
        False
    """

    @abstractmethod
    def exclude(self, path: str) -> bool:
        """
        Determine if a directory should be pruned from the traversal.

        Args:
            path (str): The directory path relative to the traversal root, using "/"
                as the separator.

        Returns:
            bool: True if the directory and its subtree should be skipped, False otherwise.
        """
        pass

    def add_rule(self, rule: str) -> None:
        """
        Add a single exclusion rule directly.

        This method may be overridden by subclasses that support programmatic rule
        addition. The default implementation raises NotImplementedError.

        Args:
            rule (str): The exclusion rule to add. The format depends on the specific
                implementation.

        Raises:
            NotImplementedError: If this rule type doesn't support adding individual rules.
        """
        raise NotImplementedError(f"{self.__class__.__name__} doesn't support adding individual rules.")
