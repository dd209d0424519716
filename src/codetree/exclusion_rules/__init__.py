"""Exclusion rules for pruning directories during traversal."""

from .base_rules import BaseExclusionRules
from .ignored_dirs import IgnoredDirectoryRules

__all__ = [
    "BaseExclusionRules",
    "IgnoredDirectoryRules",
]
