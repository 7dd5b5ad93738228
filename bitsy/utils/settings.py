"""
Configuration settings for bitsy.

This module contains default configuration values and settings used
throughout the front end.
"""

from dataclasses import dataclass
from typing import List

# Each nesting level costs a few parser frames, and block and expression
# nesting stack on top of each other. Keep both within the default
# interpreter recursion limit.
MAX_NESTING_DEPTH = 120


def check_nesting_depth(depth: int) -> int:
    """Validate a nesting limit and return it unchanged.

    Raises:
        ValueError: If the depth is below 1 or above MAX_NESTING_DEPTH
    """
    if depth < 1:
        raise ValueError(f"max_nesting_depth must be at least 1, got {depth}")
    if depth > MAX_NESTING_DEPTH:
        raise ValueError(
            f"max_nesting_depth must be at most {MAX_NESTING_DEPTH}, got {depth}"
        )
    return depth


@dataclass
class Settings:
    """Front end settings and configuration.

    Attributes:
        max_nesting_depth: Deepest allowed nesting of blocks, and separately
            of parenthesised/negated expressions
        source_suffixes: File suffixes accepted when loading programs,
            stored lowercased
        encoding: Text encoding used to read program files
    """
    max_nesting_depth: int = 100
    source_suffixes: List[str] = None
    encoding: str = "utf-8"

    def __post_init__(self):
        if self.source_suffixes is None:
            self.source_suffixes = [".bitsy"]
        self.source_suffixes = [suffix.lower() for suffix in self.source_suffixes]
        check_nesting_depth(self.max_nesting_depth)

    def accepts_suffix(self, suffix: str) -> bool:
        """Check whether a file suffix names a Bitsy program."""
        return suffix.lower() in self.source_suffixes


# Global default settings instance
DEFAULT_SETTINGS = Settings()
