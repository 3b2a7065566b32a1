"""shiprel: version-bump-and-tag releases for npm projects."""

__version__ = "0.1.0"
