"""Pre-aggregate GitHub issue data into static-site page view models."""

from site_issues.version import __version__

__all__ = ["__version__"]
