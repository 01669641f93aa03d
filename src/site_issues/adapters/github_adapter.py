"""Shared error type for GitHub issue sources."""

from __future__ import annotations


class GitHubAdapterError(RuntimeError):
    """Raised when the remote issue listing fails (auth, network, rate limit)."""
