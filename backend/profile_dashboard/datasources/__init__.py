from .base import DataSource
from .github_adapter import GitHubAdapter

__all__ = ["DataSource", "GitHubAdapter"]
