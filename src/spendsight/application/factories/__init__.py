"""Application factories for repository access."""

from spendsight.application.factories.repository_factory import RepositoryFactory

__all__ = ["RepositoryFactory"]
