"""Persistence repositories. Re-exports for dependency injection."""

from cachedrepo.infrastructure.persistence.repositories.base import SqlAlchemyRepository
from cachedrepo.infrastructure.persistence.repositories.cached_repo import (
    CacheAsideRepository,
)

__all__ = [
    "CacheAsideRepository",
    "SqlAlchemyRepository",
]
