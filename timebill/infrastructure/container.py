"""
Repository providers.
The application owns exactly one provider, created at startup; each request
borrows a Repositories bundle from it.
"""

import logging
from abc import ABC, abstractmethod
from contextlib import contextmanager
from typing import Iterator, Optional

from sqlalchemy.engine import Engine

from timebill.config import Settings
from timebill.domain.repositories import Repositories
from timebill.infrastructure.db.database import (
    create_db_engine,
    create_session_factory,
    init_db,
    session_scope,
)
from timebill.infrastructure.repositories import (
    InMemoryStore,
    create_memory_repositories,
    create_sqlalchemy_repositories,
)

logger = logging.getLogger(__name__)


class RepositoryProvider(ABC):
    """Hands out repositories for one unit of work."""

    @abstractmethod
    def scope(self):
        """Context manager yielding a Repositories bundle."""
        pass

    def startup(self) -> None:
        pass

    def shutdown(self) -> None:
        pass


class MemoryRepositoryProvider(RepositoryProvider):
    """Every request shares one in-process store."""

    def __init__(self, store: Optional[InMemoryStore] = None):
        self.store = store or InMemoryStore()
        self.repositories = create_memory_repositories(self.store)

    @contextmanager
    def scope(self) -> Iterator[Repositories]:
        yield self.repositories


class SQLAlchemyRepositoryProvider(RepositoryProvider):
    """One session per request, committed on success and rolled back on error."""

    def __init__(self, database_url: str, echo: bool = False, engine: Optional[Engine] = None):
        self.engine = engine or create_db_engine(database_url, echo=echo)
        self.session_factory = create_session_factory(self.engine)

    @contextmanager
    def scope(self) -> Iterator[Repositories]:
        with session_scope(self.session_factory) as session:
            yield create_sqlalchemy_repositories(session)

    def startup(self) -> None:
        init_db(self.engine)
        logger.info("Database tables ensured")

    def shutdown(self) -> None:
        self.engine.dispose()


def create_repository_provider(settings: Settings) -> RepositoryProvider:
    if settings.storage_backend == "database":
        logger.info("Using SQL storage backend")
        return SQLAlchemyRepositoryProvider(settings.database_url, echo=settings.debug and settings.is_development)
    logger.info("Using in-memory storage backend")
    return MemoryRepositoryProvider()
