"""
Commander Backend — Repository Layer
====================================

What:  Data-access implementations and the per-request wiring that hands
       one of them to the route handlers.

Inventory:
    - CommanderRepository (abstract): the contract
    - MockCommanderRepository: canned data, no writes
    - SqlCommanderRepository: async SQLAlchemy store
    - RepositoryProvider: built once by create_app(); opens a repository per
      request for the configured backend
    - get_repository: FastAPI dependency reading the provider from app.state
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator, Optional

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from commander.repositories.base import CommanderRepository
from commander.repositories.mock import MockCommanderRepository
from commander.repositories.sql import SqlCommanderRepository

logger = logging.getLogger(__name__)

__all__ = [
    "CommanderRepository",
    "MockCommanderRepository",
    "SqlCommanderRepository",
    "RepositoryProvider",
    "get_repository",
]


class RepositoryProvider:
    """
    Opens a request-scoped repository for the backend chosen at startup.

    For the sql backend each open() gets its own session:
        1. A session is created from the factory (no connection yet)
        2. The repository is yielded to the request
        3. On error: the session is rolled back and the error re-raised
        4. Always: the session is closed, returning its connection to the pool
    """

    def __init__(
        self,
        backend: str,
        session_factory: Optional[async_sessionmaker[AsyncSession]] = None,
    ):
        if backend not in ("sql", "mock"):
            raise ValueError(f"Unknown repository backend '{backend}'")
        if backend == "sql" and session_factory is None:
            raise ValueError("The sql repository backend requires a session factory")
        self.backend = backend
        self._session_factory = session_factory

    @asynccontextmanager
    async def open(self) -> AsyncIterator[CommanderRepository]:
        if self.backend == "mock":
            yield MockCommanderRepository()
            return

        async with self._session_factory() as session:
            try:
                yield SqlCommanderRepository(session)
            except Exception:
                await session.rollback()
                raise


async def get_repository(request: Request) -> AsyncGenerator[CommanderRepository, None]:
    """
    FastAPI dependency providing the request's repository.

    Example usage in a route:
        @router.get("/api/commands")
        async def list_commands(repository: CommanderRepository = Depends(get_repository)):
            ...
    """
    provider: RepositoryProvider = request.app.state.repositories
    async with provider.open() as repository:
        yield repository
