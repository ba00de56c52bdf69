"""
Commander Backend — SQL Repository
==================================

What:  CommanderRepository backed by an async SQLAlchemy session.
How:   The session is the unit of work: add()/delete() stage changes, the
       identity map tracks edits to fetched commands, commit() writes them.
Who:   Built per request by RepositoryProvider with a fresh session.

Query plans:
    get_all_commands   SELECT ... FROM commands ORDER BY Id
    get_command_by_id  primary key lookup (identity map first, then SELECT)
"""

import logging
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from commander.models.command import Command
from commander.repositories.base import CommanderRepository

logger = logging.getLogger(__name__)


class SqlCommanderRepository(CommanderRepository):
    """
    Store-backed repository over one request-scoped AsyncSession.

    The repository never opens or closes the session; its owner does.
    """

    def __init__(self, session: AsyncSession):
        self._session = session

    async def get_all_commands(self) -> List[Command]:
        result = await self._session.execute(select(Command).order_by(Command.id))
        return list(result.scalars().all())

    async def get_command_by_id(self, command_id: int) -> Optional[Command]:
        return await self._session.get(Command, command_id)

    async def create_command(self, command: Command) -> None:
        if command is None:
            raise ValueError("command must not be None")
        self._session.add(command)

    async def update_command(self, command: Command) -> None:
        # Fetched commands are tracked by the session; edits are already staged.
        if command is None:
            raise ValueError("command must not be None")

    async def delete_command(self, command: Command) -> None:
        if command is None:
            raise ValueError("command must not be None")
        await self._session.delete(command)

    async def save_changes(self) -> bool:
        try:
            await self._session.commit()
        except SQLAlchemyError as e:
            logger.error("Commit failed, rolling back: %s", str(e), exc_info=True)
            await self._session.rollback()
            return False
        return True
