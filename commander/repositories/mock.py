"""
Commander Backend — Mock Repository
===================================

What:  In-memory stand-in used while the database is not available.
How:   Reads return fixed canned commands; every write raises
       NotImplementedError (rendered as 501 by the API).
When:  REPOSITORY_BACKEND=mock. Never a production configuration.
"""

import logging
from typing import List, Optional

from commander.models.command import Command
from commander.repositories.base import CommanderRepository

logger = logging.getLogger(__name__)


def _canned_commands() -> List[Command]:
    # Fresh objects per call so callers can't leak changes between requests.
    return [
        Command(id=0, how_to="Some text", line="The details", platform="The OS"),
        Command(id=1, how_to="Some text1", line="The details1", platform="The other OS"),
        Command(id=2, how_to="Some text2", line="The details2", platform="The other other  OS"),
    ]


class MockCommanderRepository(CommanderRepository):
    """
    Read-only repository returning canned data.

    get_command_by_id() ignores the id and always answers with the first
    canned command, so every GET by id succeeds.
    """

    async def get_all_commands(self) -> List[Command]:
        return _canned_commands()

    async def get_command_by_id(self, command_id: int) -> Optional[Command]:
        return _canned_commands()[0]

    async def create_command(self, command: Command) -> None:
        raise NotImplementedError("MockCommanderRepository does not support create_command")

    async def update_command(self, command: Command) -> None:
        raise NotImplementedError("MockCommanderRepository does not support update_command")

    async def delete_command(self, command: Command) -> None:
        raise NotImplementedError("MockCommanderRepository does not support delete_command")

    async def save_changes(self) -> bool:
        raise NotImplementedError("MockCommanderRepository does not support save_changes")
