"""
Commander Backend — Abstract Repository Interface
=================================================

What:  The data-access contract the command handlers are written against.
How:   Concrete implementations inherit from CommanderRepository:
       - MockCommanderRepository: canned reads, unsupported writes
       - SqlCommanderRepository: async SQLAlchemy session
Who:   Called by CommandService; constructed per request by RepositoryProvider.

Unit of work:
    create/update/delete only STAGE a change. Nothing reaches the store until
    save_changes() commits, which is also when a new command gets its id.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from commander.models.command import Command


class CommanderRepository(ABC):
    """
    Abstract interface over the command store.

    Contract:
        - Reads never raise for a missing id; they return None.
        - Mutators stage work; save_changes() commits it atomically.
        - save_changes() reports store failure as False instead of raising.
    """

    @abstractmethod
    async def get_all_commands(self) -> Sequence[Command]:
        """Returns every stored command. Order is not part of the contract."""
        ...

    @abstractmethod
    async def get_command_by_id(self, command_id: int) -> Optional[Command]:
        """Returns the command with this id, or None."""
        ...

    @abstractmethod
    async def create_command(self, command: Command) -> None:
        """
        Stages a new command. Its id stays unset until save_changes().

        Raises:
            ValueError: command is None.
        """
        ...

    @abstractmethod
    async def update_command(self, command: Command) -> None:
        """Stages changes made to a command previously fetched from this repository."""
        ...

    @abstractmethod
    async def delete_command(self, command: Command) -> None:
        """
        Stages removal of a command previously fetched from this repository.

        Raises:
            ValueError: command is None.
        """
        ...

    @abstractmethod
    async def save_changes(self) -> bool:
        """
        Commits every staged operation.

        Returns:
            True when the store accepted the changes, False otherwise.
        """
        ...
