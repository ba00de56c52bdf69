"""
Commander Backend — Entity ↔ DTO Mapping
========================================

What:  Field correspondence between the Command entity and its wire shapes.
How:   One table of mapped attribute names, and one small function per
       direction. Field names are identical on both sides; `id` only ever
       flows outwards (entity → CommandRead).
Who:   CommandService, on every request.
"""

from typing import Tuple

from commander.models.command import Command
from commander.schemas.command import CommandCreate, CommandRead, CommandUpdate, CommandWrite

# Attributes copied between Command and the create/update shapes.
COMMAND_FIELDS: Tuple[str, ...] = ("how_to", "line", "platform")


def to_read(command: Command) -> CommandRead:
    """Entity → response shape, id included."""
    return CommandRead(
        id=command.id,
        **{name: getattr(command, name) for name in COMMAND_FIELDS},
    )


def from_create(dto: CommandCreate) -> Command:
    """Create shape → new entity. The id is left for the store to assign."""
    return Command(**{name: getattr(dto, name) for name in COMMAND_FIELDS})


def to_update(command: Command) -> CommandUpdate:
    """
    Entity → update shape, the document a PATCH is applied to.

    Built with model_construct() because a stored row is trusted as-is; the
    patched result is validated separately.
    """
    return CommandUpdate.model_construct(
        **{name: getattr(command, name) for name in COMMAND_FIELDS}
    )


def apply_update(dto: CommandWrite, command: Command) -> Command:
    """Copies every mapped field from `dto` onto `command` in place."""
    for name in COMMAND_FIELDS:
        setattr(command, name, getattr(dto, name))
    return command
