"""
Commander Backend — Command SQLAlchemy Model
============================================

What:  ORM model for the `commands` table.
Who:   Used by SqlCommanderRepository for CRUD and by create_tables() for the
       schema.

Table Design:
    - Id: integer primary key generated by the store (autoincrement)
    - HowTo: what the command is for, at most 250 characters
    - Line: the literal command string (unbounded text)
    - Platform: the operating system or shell the command applies to

    Column names are PascalCase (Id, HowTo, Line, Platform) to match the
    existing Commander database schema.
"""

from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from commander.database import Base

HOW_TO_MAX_LENGTH = 250
PLATFORM_MAX_LENGTH = 250


class Command(Base):
    """
    A stored terminal command reminder.

    Lifecycle:
        1. Created via POST; `id` is None until the session commits
        2. Read any number of times
        3. Mutated in place by PUT or PATCH (id never changes)
        4. Deleted; ids are not guaranteed to be reused
    """

    __tablename__ = "commands"

    id: Mapped[int] = mapped_column(
        "Id",
        Integer,
        primary_key=True,
        autoincrement=True,
    )

    how_to: Mapped[str] = mapped_column(
        "HowTo",
        String(HOW_TO_MAX_LENGTH),
        nullable=False,
    )

    line: Mapped[str] = mapped_column(
        "Line",
        Text,
        nullable=False,
    )

    platform: Mapped[str] = mapped_column(
        "Platform",
        String(PLATFORM_MAX_LENGTH),
        nullable=False,
    )

    def __repr__(self) -> str:
        return f"<Command(id={self.id}, how_to='{self.how_to}', platform='{self.platform}')>"
