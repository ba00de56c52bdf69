"""
Commander Backend — Command Service (Resource Handler Logic)
============================================================

What:  The operations behind /api/commands: list, get, create, full update,
       JSON Patch update and delete.
How:   Each call receives the request's repository, fetches, null-checks,
       maps between entity and DTO shapes, stages the change and commits.
Who:   Called by the route handlers in routes/commands.py.

Error translation:
    missing id                          → NotFoundError     (404)
    patch cannot be applied / invalid   → ValidationError   (400)
    save_changes() returned False       → PersistenceError  (500)

Design Decision:
    CommandService is stateless; the repository arrives with each call, so
    the service can be exercised against a mock repository without HTTP.
"""

import logging
from typing import Any, Dict, List, Sequence

import jsonpatch
import jsonpointer
from pydantic import ValidationError as PydanticValidationError

from commander import mapping
from commander.exceptions import NotFoundError, PersistenceError, ValidationError
from commander.models.command import Command
from commander.repositories.base import CommanderRepository
from commander.schemas.command import CommandCreate, CommandRead, CommandUpdate

logger = logging.getLogger(__name__)

# Body key used for errors that belong to the patch document, not a field.
PATCH_ERROR_KEY = "patch"


class CommandService:
    """
    Business logic layer for command operations.

    Responsibilities:
        - list_commands() / get_command(): reads mapped to CommandRead
        - create_command(): persist and return the id-assigned record
        - update_command(): overwrite every field from a CommandUpdate
        - patch_command(): apply RFC 6902 operations, validate, merge
        - delete_command(): remove a record
    """

    async def list_commands(self, repository: CommanderRepository) -> List[CommandRead]:
        commands = await repository.get_all_commands()
        return [mapping.to_read(command) for command in commands]

    async def get_command(self, repository: CommanderRepository, command_id: int) -> CommandRead:
        """
        Raises:
            NotFoundError: no command has this id (→ 404)
        """
        command = await self._fetch(repository, command_id)
        return mapping.to_read(command)

    async def create_command(
        self, repository: CommanderRepository, dto: CommandCreate
    ) -> CommandRead:
        """
        Stage, commit and return the new command with its store-assigned id.

        Raises:
            PersistenceError: the store rejected the commit (→ 500)
        """
        command = mapping.from_create(dto)
        await repository.create_command(command)
        await self._commit(repository, action="create")
        logger.info("Command %s created (platform=%s)", command.id, command.platform)
        return mapping.to_read(command)

    async def update_command(
        self, repository: CommanderRepository, command_id: int, dto: CommandUpdate
    ) -> None:
        """
        Full replacement of every writable field; id is untouched.

        Raises:
            NotFoundError: no command has this id; nothing is created (→ 404)
            PersistenceError: the store rejected the commit (→ 500)
        """
        command = await self._fetch(repository, command_id)
        mapping.apply_update(dto, command)
        await repository.update_command(command)
        await self._commit(repository, action="update", command_id=command_id)
        logger.info("Command %s updated", command_id)

    async def patch_command(
        self,
        repository: CommanderRepository,
        command_id: int,
        operations: Sequence[Dict[str, Any]],
    ) -> None:
        """
        Apply a JSON Patch document to the command's update shape.

        Workflow:
            1. Fetch the command (404 if absent)
            2. Map it to a CommandUpdate document in wire (camelCase) form
            3. Apply the operations with jsonpatch
            4. Validate the result against CommandUpdate
            5. Merge the validated fields back onto the command and commit

        The stored command is only touched in step 5, so a failure in steps
        3-4 leaves it unchanged.

        Raises:
            NotFoundError: no command has this id (→ 404)
            ValidationError: the patch cannot be applied, or the patched
                document is invalid (→ 400 naming the fields)
            PersistenceError: the store rejected the commit (→ 500)
        """
        command = await self._fetch(repository, command_id)

        document = mapping.to_update(command).model_dump(by_alias=True)
        patched = self._apply_patch(document, operations, command_id)
        dto = self._validate_patched(patched, command_id)

        mapping.apply_update(dto, command)
        await repository.update_command(command)
        await self._commit(repository, action="patch", command_id=command_id)
        logger.info("Command %s patched (%d operations)", command_id, len(operations))

    async def delete_command(self, repository: CommanderRepository, command_id: int) -> None:
        """
        Raises:
            NotFoundError: no command has this id (→ 404)
            PersistenceError: the store rejected the commit (→ 500)
        """
        command = await self._fetch(repository, command_id)
        await repository.delete_command(command)
        await self._commit(repository, action="delete", command_id=command_id)
        logger.info("Command %s deleted", command_id)

    # ── Helpers ───────────────────────────────────────────────────────────

    async def _fetch(self, repository: CommanderRepository, command_id: int) -> Command:
        command = await repository.get_command_by_id(command_id)
        if command is None:
            raise NotFoundError(resource="command", resource_id=command_id)
        return command

    async def _commit(self, repository: CommanderRepository, action: str, **context: Any) -> None:
        if not await repository.save_changes():
            raise PersistenceError(context={"action": action, **context})

    def _apply_patch(
        self,
        document: Dict[str, Any],
        operations: Sequence[Dict[str, Any]],
        command_id: int,
    ) -> Any:
        try:
            patch = jsonpatch.JsonPatch(list(operations))
            return patch.apply(document)
        except (jsonpatch.JsonPatchException, jsonpointer.JsonPointerException) as e:
            logger.info("Patch for command %s rejected: %s", command_id, str(e))
            raise ValidationError(
                errors={PATCH_ERROR_KEY: [str(e)]},
                context={"command_id": command_id},
            )

    def _validate_patched(self, patched: Any, command_id: int) -> CommandUpdate:
        if not isinstance(patched, dict):
            raise ValidationError(
                errors={PATCH_ERROR_KEY: ["The patch must leave a JSON object as the document root."]},
                context={"command_id": command_id},
            )

        problem = ValidationError(context={"command_id": command_id})
        allowed = {field.alias or name for name, field in CommandUpdate.model_fields.items()}
        for key in patched:
            if key not in allowed:
                problem.add(key, f"The target location specified by path segment '{key}' was not found.")

        try:
            dto = CommandUpdate.model_validate(patched)
        except PydanticValidationError as e:
            for field, messages in field_errors(e.errors()).items():
                for message in messages:
                    problem.add(field, message)
            dto = None

        if problem.errors:
            logger.info("Patched command %s is invalid: %s", command_id, problem.errors)
            raise problem
        return dto


def field_errors(errors: Sequence[Dict[str, Any]]) -> Dict[str, List[str]]:
    """
    Converts pydantic / FastAPI error entries into a field → messages map.

    Locations are flattened to the wire name of the field; request sections
    ("body", "path", "query") are dropped. Missing, null and blank values all
    read "The <field> field is required."
    """
    result: Dict[str, List[str]] = {}
    for error in errors:
        loc = [str(part) for part in error.get("loc", ())]
        if loc and loc[0] in ("body", "path", "query", "header"):
            loc = loc[1:]
        field = ".".join(loc)
        if not field:
            result.setdefault("", []).append("A non-empty request body is required.")
            continue
        kind = error.get("type", "")

        if kind in ("missing", "required") or (kind == "string_type" and error.get("input") is None):
            message = f"The {field} field is required."
        elif kind == "string_too_long":
            limit = error.get("ctx", {}).get("max_length")
            message = f"The field {field} must be a string with a maximum length of {limit}."
        else:
            message = error.get("msg", "The value is invalid.")
        result.setdefault(field, []).append(message)
    return result


command_service = CommandService()
