"""
Commander Backend — Command Route Handlers
==========================================

What:  The /api/commands resource: one handler per HTTP verb.
How:   Each handler receives the request's repository through Depends(),
       delegates to CommandService and sets the status code and headers.
       Not-found and validation failures are raised by the service and
       rendered by the global exception handlers in main.py.

Routes:
    GET    /api/commands         200 list
    GET    /api/commands/{id}    200 record | 404
    POST   /api/commands         201 record + Location
    PUT    /api/commands/{id}    204 | 404
    PATCH  /api/commands/{id}    204 | 404 | 400
    DELETE /api/commands/{id}    204 | 404
"""

import logging
from typing import List

from fastapi import APIRouter, Body, Depends, Request, Response, status

from commander.repositories import CommanderRepository, get_repository
from commander.schemas.command import (
    CommandCreate,
    CommandRead,
    CommandUpdate,
    ErrorResponse,
    JsonPatchOperation,
    ValidationProblem,
)
from commander.services.command_service import command_service

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/commands", tags=["Commands"])

NOT_FOUND = {404: {"description": "No command has this id"}}
BAD_REQUEST = {400: {"description": "Validation failed", "model": ValidationProblem}}
SERVER_ERROR = {500: {"description": "The change could not be saved", "model": ErrorResponse}}


@router.get(
    "",
    response_model=List[CommandRead],
    summary="List all commands",
)
async def get_all_commands(
    repository: CommanderRepository = Depends(get_repository),
) -> List[CommandRead]:
    return await command_service.list_commands(repository)


@router.get(
    "/{command_id}",
    name="get_command_by_id",
    response_model=CommandRead,
    responses={**NOT_FOUND},
    summary="Get a single command by id",
)
async def get_command_by_id(
    command_id: int,
    repository: CommanderRepository = Depends(get_repository),
) -> CommandRead:
    return await command_service.get_command(repository, command_id)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    response_model=CommandRead,
    responses={**BAD_REQUEST, **SERVER_ERROR},
    summary="Create a command",
    description="The id is assigned by the store; any id in the body is ignored.",
)
async def create_command(
    dto: CommandCreate,
    request: Request,
    response: Response,
    repository: CommanderRepository = Depends(get_repository),
) -> CommandRead:
    """
    Location points at GET /api/commands/{id} for the new record, built by
    reversing the named route so it follows any prefix change.
    """
    created = await command_service.create_command(repository, dto)
    response.headers["Location"] = str(
        request.app.url_path_for("get_command_by_id", command_id=str(created.id))
    )
    return created


@router.put(
    "/{command_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**NOT_FOUND, **BAD_REQUEST, **SERVER_ERROR},
    summary="Replace every field of a command",
)
async def update_command(
    command_id: int,
    dto: CommandUpdate,
    repository: CommanderRepository = Depends(get_repository),
) -> Response:
    await command_service.update_command(repository, command_id, dto)
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.patch(
    "/{command_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**NOT_FOUND, **BAD_REQUEST, **SERVER_ERROR},
    summary="Partially update a command with JSON Patch",
    description=(
        "Applies an RFC 6902 JSON Patch document (add, remove, replace, move, copy, test) "
        "to {howTo, line, platform}. The result is validated before anything is saved."
    ),
)
async def partial_command_update(
    command_id: int,
    operations: List[JsonPatchOperation] = Body(
        ...,
        media_type="application/json-patch+json",
        examples=[[{"op": "replace", "path": "/line", "value": "ls -la --color"}]],
    ),
    repository: CommanderRepository = Depends(get_repository),
) -> Response:
    await command_service.patch_command(
        repository,
        command_id,
        [operation.to_patch() for operation in operations],
    )
    return Response(status_code=status.HTTP_204_NO_CONTENT)


@router.delete(
    "/{command_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    responses={**NOT_FOUND, **SERVER_ERROR},
    summary="Delete a command",
)
async def delete_command(
    command_id: int,
    repository: CommanderRepository = Depends(get_repository),
) -> Response:
    await command_service.delete_command(repository, command_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
