"""
Commander Backend — Pydantic Request/Response Schemas
=====================================================

What:  Pydantic models defining the wire contract of the commands API.
How:   FastAPI validates request bodies against these models, serializes
       responses through them and builds the OpenAPI document from them.

Shapes:
    CommandRead     id + all fields; responses only
    CommandCreate   all fields except id; POST bodies
    CommandUpdate   all fields except id; PUT bodies and the PATCH target

    The write shapes have no `id` field at all, and unknown members are
    ignored, so a client can never set or overwrite an id.

Field names travel in lowerCamelCase (`howTo`), while Python code uses
snake_case (`how_to`); the alias generator bridges the two.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel
from pydantic_core import PydanticCustomError

from commander.models.command import HOW_TO_MAX_LENGTH, PLATFORM_MAX_LENGTH


class CamelModel(BaseModel):
    """Base for wire models: camelCase on the wire, snake_case in code."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
    )


# ══════════════════════════════════════════════════════════════════════════
# Command shapes
# ══════════════════════════════════════════════════════════════════════════


class CommandRead(CamelModel):
    """
    What:  Full representation of a stored command.
    Who:   Returned by GET /api/commands, GET /api/commands/{id} and POST.
    """
    id: int = Field(description="Store-assigned identifier")
    how_to: str = Field(description="What the command does")
    line: str = Field(description="The literal command line")
    platform: str = Field(description="Operating system or shell context")

    model_config = ConfigDict(from_attributes=True)


class CommandWrite(CamelModel):
    """
    Fields a client may send. Every field is required and may not be blank.
    """
    how_to: str = Field(
        max_length=HOW_TO_MAX_LENGTH,
        description="What the command does",
        examples=["list files"],
    )
    line: str = Field(
        description="The literal command line",
        examples=["ls -la"],
    )
    platform: str = Field(
        max_length=PLATFORM_MAX_LENGTH,
        description="Operating system or shell context",
        examples=["linux"],
    )

    model_config = ConfigDict(extra="ignore")

    @field_validator("how_to", "line", "platform")
    @classmethod
    def reject_blank(cls, v: str) -> str:
        """Empty and whitespace-only strings count as missing."""
        if not v.strip():
            raise PydanticCustomError("required", "The field is required.")
        return v


class CommandCreate(CommandWrite):
    """
    What:  Body of POST /api/commands.
    """


class CommandUpdate(CommandWrite):
    """
    What:  Body of PUT /api/commands/{id}, and the document a PATCH is
           applied to.
    """


# ══════════════════════════════════════════════════════════════════════════
# JSON Patch
# ══════════════════════════════════════════════════════════════════════════


class JsonPatchOperation(BaseModel):
    """
    One operation of a JSON Patch document (RFC 6902).

    `value` is kept only when the client sent it, so an explicit
    `"value": null` survives the round trip to the patch engine.
    """
    op: Literal["add", "remove", "replace", "move", "copy", "test"]
    path: str = Field(examples=["/line"])
    value: Optional[Any] = Field(default=None, examples=["ls -la --color"])
    from_: Optional[str] = Field(default=None, alias="from")

    model_config = ConfigDict(populate_by_name=True)

    def to_patch(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, exclude_unset=True)


# ══════════════════════════════════════════════════════════════════════════
# Error and health models
# ══════════════════════════════════════════════════════════════════════════


class ValidationProblem(CamelModel):
    """
    What:  Body of every 400 response.
    Format follows RFC 7807 problem details with a field → messages map.

    Example:
        {
            "type": "https://tools.ietf.org/html/rfc7231#section-6.5.1",
            "title": "One or more validation errors occurred.",
            "status": 400,
            "errors": {"howTo": ["The howTo field is required."]},
            "traceId": "a1b2c3d4"
        }
    """
    type: str = Field(default="https://tools.ietf.org/html/rfc7231#section-6.5.1")
    title: str = Field(default="One or more validation errors occurred.")
    status: int = Field(default=400)
    errors: Dict[str, List[str]] = Field(default_factory=dict)
    trace_id: Optional[str] = Field(default=None)


class ErrorResponse(CamelModel):
    """
    What:  Body of 5xx responses.
    """
    error: str = Field(description="Machine-readable error code")
    message: str = Field(description="Human-readable error description")
    request_id: Optional[str] = Field(default=None, description="Request correlation ID")


class HealthResponse(CamelModel):
    """
    What:  Health check response showing service and dependency status.
    Who:   Returned by GET /health.
    """
    status: str = Field(description="Overall service status: healthy, unhealthy")
    version: str = Field(description="Application version")
    database: str = Field(description="Database connectivity: connected, disconnected, unused")
    repository: str = Field(description="Active repository backend: sql, mock")
    uptime_seconds: float = Field(description="Seconds since service started")
