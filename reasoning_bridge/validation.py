"""reasoning_bridge/validation.py

Checks untrusted tool arguments against a tool's declared arguments model.

All problems are collected into one ValidationError instead of stopping at
the first bad field, and nothing reaches a backend adapter until the whole
argument object has passed.
"""

from __future__ import annotations

# Standard Library
import logging
from typing import Any, TypeVar

# Third-Party Libraries
from pydantic import BaseModel, ConfigDict
from pydantic import ValidationError as PydanticValidationError

# Local Modules
from reasoning_bridge.errors import ValidationError

logger = logging.getLogger("reasoning-bridge.validation")

ArgsT = TypeVar("ArgsT", bound=BaseModel)


class ToolArguments(BaseModel):
    """Base for tool argument models.

    Strict mode: no string-to-number coercion, no booleans as integers.
    Unknown keys are ignored.
    """

    model_config = ConfigDict(strict=True, extra="ignore", frozen=True)


def _field_path(loc: tuple[int | str, ...]) -> str:
    return ".".join(str(part) for part in loc) or "arguments"


def validate_arguments(
    tool_name: str,
    model: type[ArgsT],
    arguments: Any,
) -> ArgsT:
    """Validate ``arguments`` for ``tool_name`` against ``model``.

    Args:
        tool_name: Tool the arguments are for, used in the error message.
        model: The tool's arguments model.
        arguments: Raw arguments from the caller. ``None`` means ``{}``.

    Returns:
        The validated arguments model instance.

    Raises:
        ValidationError: With one ``(path, reason)`` issue per problem.
    """
    if arguments is None:
        arguments = {}
    if not isinstance(arguments, dict):
        raise ValidationError(tool_name, [("arguments", "Input should be an object")])

    try:
        return model.model_validate(arguments)
    except PydanticValidationError as exc:
        issues = [(_field_path(err["loc"]), err["msg"]) for err in exc.errors()]
        logger.info("[validate] tool=%s rejected fields=%s", tool_name, [p for p, _ in issues])
        raise ValidationError(tool_name, issues) from exc
