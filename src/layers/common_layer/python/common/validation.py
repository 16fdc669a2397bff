from typing import Any, List, Optional, Tuple, Type, TypeVar

from pydantic import BaseModel, ValidationError

from common.errors import AppError, validation_error

T = TypeVar("T", bound=BaseModel)

_MESSAGES = {
    "missing": "{field} is a required field",
    "string_type": "{field} must be a string",
    "string_too_short": "{field} must not be empty",
}


def _field_name(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "body"


def format_errors(exc: ValidationError) -> List[str]:
    messages = []
    for err in exc.errors():
        field = _field_name(err.get("loc", ()))
        template = _MESSAGES.get(err["type"])
        if template:
            messages.append(template.format(field=field))
        else:
            messages.append(f"{field}: {err['msg']}")
    return messages


def validate_payload(
    model: Type[T], payload: Any
) -> Tuple[Optional[T], Optional[AppError]]:
    """Validates a decoded body, collecting every field violation at once."""
    if not isinstance(payload, dict):
        return None, validation_error(["body must be a JSON object"])
    try:
        return model.model_validate(payload), None
    except ValidationError as e:
        return None, validation_error(format_errors(e))
