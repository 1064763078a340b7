"""
Input shape rules for register and login.

Validation collects every violated field instead of stopping at the first,
so clients can fix a whole form in one round trip.
"""

from typing import Any, Callable, Dict, Iterable, List, Type

from pydantic import BaseModel, EmailStr, Field, ValidationError
from pydantic.alias_generators import to_camel

from src.libs.result import Error, Result, Return

USERNAME_PATTERN = r"^[A-Za-z0-9]+$"


class RegisterInput(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    username: str = Field(..., min_length=3, max_length=30, pattern=USERNAME_PATTERN)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)


class LoginInput(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


def field_errors(
    errors: Iterable[Dict[str, Any]], rename: Callable[[str], str] = lambda name: name
) -> List[Dict[str, str]]:
    """Flatten pydantic errors to one {field, message} entry per field"""
    details: Dict[str, str] = {}
    for err in errors:
        parts = [str(part) for part in err.get("loc", ()) if part != "body"]
        field = rename(parts[0]) if parts else "body"
        details.setdefault(field, err.get("msg", "Invalid value"))
    return [{"field": field, "message": message} for field, message in details.items()]


def validation_error(details: List[Dict[str, str]]) -> Error:
    return Error("VALIDATION_ERROR", "Invalid input", details=details)


def validate_input(model: Type[BaseModel], values: Dict[str, Any]) -> Result:
    """
    Validate values against model

    Returns:
        Result with the validated model, or Error(VALIDATION_ERROR) whose
        details name each offending field in camelCase
    """
    try:
        return Return.ok(model.model_validate(values))
    except ValidationError as exc:
        return Return.err(validation_error(field_errors(exc.errors(), rename=to_camel)))
