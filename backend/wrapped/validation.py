"""
Wrapped Backend - Request Validation
======================================

What:  Runs a pydantic schema over a decoded JSON body and returns an explicit
       result instead of raising.
How:   `validate()` returns `Valid(data)` on success or `Invalid(field_errors,
       form_errors)` on failure. Errors are flattened to one list of messages
       per top-level field; errors that belong to no field (wrong body type,
       malformed JSON) go to `form_errors`.
Who:   Routes call `validate()` and raise `ValidationError` for `Invalid`, so
       the global handler renders a 400.

Example flattened report:
    {
        "formErrors": [],
        "fieldErrors": {
            "username": ["Solo letras/números/_"],
            "password": ["String should have at least 6 characters"]
        }
    }
"""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Generic, List, Type, TypeVar, Union

import pydantic
from fastapi import Request

from wrapped.exceptions import ValidationError

ModelT = TypeVar("ModelT", bound=pydantic.BaseModel)


@dataclass(frozen=True)
class Valid(Generic[ModelT]):
    data: ModelT


@dataclass(frozen=True)
class Invalid:
    field_errors: Dict[str, List[str]] = field(default_factory=dict)
    form_errors: List[str] = field(default_factory=list)

    def to_exception(self) -> ValidationError:
        return ValidationError(field_errors=self.field_errors, form_errors=self.form_errors)


ValidationResult = Union[Valid[ModelT], Invalid]


def _message(error: Dict[str, Any]) -> str:
    # Custom ValueError messages come through as "Value error, <msg>"
    if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
        return str(error["ctx"]["error"])
    return error["msg"]


def flatten_errors(exc: pydantic.ValidationError) -> Invalid:
    """Group pydantic errors by top-level field name."""
    field_errors: Dict[str, List[str]] = {}
    form_errors: List[str] = []
    for error in exc.errors():
        loc = error.get("loc") or ()
        if loc:
            field_errors.setdefault(str(loc[0]), []).append(_message(error))
        else:
            form_errors.append(_message(error))
    return Invalid(field_errors=field_errors, form_errors=form_errors)


def validate(schema: Type[ModelT], payload: Any) -> ValidationResult:
    """Validate `payload` against `schema` without raising."""
    try:
        return Valid(schema.model_validate(payload))
    except pydantic.ValidationError as exc:
        return flatten_errors(exc)


async def read_json_body(request: Request) -> Any:
    """
    Decode the request body as JSON.

    An empty body decodes to `{}` so missing fields are reported per field.

    Raises:
        ValidationError: the body is not valid JSON (400, form-level error)
    """
    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        return json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        raise ValidationError(form_errors=["Malformed JSON body"]) from None


async def parse_body(request: Request, schema: Type[ModelT]) -> ModelT:
    """Read and validate a JSON body, raising ValidationError on any problem."""
    result = validate(schema, await read_json_body(request))
    if isinstance(result, Invalid):
        raise result.to_exception()
    return result.data
