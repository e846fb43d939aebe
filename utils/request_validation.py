"""Utilities for validating incoming Flask requests."""

from __future__ import annotations

from typing import Any, Mapping, TypeVar

from flask import Request
from pydantic import BaseModel, ValidationError

from errors import ValidationFailed

SchemaT = TypeVar("SchemaT", bound=BaseModel)


def parse_json_request(
    req: Request,
    *,
    allow_empty: bool = False,
) -> dict:
    """Return the parsed JSON body or raise a 400 error."""

    if not req.is_json:
        raise ValidationFailed("Request content type must be application/json.")

    data = req.get_json(silent=True)
    if data is None:
        raise ValidationFailed("Request JSON body is required.")

    if not isinstance(data, dict):
        raise ValidationFailed("Request JSON payload must be an object.")

    if not data and not allow_empty:
        raise ValidationFailed("Request JSON body must not be empty.")

    return data


def _describe(error: Mapping[str, Any]) -> str:
    location = ".".join(str(part) for part in error.get("loc", ()))
    message = error.get("msg", "is invalid")
    return f"{location}: {message}" if location else message


def validate_payload(schema: type[SchemaT], payload: Mapping[str, Any]) -> SchemaT:
    """Validate ``payload`` against ``schema`` or raise a 400 error."""

    try:
        return schema.model_validate(dict(payload))
    except ValidationError as exc:
        raise ValidationFailed(
            "; ".join(_describe(error) for error in exc.errors())
        ) from exc
