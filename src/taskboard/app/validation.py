"""Explicit request-body validation.

Bodies are read from the request by the routers only after the target has
been resolved and authorized, so that 401, 404 and 403 take precedence over
422. Every failing field is reported at once.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from typing import Any, TypeVar

from fastapi import Request
from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from .errors import ValidationFailedError, field_errors_from_pydantic

SchemaT = TypeVar("SchemaT", bound=BaseModel)


async def read_payload(request: Request) -> Any:
    """Decode the JSON body of ``request``; an empty body reads as ``None``."""

    raw = await request.body()
    if not raw.strip():
        return None
    try:
        return json.loads(raw)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ValidationFailedError({"body": ["The request body must be valid JSON."]}) from exc


def validate_payload(schema: type[SchemaT], payload: Any) -> SchemaT:
    """Validate ``payload`` against ``schema`` or raise ``ValidationFailedError``.

    A missing body is treated as an empty object, which fails for schemas
    with required fields and is a no-op for update schemas.
    """

    if payload is None:
        payload = {}
    if not isinstance(payload, Mapping):
        raise ValidationFailedError({"body": ["The request body must be a JSON object."]})
    try:
        return schema.model_validate(dict(payload))
    except PydanticValidationError as exc:
        raise ValidationFailedError(field_errors_from_pydantic(exc.errors())) from exc


def present_fields(model: BaseModel) -> dict[str, Any]:
    """Return only the fields the client actually sent, keyed by name."""

    return {name: getattr(model, name) for name in model.model_fields_set}


def merge_field_errors(*groups: Mapping[str, list[str]]) -> dict[str, list[str]]:
    merged: dict[str, list[str]] = {}
    for group in groups:
        for field, messages in group.items():
            merged.setdefault(field, []).extend(messages)
    return merged


__all__ = ["merge_field_errors", "present_fields", "read_payload", "validate_payload"]
