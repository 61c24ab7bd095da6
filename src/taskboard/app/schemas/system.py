"""Payloads for the root, health and error responses rather than a resource."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RootResponse(BaseModel):
    name: str
    environment: str
    version: str
    api_prefix: str = Field(description="Path under which the resource routes are mounted")


class HealthCheckResponse(BaseModel):
    status: Literal["ok"] = "ok"


class ReadinessResponse(BaseModel):
    """Readiness of the service and of the entity store behind it."""

    status: Literal["ready", "unavailable"]
    database: Literal["ok", "unreachable"]


class ErrorDetails(BaseModel):
    """Context attached to an error.

    ``errors`` maps each failing field to its messages on 422 responses.
    Error-specific keys such as ``action`` and ``resource`` pass through.
    """

    model_config = ConfigDict(extra="allow")

    errors: dict[str, list[str]] | None = None
    request_id: str | None = None


class ErrorResponse(BaseModel):
    code: str = Field(description="Stable machine-readable identifier, e.g. not_found")
    message: str
    details: ErrorDetails | None = None
