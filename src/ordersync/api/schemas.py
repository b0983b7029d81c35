"""Pydantic request/response models for the change-event API.

API schemas are separate from the fabric's DocumentChange (anti-corruption pattern).
"""

from typing import Any

from pydantic import BaseModel, Field


class ChangeEventRequest(BaseModel):
    path: str = Field(..., examples=["vendors/v1/orders/o1"])
    before: dict[str, Any] | None = Field(None, description="Document snapshot before the write; null on create")
    after: dict[str, Any] | None = Field(None, description="Document snapshot after the write; null on delete")


class ChangeEventResponse(BaseModel):
    status: str = "ok"
    path: str
    kind: str
    effects: int = 0


class HealthResponse(BaseModel):
    status: str = "ok"
    domain: str
    routes: list[str]
