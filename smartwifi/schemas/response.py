"""
SmartWiFi Portal - Response conventions

Success responses carry the payload directly. Failures are ``{"error": code}``:
domain failures with HTTP 200, auth/method/store failures with a real status.
"""
from typing import Any, Dict
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_serializer


# ==================== Error codes ====================

class ErrorCodes:
    """Wire error codes"""

    # soft, HTTP 200
    INVALID = "invalid"
    NOT_FOUND = "not_found"
    UNKNOWN_ACTION = "unknown_action"
    CONFLICT = "conflict"

    # hard
    UNAUTHORIZED = "unauthorized"
    FORBIDDEN = "forbidden"
    METHOD_NOT_ALLOWED = "method_not_allowed"
    STORE_UNAVAILABLE = "store_unavailable"
    INTERNAL = "internal"


def error_response(code: str) -> Dict[str, Any]:
    """Build an error body."""
    return {"error": code}


# ==================== Shared documents ====================

class Document(BaseModel):
    """Stored record as returned to clients (``_id``, camelCase keys)."""

    model_config = ConfigDict(populate_by_name=True)

    id: str = Field(..., alias="_id")
    created_at: datetime = Field(..., alias="createdAt")

    @field_serializer("created_at")
    def _serialize_created_at(self, value: datetime) -> str:
        return value.isoformat() + "Z"

    def to_wire(self) -> Dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class InsertedResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    inserted_id: str = Field(..., alias="insertedId")


class OkResponse(BaseModel):
    ok: bool = True


class IdRequest(BaseModel):
    """Payload addressing a single record"""
    id: str = Field(..., min_length=1)
