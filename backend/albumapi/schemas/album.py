"""
Album API — Pydantic Request/Response Schemas
==============================================

What:  Pydantic models defining the API contract of the albums endpoints.
Why:   Input decoding, response serialization and OpenAPI docs from one place.
How:   FastAPI validates the POST /albums body against Album and serializes
       every Album it returns with the same model.

Decode strictness:
    Album is strict about types: "price": "9.99" or "id": 7 is a decode error
    (400), while a missing field falls back to its zero value. Integers are
    accepted for price; NaN and Infinity (which json.loads lets through) are
    not. Unknown keys are ignored.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class Album(BaseModel):
    """
    What:  Data about a record album.
    Who:   Request body of POST /albums; response of every /albums endpoint.
    """

    model_config = ConfigDict(extra="ignore")

    id: str = Field(default="", strict=True, description="Album identifier, supplied by the client")
    title: str = Field(default="", strict=True, description="Album title")
    artist: str = Field(default="", strict=True, description="Recording artist")
    price: float = Field(default=0.0, strict=True, allow_inf_nan=False, description="Price as a decimal number")


class ErrorResponse(BaseModel):
    """
    What:  Error body for 400 and 500 responses.

    Example:
        {"error": "failed to create album"}
    """

    error: str = Field(description="Error description")


class MessageResponse(BaseModel):
    """
    What:  Body of 404 responses.

    Example:
        {"message": "album not found"}
    """

    message: str = Field(description="Human-readable message")


class HealthResponse(BaseModel):
    """Liveness response returned by GET /health (no backend call is made)."""

    status: str = Field(description="Always 'ok' while the process serves requests")
    version: str = Field(description="Application version")
    uptime_seconds: float = Field(description="Seconds since service started")
    table: Optional[str] = Field(default=None, description="Configured Airtable table")
