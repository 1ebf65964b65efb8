"""Data types returned by and configuring the agify client."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Mapping

import httpx
from pydantic import BaseModel, ConfigDict, Field


class Prediction(BaseModel):
    """Predicted age for a single name."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, strict=True)

    name: str = Field(..., description="Name that was queried")
    age: int | None = Field(None, description="Predicted age; null when the name is unknown")
    count: int = Field(0, description="Number of samples the prediction is based on")
    country: str = Field("", alias="country_id", description="Country the query was scoped to")


class ErrorPayload(BaseModel):
    """Body returned by the service with any non-200 status."""

    error: str


@dataclass(frozen=True)
class RateLimit:
    """Quota snapshot taken from response headers, kept as opaque strings."""

    limit: str
    remaining: str
    reset: str

    @classmethod
    def from_headers(cls, headers: Mapping[str, str]) -> RateLimit:
        """Read the ``X-Rate-*`` headers; missing ones become empty strings."""
        return cls(
            limit=headers.get("x-rate-limit-limit", ""),
            remaining=headers.get("x-rate-limit-remaining", ""),
            reset=headers.get("x-rate-reset", ""),
        )


@dataclass(frozen=True)
class ClientConfig:
    """Resolved settings for one client instance.

    *http_client* is the transport handle every request goes through. It is
    either the caller's injected client or one built with *timeout*.
    """

    base_url: str
    api_key: str | None = None
    timeout: float = 30.0
    http_client: httpx.Client | httpx.AsyncClient | None = field(
        default=None, repr=False, compare=False,
    )
