"""Agify Python client: age predictions for names from agify.io."""

from __future__ import annotations

import logging

from agify.client import AgifyClient, AsyncAgifyClient
from agify.exceptions import (
    AgifyError,
    AuthenticationError,
    DecodeError,
    RateLimitError,
    ReadError,
    ServiceError,
    TransportError,
    ValidationError,
)
from agify.logging_config import setup_logging
from agify.models import ClientConfig, Prediction, RateLimit

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "AgifyClient",
    "AsyncAgifyClient",
    "AgifyError",
    "TransportError",
    "ReadError",
    "DecodeError",
    "ServiceError",
    "AuthenticationError",
    "ValidationError",
    "RateLimitError",
    "ClientConfig",
    "Prediction",
    "RateLimit",
    "setup_logging",
]
