"""Async and sync HTTP clients for the agify.io API."""

from __future__ import annotations

import logging
from typing import Callable, Sequence

import httpx
import pydantic

from agify.config import settings
from agify.exceptions import (
    AuthenticationError,
    DecodeError,
    RateLimitError,
    ReadError,
    ServiceError,
    TransportError,
    ValidationError,
)
from agify.models import ClientConfig, ErrorPayload, Prediction, RateLimit

logger = logging.getLogger(__name__)

# Maps HTTP status codes to exception classes.
_STATUS_MAP: dict[int, type[ServiceError]] = {
    400: ValidationError,
    401: AuthenticationError,
    403: AuthenticationError,
    422: ValidationError,
    429: RateLimitError,
}

_PREDICTIONS = pydantic.TypeAdapter(list[Prediction])

Params = list[tuple[str, str]]


def _build_config(
    base_url: str | None,
    api_key: str | None,
    timeout: float | None,
    http_client: httpx.Client | httpx.AsyncClient | None,
    http_factory: Callable[..., httpx.Client | httpx.AsyncClient],
) -> ClientConfig:
    timeout = timeout if timeout is not None else settings.timeout
    if http_client is None:
        http_client = http_factory(timeout=timeout)
    return ClientConfig(
        base_url=base_url if base_url is not None else settings.base_url,
        api_key=api_key if api_key is not None else settings.api_key,
        timeout=timeout,
        http_client=http_client,
    )


def _request_url(config: ClientConfig, params: Params) -> httpx.URL:
    """Merge *params* into the base URL, keeping any query it already has."""
    return httpx.URL(config.base_url).copy_merge_params(params)


def _single_params(config: ClientConfig, name: str, country: str) -> Params:
    params: Params = [("name", name)]
    if country:
        params.append(("country_id", country))
    if config.api_key:
        params.append(("apikey", config.api_key))
    return params


def _batch_params(config: ClientConfig, names: Sequence[str], country: str) -> Params:
    # country_id is always sent on batch lookups, even when empty.
    params: Params = [("country_id", country)]
    params.extend(("name[]", name) for name in names)
    if config.api_key:
        params.append(("apikey", config.api_key))
    return params


def _classify(status_code: int, body: bytes, rate_limit: RateLimit) -> bytes:
    """Return *body* for a 200 response, raise the matching error otherwise."""
    if status_code == httpx.codes.OK:
        return body
    try:
        payload = ErrorPayload.model_validate_json(body)
    except pydantic.ValidationError as exc:
        raise DecodeError(
            f"undecodable error body for status {status_code}: {exc}",
            rate_limit,
            status_code,
        ) from exc
    exc_cls = _STATUS_MAP.get(status_code, ServiceError)
    raise exc_cls(status_code, payload.error, rate_limit)


def _decode_prediction(body: bytes, rate_limit: RateLimit) -> Prediction:
    try:
        return Prediction.model_validate_json(body)
    except pydantic.ValidationError as exc:
        raise DecodeError(f"invalid prediction body: {exc}", rate_limit) from exc


def _decode_predictions(body: bytes, rate_limit: RateLimit) -> list[Prediction]:
    try:
        return _PREDICTIONS.validate_json(body)
    except pydantic.ValidationError as exc:
        raise DecodeError(f"invalid batch prediction body: {exc}", rate_limit) from exc


def _log_response(response: httpx.Response, rate_limit: RateLimit) -> None:
    logger.debug(
        "agify response: status=%d",
        response.status_code,
        extra={
            "status_code": response.status_code,
            "rate_limit_remaining": rate_limit.remaining,
            "rate_limit_reset": rate_limit.reset,
        },
    )


# ---------------------------------------------------------------------------
# Async client
# ---------------------------------------------------------------------------


class AsyncAgifyClient:
    """Async client for the agify API (backed by ``httpx.AsyncClient``)."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        *,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._owns_http = http_client is None
        self._config = _build_config(
            base_url, api_key, timeout, http_client, httpx.AsyncClient,
        )
        self._http: httpx.AsyncClient = self._config.http_client

    @property
    def config(self) -> ClientConfig:
        return self._config

    # -- context manager -----------------------------------------------------

    async def __aenter__(self) -> AsyncAgifyClient:
        return self

    async def __aexit__(self, *exc: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_http:
            await self._http.aclose()

    # -- internal ------------------------------------------------------------

    async def _get(self, params: Params) -> tuple[bytes, RateLimit]:
        try:
            async with self._http.stream(
                "GET", _request_url(self._config, params),
            ) as response:
                rate_limit = RateLimit.from_headers(response.headers)
                _log_response(response, rate_limit)
                try:
                    body = await response.aread()
                except httpx.HTTPError as exc:
                    raise ReadError(f"failed to read response body: {exc}", rate_limit) from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TransportError(f"request to {self._config.base_url} failed: {exc}") from exc
        return _classify(response.status_code, body, rate_limit), rate_limit

    # -- public methods ------------------------------------------------------

    async def predict(self, name: str, country: str = "") -> tuple[Prediction, RateLimit]:
        logger.debug("agify predict: country=%r", country)
        body, rate_limit = await self._get(_single_params(self._config, name, country))
        return _decode_prediction(body, rate_limit), rate_limit

    async def batch_predict(
        self, names: Sequence[str], country: str = "",
    ) -> tuple[list[Prediction], RateLimit]:
        logger.debug("agify batch_predict: %d name(s), country=%r", len(names), country)
        body, rate_limit = await self._get(_batch_params(self._config, names, country))
        return _decode_predictions(body, rate_limit), rate_limit


# ---------------------------------------------------------------------------
# Sync client
# ---------------------------------------------------------------------------


class AgifyClient:
    """Synchronous client for the agify API (backed by ``httpx.Client``).

    Arguments left as *None* fall back to :data:`agify.config.settings`. An
    injected *http_client* is used as-is and never closed by this client.
    The client holds no mutable state once built, so one instance may be
    shared between threads as long as the HTTP client allows it.
    """

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        *,
        http_client: httpx.Client | None = None,
    ) -> None:
        self._owns_http = http_client is None
        self._config = _build_config(
            base_url, api_key, timeout, http_client, httpx.Client,
        )
        self._http: httpx.Client = self._config.http_client

    @property
    def config(self) -> ClientConfig:
        return self._config

    # -- context manager -----------------------------------------------------

    def __enter__(self) -> AgifyClient:
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def close(self) -> None:
        if self._owns_http:
            self._http.close()

    # -- internal ------------------------------------------------------------

    def _get(self, params: Params) -> tuple[bytes, RateLimit]:
        """Issue one GET and return the 200 body with its rate-limit snapshot."""
        try:
            with self._http.stream(
                "GET", _request_url(self._config, params),
            ) as response:
                rate_limit = RateLimit.from_headers(response.headers)
                _log_response(response, rate_limit)
                try:
                    body = response.read()
                except httpx.HTTPError as exc:
                    raise ReadError(f"failed to read response body: {exc}", rate_limit) from exc
        except (httpx.RequestError, httpx.InvalidURL) as exc:
            raise TransportError(f"request to {self._config.base_url} failed: {exc}") from exc
        return _classify(response.status_code, body, rate_limit), rate_limit

    # -- public methods ------------------------------------------------------

    def predict(self, name: str, country: str = "") -> tuple[Prediction, RateLimit]:
        """Predict the age for *name*, optionally scoped to *country*."""
        logger.debug("agify predict: country=%r", country)
        body, rate_limit = self._get(_single_params(self._config, name, country))
        return _decode_prediction(body, rate_limit), rate_limit

    def batch_predict(
        self, names: Sequence[str], country: str = "",
    ) -> tuple[list[Prediction], RateLimit]:
        """Predict ages for *names* in one request; results follow response order."""
        logger.debug("agify batch_predict: %d name(s), country=%r", len(names), country)
        body, rate_limit = self._get(_batch_params(self._config, names, country))
        return _decode_predictions(body, rate_limit), rate_limit
