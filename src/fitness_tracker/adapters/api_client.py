"""HTTP client for the remote tracker API."""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import Protocol

import httpx
from pydantic import ValidationError

from fitness_tracker.adapters.api_models import ApiEnvelope
from fitness_tracker.errors import ApiError

_logger = logging.getLogger(__name__)


class ApiClient(Protocol):
    """Interface for sending actions to the remote API controller."""

    async def send(self, body: dict[str, object]) -> object:
        """Send an action body and return the unwrapped response data."""


@dataclass
class HttpxApiClient(ApiClient):
    """HTTPX-backed API client with retry and exponential backoff."""

    url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 30
    retries: int = 3
    backoff_seconds: float = 1.0
    headers: dict[str, str] = field(
        default_factory=lambda: {"Content-Type": "application/json"}
    )

    @classmethod
    def create(
        cls,
        url: str,
        timeout_seconds: float = 30,
        retries: int = 3,
        backoff_seconds: float = 1.0,
    ) -> "HttpxApiClient":
        """Create an API client with a managed httpx session."""
        return cls(
            url=url,
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
            retries=retries,
            backoff_seconds=backoff_seconds,
        )

    async def send(self, body: dict[str, object]) -> object:
        """POST ``body`` to the controller, retrying transient failures.

        Client errors (4xx) and operations the API reports as unsuccessful are
        raised at once. Network failures and server errors are retried with
        delays of ``backoff_seconds``, doubled after each attempt.
        """
        attempts = max(self.retries, 1)
        attempt = 0
        while True:
            attempt += 1
            try:
                return await self._send_once(body)
            except (httpx.HTTPError, ApiError) as exc:
                if isinstance(exc, ApiError) and not exc.retryable:
                    raise
                status_code = exc.status_code if isinstance(exc, ApiError) else None
                _logger.warning(
                    "API %s %s failed (attempt %s/%s, status=%s): %s",
                    body.get("action"),
                    body.get("type"),
                    attempt,
                    attempts,
                    status_code or "n/a",
                    exc,
                )
                if attempt >= attempts:
                    raise ApiError(
                        f"Request failed after {attempts} attempts: {exc}",
                        status_code=status_code,
                    ) from exc
                await asyncio.sleep(self.backoff_seconds * 2 ** (attempt - 1))

    async def _send_once(self, body: dict[str, object]) -> object:
        response = await self.http_client.post(
            self.url,
            json=body,
            headers=self.headers,
            timeout=self.timeout_seconds,
        )
        if response.is_error:
            raise ApiError(
                f"HTTP {response.status_code}: {response.reason_phrase}",
                status_code=response.status_code,
            )
        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiError("Failed to parse response JSON") from exc
        return unwrap_response(payload, response.status_code)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def unwrap_response(payload: object, status_code: int | None = None) -> object:
    """Return the data of a list of operation envelopes.

    Raises ``ApiError`` when any envelope reports ``success: false``. Payloads
    that are not envelopes are returned untouched.
    """
    if not isinstance(payload, list) or not payload:
        return payload
    first = payload[0]
    if not isinstance(first, dict) or not ({"success", "data"} & first.keys()):
        return payload
    try:
        envelopes = [ApiEnvelope.model_validate(item) for item in payload]
    except ValidationError as exc:
        raise ApiError("Unexpected response format", status_code=status_code) from exc
    failed = [envelope for envelope in envelopes if not envelope.success]
    if failed:
        message = ", ".join(
            envelope.message or "API request failed" for envelope in failed
        )
        errors = [error for envelope in failed for error in envelope.errors or []]
        raise ApiError(message, status_code=status_code, errors=errors)
    return envelopes[0].data
