"""reasoning_bridge/search.py

Exa web-search adapter.

Builds the fixed-shape request, attaches the API key from the adapter's
configuration, and returns the backend's JSON payload untouched. Any failure
is normalised into a BackendError that prefers the message Exa put in its
error body over the generic transport text.
"""

from __future__ import annotations

# Standard Library
import logging
from typing import Any

# Third-Party Libraries
import httpx

# Local Modules
from reasoning_bridge.errors import BackendError

logger = logging.getLogger("reasoning-bridge.search")

DEFAULT_BASE_URL: str = "https://api.exa.ai"
SEARCH_ENDPOINT: str = "/search"
DEFAULT_NUM_RESULTS: int = 10
ERROR_LABEL: str = "Exa API error"


def build_search_request(query: str, num_results: int | None = None) -> dict[str, Any]:
    """Return the JSON body sent to the search endpoint."""
    return {
        "query": query,
        "type": "auto",
        "numResults": num_results or DEFAULT_NUM_RESULTS,
        "contents": {"text": True},
    }


def _backend_message(response: httpx.Response) -> str | None:
    """Return the ``message`` field of an error body, if the body has one."""
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict):
        message = body.get("message")
        if isinstance(message, str) and message:
            return message
    return None


class ExaSearchClient:
    """Async client for the Exa ``/search`` endpoint.

    A new ``httpx.AsyncClient`` is opened per call, so the adapter holds no
    connection state between requests. There is no timeout and no retry.

    Args:
        api_key: Exa API key sent as ``x-api-key``.
        base_url: API root, ``https://api.exa.ai`` unless overridden.
        transport: Optional httpx transport (used to stub the backend).
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = base_url
        self._headers: dict[str, str] = {
            "accept": "application/json",
            "content-type": "application/json",
            "x-api-key": api_key,
        }
        self._transport = transport

    async def search(self, query: str, num_results: int | None = None) -> Any:
        """Run one search and return the decoded JSON payload.

        Raises:
            BackendError: The request failed, the backend answered with an
                error status, or the body was not JSON.
        """
        payload = build_search_request(query, num_results)
        logger.info("[search] query=%r num_results=%d", query, payload["numResults"])
        try:
            async with httpx.AsyncClient(
                base_url=self.base_url,
                headers=self._headers,
                timeout=None,
                transport=self._transport,
            ) as client:
                response = await client.post(SEARCH_ENDPOINT, json=payload)
                response.raise_for_status()
                data = response.json()
        except httpx.HTTPStatusError as exc:
            message = _backend_message(exc.response)
            logger.error("[search] HTTP %d: %s", exc.response.status_code, message or exc)
            raise BackendError(ERROR_LABEL, message or str(exc), detail=str(exc)) from exc
        except httpx.HTTPError as exc:
            logger.error("[search] transport error: %s", exc, exc_info=True)
            raise BackendError(ERROR_LABEL, str(exc) or type(exc).__name__) from exc
        except ValueError as exc:
            logger.error("[search] undecodable response body: %s", exc)
            raise BackendError(ERROR_LABEL, "response body is not valid JSON", detail=str(exc)) from exc

        logger.info("[search] query=%r -> %d bytes", query, len(response.content))
        return data
