"""Remote todo source.

Defines a Protocol for testability and a concrete implementation backed
by httpx. One request, one response, one decode pass: no retry, no cache,
no pagination.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable

import httpx
from pydantic import ValidationError

from todolist_cli.errors import (
    DecodeFailureError,
    EmptyResponseError,
    InvalidEndpointError,
    TransportFailureError,
)

from .models import RemoteTodoItem, TodoResponse

logger = logging.getLogger(__name__)

DEFAULT_ENDPOINT = "https://dummyjson.com/todos"
_DEFAULT_TIMEOUT = 30.0


@runtime_checkable
class RemoteTodoSourceProtocol(Protocol):
    """Anything that can produce the list of remote todos.

    A Protocol (not ABC) so tests can pass any object with a matching
    ``fetch_todos`` coroutine.
    """

    async def fetch_todos(self) -> list[RemoteTodoItem]:
        """Return every todo published by the remote source."""
        ...


class DummyJsonTodoSource:
    """Fetches todos from a dummyjson-style ``/todos`` endpoint.

    Args:
        endpoint: Absolute http(s) URL of the todo list.
        timeout: HTTP request timeout in seconds.
        transport: Optional httpx transport (tests use ``httpx.MockTransport``).
    """

    def __init__(
        self,
        endpoint: str = DEFAULT_ENDPOINT,
        *,
        timeout: float = _DEFAULT_TIMEOUT,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._endpoint = endpoint
        self._timeout = timeout
        self._transport = transport

    @property
    def endpoint(self) -> str:
        return self._endpoint

    async def fetch_todos(self) -> list[RemoteTodoItem]:
        """Fetch and decode the remote todo list.

        Raises:
            InvalidEndpointError: The endpoint is not an absolute http(s) URL.
            TransportFailureError: The request failed or returned an error status.
            EmptyResponseError: The response carried no body.
            DecodeFailureError: The body is not the expected JSON shape.
        """
        url = self._build_url()
        logger.debug("fetching remote todos from %s", url)

        try:
            async with httpx.AsyncClient(
                timeout=self._timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(url, headers={"Accept": "application/json"})
            response.raise_for_status()
        except httpx.HTTPError as exc:
            raise TransportFailureError(f"Request to {url} failed: {exc}") from exc

        if not response.content:
            raise EmptyResponseError(f"Empty response from {url}")

        try:
            payload = TodoResponse.model_validate_json(response.content)
        except ValidationError as exc:
            raise DecodeFailureError(f"Unexpected payload from {url}: {exc}") from exc

        logger.info("fetched %d remote todo(s) from %s", len(payload.todos), url)
        return payload.todos

    def _build_url(self) -> httpx.URL:
        try:
            url = httpx.URL(self._endpoint)
        except (httpx.InvalidURL, TypeError) as exc:
            raise InvalidEndpointError(f"Invalid endpoint: {self._endpoint!r}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise InvalidEndpointError(f"Invalid endpoint: {self._endpoint!r}")
        return url
