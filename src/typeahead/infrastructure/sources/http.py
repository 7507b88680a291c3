"""HTTP candidate source backed by ``requests``.

The parameter bag handed to ``fetch`` is sent as the query string of a GET
request. The blocking call runs in a worker thread so the event loop keeps
serving keystrokes while a lookup is in flight.
"""

from __future__ import annotations

import asyncio
from collections.abc import Mapping
from typing import Any, Optional

import jmespath
import requests
from jmespath.exceptions import JMESPathError

from typeahead.domain.errors import ConfigurationError, FetchError
from typeahead.logger import get_logger

logger = get_logger("sources.http")

DEFAULT_USER_AGENT = "typeahead/0.1 (+https://pypi.org/project/typeahead)"


class HttpCandidateSource:
    """Remote candidate fetcher for a JSON search endpoint.

    Args:
        url: Endpoint receiving the parameter bag as query string
        items_path: JMESPath expression selecting the candidate list inside
            the JSON document (e.g. ``data.results``); the document itself
            when None
        timeout: Request timeout in seconds
        headers: Extra request headers

    Raises:
        ConfigurationError: If ``items_path`` is not valid JMESPath
    """

    def __init__(
        self,
        url: str,
        items_path: Optional[str] = None,
        timeout: float = 10.0,
        headers: Optional[Mapping[str, str]] = None,
    ) -> None:
        self.url = url
        try:
            self.items_path = jmespath.compile(items_path) if items_path else None
        except JMESPathError as e:
            raise ConfigurationError(f"Invalid items path {items_path!r}: {e}") from e
        self.timeout = timeout
        self.headers = {"User-Agent": DEFAULT_USER_AGENT, "Accept": "application/json", **(headers or {})}

    async def fetch(self, params: Mapping[str, Any]) -> list[Any]:
        return await asyncio.to_thread(self._get, dict(params))

    def _get(self, params: dict[str, Any]) -> list[Any]:
        query = params.get("query")
        logger.debug(f"GET {self.url} params={params!r}")
        try:
            response = requests.get(self.url, params=params, headers=self.headers, timeout=self.timeout)
            response.raise_for_status()
            document = response.json()
        except requests.exceptions.RequestException as e:
            logger.error(f"Request failed for {self.url}: {e}")
            raise FetchError(f"Request to {self.url} failed: {e}", query=query) from e
        except ValueError as e:
            logger.error(f"Invalid JSON from {self.url}: {e}")
            raise FetchError(f"Invalid JSON from {self.url}: {e}", query=query) from e

        return self._extract_items(document, query)

    def _extract_items(self, document: Any, query: Optional[str]) -> list[Any]:
        items = self.items_path.search(document) if self.items_path is not None else document
        # a missing path means nothing was found
        if items is None:
            return []
        if not isinstance(items, list):
            raise FetchError(
                f"Expected a list of candidates from {self.url}, got {type(items).__name__}", query=query
            )
        logger.debug(f"Fetched {len(items)} candidates from {self.url}")
        return items
