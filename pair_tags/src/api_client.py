"""
API Client for the Uniswap v2 Subgraph
======================================

This module provides an async GraphQL client for querying Uniswap v2 pairs
from a subgraph served through The Graph gateway.

Features:
- Async HTTP requests with aiohttp
- One fixed pairs query ordered by creation time
- Typed errors for HTTP, GraphQL and shape failures
- Request statistics
"""

import aiohttp
import asyncio
import logging
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Any

from .errors import MalformedResponseError, TransportError, UpstreamError
from .models import Pair

logger = logging.getLogger(__name__)

PAGE_SIZE = 1000

PAIRS_QUERY = """
query GetPairs($lastTimestamp: Int) {
  pairs(
    first: 1000,
    orderBy: createdAtTimestamp,
    orderDirection: asc,
    where: { createdAtTimestamp_gt: $lastTimestamp }
  ) {
    id
    createdAtTimestamp
    token0 {
      id
      name
      symbol
    }
    token1 {
      id
      name
      symbol
    }
  }
}
"""


def _default_headers() -> Dict[str, str]:
    return {
        "Content-Type": "application/json",
        "Accept": "application/json",
    }


@dataclass
class APIConfig:
    """Configuration for the API client"""
    timeout: int = 300  # seconds, same as the aiohttp default
    headers: Dict[str, str] = field(default_factory=_default_headers)


class PairsAPIClient:
    """
    Async GraphQL client for the Uniswap v2 subgraph.

    A request is attempted once. Any failure is raised to the caller as a
    PairTagError subclass.
    """

    def __init__(self, endpoint: str, config: Optional[APIConfig] = None):
        """
        Initialize the API client.

        Args:
            endpoint: Resolved subgraph endpoint (includes the API key)
            config: Optional API configuration. Uses defaults if not provided.
        """
        self.endpoint = endpoint
        self.config = config or APIConfig()
        self.session: Optional[aiohttp.ClientSession] = None
        self.request_count = 0
        self.error_count = 0

    async def __aenter__(self):
        """Async context manager entry"""
        timeout = aiohttp.ClientTimeout(total=self.config.timeout)
        self.session = aiohttp.ClientSession(timeout=timeout)
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Async context manager exit"""
        if self.session:
            await self.session.close()
            self.session = None

    async def _post_query(self, query: str, variables: Dict[str, Any]) -> Dict[str, Any]:
        """
        POST a GraphQL query and return the decoded response body.

        Args:
            query: GraphQL query document
            variables: Query variables

        Returns:
            The JSON response body

        Raises:
            TransportError: On a non-2xx status, a failed request or a non-JSON body
            UpstreamError: If the body carries a GraphQL error list
        """
        payload = {"query": query, "variables": variables}

        logger.debug(f"Request variables: {variables}")

        try:
            async with self.session.post(
                self.endpoint,
                json=payload,
                headers=self.config.headers
            ) as response:
                self.request_count += 1

                if not 200 <= response.status < 300:
                    self.error_count += 1
                    text = await response.text()
                    logger.error(f"Subgraph returned HTTP {response.status}: {text[:200]}")
                    raise TransportError(f"HTTP error! status: {response.status}")

                try:
                    body = await response.json(content_type=None)
                except ValueError as e:
                    self.error_count += 1
                    raise TransportError("Invalid JSON response from subgraph") from e

        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            self.error_count += 1
            logger.error(f"Request to subgraph failed: {str(e)}")
            raise TransportError(f"Request to subgraph failed: {str(e)}") from e

        if not isinstance(body, dict):
            raise MalformedResponseError(f"Unexpected response format: {type(body).__name__}")

        errors = body.get("errors")
        if errors:
            self.error_count += 1
            messages = []
            for error in errors:
                message = error.get("message", str(error)) if isinstance(error, dict) else str(error)
                logger.error(f"GraphQL error: {message}")
                messages.append(message)
            raise UpstreamError(f"GraphQL errors occurred: {'; '.join(messages)}")

        return body

    async def query_pairs(self, last_timestamp: int) -> List[Pair]:
        """
        Fetch one page of pairs created after a timestamp.

        Args:
            last_timestamp: Cursor; only pairs with a later createdAtTimestamp are returned

        Returns:
            Up to PAGE_SIZE pairs in ascending creation order

        Raises:
            MalformedResponseError: If data.pairs is missing or a record cannot be decoded
        """
        body = await self._post_query(PAIRS_QUERY, {"lastTimestamp": last_timestamp})

        data = body.get("data")
        if not isinstance(data, dict) or not isinstance(data.get("pairs"), list):
            raise MalformedResponseError("Missing expected data from GraphQL response")

        try:
            pairs = [Pair.from_dict(record) for record in data["pairs"]]
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedResponseError(f"Malformed pair record: {str(e)}") from e

        logger.info(f"Fetched {len(pairs)} pairs created after {last_timestamp}")
        return pairs

    def get_statistics(self) -> Dict[str, float]:
        """
        Get client statistics.

        Returns:
            Dictionary with request and error counts
        """
        return {
            "total_requests": self.request_count,
            "total_errors": self.error_count,
            "success_rate": (
                (self.request_count - self.error_count) / self.request_count * 100
                if self.request_count > 0 else 0
            )
        }
