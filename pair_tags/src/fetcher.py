"""
Pair Fetcher Module
Responsible for paging through Uniswap v2 pairs in ascending creation order,
using the creation timestamp of the last page as the cursor for the next one.
"""

import logging
from typing import AsyncIterator, List, Optional

from .api_client import PAGE_SIZE, APIConfig, PairsAPIClient
from .models import Pair

logger = logging.getLogger(__name__)


class PairFetcher:
    """
    Fetches every pair from a subgraph endpoint, one page at a time.
    """

    def __init__(self, endpoint: str, api_config: Optional[APIConfig] = None):
        """
        Initialize the PairFetcher.

        Args:
            endpoint: Resolved subgraph endpoint
            api_config: API configuration object
        """
        self.endpoint = endpoint
        self.api_config = api_config or APIConfig()
        self.pages_fetched = 0
        self.cursor = 0

    @staticmethod
    def next_cursor(page: List[Pair]) -> int:
        """Return the largest creation timestamp in a page."""
        return max(pair.created_at_timestamp for pair in page)

    async def iter_pages(self, start_cursor: int = 0) -> AsyncIterator[List[Pair]]:
        """
        Yield pages of pairs until a page shorter than PAGE_SIZE is returned.

        Args:
            start_cursor: Only pairs created after this timestamp are fetched

        Yields:
            Lists of pairs, each at most PAGE_SIZE long

        Raises:
            PairTagError: On the first failed request; nothing further is yielded
        """
        self.cursor = start_cursor

        async with PairsAPIClient(self.endpoint, self.api_config) as client:
            while True:
                page = await client.query_pairs(self.cursor)
                self.pages_fetched += 1

                yield page

                # A short page is the last one
                if len(page) < PAGE_SIZE:
                    break

                self.cursor = self.next_cursor(page)
                logger.info(f"Page {self.pages_fetched} was full, continuing after {self.cursor}")

            stats = client.get_statistics()
            logger.info(f"Pagination finished after {self.pages_fetched} pages "
                        f"({stats['total_requests']} requests)")

    async def fetch_all_pairs(self, start_cursor: int = 0) -> List[Pair]:
        """
        Fetch all pairs created after a timestamp.

        Args:
            start_cursor: Only pairs created after this timestamp are fetched

        Returns:
            Every pair across all pages, in fetch order
        """
        all_pairs: List[Pair] = []

        async for page in self.iter_pages(start_cursor):
            all_pairs.extend(page)

        logger.info(f"Fetched {len(all_pairs)} pairs in {self.pages_fetched} pages")
        return all_pairs
