"""
Tag Orchestrator Module
Coordinates the pipeline from endpoint resolution to contract tags.
"""

import logging
from datetime import datetime, timedelta
from enum import Enum
from typing import Any, Dict, List, Optional

from .api_client import PAGE_SIZE, APIConfig
from .errors import PairTagError, UnknownError
from .fetcher import PairFetcher
from .models import ContractTag
from .networks import resolve_endpoint
from .processor import TagProcessor

logger = logging.getLogger(__name__)


class PipelineStatus(Enum):
    """Pipeline execution status."""
    START = "start"
    FETCHING = "fetching"
    ACCUMULATING = "accumulating"
    DONE = "done"
    FAILED = "failed"


class PipelineMetrics:
    """Track pipeline execution metrics."""

    def __init__(self):
        self.start_time: Optional[datetime] = None
        self.end_time: Optional[datetime] = None
        self.pages_fetched = 0
        self.pairs_fetched = 0
        self.pairs_accepted = 0
        self.pairs_rejected = 0
        self.status: PipelineStatus = PipelineStatus.START

    def start(self):
        """Mark pipeline start."""
        self.start_time = datetime.now()
        self.status = PipelineStatus.FETCHING

    def complete(self, status: PipelineStatus = PipelineStatus.DONE):
        """Mark pipeline completion."""
        self.end_time = datetime.now()
        self.status = status

    @property
    def duration(self) -> Optional[timedelta]:
        """Calculate pipeline duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return None

    def to_dict(self) -> Dict[str, Any]:
        """Convert metrics to dictionary."""
        return {
            'start_time': self.start_time.isoformat() if self.start_time else None,
            'end_time': self.end_time.isoformat() if self.end_time else None,
            'duration_seconds': self.duration.total_seconds() if self.duration else None,
            'status': self.status.value,
            'pages_fetched': self.pages_fetched,
            'pairs_fetched': self.pairs_fetched,
            'pairs_accepted': self.pairs_accepted,
            'pairs_rejected': self.pairs_rejected,
        }


class TagOrchestrator:
    """
    Runs one tag pipeline: resolve the endpoint, page through pairs and
    transform each page as it arrives.
    """

    def __init__(self, api_config: APIConfig = None):
        """
        Initialize the TagOrchestrator.

        Args:
            api_config: API configuration
        """
        self.api_config = api_config or APIConfig()
        self.metrics = PipelineMetrics()

    async def run(self, network_id: str, api_key: str) -> List[ContractTag]:
        """
        Build contract tags for every pair on a network.

        Args:
            network_id: Chain id as a decimal string
            api_key: The Graph gateway API key

        Returns:
            One contract tag per valid pair

        Raises:
            PairTagError: The failure, re-raised with context; no partial result
        """
        logger.info(f"Starting tag pipeline for network {network_id}")
        self.metrics = PipelineMetrics()
        self.metrics.start()

        try:
            endpoint = resolve_endpoint(network_id, api_key)
            fetcher = PairFetcher(endpoint, self.api_config)
            processor = TagProcessor(network_id)

            tags: List[ContractTag] = []

            pages = fetcher.iter_pages()
            try:
                async for page in pages:
                    self.metrics.status = PipelineStatus.ACCUMULATING
                    self.metrics.pages_fetched += 1
                    self.metrics.pairs_fetched += len(page)

                    tags.extend(processor.transform_pairs(page))

                    if len(page) == PAGE_SIZE:
                        self.metrics.status = PipelineStatus.FETCHING
            finally:
                # Closes the client session if the loop body raised
                await pages.aclose()

            stats = processor.get_statistics()
            self.metrics.pairs_accepted = stats["accepted"]
            self.metrics.pairs_rejected = stats["rejected"]
            self.metrics.complete(PipelineStatus.DONE)

            logger.info(f"Pipeline completed: {len(tags)} tags from "
                        f"{self.metrics.pairs_fetched} pairs "
                        f"({self.metrics.pairs_rejected} rejected)")
            logger.info(f"Duration: {self.metrics.duration}")

            return tags

        except PairTagError as e:
            self.metrics.complete(PipelineStatus.FAILED)
            logger.error(f"Pipeline failed for network {network_id}: {e}")
            raise type(e)(f"Error in return_tags: {e}") from e

        except Exception as e:
            self.metrics.complete(PipelineStatus.FAILED)
            logger.exception(f"Unexpected error in pipeline for network {network_id}")
            raise UnknownError(f"Error in return_tags: {e}") from e


async def return_tags(
    network_id: str,
    api_key: str,
    api_config: APIConfig = None
) -> List[ContractTag]:
    """
    Return contract tags for all Uniswap v2 pairs on a network.

    Args:
        network_id: Chain id as a decimal string (e.g. "1")
        api_key: The Graph gateway API key
        api_config: Optional API configuration

    Returns:
        List of contract tag dictionaries
    """
    orchestrator = TagOrchestrator(api_config)
    return await orchestrator.run(network_id, api_key)
