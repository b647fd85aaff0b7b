"""
Uniswap v2 Pair Tags
====================

This module contains the ETL (Extract, Transform) pipeline that builds contract
tags for Uniswap v2 liquidity pools. It pages through the Uniswap v2 subgraph
on The Graph gateway, drops pairs with markup in their token metadata and maps
the rest into flat tag records.

Main components:
- networks: Supported networks and endpoint resolution
- api_client: Async GraphQL client for the subgraph
- fetcher: Cursor-based pagination over pairs
- validator: Markup checks on token names and symbols
- processor: Pair to contract tag transformation
- orchestrator: Pipeline orchestration and the return_tags entry point
"""

from .errors import (
    PairTagError,
    UnsupportedNetworkError,
    TransportError,
    UpstreamError,
    MalformedResponseError,
    UnknownError,
)
from .orchestrator import return_tags

__version__ = "0.1.0"
__author__ = "Pair Tags Development Team"
