"""
Supported Networks Module
Maps network identifiers to Uniswap v2 subgraph endpoints on The Graph gateway.
"""

import logging
from typing import Dict, List
from urllib.parse import quote

from .errors import UnsupportedNetworkError

logger = logging.getLogger(__name__)

API_KEY_PLACEHOLDER = "[api-key]"

# Network id (EIP-155 chain id) -> endpoint template
SUPPORTED_NETWORKS: Dict[str, str] = {
    "1": (
        "https://gateway.thegraph.com/api/[api-key]"
        "/subgraphs/id/A3Np3RQbaBA6oKJgiwDJeo5T3zrYfGHPWFYayMwtNDum"
    ),
}


def supported_network_ids() -> List[str]:
    """Return the accepted network ids in table order."""
    return list(SUPPORTED_NETWORKS.keys())


def resolve_endpoint(network_id: str, api_key: str) -> str:
    """
    Build the subgraph endpoint for a network.

    Args:
        network_id: Chain id as a decimal string (e.g. "1")
        api_key: The Graph gateway API key

    Returns:
        Fully qualified endpoint URL with the URL-encoded key substituted

    Raises:
        UnsupportedNetworkError: If the id is not numeric or not configured
    """
    network_id = str(network_id)

    if not network_id.isdigit() or network_id not in SUPPORTED_NETWORKS:
        accepted = ", ".join(supported_network_ids())
        raise UnsupportedNetworkError(
            f"Unsupported Chain ID: {network_id}. "
            f"Only the following values are accepted: {accepted}"
        )

    template = SUPPORTED_NETWORKS[network_id]
    endpoint = template.replace(API_KEY_PLACEHOLDER, quote(api_key, safe=""))

    logger.debug(f"Resolved endpoint for network {network_id}")
    return endpoint
