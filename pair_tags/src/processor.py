"""
Tag Processor Module
Responsible for transforming validated pairs into contract tag records.
"""

import logging
from typing import Dict, List

from .models import ContractTag, Pair, Token
from .validator import validate_batch

logger = logging.getLogger(__name__)

PROJECT_NAME = "Uniswap v2"
WEBSITE_LINK = "https://uniswap.org"
MAX_SYMBOL_LENGTH = 45
ELLIPSIS = "..."

# Cosmetic rewrites applied to token display names
NAME_REPLACEMENTS = {
    "USD//C": "USDC",
}


def truncate_text(text: str, max_length: int) -> str:
    """
    Cut a string down to max_length characters, ellipsis included.

    Args:
        text: String to truncate
        max_length: Maximum length of the result

    Returns:
        The original string if short enough, else a prefix ending in "..."
    """
    if len(text) <= max_length:
        return text
    return text[:max_length - len(ELLIPSIS)] + ELLIPSIS


def clean_token_name(name: str) -> str:
    """Apply display rewrites and trim whitespace."""
    for old, new in NAME_REPLACEMENTS.items():
        name = name.replace(old, new)
    return name.strip()


class TagProcessor:
    """
    Map pairs of one network into contract tags.
    """

    def __init__(self, network_id: str):
        """
        Initialize the TagProcessor.

        Args:
            network_id: Chain id used in the CAIP-10 contract address
        """
        self.network_id = network_id
        self.accepted_count = 0
        self.rejected_count = 0

    def contract_address(self, pair: Pair) -> str:
        return f"eip155:{self.network_id}:{pair.id}"

    @staticmethod
    def _describe_token(token: Token) -> str:
        return f"{clean_token_name(token.name)} ({token.symbol.strip()})"

    def transform_pair(self, pair: Pair) -> ContractTag:
        """
        Transform one validated pair into a contract tag.

        Args:
            pair: Pair that passed validation

        Returns:
            Contract tag dictionary
        """
        symbols = f"{pair.token0.symbol.strip()}/{pair.token1.symbol.strip()}"
        symbols = truncate_text(symbols, MAX_SYMBOL_LENGTH)

        return {
            "Contract Address": self.contract_address(pair),
            "Public Name Tag": f"{symbols} Pair",
            "Project Name": PROJECT_NAME,
            "UI/Website Link": WEBSITE_LINK,
            "Public Note": (
                f"The liquidity pool contract on {PROJECT_NAME} for the "
                f"{self._describe_token(pair.token0)} / "
                f"{self._describe_token(pair.token1)} pair."
            ),
        }

    def transform_pairs(self, pairs: List[Pair]) -> List[ContractTag]:
        """
        Validate a page of pairs and transform the valid ones.

        Args:
            pairs: Pairs from one page

        Returns:
            Contract tags for the pairs without markup, in input order
        """
        valid_pairs, invalid_pairs = validate_batch(pairs)

        self.accepted_count += len(valid_pairs)
        self.rejected_count += len(invalid_pairs)

        return [self.transform_pair(pair) for pair in valid_pairs]

    def get_statistics(self) -> Dict[str, int]:
        return {
            "accepted": self.accepted_count,
            "rejected": self.rejected_count,
        }
