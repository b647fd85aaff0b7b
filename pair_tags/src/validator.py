"""
Pair Validator Module
Responsible for rejecting pairs whose token metadata contains markup.
"""

import re
import logging
from typing import List, Tuple

from .models import Pair

logger = logging.getLogger(__name__)


class PairValidator:
    """
    Validate token names and symbols of subgraph pairs.
    """

    # Anything shaped like an HTML tag
    MARKUP_PATTERN = re.compile(r"<[^>]*>")

    @staticmethod
    def contains_markup(text: str) -> bool:
        """
        Check a string for HTML-tag-like content.

        Args:
            text: String to inspect

        Returns:
            True if a <...> substring is present
        """
        if not text:
            return False
        return PairValidator.MARKUP_PATTERN.search(text) is not None

    @staticmethod
    def is_valid_pair(pair: Pair) -> bool:
        """
        Validate a pair record.

        Every offending name or symbol is logged, so a single pair can produce
        several warnings.

        Args:
            pair: Pair to validate

        Returns:
            True if no token name or symbol contains markup
        """
        is_valid = True

        for label, token in (("token0", pair.token0), ("token1", pair.token1)):
            for field in ("name", "symbol"):
                value = getattr(token, field)
                if PairValidator.contains_markup(value):
                    logger.warning(f"Rejected pair {pair.id}: {label} {field} "
                                   f"contains markup: {value!r}")
                    is_valid = False

        return is_valid


def validate_batch(pairs: List[Pair]) -> Tuple[List[Pair], List[Pair]]:
    """
    Validate a batch of pairs.

    Args:
        pairs: Pairs to validate

    Returns:
        Tuple of (valid_pairs, invalid_pairs)
    """
    valid_pairs = []
    invalid_pairs = []

    for pair in pairs:
        if PairValidator.is_valid_pair(pair):
            valid_pairs.append(pair)
        else:
            invalid_pairs.append(pair)

    if invalid_pairs:
        logger.info(f"Validated pairs: {len(valid_pairs)} valid, {len(invalid_pairs)} invalid")

    return valid_pairs, invalid_pairs
