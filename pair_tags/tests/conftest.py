"""
Shared fixtures for the pair tag tests.
"""

import json
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from pair_tags.src.models import Pair


def _pair_record(pair_id, timestamp, token0=("Wrapped Ether", "WETH"), token1=("USD Coin", "USDC")):
    return {
        "id": pair_id,
        "createdAtTimestamp": str(timestamp),
        "token0": {"id": f"{pair_id}-token0", "name": token0[0], "symbol": token0[1]},
        "token1": {"id": f"{pair_id}-token1", "name": token1[0], "symbol": token1[1]},
    }


def _mock_response(status, body):
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=body)
    response.text = AsyncMock(return_value=json.dumps(body) if body is not None else "")

    context = MagicMock()
    context.__aenter__ = AsyncMock(return_value=response)
    context.__aexit__ = AsyncMock(return_value=False)
    return context


@pytest.fixture
def pair_record():
    """Factory for raw subgraph pair records."""
    return _pair_record


@pytest.fixture
def make_pair():
    """Factory for decoded Pair objects."""
    def _make(pair_id="0xpair", timestamp=1600000000, **tokens):
        return Pair.from_dict(_pair_record(pair_id, timestamp, **tokens))
    return _make


@pytest.fixture
def page_body():
    """Factory for a subgraph response body holding `count` pairs."""
    def _make(count, first_timestamp=1):
        pairs = [
            _pair_record(f"0x{first_timestamp + i:040x}", first_timestamp + i)
            for i in range(count)
        ]
        return {"data": {"pairs": pairs}}
    return _make


@pytest.fixture
def mock_subgraph():
    """
    Patch aiohttp.ClientSession in the API client.

    Yields a function that takes (status, body) tuples, one per expected
    request, or exceptions to raise from session.post, and returns the
    mocked session.
    """
    with patch("pair_tags.src.api_client.aiohttp.ClientSession") as session_cls:
        session = MagicMock()
        session.close = AsyncMock()
        session_cls.return_value = session

        def _respond(*responses):
            side_effects = []
            for item in responses:
                if isinstance(item, BaseException):
                    side_effects.append(item)
                else:
                    status, body = item
                    side_effects.append(_mock_response(status, body))
            session.post.side_effect = side_effects
            return session

        yield _respond
