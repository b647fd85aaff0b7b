"""
Tests for the subgraph API client.
"""

import json
from unittest.mock import AsyncMock, MagicMock

import aiohttp
import pytest

from pair_tags.src.api_client import PAIRS_QUERY, APIConfig, PairsAPIClient
from pair_tags.src.errors import MalformedResponseError, TransportError, UpstreamError

ENDPOINT = "https://gateway.test/api/key/subgraphs/id/test"


class TestPairsAPIClient:
    """Test suite for PairsAPIClient class."""

    @pytest.mark.asyncio
    async def test_query_pairs(self, mock_subgraph, page_body):
        """Test a successful page is decoded into pairs."""
        session = mock_subgraph((200, page_body(2, first_timestamp=1600000000)))

        async with PairsAPIClient(ENDPOINT) as client:
            pairs = await client.query_pairs(0)

        assert len(pairs) == 2
        assert pairs[0].created_at_timestamp == 1600000000
        assert pairs[1].created_at_timestamp == 1600000001
        assert pairs[0].token0.symbol == "WETH"
        session.close.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_request_shape(self, mock_subgraph, page_body):
        """Test the POST body and headers sent to the subgraph."""
        session = mock_subgraph((200, page_body(0)))

        async with PairsAPIClient(ENDPOINT) as client:
            await client.query_pairs(1234)

        args, kwargs = session.post.call_args
        assert args == (ENDPOINT,)
        assert kwargs["json"] == {"query": PAIRS_QUERY, "variables": {"lastTimestamp": 1234}}
        assert kwargs["headers"]["Content-Type"] == "application/json"
        assert kwargs["headers"]["Accept"] == "application/json"

    def test_query_document(self):
        """Test the fixed query asks for ascending pages of 1000."""
        assert "first: 1000" in PAIRS_QUERY
        assert "orderBy: createdAtTimestamp" in PAIRS_QUERY
        assert "orderDirection: asc" in PAIRS_QUERY
        assert "createdAtTimestamp_gt: $lastTimestamp" in PAIRS_QUERY

    @pytest.mark.asyncio
    async def test_http_error(self, mock_subgraph):
        """Test a non-2xx status raises TransportError."""
        mock_subgraph((500, {"message": "internal"}))

        async with PairsAPIClient(ENDPOINT) as client:
            with pytest.raises(TransportError, match="status: 500"):
                await client.query_pairs(0)

            assert client.get_statistics()["total_errors"] == 1

    @pytest.mark.asyncio
    async def test_connection_error(self, mock_subgraph):
        """Test aiohttp client errors are reported as TransportError."""
        mock_subgraph(aiohttp.ClientConnectionError("connection refused"))

        async with PairsAPIClient(ENDPOINT) as client:
            with pytest.raises(TransportError, match="connection refused"):
                await client.query_pairs(0)

    @pytest.mark.asyncio
    async def test_graphql_errors(self, mock_subgraph, caplog):
        """Test an in-band error list raises UpstreamError and logs each message."""
        body = {"errors": [{"message": "bad indexer"}, {"message": "query timeout"}]}
        mock_subgraph((200, body))

        async with PairsAPIClient(ENDPOINT) as client:
            with pytest.raises(UpstreamError) as exc_info:
                await client.query_pairs(0)

        assert "bad indexer" in str(exc_info.value)
        assert "query timeout" in str(exc_info.value)
        assert "GraphQL error: bad indexer" in caplog.text
        assert "GraphQL error: query timeout" in caplog.text

    @pytest.mark.asyncio
    @pytest.mark.parametrize("body", [
        {},
        {"data": None},
        {"data": {}},
        {"data": {"tokens": []}},
        [],
    ])
    async def test_missing_data(self, mock_subgraph, body):
        """Test a body without data.pairs raises MalformedResponseError."""
        mock_subgraph((200, body))

        async with PairsAPIClient(ENDPOINT) as client:
            with pytest.raises(MalformedResponseError):
                await client.query_pairs(0)

    @pytest.mark.asyncio
    async def test_malformed_record(self, mock_subgraph):
        """Test a record missing required fields raises MalformedResponseError."""
        mock_subgraph((200, {"data": {"pairs": [{"id": "0x1"}]}}))

        async with PairsAPIClient(ENDPOINT) as client:
            with pytest.raises(MalformedResponseError):
                await client.query_pairs(0)

    @pytest.mark.asyncio
    async def test_non_string_token_field(self, mock_subgraph, pair_record):
        record = pair_record("0x1", 1)
        record["token1"]["symbol"] = ["USDC"]
        mock_subgraph((200, {"data": {"pairs": [record]}}))

        async with PairsAPIClient(ENDPOINT) as client:
            with pytest.raises(MalformedResponseError, match="token symbol must be a string"):
                await client.query_pairs(0)

    @pytest.mark.asyncio
    async def test_invalid_json(self, mock_subgraph):
        """Test an undecodable body raises TransportError chained to the decode error."""
        session = mock_subgraph()
        response = MagicMock()
        response.status = 200
        response.json = AsyncMock(side_effect=json.JSONDecodeError("Expecting value", "<html>", 0))
        context = MagicMock()
        context.__aenter__ = AsyncMock(return_value=response)
        context.__aexit__ = AsyncMock(return_value=False)
        session.post.side_effect = None
        session.post.return_value = context

        async with PairsAPIClient(ENDPOINT) as client:
            with pytest.raises(TransportError, match="Invalid JSON") as exc_info:
                await client.query_pairs(0)

        assert isinstance(exc_info.value.__cause__, json.JSONDecodeError)

    @pytest.mark.asyncio
    async def test_statistics(self, mock_subgraph, page_body):
        """Test client statistics tracking"""
        mock_subgraph((200, page_body(1)), (500, None))

        async with PairsAPIClient(ENDPOINT) as client:
            await client.query_pairs(0)
            with pytest.raises(TransportError):
                await client.query_pairs(1)

            stats = client.get_statistics()

        assert stats["total_requests"] == 2
        assert stats["total_errors"] == 1
        assert stats["success_rate"] == 50.0

    def test_default_config(self):
        config = APIConfig()

        assert config.timeout == 300
        assert config.headers == {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
