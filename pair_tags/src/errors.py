"""
Error types raised by the pair tag pipeline.
"""


class PairTagError(Exception):
    """Base class for every failure of the tag pipeline."""


class UnsupportedNetworkError(PairTagError):
    """The network id is not numeric or has no configured endpoint."""


class TransportError(PairTagError):
    """The HTTP exchange with the subgraph failed."""


class UpstreamError(PairTagError):
    """The subgraph answered with a GraphQL error list."""


class MalformedResponseError(PairTagError):
    """The response body lacks the expected data shape."""


class UnknownError(PairTagError):
    """A failure outside the recognized error kinds."""
