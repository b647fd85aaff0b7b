from dataclasses import dataclass
from typing import Any, Dict

# Output record: "Contract Address", "Public Name Tag", "Project Name",
# "UI/Website Link", "Public Note"
ContractTag = Dict[str, str]


@dataclass
class Token:
    id: str
    name: str
    symbol: str

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Token":
        token = cls(
            id=data["id"],
            name=data.get("name") or "",
            symbol=data.get("symbol") or "",
        )
        for field in ("id", "name", "symbol"):
            value = getattr(token, field)
            if not isinstance(value, str):
                raise TypeError(f"token {field} must be a string, got {type(value).__name__}")
        return token


@dataclass
class Pair:
    id: str
    created_at_timestamp: int
    token0: Token
    token1: Token

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Pair":
        """Build a Pair from a subgraph record (BigInt fields arrive as strings)."""
        return cls(
            id=data["id"],
            created_at_timestamp=int(data["createdAtTimestamp"]),
            token0=Token.from_dict(data["token0"]),
            token1=Token.from_dict(data["token1"]),
        )
