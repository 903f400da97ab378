"""
Raw provider payloads.

Both public APIs return loosely typed JSON. These structs pin down the
fields we read and keep every value as delivered (strings, numbers or
missing). All defaulting happens in the merger / signal deriver.
"""
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional


def _sub(data: Dict[str, Any], key: str) -> Dict[str, Any]:
    value = data.get(key)
    return value if isinstance(value, dict) else {}


@dataclass
class DexPair:
    """
    One pair from DexScreener /latest/dex/tokens/{address}.
    """
    chain_id: Optional[str] = None
    base_token_address: Optional[str] = None
    base_token_name: Optional[str] = None
    base_token_symbol: Optional[str] = None
    price_usd: Any = None  # string-encoded decimal
    price_change: Dict[str, Any] = field(default_factory=dict)
    volume: Dict[str, Any] = field(default_factory=dict)
    liquidity_usd: Any = None
    txns_h24_buys: Any = None
    txns_h24_sells: Any = None
    market_cap: Any = None
    fdv: Any = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DexPair":
        base = _sub(data, "baseToken")
        txns_h24 = _sub(_sub(data, "txns"), "h24")
        return cls(
            chain_id=data.get("chainId"),
            base_token_address=base.get("address"),
            base_token_name=base.get("name"),
            base_token_symbol=base.get("symbol"),
            price_usd=data.get("priceUsd"),
            price_change=_sub(data, "priceChange"),
            volume=_sub(data, "volume"),
            liquidity_usd=_sub(data, "liquidity").get("usd"),
            txns_h24_buys=txns_h24.get("buys"),
            txns_h24_sells=txns_h24.get("sells"),
            market_cap=data.get("marketCap"),
            fdv=data.get("fdv"),
        )


@dataclass
class HolderEntry:
    percent: Any = None  # fraction of supply, string-encoded


@dataclass
class GoPlusTokenSecurity:
    """
    GoPlus token_security record for a single contract.
    Flags are "1" / "0" strings, taxes are fractions (0.1 == 10%).
    """
    is_honeypot: Any = None
    is_mintable: Any = None
    hidden_owner: Any = None
    is_open_source: Any = None
    is_blacklisted: Any = None
    transfer_pausable: Any = None
    cannot_sell_all: Any = None
    buy_tax: Any = None
    sell_tax: Any = None
    owner_address: Any = None
    holders: List[HolderEntry] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GoPlusTokenSecurity":
        holders = data.get("holders")
        if not isinstance(holders, list):
            holders = []
        return cls(
            is_honeypot=data.get("is_honeypot"),
            is_mintable=data.get("is_mintable"),
            hidden_owner=data.get("hidden_owner"),
            is_open_source=data.get("is_open_source"),
            is_blacklisted=data.get("is_blacklisted"),
            transfer_pausable=data.get("transfer_pausable"),
            cannot_sell_all=data.get("cannot_sell_all"),
            buy_tax=data.get("buy_tax"),
            sell_tax=data.get("sell_tax"),
            owner_address=data.get("owner_address") or None,
            holders=[
                HolderEntry(percent=h.get("percent"))
                for h in holders
                if isinstance(h, dict)
            ],
        )
