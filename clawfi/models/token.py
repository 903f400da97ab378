from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

from clawfi.analyzer.parameters import safe_float, safe_int, optional_float
from clawfi.models.response import now_ms
from clawfi.models.signal import Signal


@dataclass
class WindowedValues:
    """Values over the 5m / 1h / 6h / 24h windows."""
    m5: float = 0.0
    h1: float = 0.0
    h6: float = 0.0
    h24: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return {"m5": self.m5, "h1": self.h1, "h6": self.h6, "h24": self.h24}

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> "WindowedValues":
        data = data or {}
        return cls(
            m5=safe_float(data.get("m5")),
            h1=safe_float(data.get("h1")),
            h6=safe_float(data.get("h6")),
            h24=safe_float(data.get("h24")),
        )


@dataclass
class TransactionCounts:
    buys: int = 0
    sells: int = 0

    def to_dict(self) -> Dict[str, int]:
        return {"buys": self.buys, "sells": self.sells}


@dataclass
class TokenData:
    """
    Token identity plus headline market figures.
    """
    address: str
    chain: str
    name: Optional[str] = None
    symbol: Optional[str] = None
    price: float = 0.0
    price_change_24h: float = 0.0
    market_cap: Optional[float] = None
    fdv: Optional[float] = None
    volume_24h: float = 0.0
    liquidity: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "chain": self.chain,
            "name": self.name,
            "symbol": self.symbol,
            "price": self.price,
            "priceChange24h": self.price_change_24h,
            "marketCap": self.market_cap,
            "fdv": self.fdv,
            "volume24h": self.volume_24h,
            "liquidity": self.liquidity,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "TokenData":
        return cls(
            address=str(data["address"]),
            chain=str(data["chain"]),
            name=data.get("name"),
            symbol=data.get("symbol"),
            price=safe_float(data.get("price")),
            price_change_24h=safe_float(data.get("priceChange24h")),
            market_cap=optional_float(data.get("marketCap")),
            fdv=optional_float(data.get("fdv")),
            volume_24h=safe_float(data.get("volume24h")),
            liquidity=safe_float(data.get("liquidity")),
        )


@dataclass
class MarketData:
    price: float = 0.0
    price_change: WindowedValues = field(default_factory=WindowedValues)
    volume: WindowedValues = field(default_factory=WindowedValues)
    transactions: TransactionCounts = field(default_factory=TransactionCounts)
    liquidity: float = 0.0
    market_cap: Optional[float] = None
    fdv: Optional[float] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "price": self.price,
            "priceChange": self.price_change.to_dict(),
            "volume": self.volume.to_dict(),
            "transactions": self.transactions.to_dict(),
            "liquidity": self.liquidity,
            "marketCap": self.market_cap,
            "fdv": self.fdv,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "MarketData":
        txns = data.get("transactions") or {}
        return cls(
            price=safe_float(data.get("price")),
            price_change=WindowedValues.from_dict(data.get("priceChange")),
            volume=WindowedValues.from_dict(data.get("volume")),
            transactions=TransactionCounts(
                buys=safe_int(txns.get("buys")),
                sells=safe_int(txns.get("sells")),
            ),
            liquidity=safe_float(data.get("liquidity")),
            market_cap=optional_float(data.get("marketCap")),
            fdv=optional_float(data.get("fdv")),
        )


@dataclass
class ContractSecurity:
    """
    Contract security summary. Taxes are percentages (0-100).
    """
    verified: bool = False
    renounced: bool = False
    honeypot: bool = False
    mintable: bool = False
    pausable: bool = False
    blacklist: bool = False
    tax_buy: float = 0.0
    tax_sell: float = 0.0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "verified": self.verified,
            "renounced": self.renounced,
            "honeypot": self.honeypot,
            "mintable": self.mintable,
            "pausable": self.pausable,
            "blacklist": self.blacklist,
            "taxBuy": self.tax_buy,
            "taxSell": self.tax_sell,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ContractSecurity":
        return cls(
            verified=bool(data.get("verified", False)),
            renounced=bool(data.get("renounced", False)),
            honeypot=bool(data.get("honeypot", False)),
            mintable=bool(data.get("mintable", False)),
            pausable=bool(data.get("pausable", False)),
            blacklist=bool(data.get("blacklist", False)),
            tax_buy=safe_float(data.get("taxBuy")),
            tax_sell=safe_float(data.get("taxSell")),
        )


@dataclass
class AnalysisResult:
    """
    Full token analysis: identity, market snapshot, contract summary,
    risk signals and the score derived from them.
    contract is None when no security data was available.
    """
    token: TokenData
    market: MarketData
    signals: List[Signal]
    risk_score: int
    contract: Optional[ContractSecurity] = None
    timestamp: int = field(default_factory=now_ms)

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "token": self.token.to_dict(),
            "market": self.market.to_dict(),
            "signals": [s.to_dict() for s in self.signals],
            "riskScore": self.risk_score,
            "timestamp": self.timestamp,
        }
        if self.contract is not None:
            out["contract"] = self.contract.to_dict()
        return out

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "AnalysisResult":
        contract = data.get("contract")
        return cls(
            token=TokenData.from_dict(data["token"]),
            market=MarketData.from_dict(data["market"]),
            signals=[Signal.from_dict(s) for s in data["signals"]],
            risk_score=safe_int(data["riskScore"]),
            contract=ContractSecurity.from_dict(contract) if contract else None,
            timestamp=safe_int(data.get("timestamp")) or now_ms(),
        )


@dataclass
class HoneypotCheck:
    is_honeypot: bool
    reason: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        out: Dict[str, Any] = {"isHoneypot": self.is_honeypot}
        if self.reason is not None:
            out["reason"] = self.reason
        return out
