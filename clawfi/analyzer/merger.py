from typing import Optional

from clawfi.analyzer.parameters import safe_float, safe_int, optional_float, flag_set, is_renounced
from clawfi.analyzer.risk_flags import derive_signals, sell_tax_percent, buy_tax_percent
from clawfi.analyzer.scoring import calculate_risk_score
from clawfi.models.raw import DexPair, GoPlusTokenSecurity
from clawfi.models.token import (
    AnalysisResult,
    ContractSecurity,
    MarketData,
    TokenData,
    TransactionCounts,
    WindowedValues,
)


def _windowed(values: dict) -> WindowedValues:
    return WindowedValues(
        m5=safe_float(values.get("m5")),
        h1=safe_float(values.get("h1")),
        h6=safe_float(values.get("h6")),
        h24=safe_float(values.get("h24")),
    )


def build_market(pair: DexPair) -> MarketData:
    return MarketData(
        price=safe_float(pair.price_usd),
        price_change=_windowed(pair.price_change),
        volume=_windowed(pair.volume),
        transactions=TransactionCounts(
            buys=safe_int(pair.txns_h24_buys),
            sells=safe_int(pair.txns_h24_sells),
        ),
        liquidity=safe_float(pair.liquidity_usd),
        # Passed through, absent stays None
        market_cap=optional_float(pair.market_cap),
        fdv=optional_float(pair.fdv),
    )


def build_token(chain: str, address: str, pair: DexPair) -> TokenData:
    market = build_market(pair)
    return TokenData(
        address=address,
        chain=chain,
        name=pair.base_token_name,
        symbol=pair.base_token_symbol,
        price=market.price,
        price_change_24h=market.price_change.h24,
        market_cap=market.market_cap,
        fdv=market.fdv,
        volume_24h=market.volume.h24,
        liquidity=market.liquidity,
    )


def build_contract(security: GoPlusTokenSecurity) -> ContractSecurity:
    return ContractSecurity(
        verified=flag_set(security.is_open_source),
        renounced=is_renounced(security.owner_address),
        honeypot=flag_set(security.is_honeypot),
        mintable=flag_set(security.is_mintable),
        pausable=flag_set(security.transfer_pausable),
        blacklist=flag_set(security.is_blacklisted),
        tax_buy=buy_tax_percent(security),
        tax_sell=sell_tax_percent(security),
    )


def merge(
    chain: str,
    address: str,
    pair: DexPair,
    security: Optional[GoPlusTokenSecurity] = None,
) -> AnalysisResult:
    """
    Builds an AnalysisResult from a DexScreener pair and an optional GoPlus
    record. No I/O; malformed numbers become 0 instead of raising.
    """
    signals = derive_signals(security)
    return AnalysisResult(
        token=build_token(chain, address, pair),
        market=build_market(pair),
        contract=build_contract(security) if security is not None else None,
        signals=signals,
        risk_score=calculate_risk_score(signals),
    )
