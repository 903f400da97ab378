import asyncio
import dataclasses
import logging
from typing import Any, Awaitable, Callable, Dict, List, Optional, TypeVar

from clawfi.analyzer.goplus import GoPlusClient
from clawfi.analyzer.merger import build_token, merge
from clawfi.analyzer.risk_flags import derive_signals, honeypot_reason
from clawfi.config import ClientConfig, Config
from clawfi.models.raw import DexPair
from clawfi.models.response import ApiResponse
from clawfi.models.signal import Signal
from clawfi.models.token import (
    AnalysisResult,
    ContractSecurity,
    HoneypotCheck,
    MarketData,
    TokenData,
)
from clawfi.primary_api import PrimaryAPI
from clawfi.scraper.dex_api import DexAPI

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Raised while decoding a primary payload of the wrong shape
DECODE_ERRORS = (KeyError, TypeError, ValueError, AttributeError, OverflowError)


def _decode_signals(data: Any) -> List[Signal]:
    return [Signal.from_dict(s) for s in data]


def _decode_tokens(data: Any) -> List[TokenData]:
    return [TokenData.from_dict(t) for t in data]


class ClawFi:
    """
    ClawFi API client.

    Talks to the ClawFi API first. The first time that fails (bad status,
    transport error, timeout, bad JSON) the client switches into fallback
    mode for good and rebuilds answers from DexScreener + GoPlus instead.

        clawfi = ClawFi(api_key="...")
        analysis = await clawfi.analyze_token("ethereum", "0x...")
        if analysis.success:
            print(analysis.data.risk_score)
    """

    def __init__(
        self,
        config: Optional[ClientConfig] = None,
        *,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[int] = None,
        dex: Optional[DexAPI] = None,
        goplus: Optional[GoPlusClient] = None,
    ):
        config = config or ClientConfig()
        overrides = {
            k: v for k, v in
            (("api_key", api_key), ("base_url", base_url), ("timeout", timeout))
            if v is not None
        }
        self.config = dataclasses.replace(config, **overrides)
        self.primary = PrimaryAPI(self.config)
        # Fallback sources share the configured timeout
        self.dex = dex or DexAPI(timeout=self.config.timeout_seconds)
        self.goplus = goplus or GoPlusClient(timeout=self.config.timeout_seconds)
        self._use_fallback = False

    @property
    def use_fallback(self) -> bool:
        return self._use_fallback

    # ============================================
    # Fallback controller
    # ============================================

    def _mark_primary_failed(self, reason: Optional[str]):
        if not self._use_fallback:
            logger.warning(f"ClawFi API failed ({reason}), switching to fallback sources")
        self._use_fallback = True

    async def _request(
        self,
        endpoint: str,
        method: str = "GET",
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse[Any]:
        result = await self.primary.request(endpoint, method=method, payload=payload, params=params)
        if not result.success:
            self._mark_primary_failed(result.error)
        return result

    async def _primary(
        self,
        endpoint: str,
        decode: Callable[[Any], T],
        method: str = "GET",
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse[T]:
        """
        Primary request whose payload is decoded into model types. A payload
        of the wrong shape counts as a primary failure.
        """
        result = await self._request(endpoint, method=method, payload=payload, params=params)
        if not result.success:
            return result
        try:
            return ApiResponse.ok(decode(result.data))
        except DECODE_ERRORS as e:
            logger.warning(f"Malformed response from {endpoint}: {e!r}")
            self._mark_primary_failed("malformed response")
            return ApiResponse.fail("Malformed response")

    async def perform_with_fallback(
        self,
        primary_call: Callable[[], Awaitable[ApiResponse[T]]],
        fallback_call: Callable[[], Awaitable[ApiResponse[T]]],
    ) -> ApiResponse[T]:
        """
        Runs primary_call unless the client is already in fallback mode.
        An unsuccessful or raising primary call switches the client into
        fallback mode and falls through to fallback_call.
        """
        if not self._use_fallback:
            try:
                result = await primary_call()
            except Exception as e:
                logger.error(f"ClawFi API call raised: {e!r}")
                self._mark_primary_failed(str(e) or type(e).__name__)
            else:
                if result.success:
                    return result
                self._mark_primary_failed(result.error)
        return await fallback_call()

    async def _analyze_from_public_apis(self, chain: str, address: str) -> ApiResponse[AnalysisResult]:
        pair, security = await asyncio.gather(
            self.dex.get_best_pair(address),
            self.goplus.check_token_security(address, chain),
            return_exceptions=True,
        )
        if isinstance(pair, Exception):
            logger.error(f"DexScreener lookup failed for {address}: {pair}")
            pair = None
        if isinstance(security, Exception):
            logger.error(f"GoPlus lookup failed for {chain}:{address}: {security}")
            security = None

        if pair is None:
            return ApiResponse.fail("Token not found")

        return ApiResponse.ok(merge(chain, address, pair, security))

    async def _signals_from_public_apis(self, chain: str, address: str) -> ApiResponse[List[Signal]]:
        security = await self.goplus.check_token_security(address, chain)
        return ApiResponse.ok(derive_signals(security))

    # ============================================
    # Token Analysis
    # ============================================

    async def analyze_token(self, chain: str, address: str) -> ApiResponse[AnalysisResult]:
        """
        Full token analysis. Falls back to DexScreener + GoPlus when the
        ClawFi API is unavailable.
        """
        return await self.perform_with_fallback(
            lambda: self._primary(f"/analyze/{chain}/{address}", AnalysisResult.from_dict),
            lambda: self._analyze_from_public_apis(chain, address),
        )

    async def get_token(self, chain: str, address: str) -> ApiResponse[TokenData]:
        analysis = await self.analyze_token(chain, address)
        if not analysis.success or analysis.data is None:
            return ApiResponse.fail(analysis.error)
        return ApiResponse.ok(analysis.data.token)

    async def get_market_data(self, chain: str, address: str) -> ApiResponse[MarketData]:
        analysis = await self.analyze_token(chain, address)
        if not analysis.success or analysis.data is None:
            return ApiResponse.fail(analysis.error)
        return ApiResponse.ok(analysis.data.market)

    # ============================================
    # Signals
    # ============================================

    async def get_signals(self, chain: str, address: str) -> ApiResponse[List[Signal]]:
        """
        Signals for one token. The fallback only needs GoPlus, and succeeds
        with an empty list when there is no security data.
        """
        return await self.perform_with_fallback(
            lambda: self._primary(f"/signals/{chain}/{address}", _decode_signals),
            lambda: self._signals_from_public_apis(chain, address),
        )

    async def get_recent_signals(self, limit: int = Config.RECENT_SIGNALS_LIMIT) -> ApiResponse[List[Signal]]:
        return await self._primary("/signals/recent", _decode_signals, params={"limit": limit})

    async def subscribe_signals(
        self,
        webhook_url: str,
        chains: Optional[List[str]] = None,
        severity: Optional[List[str]] = None,
    ) -> ApiResponse[Dict[str, Any]]:
        """
        Registers a webhook for new signals. Returns {"subscriptionId": ...}.
        """
        payload: Dict[str, Any] = {"webhookUrl": webhook_url}
        if chains is not None or severity is not None:
            payload["filters"] = {"chains": chains, "severity": severity}
        return await self._request("/signals/subscribe", method="POST", payload=payload)

    # ============================================
    # Security
    # ============================================

    async def get_contract_analysis(self, chain: str, address: str) -> ApiResponse[Optional[ContractSecurity]]:
        analysis = await self.analyze_token(chain, address)
        if not analysis.success or analysis.data is None:
            return ApiResponse.fail(analysis.error)
        return ApiResponse.ok(analysis.data.contract)

    async def check_honeypot(self, chain: str, address: str) -> ApiResponse[HoneypotCheck]:
        """
        Honeypot check straight against GoPlus. Missing data reads as
        "not a honeypot".
        """
        security = await self.goplus.check_token_security(address, chain)
        reason = honeypot_reason(security)
        return ApiResponse.ok(HoneypotCheck(is_honeypot=reason is not None, reason=reason))

    # ============================================
    # Watchlist
    # ============================================

    async def add_to_watchlist(self, chain: str, address: str) -> ApiResponse[Dict[str, Any]]:
        return await self._request("/watchlist", method="POST", payload={"chain": chain, "address": address})

    async def get_watchlist(self) -> ApiResponse[List[TokenData]]:
        return await self._primary("/watchlist", _decode_tokens)

    async def remove_from_watchlist(self, watchlist_id: str) -> ApiResponse[None]:
        return await self._request(f"/watchlist/{watchlist_id}", method="DELETE")

    # ============================================
    # Discovery (DexScreener)
    # ============================================

    async def get_trending(self, chain: Optional[str] = None) -> ApiResponse[List[TokenData]]:
        data = await self.dex.get_top_boosts()
        if data is None:
            return ApiResponse.fail("Failed to fetch trending")
        if not isinstance(data, list):
            return ApiResponse.fail("Invalid response")

        tokens = [
            TokenData(address=t["tokenAddress"], chain=t.get("chainId") or "")
            for t in data
            if isinstance(t, dict) and t.get("tokenAddress")
            and (not chain or t.get("chainId") == chain)
        ]
        return ApiResponse.ok(tokens[:Config.TRENDING_LIMIT])

    async def search(self, query: str) -> ApiResponse[List[TokenData]]:
        pairs = await self.dex.search_pairs(query)
        if pairs is None:
            return ApiResponse.fail("Search failed")

        tokens = []
        for raw in pairs[:Config.SEARCH_LIMIT]:
            if not isinstance(raw, dict):
                continue
            pair = DexPair.from_dict(raw)
            tokens.append(build_token(pair.chain_id or "", pair.base_token_address or "", pair))
        return ApiResponse.ok(tokens)
