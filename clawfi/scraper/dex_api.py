import asyncio
import aiohttp
import logging
from typing import List, Optional, Dict, Any
from clawfi.config import Config
from clawfi.models.raw import DexPair

logger = logging.getLogger(__name__)

class DexAPI:
    """
    DexScreener public API. Used as the market-data source when the
    primary API is unavailable, and for search / trending.
    """

    def __init__(self, base_url: str = None, timeout: float = None):
        self.base_url = (base_url or Config.DEXSCREENER_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else Config.TIMEOUT_MS / 1000

    async def get_pairs_by_token_address(self, token_address: str) -> List[Dict[str, Any]]:
        """
        Fetches pairs for a specific token address.
        """
        url = f"{self.base_url}/latest/dex/tokens/{token_address}"
        data = await self._make_request(url)
        pairs = data.get("pairs") if isinstance(data, dict) else None
        return pairs if isinstance(pairs, list) else []

    async def get_best_pair(self, token_address: str) -> Optional[DexPair]:
        """
        First pair DexScreener lists for the token, or None if it has none.
        """
        pairs = await self.get_pairs_by_token_address(token_address)
        if not pairs or not isinstance(pairs[0], dict):
            return None
        return DexPair.from_dict(pairs[0])

    async def search_pairs(self, query: str) -> Optional[List[Dict[str, Any]]]:
        """
        Free-text pair search. None means the request itself failed.
        """
        url = f"{self.base_url}/latest/dex/search"
        data = await self._make_request(url, params={"q": query})
        if data is None:
            return None
        pairs = data.get("pairs") if isinstance(data, dict) else None
        return pairs if isinstance(pairs, list) else []

    async def get_top_boosts(self) -> Optional[Any]:
        """
        Most boosted tokens. Returned as-is, callers validate the shape.
        """
        url = f"{self.base_url}/token-boosts/top/v1"
        return await self._make_request(url)

    async def _make_request(self, url: str, params: Dict[str, str] = None) -> Optional[Any]:
        """
        Single GET. Returns decoded JSON, or None on any failure.
        """
        headers = {"Accept": "application/json"}
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, headers=headers, params=params) as response:
                    if response.status == 200:
                        return await response.json(content_type=None)
                    logger.warning(f"Failed to fetch {url}: Status {response.status}")
        except asyncio.TimeoutError:
            logger.error(f"Timed out fetching {url}")
        except (aiohttp.ClientError, ValueError) as e:
            logger.error(f"Error fetching {url}: {e}")

        return None
