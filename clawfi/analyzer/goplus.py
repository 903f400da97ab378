import asyncio
import aiohttp
import logging
from typing import Optional
from clawfi.config import Config
from clawfi.models.raw import GoPlusTokenSecurity

logger = logging.getLogger("GoPlus")

class GoPlusClient:
    # Chain names to GoPlus numeric chain IDs
    CHAIN_MAP = {
        "ethereum": "1",
        "bsc": "56",
        "polygon": "137",
        "arbitrum": "42161",
        "optimism": "10",
        "avalanche": "43114",
        "fantom": "250",
        "base": "8453",
    }

    def __init__(self, base_url: str = None, timeout: float = None):
        self.base_url = (base_url or Config.GOPLUS_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else Config.TIMEOUT_MS / 1000

    @classmethod
    def chain_id_for(cls, chain: str) -> Optional[str]:
        return cls.CHAIN_MAP.get((chain or "").lower())

    async def check_token_security(self, address: str, chain: str) -> Optional[GoPlusTokenSecurity]:
        """
        Checks token security via GoPlus API.
        Unknown chains return None without making a request.
        """
        goplus_chain_id = self.chain_id_for(chain)
        if not goplus_chain_id:
            logger.debug(f"No GoPlus chain id for {chain}, skipping security check")
            return None

        url = f"{self.base_url}/token_security/{goplus_chain_id}"
        params = {"contract_addresses": address}
        timeout = aiohttp.ClientTimeout(total=self.timeout)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.get(url, params=params) as response:
                    if response.status != 200:
                        logger.warning(f"GoPlus API Error: {response.status} for {chain}:{address}")
                    data = await response.json(content_type=None)
        except asyncio.TimeoutError:
            logger.error(f"GoPlus request timed out for {chain}:{address}")
            return None
        except (aiohttp.ClientError, ValueError) as e:
            logger.error(f"GoPlus request failed: {e}")
            return None

        # Structure: {"code": 1, "message": "OK", "result": {"addr": {...}}}
        result = data.get("result") if isinstance(data, dict) else None
        if not isinstance(result, dict):
            return None

        # Keys are addresses, normalize to lowercase
        normalized_result = {k.lower(): v for k, v in result.items()}
        record = normalized_result.get(address.lower())
        if not isinstance(record, dict) or not record:
            return None
        return GoPlusTokenSecurity.from_dict(record)
