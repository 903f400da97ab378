import asyncio
import aiohttp
import logging
from typing import Any, Dict, Optional
from clawfi.config import ClientConfig
from clawfi.models.response import ApiResponse

logger = logging.getLogger(__name__)

class PrimaryAPI:
    """
    Transport for the ClawFi API. Knows nothing about fallback; every
    failure comes back as an unsuccessful ApiResponse.
    """

    def __init__(self, config: ClientConfig):
        self.config = config

    def get_headers(self) -> Dict[str, str]:
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        if self.config.api_key:
            headers["Authorization"] = f"Bearer {self.config.api_key}"
        return headers

    async def request(
        self,
        endpoint: str,
        method: str = "GET",
        payload: Optional[Dict[str, Any]] = None,
        params: Optional[Dict[str, Any]] = None,
    ) -> ApiResponse[Any]:
        url = f"{self.config.base_url.rstrip('/')}{endpoint}"
        timeout = aiohttp.ClientTimeout(total=self.config.timeout_seconds)

        try:
            async with aiohttp.ClientSession(timeout=timeout) as session:
                async with session.request(
                    method, url, headers=self.get_headers(), json=payload, params=params
                ) as response:
                    try:
                        data = await response.json(content_type=None)
                    except ValueError:
                        logger.warning(f"{method} {url}: invalid JSON (status {response.status})")
                        if response.status >= 400:
                            return ApiResponse.fail(f"HTTP {response.status}")
                        return ApiResponse.fail("Invalid JSON response")

                    if not 200 <= response.status < 300:
                        logger.warning(f"{method} {url}: Status {response.status}")
                        error = data.get("error") if isinstance(data, dict) else None
                        return ApiResponse.fail(error or f"HTTP {response.status}")

                    return ApiResponse.ok(data)

        except asyncio.TimeoutError:
            logger.error(f"{method} {url}: timed out after {self.config.timeout}ms")
            return ApiResponse.fail("Request timed out")
        except aiohttp.ClientError as e:
            logger.error(f"{method} {url}: {e}")
            return ApiResponse.fail(str(e) or "Request failed")
