"""Shared fixtures and fakes."""

import asyncio

import pytest

from clawfi.models.raw import DexPair, GoPlusTokenSecurity
from clawfi.models.response import ApiResponse

TOKEN = "0x6982508145454Ce325dDbE47a25d4ec3d2311933"


@pytest.fixture
def pair_data() -> dict:
    """A DexScreener pair as returned by /latest/dex/tokens/{address}."""
    return {
        "chainId": "ethereum",
        "pairAddress": "0xa43fe16908251ee70ef74718545e4fe6c5ccec9f",
        "baseToken": {"address": TOKEN, "name": "Pepe", "symbol": "PEPE"},
        "priceUsd": "0.00001234",
        "priceChange": {"m5": 0.5, "h1": -1.2, "h6": 3.4, "h24": 12.5},
        "volume": {"m5": 1000, "h1": 25000, "h6": 150000, "h24": 900000},
        "txns": {"h24": {"buys": 1200, "sells": 800}},
        "liquidity": {"usd": 350000},
        "marketCap": 5200000,
        "fdv": 5400000,
        "url": "https://dexscreener.com/ethereum/0xa43fe16908251ee70ef74718545e4fe6c5ccec9f",
    }


@pytest.fixture
def security_data() -> dict:
    """A clean GoPlus token_security record."""
    return {
        "is_honeypot": "0",
        "is_mintable": "0",
        "hidden_owner": "0",
        "is_open_source": "1",
        "is_blacklisted": "0",
        "transfer_pausable": "0",
        "cannot_sell_all": "0",
        "buy_tax": "0",
        "sell_tax": "0",
        "owner_address": "0x0000000000000000000000000000000000000000",
        "holders": [
            {"address": "0x1", "percent": "0.10"},
            {"address": "0x2", "percent": "0.05"},
        ],
    }


@pytest.fixture
def pair(pair_data) -> DexPair:
    return DexPair.from_dict(pair_data)


@pytest.fixture
def security(security_data) -> GoPlusTokenSecurity:
    return GoPlusTokenSecurity.from_dict(security_data)


class FakePrimary:
    """Stands in for PrimaryAPI, replays canned responses."""

    def __init__(self, *responses: ApiResponse):
        self.responses = list(responses)
        self.calls = []

    async def request(self, endpoint, method="GET", payload=None, params=None):
        self.calls.append((method, endpoint, payload, params))
        if len(self.responses) > 1:
            return self.responses.pop(0)
        return self.responses[0]


class FakeDex:
    def __init__(self, pair=None, error=None, boosts=None, search_pairs=None):
        self.pair = pair
        self.error = error
        self.boosts = boosts
        self._search_pairs = search_pairs
        self.calls = []

    async def get_best_pair(self, address):
        self.calls.append(address)
        if self.error:
            raise self.error
        return self.pair

    async def get_top_boosts(self):
        return self.boosts

    async def search_pairs(self, query):
        self.calls.append(query)
        return self._search_pairs


class FakeGoPlus:
    def __init__(self, security=None, error=None):
        self.security = security
        self.error = error
        self.calls = []

    async def check_token_security(self, address, chain):
        self.calls.append((chain, address))
        if self.error:
            raise self.error
        return self.security


def run(coro):
    return asyncio.run(coro)


async def with_server(app, scenario):
    """Serves an aiohttp app on localhost while scenario(base_url) runs."""
    from aiohttp.test_utils import TestServer as LocalServer

    server = LocalServer(app)
    await server.start_server()
    try:
        return await scenario(f"http://{server.host}:{server.port}")
    finally:
        await server.close()
