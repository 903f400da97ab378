"""Tests for the GoPlus security client."""

import aiohttp
from aiohttp import web

from clawfi.analyzer.goplus import GoPlusClient

from conftest import TOKEN, run, with_server


def _app(records: dict, seen: list, status: int = 200) -> web.Application:
    async def token_security(request):
        seen.append((request.match_info["chain_id"], request.query.get("contract_addresses")))
        # Structure: {"code": 1, "message": "OK", "result": {"addr": {...}}}
        return web.json_response({"code": 1, "message": "OK", "result": records}, status=status)

    app = web.Application()
    app.router.add_get("/token_security/{chain_id}", token_security)
    return app


def _check(records, chain="ethereum", address=TOKEN, status=200):
    seen = []

    async def scenario(base_url):
        client = GoPlusClient(base_url=base_url, timeout=5)
        return await client.check_token_security(address, chain)

    return run(with_server(_app(records, seen, status), scenario)), seen


def test_chain_table():
    assert GoPlusClient.CHAIN_MAP == {
        "ethereum": "1",
        "bsc": "56",
        "polygon": "137",
        "arbitrum": "42161",
        "optimism": "10",
        "avalanche": "43114",
        "fantom": "250",
        "base": "8453",
    }
    assert GoPlusClient.chain_id_for("BSC") == "56"
    assert GoPlusClient.chain_id_for("solana") is None


def test_record_found_by_lowercased_address(security_data):
    # GoPlus keys results by address; case may differ from the query
    security, seen = _check({TOKEN.upper().replace("0X", "0x"): security_data})
    assert seen == [("1", TOKEN)]
    assert security is not None
    assert security.is_open_source == "1"
    assert len(security.holders) == 2


def test_chain_name_mapped_to_id(security_data):
    _, seen = _check({TOKEN.lower(): security_data}, chain="base")
    assert seen[0][0] == "8453"


def test_missing_record_is_none():
    security, _ = _check({"0xsomethingelse": {"is_honeypot": "1"}})
    assert security is None


def test_empty_record_is_none():
    security, _ = _check({TOKEN.lower(): {}})
    assert security is None


def test_unknown_chain_makes_no_request(monkeypatch):
    def no_network(*args, **kwargs):
        raise AssertionError("network call made for unsupported chain")

    monkeypatch.setattr(aiohttp, "ClientSession", no_network)
    client = GoPlusClient()
    assert run(client.check_token_security(TOKEN, "solana")) is None


def test_unreachable_host_is_none():
    client = GoPlusClient(base_url="http://127.0.0.1:1", timeout=2)
    assert run(client.check_token_security(TOKEN, "ethereum")) is None
