"""Tests for the DexScreener client."""

from aiohttp import web

from clawfi.scraper.dex_api import DexAPI

from conftest import TOKEN, run, with_server


def _app(pairs_payload, status=200) -> web.Application:
    async def tokens(request):
        return web.json_response(pairs_payload, status=status)

    async def search(request):
        return web.json_response({"pairs": [{"baseToken": {"symbol": request.query["q"].upper()}}]})

    async def boosts(request):
        return web.json_response([{"tokenAddress": TOKEN, "chainId": "ethereum"}])

    app = web.Application()
    app.router.add_get("/latest/dex/tokens/{address}", tokens)
    app.router.add_get("/latest/dex/search", search)
    app.router.add_get("/token-boosts/top/v1", boosts)
    return app


def _call(pairs_payload, method, *args, status=200):
    async def scenario(base_url):
        api = DexAPI(base_url=base_url, timeout=5)
        return await getattr(api, method)(*args)

    return run(with_server(_app(pairs_payload, status), scenario))


def test_best_pair_is_first(pair_data):
    second = dict(pair_data, priceUsd="99")
    pair = _call({"pairs": [pair_data, second]}, "get_best_pair", TOKEN)
    assert pair.price_usd == "0.00001234"
    assert pair.base_token_symbol == "PEPE"
    assert pair.liquidity_usd == 350000
    assert pair.txns_h24_buys == 1200


def test_no_pairs_is_not_found():
    assert _call({"pairs": []}, "get_best_pair", TOKEN) is None
    assert _call({"pairs": None}, "get_best_pair", TOKEN) is None
    assert _call({"schemaVersion": "1.0.0"}, "get_best_pair", TOKEN) is None


def test_error_status_is_not_found(pair_data):
    assert _call({"pairs": [pair_data]}, "get_best_pair", TOKEN, status=500) is None


def test_search_passes_query():
    pairs = _call({}, "search_pairs", "pepe")
    assert pairs == [{"baseToken": {"symbol": "PEPE"}}]


def test_top_boosts():
    assert _call({}, "get_top_boosts") == [{"tokenAddress": TOKEN, "chainId": "ethereum"}]


def test_unreachable_host():
    api = DexAPI(base_url="http://127.0.0.1:1", timeout=2)
    assert run(api.get_best_pair(TOKEN)) is None
    assert run(api.search_pairs("pepe")) is None
