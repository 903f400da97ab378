"""End-to-end: dead ClawFi API, DexScreener + GoPlus served locally."""

from aiohttp import web

from clawfi.analyzer.goplus import GoPlusClient
from clawfi.client import ClawFi
from clawfi.models.signal import Severity, SignalType
from clawfi.scraper.dex_api import DexAPI

from conftest import TOKEN, run, with_server


def _app(pair_data, security_data, hits) -> web.Application:
    async def primary_down(request):
        hits.append(request.path)
        return web.json_response({"error": "Service unavailable"}, status=503)

    async def dex_tokens(request):
        hits.append(request.path)
        return web.json_response({"pairs": [pair_data]})

    async def goplus(request):
        hits.append(request.path)
        address = request.query["contract_addresses"].lower()
        return web.json_response({"code": 1, "result": {address: security_data}})

    app = web.Application()
    app.router.add_get("/api/analyze/{chain}/{address}", primary_down)
    app.router.add_get("/api/signals/{chain}/{address}", primary_down)
    app.router.add_get("/dex/latest/dex/tokens/{address}", dex_tokens)
    app.router.add_get("/goplus/token_security/{chain_id}", goplus)
    return app


def test_risky_token_through_fallback(pair_data, security_data):
    security_data.update({
        "is_honeypot": "1",
        "sell_tax": "0.35",
        "holders": [{"percent": "0.30"}, {"percent": "0.25"}],
    })
    hits = []

    async def scenario(base_url):
        client = ClawFi(
            base_url=f"{base_url}/api",
            timeout=5000,
            dex=DexAPI(base_url=f"{base_url}/dex", timeout=5),
            goplus=GoPlusClient(base_url=f"{base_url}/goplus", timeout=5),
        )
        analysis = await client.analyze_token("ethereum", TOKEN)
        signals = await client.get_signals("ethereum", TOKEN)
        return client, analysis, signals

    client, analysis, signals = run(with_server(_app(pair_data, security_data, hits), scenario))

    assert client.use_fallback is True
    # Primary tried once, then skipped
    assert [h for h in hits if h.startswith("/api/")] == [f"/api/analyze/ethereum/{TOKEN}"]

    assert analysis.success
    result = analysis.data
    assert result.token.symbol == "PEPE"
    assert result.contract.honeypot is True
    assert [(s.type, s.severity) for s in result.signals] == [
        (SignalType.HONEYPOT, Severity.CRITICAL),
        (SignalType.CONTRACT_RISK, Severity.CRITICAL),
        (SignalType.HOLDER_CONCENTRATION, Severity.MEDIUM),
    ]
    assert result.risk_score == 95

    assert signals.success
    assert [s.title for s in signals.data] == [s.title for s in result.signals]

    envelope = analysis.to_dict()
    assert envelope["success"] is True
    assert envelope["data"]["riskScore"] == 95
    assert envelope["data"]["signals"][1]["summary"] == "Sell tax is 35.0%"


def test_unsupported_chain_degrades(pair_data, security_data):
    hits = []

    async def scenario(base_url):
        client = ClawFi(
            base_url=f"{base_url}/api",
            dex=DexAPI(base_url=f"{base_url}/dex", timeout=5),
            goplus=GoPlusClient(base_url=f"{base_url}/goplus", timeout=5),
        )
        return await client.analyze_token("solana", TOKEN)

    analysis = run(with_server(_app(pair_data, security_data, hits), scenario))

    assert analysis.success
    assert analysis.data.contract is None
    assert analysis.data.signals == []
    assert analysis.data.risk_score == 0
    assert not any(h.startswith("/goplus/") for h in hits)
