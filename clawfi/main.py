import argparse
import asyncio
import json
import logging
import sys
import colorama
from colorama import Fore, Style

from clawfi.client import ClawFi
from clawfi.config import Config
from clawfi.models.response import ApiResponse
from clawfi.models.signal import Severity
from clawfi.models.token import AnalysisResult

logger = logging.getLogger("Main")

SEVERITY_COLORS = {
    Severity.INFO: Fore.WHITE,
    Severity.LOW: Fore.CYAN,
    Severity.MEDIUM: Fore.YELLOW,
    Severity.HIGH: Fore.RED,
    Severity.CRITICAL: Fore.MAGENTA,
}


def _score_color(score: int) -> str:
    if score >= 60:
        return Fore.RED
    if score >= 30:
        return Fore.YELLOW
    return Fore.GREEN


def _fmt_money(value) -> str:
    return "N/A" if value is None else f"${value:,.0f}"


def print_signals(signals):
    if not signals:
        print(f"{Fore.GREEN}No risk signals")
        return
    for s in signals:
        color = SEVERITY_COLORS.get(s.severity, Fore.WHITE)
        print(f"{color}[{s.severity.value.upper()}] {s.title}: {s.summary}")


def print_analysis(result: AnalysisResult, source: str):
    token = result.token
    market = result.market
    color = _score_color(result.risk_score)

    print(f"\n{color}{'='*50}")
    print(f"{Style.BRIGHT}Token: {token.name or 'Unknown'} ({token.symbol or '?'})")
    print(f"{color}Risk Score: {result.risk_score}/100")
    print(f"{Fore.WHITE}Chain: {token.chain} | Source: {source}")
    print(f"CA: {token.address}")
    print(f"Price: ${market.price:.10g} | 24h: {market.price_change.h24:+.2f}%")
    print(f"Liq: {_fmt_money(market.liquidity)} | MC: {_fmt_money(market.market_cap)} | FDV: {_fmt_money(market.fdv)}")
    print(f"24h Vol: {_fmt_money(market.volume.h24)} | Buys/Sells: {market.transactions.buys}/{market.transactions.sells}")
    if result.contract:
        c = result.contract
        print(
            f"Verified: {c.verified} | Renounced: {c.renounced} | Honeypot: {c.honeypot} | "
            f"Tax: {c.tax_buy:.1f}% / {c.tax_sell:.1f}%"
        )
    else:
        print(f"{Fore.YELLOW}No contract security data")
    print_signals(result.signals)
    print(f"{color}{'='*50}\n")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="clawfi", description="Token risk analysis")
    parser.add_argument("--api-key", default=None, help="ClawFi API key (default: $CLAWFI_API_KEY)")
    parser.add_argument("--base-url", default=None, help="ClawFi API root")
    parser.add_argument("--timeout", type=int, default=None, help="Request timeout in ms")
    parser.add_argument("--json", action="store_true", help="Print the raw response envelope")

    sub = parser.add_subparsers(dest="command", required=True)
    for name in ("analyze", "signals", "honeypot"):
        p = sub.add_parser(name)
        p.add_argument("chain")
        p.add_argument("address")
    p = sub.add_parser("search")
    p.add_argument("query")
    p = sub.add_parser("trending")
    p.add_argument("--chain", default=None)
    return parser


async def run(args: argparse.Namespace) -> ApiResponse:
    client = ClawFi(api_key=args.api_key, base_url=args.base_url, timeout=args.timeout)

    if args.command == "analyze":
        result = await client.analyze_token(args.chain, args.address)
    elif args.command == "signals":
        result = await client.get_signals(args.chain, args.address)
    elif args.command == "honeypot":
        result = await client.check_honeypot(args.chain, args.address)
    elif args.command == "search":
        result = await client.search(args.query)
    else:
        result = await client.get_trending(args.chain)

    if args.json or not result.success:
        print(json.dumps(result.to_dict(), indent=2))
        return result

    source = "DexScreener + GoPlus" if client.use_fallback else "ClawFi API"
    if args.command == "analyze":
        print_analysis(result.data, source)
    elif args.command == "signals":
        print_signals(result.data)
    elif args.command == "honeypot":
        check = result.data
        color = Fore.RED if check.is_honeypot else Fore.GREEN
        print(f"{color}Honeypot: {check.is_honeypot}" + (f" ({check.reason})" if check.reason else ""))
    else:
        for t in result.data:
            label = f"{t.name} ({t.symbol})" if t.name else t.address
            print(f"{Fore.CYAN}{t.chain:<10}{Fore.WHITE} {label}")
    return result


def main(argv=None) -> int:
    logging.basicConfig(
        level=getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )
    colorama.init(autoreset=True)

    args = build_parser().parse_args(argv)
    try:
        result = asyncio.run(run(args))
    except KeyboardInterrupt:
        return 130
    return 0 if result.success else 1


if __name__ == "__main__":
    sys.exit(main())
