import argparse
import asyncio
import logging
import sys
import colorama
from colorama import Fore, Style

from memeradar.config import Config
from memeradar.models.token import AnalysisResult, DevTrustResult, WalletTrustResult
from memeradar.analyzer.formatting import (
    format_currency, format_price, format_percentage, format_number, truncate_address,
)
from memeradar.analyzer.parameters import ParameterExtractor
from memeradar.analyzer.validation import validate_input, is_solana_address
from memeradar.analyzer.dev_checker import DevChecker
from memeradar.analyzer.moralis import MoralisClient
from memeradar.analyzer.wallet_trust import WalletTrustScorer
from memeradar.scraper.dex_scraper import DexScraper
from memeradar.storage.db import Database, TTLCache
from memeradar.server import start_server

logger = logging.getLogger("Main")

LEVEL_COLORS = {
    "LOW": Fore.GREEN,
    "MEDIUM": Fore.YELLOW,
    "HIGH": Fore.RED,
    "DANGER": Fore.RED,
    "UNKNOWN": Fore.YELLOW,
}

STRENGTH_COLORS = {"Strong": Fore.GREEN, "Moderate": Fore.YELLOW, "Weak": Fore.RED}


def setup_logging(level: str = None):
    logging.basicConfig(
        level=getattr(logging, (level or Config.LOG_LEVEL).upper(), logging.INFO),
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )


def _level(level: str, score=None) -> str:
    color = LEVEL_COLORS.get(level, Fore.WHITE)
    suffix = f" ({score}/10)" if score is not None else ""
    return f"{color}{level}{suffix}{Style.RESET_ALL}"


def print_analysis(result: AnalysisResult):
    token = result.token
    risk = result.risk
    sentiment = result.sentiment
    verdict = result.verdict
    color = STRENGTH_COLORS.get(verdict.strength, Fore.WHITE)

    print(f"\n{color}{'='*50}")
    print(f"{Style.BRIGHT}Token: {token.base_token_name} ({token.base_token_symbol})")
    print(f"{Fore.WHITE}Chain: {Config.CHAIN_NAMES.get(token.chain_id, token.chain_id)} | DEX: {token.dex_id or 'N/A'}")
    print(f"CA: {truncate_address(token.base_token_address)}")
    print(f"Price: {format_price(token.price_usd)} | 24h: {format_percentage(token.price_change_h24)}")
    print(f"Liq: {format_currency(token.liquidity_usd)} | MC: {format_currency(token.market_cap)} "
          f"| Vol 24h: {format_currency(token.volume_h24)}")
    print(f"Liq/MC: {ParameterExtractor.get_liquidity_mcap_ratio(token):.1%}")

    age = ParameterExtractor.get_pair_age_hours(token)
    if age is not None:
        print(f"Pair Age: {age:.1f}h")

    print(f"\n{Style.BRIGHT}Risk")
    print(f"  Rug Pull: {_level(risk.rug_pull.level, risk.rug_pull.score)}")
    print(f"  Liquidity: {_level(risk.liquidity.level, risk.liquidity.score)}")
    print(f"  Holders: {_level(risk.holder_concentration.level, risk.holder_concentration.score)} "
          f"(~{risk.estimated_top10_percent}% top 10)")
    print(f"  Volatility: {_level(risk.volatility.level, risk.volatility.score)}")
    print(f"  Overall: {_level(risk.overall.level, risk.overall.score)}")

    print(f"\n{Style.BRIGHT}Sentiment")
    print(f"  Trend: {sentiment.trend_direction} | Volume: {sentiment.volume_trend} | Hype: {sentiment.hype_level}")
    print(f"  Whales: {sentiment.whale_activity} | Buy/Sell: {sentiment.buy_sell_ratio} "
          f"| Txns: {format_number(sentiment.transaction_count)}")
    print(f"  Momentum: {result.momentum.score}/100 [{result.momentum.label}]")

    if result.aggregated and result.aggregated["pair_count"] > 1:
        agg = result.aggregated
        print(f"  Across {agg['pair_count']} pairs: Liq {format_currency(agg['total_liquidity'])} "
              f"| Vol {format_currency(agg['total_volume_24h'])}")

    print(f"\n{Style.BRIGHT}Scenarios")
    for scenario in (result.predictions.bullish, result.predictions.neutral, result.predictions.bearish):
        print(f"  {scenario.name}: {format_price(scenario.price_range.low)} - {format_price(scenario.price_range.high)} "
              f"(MC {format_currency(scenario.market_cap_range.low)} - {format_currency(scenario.market_cap_range.high)})")
    print(f"  {Fore.WHITE}{Style.DIM}{result.predictions.disclaimer}")

    print(f"\n{color}{Style.BRIGHT}Verdict: {verdict.strength}")
    print(f"{Fore.WHITE}{verdict.summary}")
    print(f"Suitable for: {', '.join(verdict.suitable_for)}")
    print(f"{color}{'='*50}\n")


def print_dev(result: DevTrustResult):
    color = LEVEL_COLORS.get(result.risk_level, Fore.WHITE)
    print(f"\n{color}{'='*50}")
    print(f"{Style.BRIGHT}{result.badge}")
    print(f"{Fore.WHITE}{result.message}")
    print(f"Deployer: {truncate_address(result.deployer_wallet) if result.deployer_wallet != 'Unknown' else 'Unknown'}")
    if result.wallet_age:
        print(f"Wallet Age: {result.wallet_age}")
    if result.top10_holder_percent is not None:
        print(f"Top 10 Holders: {result.top10_holder_percent:.1f}%")
    if result.other_tokens is not None:
        print(f"Other Tokens: {result.other_tokens} | Rugs: {result.rug_count} | Success Rate: {result.success_rate}")
    for flag in result.risk_flags:
        print(f"  {flag}")
    if result.solscan_link:
        print(f"Solscan: {result.solscan_link}")
    print(f"{color}{'='*50}\n")


def print_wallet(result: WalletTrustResult):
    color = LEVEL_COLORS.get(result.risk_level, Fore.WHITE)
    print(f"\n{color}{'='*50}")
    print(f"{Style.BRIGHT}Wallet: {truncate_address(result.address)}")
    print(f"{color}Trust Score: {result.trust_score}/100 [{result.risk_level}]")
    print(f"{Fore.WHITE}Net Worth: {format_currency(result.net_worth_usd)} | SOL: {result.sol_balance:.3f}")
    print(f"Tokens: {result.token_count} | Transactions: {result.transaction_count}")
    if result.wallet_age:
        print(f"Age: {result.wallet_age['days']} days")
    for flag in result.flags:
        print(f"  {flag}")
    print(f"{color}{'='*50}\n")


async def run_analyze(query: str) -> int:
    validation = validate_input(query)
    if not validation.valid:
        print(f"{Fore.RED}{validation.error}")
        return 1

    lookup = await DexScraper().analyze(query.strip())
    if lookup.status != "ok":
        print(f"{Fore.RED}{lookup.message}")
        return 1

    token = lookup.result.token
    Database().save_recent(query.strip(), token.base_token_symbol, token.chain_id)
    print_analysis(lookup.result)
    return 0


async def run_dev(token_address: str, chain_id: str) -> int:
    scraper = DexScraper()
    pair = None
    if chain_id == "solana":
        raw = await scraper.fetch_best_pair(token_address)
        if raw:
            pair = ParameterExtractor.normalize_pair(raw)

    checker = DevChecker(dex_api=scraper.api, cache=TTLCache(Database(), "dev", Config.DEV_CACHE_TTL))
    print_dev(await checker.analyze_dev_wallet(token_address, chain_id, pair))
    return 0


async def run_wallet(address: str) -> int:
    if not is_solana_address(address):
        print(f"{Fore.RED}Invalid Solana wallet address")
        return 1

    data = await MoralisClient().get_full_analysis(address)
    result = WalletTrustScorer.score(address, data)
    if result.status != "analyzed":
        print(f"{Fore.RED}{result.message}")
        return 1
    print_wallet(result)
    return 0


async def run_trending(limit: int) -> int:
    items = await DexScraper().fetch_trending(limit=limit)
    if not items:
        print(f"{Fore.YELLOW}No trending tokens right now.")
        return 0

    print(f"\n{Style.BRIGHT}🔥 Trending on Solana")
    for item in items:
        score = f"{item['score']}/100" if item["score"] is not None else "N/A"
        print(f"  {truncate_address(item['address'])}  {item['name']:<25}  Momentum: {score}")
    print()
    return 0


async def run_server(port: int):
    runner = await start_server(port=port)
    try:
        while True:
            await asyncio.sleep(3600)
    finally:
        await runner.cleanup()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="memeradar", description="Memecoin risk and sentiment scanner")
    parser.add_argument("--log-level", default=None, help="Override LOG_LEVEL")
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("analyze", help="Analyze a token by ticker or contract address")
    p.add_argument("query")

    p = sub.add_parser("dev", help="Check a token deployer's trust score")
    p.add_argument("token")
    p.add_argument("--chain", default="solana")

    p = sub.add_parser("wallet", help="Score a Solana wallet")
    p.add_argument("address")

    p = sub.add_parser("trending", help="List trending Solana tokens")
    p.add_argument("--limit", type=int, default=6)

    p = sub.add_parser("serve", help="Run the JSON API")
    p.add_argument("--port", type=int, default=Config.PORT)
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)
    colorama.init(autoreset=True)

    if args.command == "analyze":
        coro = run_analyze(args.query)
    elif args.command == "dev":
        coro = run_dev(args.token, args.chain)
    elif args.command == "wallet":
        coro = run_wallet(args.address)
    elif args.command == "trending":
        coro = run_trending(args.limit)
    else:
        coro = run_server(args.port)

    try:
        # Windows selector loop policy fix
        if sys.platform == 'win32':
            asyncio.set_event_loop_policy(asyncio.WindowsSelectorEventLoopPolicy())
        return asyncio.run(coro) or 0
    except KeyboardInterrupt:
        logger.info("Stopping MemeRadar...")
        return 0


if __name__ == "__main__":
    sys.exit(main())
