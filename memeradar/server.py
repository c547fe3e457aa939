from aiohttp import web
from dataclasses import asdict
import logging
from typing import Any, Dict, Optional
from memeradar.config import Config
from memeradar.models.token import AnalysisResult
from memeradar.analyzer.parameters import ParameterExtractor
from memeradar.analyzer.validation import validate_input, is_solana_address
from memeradar.analyzer.dev_checker import DevChecker
from memeradar.analyzer.moralis import MoralisClient
from memeradar.analyzer.wallet_trust import WalletTrustScorer
from memeradar.scraper.dex_scraper import DexScraper
from memeradar.storage.db import Database, TTLCache

logger = logging.getLogger("API")

SCRAPER = web.AppKey("scraper", DexScraper)
DEV_CHECKER = web.AppKey("dev_checker", DevChecker)
MORALIS = web.AppKey("moralis", MoralisClient)
DB = web.AppKey("db", Database)
WALLET_CACHE = web.AppKey("wallet_cache", TTLCache)

# LookupResult status -> HTTP status
LOOKUP_STATUS = {
    "not_found": 404,
    "not_memecoin": 422,
    "error": 502,
}


def analysis_to_dict(result: AnalysisResult) -> Dict[str, Any]:
    data = asdict(result)
    data["token"].pop("raw_data", None)
    data["risk"]["estimated_top10_percent"] = result.risk.estimated_top10_percent
    data["token"]["pair_age_hours"] = ParameterExtractor.get_pair_age_hours(result.token)
    data["token"]["liquidity_mcap_ratio"] = ParameterExtractor.get_liquidity_mcap_ratio(result.token)
    return data


def error_response(message: str, status: int) -> web.Response:
    return web.json_response({"error": message}, status=status)


async def root_handler(request):
    return web.Response(text="📡 MemeRadar is Active & Running!")


async def analyze_handler(request):
    query = request.query.get("q", "")
    validation = validate_input(query)
    if not validation.valid:
        return error_response(validation.error, 400)

    query = query.strip()
    lookup = await request.app[SCRAPER].analyze(query)
    if lookup.status != "ok":
        return error_response(lookup.message, LOOKUP_STATUS.get(lookup.status, 502))

    token = lookup.result.token
    request.app[DB].save_recent(query, token.base_token_symbol, token.chain_id)
    logger.info(f"Analyzed {token.base_token_symbol} on {token.chain_id}")
    return web.json_response(analysis_to_dict(lookup.result))


async def dev_handler(request):
    address = request.match_info["address"]
    chain_id = request.query.get("chain", "solana")

    pair = None
    if chain_id == "solana":
        raw = await request.app[SCRAPER].fetch_best_pair(address)
        if raw:
            pair = ParameterExtractor.normalize_pair(raw)

    result = await request.app[DEV_CHECKER].analyze_dev_wallet(address, chain_id, pair)
    return web.json_response(asdict(result))


async def wallet_handler(request):
    address = request.match_info["address"]
    if not is_solana_address(address):
        return error_response("Invalid Solana wallet address", 400)

    cache = request.app[WALLET_CACHE]
    data = cache.get(address)
    cached = data is not None
    if data is None:
        data = await request.app[MORALIS].get_full_analysis(address)

    result = WalletTrustScorer.score(address, data)
    if result.status == "unknown":
        return web.json_response(asdict(result), status=502)
    if not cached:
        cache.set(address, data)
    if result.status == "not_found":
        return web.json_response(asdict(result), status=404)
    return web.json_response(asdict(result))


async def trending_handler(request):
    limit = ParameterExtractor.safe_int(request.query.get("limit"), 6) or 6
    items = await request.app[SCRAPER].fetch_trending(limit=limit)
    return web.json_response({"items": items})


async def recent_handler(request):
    return web.json_response({"items": request.app[DB].get_recent()})


def create_app(scraper: Optional[DexScraper] = None, dev_checker: Optional[DevChecker] = None,
               moralis: Optional[MoralisClient] = None, db: Optional[Database] = None) -> web.Application:
    db = db or Database()
    scraper = scraper or DexScraper()

    app = web.Application()
    app[SCRAPER] = scraper
    app[DEV_CHECKER] = dev_checker or DevChecker(dex_api=scraper.api,
                                                 cache=TTLCache(db, "dev", Config.DEV_CACHE_TTL))
    app[MORALIS] = moralis or MoralisClient()
    app[DB] = db
    app[WALLET_CACHE] = TTLCache(db, "wallet", Config.WALLET_CACHE_TTL)

    app.router.add_get('/', root_handler)
    app.router.add_get('/api/analyze', analyze_handler)
    app.router.add_get('/api/dev/{address}', dev_handler)
    app.router.add_get('/api/wallet/{address}', wallet_handler)
    app.router.add_get('/api/trending', trending_handler)
    app.router.add_get('/api/recent', recent_handler)
    return app


async def start_server(app: Optional[web.Application] = None, host: Optional[str] = None,
                       port: Optional[int] = None) -> web.AppRunner:
    app = app or create_app()
    host = host or Config.HOST
    port = port or Config.PORT

    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, host, port)

    logger.info(f"🌍 MemeRadar API started on {host}:{port}")
    await site.start()
    return runner
