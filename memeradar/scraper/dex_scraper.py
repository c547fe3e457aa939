import logging
from typing import Any, Callable, Awaitable, Dict, List, Optional, Tuple
from memeradar.config import Config
from memeradar.models.token import LookupResult
from memeradar.analyzer.parameters import ParameterExtractor
from memeradar.analyzer.momentum import MomentumScorer
from memeradar.analyzer.scoring import ScoringEngine
from memeradar.scraper.dex_api import DexAPI

logger = logging.getLogger(__name__)

NOT_FOUND_MESSAGE = (
    "Token not found on Dexscreener. This may be a very new launch (< 5 mins old) "
    "or an invalid address. Check the CA on Solscan to verify it exists."
)
NOT_MEMECOIN_MESSAGE = (
    "This AI Agent only analyzes MEMECOINS. This token appears to be a large-cap "
    "or is not listed on supported chains."
)
UPSTREAM_ERROR_MESSAGE = "An error occurred while fetching data. Please try again."

Strategy = Tuple[str, Callable[[str], Awaitable[List[Dict[str, Any]]]]]


class DexScraper:
    def __init__(self, api: Optional[DexAPI] = None, engine: Optional[ScoringEngine] = None):
        self.api = api or DexAPI()
        self.engine = engine or ScoringEngine()

    def strategies(self, query: str) -> List[Strategy]:
        """Ordered data sources; the first to return pairs wins."""
        steps = [("search", self.api.search)]
        if len(query) >= 32:
            steps.append(("direct", self.api.get_pairs_by_token_address))
        return steps

    async def lookup_pairs(self, query: str) -> List[Dict[str, Any]]:
        """
        Tries each strategy in turn. Raises the last error only when every
        strategy failed; an empty list means the token simply isn't indexed.
        """
        last_error = None
        any_succeeded = False
        for name, fetch in self.strategies(query):
            try:
                pairs = await fetch(query)
            except Exception as e:
                logger.warning(f"Lookup strategy '{name}' failed for {query}: {e}")
                last_error = e
                continue
            if pairs:
                logger.info(f"Strategy '{name}' found {len(pairs)} pairs for {query}")
                return pairs
            any_succeeded = True
        if last_error is not None and not any_succeeded:
            raise last_error
        return []

    @staticmethod
    def select_memecoin_pairs(pairs: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
        selected = []
        for pair in pairs:
            if pair.get("chainId") not in Config.SUPPORTED_CHAINS:
                continue
            mcap = ParameterExtractor.safe_float(pair.get("marketCap")) or ParameterExtractor.safe_float(pair.get("fdv"))
            if mcap > Config.LARGE_CAP_THRESHOLD:
                continue
            selected.append(pair)
        return selected

    @staticmethod
    def find_best_pair(pairs: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        """Deepest pool wins; ties keep API order."""
        if not pairs:
            return None
        return max(pairs, key=lambda p: ParameterExtractor.safe_float((p.get("liquidity") or {}).get("usd")))

    @staticmethod
    def aggregate_pair_data(pairs: List[Dict[str, Any]]) -> Optional[Dict[str, Any]]:
        if not pairs:
            return None

        f = ParameterExtractor.safe_float
        aggregated = {
            "total_liquidity": 0.0,
            "total_volume_24h": 0.0,
            "total_buys_24h": 0,
            "total_sells_24h": 0,
            "pair_count": len(pairs),
            "chains": [],
            "dexes": [],
        }
        for pair in pairs:
            token = ParameterExtractor.normalize_pair(pair)
            aggregated["total_liquidity"] += token.liquidity_usd
            aggregated["total_volume_24h"] += f(token.volume_h24)
            aggregated["total_buys_24h"] += token.txns_h24_buys
            aggregated["total_sells_24h"] += token.txns_h24_sells
            if pair.get("chainId") and pair["chainId"] not in aggregated["chains"]:
                aggregated["chains"].append(pair["chainId"])
            if pair.get("dexId") and pair["dexId"] not in aggregated["dexes"]:
                aggregated["dexes"].append(pair["dexId"])
        return aggregated

    async def analyze(self, query: str) -> LookupResult:
        """
        Query -> pairs -> best memecoin pair -> full analysis.
        """
        try:
            pairs = await self.lookup_pairs(query)
        except Exception as e:
            logger.error(f"Market data unavailable for {query}: {e}")
            return LookupResult(status="error", message=UPSTREAM_ERROR_MESSAGE)

        if not pairs:
            return LookupResult(status="not_found", message=NOT_FOUND_MESSAGE)

        candidates = self.select_memecoin_pairs(pairs)
        if not candidates:
            return LookupResult(status="not_memecoin", message=NOT_MEMECOIN_MESSAGE)

        best = self.find_best_pair(candidates)
        result = self.engine.analyze_pair(best, self.aggregate_pair_data(candidates))
        return LookupResult(status="ok", result=result)

    async def fetch_best_pair(self, token_address: str) -> Optional[Dict[str, Any]]:
        """Best pair for an address, or None if unavailable for any reason."""
        try:
            pairs = await self.api.get_pairs_by_token_address(token_address)
        except Exception as e:
            logger.warning(f"Pair lookup failed for {token_address}: {e}")
            return None
        return self.find_best_pair(pairs)

    async def fetch_trending(self, limit: int = 6, chain_id: str = "solana") -> List[Dict[str, Any]]:
        """
        Boosted tokens as a trending proxy, falling back to the latest profiles.
        """
        try:
            boosts = await self.api.fetch_top_boosts()
        except Exception as e:
            logger.error(f"Trending fetch error: {e}")
            boosts = []

        items = [b for b in boosts if b.get("chainId") == chain_id and b.get("tokenAddress")]
        if items:
            return [self._trending_item(b, MomentumScorer.quick_score(b)) for b in items[:limit]]

        try:
            profiles = await self.api.fetch_latest_profiles()
        except Exception as e:
            logger.error(f"Fallback fetch error: {e}")
            return []

        items = [p for p in profiles if p.get("chainId") == chain_id and p.get("tokenAddress")]
        return [self._trending_item(p, None) for p in items[:limit]]

    @staticmethod
    def _trending_item(item: Dict[str, Any], score: Optional[int]) -> Dict[str, Any]:
        address = item["tokenAddress"]
        return {
            "address": address,
            "name": (item.get("description") or "Trending Token")[:25],
            "chain_id": item.get("chainId"),
            "icon": item.get("icon"),
            "url": item.get("url") or f"https://dexscreener.com/{item.get('chainId')}/{address}",
            "score": score,
        }
