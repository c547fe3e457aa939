import asyncio
import pytest
from memeradar.scraper.dex_api import DexAPI, DexAPIError
from memeradar.scraper.dex_scraper import DexScraper, NOT_FOUND_MESSAGE, NOT_MEMECOIN_MESSAGE
from memeradar.config import Config
from memeradar.scraper.anti_block import AntiBlock

SOL_MINT = "EKpQGSJtjMFqKZ9KQanSqYXRcF8fBopzLHYxdM65zcjm"


def raw_pair(address, liquidity, chain="solana", dex="raydium", market_cap=500_000):
    return {
        "chainId": chain,
        "dexId": dex,
        "pairAddress": f"{address}-{dex}",
        "baseToken": {"address": address, "name": "Dog Wif Hat", "symbol": "WIF"},
        "priceUsd": "0.5",
        "liquidity": {"usd": liquidity},
        "marketCap": market_cap,
        "volume": {"h24": 10_000},
        "txns": {"h24": {"buys": 120, "sells": 80}},
    }


class FakeDexAPI:
    def __init__(self, search=None, direct=None, boosts=None, profiles=None):
        self.responses = {"search": search, "direct": direct, "boosts": boosts, "profiles": profiles}
        self.calls = []

    async def _answer(self, name):
        self.calls.append(name)
        answer = self.responses[name]
        if isinstance(answer, Exception):
            raise answer
        return answer or []

    async def search(self, query):
        return await self._answer("search")

    async def get_pairs_by_token_address(self, addresses):
        return await self._answer("direct")

    async def fetch_top_boosts(self):
        return await self._answer("boosts")

    async def fetch_latest_profiles(self):
        return await self._answer("profiles")


def test_analyze_picks_deepest_pool():
    pairs = [raw_pair(SOL_MINT, 20_000, dex="orca"), raw_pair(SOL_MINT, 90_000), raw_pair(SOL_MINT, 5_000, dex="meteora")]
    scraper = DexScraper(api=FakeDexAPI(search=pairs))

    lookup = asyncio.run(scraper.analyze("WIF"))

    assert lookup.status == "ok"
    assert lookup.result.token.liquidity_usd == 90_000
    assert lookup.result.aggregated["pair_count"] == 3
    assert lookup.result.aggregated["total_liquidity"] == 115_000
    assert lookup.result.aggregated["dexes"] == ["orca", "raydium", "meteora"]
    assert lookup.result.aggregated["total_buys_24h"] == 360


def test_short_query_does_not_try_direct_lookup():
    api = FakeDexAPI(search=[], direct=[raw_pair(SOL_MINT, 1_000)])
    lookup = asyncio.run(DexScraper(api=api).analyze("NEWCOIN"))

    assert lookup.status == "not_found"
    assert lookup.message == NOT_FOUND_MESSAGE
    assert api.calls == ["search"]


def test_address_falls_back_to_direct_lookup():
    api = FakeDexAPI(search=DexAPIError("search down"), direct=[raw_pair(SOL_MINT, 30_000)])
    lookup = asyncio.run(DexScraper(api=api).analyze(SOL_MINT))

    assert lookup.status == "ok"
    assert api.calls == ["search", "direct"]


def test_every_strategy_failing_is_an_error():
    api = FakeDexAPI(search=DexAPIError("down"), direct=DexAPIError("down"))
    lookup = asyncio.run(DexScraper(api=api).analyze(SOL_MINT))
    assert lookup.status == "error"


def test_one_empty_strategy_after_a_failure_is_not_found():
    api = FakeDexAPI(search=DexAPIError("down"), direct=[])
    lookup = asyncio.run(DexScraper(api=api).analyze(SOL_MINT))
    assert lookup.status == "not_found"


def test_failure_after_an_empty_strategy_is_not_found():
    api = FakeDexAPI(search=[], direct=DexAPIError("down"))
    lookup = asyncio.run(DexScraper(api=api).analyze(SOL_MINT))
    assert lookup.status == "not_found"
    assert api.calls == ["search", "direct"]


def test_large_caps_and_unsupported_chains_are_rejected():
    pairs = [raw_pair(SOL_MINT, 5_000_000, market_cap=2_000_000_000), raw_pair(SOL_MINT, 50_000, chain="tron")]
    lookup = asyncio.run(DexScraper(api=FakeDexAPI(search=pairs)).analyze("BIGCAP"))

    assert lookup.status == "not_memecoin"
    assert lookup.message == NOT_MEMECOIN_MESSAGE


def test_select_and_aggregate_helpers():
    assert DexScraper.find_best_pair([]) is None
    assert DexScraper.aggregate_pair_data([]) is None
    kept = DexScraper.select_memecoin_pairs([raw_pair("a", 1), raw_pair("b", 1, chain="tron")])
    assert [p["baseToken"]["address"] for p in kept] == ["a"]


def test_trending_from_boosts():
    boosts = [
        {"chainId": "solana", "tokenAddress": "mintA", "description": "A very long description for a token", "totalAmount": 500},
        {"chainId": "ethereum", "tokenAddress": "0xabc"},
        {"chainId": "solana", "tokenAddress": "mintB"},
    ]
    items = asyncio.run(DexScraper(api=FakeDexAPI(boosts=boosts)).fetch_trending(limit=6))

    assert [i["address"] for i in items] == ["mintA", "mintB"]
    assert len(items[0]["name"]) == 25
    assert items[1]["name"] == "Trending Token"
    assert items[1]["url"] == "https://dexscreener.com/solana/mintB"
    assert all(isinstance(i["score"], int) for i in items)


def test_trending_falls_back_to_profiles():
    api = FakeDexAPI(boosts=DexAPIError("down"), profiles=[{"chainId": "solana", "tokenAddress": "mintC"}])
    items = asyncio.run(DexScraper(api=api).fetch_trending())

    assert [i["address"] for i in items] == ["mintC"]
    assert items[0]["score"] is None


def test_trending_survives_total_outage():
    api = FakeDexAPI(boosts=DexAPIError("down"), profiles=DexAPIError("down"))
    assert asyncio.run(DexScraper(api=api).fetch_trending()) == []


def test_address_batches_are_chunked():
    class RecordingAPI(DexAPI):
        def __init__(self):
            super().__init__(base_url="http://dex.test")
            self.urls = []

        async def _make_request(self, url, params=None):
            self.urls.append(url)
            return {"pairs": [{"url": url}]}

    api = RecordingAPI()
    pairs = asyncio.run(api.get_pairs_by_token_address([f"mint{i}" for i in range(65)]))

    assert len(api.urls) == 3
    assert api.urls[0].startswith("http://dex.test/latest/dex/tokens/mint0,mint1,")
    assert api.urls[2].endswith("/mint60,mint61,mint62,mint63,mint64")
    assert len(pairs) == 3


def test_backoff_honours_retry_after():
    anti_block = AntiBlock()
    assert anti_block.backoff_delay(1, retry_after=7) == 7
    assert 4 <= anti_block.backoff_delay(2) <= 5
    assert "User-Agent" in anti_block.get_headers()


class RecordingAntiBlock(AntiBlock):
    def __init__(self):
        super().__init__()
        self.waits = []

    async def backoff(self, attempt, retry_after=None):
        self.waits.append(attempt)


def test_no_backoff_after_the_last_attempt():
    api = DexAPI(base_url="http://127.0.0.1:1")
    api.anti_block = RecordingAntiBlock()

    with pytest.raises(DexAPIError):
        asyncio.run(api.search("WIF"))

    assert api.anti_block.waits == list(range(Config.MAX_RETRIES - 1))
