import asyncio
from aiohttp import test_utils
from memeradar.server import create_app
from memeradar.scraper.dex_scraper import DexScraper
from memeradar.scraper.dex_api import DexAPIError
from memeradar.analyzer.dev_checker import DevChecker
from memeradar.storage.db import Database
from test_dex_scraper import FakeDexAPI, raw_pair, SOL_MINT
from test_dev_checker import FakeHelius


class FakeMoralis:
    def __init__(self, data=None):
        self.calls = 0
        self.data = data or {
            "portfolio": {"total_networth_usd": 250_000},
            "tokens": {"count": 3, "tokens": []},
            "transactions": {"total_count": 120, "oldest_ms": None},
            "balance": {"solana": 4.2},
        }

    async def get_full_analysis(self, address):
        self.calls += 1
        return self.data


def build_app(tmp_path, search=None, direct=None, boosts=None, moralis=None):
    api = FakeDexAPI(search=search, direct=direct, boosts=boosts)
    return create_app(
        scraper=DexScraper(api=api),
        dev_checker=DevChecker(helius=FakeHelius(), dex_api=api),
        moralis=moralis or FakeMoralis(),
        db=Database(str(tmp_path / "api.db")),
    )


def request_all(app, *paths):
    """Runs GETs in order against one server; returns [(status, json or text), ...]."""
    async def go():
        results = []
        async with test_utils.TestClient(test_utils.TestServer(app)) as client:
            for path in paths:
                resp = await client.get(path)
                if resp.content_type == "application/json":
                    results.append((resp.status, await resp.json()))
                else:
                    results.append((resp.status, await resp.text()))
        return results
    return asyncio.run(go())


def request(app, path):
    return request_all(app, path)[0]


def test_health(tmp_path):
    status, body = request(build_app(tmp_path), "/")
    assert status == 200
    assert "MemeRadar" in body


def test_analyze_ok_and_recent(tmp_path):
    app = build_app(tmp_path, search=[raw_pair(SOL_MINT, 150_000)])

    (status, body), (recent_status, recent) = request_all(app, "/api/analyze?q=WIF", "/api/recent")
    assert status == 200
    assert body["token"]["base_token_symbol"] == "WIF"
    assert "raw_data" not in body["token"]
    assert body["risk"]["liquidity"] == {"level": "LOW", "score": 2}
    assert body["risk"]["estimated_top10_percent"] == 20
    assert body["token"]["liquidity_mcap_ratio"] == 0.3
    assert body["verdict"]["strength"] in ("Strong", "Moderate", "Weak")
    assert body["aggregated"]["pair_count"] == 1

    assert recent_status == 200
    assert recent["items"][0]["query"] == "WIF"


def test_analyze_error_statuses(tmp_path):
    assert request(build_app(tmp_path), "/api/analyze?q=BTC")[0] == 400
    assert request(build_app(tmp_path), "/api/analyze?q=wif%20bonk")[0] == 400
    assert request(build_app(tmp_path), "/api/analyze")[0] == 400
    assert request(build_app(tmp_path, search=[]), "/api/analyze?q=NEWCOIN")[0] == 404

    big = raw_pair(SOL_MINT, 1_000_000, market_cap=5_000_000_000)
    assert request(build_app(tmp_path, search=[big]), "/api/analyze?q=BIG")[0] == 422

    status, body = request(build_app(tmp_path, search=DexAPIError("down")), "/api/analyze?q=WIF")
    assert status == 502
    assert "error" in body


def test_dev_endpoint(tmp_path):
    status, body = request(build_app(tmp_path), "/api/dev/0xabc?chain=ethereum")
    assert status == 200
    assert body["message"] == "Only Solana Supported"

    # No indexer data, but DexScreener has the pair
    status, body = request(build_app(tmp_path, direct=[raw_pair(SOL_MINT, 60_000)]), f"/api/dev/{SOL_MINT}")
    assert status == 200
    assert body["status"] == "partial"


def test_wallet_endpoint(tmp_path):
    assert request(build_app(tmp_path), "/api/wallet/not-a-wallet")[0] == 400

    status, body = request(build_app(tmp_path), f"/api/wallet/{SOL_MINT}")
    assert status == 200
    assert body["is_whale"] is True
    assert body["trust_score"] == 60


def test_wallet_without_data_is_502_and_not_cached(tmp_path):
    moralis = FakeMoralis(data={"portfolio": None, "tokens": None, "transactions": None, "balance": None})
    app = build_app(tmp_path, moralis=moralis)

    (status, body), (again, _) = request_all(app, f"/api/wallet/{SOL_MINT}", f"/api/wallet/{SOL_MINT}")
    assert status == 502
    assert again == 502
    assert body["status"] == "unknown"
    assert body["trust_score"] is None
    assert "Verify manually" in body["message"]
    assert moralis.calls == 2


def test_wallet_results_are_cached(tmp_path):
    moralis = FakeMoralis()
    app = build_app(tmp_path, moralis=moralis)

    results = request_all(app, f"/api/wallet/{SOL_MINT}", f"/api/wallet/{SOL_MINT}")
    assert [status for status, _ in results] == [200, 200]
    assert moralis.calls == 1


def test_trending_endpoint(tmp_path):
    boosts = [{"chainId": "solana", "tokenAddress": "mintA", "amount": 10}]
    status, body = request(build_app(tmp_path, boosts=boosts), "/api/trending")
    assert status == 200
    assert body["items"][0]["address"] == "mintA"
