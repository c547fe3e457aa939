import time
from memeradar.analyzer.scoring import ScoringEngine
from memeradar.analyzer.parameters import ParameterExtractor


def mock_pair(liquidity, volume_h24, change_h24, buys, sells, **extra):
    pair = {
        "chainId": "solana",
        "dexId": "raydium",
        "pairAddress": "mock_pair",
        "baseToken": {"address": "mock_token", "name": "Mock Coin", "symbol": "MOCK"},
        "quoteToken": {"address": "sol", "symbol": "SOL"},
        "priceUsd": "0.001",
        "liquidity": {"usd": liquidity},
        "marketCap": 1_000_000,
        "fdv": 1_000_000,
        "volume": {"h24": volume_h24},
        "priceChange": {"h24": change_h24},
        "txns": {"h24": {"buys": buys, "sells": sells}},
        "pairCreatedAt": int((time.time() - 3600) * 1000),
        "url": "http://mock",
    }
    pair.update(extra)
    return pair


def test_scoring_thin_pump():
    # Thin pool, +80% pump, heavy selling
    result = ScoringEngine().analyze_pair(mock_pair(5_000, 2_000, 80, 10, 40))

    assert result.risk.liquidity.level == "HIGH" and result.risk.liquidity.score == 9
    assert result.risk.rug_pull.level == "HIGH" and result.risk.rug_pull.score == 8
    assert result.risk.volatility.level == "HIGH" and result.risk.volatility.score == 9
    # Exactly 50 transactions is not below the 50 threshold
    assert result.risk.holder_concentration.level == "MEDIUM"
    assert result.risk.holder_concentration.score == 5
    assert result.risk.overall.score == 8
    assert result.risk.overall.level == "HIGH"
    assert result.verdict.strength == "Weak"
    assert result.verdict.suitable_for == ["High-risk speculators only"]
    assert result.sentiment.whale_activity == "Distribution"


def test_scoring_healthy_token():
    result = ScoringEngine().analyze_pair(mock_pair(200_000, 50_000, 5, 300, 250))

    assert result.risk.liquidity.score == 2
    assert result.risk.rug_pull.score == 2
    assert result.risk.volatility.score == 3
    assert result.risk.holder_concentration.score == 3
    assert result.risk.overall.score == 2
    assert result.risk.overall.level == "LOW"
    assert result.risk.estimated_top10_percent == 20
    assert result.verdict.strength == "Strong"
    assert result.verdict.risk_score == 2
    assert result.momentum.score == 85
    assert result.momentum.label == "Strong"


def test_scoring_is_deterministic():
    engine = ScoringEngine()
    pair = mock_pair(42_000, 12_345, -12.5, 77, 91)
    assert engine.analyze_pair(pair) == engine.analyze_pair(pair)


def test_normalize_pair_handles_missing_and_garbage_fields():
    token = ParameterExtractor.normalize_pair({
        "chainId": "solana",
        "priceUsd": "not a number",
        "liquidity": None,
        "volume": {"h24": 2_400},
        "fdv": 50_000,
        "txns": {"h24": {"buys": float("nan"), "sells": 3}},
        "pairCreatedAt": 0,
    })

    assert token.price_usd == 0
    assert token.liquidity_usd == 0
    assert token.market_cap == 50_000  # falls back to fdv
    assert token.volume_h6 == 600
    assert token.volume_h1 == 100
    assert token.txns_h24_buys == 0
    assert token.txns_h24_sells == 3
    assert token.pair_created_at is None
    assert token.base_token_symbol == "UNK"
    assert ParameterExtractor.get_pair_age_hours(token) is None


def test_normalize_pair_keeps_reported_zero_volume_buckets():
    token = ParameterExtractor.normalize_pair({"volume": {"h24": 2_400, "h6": 0, "h1": 0}})
    assert token.volume_h6 == 0
    assert token.volume_h1 == 0


def test_pair_age_and_ratios():
    now_ms = 1_700_000_000_000
    token = ParameterExtractor.normalize_pair(
        mock_pair(10_000, 5_000, 0, 9, 0, pairCreatedAt=now_ms - 2 * 3_600_000)
    )

    assert ParameterExtractor.get_pair_age_hours(token, now_ms) == 2
    assert ParameterExtractor.get_buy_sell_ratio(token) == 9
    assert ParameterExtractor.get_liquidity_mcap_ratio(token) == 0.01
    assert ParameterExtractor.get_volume_mcap_ratio(token) == 0.005
