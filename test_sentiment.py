from memeradar.analyzer.sentiment import SentimentAnalyzer
from memeradar.analyzer.momentum import MomentumScorer
from test_risk import mock_token


def test_volume_trend():
    assert SentimentAnalyzer.volume_trend(mock_token(volume_h1=1_000, volume_h24=10_000)) == "Increasing"
    assert SentimentAnalyzer.volume_trend(mock_token(volume_h1=100, volume_h24=10_000)) == "Decreasing"
    assert SentimentAnalyzer.volume_trend(mock_token(volume_h1=400, volume_h24=10_000)) == "Stable"
    assert SentimentAnalyzer.volume_trend(mock_token(volume_h1=500, volume_h24=0)) == "Stable"


def test_whale_activity():
    assert SentimentAnalyzer.whale_activity(3) == "Accumulation"
    assert SentimentAnalyzer.whale_activity(2) == "Neutral"
    assert SentimentAnalyzer.whale_activity(0.4) == "Distribution"


def test_hype_level():
    assert SentimentAnalyzer.hype_level(mock_token(txns_h24_buys=1_500, volume_h24=200_000)) == "High"
    assert SentimentAnalyzer.hype_level(mock_token(txns_h24_buys=50, volume_h24=200_000)) == "Low"
    assert SentimentAnalyzer.hype_level(mock_token(txns_h24_buys=500, volume_h24=5_000)) == "Low"
    assert SentimentAnalyzer.hype_level(mock_token(txns_h24_buys=500, volume_h24=50_000)) == "Medium"


def test_volatility_scales_short_windows():
    assert SentimentAnalyzer.volatility(mock_token(price_change_h1=3)) == "High"
    assert SentimentAnalyzer.volatility(mock_token(price_change_h6=-5)) == "Medium"
    assert SentimentAnalyzer.volatility(mock_token(price_change_h24=5)) == "Low"


def test_trend_direction_needs_both_windows():
    assert SentimentAnalyzer.trend_direction(mock_token(price_change_h24=15, price_change_h6=2)) == "Bullish"
    assert SentimentAnalyzer.trend_direction(mock_token(price_change_h24=15, price_change_h6=-1)) == "Neutral"
    assert SentimentAnalyzer.trend_direction(mock_token(price_change_h24=-15, price_change_h6=-3)) == "Bearish"


def test_snapshot_without_sells():
    snapshot = SentimentAnalyzer.analyze(mock_token(txns_h24_buys=7))
    assert snapshot.buy_sell_ratio == 7
    assert snapshot.whale_activity == "Accumulation"
    assert snapshot.transaction_count == 7


def test_hype_score_is_capped():
    assert SentimentAnalyzer.hype_score(mock_token()) == 0
    assert SentimentAnalyzer.hype_score(mock_token(volume_h24=1e12, txns_h24_buys=10**9)) == 100


def test_momentum_quiet_token():
    result = MomentumScorer.score(mock_token())
    # Baseline 25 plus the flat 15 for "no sells yet"
    assert result.score == 40
    assert result.label == "Weak"
    assert result.buy_pressure_score == 15


def test_momentum_is_clamped():
    hot = MomentumScorer.score(mock_token(volume_h24=1e12, txns_h24_buys=10**9, txns_h24_sells=1,
                                          price_change_h24=500))
    assert hot.score == 100
    assert hot.label == "Strong"

    dump = MomentumScorer.score(mock_token(price_change_h24=-100, txns_h24_sells=10))
    assert dump.price_momentum_score == -10
    assert 0 <= dump.score <= 100


def test_momentum_ignores_negative_volume():
    result = MomentumScorer.score(mock_token(volume_h24=-500))
    assert result.volume_score == 0


def test_buy_pressure_and_surge():
    assert MomentumScorer.buy_pressure(mock_token(txns_h24_buys=20, txns_h24_sells=10)) == "Strong Buy"
    assert MomentumScorer.buy_pressure(mock_token(txns_h24_buys=6, txns_h24_sells=10)) == "Sell Heavy"
    assert MomentumScorer.buy_pressure(mock_token(txns_h24_buys=10, txns_h24_sells=10)) == "Neutral"
    assert MomentumScorer.volume_surge_pct(mock_token(volume_h24=8_000, volume_h6=1_000)) == 100
    assert MomentumScorer.volume_surge_pct(mock_token(volume_h24=8_000, volume_h6=0)) == 0


def test_quick_score_for_boosts():
    assert MomentumScorer.quick_score({}) == 50
    assert 50 < MomentumScorer.quick_score({"totalAmount": 500, "amount": 100}) <= 85
