import math
from memeradar.models.token import Token, SentimentSnapshot
from memeradar.analyzer.parameters import ParameterExtractor
from memeradar.analyzer.risk_flags import js_round


class SentimentAnalyzer:
    @staticmethod
    def volume_trend(token: Token) -> str:
        """Compares the last hour, scaled to a day, against the actual 24h volume."""
        if token.volume_h24 <= 0:
            return "Stable"
        ratio = (token.volume_h1 * 24) / token.volume_h24
        if ratio > 1.5:
            return "Increasing"
        if ratio < 0.5:
            return "Decreasing"
        return "Stable"

    @staticmethod
    def whale_activity(buy_sell_ratio: float) -> str:
        if buy_sell_ratio > 2:
            return "Accumulation"
        if buy_sell_ratio < 0.5:
            return "Distribution"
        return "Neutral"

    @staticmethod
    def hype_level(token: Token) -> str:
        total = token.total_txns
        if total > 1000 and token.volume_h24 > 100_000:
            return "High"
        if total < 100 or token.volume_h24 < 10_000:
            return "Low"
        return "Medium"

    @staticmethod
    def volatility(token: Token) -> str:
        # Shorter windows are scaled up to a 24h-equivalent move.
        max_change = max(
            abs(token.price_change_h24),
            abs(token.price_change_h6) * 4,
            abs(token.price_change_h1) * 24,
        )
        if max_change > 50:
            return "High"
        if max_change < 10:
            return "Low"
        return "Medium"

    @staticmethod
    def trend_direction(token: Token) -> str:
        if token.price_change_h24 > 10 and token.price_change_h6 > 0:
            return "Bullish"
        if token.price_change_h24 < -10 and token.price_change_h6 < 0:
            return "Bearish"
        return "Neutral"

    @staticmethod
    def hype_score(token: Token) -> int:
        volume = max(0.0, token.volume_h24)
        txns = max(0, token.total_txns)
        score = math.log10(volume + 1) * 10 + math.log10(txns + 1) * 15
        return min(100, js_round(score))

    @staticmethod
    def analyze(token: Token) -> SentimentSnapshot:
        ratio = ParameterExtractor.get_buy_sell_ratio(token)
        return SentimentSnapshot(
            volume_trend=SentimentAnalyzer.volume_trend(token),
            whale_activity=SentimentAnalyzer.whale_activity(ratio),
            hype_level=SentimentAnalyzer.hype_level(token),
            volatility=SentimentAnalyzer.volatility(token),
            trend_direction=SentimentAnalyzer.trend_direction(token),
            buy_sell_ratio=round(ratio, 2),
            transaction_count=token.total_txns,
            hype_score=SentimentAnalyzer.hype_score(token),
        )
