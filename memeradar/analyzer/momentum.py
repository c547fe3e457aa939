import math
from typing import Any, Dict
from memeradar.models.token import Token, MomentumResult
from memeradar.analyzer.parameters import ParameterExtractor
from memeradar.analyzer.risk_flags import js_round


class MomentumScorer:
    """
    24h trading-activity score (0-100). Measures intensity, not safety,
    so it does not look at the risk assessment at all.
    """
    BASELINE = 25

    @staticmethod
    def label(score: int) -> str:
        if score >= 70:
            return "Strong"
        if score >= 50:
            return "Moderate"
        if score >= 30:
            return "Weak"
        return "Very Weak"

    @staticmethod
    def volume_surge_pct(token: Token) -> int:
        """Average 6h slice of the day against the latest 6h window."""
        if not token.volume_h24 or not token.volume_h6:
            return 0
        return js_round(((token.volume_h24 / 4) / token.volume_h6 - 1) * 100)

    @staticmethod
    def buy_pressure(token: Token) -> str:
        ratio = ParameterExtractor.get_buy_sell_ratio(token)
        if ratio > 1.5:
            return "Strong Buy"
        if ratio < 0.7:
            return "Sell Heavy"
        return "Neutral"

    @staticmethod
    def score(token: Token) -> MomentumResult:
        volume = max(0.0, token.volume_h24)
        txns = max(0, token.total_txns)
        buys = max(0, token.txns_h24_buys)
        sells = max(0, token.txns_h24_sells)
        change = token.price_change_h24

        volume_score = min(30.0, math.log10(volume + 1) * 5)
        tx_score = min(25.0, math.log10(txns + 1) * 8)
        # Flat default when nothing has been sold yet
        buy_pressure_score = min(25.0, (buys / sells) * 10) if sells > 0 else 15.0
        # Upside is capped at +20, downside penalty at -10
        if change > 0:
            price_score = min(20.0, change * 0.5)
        else:
            price_score = max(-10.0, change * 0.3)

        total = volume_score + tx_score + buy_pressure_score + price_score + MomentumScorer.BASELINE
        total = js_round(max(0.0, min(100.0, total)))

        return MomentumResult(
            score=total,
            label=MomentumScorer.label(total),
            volume_score=volume_score,
            tx_score=tx_score,
            buy_pressure_score=buy_pressure_score,
            price_momentum_score=price_score,
            volume_surge_pct=MomentumScorer.volume_surge_pct(token),
            buy_pressure=MomentumScorer.buy_pressure(token),
        )

    @staticmethod
    def quick_score(boost: Dict[str, Any]) -> int:
        """Sidebar score for a trending/boosted token, from boost amounts only."""
        score = 50.0
        total_amount = ParameterExtractor.safe_float(boost.get("totalAmount"))
        amount = ParameterExtractor.safe_float(boost.get("amount"))
        if total_amount > 0:
            score += min(20.0, math.log10(total_amount + 1) * 5)
        if amount > 0:
            score += min(15.0, math.log10(amount + 1) * 3)
        return max(0, min(100, js_round(score)))
