from memeradar.config import Config
from memeradar.models.token import Token, RiskAssessment, SentimentSnapshot, Verdict

STRENGTH_PROFILES = {
    "Strong": (
        ["Mid-term holders", "Memecoin investors"],
        "This token shows relatively healthy metrics with adequate liquidity and trading activity. ",
    ),
    "Moderate": (
        ["Short-term traders", "High-risk memecoin investors"],
        "This token shows mixed signals with moderate risk levels. ",
    ),
    "Weak": (
        ["High-risk speculators only"],
        "This token carries significant risk factors. "
        "Low liquidity and/or concerning metrics suggest extreme caution. ",
    ),
}

TREND_COMMENTARY = {
    "Bullish": "Current momentum appears positive with buying pressure outweighing selling. ",
    "Bearish": "Current momentum shows selling pressure which may indicate profit-taking or declining interest. ",
}

VOLUME_COMMENTARY = {
    "Increasing": "Volume is trending upward, suggesting growing interest.",
    "Decreasing": "Volume is declining, which may impact price stability.",
}


class VerdictGenerator:
    @staticmethod
    def strength(token: Token, risk: RiskAssessment) -> str:
        # Strong is checked first; a high risk score can still make it Weak otherwise.
        score = risk.overall.score
        if score <= 4 and token.liquidity_usd >= Config.LIQUIDITY_MEDIUM:
            return "Strong"
        if score >= 7 or token.liquidity_usd < Config.LIQUIDITY_LOW:
            return "Weak"
        return "Moderate"

    @staticmethod
    def generate(token: Token, risk: RiskAssessment, sentiment: SentimentSnapshot) -> Verdict:
        strength = VerdictGenerator.strength(token, risk)
        suitable_for, summary = STRENGTH_PROFILES[strength]

        summary += TREND_COMMENTARY.get(sentiment.trend_direction, "")
        summary += VOLUME_COMMENTARY.get(sentiment.volume_trend, "")

        return Verdict(
            strength=strength,
            suitable_for=list(suitable_for),
            summary=summary,
            risk_score=risk.overall.score,
            risk_level=risk.overall.level,
        )
