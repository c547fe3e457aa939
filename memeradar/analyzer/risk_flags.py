import math
from memeradar.config import Config
from memeradar.models.token import Token, RiskCategory, RiskAssessment


def js_round(value: float) -> int:
    """Half-up rounding, so 2.5 -> 3 and 7.5 -> 8."""
    return int(math.floor(value + 0.5))


class RiskAnalyzer:
    """
    Four independent risk categories plus a weighted overall score.
    All thresholds are strict: exactly $10,000 liquidity is MEDIUM, not HIGH.
    """

    @staticmethod
    def liquidity_risk(token: Token) -> RiskCategory:
        if token.liquidity_usd < Config.LIQUIDITY_LOW:
            return RiskCategory("HIGH", 9)
        if token.liquidity_usd < Config.LIQUIDITY_MEDIUM:
            return RiskCategory("MEDIUM", 6)
        return RiskCategory("LOW", 2)

    @staticmethod
    def rug_pull_risk(liquidity: RiskCategory) -> RiskCategory:
        # Thin pools are the easiest to pull, so this follows the liquidity tier.
        if liquidity.level == "HIGH":
            return RiskCategory("HIGH", 8)
        if liquidity.level == "MEDIUM":
            return RiskCategory("MEDIUM", 5)
        return RiskCategory("LOW", 2)

    @staticmethod
    def volatility_risk(token: Token) -> RiskCategory:
        change = abs(token.price_change_h24)
        if change > Config.VOLATILITY_HIGH:
            return RiskCategory("HIGH", 9)
        if change > Config.VOLATILITY_MEDIUM:
            return RiskCategory("MEDIUM", 6)
        return RiskCategory("LOW", 3)

    @staticmethod
    def holder_concentration_risk(token: Token) -> RiskCategory:
        # No holder data from DexScreener; few trades implies few holders.
        total = token.total_txns
        if total < Config.TXNS_LOW:
            return RiskCategory("HIGH", 8)
        if total < Config.TXNS_MEDIUM:
            return RiskCategory("MEDIUM", 5)
        return RiskCategory("LOW", 3)

    @staticmethod
    def overall_risk(rug_pull: RiskCategory, liquidity: RiskCategory,
                     holder_concentration: RiskCategory, volatility: RiskCategory) -> RiskCategory:
        w = Config.RISK_WEIGHTS
        score = js_round(
            rug_pull.score * w["rug_pull"]
            + liquidity.score * w["liquidity"]
            + holder_concentration.score * w["holder_concentration"]
            + volatility.score * w["volatility"]
        )
        if score >= Config.OVERALL_HIGH:
            return RiskCategory("HIGH", score)
        if score >= Config.OVERALL_MEDIUM:
            return RiskCategory("MEDIUM", score)
        return RiskCategory("LOW", score)

    @staticmethod
    def analyze(token: Token) -> RiskAssessment:
        liquidity = RiskAnalyzer.liquidity_risk(token)
        rug_pull = RiskAnalyzer.rug_pull_risk(liquidity)
        volatility = RiskAnalyzer.volatility_risk(token)
        holders = RiskAnalyzer.holder_concentration_risk(token)

        return RiskAssessment(
            rug_pull=rug_pull,
            liquidity=liquidity,
            holder_concentration=holders,
            volatility=volatility,
            overall=RiskAnalyzer.overall_risk(rug_pull, liquidity, holders, volatility),
        )
