from memeradar.models.token import Token, PriceRange, Scenario, Predictions
from memeradar.analyzer.parameters import ParameterExtractor

BULLISH_CONDITIONS = [
    "Sustained volume increase",
    "Major exchange listings",
    "Strong community growth",
    "Positive market sentiment",
]

BEARISH_TRIGGERS = [
    "Loss of community interest",
    "Broader market downturn",
    "Liquidity withdrawal",
    "Competition from similar tokens",
]


class PredictionGenerator:
    """
    Speculative 6-month scenarios. There is no statistical model behind
    these numbers; anything that displays them must say so.
    """

    @staticmethod
    def bullish_multiplier(token: Token) -> float:
        """2x baseline plus up to 3x more for heavily traded tokens (2x-5x)."""
        return 2 + min(ParameterExtractor.get_volume_mcap_ratio(token) * 10, 3)

    @staticmethod
    def _scenario(name: str, token: Token, low: float, high: float, **kwargs) -> Scenario:
        return Scenario(
            name=name,
            price_range=PriceRange(token.price_usd * low, token.price_usd * high),
            market_cap_range=PriceRange(token.market_cap * low, token.market_cap * high),
            **kwargs,
        )

    @staticmethod
    def generate(token: Token) -> Predictions:
        multiplier = PredictionGenerator.bullish_multiplier(token)

        return Predictions(
            bullish=PredictionGenerator._scenario(
                "bullish", token, multiplier * 0.5, multiplier,
                description="Momentum continues and attracts new buyers",
                conditions=list(BULLISH_CONDITIONS),
            ),
            neutral=PredictionGenerator._scenario(
                "neutral", token, 0.5, 1.5,
                description="Sideways trading with normal market fluctuations",
            ),
            bearish=PredictionGenerator._scenario(
                "bearish", token, 0.05, 0.3,
                description="Interest fades and liquidity leaves",
                conditions=list(BEARISH_TRIGGERS),
            ),
        )
