from typing import Any, Dict, Optional
from memeradar.models.token import Token, AnalysisResult
from memeradar.analyzer.parameters import ParameterExtractor
from memeradar.analyzer.risk_flags import RiskAnalyzer
from memeradar.analyzer.sentiment import SentimentAnalyzer
from memeradar.analyzer.momentum import MomentumScorer
from memeradar.analyzer.predictions import PredictionGenerator
from memeradar.analyzer.verdict import VerdictGenerator

class ScoringEngine:
    def analyze_token(self, token: Token, aggregated: Optional[Dict[str, Any]] = None) -> AnalysisResult:
        """
        Full analysis pipeline: Risk + Sentiment -> Momentum -> Verdict -> Predictions.
        Pure: the same token always yields the same result.
        """
        risk = RiskAnalyzer.analyze(token)
        sentiment = SentimentAnalyzer.analyze(token)

        return AnalysisResult(
            token=token,
            risk=risk,
            sentiment=sentiment,
            momentum=MomentumScorer.score(token),
            predictions=PredictionGenerator.generate(token),
            verdict=VerdictGenerator.generate(token, risk, sentiment),
            aggregated=aggregated,
        )

    def analyze_pair(self, pair: Dict[str, Any], aggregated: Optional[Dict[str, Any]] = None) -> AnalysisResult:
        return self.analyze_token(ParameterExtractor.normalize_pair(pair), aggregated)
