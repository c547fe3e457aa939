from dataclasses import dataclass, field
from typing import Optional, List, Dict, Any

@dataclass
class Token:
    """
    Represents a token pair from DexScreener, normalised so that every
    numeric field is a number (missing values become 0).
    """
    chain_id: str
    pair_address: str
    base_token_address: str
    base_token_name: str
    base_token_symbol: str
    price_usd: float
    liquidity_usd: float
    market_cap: float  # marketCap, falling back to fdv
    fdv: float
    volume_h1: float
    volume_h6: float
    volume_h24: float
    price_change_h1: float
    price_change_h6: float
    price_change_h24: float
    txns_h24_buys: int
    txns_h24_sells: int
    pair_created_at: Optional[int] = None # Timestamp in ms, None when unknown
    dex_id: str = ""
    quote_token_address: str = ""
    quote_token_symbol: str = ""
    url: str = ""
    icon_url: Optional[str] = None
    websites: List[Dict[str, str]] = field(default_factory=list)
    socials: List[Dict[str, str]] = field(default_factory=list)

    # Raw data for extra flexibility
    raw_data: Dict[str, Any] = field(default_factory=dict, repr=False)

    @property
    def total_txns(self) -> int:
        return self.txns_h24_buys + self.txns_h24_sells


@dataclass
class ValidationResult:
    valid: bool
    error: Optional[str] = None
    type: Optional[str] = None  # "address" or "ticker"


@dataclass
class RiskCategory:
    level: str  # "LOW", "MEDIUM", "HIGH"
    score: int


@dataclass
class RiskAssessment:
    rug_pull: RiskCategory
    liquidity: RiskCategory
    holder_concentration: RiskCategory
    volatility: RiskCategory
    overall: RiskCategory

    @property
    def estimated_top10_percent(self) -> int:
        """Rough top-10 holder share implied by the transaction-count proxy."""
        return {"HIGH": 60, "MEDIUM": 35}.get(self.holder_concentration.level, 20)


@dataclass
class SentimentSnapshot:
    volume_trend: str     # Increasing / Decreasing / Stable
    whale_activity: str   # Accumulation / Distribution / Neutral
    hype_level: str       # Low / Medium / High
    volatility: str       # Low / Medium / High
    trend_direction: str  # Bullish / Bearish / Neutral
    buy_sell_ratio: float
    transaction_count: int
    hype_score: int = 0


@dataclass
class MomentumResult:
    score: int
    label: str  # Strong / Moderate / Weak / Very Weak
    volume_score: float
    tx_score: float
    buy_pressure_score: float
    price_momentum_score: float
    volume_surge_pct: int = 0
    buy_pressure: str = "Neutral"


@dataclass
class PriceRange:
    low: float
    high: float


@dataclass
class Scenario:
    name: str
    price_range: PriceRange
    market_cap_range: PriceRange
    description: str = ""
    conditions: List[str] = field(default_factory=list)


@dataclass
class Predictions:
    bullish: Scenario
    neutral: Scenario
    bearish: Scenario
    disclaimer: str = "Speculative scenarios for entertainment only. Not financial advice."


@dataclass
class Verdict:
    strength: str  # Strong / Moderate / Weak
    suitable_for: List[str]
    summary: str
    risk_score: int
    risk_level: str


@dataclass
class CoinRecord:
    """A coin previously created by a deployer wallet."""
    mint: str
    name: Optional[str] = None
    market_cap: Optional[float] = None  # highest market cap seen across its pairs
    burnt: bool = False
    completed: bool = False


@dataclass
class DevSignals:
    """
    Whatever the chain indexer could tell us about a token and its deployer.
    None means the source was unavailable, not that the answer is "no".
    """
    deployer_wallet: Optional[str] = None
    mint_authority_enabled: Optional[bool] = None
    freeze_authority_enabled: Optional[bool] = None
    top10_holder_percent: Optional[float] = None
    deployer_balance_sol: Optional[float] = None
    deployer_first_tx_ms: Optional[int] = None
    coin_history: Optional[List[CoinRecord]] = None


@dataclass
class DevTrustResult:
    trust_score: Optional[int]
    risk_level: str  # "LOW", "MEDIUM", "DANGER" or "UNKNOWN"
    badge: str
    badge_class: str  # "positive", "warning", "negative"
    message: str
    status: str = "analyzed"  # "analyzed", "partial", "unknown"
    risk_flags: List[str] = field(default_factory=list)
    deployer_wallet: str = "Unknown"
    wallet_age: Optional[str] = None
    mint_authority_enabled: Optional[bool] = None
    freeze_authority_enabled: Optional[bool] = None
    top10_holder_percent: Optional[float] = None
    has_social_links: Optional[bool] = None
    social_links: Dict[str, str] = field(default_factory=dict)
    other_tokens: Optional[int] = None
    rug_count: Optional[int] = None
    success_count: Optional[int] = None
    success_rate: Optional[str] = None
    avg_peak_market_cap: Optional[float] = None
    solscan_link: Optional[str] = None
    token_link: Optional[str] = None


@dataclass
class WalletTrustResult:
    address: str
    trust_score: Optional[int]
    risk_level: str  # "LOW", "MEDIUM", "DANGER" or "UNKNOWN"
    flags: List[str]
    status: str = "analyzed"  # "analyzed", "not_found" or "unknown"
    message: Optional[str] = None
    is_whale: bool = False
    is_burner: bool = False
    is_active: bool = False
    net_worth_usd: float = 0.0
    sol_balance: float = 0.0
    token_count: int = 0
    top_tokens: List[Dict[str, Any]] = field(default_factory=list)
    transaction_count: int = 0
    wallet_age: Optional[Dict[str, Any]] = None


@dataclass
class AnalysisResult:
    """
    Result of the token analysis process.
    """
    token: Token
    risk: RiskAssessment
    sentiment: SentimentSnapshot
    momentum: MomentumResult
    predictions: Predictions
    verdict: Verdict
    aggregated: Optional[Dict[str, Any]] = None


@dataclass
class LookupResult:
    status: str  # "ok", "not_found", "not_memecoin", "error"
    message: Optional[str] = None
    result: Optional[AnalysisResult] = None
