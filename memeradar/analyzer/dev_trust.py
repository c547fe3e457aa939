import time
from typing import Dict, List, Optional, Tuple
from memeradar.config import Config
from memeradar.models.token import Token, DevSignals, DevTrustResult, CoinRecord
from memeradar.analyzer.parameters import ParameterExtractor

BADGES = {
    "LOW": ("TRUSTED DEV 🟢", "positive"),
    "MEDIUM": ("AVERAGE 🟡", "warning"),
    "DANGER": ("HIGH RISK 🔴", "negative"),
}

SOCIAL_KEYS = ("twitter", "telegram", "discord")


def risk_level_for(score: int) -> str:
    if score >= Config.DEV_TRUSTED_MIN:
        return "LOW"
    if score >= Config.DEV_AVERAGE_MIN:
        return "MEDIUM"
    return "DANGER"


def default_analysis(message: Optional[str] = None, token_address: Optional[str] = None) -> DevTrustResult:
    """Result used when nothing about the deployer could be determined."""
    return DevTrustResult(
        trust_score=None,
        risk_level="UNKNOWN",
        badge="VERIFY ⚠️",
        badge_class="warning",
        message=message or "Check dev manually",
        status="unknown",
        solscan_link=f"https://solscan.io/token/{token_address}" if token_address else None,
        token_link=f"https://solscan.io/token/{token_address}" if token_address else None,
    )


def format_age(hours: float) -> str:
    if hours < 24:
        return f"{int(hours)} hours"
    days = int(hours // 24)
    if days < 30:
        return f"{days} days"
    return f"{days // 30} months"


def classify_coin(coin: CoinRecord) -> Optional[str]:
    """'rugged', 'successful' or None when there is not enough market data."""
    if coin.burnt:
        return "rugged"
    if coin.completed:
        return "successful"
    if coin.market_cap is None:
        return None
    if coin.market_cap < Config.DEV_RUG_MCAP:
        return "rugged"
    if coin.market_cap >= Config.DEV_SUCCESS_MCAP:
        return "successful"
    return None


def extract_social_links(pair: Token) -> Dict[str, str]:
    links = {}
    for social in pair.socials:
        kind = (social.get("type") or "").lower()
        if kind in SOCIAL_KEYS and social.get("url"):
            links.setdefault(kind, social["url"])
    for site in pair.websites:
        if site.get("url"):
            links.setdefault("website", site["url"])
            break
    return links


class DevTrustScorer:
    """
    Trust score for a token's deployer.

    Starts from a baseline of 40 and adds independent deltas. Every signal
    is optional: sub-scores whose source was unavailable are skipped, so a
    partially reachable indexer still produces a score.
    """

    @staticmethod
    def _authority_deltas(signals: DevSignals) -> Tuple[int, List[str]]:
        delta, flags = 0, []
        if signals.mint_authority_enabled:
            delta -= 50
            flags.append("🚨 Mint authority enabled (dev can print supply)")
        if signals.freeze_authority_enabled:
            delta -= 50
            flags.append("🚨 Freeze authority enabled (dev can freeze wallets)")
        if signals.top10_holder_percent is not None and signals.top10_holder_percent > Config.DEV_TOP10_LIMIT:
            delta -= 30
            flags.append(f"⚠️ Top 10 holders own {signals.top10_holder_percent:.1f}% of supply")
        return delta, flags

    @staticmethod
    def _market_deltas(pair: Token, now_ms: float) -> Tuple[int, List[str]]:
        delta, flags = 0, []

        liq = pair.liquidity_usd
        if liq > 50_000:
            delta += 20
        elif liq >= 10_000:
            delta += 10
        elif liq < 1_000:
            delta -= 20
            flags.append("⚠️ Very low liquidity (< $1K)")

        vol = pair.volume_h24
        if vol > 100_000:
            delta += 20
        elif vol > 10_000:
            delta += 10

        age = ParameterExtractor.get_pair_age_hours(pair, now_ms)
        if age is not None:
            if age > 72:
                delta += 20
            elif age > 24:
                delta += 10
            elif age < 1:
                delta -= 10
                flags.append("⚠️ Pair is less than 1 hour old")

        if pair.socials:
            delta += 20
        else:
            delta -= 10
            flags.append("❌ No social links")

        return delta, flags

    @staticmethod
    def _deployer_deltas(signals: DevSignals, now_ms: float) -> Tuple[int, List[str]]:
        delta, flags = 0, []

        balance = signals.deployer_balance_sol
        if balance is not None:
            if balance > 5:
                delta += 20
            elif balance > 1:
                delta += 10
            elif balance < 0.1:
                delta -= 10
                flags.append("⚠️ Deployer wallet holds dust (< 0.1 SOL)")

        if signals.deployer_first_tx_ms:
            age_hours = max(0.0, (now_ms - signals.deployer_first_tx_ms) / 3_600_000)
            if age_hours < 24:
                delta -= 20
                flags.append("🚨 Burner deployer wallet (< 24h old)")
            elif age_hours < 24 * 7:
                delta -= 10
                flags.append("⚠️ New deployer wallet (< 7 days)")

        return delta, flags

    @staticmethod
    def _history_deltas(history: List[CoinRecord]) -> Tuple[int, List[str], Dict[str, object]]:
        rugged = successful = 0
        caps = []
        for coin in history:
            verdict = classify_coin(coin)
            if verdict == "rugged":
                rugged += 1
            elif verdict == "successful":
                successful += 1
            if coin.market_cap is not None:
                caps.append(coin.market_cap)

        delta = successful * 5 - rugged * 10
        flags = []
        if rugged:
            flags.append(f"🚨 {rugged} previous coin(s) rugged or abandoned")

        judged = rugged + successful
        stats = {
            "other_tokens": len(history),
            "rug_count": rugged,
            "success_count": successful,
            "success_rate": f"{round(successful / judged * 100)}%" if judged else "N/A",
            "avg_peak_market_cap": sum(caps) / len(caps) if caps else None,
        }
        return delta, flags, stats

    @staticmethod
    def score(signals: DevSignals, pair: Optional[Token] = None,
              now_ms: Optional[float] = None, token_address: Optional[str] = None) -> DevTrustResult:
        if now_ms is None:
            now_ms = time.time() * 1000

        total = Config.DEV_TRUST_BASELINE
        flags: List[str] = []

        delta, found = DevTrustScorer._authority_deltas(signals)
        total += delta
        flags += found

        if pair is not None:
            delta, found = DevTrustScorer._market_deltas(pair, now_ms)
            total += delta
            flags += found

        delta, found = DevTrustScorer._deployer_deltas(signals, now_ms)
        total += delta
        flags += found

        stats = {}
        if signals.coin_history is not None:
            delta, found, stats = DevTrustScorer._history_deltas(signals.coin_history)
            total += delta
            flags += found

        final = max(0, min(100, total))
        level = risk_level_for(final)
        badge, badge_class = BADGES[level]

        wallet_age = None
        if signals.deployer_first_tx_ms:
            wallet_age = format_age(max(0.0, (now_ms - signals.deployer_first_tx_ms) / 3_600_000))

        deployer = signals.deployer_wallet
        if deployer:
            solscan_link = f"https://solscan.io/account/{deployer}"
        elif token_address:
            solscan_link = f"https://solscan.io/token/{token_address}"
        else:
            solscan_link = None

        return DevTrustResult(
            trust_score=final,
            risk_level=level,
            badge=badge,
            badge_class=badge_class,
            message=f"Trust Score: {final}/100 based on On-Chain Data",
            risk_flags=flags,
            deployer_wallet=deployer or "Unknown",
            wallet_age=wallet_age,
            mint_authority_enabled=signals.mint_authority_enabled,
            freeze_authority_enabled=signals.freeze_authority_enabled,
            top10_holder_percent=signals.top10_holder_percent,
            has_social_links=bool(pair.socials) if pair is not None else None,
            social_links=extract_social_links(pair) if pair is not None else {},
            other_tokens=stats.get("other_tokens"),
            rug_count=stats.get("rug_count"),
            success_count=stats.get("success_count"),
            success_rate=stats.get("success_rate"),
            avg_peak_market_cap=stats.get("avg_peak_market_cap"),
            solscan_link=solscan_link,
            token_link=f"https://solscan.io/token/{token_address}" if token_address else None,
        )
