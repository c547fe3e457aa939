import time
from datetime import datetime
from typing import Any, Dict, Optional
from memeradar.config import Config
from memeradar.models.token import WalletTrustResult
from memeradar.analyzer.dev_trust import risk_level_for
from memeradar.analyzer.formatting import format_number
from memeradar.analyzer.parameters import ParameterExtractor

# Checked in order, first keyword hit wins
TX_TYPE_KEYWORDS = [
    (("swap", "raydium", "jupiter"), "Swap"),
    (("transfer",), "Transfer"),
    (("mint",), "Mint"),
    (("burn",), "Burn"),
    (("stake",), "Stake"),
    (("create", "initialize"), "Create Account"),
]


def parse_timestamp_ms(value: Any) -> Optional[int]:
    """Accepts ISO-8601 strings, epoch seconds or epoch milliseconds."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        try:
            return int(datetime.fromisoformat(value.replace("Z", "+00:00")).timestamp() * 1000)
        except ValueError:
            value = ParameterExtractor.safe_float(value)
    num = ParameterExtractor.safe_float(value)
    if num <= 0:
        return None
    return int(num if num > 1e12 else num * 1000)


def decode_transaction_type(tx: Dict[str, Any]) -> str:
    logs = tx.get("log_messages") or tx.get("logs") or []
    text = " ".join(str(line) for line in logs).lower()
    for keywords, label in TX_TYPE_KEYWORDS:
        if any(k in text for k in keywords):
            return label
    return tx.get("type") or "Unknown"


WALLET_SOURCES = ("portfolio", "tokens", "transactions", "balance")


def unknown_wallet(address: str, message: Optional[str] = None, status: str = "unknown") -> WalletTrustResult:
    """Result used when there is nothing to score: no source answered, or the wallet has no history."""
    return WalletTrustResult(
        address=address,
        trust_score=None,
        risk_level="UNKNOWN",
        flags=[],
        status=status,
        message=message or "Wallet data unavailable. Verify manually on Solscan.",
    )


def is_empty_wallet(data: Dict[str, Any]) -> bool:
    """Every source that answered reports no transactions, tokens, holdings or SOL."""
    f = ParameterExtractor.safe_float
    return (
        f((data.get("transactions") or {}).get("total_count")) == 0
        and f((data.get("tokens") or {}).get("count")) == 0
        and f((data.get("portfolio") or {}).get("total_networth_usd")) == 0
        and f((data.get("balance") or {}).get("solana")) == 0
    )


def wallet_age(oldest_ms: Optional[int], now_ms: Optional[float] = None) -> Optional[Dict[str, Any]]:
    if not oldest_ms:
        return None
    if now_ms is None:
        now_ms = time.time() * 1000
    age_ms = max(0.0, now_ms - oldest_ms)
    return {
        "ms": age_ms,
        "hours": int(age_ms // 3_600_000),
        "days": int(age_ms // 86_400_000),
        "is_burner": age_ms < 86_400_000,
    }


class WalletTrustScorer:
    """
    Trust heuristics for an arbitrary wallet (not a token deployer):
    age, net worth, activity and diversification. Baseline 50.
    """

    @staticmethod
    def score(address: str, data: Dict[str, Any], now_ms: Optional[float] = None) -> WalletTrustResult:
        if all(data.get(source) is None for source in WALLET_SOURCES):
            return unknown_wallet(address)
        if is_empty_wallet(data):
            return unknown_wallet(address, "No on-chain activity found for this wallet.", status="not_found")

        portfolio = data.get("portfolio") or {}
        tokens = data.get("tokens") or {}
        transactions = data.get("transactions") or {}
        balance = data.get("balance") or {}

        trust = Config.WALLET_TRUST_BASELINE
        flags = []
        is_burner = is_whale = is_active = False

        age = wallet_age(transactions.get("oldest_ms"), now_ms)
        if age:
            is_burner = age["is_burner"]
            if is_burner:
                flags.append("🚨 Burner wallet (< 24h old)")
                trust -= 30
            elif age["days"] < 7:
                flags.append("⚠️ New wallet (< 7 days)")
                trust -= 15
            elif age["days"] > 365:
                flags.append("✅ Established wallet (1+ year)")
                trust += 20

        net_worth = ParameterExtractor.safe_float(portfolio.get("total_networth_usd"))
        if net_worth >= Config.WHALE_MIN_VALUE_USD:
            is_whale = True
            flags.append(f"🐋 Whale wallet (${format_number(net_worth)})")
        elif net_worth >= 10_000:
            flags.append(f"💰 Substantial holdings (${format_number(net_worth)})")

        tx_count = ParameterExtractor.safe_int(transactions.get("total_count"))
        if tx_count > 100:
            is_active = True
            flags.append("📊 High activity (100+ transactions)")
            trust += 10
        elif tx_count < 10:
            flags.append("📉 Low activity (< 10 transactions)")
            trust -= 10

        token_count = ParameterExtractor.safe_int(tokens.get("count"))
        if token_count > 20:
            flags.append("🎨 Diversified portfolio")
            trust += 5
        elif token_count == 1:
            flags.append("⚠️ Single token holder")
            trust -= 10

        trust = max(0, min(100, trust))

        return WalletTrustResult(
            address=address,
            trust_score=trust,
            risk_level=risk_level_for(trust),
            flags=flags,
            is_whale=is_whale,
            is_burner=is_burner,
            is_active=is_active,
            net_worth_usd=net_worth,
            sol_balance=ParameterExtractor.safe_float(balance.get("solana")),
            token_count=token_count,
            top_tokens=(tokens.get("tokens") or [])[:5],
            transaction_count=tx_count,
            wallet_age=age,
        )
