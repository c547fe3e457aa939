import math
import time
from typing import Any, Dict, Optional
from memeradar.models.token import Token

class ParameterExtractor:
    @staticmethod
    def safe_float(val: Any, default: float = 0.0) -> float:
        if isinstance(val, (dict, list, bool, type(None))):
            return default
        try:
            num = float(val)
        except (TypeError, ValueError):
            return default
        # NaN/Infinity never reach a score
        if math.isnan(num) or math.isinf(num):
            return default
        return num

    @staticmethod
    def safe_int(val: Any, default: int = 0) -> int:
        return int(ParameterExtractor.safe_float(val, default))

    @staticmethod
    def _section(data: Dict[str, Any], key: str) -> Dict[str, Any]:
        value = data.get(key)
        return value if isinstance(value, dict) else {}

    @staticmethod
    def normalize_pair(data: Dict[str, Any]) -> Token:
        """
        Converts a raw DexScreener pair dict to a Token.
        Missing numbers become 0; missing h1/h6 volume buckets are derived from h24.
        """
        f = ParameterExtractor.safe_float
        section = ParameterExtractor._section

        base = section(data, "baseToken")
        quote = section(data, "quoteToken")
        volume = section(data, "volume")
        change = section(data, "priceChange")
        txns_h24 = section(section(data, "txns"), "h24")
        info = section(data, "info")

        volume_h24 = f(volume.get("h24"))
        volume_h6 = f(volume["h6"]) if volume.get("h6") is not None else volume_h24 / 4
        volume_h1 = f(volume["h1"]) if volume.get("h1") is not None else volume_h24 / 24

        fdv = f(data.get("fdv"))
        market_cap = f(data.get("marketCap")) or fdv

        created = data.get("pairCreatedAt")
        pair_created_at = ParameterExtractor.safe_int(created) if created else None

        return Token(
            chain_id=data.get("chainId") or "unknown",
            dex_id=data.get("dexId") or "",
            pair_address=data.get("pairAddress") or "",
            base_token_address=base.get("address") or "",
            base_token_name=base.get("name") or "Unknown",
            base_token_symbol=base.get("symbol") or "UNK",
            quote_token_address=quote.get("address") or "",
            quote_token_symbol=quote.get("symbol") or "UNK",

            price_usd=f(data.get("priceUsd")),
            liquidity_usd=f(section(data, "liquidity").get("usd")),
            market_cap=market_cap,
            fdv=fdv,

            pair_created_at=pair_created_at,

            volume_h1=volume_h1,
            volume_h6=volume_h6,
            volume_h24=volume_h24,

            price_change_h1=f(change.get("h1")),
            price_change_h6=f(change.get("h6")),
            price_change_h24=f(change.get("h24")),

            txns_h24_buys=ParameterExtractor.safe_int(txns_h24.get("buys")),
            txns_h24_sells=ParameterExtractor.safe_int(txns_h24.get("sells")),

            url=data.get("url") or "",
            websites=info.get("websites") or [],
            socials=info.get("socials") or [],
            icon_url=info.get("imageUrl") or info.get("icon"),
            raw_data=data,
        )

    @staticmethod
    def get_pair_age_hours(token: Token, now_ms: Optional[float] = None) -> Optional[float]:
        """Pair age in hours, None when the pair has no creation time."""
        if not token.pair_created_at:
            return None
        if now_ms is None:
            now_ms = time.time() * 1000
        return max(0.0, (now_ms - token.pair_created_at) / 3_600_000)

    @staticmethod
    def get_buy_sell_ratio(token: Token) -> float:
        if token.txns_h24_sells == 0:
            return float(token.txns_h24_buys)
        return token.txns_h24_buys / token.txns_h24_sells

    @staticmethod
    def get_liquidity_mcap_ratio(token: Token) -> float:
        return token.liquidity_usd / (token.market_cap or 1)

    @staticmethod
    def get_volume_mcap_ratio(token: Token) -> float:
        return token.volume_h24 / (token.market_cap or 1)
