import asyncio
import logging
from dataclasses import asdict, replace
from typing import Any, Dict, List, Optional
from memeradar.config import Config
from memeradar.models.token import Token, CoinRecord, DevSignals, DevTrustResult
from memeradar.analyzer.parameters import ParameterExtractor
from memeradar.analyzer.helius import HeliusClient, extract_authorities, extract_creator, top10_percent
from memeradar.analyzer.dev_trust import DevTrustScorer, default_analysis
from memeradar.scraper.dex_api import DexAPI

logger = logging.getLogger(__name__)


def _ok(value: Any) -> Any:
    """gather(return_exceptions=True) slot -> value, or None if it raised."""
    if isinstance(value, BaseException):
        logger.warning(f"Dev data source failed: {value}")
        return None
    return value


class DevChecker:
    """
    Collects deployer signals from Helius and DexScreener and hands them to DevTrustScorer.
    Never raises; every failure path ends in a default or partial result.
    """

    def __init__(self, helius: Optional[HeliusClient] = None, dex_api: Optional[DexAPI] = None, cache=None):
        self.helius = helius or HeliusClient()
        self.dex_api = dex_api or DexAPI()
        self.cache = cache

    async def analyze_dev_wallet(self, token_address: str, chain_id: str,
                                 pair: Optional[Token] = None) -> DevTrustResult:
        if chain_id != "solana":
            return default_analysis("Only Solana Supported", token_address)

        if self.cache is not None:
            cached = self.cache.get(token_address)
            if cached is not None:
                logger.debug(f"Dev cache hit for {token_address}")
                return DevTrustResult(**cached)

        try:
            result = await self._analyze(token_address, pair)
        except Exception as e:
            logger.error(f"Dev analysis failed for {token_address}: {e}")
            return default_analysis("API Error", token_address)

        if self.cache is not None and result.status == "analyzed":
            self.cache.set(token_address, asdict(result))
        return result

    async def _analyze(self, token_address: str, pair: Optional[Token]) -> DevTrustResult:
        asset, accounts, supply = await asyncio.gather(
            self.helius.get_asset(token_address),
            self.helius.get_largest_accounts(token_address),
            self.helius.get_token_supply(token_address),
            return_exceptions=True,
        )
        asset, accounts, supply = _ok(asset), _ok(accounts), _ok(supply)

        if not asset:
            if pair is None:
                return default_analysis("Check dev manually", token_address)
            # Market data alone still says something about the token
            result = DevTrustScorer.score(DevSignals(), pair, token_address=token_address)
            return replace(result, status="partial",
                           message=f"Trust Score: {result.trust_score}/100 based on market data only")

        mint_enabled, freeze_enabled = extract_authorities(asset)
        signals = DevSignals(
            deployer_wallet=extract_creator(asset),
            mint_authority_enabled=mint_enabled,
            freeze_authority_enabled=freeze_enabled,
            top10_holder_percent=top10_percent(accounts or [], supply or 0),
        )

        if signals.deployer_wallet:
            balance, first_tx, created = await asyncio.gather(
                self.helius.get_balance(signals.deployer_wallet),
                self.helius.get_oldest_signature_ms(signals.deployer_wallet),
                self.helius.search_creator_assets(signals.deployer_wallet),
                return_exceptions=True,
            )
            signals.deployer_balance_sol = _ok(balance)
            signals.deployer_first_tx_ms = _ok(first_tx)
            created = _ok(created)
            if created is not None:
                signals.coin_history = await self.build_coin_history(created, token_address)

        return DevTrustScorer.score(signals, pair, token_address=token_address)

    async def build_coin_history(self, assets: List[Dict[str, Any]], current_mint: str) -> List[CoinRecord]:
        """Past coins of the deployer, with the highest market cap DexScreener reports for each."""
        records = []
        for asset in assets:
            mint = asset.get("id")
            if not mint or mint == current_mint:
                continue
            metadata = (asset.get("content") or {}).get("metadata") or {}
            records.append(CoinRecord(
                mint=mint,
                name=metadata.get("name"),
                burnt=bool(asset.get("burnt")),
                completed=bool(asset.get("complete")),
            ))
            if len(records) >= Config.DEV_HISTORY_LOOKUP_LIMIT:
                break

        if not records:
            return records

        try:
            pairs = await self.dex_api.get_pairs_by_token_address([r.mint for r in records])
        except Exception as e:
            logger.warning(f"Market caps for past coins unavailable: {e}")
            return records

        peaks: Dict[str, float] = {}
        for pair in pairs:
            mint = (pair.get("baseToken") or {}).get("address")
            mcap = ParameterExtractor.safe_float(pair.get("marketCap")) or ParameterExtractor.safe_float(pair.get("fdv"))
            if mint and mcap > peaks.get(mint, -1):
                peaks[mint] = mcap

        for record in records:
            record.market_cap = peaks.get(record.mint)
        return records
