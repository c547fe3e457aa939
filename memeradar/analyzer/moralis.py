import asyncio
import aiohttp
import logging
from typing import Any, Dict, Optional
from memeradar.config import Config
from memeradar.analyzer.parameters import ParameterExtractor
from memeradar.analyzer.wallet_trust import decode_transaction_type, parse_timestamp_ms

logger = logging.getLogger("Moralis")

class MoralisClient:
    """
    Wallet data from the Moralis Solana gateway.
    Every fetch returns None on failure so a full analysis can use whatever succeeded.
    """
    BASE_URL = Config.MORALIS_SOLANA_URL

    def __init__(self, api_key: Optional[str] = None):
        self.api_key = api_key if api_key is not None else Config.MORALIS_API_KEY
        self.headers = {
            "accept": "application/json",
            "X-API-Key": self.api_key
        }

    async def _get(self, address: str, resource: str) -> Optional[Any]:
        url = f"{self.BASE_URL}/account/mainnet/{address}/{resource}"
        try:
            async with aiohttp.ClientSession() as session:
                async with session.get(url, headers=self.headers, timeout=Config.REQUEST_TIMEOUT) as resp:
                    if resp.status == 200:
                        return await resp.json()
                    logger.warning(f"Moralis {resource} error: {resp.status} for {address}")
        except Exception as e:
            logger.error(f"Moralis {resource} request failed: {e}")
        return None

    async def get_wallet_portfolio(self, address: str) -> Optional[Dict[str, Any]]:
        data = await self._get(address, "portfolio")
        if not isinstance(data, dict):
            return None
        return {
            "total_networth_usd": ParameterExtractor.safe_float(
                data.get("total_networth_usd") or data.get("total_net_worth")),
            "native_balance": data.get("native_balance") or {},
            "tokens": data.get("tokens") or [],
            "nfts": data.get("nfts") or [],
        }

    async def get_wallet_tokens(self, address: str) -> Optional[Dict[str, Any]]:
        data = await self._get(address, "tokens")
        if not isinstance(data, list):
            return None

        tokens = [{
            "mint": t.get("mint") or t.get("address"),
            "symbol": t.get("symbol") or "Unknown",
            "name": t.get("name") or "Unknown Token",
            "amount": ParameterExtractor.safe_float(t.get("amount")),
            "decimals": ParameterExtractor.safe_int(t.get("decimals"), 9) or 9,
            "usd_value": ParameterExtractor.safe_float(t.get("usd_value")),
            "logo": t.get("logo") or t.get("thumbnail"),
        } for t in data]
        tokens.sort(key=lambda t: t["usd_value"], reverse=True)

        return {"count": len(tokens), "tokens": tokens}

    async def get_wallet_transactions(self, address: str) -> Optional[Dict[str, Any]]:
        data = await self._get(address, "transactions")
        if isinstance(data, dict):
            data = data.get("result")
        if not isinstance(data, list):
            return None

        processed = [{
            "signature": tx.get("signature") or tx.get("hash"),
            "block_time": tx.get("block_timestamp") or tx.get("blockTime"),
            "type": decode_transaction_type(tx),
            "status": tx.get("status") or ("failed" if tx.get("err") else "success"),
            "fee": tx.get("fee") or 0,
        } for tx in data[:50]]

        # Newest first, so the last entry is the oldest we can see
        oldest_ms = None
        if data:
            oldest = data[-1]
            oldest_ms = parse_timestamp_ms(oldest.get("block_timestamp") or oldest.get("blockTime"))

        return {"total_count": len(data), "transactions": processed, "oldest_ms": oldest_ms}

    async def get_wallet_balance(self, address: str) -> Optional[Dict[str, Any]]:
        data = await self._get(address, "balance")
        if not isinstance(data, dict):
            return None
        lamports = ParameterExtractor.safe_int(data.get("lamports"))
        return {"lamports": lamports, "solana": lamports / 1e9}

    async def get_full_analysis(self, address: str) -> Dict[str, Any]:
        portfolio, tokens, transactions, balance = await asyncio.gather(
            self.get_wallet_portfolio(address),
            self.get_wallet_tokens(address),
            self.get_wallet_transactions(address),
            self.get_wallet_balance(address),
            return_exceptions=True,
        )

        def settled(value):
            return None if isinstance(value, BaseException) else value

        return {
            "portfolio": settled(portfolio),
            "tokens": settled(tokens),
            "transactions": settled(transactions),
            "balance": settled(balance),
        }
