import aiohttp
import logging
from typing import Optional, Dict, Any, List, Tuple
from memeradar.config import Config
from memeradar.analyzer.parameters import ParameterExtractor

logger = logging.getLogger("Helius")


def extract_authorities(asset: Dict[str, Any]) -> Tuple[Optional[bool], Optional[bool]]:
    """(mint authority enabled, freeze authority enabled); None when the asset has no token info."""
    info = asset.get("token_info")
    if not isinstance(info, dict):
        return None, None
    return bool(info.get("mint_authority")), bool(info.get("freeze_authority"))


def extract_creator(asset: Dict[str, Any]) -> Optional[str]:
    """Deployer address: first creator, then update authority, then mint authority."""
    for creator in asset.get("creators") or []:
        if creator.get("address"):
            return creator["address"]
    for authority in asset.get("authorities") or []:
        if authority.get("address"):
            return authority["address"]
    info = asset.get("token_info") or {}
    return info.get("mint_authority") or None


def top10_percent(accounts: List[Dict[str, Any]], supply: float) -> Optional[float]:
    if not accounts or supply <= 0:
        return None
    held = sum(ParameterExtractor.safe_float(a.get("uiAmount")) for a in accounts[:10])
    return round(held / supply * 100, 2)


class HeliusClient:
    """
    Solana chain indexer (JSON-RPC + DAS). Any failure is logged and returned
    as None/[] so callers can score with whatever data came back.
    """

    def __init__(self, api_key: Optional[str] = None, rpc_url: Optional[str] = None):
        self.api_key = api_key if api_key is not None else Config.HELIUS_API_KEY
        self.rpc_url = rpc_url or Config.HELIUS_RPC_URL
        self._id = 0

    @property
    def enabled(self) -> bool:
        return bool(self.api_key)

    async def rpc(self, method: str, params: Any) -> Optional[Any]:
        if not self.enabled:
            return None

        self._id += 1
        payload = {"jsonrpc": "2.0", "id": f"memeradar-{self._id}", "method": method, "params": params}

        try:
            async with aiohttp.ClientSession() as session:
                async with session.post(self.rpc_url, params={"api-key": self.api_key},
                                        json=payload, timeout=Config.REQUEST_TIMEOUT) as resp:
                    if resp.status != 200:
                        logger.warning(f"Helius {method} error: {resp.status}")
                        return None
                    data = await resp.json()
                    if data.get("error"):
                        logger.warning(f"Helius {method} node error: {data['error']}")
                        return None
                    return data.get("result")
        except Exception as e:
            logger.error(f"Helius {method} request failed: {e}")
            return None

    async def get_asset(self, mint: str) -> Optional[Dict[str, Any]]:
        result = await self.rpc("getAsset", {"id": mint})
        return result if isinstance(result, dict) else None

    async def get_largest_accounts(self, mint: str) -> List[Dict[str, Any]]:
        result = await self.rpc("getTokenLargestAccounts", [mint, {"commitment": "finalized"}])
        if not isinstance(result, dict):
            return []
        return (result.get("value") or [])[:20]

    async def get_token_supply(self, mint: str) -> Optional[float]:
        result = await self.rpc("getTokenSupply", [mint])
        if not isinstance(result, dict):
            return None
        return ParameterExtractor.safe_float((result.get("value") or {}).get("uiAmount")) or None

    async def get_balance(self, wallet: str) -> Optional[float]:
        """SOL balance, converted from lamports."""
        result = await self.rpc("getBalance", [wallet, {"commitment": "processed"}])
        if not isinstance(result, dict) or result.get("value") is None:
            return None
        return ParameterExtractor.safe_float(result["value"]) / 1e9

    async def get_oldest_signature_ms(self, wallet: str) -> Optional[int]:
        """Block time of the oldest of the last 1000 signatures, in ms."""
        result = await self.rpc("getSignaturesForAddress", [wallet, {"limit": 1000}])
        if not isinstance(result, list) or not result:
            return None
        block_time = result[-1].get("blockTime")
        return int(block_time * 1000) if block_time else None

    async def search_creator_assets(self, creator: str) -> Optional[List[Dict[str, Any]]]:
        result = await self.rpc("searchAssets", {
            "creatorAddress": creator,
            "page": 1,
            "limit": 1000,
            "sortBy": {"sortBy": "created", "sortDirection": "desc"},
        })
        if not isinstance(result, dict):
            return None
        return result.get("items") or []
