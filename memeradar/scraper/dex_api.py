import aiohttp
import logging
from typing import List, Optional, Dict, Any, Iterable
from memeradar.config import Config
from memeradar.analyzer.parameters import ParameterExtractor
from memeradar.scraper.anti_block import AntiBlock

logger = logging.getLogger(__name__)


class DexAPIError(Exception):
    """Raised when DexScreener stays unreachable after all retries."""


class DexAPI:
    """
    Thin DexScreener client. Methods return [] when the API has nothing and raise DexAPIError
    when it cannot be reached; an empty result is a valid answer (very new tokens are often unindexed).
    """

    def __init__(self, base_url: Optional[str] = None):
        self.base_url = base_url or Config.DEX_SCREENER_BASE_URL
        self.anti_block = AntiBlock()

    async def search(self, query: str) -> List[Dict[str, Any]]:
        """Free-text search by ticker, name or address."""
        data = await self._make_request(f"{self.base_url}{Config.DEX_SCREENER_SEARCH}", params={"q": query})
        return self._pairs(data)

    async def get_pairs_by_token_address(self, token_addresses: Iterable[str]) -> List[Dict[str, Any]]:
        """
        Fetches pairs for one or more token addresses.
        The endpoint takes up to 30 comma-separated addresses per request.
        """
        if isinstance(token_addresses, str):
            token_addresses = [token_addresses]
        addresses = [a for a in token_addresses if a]

        pairs = []
        step = Config.DEX_SCREENER_MAX_ADDRESSES
        for i in range(0, len(addresses), step):
            chunk = ",".join(addresses[i:i + step])
            data = await self._make_request(f"{self.base_url}{Config.DEX_SCREENER_TOKENS}/{chunk}")
            pairs.extend(self._pairs(data))
        return pairs

    async def fetch_latest_profiles(self) -> List[Dict[str, Any]]:
        data = await self._make_request(f"{self.base_url}{Config.DEX_SCREENER_PROFILES}")
        return data if isinstance(data, list) else []

    async def fetch_top_boosts(self) -> List[Dict[str, Any]]:
        data = await self._make_request(f"{self.base_url}{Config.DEX_SCREENER_BOOSTS}")
        return data if isinstance(data, list) else []

    @staticmethod
    def _pairs(data: Any) -> List[Dict[str, Any]]:
        # /latest/dex/* wraps pairs in {"pairs": [...]}
        if isinstance(data, list):
            return data
        if isinstance(data, dict):
            return data.get("pairs") or []
        return []

    async def _make_request(self, url: str, params: Optional[Dict[str, str]] = None) -> Optional[Any]:
        """
        Internal method to handle requests with retries and anti-block.
        """
        headers = self.anti_block.get_headers()

        for attempt in range(Config.MAX_RETRIES):
            final = attempt == Config.MAX_RETRIES - 1
            try:
                async with aiohttp.ClientSession() as session:
                    async with session.get(url, headers=headers, params=params,
                                           timeout=Config.REQUEST_TIMEOUT) as response:
                        if response.status == 200:
                            return await response.json()
                        elif response.status == 404:
                            return None
                        elif response.status == 429:
                            logger.warning(f"Rate limited on {url}. Retrying...")
                            retry_after = ParameterExtractor.safe_float(response.headers.get("Retry-After"))
                            if not final:
                                await self.anti_block.backoff(attempt + 1, retry_after or None)
                        else:
                            logger.error(f"Failed to fetch {url}: Status {response.status}")
                            if not final:
                                await self.anti_block.backoff(attempt)

            except Exception as e:
                logger.error(f"Error fetching {url}: {e}")
                if not final:
                    await self.anti_block.backoff(attempt)

        raise DexAPIError(f"Giving up on {url} after {Config.MAX_RETRIES} attempts")
