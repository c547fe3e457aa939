import asyncio
import random
import logging
from typing import Optional
from memeradar.config import Config

logger = logging.getLogger(__name__)

class AntiBlock:
    def __init__(self):
        # Hardcoded list to avoid fake_useragent fetch failures/limitations
        self.user_agents = [
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36",
            "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36",
            "Mozilla/5.0 (Windows NT 10.0; Win64; x64; rv:127.0) Gecko/20100101 Firefox/127.0",
            "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/126.0.0.0 Safari/537.36",
        ]

    def get_headers(self) -> dict:
        """
        JSON API headers with a rotating User-Agent.
        """
        ua = random.choice(self.user_agents) if Config.USER_AGENT_ROTATION else self.user_agents[0]
        return {
            "Accept": "application/json",
            "Accept-Language": "en-US,en;q=0.5",
            "User-Agent": ua
        }

    def backoff_delay(self, attempt: int, retry_after: Optional[float] = None) -> float:
        if retry_after:
            return retry_after
        return (Config.RETRY_DELAY_EXPONENT ** attempt) + random.uniform(0, 1)

    async def backoff(self, attempt: int, retry_after: Optional[float] = None):
        """
        Exponential backoff sleep; honours a server-provided Retry-After.
        """
        delay = self.backoff_delay(attempt, retry_after)
        logger.warning(f"Backing off for {delay:.2f}s (Attempt {attempt})")
        await asyncio.sleep(delay)
