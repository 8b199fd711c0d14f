import logging
import httpx
from typing import Any, Dict, Optional

logger = logging.getLogger(__name__)

class HTTPClient:
    def __init__(self, client: Optional[httpx.AsyncClient] = None, timeout: float = 15.0):
        self.timeout = timeout
        self.client = client or httpx.AsyncClient(http2=False, follow_redirects=True)

    def _get_headers(self):
        return {
            "User-Agent": "market-dashboard/0.1",
            "Accept": "application/json",
            "Accept-Language": "en-US,en;q=0.5",
        }

    async def fetch_json(self, url: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Fetches a URL once and decodes the JSON body.
        Raises httpx.HTTPError on transport failure or non-2xx status,
        ValueError if the body is not JSON.
        """
        try:
            response = await self.client.get(url, params=params, headers=self._get_headers(), timeout=self.timeout)
            response.raise_for_status()
            logger.info(f"Successfully fetched {url}")
            return response.json()
        except Exception as e:
            logger.error(f"Failed to fetch {url}: {e}")
            raise

    async def close(self):
        await self.client.aclose()
