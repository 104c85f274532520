"""
Image Search Client for StayFrame
==================================

HTTP client for the Unsplash photo search API, used by the editors' image
picker. Results are trimmed to what the picker needs.
"""

import logging
from typing import List, Optional

import httpx
from pydantic import BaseModel

from ..config.settings import Settings

logger = logging.getLogger(__name__)

PER_PAGE = 10
DEFAULT_ALT = "Unsplash image"


class ImageUrls(BaseModel):
    regular: str
    small: str
    thumb: str


class ImageAuthor(BaseModel):
    name: str
    username: str
    link: Optional[str] = None


class ImageResult(BaseModel):
    """A single search hit."""
    id: str
    urls: ImageUrls
    user: ImageAuthor
    link: Optional[str] = None
    width: int
    height: int
    alt: str = DEFAULT_ALT


class ImageSearchResponse(BaseModel):
    """Response from image search."""
    success: bool
    total: int = 0
    total_pages: int = 0
    results: List[ImageResult] = []
    error: Optional[str] = None
    status_code: Optional[int] = None


class ImageSearchClient:
    """
    HTTP client for Unsplash photo search.

    Usage:
        client = ImageSearchClient(access_key="...")
        response = await client.search("sunset over the sea")
        if response.success:
            first = response.results[0].urls.regular
    """

    def __init__(
        self,
        access_key: Optional[str] = None,
        base_url: str = "https://api.unsplash.com",
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize image search client.

        Args:
            access_key: Unsplash access key; searches fail fast without one
            base_url: Unsplash API URL
            timeout: Request timeout in seconds
            transport: Optional httpx transport (used by tests)
        """
        self.access_key = access_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self._transport = transport
        logger.info(f"[ImageSearchClient] Initialized with base URL: {self.base_url}")

    @classmethod
    def from_settings(cls, settings: Settings) -> "ImageSearchClient":
        return cls(
            access_key=settings.unsplash_access_key,
            base_url=settings.unsplash_api_url,
            timeout=settings.image_search_timeout,
        )

    async def search(self, query: str, page: int = 1) -> ImageSearchResponse:
        """
        Search landscape photos.

        Args:
            query: Free-text search query
            page: 1-based result page

        Returns:
            ImageSearchResponse with success status and results
        """
        if not self.access_key:
            logger.error("[ImageSearchClient] Unsplash access key not configured")
            return ImageSearchResponse(success=False, error="Server configuration error", status_code=500)

        if not query.strip():
            return ImageSearchResponse(success=False, error="Search query is required", status_code=400)

        params = {
            "query": query,
            "page": str(max(1, page)),
            "per_page": str(PER_PAGE),
            "orientation": "landscape",
        }
        headers = {
            "Authorization": f"Client-ID {self.access_key}",
            "Accept-Version": "v1",
        }

        try:
            async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
                response = await client.get(f"{self.base_url}/search/photos", params=params, headers=headers)

                if response.status_code != 200:
                    logger.error(
                        f"[ImageSearchClient] Unsplash API error: HTTP {response.status_code} {response.text[:200]}"
                    )
                    return ImageSearchResponse(
                        success=False,
                        error="Failed to fetch images",
                        status_code=response.status_code,
                    )

                data = response.json()
                results = [self._to_result(item) for item in data.get("results", [])]

                logger.info(f"[ImageSearchClient] '{query[:50]}' page {page}: {len(results)} results")
                return ImageSearchResponse(
                    success=True,
                    total=data.get("total", 0),
                    total_pages=data.get("total_pages", 0),
                    results=results,
                )

        except httpx.TimeoutException:
            logger.error("[ImageSearchClient] Timeout calling Unsplash")
            return ImageSearchResponse(success=False, error="Image search timeout - please try again", status_code=504)
        except httpx.RequestError as e:
            logger.error(f"[ImageSearchClient] Network error: {e}")
            return ImageSearchResponse(success=False, error=f"Network error: {str(e)}", status_code=502)
        except (ValueError, KeyError, TypeError) as e:
            logger.error(f"[ImageSearchClient] Malformed response: {e}")
            return ImageSearchResponse(success=False, error="Internal server error", status_code=500)

    @staticmethod
    def _to_result(item: dict) -> ImageResult:
        user = item["user"]
        return ImageResult(
            id=item["id"],
            urls=ImageUrls(
                regular=item["urls"]["regular"],
                small=item["urls"]["small"],
                thumb=item["urls"]["thumb"],
            ),
            user=ImageAuthor(
                name=user["name"],
                username=user["username"],
                link=(user.get("links") or {}).get("html"),
            ),
            link=(item.get("links") or {}).get("html"),
            width=item["width"],
            height=item["height"],
            alt=item.get("alt_description") or item.get("description") or DEFAULT_ALT,
        )
