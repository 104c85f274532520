"""
Image Routes
============

Proxy for the image picker's photo search.
"""

from fastapi import APIRouter, HTTPException, Query

router = APIRouter(prefix="/api/images", tags=["images"])

# Injected by server
image_search_client = None


@router.get("/search")
async def search_images(query: str = Query(default=""), page: int = Query(default=1, ge=1)):
    """Search photos for use in image elements."""
    if not image_search_client:
        raise HTTPException(status_code=500, detail="Image search client not initialized")

    response = await image_search_client.search(query, page=page)
    if not response.success:
        raise HTTPException(status_code=response.status_code or 500, detail=response.error)

    return {
        "total": response.total,
        "total_pages": response.total_pages,
        "results": [r.model_dump() for r in response.results],
    }
