"""
Sitemap Nodes

Discover the website's sitemap and pick internal link candidates from it.
Both nodes are skipped when the request already carries selected URLs.
"""

import logging

from errors import UpstreamError
from services.sitemap import locate_sitemap, extract_sitemap_urls
from workflow.state import GenerationState

logger = logging.getLogger(__name__)


async def locate_sitemap_node(state: GenerationState) -> dict:
    """
    Node for sitemap discovery.

    Args:
        state: Pipeline state

    Returns:
        Dict with the sitemap URL (None when not found or not needed)
    """
    request = state["request"]

    if request.selected_urls or not request.website_url:
        return {"sitemap_url": None}

    return {"sitemap_url": await locate_sitemap(request.website_url)}


async def extract_urls_node(state: GenerationState) -> dict:
    """
    Node for internal link selection.

    A missing sitemap or a failed fetch leaves the request without URLs.

    Args:
        state: Pipeline state

    Returns:
        Dict with the updated request, unchanged when nothing was found
    """
    request = state["request"]
    sitemap_url = state.get("sitemap_url")

    if request.selected_urls or not sitemap_url:
        return {"request": request}

    try:
        urls = await extract_sitemap_urls(
            sitemap_url,
            keyword=request.main_keyword or None,
            ranking_model=state["settings"].default_free_model or None,
        )
    except UpstreamError as e:
        logger.warning(f"Continuing without internal links: {e.message}")
        return {"request": request}

    return {"request": request.model_copy(update={"selected_urls": urls})}
