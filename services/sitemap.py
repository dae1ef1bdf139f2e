"""
Sitemap Service

Locates a website's sitemap and extracts the page URLs it lists. When a
keyword is given and the sitemap is large, a model narrows the list down to
the most relevant pages.
"""

import logging
import re
from contextlib import asynccontextmanager
from typing import AsyncIterator, List, Optional

import httpx

from config import SITEMAP_LOCATIONS, MAX_SELECTED_URLS
from errors import UpstreamError
from services.llm import complete
from workflow.prompts.ranking import URL_RANKING_SYSTEM_PROMPT, build_url_ranking_prompt

logger = logging.getLogger(__name__)

LOC_PATTERN = re.compile(r"<loc>(.*?)</loc>", re.DOTALL)
ROBOTS_SITEMAP_PREFIX = "sitemap:"


@asynccontextmanager
async def _http_client(client: Optional[httpx.AsyncClient]) -> AsyncIterator[httpx.AsyncClient]:
    """Yield the caller's client, or a short-lived one owned by this call."""
    if client is not None:
        yield client
        return

    async with httpx.AsyncClient(follow_redirects=True) as owned:
        yield owned


def find_sitemap_in_robots(robots_txt: str) -> Optional[str]:
    """
    Find the first ``Sitemap:`` directive in a robots.txt body.

    Args:
        robots_txt: Body of robots.txt

    Returns:
        Sitemap URL or None if there is no directive
    """
    for line in robots_txt.splitlines():
        stripped = line.strip()
        if stripped.lower().startswith(ROBOTS_SITEMAP_PREFIX):
            value = stripped[len(ROBOTS_SITEMAP_PREFIX):].strip()
            if value:
                return value
    return None


def looks_like_sitemap(body: str) -> bool:
    """True when the body is an XML document with <sitemap> or <url> entries."""
    return "<?xml" in body and ("<sitemap>" in body or "<url>" in body)


def parse_loc_entries(xml_text: str) -> List[str]:
    """
    Extract every <loc> value in document order.

    Nested sitemap indexes are not expanded. Duplicates and empty entries
    are kept, so N <loc> entries give N URLs.

    Args:
        xml_text: Sitemap document

    Returns:
        List of URLs
    """
    return [match.strip() for match in LOC_PATTERN.findall(xml_text)]


async def locate_sitemap(base_url: str, client: Optional[httpx.AsyncClient] = None) -> Optional[str]:
    """
    Probe the well-known sitemap locations of a website.

    Candidates are tried in the order of SITEMAP_LOCATIONS and the first hit
    wins. Failed requests skip the candidate; this function never raises.

    Args:
        base_url: Website URL
        client: Optional HTTP client (a temporary one is created otherwise)

    Returns:
        Sitemap URL, or None when no sitemap is available
    """
    base = base_url.strip().rstrip("/")

    try:
        async with _http_client(client) as http:
            for location in SITEMAP_LOCATIONS:
                candidate = f"{base}{location}"
                try:
                    response = await http.get(candidate)
                except httpx.HTTPError as e:
                    logger.warning(f"Sitemap probe failed for {candidate}: {e}")
                    continue

                if not response.is_success:
                    continue

                body = response.text

                if location == "/robots.txt":
                    sitemap_url = find_sitemap_in_robots(body)
                    if sitemap_url:
                        logger.info(f"Sitemap for {base} found in robots.txt: {sitemap_url}")
                        return sitemap_url

                if looks_like_sitemap(body):
                    logger.info(f"Sitemap for {base} found at {candidate}")
                    return candidate
    except Exception as e:
        logger.error(f"Error finding sitemap for {base}: {e}")
        return None

    logger.info(f"No sitemap found for {base}")
    return None


async def rank_urls(keyword: str, urls: List[str], model_id: Optional[str]) -> List[str]:
    """
    Ask a model for the URLs most relevant to the keyword.

    Falls back to the first MAX_SELECTED_URLS URLs in document order when no
    model is configured or the call fails in any way.

    Args:
        keyword: Main keyword
        urls: All candidate URLs
        model_id: Model used for ranking (the default free model)

    Returns:
        At most MAX_SELECTED_URLS URLs
    """
    fallback = urls[:MAX_SELECTED_URLS]

    if not model_id:
        logger.warning("No default model configured for URL ranking, using first URLs")
        return fallback

    try:
        answer = await complete(
            URL_RANKING_SYSTEM_PROMPT,
            build_url_ranking_prompt(keyword, urls),
            model_id,
            temperature=None,
        )
    except Exception as e:
        logger.warning(f"URL ranking failed, using first {MAX_SELECTED_URLS} URLs: {e}")
        return fallback

    candidates = set(urls)
    selected = [line.strip() for line in answer.splitlines() if line.strip() and line.strip() in candidates]

    if not selected:
        logger.warning("URL ranking returned no known URLs, using first URLs")
        return fallback

    return selected[:MAX_SELECTED_URLS]


async def extract_sitemap_urls(
    sitemap_url: str,
    keyword: Optional[str] = None,
    ranking_model: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> List[str]:
    """
    Fetch a sitemap and return the URLs it lists.

    Args:
        sitemap_url: URL of the sitemap document
        keyword: Optional keyword; with more than MAX_SELECTED_URLS URLs the
            list is ranked down to the most relevant ones
        ranking_model: Model used for ranking
        client: Optional HTTP client

    Returns:
        URLs in document order (or ranked order after selection)

    Raises:
        UpstreamError: If the sitemap cannot be fetched
    """
    async with _http_client(client) as http:
        try:
            response = await http.get(sitemap_url)
        except httpx.HTTPError as e:
            logger.error(f"Error fetching sitemap {sitemap_url}: {e}")
            raise UpstreamError("Kon de sitemap niet ophalen") from e

    if not response.is_success:
        logger.error(f"Sitemap {sitemap_url} returned HTTP {response.status_code}")
        raise UpstreamError("Kon de sitemap niet ophalen")

    urls = parse_loc_entries(response.text)
    logger.info(f"Extracted {len(urls)} URLs from {sitemap_url}")

    if keyword and len(urls) > MAX_SELECTED_URLS:
        return await rank_urls(keyword, urls, ranking_model)

    return urls
