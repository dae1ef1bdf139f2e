"""
Research Service

Handles keyword research using the OpenPerplex search/answer API.
"""

import logging
from typing import Optional

import httpx

from config import (
    OPENPERPLEX_API_KEY,
    OPENPERPLEX_BASE_URL,
    RESEARCH_LOCATION,
    RESEARCH_RECENCY_FILTER,
    RESEARCH_TEMPERATURE,
    RESEARCH_TOP_P,
)
from errors import UpstreamError, WizardValidationError
from workflow.prompts.research import DEFAULT_RESEARCH_SYSTEM_PROMPT, build_research_user_prompt

logger = logging.getLogger(__name__)

RESEARCH_ERROR_MESSAGE = "Er is een fout opgetreden tijdens het keyword onderzoek"


def build_research_payload(keyword: str, system_prompt: Optional[str] = None) -> dict:
    """
    Build the custom_search request body.

    Args:
        keyword: Main keyword
        system_prompt: Admin override of the system prompt (empty = default)

    Returns:
        JSON payload for the research endpoint
    """
    return {
        "user_prompt": build_research_user_prompt(keyword),
        "system_prompt": system_prompt or DEFAULT_RESEARCH_SYSTEM_PROMPT,
        "location": RESEARCH_LOCATION,
        "pro_mode": True,
        "search_type": "general",
        "return_sources": False,
        "return_images": False,
        "recency_filter": RESEARCH_RECENCY_FILTER,
        "temperature": RESEARCH_TEMPERATURE,
        "top_p": RESEARCH_TOP_P,
    }


async def research_keyword(
    keyword: str,
    system_prompt: Optional[str] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> str:
    """
    Research a keyword and return a free-text summary.

    Args:
        keyword: Main keyword
        system_prompt: Optional system prompt override
        client: Optional HTTP client (a temporary one is created otherwise)

    Returns:
        The provider's ``llm_response`` text

    Raises:
        WizardValidationError: If the keyword is empty
        UpstreamError: If the provider fails or the answer is missing
    """
    keyword = (keyword or "").strip()
    if not keyword:
        raise WizardValidationError("Keyword is verplicht", field="mainKeyword")

    if not OPENPERPLEX_API_KEY:
        raise ValueError("OPENPERPLEX_API_KEY environment variable is not set")

    url = f"{OPENPERPLEX_BASE_URL.rstrip('/')}/custom_search"
    headers = {
        "X-API-Key": OPENPERPLEX_API_KEY,
        "Content-Type": "application/json",
    }
    payload = build_research_payload(keyword, system_prompt)

    logger.info(f"Researching keyword '{keyword}'")

    try:
        if client is not None:
            response = await client.post(url, json=payload, headers=headers)
        else:
            async with httpx.AsyncClient() as owned:
                response = await owned.post(url, json=payload, headers=headers)
    except httpx.HTTPError as e:
        logger.error(f"OpenPerplex request failed: {e}")
        raise UpstreamError(RESEARCH_ERROR_MESSAGE) from e

    if not response.is_success:
        logger.error(f"OpenPerplex API error ({response.status_code}): {response.text}")
        raise UpstreamError(RESEARCH_ERROR_MESSAGE)

    try:
        data = response.json()
    except ValueError as e:
        logger.error(f"OpenPerplex returned invalid JSON: {e}")
        raise UpstreamError(RESEARCH_ERROR_MESSAGE) from e

    answer = data.get("llm_response") if isinstance(data, dict) else None
    if not answer:
        logger.error("Invalid response format from OpenPerplex API: missing llm_response")
        raise UpstreamError(RESEARCH_ERROR_MESSAGE)

    return answer
