"""
LLM Service

Handles chat model initialization against the OpenRouter-compatible API and
a small helper for single-shot completions.
"""

import asyncio
import logging
from langchain_core.messages import HumanMessage, SystemMessage
from langchain_openai import ChatOpenAI

from config import (
    OPENROUTER_API_KEY,
    OPENROUTER_BASE_URL,
    OPENROUTER_REFERER,
    OPENROUTER_TITLE,
    GENERATION_TEMPERATURE,
)
from errors import UpstreamError

logger = logging.getLogger(__name__)


def get_openrouter_model(model_id: str, temperature: float | None = GENERATION_TEMPERATURE):
    """
    Get a chat model routed through OpenRouter.

    Args:
        model_id: Provider-qualified model name (e.g. "openai/gpt-4o-mini")
        temperature: Sampling temperature, or None for the provider default

    Returns:
        ChatOpenAI instance

    Raises:
        ValueError: If OPENROUTER_API_KEY is not set
    """
    if not OPENROUTER_API_KEY:
        raise ValueError("OPENROUTER_API_KEY environment variable is not set")

    return ChatOpenAI(
        model=model_id,
        api_key=OPENROUTER_API_KEY,
        base_url=OPENROUTER_BASE_URL,
        temperature=temperature,
        streaming=False,
        default_headers={
            "HTTP-Referer": OPENROUTER_REFERER,
            "X-Title": OPENROUTER_TITLE,
        },
    )


async def complete(
    system_prompt: str,
    user_prompt: str,
    model_id: str,
    temperature: float | None = GENERATION_TEMPERATURE,
    error_message: str = "Er is een fout opgetreden bij het aanroepen van het AI model",
) -> str:
    """
    Send one system + user chat completion and return the text of the answer.

    Args:
        system_prompt: System message
        user_prompt: User message
        model_id: Model to call
        temperature: Sampling temperature
        error_message: User-facing message raised on failure

    Returns:
        Stripped completion text

    Raises:
        UpstreamError: If the call fails or the completion is empty
    """
    model = get_openrouter_model(model_id, temperature=temperature)
    messages = [
        SystemMessage(content=system_prompt),
        HumanMessage(content=user_prompt),
    ]

    try:
        response = await asyncio.to_thread(model.invoke, messages)
    except Exception as e:
        logger.error(f"OpenRouter error for model {model_id}: {e}")
        raise UpstreamError(error_message) from e

    content = response.content if isinstance(response.content, str) else ""
    if not content.strip():
        logger.error(f"OpenRouter returned an empty completion for model {model_id}")
        raise UpstreamError(error_message)

    return content.strip()
