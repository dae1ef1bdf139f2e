"""
Content Generator Node

Composes the article prompt from the wizard request and calls the selected
model.
"""

import logging
from typing import Optional
from pydantic import ValidationError

from errors import WizardValidationError
from models import GenerationRequest
from services.llm import complete
from workflow.prompts.content import (
    ContentPromptSlots,
    DEFAULT_CONTENT_SYSTEM_PROMPT,
    build_content_prompt
)
from workflow.state import GenerationState

logger = logging.getLogger(__name__)

GENERATION_ERROR_MESSAGE = "Er is een fout opgetreden tijdens het genereren van content"


async def generate_content(
    request: GenerationRequest,
    model_id: str,
    system_prompt: Optional[str] = None
) -> str:
    """
    Generate the article for a completed wizard request.

    Args:
        request: Request with business info, tone, keyword, research and URLs
        model_id: Model to call
        system_prompt: Admin override of the system prompt (empty = default)

    Returns:
        Generated Markdown content

    Raises:
        WizardValidationError: If a required prompt slot is empty
        UpstreamError: If the model call fails
    """
    try:
        slots = ContentPromptSlots.from_request(request)
    except ValidationError as e:
        missing = ", ".join(str(err["loc"][0]) for err in e.errors())
        raise WizardValidationError(f"Vul alle verplichte velden in ({missing})") from e

    prompt = build_content_prompt(slots)
    logger.info(
        f"Generating content for keyword '{slots.keyword}' with {model_id} "
        f"({len(slots.internal_urls)} internal URLs)"
    )

    return await complete(
        system_prompt or DEFAULT_CONTENT_SYSTEM_PROMPT,
        prompt,
        model_id,
        error_message=GENERATION_ERROR_MESSAGE,
    )


async def generate_content_node(state: GenerationState) -> dict:
    """
    Node for content generation.

    Args:
        state: Pipeline state

    Returns:
        Dict with the request carrying the generated content
    """
    request = state["request"]

    content = await generate_content(
        request,
        state["model_id"],
        system_prompt=state["settings"].system_prompts.content_generation or None,
    )

    return {"request": request.model_copy(update={"generated_content": content})}
