"""
Tone Analyzer Node

Describes the tone of voice of a sample text so the user can reuse it in
the tone step.
"""

from typing import Optional

from errors import WizardValidationError
from services.llm import complete
from workflow.prompts.tone import DEFAULT_TONE_SYSTEM_PROMPT, build_tone_analysis_prompt


async def analyze_tone(content: str, model_id: str, system_prompt: Optional[str] = None) -> str:
    """
    Analyze the tone of voice of a text.

    Args:
        content: Sample text written in the desired style
        model_id: Model to call
        system_prompt: Admin override of the system prompt (empty = default)

    Returns:
        Tone-of-voice description
    """
    if not (content or "").strip():
        raise WizardValidationError("Voer eerst een tekst in om te analyseren", field="content")

    return await complete(
        system_prompt or DEFAULT_TONE_SYSTEM_PROMPT,
        build_tone_analysis_prompt(content),
        model_id,
        error_message="Er is een fout opgetreden bij het analyseren van de tone of voice",
    )
