"""
Prompts Module

Contains prompt templates for research, URL ranking, tone analysis and
content generation.
"""

from workflow.prompts.content import (
    ContentPromptSlots,
    DEFAULT_CONTENT_SYSTEM_PROMPT,
    build_content_prompt
)
from workflow.prompts.ranking import URL_RANKING_SYSTEM_PROMPT, build_url_ranking_prompt
from workflow.prompts.research import DEFAULT_RESEARCH_SYSTEM_PROMPT, build_research_user_prompt
from workflow.prompts.tone import DEFAULT_TONE_SYSTEM_PROMPT, build_tone_analysis_prompt

__all__ = [
    "ContentPromptSlots",
    "DEFAULT_CONTENT_SYSTEM_PROMPT",
    "build_content_prompt",
    "URL_RANKING_SYSTEM_PROMPT",
    "build_url_ranking_prompt",
    "DEFAULT_RESEARCH_SYSTEM_PROMPT",
    "build_research_user_prompt",
    "DEFAULT_TONE_SYSTEM_PROMPT",
    "build_tone_analysis_prompt",
]
