"""
Keyword Research Node
"""

from services.research import research_keyword
from workflow.state import GenerationState


async def research_keyword_node(state: GenerationState) -> dict:
    """
    Node for keyword research; skipped when research text already exists.

    Args:
        state: Pipeline state

    Returns:
        Dict with the updated request
    """
    request = state["request"]

    if request.research.strip():
        return {"request": request}

    research = await research_keyword(
        request.main_keyword,
        system_prompt=state["settings"].system_prompts.keyword_research or None,
    )

    return {"request": request.model_copy(update={"research": research})}
