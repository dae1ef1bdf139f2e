"""
LangGraph Definition

Defines the generation pipeline: sitemap discovery, internal link
selection, keyword research and content generation, run strictly in order.
"""

from langgraph.graph import StateGraph, START, END

from models import AdminSettings, GenerationRequest
from workflow.nodes.generator import generate_content_node
from workflow.nodes.researcher import research_keyword_node
from workflow.nodes.sitemap import locate_sitemap_node, extract_urls_node
from workflow.state import GenerationState


def create_generation_pipeline():
    """
    Create the content generation pipeline.

    Returns:
        Compiled LangGraph graph over GenerationState
    """
    graph_builder = StateGraph(GenerationState)
    graph_builder.add_node("locate_sitemap", locate_sitemap_node)
    graph_builder.add_node("extract_urls", extract_urls_node)
    graph_builder.add_node("research_keyword", research_keyword_node)
    graph_builder.add_node("generate_content", generate_content_node)

    graph_builder.add_edge(START, "locate_sitemap")
    graph_builder.add_edge("locate_sitemap", "extract_urls")
    graph_builder.add_edge("extract_urls", "research_keyword")
    graph_builder.add_edge("research_keyword", "generate_content")
    graph_builder.add_edge("generate_content", END)

    return graph_builder.compile()


async def run_generation_pipeline(
    request: GenerationRequest,
    model_id: str,
    settings: AdminSettings
) -> GenerationRequest:
    """
    Run the pipeline for a wizard request.

    Args:
        request: Request at the content step
        model_id: Model resolved for generation
        settings: Admin settings (ranking model, system prompts)

    Returns:
        Request with selected URLs, research and generated content filled in
    """
    pipeline = create_generation_pipeline()
    result = await pipeline.ainvoke({
        "request": request,
        "model_id": model_id,
        "settings": settings,
        "sitemap_url": None,
    })
    return result["request"]
