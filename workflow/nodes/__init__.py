"""
Workflow Nodes Module

Contains the node implementations of the generation pipeline and the
standalone tone analysis step.
"""

from workflow.nodes.sitemap import locate_sitemap_node, extract_urls_node
from workflow.nodes.researcher import research_keyword_node
from workflow.nodes.generator import generate_content, generate_content_node
from workflow.nodes.tone_analyzer import analyze_tone

__all__ = [
    "locate_sitemap_node",
    "extract_urls_node",
    "research_keyword_node",
    "generate_content",
    "generate_content_node",
    "analyze_tone",
]
