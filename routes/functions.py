"""
Generation Function Routes

One endpoint per pipeline step, callable on their own by the front end:
research-keyword, fetch-sitemap, analyze-tone and generate-content.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from errors import WizardValidationError
from models import AdminSettings, CamelModel, GenerationRequest, Viewer
from routes.deps import get_admin_settings, get_viewer
from services.access import Capability, authorize
from services.research import research_keyword
from services.sitemap import locate_sitemap, extract_sitemap_urls
from utils import parse_website_url
from workflow.nodes.generator import generate_content
from workflow.nodes.tone_analyzer import analyze_tone

logger = logging.getLogger(__name__)

router = APIRouter(tags=["functions"])


# Request/Response Models

class ResearchKeywordRequest(BaseModel):
    """Request model for keyword research."""
    keyword: str = Field(default="", description="Dutch keyword to research")


class ResearchKeywordResponse(BaseModel):
    llm_response: str


class FetchSitemapRequest(BaseModel):
    """Request model for sitemap discovery and extraction."""
    url: str = Field(..., description="Website URL (find) or sitemap URL (extract)")
    type: str = Field(..., description="'find' or 'extract'")
    keyword: Optional[str] = None


class AnalyzeToneRequest(BaseModel):
    """Request model for tone analysis."""
    content: str = Field(default="", description="Sample text to analyze")
    model: Optional[str] = None


class AnalyzeToneResponse(BaseModel):
    tone: str


class GenerateContentRequest(CamelModel):
    """Request model for content generation."""
    state: GenerationRequest
    model: Optional[str] = None


class GenerateContentResponse(BaseModel):
    content: str


# API Endpoints

@router.post("/research-keyword", response_model=ResearchKeywordResponse)
async def research_keyword_endpoint(
    request: ResearchKeywordRequest,
    settings: AdminSettings = Depends(get_admin_settings)
):
    """
    Research a keyword with the search/answer provider.
    """
    answer = await research_keyword(
        request.keyword,
        system_prompt=settings.system_prompts.keyword_research or None
    )
    return ResearchKeywordResponse(llm_response=answer)


@router.post("/fetch-sitemap")
async def fetch_sitemap_endpoint(
    request: FetchSitemapRequest,
    settings: AdminSettings = Depends(get_admin_settings)
):
    """
    Find a website's sitemap or extract the URLs of a sitemap.

    - **find**: returns `{sitemapUrl}` (null when the site has none)
    - **extract**: returns `{urls}`; with a keyword, large sitemaps are
      narrowed down to the most relevant pages
    """
    if request.type == "find":
        base_url = parse_website_url(request.url)
        if not base_url:
            raise WizardValidationError("Voer een geldige website URL in", field="url")
        return {"sitemapUrl": await locate_sitemap(base_url)}

    if request.type == "extract":
        urls = await extract_sitemap_urls(
            request.url,
            keyword=request.keyword or None,
            ranking_model=settings.default_free_model or None
        )
        return {"urls": urls}

    raise WizardValidationError("Invalid type specified", field="type")


@router.post("/analyze-tone", response_model=AnalyzeToneResponse)
async def analyze_tone_endpoint(
    request: AnalyzeToneRequest,
    viewer: Viewer = Depends(get_viewer),
    settings: AdminSettings = Depends(get_admin_settings)
):
    """
    Describe the tone of voice of a sample text.

    **Requires authentication and a Pro subscription.**
    """
    model_id = authorize(viewer, settings, Capability.ANALYZE_TONE, request.model)
    tone = await analyze_tone(
        request.content,
        model_id,
        system_prompt=settings.system_prompts.tone_analysis or None
    )
    return AnalyzeToneResponse(tone=tone)


@router.post("/generate-content", response_model=GenerateContentResponse)
async def generate_content_endpoint(
    request: GenerateContentRequest,
    viewer: Viewer = Depends(get_viewer),
    settings: AdminSettings = Depends(get_admin_settings)
):
    """
    Generate the article for a completed wizard state.

    **Requires authentication.** Premium models require a Pro subscription.
    """
    model_id = authorize(viewer, settings, Capability.GENERATE_CONTENT, request.model)
    content = await generate_content(
        request.state,
        model_id,
        system_prompt=settings.system_prompts.content_generation or None
    )
    return GenerateContentResponse(content=content)
