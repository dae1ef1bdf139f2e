"""
Pipeline State

State passed between the nodes of the generation pipeline.
"""

from typing import Optional, TypedDict

from models import AdminSettings, GenerationRequest


class GenerationState(TypedDict):
    """
    Attributes:
        request: Wizard request; nodes return an updated copy
        model_id: Model resolved for the content generation call
        settings: Admin settings loaded for this request
        sitemap_url: Sitemap found for the website (None when absent)
    """

    request: GenerationRequest
    model_id: str
    settings: AdminSettings
    sitemap_url: Optional[str]
