"""
Wizard REST API Routes

Drives a generation request through the wizard steps and runs the
generation pipeline at the end.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field

from config import REQUIRE_SESSION_FOR_WIZARD
from errors import WizardValidationError
from models import AdminSettings, GenerationRequest, Viewer, WizardStep
from routes.deps import get_admin_settings, get_viewer
from services.access import Capability, authorize
from services.research import research_keyword
from workflow.graph import run_generation_pipeline
from workflow.wizard import GenerationWizard, get_wizard_store

logger = logging.getLogger(__name__)

router = APIRouter(tags=["wizard"])


# Request/Response Models

class AdvanceRequest(BaseModel):
    """Request model for moving to the next step."""
    step: WizardStep = Field(..., description="Step to enter")
    updates: dict = Field(default_factory=dict, description="Partial request (camelCase keys)")
    research: bool = Field(default=False, description="Research the keyword when entering 'business'")


class GenerateRequest(BaseModel):
    """Request model for generating content at the final step."""
    model: Optional[str] = None


# Helper Functions

def format_wizard_response(wizard_id: str, wizard: GenerationWizard) -> dict:
    """
    Format wizard state for API response.

    Args:
        wizard_id: Wizard id
        wizard: Wizard instance

    Returns:
        Dict with the id and the camelCase request
    """
    return {
        "wizardId": wizard_id,
        "state": wizard.request.model_dump(mode="json", by_alias=True)
    }


# API Endpoints

@router.post("/wizard", status_code=201)
async def create_wizard_endpoint(viewer: Viewer = Depends(get_viewer)):
    """
    Start a new wizard at the website step.
    """
    wizard_id, wizard = get_wizard_store().create(
        require_session=REQUIRE_SESSION_FOR_WIZARD,
        owner_id=viewer.user_id
    )
    return format_wizard_response(wizard_id, wizard)


@router.get("/wizard/{wizard_id}")
async def get_wizard_endpoint(wizard_id: str, viewer: Viewer = Depends(get_viewer)):
    """
    Get the current wizard state.
    """
    return format_wizard_response(wizard_id, get_wizard_store().get(wizard_id, viewer.user_id))


@router.patch("/wizard/{wizard_id}")
async def update_wizard_endpoint(
    wizard_id: str,
    updates: dict,
    viewer: Viewer = Depends(get_viewer)
):
    """
    Edit fields of the current step without changing step.
    """
    wizard = get_wizard_store().get(wizard_id, viewer.user_id)
    wizard.update(updates, session_active=viewer.has_session)
    return format_wizard_response(wizard_id, wizard)


@router.post("/wizard/{wizard_id}/advance")
async def advance_wizard_endpoint(
    wizard_id: str,
    request: AdvanceRequest,
    viewer: Viewer = Depends(get_viewer),
    settings: AdminSettings = Depends(get_admin_settings)
):
    """
    Move to the next step.

    The step is only entered when its required fields are filled in; on a
    validation error the wizard is unchanged. With `research: true` the
    keyword is researched before entering the business step.
    """
    wizard = get_wizard_store().get(wizard_id, viewer.user_id)
    updates = dict(request.updates)

    if request.research and request.step == WizardStep.BUSINESS:
        candidate = wizard.validate(request.step, updates, session_active=viewer.has_session)
        if not candidate.research.strip():
            updates["research"] = await research_keyword(
                candidate.main_keyword,
                system_prompt=settings.system_prompts.keyword_research or None
            )

    wizard.advance(request.step, updates, session_active=viewer.has_session)
    return format_wizard_response(wizard_id, wizard)


@router.post("/wizard/{wizard_id}/back")
async def back_wizard_endpoint(wizard_id: str, viewer: Viewer = Depends(get_viewer)):
    """
    Return to the previous step.
    """
    wizard = get_wizard_store().get(wizard_id, viewer.user_id)
    wizard.back()
    return format_wizard_response(wizard_id, wizard)


@router.post("/wizard/{wizard_id}/generate")
async def generate_wizard_endpoint(
    wizard_id: str,
    request: GenerateRequest,
    viewer: Viewer = Depends(get_viewer),
    settings: AdminSettings = Depends(get_admin_settings)
):
    """
    Run sitemap discovery, keyword research and content generation.

    The wizard is discarded afterwards; the response carries the final state.

    **Requires authentication.** Premium models require a Pro subscription.
    """
    wizard = get_wizard_store().get(wizard_id, viewer.user_id)

    if wizard.step != WizardStep.CONTENT:
        raise WizardValidationError("Rond eerst alle stappen af", field="step")

    model_id = authorize(viewer, settings, Capability.GENERATE_CONTENT, request.model)

    result: GenerationRequest = await run_generation_pipeline(wizard.request, model_id, settings)
    wizard.request = result

    # The request is finished once content is produced
    get_wizard_store().discard(wizard_id, viewer.user_id)
    logger.info(f"Wizard {wizard_id} generated content with {model_id} and was discarded")

    response = format_wizard_response(wizard_id, wizard)
    response["content"] = result.generated_content
    return response


@router.delete("/wizard/{wizard_id}", status_code=204)
async def discard_wizard_endpoint(wizard_id: str, viewer: Viewer = Depends(get_viewer)):
    """
    Abandon a wizard.
    """
    get_wizard_store().discard(wizard_id, viewer.user_id)
