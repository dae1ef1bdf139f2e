"""
Admin Routes

CRUD for the model registry, default models and system prompts. Only users
listed in ADMIN_USER_IDS may call these endpoints.
"""

import logging
from typing import Optional
from fastapi import APIRouter, Depends
from supabase import Client

from db import save_admin_settings
from models import AdminSettings, CamelModel, ModelDescriptor, Viewer
from routes.deps import get_admin_settings, get_supabase, get_viewer
from services.access import require_admin
from services.registry import (
    add_model,
    remove_model,
    set_default_models,
    update_system_prompts
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/admin", tags=["admin"])


# Request Models

class UpdateDefaultsRequest(CamelModel):
    """Request model for choosing the default models."""
    default_free_model: Optional[str] = None
    default_premium_model: Optional[str] = None


class UpdatePromptsRequest(CamelModel):
    """Request model for editing system prompts; omitted prompts are kept."""
    keyword_research: Optional[str] = None
    tone_analysis: Optional[str] = None
    content_generation: Optional[str] = None


async def _save(supabase: Client, settings: AdminSettings, viewer: Viewer) -> dict:
    saved = await save_admin_settings(supabase, settings)
    logger.info(f"Admin settings updated by {viewer.user_id}")
    return saved.model_dump(by_alias=True)


# API Endpoints

@router.get("/settings")
async def get_settings_endpoint(
    viewer: Viewer = Depends(get_viewer),
    settings: AdminSettings = Depends(get_admin_settings)
):
    """
    Get the admin settings.
    """
    require_admin(viewer)
    return settings.model_dump(by_alias=True)


@router.put("/settings")
async def replace_settings_endpoint(
    new_settings: AdminSettings,
    viewer: Viewer = Depends(get_viewer),
    supabase: Client = Depends(get_supabase)
):
    """
    Replace the admin settings as a whole.
    """
    require_admin(viewer)
    return await _save(supabase, new_settings, viewer)


@router.post("/models", status_code=201)
async def add_model_endpoint(
    model: ModelDescriptor,
    viewer: Viewer = Depends(get_viewer),
    supabase: Client = Depends(get_supabase),
    settings: AdminSettings = Depends(get_admin_settings)
):
    """
    Register a model.
    """
    require_admin(viewer)
    return await _save(supabase, add_model(settings, model), viewer)


@router.delete("/models/{model_id:path}")
async def remove_model_endpoint(
    model_id: str,
    viewer: Viewer = Depends(get_viewer),
    supabase: Client = Depends(get_supabase),
    settings: AdminSettings = Depends(get_admin_settings)
):
    """
    Remove a model. Model ids may contain slashes (e.g. openai/gpt-4o).
    """
    require_admin(viewer)
    return await _save(supabase, remove_model(settings, model_id), viewer)


@router.put("/defaults")
async def update_defaults_endpoint(
    request: UpdateDefaultsRequest,
    viewer: Viewer = Depends(get_viewer),
    supabase: Client = Depends(get_supabase),
    settings: AdminSettings = Depends(get_admin_settings)
):
    """
    Choose the default free and/or premium model.
    """
    require_admin(viewer)
    updated = set_default_models(
        settings,
        free_model=request.default_free_model,
        premium_model=request.default_premium_model
    )
    return await _save(supabase, updated, viewer)


@router.put("/prompts")
async def update_prompts_endpoint(
    request: UpdatePromptsRequest,
    viewer: Viewer = Depends(get_viewer),
    supabase: Client = Depends(get_supabase),
    settings: AdminSettings = Depends(get_admin_settings)
):
    """
    Edit the system prompts.
    """
    require_admin(viewer)
    updated = update_system_prompts(settings, **request.model_dump())
    return await _save(supabase, updated, viewer)
