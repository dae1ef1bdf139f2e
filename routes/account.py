"""
Account Routes

Subscription tier, profile settings and the models visible to the caller.
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from supabase import Client

from db import get_profile, update_profile_username
from models import AdminSettings, Viewer
from routes.deps import get_admin_settings, get_supabase, get_viewer
from services.access import is_admin, require_session
from services.registry import models_for_viewer

router = APIRouter(tags=["account"])


class UpdateProfileRequest(BaseModel):
    """Request model for updating the profile."""
    username: str = Field(..., description="Display name used for the avatar")


@router.get("/subscription")
async def get_subscription_endpoint(viewer: Viewer = Depends(get_viewer)):
    """
    Get the caller's subscription tier ('free' for anonymous callers).
    """
    return {"level": viewer.subscription_level, "isAdmin": is_admin(viewer.user_id)}


@router.get("/profile")
async def get_profile_endpoint(
    viewer: Viewer = Depends(get_viewer),
    supabase: Client = Depends(get_supabase)
):
    """
    Get the caller's profile.

    **Requires authentication.**
    """
    require_session(viewer)
    profile = await get_profile(supabase, viewer.user_id)
    return {"id": viewer.user_id, "username": profile.get("username") or ""}


@router.put("/profile")
async def update_profile_endpoint(
    request: UpdateProfileRequest,
    viewer: Viewer = Depends(get_viewer),
    supabase: Client = Depends(get_supabase)
):
    """
    Update the caller's display name.

    **Requires authentication.**
    """
    require_session(viewer)
    profile = await update_profile_username(supabase, viewer.user_id, request.username.strip())
    return {"id": viewer.user_id, "username": profile.get("username") or ""}


@router.get("/models")
async def list_models_endpoint(
    viewer: Viewer = Depends(get_viewer),
    settings: AdminSettings = Depends(get_admin_settings)
):
    """
    List the registered models and whether the caller may use them.
    """
    default_id = settings.default_premium_model if viewer.is_pro else settings.default_free_model
    return {
        "models": models_for_viewer(settings, viewer.is_pro),
        "defaultModel": default_id if settings.find_model(default_id) else None
    }
