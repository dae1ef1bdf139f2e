"""
Route Dependencies

Per-request resolution of the Supabase client, the caller and the admin
settings. The caller's token is verified on every request, so the check
right before a model call is always fresh.
"""

from typing import Optional
from fastapi import Depends, Header
from supabase import Client

from db import (
    get_supabase_client,
    get_user_id_from_auth_header,
    get_subscription_level,
    load_admin_settings
)
from models import AdminSettings, Viewer


def get_supabase() -> Client:
    """Service-role Supabase client for the current request."""
    return get_supabase_client(use_service_role=True)


async def get_viewer(
    authorization: Optional[str] = Header(None),
    supabase: Client = Depends(get_supabase)
) -> Viewer:
    """
    Resolve the caller from the Authorization header.

    Returns:
        Viewer with user_id None for anonymous callers
    """
    user_id = get_user_id_from_auth_header(authorization)
    level = await get_subscription_level(supabase, user_id)
    return Viewer(user_id=user_id, subscription_level=level)


async def get_admin_settings(supabase: Client = Depends(get_supabase)) -> AdminSettings:
    """Admin settings loaded once for the current request."""
    return await load_admin_settings(supabase)
