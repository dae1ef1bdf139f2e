"""
Billing Routes

Checkout and billing portal redirects plus the plan list shown on the
pricing page.
"""

import asyncio
from typing import Optional
from fastapi import APIRouter, Depends, Header, Request
from pydantic import Field
from supabase import Client

from config import STRIPE_BASIC_PRICE_ID, STRIPE_PRO_PRICE_ID, TRIAL_PERIOD_DAYS
from db import get_user_email
from models import CamelModel, Viewer
from routes.deps import get_supabase, get_viewer
from services.access import require_session
from services.billing import create_checkout_session, create_portal_session

router = APIRouter(tags=["billing"])


class CreateCheckoutRequest(CamelModel):
    """Request model for starting a checkout."""
    price_id: str = Field(default="", description="Stripe price id of the plan")


def resolve_origin(request: Request, origin: Optional[str]) -> str:
    """Front-end origin for redirect URLs, falling back to this server."""
    return (origin or str(request.base_url)).rstrip("/")


@router.get("/plans")
async def list_plans_endpoint(viewer: Viewer = Depends(get_viewer)):
    """
    List the subscription plans and mark the caller's current plan.
    """
    return {
        "trialPeriodDays": TRIAL_PERIOD_DAYS,
        "plans": [
            {
                "id": "basic",
                "priceId": STRIPE_BASIC_PRICE_ID,
                "current": viewer.subscription_level == "free",
                "available": not viewer.is_pro,
            },
            {
                "id": "pro",
                "priceId": STRIPE_PRO_PRICE_ID,
                "current": viewer.is_pro,
                "available": not viewer.is_pro,
            },
        ]
    }


@router.post("/create-checkout")
async def create_checkout_endpoint(
    body: CreateCheckoutRequest,
    request: Request,
    viewer: Viewer = Depends(get_viewer),
    supabase: Client = Depends(get_supabase),
    origin: Optional[str] = Header(None)
):
    """
    Start a Stripe Checkout for a plan (with trial period).

    **Requires authentication.**
    """
    require_session(viewer)
    email = await asyncio.to_thread(get_user_email, viewer.user_id)
    url = await create_checkout_session(
        supabase,
        viewer.user_id,
        email,
        body.price_id,
        resolve_origin(request, origin)
    )
    return {"url": url}


@router.post("/create-portal-session")
async def create_portal_session_endpoint(
    request: Request,
    viewer: Viewer = Depends(get_viewer),
    supabase: Client = Depends(get_supabase),
    origin: Optional[str] = Header(None)
):
    """
    Open the Stripe billing portal for the caller.

    **Requires authentication.**
    """
    require_session(viewer)
    url = await create_portal_session(supabase, viewer.user_id, resolve_origin(request, origin))
    return {"url": url}
