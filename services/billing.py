"""
Billing Service

Creates Stripe Checkout and Billing Portal sessions. Subscription lifecycle
(webhooks, tier updates) stays with Stripe and the hosted database.
"""

import asyncio
import logging
from typing import Optional

import stripe
from supabase import Client

from config import STRIPE_SECRET_KEY, TRIAL_PERIOD_DAYS
from db import get_stripe_customer_id, save_stripe_customer_id
from errors import NotFoundError, UpstreamError, WizardValidationError

logger = logging.getLogger(__name__)


def _require_stripe_key() -> str:
    if not STRIPE_SECRET_KEY:
        raise ValueError("STRIPE_SECRET_KEY environment variable is not set")
    return STRIPE_SECRET_KEY


async def get_or_create_customer(
    supabase: Client,
    user_id: str,
    email: Optional[str]
) -> str:
    """
    Return the user's Stripe customer id, creating the customer on first use.

    Args:
        supabase: Supabase client instance
        user_id: Clerk user id
        email: Email address for a new customer

    Returns:
        Stripe customer id
    """
    customer_id = await get_stripe_customer_id(supabase, user_id)
    if customer_id:
        return customer_id

    try:
        customer = await asyncio.to_thread(
            stripe.Customer.create,
            email=email,
            metadata={"user_id": user_id},
            api_key=_require_stripe_key(),
        )
    except stripe.StripeError as e:
        logger.error(f"Error creating Stripe customer for {user_id}: {e}")
        raise UpstreamError("Er is een fout opgetreden bij het aanmaken van de klant") from e

    await save_stripe_customer_id(supabase, user_id, customer.id)
    logger.info(f"Created Stripe customer {customer.id} for user {user_id}")
    return customer.id


async def create_checkout_session(
    supabase: Client,
    user_id: str,
    email: Optional[str],
    price_id: str,
    origin: str
) -> str:
    """
    Create a subscription Checkout Session with a trial period.

    Args:
        supabase: Supabase client instance
        user_id: Clerk user id
        email: Email address used when creating the customer
        price_id: Stripe price id of the plan
        origin: Front-end origin for the redirect URLs

    Returns:
        Checkout redirect URL
    """
    if not price_id:
        raise WizardValidationError("Price ID is verplicht", field="priceId")

    customer_id = await get_or_create_customer(supabase, user_id, email)

    try:
        session = await asyncio.to_thread(
            stripe.checkout.Session.create,
            customer=customer_id,
            line_items=[{"price": price_id, "quantity": 1}],
            mode="subscription",
            success_url=f"{origin}/dashboard?session_id={{CHECKOUT_SESSION_ID}}",
            cancel_url=f"{origin}/pricing",
            subscription_data={
                "trial_period_days": TRIAL_PERIOD_DAYS,
                "metadata": {"user_id": user_id},
            },
            api_key=_require_stripe_key(),
        )
    except stripe.StripeError as e:
        logger.error(f"Error creating checkout session for {user_id}: {e}")
        raise UpstreamError("Er is een fout opgetreden bij het starten van de betaling") from e

    logger.info(f"Checkout session {session.id} created for customer {customer_id}")
    return session.url


async def create_portal_session(supabase: Client, user_id: str, origin: str) -> str:
    """
    Create a Billing Portal session for an existing customer.

    Args:
        supabase: Supabase client instance
        user_id: Clerk user id
        origin: Front-end origin for the return URL

    Returns:
        Billing portal URL

    Raises:
        NotFoundError: If the user never checked out
    """
    customer_id = await get_stripe_customer_id(supabase, user_id)
    if not customer_id:
        logger.warning(f"No Stripe customer found for user {user_id}")
        raise NotFoundError("Geen abonnement gevonden")

    try:
        session = await asyncio.to_thread(
            stripe.billing_portal.Session.create,
            customer=customer_id,
            return_url=f"{origin}/settings",
            api_key=_require_stripe_key(),
        )
    except stripe.StripeError as e:
        logger.error(f"Error creating portal session for {user_id}: {e}")
        raise UpstreamError("Er is een fout opgetreden bij het openen van het klantportaal") from e

    return session.url
