"""
Database and Authentication Configuration

This module provides Supabase and Clerk client initialization along with
helper functions for the admin settings row, customers, subscriptions and
profiles.
"""

import logging
from typing import Optional
from supabase import create_client, Client
from clerk_backend_api import Clerk

# Import configuration from centralized config module
from config import (
    CLERK_SECRET_KEY,
    SUPABASE_URL,
    SUPABASE_ANON_KEY,
    SUPABASE_SERVICE_ROLE_KEY,
)
from models import AdminSettings

# Set up logger
logger = logging.getLogger(__name__)

ADMIN_SETTINGS_ROW_ID = 1


def get_supabase_client(use_service_role: bool = False) -> Client:
    """
    Get Supabase client instance.

    Args:
        use_service_role: If True, use service role key (bypasses RLS).
                         If False, use anon key (respects RLS).

    Returns:
        Supabase client instance
    """
    if not SUPABASE_URL:
        raise ValueError("SUPABASE_URL environment variable is not set")

    key = SUPABASE_SERVICE_ROLE_KEY if use_service_role else SUPABASE_ANON_KEY
    if not key:
        raise ValueError(
            f"{'SUPABASE_SERVICE_ROLE_KEY' if use_service_role else 'SUPABASE_ANON_KEY'} "
            "environment variable is not set"
        )

    return create_client(SUPABASE_URL, key)


# Clerk Authentication Functions

def get_clerk_client() -> Clerk:
    """
    Get Clerk client instance.

    Returns:
        Clerk client instance
    """
    if not CLERK_SECRET_KEY:
        raise ValueError("CLERK_SECRET_KEY environment variable is not set")

    return Clerk(bearer_auth=CLERK_SECRET_KEY)


def verify_clerk_token(token: str) -> Optional[str]:
    """
    Verify Clerk JWT token and extract user_id.

    Args:
        token: Clerk JWT token from Authorization header

    Returns:
        User ID if token is valid, None otherwise
    """
    try:
        clerk = get_clerk_client()

        # Verify the session token
        session = clerk.sessions.verify_token(token)

        if session and hasattr(session, 'user_id'):
            return session.user_id

        return None
    except Exception as e:
        logger.warning(f"Error verifying Clerk token: {e}")
        return None


def get_user_id_from_auth_header(auth_header: Optional[str]) -> Optional[str]:
    """
    Extract and verify user_id from Authorization header.

    Args:
        auth_header: Authorization header value (e.g., "Bearer <token>")

    Returns:
        User ID if authenticated, None otherwise
    """
    if not auth_header:
        return None

    if not auth_header.startswith('Bearer '):
        return None

    token = auth_header.replace('Bearer ', '', 1)
    return verify_clerk_token(token)


def get_user_email(user_id: str) -> Optional[str]:
    """
    Look up the primary email address of a Clerk user.

    Args:
        user_id: Clerk user id

    Returns:
        Primary email address, or the first one on record, or None
    """
    clerk = get_clerk_client()
    user = clerk.users.get(user_id=user_id)

    addresses = getattr(user, 'email_addresses', None) or []
    primary_id = getattr(user, 'primary_email_address_id', None)

    for address in addresses:
        if address.id == primary_id:
            return address.email_address

    return addresses[0].email_address if addresses else None


# Admin Settings

async def load_admin_settings(supabase: Client) -> AdminSettings:
    """
    Load the singleton admin settings row.

    Args:
        supabase: Supabase client instance

    Returns:
        AdminSettings parsed from the ``settings`` JSON column, or empty
        settings when the row does not exist yet
    """
    response = supabase.table('admin_settings').select('settings').eq(
        'id', ADMIN_SETTINGS_ROW_ID
    ).execute()

    if not response.data:
        logger.info("No admin settings row found, using empty settings")
        return AdminSettings()

    return AdminSettings.model_validate(response.data[0].get('settings') or {})


async def save_admin_settings(supabase: Client, settings: AdminSettings) -> AdminSettings:
    """
    Upsert the singleton admin settings row.

    Args:
        supabase: Supabase client instance
        settings: Settings to persist

    Returns:
        The persisted settings
    """
    supabase.table('admin_settings').upsert({
        'id': ADMIN_SETTINGS_ROW_ID,
        'settings': settings.model_dump(by_alias=True)
    }).execute()

    return settings


# Customers and Subscriptions

async def get_subscription_level(supabase: Client, user_id: Optional[str]) -> str:
    """
    Get the active subscription tier for a user.

    Args:
        supabase: Supabase client instance
        user_id: Clerk user id (None for anonymous callers)

    Returns:
        'pro' or 'free'; lookup failures degrade to 'free'
    """
    if not user_id:
        return 'free'

    try:
        response = supabase.table('customers').select(
            'subscription_level'
        ).eq('id', user_id).execute()
    except Exception as e:
        logger.error(f"Error fetching subscription for {user_id}: {e}")
        return 'free'

    if not response.data:
        return 'free'

    level = response.data[0].get('subscription_level')
    return 'pro' if level == 'pro' else 'free'


async def get_stripe_customer_id(supabase: Client, user_id: str) -> Optional[str]:
    """
    Get the Stripe customer id stored for a user.

    Args:
        supabase: Supabase client instance
        user_id: Clerk user id

    Returns:
        Stripe customer id or None if the user never checked out
    """
    response = supabase.table('customers').select(
        'stripe_customer_id'
    ).eq('id', user_id).execute()

    if not response.data:
        return None

    return response.data[0].get('stripe_customer_id')


async def save_stripe_customer_id(supabase: Client, user_id: str, customer_id: str) -> dict:
    """
    Store the Stripe customer id for a user.

    Args:
        supabase: Supabase client instance
        user_id: Clerk user id
        customer_id: Stripe customer id

    Returns:
        Customer record as dict
    """
    response = supabase.table('customers').insert({
        'id': user_id,
        'stripe_customer_id': customer_id
    }).execute()

    return response.data[0]


# Profiles

async def get_profile(supabase: Client, user_id: str) -> dict:
    """
    Get the profile record for a user.

    Args:
        supabase: Supabase client instance
        user_id: Clerk user id

    Returns:
        Profile record, or a stub with an empty username when none exists
    """
    response = supabase.table('profiles').select('*').eq('id', user_id).execute()

    if response.data:
        return response.data[0]

    return {'id': user_id, 'username': ''}


async def update_profile_username(supabase: Client, user_id: str, username: str) -> dict:
    """
    Update the display name shown in the account avatar.

    Args:
        supabase: Supabase client instance
        user_id: Clerk user id
        username: New display name

    Returns:
        Updated profile record
    """
    response = supabase.table('profiles').upsert({
        'id': user_id,
        'username': username
    }).execute()

    return response.data[0] if response.data else {'id': user_id, 'username': username}
