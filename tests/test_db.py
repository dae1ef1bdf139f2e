"""
Tests for the Supabase and Clerk helpers, using mocked clients.
"""

from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from db import (
    get_profile,
    get_subscription_level,
    get_user_email,
    get_user_id_from_auth_header,
    load_admin_settings,
    save_admin_settings,
)
from models import AdminSettings
from tests.conftest import FREE_MODEL


def supabase_returning(data):
    supabase = MagicMock()
    supabase.table.return_value.select.return_value.eq.return_value.execute.return_value.data = data
    return supabase


class TestAdminSettingsRow:

    @pytest.mark.asyncio
    async def test_missing_row(self):
        settings = await load_admin_settings(supabase_returning([]))
        assert settings == AdminSettings()

    @pytest.mark.asyncio
    async def test_legacy_row(self):
        supabase = supabase_returning([{"settings": {"models": [], "defaultModel": FREE_MODEL}}])

        settings = await load_admin_settings(supabase)

        assert settings.default_free_model == FREE_MODEL
        supabase.table.assert_called_with("admin_settings")

    @pytest.mark.asyncio
    async def test_save_upserts_camel_case(self, admin_settings):
        supabase = MagicMock()

        await save_admin_settings(supabase, admin_settings)

        row = supabase.table.return_value.upsert.call_args.args[0]
        assert row["id"] == 1
        assert row["settings"]["defaultPremiumModel"] == admin_settings.default_premium_model


class TestSubscriptionLevel:

    @pytest.mark.asyncio
    async def test_anonymous_is_free(self):
        supabase = MagicMock()
        assert await get_subscription_level(supabase, None) == "free"
        supabase.table.assert_not_called()

    @pytest.mark.asyncio
    async def test_pro(self):
        supabase = supabase_returning([{"subscription_level": "pro"}])
        assert await get_subscription_level(supabase, "user_1") == "pro"

    @pytest.mark.asyncio
    async def test_no_customer_row(self):
        assert await get_subscription_level(supabase_returning([]), "user_1") == "free"

    @pytest.mark.asyncio
    async def test_lookup_error_degrades_to_free(self):
        supabase = MagicMock()
        supabase.table.side_effect = RuntimeError("connection reset")
        assert await get_subscription_level(supabase, "user_1") == "free"


class TestProfile:

    @pytest.mark.asyncio
    async def test_missing_profile_stub(self):
        profile = await get_profile(supabase_returning([]), "user_1")
        assert profile == {"id": "user_1", "username": ""}


class TestClerkHelpers:

    def test_auth_header_without_bearer(self):
        assert get_user_id_from_auth_header(None) is None
        assert get_user_id_from_auth_header("Token abc") is None

    def test_auth_header_verified(self):
        with patch("db.verify_clerk_token", return_value="user_1") as mock_verify:
            assert get_user_id_from_auth_header("Bearer abc") == "user_1"

        mock_verify.assert_called_once_with("abc")

    def test_primary_email(self):
        user = SimpleNamespace(
            primary_email_address_id="idn_2",
            email_addresses=[
                SimpleNamespace(id="idn_1", email_address="oud@voorbeeld.nl"),
                SimpleNamespace(id="idn_2", email_address="nieuw@voorbeeld.nl"),
            ],
        )
        clerk = MagicMock()
        clerk.users.get.return_value = user

        with patch("db.get_clerk_client", return_value=clerk):
            assert get_user_email("user_1") == "nieuw@voorbeeld.nl"
