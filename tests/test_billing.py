"""
Tests for the Stripe billing service.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock, patch

import pytest
import stripe

from errors import NotFoundError, UpstreamError, WizardValidationError
from services.billing import create_checkout_session, create_portal_session, get_or_create_customer


@pytest.fixture(autouse=True)
def stripe_key():
    with patch("services.billing.STRIPE_SECRET_KEY", "sk_test_123"):
        yield


class TestCustomer:

    @pytest.mark.asyncio
    async def test_existing_customer_reused(self):
        with patch(
            "services.billing.get_stripe_customer_id",
            new_callable=AsyncMock,
            return_value="cus_existing",
        ), patch("stripe.Customer.create") as mock_create:
            customer_id = await get_or_create_customer(MagicMock(), "user_1", "a@voorbeeld.nl")

        assert customer_id == "cus_existing"
        mock_create.assert_not_called()

    @pytest.mark.asyncio
    async def test_new_customer_saved(self):
        with patch(
            "services.billing.get_stripe_customer_id",
            new_callable=AsyncMock,
            return_value=None,
        ), patch(
            "services.billing.save_stripe_customer_id",
            new_callable=AsyncMock,
        ) as mock_save, patch(
            "stripe.Customer.create",
            return_value=SimpleNamespace(id="cus_new"),
        ) as mock_create:
            supabase = MagicMock()
            customer_id = await get_or_create_customer(supabase, "user_1", "a@voorbeeld.nl")

        assert customer_id == "cus_new"
        assert mock_create.call_args.kwargs["metadata"] == {"user_id": "user_1"}
        mock_save.assert_awaited_once_with(supabase, "user_1", "cus_new")


class TestCheckout:

    @pytest.mark.asyncio
    async def test_checkout_session(self):
        with patch(
            "services.billing.get_or_create_customer",
            new_callable=AsyncMock,
            return_value="cus_1",
        ), patch(
            "stripe.checkout.Session.create",
            return_value=SimpleNamespace(id="cs_1", url="https://checkout.stripe.com/cs_1"),
        ) as mock_create:
            url = await create_checkout_session(
                MagicMock(), "user_1", "a@voorbeeld.nl", "price_pro", "https://app.voorbeeld.nl"
            )

        assert url == "https://checkout.stripe.com/cs_1"
        kwargs = mock_create.call_args.kwargs
        assert kwargs["mode"] == "subscription"
        assert kwargs["customer"] == "cus_1"
        assert kwargs["line_items"] == [{"price": "price_pro", "quantity": 1}]
        assert kwargs["success_url"] == "https://app.voorbeeld.nl/dashboard?session_id={CHECKOUT_SESSION_ID}"
        assert kwargs["cancel_url"] == "https://app.voorbeeld.nl/pricing"
        assert kwargs["subscription_data"]["trial_period_days"] == 7

    @pytest.mark.asyncio
    async def test_price_required(self):
        with pytest.raises(WizardValidationError):
            await create_checkout_session(MagicMock(), "user_1", None, "", "https://app.voorbeeld.nl")

    @pytest.mark.asyncio
    async def test_stripe_error(self):
        with patch(
            "services.billing.get_or_create_customer",
            new_callable=AsyncMock,
            return_value="cus_1",
        ), patch(
            "stripe.checkout.Session.create",
            side_effect=stripe.StripeError("card declined"),
        ):
            with pytest.raises(UpstreamError):
                await create_checkout_session(
                    MagicMock(), "user_1", None, "price_pro", "https://app.voorbeeld.nl"
                )


class TestPortal:

    @pytest.mark.asyncio
    async def test_portal_session(self):
        with patch(
            "services.billing.get_stripe_customer_id",
            new_callable=AsyncMock,
            return_value="cus_1",
        ), patch(
            "stripe.billing_portal.Session.create",
            return_value=SimpleNamespace(url="https://billing.stripe.com/p/1"),
        ) as mock_create:
            url = await create_portal_session(MagicMock(), "user_1", "https://app.voorbeeld.nl")

        assert url == "https://billing.stripe.com/p/1"
        assert mock_create.call_args.kwargs["return_url"] == "https://app.voorbeeld.nl/settings"

    @pytest.mark.asyncio
    async def test_no_customer(self):
        with patch(
            "services.billing.get_stripe_customer_id",
            new_callable=AsyncMock,
            return_value=None,
        ):
            with pytest.raises(NotFoundError):
                await create_portal_session(MagicMock(), "user_1", "https://app.voorbeeld.nl")
