"""
Shared fixtures for the content generator test suite.

Provides sample requests, admin settings, mock HTTP transports and a
FastAPI test client so that all tests run WITHOUT any external services.
"""

from unittest.mock import MagicMock

import httpx
import pytest

from models import (
    AdminSettings,
    BusinessInfo,
    GenerationRequest,
    ModelDescriptor,
    Viewer,
    WizardStep,
)


# ---------------------------------------------------------------------------
# Domain fixtures
# ---------------------------------------------------------------------------

FREE_MODEL = "google/gemini-2.0-flash-exp:free"
PREMIUM_MODEL = "anthropic/claude-3.5-sonnet"


@pytest.fixture
def admin_settings():
    """Registry with one free and one premium model."""
    return AdminSettings(
        models=[
            ModelDescriptor(id=FREE_MODEL, name="Gemini 2.0 Flash", description="Snel", is_free=True),
            ModelDescriptor(id=PREMIUM_MODEL, name="Claude 3.5 Sonnet", description="Krachtig", is_free=False),
        ],
        default_free_model=FREE_MODEL,
        default_premium_model=PREMIUM_MODEL,
    )


@pytest.fixture
def tuinshop_request():
    """Completed wizard request for the garden furniture scenario."""
    return GenerationRequest(
        website_url="https://tuinshop.nl",
        selected_urls=["https://tuinshop.nl/a", "https://tuinshop.nl/b"],
        main_keyword="tuinmeubelen",
        research="Tuinmeubelen worden vooral in het voorjaar gekocht.",
        business_info=BusinessInfo(
            name="TuinShop",
            type="E-commerce",
            country="Netherlands",
            description="Outdoor furniture retailer",
        ),
        content_type="Listicle",
        tone_of_voice="Vriendelijk en informatief",
        current_step=WizardStep.CONTENT,
    )


@pytest.fixture
def anonymous_viewer():
    return Viewer()


@pytest.fixture
def free_viewer():
    return Viewer(user_id="user_free", subscription_level="free")


@pytest.fixture
def pro_viewer():
    return Viewer(user_id="user_pro", subscription_level="pro")


# ---------------------------------------------------------------------------
# HTTP fixtures
# ---------------------------------------------------------------------------

def make_sitemap(urls):
    """Build a urlset sitemap document."""
    entries = "".join(f"<url><loc>{url}</loc></url>" for url in urls)
    return (
        '<?xml version="1.0" encoding="UTF-8"?>'
        '<urlset xmlns="http://www.sitemaps.org/schemas/sitemap/0.9">'
        f"{entries}</urlset>"
    )


@pytest.fixture
def mock_http():
    """
    Factory for an AsyncClient backed by a dict of URL -> (status, body).

    Unknown URLs answer 404. Every requested URL is recorded in
    ``client.requested``.
    """
    def _factory(routes):
        requested = []

        def handler(request: httpx.Request) -> httpx.Response:
            url = str(request.url)
            requested.append(url)
            status, body = routes.get(url, (404, "Not Found"))
            return httpx.Response(status, text=body)

        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        client.requested = requested
        return client

    return _factory


# ---------------------------------------------------------------------------
# API fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def mock_supabase():
    return MagicMock()


@pytest.fixture
def api(admin_settings, mock_supabase):
    """
    FastAPI test client with the Supabase client, caller and admin settings
    replaced through dependency overrides.

    Set ``api.overrides.viewer`` (or ``.settings``) to change the caller for a test.
    """
    from fastapi.testclient import TestClient

    from app import app
    from routes.deps import get_admin_settings, get_supabase, get_viewer
    import workflow.wizard as wizard_module

    class _Api:
        viewer = Viewer()
        settings = admin_settings

    state = _Api()

    app.dependency_overrides[get_supabase] = lambda: mock_supabase
    app.dependency_overrides[get_viewer] = lambda: state.viewer
    app.dependency_overrides[get_admin_settings] = lambda: state.settings
    wizard_module._store_instance = None

    with TestClient(app, raise_server_exceptions=False) as client:
        client.overrides = state
        client.supabase = mock_supabase
        yield client

    app.dependency_overrides.clear()
    wizard_module._store_instance = None
