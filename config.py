"""
Configuration Module

Contains all application configuration constants and settings.
"""

import os
from dotenv import load_dotenv

# Load environment variables
load_dotenv()


def _split_env_list(name: str, default: str = "") -> list[str]:
    """Read a comma-separated environment variable as a list of strings."""
    raw = os.environ.get(name, default)
    return [item.strip() for item in raw.split(",") if item.strip()]


# OpenRouter (OpenAI-compatible completion API)
OPENROUTER_API_KEY = os.environ.get("OPENROUTER_API_KEY")
OPENROUTER_BASE_URL = os.environ.get("OPENROUTER_BASE_URL", "https://openrouter.ai/api/v1")
OPENROUTER_REFERER = os.environ.get("OPENROUTER_REFERER", "https://app.vepando.com")
OPENROUTER_TITLE = os.environ.get("OPENROUTER_TITLE", "Vepando Content Generator")

# OpenPerplex (keyword research)
OPENPERPLEX_API_KEY = os.environ.get("OPENPERPLEX_API_KEY")
OPENPERPLEX_BASE_URL = os.environ.get(
    "OPENPERPLEX_BASE_URL",
    "https://44c57909-d9e2-41cb-9244-9cd4a443cb41.app.bhs.ai.cloud.ovh.net"
)

# Clerk Authentication
CLERK_SECRET_KEY = os.environ.get("CLERK_SECRET_KEY")
CLERK_PUBLISHABLE_KEY = os.environ.get("CLERK_PUBLISHABLE_KEY")

# Supabase Database
SUPABASE_URL = os.environ.get("SUPABASE_URL")
SUPABASE_ANON_KEY = os.environ.get("SUPABASE_ANON_KEY")
SUPABASE_SERVICE_ROLE_KEY = os.environ.get("SUPABASE_SERVICE_ROLE_KEY")

# Stripe Billing
STRIPE_SECRET_KEY = os.environ.get("STRIPE_SECRET_KEY")
STRIPE_BASIC_PRICE_ID = os.environ.get("STRIPE_BASIC_PRICE_ID", "price_1QcutIIBuO6WDytxAQWHTsH2")
STRIPE_PRO_PRICE_ID = os.environ.get("STRIPE_PRO_PRICE_ID", "price_1Qcv0UIBuO6WDytxyZGkcKxA")
TRIAL_PERIOD_DAYS = 7

# Administrators (Clerk user ids)
ADMIN_USER_IDS = _split_env_list("ADMIN_USER_IDS")

# CORS
CORS_ORIGINS = _split_env_list("CORS_ORIGINS", "*")

# Sitemap Discovery
SITEMAP_LOCATIONS = [
    "/sitemap.xml",
    "/sitemap_index.xml",
    "/sitemap/",
    "/robots.txt",
]
MAX_SELECTED_URLS = 8

# Keyword Research
RESEARCH_LOCATION = "nl"
RESEARCH_RECENCY_FILTER = "year"
RESEARCH_TEMPERATURE = 0.2
RESEARCH_TOP_P = 0.9

# LLM Configuration
GENERATION_TEMPERATURE = 0.3
TONE_ANALYSIS_MODEL = "openai/gpt-4o-mini"

# Wizard
DEFAULT_COUNTRY = "Netherlands"
REQUIRE_SESSION_FOR_WIZARD = os.environ.get("REQUIRE_SESSION_FOR_WIZARD", "true").lower() == "true"
WIZARD_TTL_SECONDS = int(os.environ.get("WIZARD_TTL_SECONDS", 2 * 60 * 60))

# Server Configuration
DEFAULT_PORT = 8010
