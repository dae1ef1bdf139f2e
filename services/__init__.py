"""
Services Module

Contains service layer implementations for external integrations
and business logic.
"""

from services.llm import (
    get_openrouter_model,
    complete
)
from services.sitemap import (
    locate_sitemap,
    extract_sitemap_urls,
    parse_loc_entries,
    rank_urls
)
from services.research import research_keyword
from services.access import (
    Capability,
    authorize,
    is_admin,
    require_admin,
    resolve_model
)
from services.registry import (
    add_model,
    remove_model,
    set_default_models,
    update_system_prompts,
    models_for_viewer
)
from services.billing import (
    create_checkout_session,
    create_portal_session
)

__all__ = [
    # LLM
    "get_openrouter_model",
    "complete",
    # Sitemap
    "locate_sitemap",
    "extract_sitemap_urls",
    "parse_loc_entries",
    "rank_urls",
    # Research
    "research_keyword",
    # Access
    "Capability",
    "authorize",
    "is_admin",
    "require_admin",
    "resolve_model",
    # Registry
    "add_model",
    "remove_model",
    "set_default_models",
    "update_system_prompts",
    "models_for_viewer",
    # Billing
    "create_checkout_session",
    "create_portal_session",
]
