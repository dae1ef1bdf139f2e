"""
Access Service

Single authorization check for the expensive operations. Content
generation and tone analysis call authorize() before any upstream request
so an anonymous or free caller never spends model quota on a premium model.
"""

import logging
from enum import Enum
from typing import Optional

from config import ADMIN_USER_IDS, TONE_ANALYSIS_MODEL
from errors import (
    AdminRequired,
    AuthenticationRequired,
    NotFoundError,
    PremiumRequired,
    WizardValidationError,
)
from models import AdminSettings, ModelDescriptor, Viewer

logger = logging.getLogger(__name__)


class Capability(str, Enum):
    GENERATE_CONTENT = "generate_content"
    ANALYZE_TONE = "analyze_tone"


def require_session(viewer: Viewer) -> None:
    if not viewer.has_session:
        raise AuthenticationRequired()


def require_premium(viewer: Viewer) -> None:
    if not viewer.is_pro:
        raise PremiumRequired("Deze functie is alleen beschikbaar voor Pro gebruikers.")


def is_admin(user_id: Optional[str]) -> bool:
    """True when the user id is listed in ADMIN_USER_IDS."""
    return bool(user_id) and user_id in ADMIN_USER_IDS


def require_admin(viewer: Viewer) -> None:
    require_session(viewer)
    if not is_admin(viewer.user_id):
        logger.warning(f"Non-admin user {viewer.user_id} tried to access admin settings")
        raise AdminRequired()


def resolve_model(
    settings: AdminSettings,
    requested_id: Optional[str],
    viewer: Viewer
) -> Optional[ModelDescriptor]:
    """
    Pick the model for a request.

    An explicit id must be registered. Without one, pro callers get the
    default premium model and everyone else the default free model. A
    default that points at a removed model resolves to None.

    Args:
        settings: Admin settings
        requested_id: Model id chosen by the caller (optional)
        viewer: Caller

    Returns:
        ModelDescriptor or None when no model is selected

    Raises:
        NotFoundError: If the requested id is not registered
    """
    if requested_id:
        model = settings.find_model(requested_id)
        if model is None:
            raise NotFoundError(f"Model '{requested_id}' is niet beschikbaar")
        return model

    default_id = settings.default_premium_model if viewer.is_pro else settings.default_free_model
    if not default_id:
        return None

    model = settings.find_model(default_id)
    if model is None:
        logger.warning(f"Default model '{default_id}' is not in the model registry")
    return model


def require_model_access(viewer: Viewer, model: ModelDescriptor) -> None:
    if not model.is_free and not viewer.is_pro:
        raise PremiumRequired()


def authorize(
    viewer: Viewer,
    settings: AdminSettings,
    capability: Capability,
    requested_model: Optional[str] = None
) -> str:
    """
    Check that the caller may perform the capability and pick the model.

    Args:
        viewer: Caller, resolved from a freshly verified token
        settings: Admin settings
        capability: Operation about to be performed
        requested_model: Model id chosen by the caller (optional)

    Returns:
        Model id to call

    Raises:
        AuthenticationRequired: Without a session
        PremiumRequired: For premium models/features on the free tier
        NotFoundError: For an unknown model id
        WizardValidationError: When no model is selected
    """
    require_session(viewer)

    if capability == Capability.ANALYZE_TONE:
        require_premium(viewer)
        model = resolve_model(settings, requested_model, viewer)
        return model.id if model else TONE_ANALYSIS_MODEL

    model = resolve_model(settings, requested_model, viewer)
    if model is None:
        raise WizardValidationError("Geen AI model geselecteerd", field="model")

    require_model_access(viewer, model)
    return model.id
