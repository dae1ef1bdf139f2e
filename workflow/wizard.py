"""
Wizard State Controller

Holds the in-progress generation request and moves it through
website -> keyword -> business -> tone -> content. A transition only
commits when the fields required by the target step are filled in; a failed
transition leaves the request untouched. Wizards live in process memory and
are lost on restart.
"""

import logging
import time
import uuid
from typing import Optional
from pydantic import ValidationError
from pydantic.alias_generators import to_camel

from config import WIZARD_TTL_SECONDS
from errors import AuthenticationRequired, NotFoundError, WizardValidationError
from models import CONTENT_TYPES, STEP_ORDER, GenerationRequest, WizardStep
from utils import parse_website_url

logger = logging.getLogger(__name__)

# Fields the caller may not set directly
PROTECTED_FIELDS = {"currentStep", "generatedContent"}

REQUEST_FIELDS = {to_camel(name) for name in GenerationRequest.model_fields}

# Fields the user fills in on each step
STEP_FIELDS = {
    WizardStep.WEBSITE: {"websiteUrl", "selectedUrls"},
    WizardStep.KEYWORD: {"mainKeyword", "research"},
    WizardStep.BUSINESS: {"businessInfo", "contentType"},
    WizardStep.TONE: {"toneOfVoice"},
    WizardStep.CONTENT: set(),
}


def _camel_key(key: str) -> str:
    return to_camel(key) if "_" in key else key


def normalize_update_keys(updates: Optional[dict]) -> dict:
    """
    Convert snake_case update keys to the camelCase request keys.

    Raises:
        WizardValidationError: For keys that are not request fields
    """
    normalized = {}
    for key, value in (updates or {}).items():
        camel = _camel_key(key)
        if camel not in REQUEST_FIELDS:
            raise WizardValidationError(f"Onbekend veld: {key}", field=key)
        normalized[camel] = value
    return normalized


def merge_updates(request: GenerationRequest, updates: Optional[dict]) -> GenerationRequest:
    """
    Merge partial updates into a copy of the request.

    ``businessInfo`` is merged key by key so a single field can be edited.
    A new ``mainKeyword`` clears research done for the previous keyword
    unless the same update carries new research.

    Args:
        request: Current request
        updates: Partial request using camelCase (or snake_case) keys

    Returns:
        New request; the original is not modified

    Raises:
        WizardValidationError: If a key is unknown or an update has the
            wrong type
    """
    updates = normalize_update_keys(updates)
    if not updates:
        return request.model_copy(deep=True)

    merged = request.model_dump(by_alias=True)
    for key, value in updates.items():
        if key in PROTECTED_FIELDS:
            continue
        if key == "businessInfo" and isinstance(value, dict):
            merged["businessInfo"] = {**merged["businessInfo"], **value}
        else:
            merged[key] = value

    try:
        candidate = GenerationRequest.model_validate(merged)
    except ValidationError as e:
        raise WizardValidationError("Ongeldige invoer") from e

    keyword_changed = candidate.main_keyword.strip() != request.main_keyword.strip()
    if keyword_changed and "research" not in updates:
        candidate = candidate.model_copy(update={"research": ""})

    return candidate


def check_step_fields(step: WizardStep, updates: Optional[dict]) -> None:
    """
    Reject updates to fields that belong to another step.

    Raises:
        WizardValidationError: If a field is not editable on this step
    """
    allowed = STEP_FIELDS[step]
    for key in normalize_update_keys(updates):
        if key not in allowed:
            raise WizardValidationError(
                f"Het veld '{key}' kan niet worden aangepast in stap '{step.value}'",
                field=key
            )


def _check_website(request: GenerationRequest) -> GenerationRequest:
    if not request.website_url.strip():
        raise WizardValidationError("Voer eerst een website URL in", field="websiteUrl")

    normalized = parse_website_url(request.website_url)
    if not normalized:
        raise WizardValidationError("Voer een geldige website URL in", field="websiteUrl")

    return request.model_copy(update={"website_url": normalized})


def _check_keyword(request: GenerationRequest) -> GenerationRequest:
    if not request.main_keyword.strip():
        raise WizardValidationError("Voer eerst een keyword in", field="mainKeyword")
    return request


def _check_business(request: GenerationRequest) -> GenerationRequest:
    info = request.business_info
    required = {
        "name": info.name,
        "type": info.type,
        "description": info.description,
        "contentType": request.content_type,
    }
    missing = [field for field, value in required.items() if not value.strip()]
    if missing:
        raise WizardValidationError("Vul alle verplichte velden in", field=missing[0])

    if request.content_type not in CONTENT_TYPES:
        raise WizardValidationError("Selecteer een geldig type content", field="contentType")

    return request


def _check_tone(request: GenerationRequest) -> GenerationRequest:
    if not request.tone_of_voice.strip():
        raise WizardValidationError("Vul eerst een tone of voice in", field="toneOfVoice")
    return request


# Check run when entering a step, keyed by the target step
TRANSITION_CHECKS = {
    WizardStep.KEYWORD: _check_website,
    WizardStep.BUSINESS: _check_keyword,
    WizardStep.TONE: _check_business,
    WizardStep.CONTENT: _check_tone,
}


class GenerationWizard:
    """
    Step controller for a single generation request.
    """

    def __init__(
        self,
        request: Optional[GenerationRequest] = None,
        require_session: bool = False,
        owner_id: Optional[str] = None
    ):
        """
        Initialize the wizard.

        Args:
            request: Existing request (a fresh one is created otherwise)
            require_session: If True, every step beyond website needs an
                active session
            owner_id: User the wizard belongs to (None until claimed)
        """
        self.request = request or GenerationRequest()
        self.require_session = require_session
        self.owner_id = owner_id

    @property
    def step(self) -> WizardStep:
        return self.request.current_step

    def _check_session(self, step: WizardStep, session_active: bool) -> None:
        if self.require_session and step != WizardStep.WEBSITE and not session_active:
            raise AuthenticationRequired()

    def update(self, updates: dict, session_active: bool = True) -> GenerationRequest:
        """
        Edit fields of the current step without changing step.

        Raises:
            WizardValidationError: If a field belongs to another step
            AuthenticationRequired: In strict mode beyond the website step
                without a session
        """
        self._check_session(self.step, session_active)
        check_step_fields(self.step, updates)
        self.request = merge_updates(self.request, updates)
        return self.request

    def validate(
        self,
        target: WizardStep,
        updates: Optional[dict] = None,
        session_active: bool = True
    ) -> GenerationRequest:
        """
        Dry-run a forward transition.

        Args:
            target: Step to enter
            updates: Partial updates to apply first
            session_active: Whether the caller has an active session

        Returns:
            The request as it would be committed

        Raises:
            WizardValidationError: If the target is not the next step or a
                required field is missing
            AuthenticationRequired: In strict mode without a session
        """
        target = WizardStep(target)
        current_index = STEP_ORDER.index(self.step)

        if STEP_ORDER.index(target) != current_index + 1:
            raise WizardValidationError(
                f"Kan niet van stap '{self.step.value}' naar '{target.value}' gaan",
                field="step"
            )

        self._check_session(target, session_active)
        check_step_fields(self.step, updates)

        candidate = merge_updates(self.request, updates)
        candidate = TRANSITION_CHECKS[target](candidate)
        return candidate.model_copy(update={"current_step": target})

    def advance(
        self,
        target: WizardStep,
        updates: Optional[dict] = None,
        session_active: bool = True
    ) -> GenerationRequest:
        """
        Move forward to the next step, committing the updates.

        Raises the same errors as validate(); on error nothing changes.
        """
        self.request = self.validate(target, updates, session_active)
        logger.info(f"Wizard advanced to step '{self.step.value}'")
        return self.request

    def back(self) -> GenerationRequest:
        """Return to the previous step. A no-op on the first step."""
        index = STEP_ORDER.index(self.step)
        if index > 0:
            self.request = self.request.model_copy(update={"current_step": STEP_ORDER[index - 1]})
        return self.request

    def set_generated_content(self, content: str) -> GenerationRequest:
        self.request = self.request.model_copy(update={"generated_content": content})
        return self.request


class WizardStore:
    """
    In-memory registry of wizards keyed by id.

    A wizard belongs to the user that created it. Wizards started without a
    session are claimed by the first signed-in user that opens them. Wizards
    untouched for ``ttl_seconds`` are removed.
    """

    def __init__(self, ttl_seconds: float = WIZARD_TTL_SECONDS):
        self.ttl_seconds = ttl_seconds
        self._wizards: dict[str, GenerationWizard] = {}
        self._last_used: dict[str, float] = {}

    def cleanup_expired(self) -> int:
        """
        Remove wizards that were not used within the TTL.

        Returns:
            Number of wizards removed
        """
        now = time.time()
        expired = [
            wizard_id for wizard_id, last_used in self._last_used.items()
            if now - last_used > self.ttl_seconds
        ]
        for wizard_id in expired:
            self._wizards.pop(wizard_id, None)
            self._last_used.pop(wizard_id, None)

        if expired:
            logger.info(f"Removed {len(expired)} expired wizards")
        return len(expired)

    def create(
        self,
        require_session: bool = False,
        owner_id: Optional[str] = None
    ) -> tuple[str, GenerationWizard]:
        self.cleanup_expired()

        wizard_id = str(uuid.uuid4())
        wizard = GenerationWizard(require_session=require_session, owner_id=owner_id)
        self._wizards[wizard_id] = wizard
        self._last_used[wizard_id] = time.time()
        return wizard_id, wizard

    def get(self, wizard_id: str, user_id: Optional[str] = None) -> GenerationWizard:
        """
        Look up a wizard for a caller.

        Args:
            wizard_id: Wizard id
            user_id: Caller's user id (None for anonymous callers)

        Returns:
            GenerationWizard instance

        Raises:
            NotFoundError: If the wizard does not exist, expired or belongs
                to another user
        """
        self.cleanup_expired()

        wizard = self._wizards.get(wizard_id)
        if wizard is None:
            raise NotFoundError("Wizard niet gevonden")

        if wizard.owner_id is None:
            wizard.owner_id = user_id
        elif wizard.owner_id != user_id:
            logger.warning(f"User {user_id} tried to open wizard {wizard_id} of another user")
            raise NotFoundError("Wizard niet gevonden")

        self._last_used[wizard_id] = time.time()
        return wizard

    def discard(self, wizard_id: str, user_id: Optional[str] = None) -> None:
        self.get(wizard_id, user_id)
        self._wizards.pop(wizard_id, None)
        self._last_used.pop(wizard_id, None)

    def __len__(self) -> int:
        return len(self._wizards)


# Global store instance
_store_instance = None


def get_wizard_store() -> WizardStore:
    """
    Get or create the global wizard store.

    Returns:
        WizardStore instance
    """
    global _store_instance

    if _store_instance is None:
        _store_instance = WizardStore()

    return _store_instance
