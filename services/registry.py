"""
Model Registry Service

Edits of the admin model registry and system prompts. Every function takes
the current settings and returns an updated copy; persisting is left to the
caller (see db.save_admin_settings).
"""

from typing import Optional

from errors import NotFoundError, WizardValidationError
from models import AdminSettings, ModelDescriptor, SystemPrompts


def add_model(settings: AdminSettings, model: ModelDescriptor) -> AdminSettings:
    """
    Register a model.

    Raises:
        WizardValidationError: If id or name is empty or the id already exists
    """
    if not model.id.strip() or not model.name.strip():
        raise WizardValidationError("Model ID en naam zijn verplicht", field="id")

    if settings.find_model(model.id) is not None:
        raise WizardValidationError(f"Model '{model.id}' bestaat al", field="id")

    return settings.model_copy(update={"models": [*settings.models, model]})


def remove_model(settings: AdminSettings, model_id: str) -> AdminSettings:
    """
    Remove a model from the registry.

    Defaults pointing at the model are left as-is; they resolve to "no model
    selected" until an admin picks a new default.

    Raises:
        NotFoundError: If the model is not registered
    """
    if settings.find_model(model_id) is None:
        raise NotFoundError(f"Model '{model_id}' is niet gevonden")

    models = [model for model in settings.models if model.id != model_id]
    return settings.model_copy(update={"models": models})


def set_default_models(
    settings: AdminSettings,
    free_model: Optional[str] = None,
    premium_model: Optional[str] = None
) -> AdminSettings:
    """
    Set the default free and/or premium model.

    Raises:
        NotFoundError: If a given id is not registered
        WizardValidationError: If the default free model is not a free model
    """
    update = {}

    if free_model is not None:
        model = settings.find_model(free_model)
        if model is None:
            raise NotFoundError(f"Model '{free_model}' is niet gevonden")
        if not model.is_free:
            raise WizardValidationError("Het standaard gratis model moet een gratis model zijn")
        update["default_free_model"] = free_model

    if premium_model is not None:
        if settings.find_model(premium_model) is None:
            raise NotFoundError(f"Model '{premium_model}' is niet gevonden")
        update["default_premium_model"] = premium_model

    return settings.model_copy(update=update)


def update_system_prompts(settings: AdminSettings, **prompts: Optional[str]) -> AdminSettings:
    """
    Replace the given system prompts; prompts passed as None are kept.

    Args:
        settings: Current settings
        **prompts: keyword_research, tone_analysis and/or content_generation
    """
    current = settings.system_prompts.model_dump()
    unknown = set(prompts) - set(current)
    if unknown:
        raise WizardValidationError(f"Onbekende prompt: {', '.join(sorted(unknown))}")

    current.update({key: value for key, value in prompts.items() if value is not None})
    return settings.model_copy(update={"system_prompts": SystemPrompts(**current)})


def models_for_viewer(settings: AdminSettings, is_pro: bool) -> list[dict]:
    """
    List registered models with whether the caller may use them.

    Returns:
        Model dicts (camelCase) with an extra ``available`` flag
    """
    return [
        {**model.model_dump(by_alias=True), "available": model.is_free or is_pro}
        for model in settings.models
    ]
