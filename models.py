"""
Pydantic Models

Defines the generation request carried through the wizard, the admin
model registry and the subscription/viewer types.
"""

from enum import Enum
from typing import List, Literal, Optional
from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from config import DEFAULT_COUNTRY


CONTENT_TYPES = [
    "Listicle",
    "Product reviews",
    "Informational",
    "History of",
    "Pro's and Con's",
    "Comparisons",
    "How to's",
    "Versus",
    "Best for articles",
    "Brand roundup",
]

SubscriptionLevel = Literal["free", "pro"]


class CamelModel(BaseModel):
    """Base model serialised with the camelCase keys the front end uses."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class WizardStep(str, Enum):
    WEBSITE = "website"
    KEYWORD = "keyword"
    BUSINESS = "business"
    TONE = "tone"
    CONTENT = "content"


STEP_ORDER = [
    WizardStep.WEBSITE,
    WizardStep.KEYWORD,
    WizardStep.BUSINESS,
    WizardStep.TONE,
    WizardStep.CONTENT,
]


class BusinessInfo(CamelModel):
    """Business context used to personalise the generated article"""

    name: str = Field(default="", description="Business name")
    type: str = Field(default="", description="Kind of business, e.g. E-commerce")
    country: str = Field(default=DEFAULT_COUNTRY, description="Target market country")
    description: str = Field(default="", description="Short description of what the business does")


class GenerationRequest(CamelModel):
    """In-progress generation request, mutated step by step by the wizard"""

    website_url: str = ""
    selected_urls: List[str] = Field(default_factory=list)
    main_keyword: str = ""
    research: str = ""
    business_info: BusinessInfo = Field(default_factory=BusinessInfo)
    content_type: str = ""
    tone_of_voice: str = ""
    current_step: WizardStep = WizardStep.WEBSITE
    generated_content: str = ""


class ModelDescriptor(CamelModel):
    """AI model available for generation"""

    id: str = Field(description="Provider-qualified model name, e.g. openai/gpt-4o-mini")
    name: str = ""
    description: str = ""
    is_free: bool = True


class SystemPrompts(CamelModel):
    """Editable system prompts; an empty string selects the built-in default"""

    keyword_research: str = ""
    tone_analysis: str = ""
    content_generation: str = ""


class AdminSettings(CamelModel):
    """Singleton registry of models, default models and system prompts"""

    models: List[ModelDescriptor] = Field(default_factory=list)
    default_free_model: str = ""
    default_premium_model: str = ""
    system_prompts: SystemPrompts = Field(default_factory=SystemPrompts)

    @model_validator(mode="before")
    @classmethod
    def migrate_legacy_default_model(cls, data):
        # Older rows stored a single ``defaultModel``
        if isinstance(data, dict) and "defaultModel" in data:
            data = dict(data)
            legacy = data.pop("defaultModel")
            if not data.get("defaultFreeModel") and not data.get("default_free_model"):
                data["defaultFreeModel"] = legacy or ""
        return data

    def find_model(self, model_id: str) -> Optional[ModelDescriptor]:
        for model in self.models:
            if model.id == model_id:
                return model
        return None


class Viewer(BaseModel):
    """Caller identity resolved from the Authorization header"""

    user_id: Optional[str] = None
    subscription_level: SubscriptionLevel = "free"

    @property
    def has_session(self) -> bool:
        return bool(self.user_id)

    @property
    def is_pro(self) -> bool:
        return self.subscription_level == "pro"
