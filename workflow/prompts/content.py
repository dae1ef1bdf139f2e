"""
Content Generation Prompts

Prompt template for the SEO article. Slots are declared on a Pydantic model
so a missing value fails when the prompt is built instead of silently
producing a broken prompt.
"""

from typing import List
from pydantic import BaseModel, Field

from models import GenerationRequest


DEFAULT_CONTENT_SYSTEM_PROMPT = (
    "Je bent een Nederlandse content schrijver die gespecialiseerd is in het schrijven "
    "van SEO-vriendelijke content. Je schrijft in een natuurlijke, menselijke toon."
)

TARGET_WORD_COUNT = 1500
MAX_TITLE_LENGTH = 60


class ContentPromptSlots(BaseModel):
    """Named values interpolated into the content prompt"""

    business_name: str = Field(min_length=1)
    business_type: str = Field(min_length=1)
    country: str
    business_description: str = Field(min_length=1)
    content_type: str = Field(min_length=1)
    tone_of_voice: str = Field(min_length=1)
    keyword: str = Field(min_length=1)
    research: str = ""
    internal_urls: List[str] = Field(default_factory=list)

    @classmethod
    def from_request(cls, request: GenerationRequest) -> "ContentPromptSlots":
        info = request.business_info
        return cls(
            business_name=info.name,
            business_type=info.type,
            country=info.country,
            business_description=info.description,
            content_type=request.content_type,
            tone_of_voice=request.tone_of_voice,
            keyword=request.main_keyword,
            research=request.research,
            internal_urls=request.selected_urls,
        )


def build_content_prompt(slots: ContentPromptSlots) -> str:
    """
    Build the article prompt.

    Args:
        slots: Business context, tone, keyword, research and internal URLs

    Returns:
        Formatted prompt string
    """
    if slots.internal_urls:
        url_lines = "\n".join(f"- {url}" for url in slots.internal_urls)
        link_rules = (
            "Gebruik interne links uitsluitend uit de onderstaande lijst. Gebruik elke URL "
            "hoogstens één keer en verzin geen andere URL's.\n"
            f"{url_lines}"
        )
    else:
        link_rules = "Er zijn geen interne URL's beschikbaar; voeg geen interne links toe."

    research = slots.research.strip() or "Geen aanvullend onderzoek beschikbaar."

    return f"""Schrijf een SEO-artikel in het Nederlands.

**Bedrijfsinformatie:**
- Naam: {slots.business_name}
- Type bedrijf: {slots.business_type}
- Land: {slots.country}
- Omschrijving: {slots.business_description}

**Type content:** {slots.content_type}

**Tone of voice:** {slots.tone_of_voice}

**Hoofdkeyword:** {slots.keyword}

**Keyword onderzoek:**
{research}

**Interne links:**
{link_rules}

**Instructies:**
1. Schrijf ongeveer {TARGET_WORD_COUNT} woorden.
2. Begin met één pakkende, clickbait H1-titel van maximaal {MAX_TITLE_LENGTH} tekens waarin het hoofdkeyword "{slots.keyword}" voorkomt.
3. Structureer het artikel met H2- en H3-koppen die passen bij het type content "{slots.content_type}".
4. Verwerk de interne links op natuurlijke plekken in de tekst.
5. Schrijf volledig in het Nederlands, op taalniveau B1 (begrijpelijk voor een leerling uit groep 7).
6. Houd je aan de opgegeven tone of voice.
7. Noem geen bronnen, webshops of merken behalve {slots.business_name}.
8. Lever het artikel op in Markdown.
"""
