"""
Tone Analysis Prompts
"""


DEFAULT_TONE_SYSTEM_PROMPT = (
    "Je bent een expert in het analyseren van schrijfstijlen en tone of voice. "
    "Analyseer de gegeven tekst en beschrijf de tone of voice in detail. Focus op "
    "aspecten zoals formaliteit, emotie, autoriteit en toegankelijkheid."
)


def build_tone_analysis_prompt(content: str) -> str:
    """Ask for a tone-of-voice description of a sample text."""
    return f'Analyseer de volgende tekst en beschrijf de tone of voice: "{content}"'
