"""
Keyword Research Prompts

Prompt templates sent to the search/answer provider.
"""


DEFAULT_RESEARCH_SYSTEM_PROMPT = (
    "You are a helpful assistant that provides concise and precise information about "
    "the keyword. Focus on providing factual, market-relevant information."
)


def build_research_user_prompt(keyword: str) -> str:
    """
    Build the research question for a Dutch keyword.

    Args:
        keyword: Main keyword

    Returns:
        Prompt asking for generic, brand-free market data
    """
    return (
        f"Find highly specific generalised data about the Dutch keyword '{keyword}'. "
        "Do not name the source, webshops or brand other than the keyword!"
    )
