"""
URL Ranking Prompts

Prompt used to let a model pick the sitemap URLs most relevant to a keyword.
"""

from typing import List

from config import MAX_SELECTED_URLS


URL_RANKING_SYSTEM_PROMPT = (
    "You are a URL analyzer that selects the most relevant URLs based on a given keyword. "
    "Return ONLY the URLs, one per line, no explanations or additional text. "
    f"Always return exactly {MAX_SELECTED_URLS} URLs."
)


def build_url_ranking_prompt(keyword: str, urls: List[str]) -> str:
    """
    Build the user prompt listing every candidate URL.

    Args:
        keyword: Main keyword of the article
        urls: Candidate URLs in sitemap order

    Returns:
        Formatted prompt string
    """
    urls_list = "\n".join(urls)
    return (
        f'Given the keyword "{keyword}", analyze these URLs and select the '
        f"{MAX_SELECTED_URLS} most relevant ones that would provide the best content "
        "for this topic. Consider URL structure, relevance to the keyword, and "
        f"potential content depth. Here are the URLs:\n\n{urls_list}"
    )
