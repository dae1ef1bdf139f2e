"""
Utility Functions

Contains helper functions for URL validation and normalization.
"""

from urllib.parse import urlparse


def normalize_url(url: str) -> str:
    """
    Normalize URL for consistent comparison.
    Only lowercases the protocol and domain to preserve case-sensitive paths.

    Args:
        url: URL to normalize

    Returns:
        Normalized URL with lowercase protocol and domain
    """
    url = url.strip()
    parsed = urlparse(url)

    # Keep path, params, query, and fragment as-is (they can be case-sensitive)
    normalized = parsed._replace(
        scheme=parsed.scheme.lower(),
        netloc=parsed.netloc.lower()
    )

    return normalized.geturl()


def validate_url(url: str) -> bool:
    """
    Validate if the given string is a valid URL.

    Args:
        url: String to validate

    Returns:
        True if valid URL with http/https scheme, False otherwise
    """
    try:
        result = urlparse(url)
        return all([result.scheme, result.netloc]) and result.scheme in ['http', 'https']
    except ValueError:
        return False


def ensure_scheme(url: str) -> str:
    """
    Prepend https:// when the user typed a bare domain such as "voorbeeld.nl".

    Args:
        url: URL as entered by the user

    Returns:
        URL with an explicit scheme
    """
    url = url.strip()
    if not url:
        return url
    if "://" not in url:
        return f"https://{url}"
    return url


def parse_website_url(url: str) -> str | None:
    """
    Turn user input into a normalized http(s) URL.

    A bare domain gets a scheme prepended; the host must contain a dot and no
    whitespace so free text like "not a url" is rejected.

    Args:
        url: URL as entered by the user

    Returns:
        Normalized URL, or None if the input does not parse as http/https
    """
    candidate = ensure_scheme(url)
    if not candidate or not validate_url(candidate):
        return None

    host = urlparse(candidate).hostname or ""
    if "." not in host or any(ch.isspace() for ch in candidate):
        return None

    return normalize_url(candidate)
