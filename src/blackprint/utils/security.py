#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/blackprint/utils/security.py
"""URL safety checks for attributes produced from untrusted markup.

Functions
---------
- is_relative_url: Check whether a URL has no scheme
- is_url_scheme_dangerous: Check whether a URL uses a script-executing scheme
- is_url_safe: Inverse of is_url_scheme_dangerous, treating empty URLs as safe
- sanitize_url: Return the URL, or an empty string when it is dangerous
"""

import logging
from urllib.parse import urlparse

from blackprint.constants import DANGEROUS_NULL_LIKE_CHARS, DANGEROUS_SCHEMES

logger = logging.getLogger(__name__)


def _normalize_url(url: str) -> str:
    """Reduce a URL to the form a browser uses to pick its scheme.

    Browsers drop tabs and newlines anywhere in a URL and ignore leading
    control characters and spaces, so ``" java\\tscript:"`` still runs script.
    """
    for char in DANGEROUS_NULL_LIKE_CHARS:
        url = url.replace(char, "")
    return url.lstrip("".join(chr(code) for code in range(0x21))).strip().lower()


def is_relative_url(url: str) -> bool:
    """Check if a URL is a relative URL.

    Relative URLs do not have a scheme and typically start with #, /, ./, ../, or ?.

    Parameters
    ----------
    url : str
        URL to check

    Returns
    -------
    bool
        True if URL is relative, False otherwise

    Examples
    --------
    >>> is_relative_url("/path/to/file")
    True
    >>> is_relative_url("https://example.com")
    False

    """
    if not url or not url.strip():
        return True

    return url.strip().startswith(("#", "/", "./", "../", "?"))


def is_url_scheme_dangerous(url: str) -> bool:
    """Check if a URL uses a dangerous scheme.

    Dangerous schemes include javascript:, vbscript:, data:text/html, and others
    that can be used for XSS attacks.

    Parameters
    ----------
    url : str
        URL to check

    Returns
    -------
    bool
        True if URL uses a dangerous scheme, False otherwise

    Examples
    --------
    >>> is_url_scheme_dangerous("https://example.com")
    False
    >>> is_url_scheme_dangerous("JavaScript:alert(1)")
    True
    >>> is_url_scheme_dangerous("data:image/png;base64,AAAA")
    False

    """
    if not url or not url.strip():
        return False

    url_lower = _normalize_url(url)

    if is_relative_url(url_lower):
        return False

    for dangerous_scheme in DANGEROUS_SCHEMES:
        if url_lower.startswith(dangerous_scheme):
            return True

    try:
        scheme = urlparse(url_lower).scheme
    except ValueError:
        # Unparseable URLs are treated as dangerous
        return True

    # data: URLs reaching this point carry passive content such as images
    return scheme in ("javascript", "vbscript", "about")


def is_url_safe(url: str) -> bool:
    """Check if a URL is safe (no dangerous schemes).

    Examples
    --------
    >>> is_url_safe("/relative/path")
    True
    >>> is_url_safe("vbscript:msgbox(1)")
    False

    """
    if not url or not url.strip():
        return True

    return not is_url_scheme_dangerous(url)


def sanitize_url(url: str) -> str:
    """Sanitize a URL by removing dangerous schemes.

    Parameters
    ----------
    url : str
        URL to sanitize

    Returns
    -------
    str
        Sanitized URL, or empty string if the URL is dangerous

    """
    if not is_url_safe(url):
        logger.debug("Removing URL with dangerous scheme: %r", url[:50])
        return ""
    return url
