"""
Web page fetching utilities.

This module validates recipe URLs, fetches page HTML with a browser-like
session, and reduces HTML to plain text for the AI parser.
"""
from __future__ import annotations

import ipaddress
import logging
import time
from urllib.parse import urlparse

import cloudscraper
import requests
from bs4 import BeautifulSoup
from urllib3.exceptions import ReadTimeoutError

from ..const import (
    DEFAULT_MAX_REDIRECTS,
    DEFAULT_MAX_RESPONSE_SIZE,
    DEFAULT_MAX_TEXT_LENGTH,
    DEFAULT_TIMEOUT,
    ERROR_INTERNAL_ADDRESS,
    ERROR_INVALID_URL,
    ERROR_UNSUPPORTED_SCHEME,
)

_LOGGER = logging.getLogger(__name__)

ALLOWED_SCHEMES = ("http", "https")
HTML_CONTENT_TYPES = ("text/html", "application/xhtml", "application/xml", "text/xml")
ACCEPT_HEADER = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"

# Elements and class/id fragments that never hold recipe content
_STRIP_TAGS = ["script", "style", "nav", "header", "footer", "aside",
               "iframe", "noscript", "svg"]
_STRIP_PATTERNS = ["advertisement", "social-share", "comment", "navigation",
                   "sidebar", "newsletter", "cookie-banner", "popup", "modal"]
_RECIPE_SELECTORS = ['[itemtype*="Recipe"]', ".recipe", "#recipe", "article"]


def validate_url(url: str) -> str:
    """Validate a recipe URL.

    Args:
        url: The URL to validate

    Returns:
        The stripped URL

    Raises:
        ValueError: If the URL is malformed, not HTTP(S), or points at a
            private, loopback or link-local address
    """
    if not url or not url.strip():
        raise ValueError(ERROR_INVALID_URL)

    url = url.strip()
    try:
        parsed = urlparse(url)
        hostname = parsed.hostname
    except ValueError as e:
        raise ValueError(ERROR_INVALID_URL) from e

    if not parsed.scheme:
        raise ValueError(ERROR_INVALID_URL)

    if parsed.scheme.lower() not in ALLOWED_SCHEMES:
        raise ValueError(ERROR_UNSUPPORTED_SCHEME)

    if not parsed.netloc or not hostname:
        raise ValueError(ERROR_INVALID_URL)

    try:
        address = ipaddress.ip_address(hostname)
    except ValueError:
        # A host name, not a literal address
        return url

    if (address.is_private or address.is_loopback or address.is_link_local
            or address.is_reserved or address.is_unspecified):
        _LOGGER.warning("Refusing to fetch internal address %s", hostname)
        raise ValueError(ERROR_INTERNAL_ADDRESS)

    return url


def create_session(user_agent: str | None = None) -> requests.Session:
    """Create a browser-like session for fetching recipe pages."""
    session = cloudscraper.create_scraper(
        browser={
            "browser": "chrome",
            "platform": "windows",
            "desktop": True,
        }
    )
    session.max_redirects = DEFAULT_MAX_REDIRECTS
    session.headers["Accept"] = ACCEPT_HEADER
    if user_agent:
        session.headers["User-Agent"] = user_agent
    return session


def _is_html_content_type(content_type: str) -> bool:
    # A missing header is accepted, many small sites omit it
    if not content_type:
        return True
    return any(html_type in content_type for html_type in HTML_CONTENT_TYPES)


def _read_body(response: requests.Response, url: str, timeout: float, deadline: float) -> bytearray:
    """Read a streamed body under the size limit and the overall deadline.

    Raises:
        requests.exceptions.ReadTimeout: If a read stalls or the deadline passes
        requests.exceptions.ConnectionError: On other transport failures
        ValueError: If the body exceeds the size limit
    """
    content = bytearray()
    try:
        for chunk in response.iter_content(chunk_size=8192):
            content.extend(chunk)
            if len(content) > DEFAULT_MAX_RESPONSE_SIZE:
                _LOGGER.warning("Response exceeded size limit while downloading from %s", url)
                raise ValueError(
                    f"Response size exceeds maximum allowed size ({DEFAULT_MAX_RESPONSE_SIZE} bytes)")
            if time.monotonic() > deadline:
                _LOGGER.warning("Download from %s exceeded %ss", url, timeout)
                raise requests.exceptions.ReadTimeout(
                    f"Read timed out after {timeout}s", response=response)
    except requests.exceptions.ConnectionError as e:
        # requests wraps a stalled body read in ConnectionError
        if e.args and isinstance(e.args[0], ReadTimeoutError):
            raise requests.exceptions.ReadTimeout(str(e), response=response) from e
        raise
    return content


def fetch_html(
    url: str,
    timeout: float = DEFAULT_TIMEOUT,
    user_agent: str | None = None,
    session: requests.Session | None = None,
) -> str:
    """Fetch the HTML of a page.

    Args:
        url: A URL that passed validate_url
        timeout: Timeout in seconds; bounds each socket read and the whole download
        user_agent: Optional User-Agent header
        session: Optional session to reuse, mainly for tests

    Returns:
        The decoded HTML

    Raises:
        requests.exceptions.Timeout: If the request timed out
        requests.exceptions.HTTPError: If the server answered with a non-2xx status
        requests.exceptions.RequestException: On any other transport failure
        ValueError: If the content is not HTML or exceeds the size limit
    """
    if session is None:
        session = create_session(user_agent)
    elif user_agent:
        session.headers["User-Agent"] = user_agent

    _LOGGER.debug("Fetching %s (timeout %ss)", url, timeout)
    deadline = time.monotonic() + timeout
    response = session.get(url, timeout=timeout, allow_redirects=True, stream=True)
    try:
        response.raise_for_status()

        content_type = response.headers.get("content-type", "").lower()
        if not _is_html_content_type(content_type):
            _LOGGER.warning("Invalid content type for %s: %s", url, content_type)
            raise ValueError(
                f"Invalid content type: {content_type}. Only HTML/XHTML content is allowed.")

        content_length = response.headers.get("content-length")
        if content_length and content_length.isdigit() and int(content_length) > DEFAULT_MAX_RESPONSE_SIZE:
            _LOGGER.warning("Response too large for %s: %s bytes", url, content_length)
            raise ValueError(
                f"Response size ({content_length} bytes) exceeds maximum allowed size "
                f"({DEFAULT_MAX_RESPONSE_SIZE} bytes)")

        content = _read_body(response, url, timeout, deadline)
    finally:
        response.close()

    html = bytes(content).decode(response.encoding or "utf-8", errors="replace")
    _LOGGER.debug("Fetched %d bytes from %s", len(content), url)
    return html


def html_to_text(html: str, max_length: int = DEFAULT_MAX_TEXT_LENGTH) -> str:
    """Reduce a page to the text most likely to hold the recipe.

    Args:
        html: The page HTML
        max_length: Maximum number of characters to keep

    Returns:
        Cleaned text, one phrase per line
    """
    soup = BeautifulSoup(html, features="html.parser")

    recipe_container = None
    for selector in _RECIPE_SELECTORS:
        recipe_container = soup.select_one(selector)
        if recipe_container:
            _LOGGER.debug("Using recipe container %s", selector)
            break

    root = recipe_container or soup

    for element in root(_STRIP_TAGS):
        element.extract()

    patterns = list(_STRIP_PATTERNS)
    if not recipe_container:
        patterns.extend(["related", "recommendation"])

    for pattern in patterns:
        for element in root.find_all(class_=lambda x, p=pattern: x and p in x.lower()):
            element.extract()
        for element in root.find_all(id=lambda x, p=pattern: x and p in x.lower()):
            element.extract()

    text = root.get_text(separator="\n")

    lines = (line.strip() for line in text.splitlines())
    chunks = (phrase.strip() for line in lines for phrase in line.split("  "))
    text = "\n".join(chunk for chunk in chunks if chunk)

    if len(text) > max_length:
        _LOGGER.debug("Truncating text from %d to %d characters", len(text), max_length)
        text = text[:max_length]

    return text
