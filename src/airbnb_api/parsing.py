"""
Response interpreters for the Airbnb endpoints.

The HTML scans below depend on the current markup of the Airbnb pages
(the review page CSS classes and the JSON blob stored in a ``<meta>``
tag on listing pages). Upstream markup changes show up as empty review
lists or ``meta_data=None``, not as errors.
"""

import json
import logging
from dataclasses import dataclass, asdict, field
from typing import Any, Callable, Dict, Iterable, List, Optional, TypeVar

from bs4 import BeautifulSoup, NavigableString
from bs4.element import Comment, Tag

from .exceptions import ParseError

logger = logging.getLogger(__name__)

T = TypeVar("T")

SEARCH_RESULT_PATH = ("logging_info", "search", "result", "hostingIds")
REVIEW_CONTENT_FIELD = "review_content"
REVIEW_SELECTOR = ".comment-container .expandable-content p"
HOSTING_META_KEYS = ("locale", "hostingId")


@dataclass
class SearchResult:
    """Hosting ids found by a search plus the decoded response body."""
    hosting_ids: List[Any] = field(default_factory=list)
    body: Any = None


@dataclass
class ListingPageInfo:
    """Data scraped from a listing's HTML page."""
    title: str = ""
    truncated_description: Optional[str] = None
    meta_data: Optional[Dict[str, Any]] = None

    def to_dict(self) -> dict:
        return asdict(self)


# ============================================
# GENERIC HELPERS
# ============================================

def first_match(collection: Iterable[T], predicate: Callable[[T], bool]) -> Optional[T]:
    """Return the first item for which predicate is true, or None."""
    for item in collection:
        if predicate(item):
            return item
    return None


def select_texts(
    soup: BeautifulSoup,
    selector: str,
    extract: Callable[[Tag], Optional[str]],
) -> List[str]:
    """Apply extract to every element matching a CSS selector, dropping Nones."""
    texts = []
    for element in soup.select(selector):
        text = extract(element)
        if text is not None:
            texts.append(text)
    return texts


def first_text_node(element: Tag) -> Optional[str]:
    node = first_match(
        element.children,
        lambda child: isinstance(child, NavigableString) and not isinstance(child, Comment),
    )
    return str(node) if node is not None else None


def load_json(body: str) -> Any:
    try:
        return json.loads(body)
    except (json.JSONDecodeError, TypeError) as e:
        raise ParseError(f"Response is not valid JSON: {e}") from e


# ============================================
# SEARCH
# ============================================

def extract_hosting_ids(data: Any) -> List[Any]:
    """Hosting ids from a decoded search response, [] when the path is missing."""
    node = data
    try:
        for key in SEARCH_RESULT_PATH:
            node = node[key]
        return list(node)
    except (KeyError, IndexError, TypeError):
        logger.debug("[SEARCH] No hosting ids in response")
        return []


def parse_search(body: str) -> SearchResult:
    data = load_json(body)
    return SearchResult(hosting_ids=extract_hosting_ids(data), body=data)


# ============================================
# REVIEWS
# ============================================

def parse_reviews(body: str) -> List[str]:
    """
    Extract review texts from a review page response.

    The endpoint returns JSON with an HTML fragment under
    ``review_content``; each review is a paragraph inside the
    comment container's expandable content.
    """
    data = load_json(body)
    if not isinstance(data, dict) or not isinstance(data.get(REVIEW_CONTENT_FIELD), str):
        raise ParseError(f"Response has no '{REVIEW_CONTENT_FIELD}' field")

    soup = BeautifulSoup(data[REVIEW_CONTENT_FIELD], "html.parser")
    return select_texts(soup, REVIEW_SELECTOR, first_text_node)


# ============================================
# LISTING PAGE
# ============================================

def _meta_json(meta: Tag) -> Optional[Dict[str, Any]]:
    content = meta.get("content")
    if not content:
        return None
    try:
        data = json.loads(content)
    except json.JSONDecodeError:
        return None
    return data if isinstance(data, dict) else None


def _is_hosting_meta(meta: Tag) -> bool:
    data = _meta_json(meta)
    return data is not None and all(k in data for k in HOSTING_META_KEYS)


def extract_hosting_meta(soup: BeautifulSoup) -> Optional[Dict[str, Any]]:
    """Parsed content of the first <meta> tag holding hosting JSON, in document order."""
    meta = first_match(soup.find_all("meta"), _is_hosting_meta)
    return _meta_json(meta) if meta is not None else None


def parse_listing_page(html: str) -> ListingPageInfo:
    soup = BeautifulSoup(html, "html.parser")

    title = soup.title.get_text() if soup.title else ""
    description = soup.find("meta", attrs={"name": "description"})

    return ListingPageInfo(
        title=title,
        truncated_description=description.get("content") if description else None,
        meta_data=extract_hosting_meta(soup),
    )
