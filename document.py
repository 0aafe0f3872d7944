"""
Document adapter: the read-only view of a parsed page that the analyzers query
"""
import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, Iterable, List, Optional

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.builder import ParserRejectedMarkup
from bs4.element import PreformattedString

from config import config
from text_processor import clean_text
from utils import resolve_url

logger = logging.getLogger(__name__)

EXCLUDED_TEXT_TAGS = ("script", "style", "noscript", "iframe", "object", "embed")

class DocumentParseError(ValueError):
    """Raised when HTML cannot be turned into a usable document"""

class DocumentAdapter(ABC):
    """Capabilities the extractors need from a parsed document.

    Elements are opaque to the analyzers; they are only ever passed back
    into the adapter.
    """

    @abstractmethod
    def query_all(self, selector: str) -> List[Any]:
        """All elements matching a CSS selector, in document order"""

    def query_one(self, selector: str) -> Optional[Any]:
        elements = self.query_all(selector)
        return elements[0] if elements else None

    @abstractmethod
    def get_tag_name(self, element: Any) -> str:
        """Lowercase tag name"""

    @abstractmethod
    def get_attribute(self, element: Any, name: str) -> Optional[str]:
        """Attribute value, or None when absent"""

    @abstractmethod
    def has_attribute(self, element: Any, name: str) -> bool:
        pass

    @abstractmethod
    def get_text(self, element: Any) -> str:
        """Raw text content of the element"""

    @abstractmethod
    def is_visible(self, element: Any) -> bool:
        pass

    @abstractmethod
    def body_text(self, excluded_tags: Iterable[str] = EXCLUDED_TEXT_TAGS) -> str:
        """Whitespace-collapsed text of the body, skipping excluded subtrees"""

    def resolve_url(self, href: str, base_url: str) -> str:
        return resolve_url(href, base_url)

def _parse_inline_style(style: Optional[str]) -> Dict[str, str]:
    declarations = {}
    if not style:
        return declarations
    for declaration in style.split(";"):
        if ":" not in declaration:
            continue
        prop, value = declaration.split(":", 1)
        value = value.replace("!important", "").strip().lower()
        declarations[prop.strip().lower()] = value
    return declarations

class SoupDocument(DocumentAdapter):
    """DocumentAdapter backed by a BeautifulSoup tree"""

    def __init__(self, soup: BeautifulSoup):
        self.soup = soup

    def query_all(self, selector: str) -> List[Tag]:
        return list(self.soup.select(selector))

    def query_one(self, selector: str) -> Optional[Tag]:
        return self.soup.select_one(selector)

    def get_tag_name(self, element: Tag) -> str:
        return (element.name or "").lower()

    def get_attribute(self, element: Tag, name: str) -> Optional[str]:
        value = element.get(name)
        if value is None:
            return None
        # bs4 splits multi-valued attributes such as rel and class
        if isinstance(value, list):
            return " ".join(value)
        return value

    def has_attribute(self, element: Tag, name: str) -> bool:
        return element.has_attr(name)

    def get_text(self, element: Tag) -> str:
        if self.get_tag_name(element) in ("script", "style"):
            return "".join(str(child) for child in element.contents if isinstance(child, NavigableString))
        return element.get_text()

    def is_visible(self, element: Tag) -> bool:
        if element.has_attr("hidden"):
            return False

        if (self.get_attribute(element, "aria-hidden") or "").strip().lower() == "true":
            return False

        style = _parse_inline_style(self.get_attribute(element, "style"))
        if style.get("display") == "none":
            return False

        # visibility is inherited: the nearest declaration wins
        node = element
        while isinstance(node, Tag):
            visibility = _parse_inline_style(self.get_attribute(node, "style")).get("visibility")
            if visibility:
                return visibility not in ("hidden", "collapse")
            node = node.parent

        return True

    def body_text(self, excluded_tags: Iterable[str] = EXCLUDED_TEXT_TAGS) -> str:
        excluded = set(excluded_tags)
        root = self.soup.body
        if root is None:
            # fragments parsed by html.parser have no <body>
            root = self.soup
            excluded.update(("head", "title"))

        chunks = []
        self._collect_text(root, excluded, chunks)
        return clean_text(" ".join(chunks))

    def _collect_text(self, node: Tag, excluded: set, chunks: List[str]):
        for child in node.children:
            if isinstance(child, PreformattedString):
                # comments, doctypes, CDATA
                continue
            if isinstance(child, NavigableString):
                chunks.append(str(child))
            elif isinstance(child, Tag) and child.name not in excluded:
                self._collect_text(child, excluded, chunks)

def parse_html(html: str, parser: str = None) -> SoupDocument:
    """Parse raw HTML into a SoupDocument"""
    if not html or not html.strip():
        raise DocumentParseError("Empty HTML provided")

    try:
        soup = BeautifulSoup(html, parser or config.html_parser)
    except ParserRejectedMarkup as e:
        logger.error(f"HTML parsing error: {e}")
        raise DocumentParseError(f"Failed to parse HTML: {e}") from e

    return SoupDocument(soup)
