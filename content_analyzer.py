"""
Content analysis module for SEO Analyzer: metadata, headings, images and links
"""
import re
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from config import AnalyzerConfig, config
from document import DocumentAdapter
from models import (
    Heading, ImageInfo, LinkInfo, MetaData, MetaTag, OpenGraphTag, TwitterCardTag, LOADING_VALUES
)
from text_processor import count_words
from utils import has_nofollow, is_internal_link

logger = logging.getLogger(__name__)

HEADING_SELECTOR = "h1, h2, h3, h4, h5, h6"
FAVICON_SELECTORS = (
    'link[rel="icon"]',
    'link[rel="shortcut icon"]',
    'link[rel="apple-touch-icon"]',
)
SKIPPED_SCHEMES = ("javascript:", "mailto:", "tel:")
SOCIAL_PREFIXES = ("og:", "twitter:")
NAMED_META_TAGS = ("description", "keywords", "robots", "viewport")

_CHARSET_PATTERN = re.compile(r"charset=([^;]+)", re.IGNORECASE)
_LEADING_INT_PATTERN = re.compile(r"^\s*([+-]?\d+)")

class ContentAnalyzer:
    """Extracts structural facts from a parsed document"""

    def __init__(self, analyzer_config: AnalyzerConfig = None):
        self.config = analyzer_config or config

    # Metadata

    def extract_metadata(self, document: DocumentAdapter) -> MetaData:
        """Extract title, named meta tags, social tags and head links"""
        return MetaData(
            title=self._extract_title(document),
            description=self._get_meta_content(document, "description"),
            keywords=self._get_meta_content(document, "keywords"),
            robots=self._get_meta_content(document, "robots"),
            viewport=self._get_meta_content(document, "viewport"),
            charset=self._extract_charset(document),
            language=self._extract_language(document),
            canonical_url=self._extract_canonical_url(document),
            favicon=self._extract_favicon(document),
            og_tags=self._extract_open_graph_tags(document),
            twitter_tags=self._extract_twitter_card_tags(document),
            other=self._extract_other_meta_tags(document),
        )

    def _extract_title(self, document: DocumentAdapter) -> Optional[str]:
        title = document.query_one("title")
        if title is None:
            return None
        return document.get_text(title).strip() or None

    def _get_meta_content(self, document: DocumentAdapter, name: str) -> Optional[str]:
        """Look up by name first, then by property"""
        meta = document.query_one(f'meta[name="{name}"]')
        if meta is None:
            meta = document.query_one(f'meta[property="{name}"]')
        if meta is None:
            return None
        return document.get_attribute(meta, "content") or None

    def _extract_canonical_url(self, document: DocumentAdapter) -> Optional[str]:
        canonical = document.query_one('link[rel="canonical"]')
        if canonical is None:
            return None
        return document.get_attribute(canonical, "href") or None

    def _extract_favicon(self, document: DocumentAdapter) -> Optional[str]:
        for selector in FAVICON_SELECTORS:
            link = document.query_one(selector)
            if link is not None:
                return document.get_attribute(link, "href") or None
        return None

    def _extract_language(self, document: DocumentAdapter) -> Optional[str]:
        html = document.query_one("html")
        if html is None:
            return None
        return document.get_attribute(html, "lang") or None

    def _extract_charset(self, document: DocumentAdapter) -> Optional[str]:
        meta = document.query_one("meta[charset]")
        if meta is not None:
            return document.get_attribute(meta, "charset") or None

        meta = document.query_one('meta[http-equiv="content-type" i]')
        if meta is not None:
            match = _CHARSET_PATTERN.search(document.get_attribute(meta, "content") or "")
            if match:
                return match.group(1).strip()

        return None

    def _extract_open_graph_tags(self, document: DocumentAdapter) -> Tuple[OpenGraphTag, ...]:
        return tuple(
            OpenGraphTag(
                property=document.get_attribute(tag, "property") or "",
                content=document.get_attribute(tag, "content") or "",
            )
            for tag in document.query_all('meta[property^="og:"]')
        )

    def _extract_twitter_card_tags(self, document: DocumentAdapter) -> Tuple[TwitterCardTag, ...]:
        return tuple(
            TwitterCardTag(
                name=document.get_attribute(tag, "name") or "",
                content=document.get_attribute(tag, "content") or "",
            )
            for tag in document.query_all('meta[name^="twitter:"]')
        )

    def _extract_other_meta_tags(self, document: DocumentAdapter) -> Tuple[MetaTag, ...]:
        other_tags = []

        for meta in document.query_all("meta"):
            name = document.get_attribute(meta, "name")
            prop = document.get_attribute(meta, "property")
            content = document.get_attribute(meta, "content")

            if not content:
                continue

            if prop and prop.startswith(SOCIAL_PREFIXES):
                continue
            if name and name.startswith(SOCIAL_PREFIXES):
                continue

            if name and name.lower() in NAMED_META_TAGS:
                continue

            if document.has_attribute(meta, "charset") or document.has_attribute(meta, "http-equiv"):
                continue

            other_tags.append(MetaTag(content=content, name=name or None, property=prop or None))

        return tuple(other_tags)

    # Headings

    def analyze_headings(self, document: DocumentAdapter) -> Tuple[Heading, ...]:
        """Visible, non-empty h1-h6 headings in document order"""
        headings = []

        for element in document.query_all(HEADING_SELECTOR):
            if not document.is_visible(element):
                continue

            text = document.get_text(element).strip()
            if not text:
                continue

            headings.append(Heading(
                level=int(document.get_tag_name(element)[1]),
                text=text,
                word_count=count_words(text),
            ))

        return tuple(headings)

    # Images

    def analyze_images(self, document: DocumentAdapter) -> Tuple[ImageInfo, ...]:
        images = []

        for img in document.query_all("img"):
            if not document.is_visible(img):
                continue

            src = document.get_attribute(img, "src")
            if not src:
                continue

            loading = document.get_attribute(img, "loading")

            images.append(ImageInfo(
                src=src,
                # keep alt="" distinct from a missing alt
                alt=document.get_attribute(img, "alt"),
                title=document.get_attribute(img, "title") or None,
                width=_parse_dimension(document.get_attribute(img, "width")),
                height=_parse_dimension(document.get_attribute(img, "height")),
                loading=loading if loading in LOADING_VALUES else None,
            ))

        return tuple(images)

    # Links

    def analyze_links(self, document: DocumentAdapter, base_url: str) -> Tuple[LinkInfo, ...]:
        """Visible text links, classified and resolved against base_url"""
        links = []

        for link in document.query_all("a[href]"):
            if not document.is_visible(link):
                continue

            href = document.get_attribute(link, "href")
            if not href:
                continue

            if href.lower().startswith(SKIPPED_SCHEMES):
                continue

            anchor_text = document.get_text(link).strip()[:self.config.max_anchor_text_length]
            if not anchor_text:
                continue

            if href.startswith("#"):
                link_type = "anchor"
            elif is_internal_link(href, base_url):
                link_type = "internal"
            else:
                link_type = "external"

            rel = document.get_attribute(link, "rel")

            links.append(LinkInfo(
                href=href if link_type == "anchor" else document.resolve_url(href, base_url),
                anchor_text=anchor_text,
                type=link_type,
                rel=rel or None,
                target=document.get_attribute(link, "target") or None,
                nofollow=has_nofollow(rel),
            ))

        return tuple(links)

def _parse_dimension(value: Optional[str]) -> Optional[int]:
    """Leading integer of a width/height attribute, e.g. "300px" -> 300"""
    if not value:
        return None
    match = _LEADING_INT_PATTERN.match(value)
    return int(match.group(1)) if match else None

def has_skipped_levels(headings: Sequence[Heading]) -> bool:
    """True if any heading is more than one level deeper than the one before it"""
    for previous, current in zip(headings, headings[1:]):
        if current.level > previous.level + 1:
            return True
    return False

def detect_heading_problems(headings: Sequence[Heading]) -> Dict[str, bool]:
    h1_count = sum(1 for h in headings if h.level == 1)
    return {
        "has_multiple_h1": h1_count > 1,
        "has_no_h1": h1_count == 0,
        "has_skipped_levels": has_skipped_levels(headings),
    }

def count_images_by_alt(images: Sequence[ImageInfo]) -> Dict[str, int]:
    with_alt = sum(1 for img in images if img.alt and img.alt.strip())
    return {
        "with_alt": with_alt,
        "without_alt": len(images) - with_alt,
        "total": len(images),
    }

def count_lazy_loaded_images(images: Sequence[ImageInfo]) -> int:
    return sum(1 for img in images if img.loading == "lazy")

def get_first_image(images: Sequence[ImageInfo]) -> Optional[ImageInfo]:
    return images[0] if images else None

def categorize_links(links: Sequence[LinkInfo]) -> Dict[str, List[LinkInfo]]:
    return {
        "internal": [l for l in links if l.type == "internal"],
        "external": [l for l in links if l.type == "external"],
        "anchor": [l for l in links if l.type == "anchor"],
    }

def count_nofollow_links(links: Sequence[LinkInfo]) -> int:
    return sum(1 for l in links if l.nofollow)

def is_generic_anchor_text(text: str, phrases: Sequence[str] = None) -> bool:
    if phrases is None:
        phrases = config.generic_anchor_phrases
    normalized = " ".join(text.lower().split())
    return normalized in phrases

def find_generic_anchor_links(links: Sequence[LinkInfo], phrases: Sequence[str] = None) -> List[LinkInfo]:
    """Links whose whole anchor text is a generic phrase like "click here" """
    return [link for link in links if is_generic_anchor_text(link.anchor_text, phrases)]
