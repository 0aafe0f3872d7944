"""
Pytest configuration and shared fixtures
"""
import pytest
import os

# Add project root to path
import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from config import AnalyzerConfig
from document import SoupDocument, parse_html


BASE_URL = "https://example.com/running-shoes"
FIXED_TIMESTAMP = "2024-01-01T00:00:00+00:00"

DESCRIPTION = ("Running shoes guide. " * 7).strip()

SAMPLE_HTML = f"""<!DOCTYPE html>
<html lang="en">
    <head>
        <meta charset="utf-8">
        <title>Buy Running Shoes Online | Example Store Guide</title>
        <meta name="description" content="{DESCRIPTION}">
        <meta name="viewport" content="width=device-width, initial-scale=1">
        <meta name="robots" content="index, follow">
        <meta name="keywords" content="running shoes, trainers">
        <meta name="author" content="Example Store">
        <meta property="og:title" content="Running Shoes">
        <meta property="og:description" content="Guide">
        <meta name="twitter:card" content="summary">
        <meta http-equiv="X-UA-Compatible" content="IE=edge">
        <link rel="canonical" href="https://example.com/running-shoes">
        <link rel="icon" href="/favicon.ico">
        <script type="application/ld+json">
        {{"@context": "https://schema.org", "@type": "Article", "headline": "Running shoes"}}
        </script>
        <style>body {{ color: red; }}</style>
    </head>
    <body>
        <h1>Running Shoes Guide</h1>
        <p>Good running shoes make running easy. Pick running shoes that fit well.</p>
        <h2>Fit and Comfort</h2>
        <p>Try shoes late in the day. Your feet swell a bit.</p>
        <h3>Sizing</h3>
        <p>Leave a thumb of space.</p>
        <h2 hidden>Hidden heading</h2>
        <img src="/img/shoe.jpg" alt="Blue running shoe" width="300" height="200px" loading="lazy">
        <img src="/img/sole.jpg" alt="Shoe sole close up" loading="auto">
        <a href="/guides/trail">Trail running guide</a>
        <a href="https://example.com/sale">Shoe sale</a>
        <a href="https://partner.com/shop" rel="nofollow sponsored" target="_blank">Partner shop</a>
        <a href="mailto:info@example.com">Email us</a>
        <a href="/empty"></a>
        <script>var tracking = "ignored words";</script>
    </body>
</html>
"""

BARE_HTML = "<html><head></head><body><p>Just a paragraph of text.</p></body></html>"


class StubVisibilityDocument(SoupDocument):
    """SoupDocument whose visibility is decided by a data-visible attribute"""

    def is_visible(self, element):
        return element.get("data-visible") != "no"


@pytest.fixture
def analyzer_config():
    """Configuration with defaults and sequential extraction"""
    return AnalyzerConfig(parallel_extraction=False)


@pytest.fixture
def sample_html():
    return SAMPLE_HTML


@pytest.fixture
def sample_document():
    return parse_html(SAMPLE_HTML)


@pytest.fixture
def bare_document():
    return parse_html(BARE_HTML)


@pytest.fixture
def make_document():
    """Build a document from an HTML snippet"""
    def _make(html):
        return parse_html(html)
    return _make


@pytest.fixture
def make_stub_document():
    """Build a document whose visibility is stubbed"""
    def _make(html):
        return StubVisibilityDocument(parse_html(html).soup)
    return _make
