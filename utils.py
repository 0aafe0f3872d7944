"""
Utility functions for URL handling and performance timing
"""
import time
import logging
from typing import Optional
from urllib.parse import urljoin, urlparse

logger = logging.getLogger(__name__)

def is_valid_url(url: str) -> bool:
    """Validate that a URL is an absolute http(s) URL"""
    if not url or not url.strip():
        return False
    try:
        result = urlparse(url)
        return result.scheme in ("http", "https") and bool(result.netloc)
    except ValueError:
        return False

def normalize_url(url: str) -> str:
    """Add a protocol to bare or protocol-relative URLs"""
    if not url or not url.strip():
        return ""

    url = url.strip()

    if url.startswith("//"):
        return "https:" + url

    if not url.startswith("http://") and not url.startswith("https://"):
        return "https://" + url

    return url

def get_hostname(url: str) -> str:
    """Extract the hostname from a URL, empty string if there is none"""
    try:
        return urlparse(url).hostname or ""
    except ValueError:
        return ""

def is_internal_link(href: str, base_url: str) -> bool:
    """Relative hrefs and same-hostname absolute hrefs are internal"""
    if not href:
        return False

    if href.startswith("#"):
        return True

    if href.startswith("/") and not href.startswith("//"):
        return True

    if not href.startswith(("http://", "https://", "//")):
        return True

    return get_hostname(href) == get_hostname(base_url)

def resolve_url(href: str, base_url: str) -> str:
    """Resolve href against base_url; absolute http(s) URLs pass through"""
    if not href:
        return ""

    if href.startswith(("http://", "https://")):
        return href

    try:
        return urljoin(base_url, href)
    except ValueError:
        return href

def has_nofollow(rel: Optional[str]) -> bool:
    if not rel:
        return False
    return "nofollow" in rel.lower()

class PerformanceMonitor:
    """Monitor and log performance metrics"""

    def __init__(self):
        self.metrics = {}

    def start_timer(self, operation: str):
        """Start timing an operation"""
        self.metrics[operation] = {'start': time.perf_counter()}

    def end_timer(self, operation: str) -> float:
        """End timing and log results"""
        if operation in self.metrics and 'start' in self.metrics[operation]:
            duration = time.perf_counter() - self.metrics[operation]['start']
            self.metrics[operation]['duration'] = duration
            logger.debug(f"Operation '{operation}' completed in {duration:.4f} seconds")
            return duration
        return 0

    def get_metrics(self) -> dict:
        """Get all recorded metrics"""
        return self.metrics.copy()
