"""
Page retrieval: direct HTTP fetch and manual (file) input
"""
import re
import random
import logging
from dataclasses import dataclass
from typing import List, Optional

import requests
from bs4 import UnicodeDammit
from requests.adapters import HTTPAdapter
from urllib3.util.retry import Retry

from config import config
from utils import is_valid_url, normalize_url

logger = logging.getLogger(__name__)

CHUNK_SIZE = 64 * 1024
_CHARSET_PATTERN = re.compile(r"charset=([^;]+)", re.IGNORECASE)

@dataclass(frozen=True)
class FetchResult:
    """Raw HTML plus the URL it was actually retrieved from"""
    html: str
    url: str
    strategy: str  # 'direct' or 'manual'

class PageFetcher:
    """requests session with retry logic and error handling"""

    def __init__(self, max_retries: int = None, backoff_factor: float = None,
                 timeout: int = None, user_agents: List[str] = None, max_html_size: int = None):
        self.session = requests.Session()
        self.timeout = timeout or config.timeout
        self.user_agents = user_agents or config.user_agents
        self.max_html_size = max_html_size or config.max_html_size

        # Configure retry strategy
        retry_strategy = Retry(
            total=config.max_retries if max_retries is None else max_retries,
            status_forcelist=[429, 500, 502, 503, 504],
            allowed_methods=["HEAD", "GET", "OPTIONS"],
            backoff_factor=config.backoff_factor if backoff_factor is None else backoff_factor,
            raise_on_status=False
        )

        adapter = HTTPAdapter(max_retries=retry_strategy)
        self.session.mount("http://", adapter)
        self.session.mount("https://", adapter)

        self.session.headers.update({
            'Accept': 'text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8',
            'Accept-Language': 'en-US,en;q=0.5',
        })

    def fetch(self, url: str) -> Optional[FetchResult]:
        """Fetch a page, falling back from https to http on a non-OK response"""
        url = normalize_url(url)
        if not is_valid_url(url):
            logger.error(f"Invalid URL: {url}")
            return None

        response = self._get(url)
        if response is None and url.startswith("https://"):
            fallback_url = "http://" + url[len("https://"):]
            logger.info(f"Retrying over http: {fallback_url}")
            response = self._get(fallback_url)

        if response is None:
            return None

        content = self._read_body(response, url)
        if content is None:
            return None

        html = self._decode(content, response.headers.get('Content-Type', '')) if content.strip() else ""
        if not html.strip():
            logger.warning(f"Empty response received from {url}")
            return None

        return FetchResult(html=html, url=response.url or url, strategy="direct")

    def _read_body(self, response: requests.Response, url: str) -> Optional[bytes]:
        """Stream the body, giving up as soon as it is known to exceed max_html_size"""
        try:
            declared = response.headers.get('Content-Length', '')
            if declared.isdigit() and int(declared) > self.max_html_size:
                logger.warning(f"HTML size exceeds limit ({int(declared) / 1024 / 1024:.1f}MB) for {url}")
                return None

            chunks = []
            size = 0
            for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
                size += len(chunk)
                if size > self.max_html_size:
                    logger.warning(f"HTML size exceeds limit (over {self.max_html_size} bytes) for {url}")
                    return None
                chunks.append(chunk)
            return b"".join(chunks)

        except requests.exceptions.RequestException as e:
            logger.error(f"Error reading body from {url}: {e}")
            return None
        finally:
            response.close()

    @staticmethod
    def _decode(content: bytes, content_type: str) -> str:
        """Decode with the HTTP charset if one is given, else the page's meta charset or a detected one"""
        match = _CHARSET_PATTERN.search(content_type)
        charset = match.group(1).strip(' "\'') if match else None

        dammit = UnicodeDammit(content, known_definite_encodings=[charset] if charset else [], is_html=True)
        if dammit.unicode_markup is None:
            logger.warning("Could not determine page encoding, decoding as UTF-8")
            return content.decode("utf-8", errors="replace")

        logger.debug(f"Decoded page as {dammit.original_encoding}")
        return dammit.unicode_markup

    def _get(self, url: str) -> Optional[requests.Response]:
        try:
            # Rotate user agent
            self.session.headers['User-Agent'] = random.choice(self.user_agents)

            response = self.session.get(url, timeout=self.timeout, stream=True)

            if response.status_code == 200:
                logger.debug(f"Successfully fetched {url}")
                return response

            response.close()
            if response.status_code == 403:
                logger.warning(f"Access forbidden for {url}")
                return None
            elif response.status_code == 404:
                logger.warning(f"Page not found: {url}")
                return None
            else:
                logger.warning(f"HTTP {response.status_code} for {url}")
                return None

        except requests.exceptions.Timeout:
            logger.error(f"Timeout error for {url}")
            return None
        except requests.exceptions.ConnectionError:
            logger.error(f"Connection error for {url}")
            return None
        except requests.exceptions.RequestException as e:
            logger.error(f"Request error for {url}: {e}")
            return None

    def close(self):
        self.session.close()

def load_html_file(path: str, url: str, encoding: str = "utf-8") -> FetchResult:
    """Read HTML saved to disk; the caller supplies the page's base URL"""
    with open(path, "r", encoding=encoding, errors="replace") as f:
        html = f.read()
    return FetchResult(html=html, url=url, strategy="manual")
