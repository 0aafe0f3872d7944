"""
Configuration file for SEO Analyzer
"""
from dataclasses import dataclass
from typing import List, Optional

@dataclass
class AnalyzerConfig:
    """Configuration settings for the SEO analyzer"""

    # Meta thresholds
    title_min_length: int = 30
    title_max_length: int = 60
    description_min_length: int = 120
    description_max_length: int = 160

    # Images and links
    missing_alt_critical_percentage: float = 50.0
    max_external_links_without_nofollow: int = 20
    max_anchor_text_length: int = 200
    generic_anchor_phrases: List[str] = None

    # Keyword analysis
    keyword_min_word_length: int = 3
    keyword_min_occurrences: int = 2
    keyword_max_results: int = 20
    keyword_max_density: float = 3.5
    keyword_optimal_min_density: float = 1.0
    keyword_optimal_max_density: float = 2.5

    # Scoring
    critical_penalty: int = 15
    warning_penalty: int = 5
    recommendation_penalty: int = 2
    readability_bonus_threshold: float = 60.0
    readability_bonus: int = 5
    schema_bonus: int = 5

    # Parsing
    html_parser: str = "html.parser"
    parallel_extraction: bool = False
    max_workers: int = 7

    # Fetching
    timeout: int = 30
    max_retries: int = 3
    backoff_factor: float = 0.3
    max_html_size: int = 10 * 1024 * 1024
    user_agents: List[str] = None

    # Logging
    log_level: str = "INFO"
    log_format: str = "%(asctime)s - %(levelname)s - %(message)s"
    log_dir: Optional[str] = None

    def __post_init__(self):
        if self.generic_anchor_phrases is None:
            self.generic_anchor_phrases = [
                "click here",
                "read more",
                "learn more",
                "more",
                "here",
                "this",
                "link",
                "click",
            ]

        if self.user_agents is None:
            self.user_agents = [
                "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
                "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
                "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
            ]

# Default configuration instance
config = AnalyzerConfig()
