"""
Main SEO Analyzer - Orchestrates all analysis modules
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from datetime import datetime, timezone
from typing import Sequence

from config import AnalyzerConfig, config
from content_analyzer import ContentAnalyzer, categorize_links, count_images_by_alt
from document import DocumentAdapter, parse_html
from issue_detector import IssueDetector
from keyword_analyzer import KeywordAnalyzer, count_unique_keywords
from models import (
    AnalysisResult, Heading, ImageInfo, KeywordDensity, LinkInfo, ReadabilityScore,
    SchemaRecord, ScoreRating, SEOIssue, Statistics
)
from readability import calculate_readability
from schema_parser import parse_schema
from text_processor import count_characters, count_words
from utils import PerformanceMonitor

logger = logging.getLogger(__name__)

class SEOAnalyzer:
    """Runs the extraction, text analytics, issue detection and scoring stages"""

    def __init__(self, analyzer_config: AnalyzerConfig = None, issue_detector: IssueDetector = None):
        self.config = analyzer_config or config
        self.content_analyzer = ContentAnalyzer(self.config)
        self.keyword_analyzer = KeywordAnalyzer(self.config)
        self.issue_detector = issue_detector or IssueDetector(analyzer_config=self.config)

    def analyze_html(self, html: str, url: str, fetched_at: str = None) -> AnalysisResult:
        """Parse raw HTML and analyze it"""
        document = parse_html(html, self.config.html_parser)
        return self.analyze(document, url, fetched_at)

    def analyze(self, document: DocumentAdapter, url: str, fetched_at: str = None) -> AnalysisResult:
        """Analyze an already-parsed document against its base URL"""
        if not url or not url.strip():
            raise ValueError("A base URL is required for analysis")

        monitor = PerformanceMonitor()
        monitor.start_timer("analysis")
        logger.info(f"Starting SEO analysis for {url}")

        text = document.body_text()

        stages = {
            "metadata": lambda: self.content_analyzer.extract_metadata(document),
            "headings": lambda: self.content_analyzer.analyze_headings(document),
            "images": lambda: self.content_analyzer.analyze_images(document),
            "links": lambda: self.content_analyzer.analyze_links(document, url),
            "schema": lambda: parse_schema(document),
            "readability": lambda: calculate_readability(text),
            "keywords": lambda: self.keyword_analyzer.analyze(text),
        }

        if self.config.parallel_extraction:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                futures = {name: executor.submit(stage) for name, stage in stages.items()}
                outputs = {name: future.result() for name, future in futures.items()}
        else:
            outputs = {name: stage() for name, stage in stages.items()}

        issues = self.issue_detector.detect(
            outputs["metadata"], outputs["headings"], outputs["images"], outputs["links"], outputs["schema"]
        )

        stats = calculate_statistics(
            text, outputs["headings"], outputs["images"], outputs["links"], outputs["schema"], outputs["keywords"]
        )
        score = calculate_seo_score(issues, outputs["readability"], stats, self.config)

        result = AnalysisResult(
            url=url,
            fetched_at=fetched_at or datetime.now(timezone.utc).isoformat(),
            metadata=outputs["metadata"],
            headings=outputs["headings"],
            images=outputs["images"],
            links=outputs["links"],
            schema=outputs["schema"],
            readability=outputs["readability"],
            keywords=outputs["keywords"],
            issues=issues,
            stats=stats,
            score=score,
            rating=get_seo_score_rating(score),
        )

        duration = monitor.end_timer("analysis")
        logger.info(f"Completed analysis for {url}: score {score}, {len(issues)} issues in {duration:.3f}s")
        return result

def calculate_statistics(text: str, headings: Sequence[Heading], images: Sequence[ImageInfo],
                         links: Sequence[LinkInfo], schemas: Sequence[SchemaRecord],
                         keywords: Sequence[KeywordDensity]) -> Statistics:
    """Aggregate counts over the extracted structures"""
    image_stats = count_images_by_alt(images)
    link_stats = categorize_links(links)

    return Statistics(
        total_words=count_words(text),
        total_characters=count_characters(text),
        total_images=len(images),
        images_with_alt=image_stats["with_alt"],
        images_without_alt=image_stats["without_alt"],
        total_links=len(links),
        internal_links=len(link_stats["internal"]),
        external_links=len(link_stats["external"]),
        anchor_links=len(link_stats["anchor"]),
        h1_count=sum(1 for h in headings if h.level == 1),
        schema_count=sum(1 for s in schemas if s.is_valid),
        unique_keywords=count_unique_keywords(keywords),
    )

def calculate_seo_score(issues: Sequence[SEOIssue], readability: ReadabilityScore, stats: Statistics,
                        analyzer_config: AnalyzerConfig = None) -> int:
    """
    Overall score between 0 and 100.

    Starts at 100, subtracts a penalty per issue by severity, adds flat
    bonuses for good readability and valid structured data, then clamps.
    """
    cfg = analyzer_config or config
    penalties = {
        "critical": cfg.critical_penalty,
        "warning": cfg.warning_penalty,
        "recommendation": cfg.recommendation_penalty,
    }

    score = 100
    for issue in issues:
        score -= penalties[issue.severity]

    if readability.flesch_score >= cfg.readability_bonus_threshold:
        score += cfg.readability_bonus

    if stats.schema_count > 0:
        score += cfg.schema_bonus

    return max(0, min(100, score))

def get_seo_score_rating(score: float) -> ScoreRating:
    if score >= 90:
        return ScoreRating("Excellent", "success", "Your page has excellent SEO!")
    elif score >= 75:
        return ScoreRating("Good", "success", "Your page has good SEO with minor improvements possible.")
    elif score >= 50:
        return ScoreRating("Fair", "warning", "Your page needs some SEO improvements.")
    else:
        return ScoreRating("Poor", "error", "Your page has significant SEO issues that need attention.")

def analyze_html(html: str, url: str, fetched_at: str = None) -> AnalysisResult:
    """Convenience wrapper using the default configuration"""
    return SEOAnalyzer().analyze_html(html, url, fetched_at)
