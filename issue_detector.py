"""
Rule-based SEO issue detection.

Each rule reads one extracted structure and returns zero or more issues.
Rules are independent of each other, so a new check is a new table entry.
"""
import logging
from dataclasses import dataclass
from typing import Any, Callable, List, Sequence, Tuple

from config import AnalyzerConfig, config
from content_analyzer import detect_heading_problems, find_generic_anchor_links
from models import Heading, ImageInfo, LinkInfo, MetaData, SchemaRecord, SEOIssue
from text_processor import round_half_up

logger = logging.getLogger(__name__)

@dataclass(frozen=True)
class IssueRule:
    name: str
    source: str  # 'metadata', 'headings', 'images', 'links' or 'schema'
    check: Callable[[Any, AnalyzerConfig], List[SEOIssue]]

# Meta rules

def check_title(metadata: MetaData, cfg: AnalyzerConfig) -> List[SEOIssue]:
    if not metadata.title:
        return [SEOIssue(
            severity="critical",
            category="meta",
            message="Missing page title",
            suggestion="Add a descriptive <title> tag to your page. Titles should be 50-60 characters long.",
        )]

    length = len(metadata.title)
    if length < cfg.title_min_length:
        return [SEOIssue(
            severity="warning",
            category="meta",
            message=f"Title is too short ({length} characters)",
            suggestion=f'Title should be at least {cfg.title_min_length} characters. Current: "{metadata.title}"',
        )]
    if length > cfg.title_max_length:
        return [SEOIssue(
            severity="warning",
            category="meta",
            message=f"Title is too long ({length} characters)",
            suggestion=f"Title should be no more than {cfg.title_max_length} characters. It may be truncated in search results.",
        )]
    return []

def check_description(metadata: MetaData, cfg: AnalyzerConfig) -> List[SEOIssue]:
    if not metadata.description:
        return [SEOIssue(
            severity="warning",
            category="meta",
            message="Missing meta description",
            suggestion="Add a meta description tag. Descriptions should be 150-160 characters and compelling.",
        )]

    length = len(metadata.description)
    if length < cfg.description_min_length:
        return [SEOIssue(
            severity="warning",
            category="meta",
            message=f"Meta description is too short ({length} characters)",
            suggestion=f"Description should be at least {cfg.description_min_length} characters.",
        )]
    if length > cfg.description_max_length:
        return [SEOIssue(
            severity="recommendation",
            category="meta",
            message=f"Meta description is too long ({length} characters)",
            suggestion=f"Description should be no more than {cfg.description_max_length} characters to avoid truncation.",
        )]
    return []

def check_canonical(metadata: MetaData, cfg: AnalyzerConfig) -> List[SEOIssue]:
    if metadata.canonical_url:
        return []
    return [SEOIssue(
        severity="recommendation",
        category="meta",
        message="Missing canonical URL",
        suggestion="Add a canonical link tag to prevent duplicate content issues.",
    )]

def check_viewport(metadata: MetaData, cfg: AnalyzerConfig) -> List[SEOIssue]:
    if metadata.viewport:
        return []
    return [SEOIssue(
        severity="warning",
        category="meta",
        message="Missing viewport meta tag",
        suggestion='Add <meta name="viewport" content="width=device-width, initial-scale=1"> for mobile responsiveness.',
    )]

def check_language(metadata: MetaData, cfg: AnalyzerConfig) -> List[SEOIssue]:
    if metadata.language:
        return []
    return [SEOIssue(
        severity="recommendation",
        category="meta",
        message="Missing language attribute",
        suggestion='Add lang attribute to <html> tag (e.g., <html lang="en">).',
    )]

def check_open_graph(metadata: MetaData, cfg: AnalyzerConfig) -> List[SEOIssue]:
    if metadata.og_tags:
        return []
    return [SEOIssue(
        severity="recommendation",
        category="meta",
        message="Missing Open Graph tags",
        suggestion="Add Open Graph tags for better social media sharing (og:title, og:description, og:image).",
    )]

# Heading rules

def check_h1_count(headings: Sequence[Heading], cfg: AnalyzerConfig) -> List[SEOIssue]:
    problems = detect_heading_problems(headings)

    if problems["has_multiple_h1"]:
        h1_count = sum(1 for h in headings if h.level == 1)
        return [SEOIssue(
            severity="critical",
            category="structure",
            message=f"Multiple H1 tags found ({h1_count})",
            suggestion="Use only one H1 tag per page. H1 should represent the main page topic.",
        )]

    if problems["has_no_h1"]:
        return [SEOIssue(
            severity="critical",
            category="structure",
            message="No H1 tag found",
            suggestion="Add an H1 tag to clearly identify the main topic of the page.",
        )]

    return []

def check_heading_hierarchy(headings: Sequence[Heading], cfg: AnalyzerConfig) -> List[SEOIssue]:
    if not detect_heading_problems(headings)["has_skipped_levels"]:
        return []
    return [SEOIssue(
        severity="warning",
        category="structure",
        message="Heading hierarchy skips levels",
        suggestion="Maintain proper heading hierarchy (H1 → H2 → H3). Don't skip levels (e.g., H1 → H3).",
    )]

def check_empty_headings(headings: Sequence[Heading], cfg: AnalyzerConfig) -> List[SEOIssue]:
    empty = [h for h in headings if not h.text or not h.text.strip()]
    if not empty:
        return []
    return [SEOIssue(
        severity="warning",
        category="content",
        message=f"Found {len(empty)} empty heading(s)",
        suggestion="All headings should contain meaningful text.",
    )]

# Image rules

def check_missing_alt(images: Sequence[ImageInfo], cfg: AnalyzerConfig) -> List[SEOIssue]:
    missing = [img for img in images if not img.alt or not img.alt.strip()]
    if not missing:
        return []

    percentage = (len(missing) / len(images)) * 100
    if percentage > cfg.missing_alt_critical_percentage:
        return [SEOIssue(
            severity="critical",
            category="images",
            message=f"{len(missing)} of {len(images)} images missing alt text ({round_half_up(percentage):.0f}%)",
            suggestion="Add descriptive alt text to all images for accessibility and SEO.",
        )]

    return [SEOIssue(
        severity="warning",
        category="images",
        message=f"{len(missing)} of {len(images)} images missing alt text",
        suggestion="Add descriptive alt text to all images for better accessibility.",
    )]

def check_empty_alt(images: Sequence[ImageInfo], cfg: AnalyzerConfig) -> List[SEOIssue]:
    empty = [img for img in images if img.alt == ""]
    if not empty:
        return []
    return [SEOIssue(
        severity="recommendation",
        category="images",
        message=f"{len(empty)} image(s) with empty alt attribute",
        suggestion='Empty alt (alt="") should only be used for decorative images. Add descriptive alt text for content images.',
    )]

# Link rules

def check_generic_anchor_text(links: Sequence[LinkInfo], cfg: AnalyzerConfig) -> List[SEOIssue]:
    generic = find_generic_anchor_links(links, cfg.generic_anchor_phrases)
    if not generic:
        return []
    return [SEOIssue(
        severity="recommendation",
        category="links",
        message=f"{len(generic)} link(s) with generic anchor text",
        suggestion='Use descriptive anchor text instead of generic phrases like "click here" or "read more".',
    )]

def check_anchor_links(links: Sequence[LinkInfo], cfg: AnalyzerConfig) -> List[SEOIssue]:
    anchors = [l for l in links if l.type == "anchor"]
    if not anchors:
        return []
    return [SEOIssue(
        severity="recommendation",
        category="links",
        message=f"Found {len(anchors)} anchor link(s)",
        suggestion="Ensure all anchor links point to existing IDs on the page.",
    )]

def check_external_nofollow(links: Sequence[LinkInfo], cfg: AnalyzerConfig) -> List[SEOIssue]:
    followed = [l for l in links if l.type == "external" and not l.nofollow]
    if len(followed) <= cfg.max_external_links_without_nofollow:
        return []
    return [SEOIssue(
        severity="recommendation",
        category="links",
        message=f"{len(followed)} external links without nofollow",
        suggestion="Consider adding rel=\"nofollow\" to external links you don't want to endorse.",
    )]

# Schema rules

def check_invalid_schema(schemas: Sequence[SchemaRecord], cfg: AnalyzerConfig) -> List[SEOIssue]:
    invalid = [s for s in schemas if not s.is_valid]
    if not invalid:
        return []
    return [SEOIssue(
        severity="warning",
        category="schema",
        message=f"{len(invalid)} invalid JSON-LD schema(s)",
        suggestion="Fix JSON syntax errors in structured data.",
    )]

def check_missing_schema(schemas: Sequence[SchemaRecord], cfg: AnalyzerConfig) -> List[SEOIssue]:
    if schemas:
        return []
    return [SEOIssue(
        severity="recommendation",
        category="schema",
        message="No structured data (JSON-LD) found",
        suggestion="Add schema.org structured data to help search engines understand your content better.",
    )]

DEFAULT_RULES: Tuple[IssueRule, ...] = (
    IssueRule("title", "metadata", check_title),
    IssueRule("description", "metadata", check_description),
    IssueRule("canonical", "metadata", check_canonical),
    IssueRule("viewport", "metadata", check_viewport),
    IssueRule("language", "metadata", check_language),
    IssueRule("open_graph", "metadata", check_open_graph),
    IssueRule("h1_count", "headings", check_h1_count),
    IssueRule("heading_hierarchy", "headings", check_heading_hierarchy),
    IssueRule("empty_headings", "headings", check_empty_headings),
    IssueRule("missing_alt", "images", check_missing_alt),
    IssueRule("empty_alt", "images", check_empty_alt),
    IssueRule("generic_anchor_text", "links", check_generic_anchor_text),
    IssueRule("anchor_links", "links", check_anchor_links),
    IssueRule("external_nofollow", "links", check_external_nofollow),
    IssueRule("invalid_schema", "schema", check_invalid_schema),
    IssueRule("missing_schema", "schema", check_missing_schema),
)

class IssueDetector:
    """Runs a rule table over the extracted page structures"""

    def __init__(self, rules: Sequence[IssueRule] = DEFAULT_RULES, analyzer_config: AnalyzerConfig = None):
        self.rules = tuple(rules)
        self.config = analyzer_config or config

    def detect(self, metadata: MetaData, headings: Sequence[Heading], images: Sequence[ImageInfo],
               links: Sequence[LinkInfo], schemas: Sequence[SchemaRecord]) -> Tuple[SEOIssue, ...]:
        sources = {
            "metadata": metadata,
            "headings": headings,
            "images": images,
            "links": links,
            "schema": schemas,
        }

        issues = []
        for rule in self.rules:
            found = rule.check(sources[rule.source], self.config)
            if found:
                logger.debug(f"Rule '{rule.name}' raised {len(found)} issue(s)")
            issues.extend(found)

        return tuple(issues)

def detect_issues(metadata: MetaData, headings: Sequence[Heading], images: Sequence[ImageInfo],
                  links: Sequence[LinkInfo], schemas: Sequence[SchemaRecord]) -> Tuple[SEOIssue, ...]:
    return IssueDetector().detect(metadata, headings, images, links, schemas)
