"""
Tests for rule-based issue detection
"""
import pytest

from config import AnalyzerConfig
from issue_detector import (
    DEFAULT_RULES, IssueDetector, IssueRule, check_description, check_empty_alt,
    check_empty_headings, check_external_nofollow, check_h1_count, check_heading_hierarchy,
    check_invalid_schema, check_missing_alt, check_missing_schema, check_title, detect_issues
)
from models import Heading, ImageInfo, LinkInfo, MetaData, OpenGraphTag, SchemaRecord, SEOIssue


GOOD_METADATA = MetaData(
    title="A" * 45,
    description="B" * 140,
    viewport="width=device-width",
    language="en",
    canonical_url="https://example.com/",
    og_tags=(OpenGraphTag("og:title", "A"),),
)
GOOD_HEADINGS = (Heading(1, "Main", 1), Heading(2, "Sub", 1))
GOOD_SCHEMA = (SchemaRecord(type="Article", raw_json="{}", parsed={"@type": "Article"}),)


@pytest.fixture
def cfg():
    return AnalyzerConfig()


class TestMetaRules:
    """Tests for title, description and head checks"""

    def test_missing_title(self, cfg):
        issues = check_title(MetaData(), cfg)
        assert issues == [SEOIssue(
            "critical", "meta", "Missing page title",
            "Add a descriptive <title> tag to your page. Titles should be 50-60 characters long.",
        )]

    @pytest.mark.parametrize("length, message", [
        (29, "Title is too short (29 characters)"),
        (61, "Title is too long (61 characters)"),
    ])
    def test_title_length_warnings(self, cfg, length, message):
        issues = check_title(MetaData(title="x" * length), cfg)
        assert [(i.severity, i.message) for i in issues] == [("warning", message)]

    @pytest.mark.parametrize("length", [30, 45, 60])
    def test_title_length_ok(self, cfg, length):
        assert check_title(MetaData(title="x" * length), cfg) == []

    def test_short_title_suggestion_quotes_title(self, cfg):
        issues = check_title(MetaData(title="Home"), cfg)
        assert issues[0].suggestion == 'Title should be at least 30 characters. Current: "Home"'

    def test_missing_description(self, cfg):
        issues = check_description(MetaData(), cfg)
        assert [(i.severity, i.message) for i in issues] == [("warning", "Missing meta description")]

    def test_description_lengths(self, cfg):
        short = check_description(MetaData(description="d" * 119), cfg)
        long = check_description(MetaData(description="d" * 161), cfg)
        assert [(i.severity, i.message) for i in short] == [
            ("warning", "Meta description is too short (119 characters)")
        ]
        assert [(i.severity, i.message) for i in long] == [
            ("recommendation", "Meta description is too long (161 characters)")
        ]
        assert check_description(MetaData(description="d" * 120), cfg) == []
        assert check_description(MetaData(description="d" * 160), cfg) == []

    def test_custom_thresholds(self):
        cfg = AnalyzerConfig(title_min_length=5)
        assert check_title(MetaData(title="Home page"), cfg) == []

    def test_empty_metadata_raises_all_head_issues(self, cfg):
        issues = IssueDetector(analyzer_config=cfg).detect(MetaData(), GOOD_HEADINGS, (), (), GOOD_SCHEMA)
        assert [i.message for i in issues] == [
            "Missing page title",
            "Missing meta description",
            "Missing canonical URL",
            "Missing viewport meta tag",
            "Missing language attribute",
            "Missing Open Graph tags",
        ]


class TestHeadingRules:
    """Tests for heading structure checks"""

    def test_multiple_h1(self, cfg):
        issues = check_h1_count((Heading(1, "a", 1), Heading(1, "b", 1)), cfg)
        assert len(issues) == 1
        assert issues[0].severity == "critical"
        assert issues[0].category == "structure"
        assert issues[0].message == "Multiple H1 tags found (2)"

    def test_no_h1(self, cfg):
        issues = check_h1_count((Heading(2, "a", 1),), cfg)
        assert [i.message for i in issues] == ["No H1 tag found"]

    def test_single_h1(self, cfg):
        assert check_h1_count(GOOD_HEADINGS, cfg) == []

    def test_skipped_levels(self, cfg):
        issues = check_heading_hierarchy((Heading(1, "a", 1), Heading(3, "b", 1)), cfg)
        assert [(i.severity, i.message) for i in issues] == [("warning", "Heading hierarchy skips levels")]

    def test_empty_headings(self, cfg):
        issues = check_empty_headings((Heading(1, "a", 1), Heading(2, "  ", 0)), cfg)
        assert [(i.category, i.message) for i in issues] == [("content", "Found 1 empty heading(s)")]


class TestImageRules:
    """Tests for alt text checks"""

    def test_mostly_missing_alt_is_critical(self, cfg):
        images = (ImageInfo("a"), ImageInfo("b", alt=" "), ImageInfo("c", alt="C"))
        issues = check_missing_alt(images, cfg)
        assert [(i.severity, i.message) for i in issues] == [
            ("critical", "2 of 3 images missing alt text (67%)")
        ]

    def test_half_percent_rounds_up(self, cfg):
        images = tuple(ImageInfo(str(i)) for i in range(5)) + tuple(
            ImageInfo(f"ok{i}", alt="Shoe") for i in range(3)
        )
        issues = check_missing_alt(images, cfg)
        assert [i.message for i in issues] == ["5 of 8 images missing alt text (63%)"]

    def test_half_missing_alt_is_warning(self, cfg):
        images = (ImageInfo("a"), ImageInfo("b", alt="B"))
        issues = check_missing_alt(images, cfg)
        assert [(i.severity, i.message) for i in issues] == [
            ("warning", "1 of 2 images missing alt text")
        ]

    def test_all_alt_present(self, cfg):
        assert check_missing_alt((ImageInfo("a", alt="A"),), cfg) == []
        assert check_missing_alt((), cfg) == []

    def test_empty_alt_counts_twice(self, cfg):
        images = (ImageInfo("a", alt=""), ImageInfo("b", alt="B"), ImageInfo("c", alt="C"))
        missing = check_missing_alt(images, cfg)
        empty = check_empty_alt(images, cfg)
        assert [i.message for i in missing] == ["1 of 3 images missing alt text"]
        assert [(i.severity, i.message) for i in empty] == [
            ("recommendation", "1 image(s) with empty alt attribute")
        ]

    def test_missing_alt_attribute_is_not_empty_alt(self, cfg):
        assert check_empty_alt((ImageInfo("a"),), cfg) == []


class TestLinkRules:
    """Tests for link checks"""

    def test_generic_and_anchor_links(self, cfg):
        links = (
            LinkInfo("https://example.com/a", "Click here", "internal"),
            LinkInfo("#top", "Back to top", "anchor"),
        )
        issues = IssueDetector(analyzer_config=cfg).detect(GOOD_METADATA, GOOD_HEADINGS, (), links, GOOD_SCHEMA)
        assert [(i.severity, i.message) for i in issues] == [
            ("recommendation", "1 link(s) with generic anchor text"),
            ("recommendation", "Found 1 anchor link(s)"),
        ]

    def test_external_nofollow_threshold(self, cfg):
        followed = tuple(LinkInfo(f"https://x{i}.org", "Partner", "external") for i in range(21))
        issues = check_external_nofollow(followed, cfg)
        assert [i.message for i in issues] == ["21 external links without nofollow"]
        assert check_external_nofollow(followed[:20], cfg) == []

    def test_nofollow_links_not_counted(self, cfg):
        links = tuple(LinkInfo(f"https://x{i}.org", "Partner", "external", nofollow=True) for i in range(30))
        assert check_external_nofollow(links, cfg) == []


class TestSchemaRules:

    def test_invalid_schema(self, cfg):
        schemas = (SchemaRecord(type="Unknown", raw_json="x", is_valid=False, error="bad"),)
        issues = check_invalid_schema(schemas, cfg)
        assert [(i.severity, i.message) for i in issues] == [("warning", "1 invalid JSON-LD schema(s)")]
        # an invalid block still counts as present
        assert check_missing_schema(schemas, cfg) == []

    def test_missing_schema(self, cfg):
        issues = check_missing_schema((), cfg)
        assert [(i.severity, i.category) for i in issues] == [("recommendation", "schema")]


class TestIssueDetector:
    """Tests for the rule table runner"""

    def test_clean_page_has_no_issues(self, cfg):
        assert IssueDetector(analyzer_config=cfg).detect(GOOD_METADATA, GOOD_HEADINGS, (), (), GOOD_SCHEMA) == ()

    def test_rule_order(self):
        assert [rule.name for rule in DEFAULT_RULES][:3] == ["title", "description", "canonical"]
        assert [rule.source for rule in DEFAULT_RULES][-2:] == ["schema", "schema"]

    def test_custom_rule_table(self, cfg):
        def check_robots(metadata, rule_cfg):
            if metadata.robots and "noindex" in metadata.robots:
                return [SEOIssue("critical", "meta", "Page is set to noindex")]
            return []

        detector = IssueDetector(rules=[IssueRule("robots", "metadata", check_robots)], analyzer_config=cfg)
        issues = detector.detect(MetaData(robots="noindex"), (), (), (), ())
        assert [i.message for i in issues] == ["Page is set to noindex"]

    def test_detect_issues_helper(self):
        issues = detect_issues(MetaData(), (), (), (), ())
        severities = [i.severity for i in issues]
        assert severities.count("critical") == 2
        assert all(isinstance(i, SEOIssue) for i in issues)
