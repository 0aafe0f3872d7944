"""
Data models for SEO Analyzer
"""
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional, Tuple

SEVERITIES = ("critical", "warning", "recommendation")
CATEGORIES = ("meta", "content", "images", "links", "schema", "structure", "performance")
LINK_TYPES = ("internal", "external", "anchor")
LOADING_VALUES = ("lazy", "eager")

@dataclass(frozen=True)
class OpenGraphTag:
    """Open Graph <meta property="og:*"> pair"""
    property: str
    content: str

@dataclass(frozen=True)
class TwitterCardTag:
    """Twitter Card <meta name="twitter:*"> pair"""
    name: str
    content: str

@dataclass(frozen=True)
class MetaTag:
    """Any other meta tag keyed by name or property"""
    content: str
    name: Optional[str] = None
    property: Optional[str] = None

@dataclass(frozen=True)
class MetaData:
    """Data structure for page metadata"""
    title: Optional[str] = None
    description: Optional[str] = None
    keywords: Optional[str] = None
    robots: Optional[str] = None
    viewport: Optional[str] = None
    charset: Optional[str] = None
    language: Optional[str] = None
    canonical_url: Optional[str] = None
    favicon: Optional[str] = None
    og_tags: Tuple[OpenGraphTag, ...] = ()
    twitter_tags: Tuple[TwitterCardTag, ...] = ()
    other: Tuple[MetaTag, ...] = ()

@dataclass(frozen=True)
class Heading:
    """A visible h1-h6 heading"""
    level: int
    text: str
    word_count: int

    def __post_init__(self):
        if not 1 <= self.level <= 6:
            raise ValueError(f"Heading level must be between 1 and 6, got {self.level}")

@dataclass(frozen=True)
class ImageInfo:
    """Data structure for a visible <img>"""
    src: str
    alt: Optional[str] = None
    title: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    loading: Optional[str] = None

@dataclass(frozen=True)
class LinkInfo:
    """Data structure for a visible <a href>"""
    href: str
    anchor_text: str
    type: str
    rel: Optional[str] = None
    target: Optional[str] = None
    nofollow: bool = False

    def __post_init__(self):
        if self.type not in LINK_TYPES:
            raise ValueError(f"Unknown link type: {self.type}")

@dataclass(frozen=True)
class SchemaRecord:
    """A JSON-LD block, valid or not"""
    type: str
    raw_json: str
    parsed: Any = None
    is_valid: bool = True
    error: Optional[str] = None

@dataclass(frozen=True)
class ReadabilityStatistics:
    sentences: int = 0
    words: int = 0
    syllables: int = 0
    avg_words_per_sentence: float = 0.0
    avg_syllables_per_word: float = 0.0

@dataclass(frozen=True)
class ReadabilityScore:
    """Flesch Reading Ease result"""
    flesch_score: float
    grade_level: str
    interpretation: str
    statistics: ReadabilityStatistics

@dataclass(frozen=True)
class KeywordDensity:
    """Frequency of a 1-, 2- or 3-word phrase"""
    phrase: str
    count: int
    percentage: float
    n_gram: int

    def __post_init__(self):
        if self.n_gram not in (1, 2, 3):
            raise ValueError(f"n_gram must be 1, 2 or 3, got {self.n_gram}")

@dataclass(frozen=True)
class SEOIssue:
    """A graded finding produced by the issue detector"""
    severity: str
    category: str
    message: str
    suggestion: Optional[str] = None

    def __post_init__(self):
        if self.severity not in SEVERITIES:
            raise ValueError(f"Unknown severity: {self.severity}")
        if self.category not in CATEGORIES:
            raise ValueError(f"Unknown category: {self.category}")

@dataclass(frozen=True)
class Statistics:
    """Aggregate counts for the analyzed page"""
    total_words: int = 0
    total_characters: int = 0
    total_images: int = 0
    images_with_alt: int = 0
    images_without_alt: int = 0
    total_links: int = 0
    internal_links: int = 0
    external_links: int = 0
    anchor_links: int = 0
    h1_count: int = 0
    schema_count: int = 0
    unique_keywords: int = 0

@dataclass(frozen=True)
class ScoreRating:
    rating: str
    level: str  # 'success', 'warning', 'error'
    description: str

@dataclass(frozen=True)
class AnalysisResult:
    """Data structure for a complete single-page SEO analysis"""
    url: str
    fetched_at: str
    metadata: MetaData
    headings: Tuple[Heading, ...]
    images: Tuple[ImageInfo, ...]
    links: Tuple[LinkInfo, ...]
    schema: Tuple[SchemaRecord, ...]
    readability: ReadabilityScore
    keywords: Tuple[KeywordDensity, ...]
    issues: Tuple[SEOIssue, ...]
    stats: Statistics
    score: int
    rating: ScoreRating

    def to_dict(self) -> Dict[str, Any]:
        """Plain dict with every field, ready for json.dumps"""
        return asdict(self)

    def issues_by_severity(self, severity: str) -> Tuple[SEOIssue, ...]:
        return tuple(issue for issue in self.issues if issue.severity == severity)
