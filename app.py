"""
Main application for SEO Analyzer - wires fetching, analysis and monitoring
"""
import argparse
import json
import sys
import time
import logging
from typing import Any, Dict, List

from config import AnalyzerConfig, config
from document import DocumentParseError
from fetcher import PageFetcher, load_html_file
from monitoring import HealthChecker, MetricsCollector, setup_logging
from readability import get_readability_rating
from seo_analyzer import SEOAnalyzer
from text_processor import truncate

logger = logging.getLogger(__name__)

class SEOAnalyzerApp:
    """Main SEO Analyzer application"""

    def __init__(self, analyzer_config: AnalyzerConfig = None, fetcher: PageFetcher = None,
                 configure_logging: bool = True):
        self.config = analyzer_config or config

        # Initialize logging first
        if configure_logging:
            setup_logging(self.config.log_level, self.config.log_dir)

        self.analyzer = SEOAnalyzer(self.config)
        self.fetcher = fetcher or PageFetcher()
        self.metrics_collector = MetricsCollector()
        self.health_checker = HealthChecker(self.metrics_collector)

        logger.info("SEO Analyzer application initialized")

    def analyze_html(self, html: str, url: str) -> Dict[str, Any]:
        """Analyze HTML that has already been retrieved"""
        start_time = time.time()
        try:
            result = self.analyzer.analyze_html(html, url)
            response_time = time.time() - start_time
            self.metrics_collector.record_page_analyzed(response_time)
            return {"success": True, "data": result.to_dict(), "response_time": response_time}

        except (DocumentParseError, ValueError) as e:
            self.metrics_collector.record_error()
            logger.error(f"Error analyzing {url}: {e}")
            return {"success": False, "error": str(e)}

    def analyze_url(self, url: str) -> Dict[str, Any]:
        """Fetch a URL directly and analyze it"""
        logger.info(f"Analyzing URL: {url}")

        fetched = self.fetcher.fetch(url)
        if fetched is None:
            self.metrics_collector.record_error()
            return {"success": False, "error": f"Failed to fetch {url}"}

        result = self.analyze_html(fetched.html, fetched.url)
        result["strategy"] = fetched.strategy
        return result

    def analyze_file(self, path: str, url: str) -> Dict[str, Any]:
        """Analyze HTML saved to disk"""
        logger.info(f"Analyzing file: {path}")
        try:
            fetched = load_html_file(path, url)
        except OSError as e:
            self.metrics_collector.record_error()
            logger.error(f"Error reading {path}: {e}")
            return {"success": False, "error": str(e)}

        result = self.analyze_html(fetched.html, fetched.url)
        result["strategy"] = fetched.strategy
        return result

    def get_system_status(self) -> Dict[str, Any]:
        health = self.health_checker.check_health()
        return {
            "timestamp": health["timestamp"],
            "health": health,
            "metrics": self.metrics_collector.get_summary(),
        }

    def shutdown(self):
        """Gracefully shutdown the application"""
        logger.info("Shutting down SEO Analyzer application")
        self.fetcher.close()

def format_summary(data: Dict[str, Any]) -> str:
    """Plain-text summary of an AnalysisResult dict"""
    metadata = data["metadata"]
    stats = data["stats"]
    readability = data["readability"]
    rating = data["rating"]

    lines = [
        f"SEO analysis for {data['url']}",
        f"Score: {data['score']}/100 ({rating['rating']}) - {rating['description']}",
        "",
        f"Title: {metadata['title'] or '(missing)'}",
        f"Description: {truncate(metadata['description'], 100) or '(missing)'}",
        f"Readability: {readability['flesch_score']} "
        f"({get_readability_rating(readability['flesch_score'])}, {readability['grade_level']})",
        f"Words: {stats['total_words']}  Images: {stats['total_images']} "
        f"({stats['images_without_alt']} without alt)  Links: {stats['total_links']} "
        f"({stats['internal_links']} internal, {stats['external_links']} external)",
        "",
        f"Issues ({len(data['issues'])}):",
    ]
    for issue in data["issues"]:
        lines.append(f"  [{issue['severity'].upper()}] {issue['category']}: {issue['message']}")

    top_keywords = [k for k in data["keywords"] if k["n_gram"] == 1][:10]
    if top_keywords:
        lines.append("")
        lines.append("Top keywords:")
        for keyword in top_keywords:
            lines.append(f"  {keyword['phrase']}: {keyword['count']} ({keyword['percentage']}%)")

    return "\n".join(lines)

def create_cli():
    """Create command line interface"""
    parser = argparse.ArgumentParser(description="SEO Analyzer - single page SEO audit tool")
    parser.add_argument("--log-level", default=config.log_level, help="Logging level")
    parser.add_argument("--log-dir", default=config.log_dir, help="Directory for log files")
    parser.add_argument("--parallel", action="store_true", help="Run extractors in a thread pool")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # Analyze URL command
    url_parser = subparsers.add_parser("analyze-url", help="Fetch and analyze a URL")
    url_parser.add_argument("url", help="URL to analyze")
    url_parser.add_argument("--format", choices=["json", "text"], default="json", help="Output format")

    # Analyze file command
    file_parser = subparsers.add_parser("analyze-file", help="Analyze a saved HTML file")
    file_parser.add_argument("path", help="Path to the HTML file")
    file_parser.add_argument("--url", required=True, help="Base URL of the page")
    file_parser.add_argument("--format", choices=["json", "text"], default="json", help="Output format")

    # Status command
    subparsers.add_parser("status", help="Get system status")

    # Server mode
    server_parser = subparsers.add_parser("server", help="Run the HTTP API")
    server_parser.add_argument("--host", default="127.0.0.1", help="Server host")
    server_parser.add_argument("--port", type=int, default=8000, help="Server port")

    return parser

def _print_result(result: Dict[str, Any], output_format: str):
    if output_format == "text" and result.get("success"):
        print(format_summary(result["data"]))
    else:
        print(json.dumps(result, indent=2, default=str))

def main(argv: List[str] = None) -> int:
    """Main application entry point"""
    parser = create_cli()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    if args.command == "server":
        import uvicorn
        uvicorn.run("api:app", host=args.host, port=args.port, log_level=args.log_level.lower())
        return 0

    app_config = AnalyzerConfig(
        log_level=args.log_level,
        log_dir=args.log_dir,
        parallel_extraction=args.parallel,
    )
    app = SEOAnalyzerApp(app_config)

    try:
        if args.command == "analyze-url":
            result = app.analyze_url(args.url)
            _print_result(result, args.format)
            return 0 if result.get("success") else 2

        elif args.command == "analyze-file":
            result = app.analyze_file(args.path, args.url)
            _print_result(result, args.format)
            return 0 if result.get("success") else 2

        elif args.command == "status":
            print(json.dumps(app.get_system_status(), indent=2, default=str))
            return 0

    except KeyboardInterrupt:
        print("\nInterrupted by user")
        return 130
    finally:
        app.shutdown()

    return 1

if __name__ == "__main__":
    sys.exit(main())
