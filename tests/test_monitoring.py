"""
Tests for logging setup, metrics and health checks
"""
import logging
from unittest.mock import Mock, patch

import psutil

from monitoring import HealthChecker, MetricsCollector, setup_logging


class TestSetupLogging:

    def test_console_only(self):
        root = setup_logging("DEBUG")
        assert root.level == logging.DEBUG
        assert len(root.handlers) == 1

    def test_log_files(self, tmp_path):
        log_dir = tmp_path / "logs"
        root = setup_logging("info", str(log_dir))

        assert root.level == logging.INFO
        assert len(root.handlers) == 3
        assert (log_dir / "analyzer.log").exists()
        assert (log_dir / "errors.log").exists()

        for handler in root.handlers[1:]:
            handler.close()
        root.handlers.clear()

    def test_unknown_level_defaults_to_info(self):
        assert setup_logging("LOUD").level == logging.INFO


class TestMetricsCollector:
    """Tests for MetricsCollector"""

    def test_empty_summary(self):
        summary = MetricsCollector().get_summary()
        assert summary["pages_analyzed"] == 0
        assert summary["errors_count"] == 0
        assert summary["success_rate"] == 100.0
        assert summary["avg_response_time"] == 0.0

    def test_records(self):
        collector = MetricsCollector()
        collector.record_page_analyzed(0.2)
        collector.record_page_analyzed(0.4)
        collector.record_page_analyzed(0.6)
        collector.record_error()

        summary = collector.get_summary()
        assert summary["pages_analyzed"] == 3
        assert summary["errors_count"] == 1
        assert summary["success_rate"] == 75.0
        assert summary["avg_response_time"] == 0.4

    def test_sample_window(self):
        collector = MetricsCollector(max_samples=2)
        for response_time in (10.0, 1.0, 3.0):
            collector.record_page_analyzed(response_time)
        assert collector.response_times == [1.0, 3.0]
        assert collector.get_summary()["pages_analyzed"] == 3


class TestHealthChecker:
    """Tests for HealthChecker"""

    def test_healthy(self):
        checker = HealthChecker(MetricsCollector())
        with patch('monitoring.psutil.virtual_memory') as mock_memory:
            mock_memory.return_value = Mock(percent=40.0)
            health = checker.check_health()

        assert health["overall_status"] == "healthy"
        assert set(health["components"]) == {"system", "analysis"}
        assert health["components"]["system"]["memory_usage"] == 40.0

    def test_memory_pressure(self):
        checker = HealthChecker(MetricsCollector())
        with patch('monitoring.psutil.virtual_memory') as mock_memory:
            mock_memory.return_value = Mock(percent=90.0)
            assert checker.check_health()["overall_status"] == "warning"
            mock_memory.return_value = Mock(percent=99.0)
            assert checker.check_health()["overall_status"] == "critical"

    def test_high_error_rate(self):
        collector = MetricsCollector()
        collector.record_page_analyzed(0.1)
        collector.record_error()
        collector.record_error()

        checker = HealthChecker(collector)
        with patch('monitoring.psutil.virtual_memory') as mock_memory:
            mock_memory.return_value = Mock(percent=10.0)
            health = checker.check_health()

        assert health["components"]["analysis"]["status"] == "warning"
        assert health["overall_status"] == "warning"

    def test_psutil_failure(self):
        checker = HealthChecker(MetricsCollector())
        with patch('monitoring.psutil.virtual_memory', side_effect=psutil.Error("denied")):
            system = checker.check_health()["components"]["system"]
        assert system["status"] == "unknown"
