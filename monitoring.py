"""
Logging setup and in-process metrics for SEO Analyzer
"""
import logging
import os
import psutil
from datetime import datetime
from threading import Lock
from typing import Any, Dict, List, Optional

from config import config

def setup_logging(log_level: str = "INFO", log_dir: Optional[str] = None):
    """Setup console logging, plus log files when log_dir is given"""

    detailed_formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - %(funcName)s:%(lineno)d - %(message)s'
    )
    simple_formatter = logging.Formatter(config.log_format)

    # Root logger
    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, log_level.upper(), logging.INFO))

    # Clear existing handlers
    root_logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, log_level.upper(), logging.INFO))
    console_handler.setFormatter(simple_formatter)
    root_logger.addHandler(console_handler)

    if log_dir:
        os.makedirs(log_dir, exist_ok=True)

        # File handler for all logs
        file_handler = logging.FileHandler(
            os.path.join(log_dir, 'analyzer.log'),
            encoding='utf-8'
        )
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(file_handler)

        # Error log handler
        error_handler = logging.FileHandler(
            os.path.join(log_dir, 'errors.log'),
            encoding='utf-8'
        )
        error_handler.setLevel(logging.ERROR)
        error_handler.setFormatter(detailed_formatter)
        root_logger.addHandler(error_handler)

    return root_logger

class MetricsCollector:
    """Counts analyses and errors for the running app"""

    def __init__(self, max_samples: int = 100):
        self.metrics_lock = Lock()
        self.max_samples = max_samples
        self.started_at = datetime.now().isoformat()
        self.pages_analyzed = 0
        self.errors_count = 0
        self.response_times: List[float] = []

    def record_page_analyzed(self, response_time: float):
        with self.metrics_lock:
            self.pages_analyzed += 1
            self.response_times.append(response_time)
            # Keep only the most recent samples in memory
            if len(self.response_times) > self.max_samples:
                self.response_times.pop(0)

    def record_error(self):
        with self.metrics_lock:
            self.errors_count += 1

    def get_summary(self) -> Dict[str, Any]:
        with self.metrics_lock:
            total = self.pages_analyzed + self.errors_count
            success_rate = (self.pages_analyzed / total * 100) if total > 0 else 100.0
            avg_response_time = (
                sum(self.response_times) / len(self.response_times) if self.response_times else 0.0
            )
            return {
                "started_at": self.started_at,
                "pages_analyzed": self.pages_analyzed,
                "errors_count": self.errors_count,
                "success_rate": round(success_rate, 1),
                "avg_response_time": round(avg_response_time, 4),
            }

class HealthChecker:
    """System health checker"""

    def __init__(self, metrics_collector: MetricsCollector, error_rate_threshold: float = 50.0):
        self.metrics_collector = metrics_collector
        self.error_rate_threshold = error_rate_threshold

    def check_health(self) -> Dict[str, Any]:
        components = {
            "system": self._check_system_health(),
            "analysis": self._check_analysis_health(),
        }

        if any(c["status"] == "critical" for c in components.values()):
            overall_status = "critical"
        elif any(c["status"] == "warning" for c in components.values()):
            overall_status = "warning"
        else:
            overall_status = "healthy"

        return {
            "timestamp": datetime.now().isoformat(),
            "overall_status": overall_status,
            "components": components,
        }

    def _check_system_health(self) -> Dict[str, Any]:
        try:
            process = psutil.Process(os.getpid())
            memory_mb = process.memory_info().rss / 1024 / 1024
            memory_usage = psutil.virtual_memory().percent
            # Non-blocking: compares against the previous call
            cpu_usage = psutil.cpu_percent(interval=None)

            if memory_usage > 95:
                status = "critical"
            elif memory_usage > 85:
                status = "warning"
            else:
                status = "healthy"

            return {
                "status": status,
                "process_memory_mb": round(memory_mb, 1),
                "memory_usage": memory_usage,
                "cpu_usage": cpu_usage,
            }
        except psutil.Error as e:
            logging.error(f"Error checking system health: {e}")
            return {"status": "unknown", "error": str(e)}

    def _check_analysis_health(self) -> Dict[str, Any]:
        summary = self.metrics_collector.get_summary()
        error_rate = 100.0 - summary["success_rate"]
        status = "warning" if error_rate > self.error_rate_threshold else "healthy"
        return dict(summary, status=status)
