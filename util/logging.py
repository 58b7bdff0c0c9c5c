"""
Structured logging for place search operations.
Corpus loading, capability bootstrap, index builds and query routing.
"""

import logging
from typing import Any, Dict, Optional

class StructuredLogger:
    """Structured logger for search, bootstrap and index operations."""

    def __init__(self, name: str = "placesearch", level: Optional[int] = None):
        self.logger = logging.getLogger(name)
        # An explicit level wins; otherwise an existing level is left alone
        if level is not None:
            self.logger.setLevel(level)
        elif self.logger.level == logging.NOTSET:
            self.logger.setLevel(logging.INFO)

        # Create handler if not already set
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)

    def log_operation(self, operation: str, status: str, details: Dict[str, Any] = None, level: int = logging.INFO):
        """Log a structured operation."""
        message = f"Operation: {operation}, Status: {status}"
        if details:
            message += f", Details: {details}"

        self.logger.log(level, message)

    def log_corpus_load(self, total_places: int, regions: int, status: str = "success"):
        """Log corpus construction."""
        self.log_operation("corpus.load", status, {"total_places": total_places, "regions": regions})

    def log_bootstrap(self, phase: str, status: str = "success", details: Dict[str, Any] = None):
        """Log a capability bootstrap phase."""
        level = logging.WARNING if status == "failed" else logging.INFO
        self.log_operation(f"bootstrap.{phase}", status, details, level=level)

    def log_capability(self, capability: str, available: bool, reason: str = None):
        """Log the outcome of probing an optional capability."""
        details = {"available": available}
        if reason:
            details["reason"] = reason[:200]

        status = "available" if available else "unavailable"
        level = logging.INFO if available else logging.WARNING
        self.log_operation(f"capability.{capability}", status, details, level=level)

    def log_index_build(self, start_time: float, end_time: float, size: int, status: str = "success", details: Dict[str, Any] = None):
        """Log vector index construction."""
        duration_ms = round((end_time - start_time) * 1000, 2)
        log_details = {"duration_ms": duration_ms, "size": size}
        if details:
            log_details.update(details)

        level = logging.WARNING if status == "failed" else logging.INFO
        self.log_operation("vector.index_build", status, log_details, level=level)

    def log_search(self, query: str, mode: str, results: int, destination: str = None, status: str = "success"):
        """Log a search request. Queries are truncated."""
        details = {
            "query": query[:50] + "..." if len(query) > 50 else query,
            "mode": mode,
            "results": results
        }
        if destination:
            details["destination"] = destination

        self.log_operation("search.query", status, details, level=logging.DEBUG)

    # Standard logging methods for compatibility
    def info(self, message: str) -> None:
        """Log an info message."""
        self.logger.info(message)

    def warning(self, message: str) -> None:
        """Log a warning message."""
        self.logger.warning(message)

    def error(self, message: str) -> None:
        """Log an error message."""
        self.logger.error(message)

    def debug(self, message: str) -> None:
        """Log a debug message."""
        self.logger.debug(message)

# Global logger instance
logger = StructuredLogger()
