"""
logging_config.py - Centralized JSON Logging Configuration

PURPOSE:
    Provides structured JSON logging for the storefront service with UTC timestamps
    and service-specific context injection.

KEY FEATURES:
    - JSON Format: All logs are formatted as JSON for easy parsing and aggregation
    - Service Context: Automatically adds service_name to all log entries
    - Operation Tracking: Optional operation field (e.g. "cart.item_added") passed via extra=
    - Exception Handling: Full stack traces included in log entries
    - Idempotent Setup: Calling setup_logging() again does not install a second handler

JSON LOG FIELDS:
    - timestamp: ISO 8601 format in UTC (e.g., "2026-10-19T14:48:51.001014+00:00")
    - level: Log level (INFO, ERROR, WARNING, DEBUG, CRITICAL)
    - logger: Module name where log originated (e.g., "services.storefront_service.cart_repository")
    - message: The actual log message
    - service_name: Name of the service (injected automatically)
    - operation: Optional store operation being performed
    - exception: Full stack trace (only when exc_info is set)

USAGE EXAMPLES:

    1. Initialize logging in service startup:
        from shared.logging_config import setup_logging
        setup_logging("storefront-service", level="INFO")

    2. Log with operation context:
        import logging
        logger = logging.getLogger(__name__)

        logger.info("Cart cleared")
        logger.info("Added product 1 to cart", extra={"operation": "cart.item_added"})

EXAMPLE JSON OUTPUT:
    {
        "timestamp": "2026-10-19T14:54:47.583146+00:00",
        "level": "INFO",
        "logger": "services.storefront_service.cart_repository",
        "message": "Added product 1 to cart (quantity 2)",
        "service_name": "storefront-service",
        "operation": "cart.item_added"
    }
"""

import json
import logging
import sys
from datetime import datetime, timezone
from typing import Any, Dict


class JsonFormatter(logging.Formatter):
    """Custom formatter that outputs JSON logs with operation context."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_data: Dict[str, Any] = {
            "timestamp": datetime.fromtimestamp(record.created, tz=timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
        }

        if hasattr(record, "service_name"):
            log_data["service_name"] = record.service_name
        if hasattr(record, "operation"):
            log_data["operation"] = record.operation

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        return json.dumps(log_data)


class ServiceFilter(logging.Filter):
    """Inject the service name into every record passing through the handler."""

    def __init__(self, service_name: str):
        super().__init__()
        self.service_name = service_name

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = self.service_name
        return True


def setup_logging(service_name: str, level: str = "INFO") -> None:
    """Setup JSON logging for a service."""
    logger = logging.getLogger()
    logger.setLevel(level)

    # Reuse the handler installed by an earlier call (app factory invoked more than once)
    for handler in logger.handlers:
        if isinstance(handler.formatter, JsonFormatter):
            for existing in list(handler.filters):
                if isinstance(existing, ServiceFilter):
                    handler.removeFilter(existing)
            handler.addFilter(ServiceFilter(service_name))
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(JsonFormatter())
    # Filter on the handler so records from child loggers are tagged too
    handler.addFilter(ServiceFilter(service_name))
    logger.addHandler(handler)
