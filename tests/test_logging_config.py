"""Tests for the centralized JSON logging configuration."""
import json
import logging
import sys

from shared.logging_config import JsonFormatter, ServiceFilter, setup_logging


def make_record(**extra) -> logging.LogRecord:
    record = logging.LogRecord(
        name="services.storefront_service.cart_repository",
        level=logging.INFO,
        pathname="",
        lineno=0,
        msg="Added product %s to cart",
        args=(1,),
        exc_info=None,
    )
    for key, value in extra.items():
        setattr(record, key, value)
    return record


class TestJsonFormatter:
    def test_formats_core_fields(self):
        output = json.loads(JsonFormatter().format(make_record()))

        assert output["level"] == "INFO"
        assert output["logger"] == "services.storefront_service.cart_repository"
        assert output["message"] == "Added product 1 to cart"
        assert output["timestamp"].endswith("+00:00")
        assert "operation" not in output

    def test_includes_service_and_operation_when_present(self):
        record = make_record(service_name="storefront-service", operation="cart.item_added")

        output = json.loads(JsonFormatter().format(record))

        assert output["service_name"] == "storefront-service"
        assert output["operation"] == "cart.item_added"

    def test_includes_exception(self):
        try:
            raise OSError("disk full")
        except OSError:
            record = make_record()
            record.exc_info = sys.exc_info()

        output = json.loads(JsonFormatter().format(record))

        assert "OSError: disk full" in output["exception"]


class TestSetupLogging:
    def test_repeated_setup_installs_one_handler(self):
        setup_logging("first-service")
        setup_logging("storefront-service")

        json_handlers = [
            h for h in logging.getLogger().handlers if isinstance(h.formatter, JsonFormatter)
        ]
        assert len(json_handlers) == 1
        service_filters = [f for f in json_handlers[0].filters if isinstance(f, ServiceFilter)]
        assert [f.service_name for f in service_filters] == ["storefront-service"]
