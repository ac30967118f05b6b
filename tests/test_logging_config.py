"""
Tests for logging configuration.
"""
import logging

import pytest

from storefront.logging_config import NOISY_LOGGERS, resolve_level, setup_logging


@pytest.fixture(autouse=True)
def restore_info_level():
    yield
    setup_logging(level="INFO")


class TestLevelResolution:

    def test_defaults_to_info(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        assert resolve_level() == "INFO"

    def test_reads_env_var_case_insensitively(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", " warning ")
        assert resolve_level() == "WARNING"

    def test_explicit_level_wins_over_env(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "DEBUG")
        assert resolve_level("error") == "ERROR"

    def test_invalid_level_falls_back_to_info(self):
        assert resolve_level("INVALID_LEVEL") == "INFO"


class TestLoggingConfiguration:
    """Test logging setup and configuration."""

    def test_storefront_logger_follows_env_var(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "WARNING")

        assert setup_logging() == logging.WARNING
        assert logging.getLogger("storefront").level == logging.WARNING

    def test_third_party_loggers_quieted_outside_debug(self):
        setup_logging(level="INFO")

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_debug_lets_third_party_loggers_through(self):
        setup_logging(level="DEBUG")

        assert logging.getLogger("sqlalchemy.engine").level == logging.NOTSET
        assert logging.getLogger("storefront").level == logging.DEBUG


class TestNoSensitiveDataInLogs:
    """Test that customer contact data is not logged at INFO level or higher."""

    def test_order_placement_logs_no_contact_data(self, db_session, menu, people, caplog):
        from storefront.schemas.orders import OrderCreate, OrderLineIn
        from storefront.services.order import create_order

        payload = OrderCreate(
            items=[OrderLineIn(menu_item_id=menu.burger_id, quantity=1)],
            delivery_address="42 Secret Lane",
            phone="555-9876",
        )
        with caplog.at_level(logging.INFO, logger="storefront"):
            create_order(db_session, people.other, payload)

        assert caplog.records
        for record in caplog.records:
            if record.levelno >= logging.INFO:
                assert "42 Secret Lane" not in record.getMessage()
                assert "555-9876" not in record.getMessage()
