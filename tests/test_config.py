from __future__ import annotations

import json
import logging

import pytest

from invoicing.core import config as config_module
from invoicing.core.exceptions import ConfigurationError
from invoicing.core.logging_config import JsonFormatter


@pytest.fixture
def fresh_config(monkeypatch):
    config_module.get_config.cache_clear()
    yield monkeypatch
    config_module.get_config.cache_clear()


def test_defaults(fresh_config):
    for key in ("DATABASE_URL", "BULK_PAID_BACKFILL_ISSUED_AT", "INVOICE_NUMBER_PREFIX", "LOG_LEVEL"):
        fresh_config.delenv(key, raising=False)

    cfg = config_module.get_config("development")

    assert cfg.DATABASE_URL.startswith("sqlite")
    assert cfg.INVOICE_NUMBER_PREFIX == "INV"
    assert cfg.INVOICE_MAX_TASKS_PER_REQUEST == 100
    assert cfg.BULK_PAID_BACKFILL_ISSUED_AT is True
    assert cfg.is_production is False


def test_backfill_flag_can_be_disabled(fresh_config):
    fresh_config.setenv("BULK_PAID_BACKFILL_ISSUED_AT", "false")
    assert config_module.get_config("development").BULK_PAID_BACKFILL_ISSUED_AT is False


def test_production_disables_debug(fresh_config):
    fresh_config.setenv("DEBUG", "true")
    fresh_config.setenv("DATABASE_URL", "postgresql://billing:secret@db:5432/invoicing")
    cfg = config_module.get_config("production")
    assert cfg.DEBUG is False
    assert cfg.DB_CONNECTIVITY_REQUIRED is True


@pytest.mark.parametrize(
    ("key", "value"),
    [
        ("DATABASE_URL", "mysql://root@localhost/invoicing"),
        ("LOG_LEVEL", "VERBOSE"),
        ("INVOICE_NUMBER_PREFIX", "INV-"),
        ("INVOICE_MAX_TASKS_PER_REQUEST", "0"),
        ("INVOICE_DEFAULT_PAGE_SIZE", "500"),
    ],
)
def test_invalid_settings_are_rejected(fresh_config, key, value):
    fresh_config.setenv(key, value)
    with pytest.raises(ConfigurationError):
        config_module.get_config("development")


def test_production_rejects_placeholder_credentials(fresh_config):
    fresh_config.setenv("DATABASE_URL", "postgresql://change_me:change_me@db:5432/invoicing")
    with pytest.raises(ConfigurationError, match="placeholder"):
        config_module.get_config("production")


def test_json_formatter_carries_extra_fields():
    record = logging.LogRecord("invoicing.test", logging.INFO, __file__, 1, "invoice.cancelled", None, None)
    record.event = "invoice.cancelled"
    record.invoice_id = "inv-1"

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "invoice.cancelled"
    assert payload["level"] == "INFO"
    assert payload["event"] == "invoice.cancelled"
    assert payload["invoice_id"] == "inv-1"
