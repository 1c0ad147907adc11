"""Fail-fast checks run before the API accepts invoice traffic.

Attaching tasks relies on constraints that only exist once the Alembic head
is applied (unique ``invoices.internal_number``, the ``tasks`` link column),
so besides connectivity the database must report the head revision.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

import invoicing.database.db as db_module
from invoicing.core.config import Config, get_config
from invoicing.core.logging_config import configure_logging
from invoicing.database.schema import current_revision, head_revision

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StartupReport:
    database_reachable: bool
    schema_revision: str | None = None
    head_revision: str | None = None

    @property
    def schema_current(self) -> bool:
        return self.database_reachable and self.schema_revision == self.head_revision


def _fail_or_warn(config: Config, event: str, message: str, **fields) -> None:
    if config.DB_CONNECTIVITY_REQUIRED:
        raise RuntimeError(message)
    logger.warning(event, extra={"event": event, **fields})


def _check_schema(config: Config, database_url: str) -> tuple[str | None, str | None]:
    applied = current_revision(db_module.engine)
    expected = head_revision(database_url)
    if applied is None:
        _fail_or_warn(
            config,
            "startup.database.unmigrated",
            "Database has no schema revision; run `python -m invoicing.database.init_db`.",
            head_revision=expected,
        )
    elif applied != expected:
        _fail_or_warn(
            config,
            "startup.database.schema_behind",
            f"Database schema is at revision {applied} but head is {expected}; "
            "run `python -m invoicing.database.init_db`.",
            schema_revision=applied,
            head_revision=expected,
        )
    return applied, expected


def run_startup_checks(config: Config | None = None) -> StartupReport:
    """Check connectivity and schema revision; raise when the database is required."""
    config = config or get_config()
    database_url = db_module.get_active_database_url()

    if not db_module.verify_database_connection():
        _fail_or_warn(config, "startup.database.unreachable", "Database connectivity check failed.")
        report = StartupReport(database_reachable=False)
    else:
        applied, expected = _check_schema(config, database_url)
        report = StartupReport(database_reachable=True, schema_revision=applied, head_revision=expected)

    if config.is_production and database_url.startswith("sqlite"):
        logger.warning(
            "startup.production.sqlite_detected",
            extra={"event": "startup.production.sqlite_detected"},
        )

    logger.info(
        "startup.checks.completed",
        extra={
            "event": "startup.checks.completed",
            "env": config.ENV,
            "database_url_scheme": database_url.split("://", 1)[0],
            "schema_revision": report.schema_revision,
            "schema_current": report.schema_current,
            "bulk_paid_backfill_issued_at": config.BULK_PAID_BACKFILL_ISSUED_AT,
        },
    )
    return report


def bootstrap() -> StartupReport:
    configure_logging()
    return run_startup_checks()
