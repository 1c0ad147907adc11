"""Bring the database schema up to the latest Alembic revision."""

import logging

from alembic import command

from invoicing.core.logging_config import configure_logging
from invoicing.database.schema import build_alembic_config, current_revision
import invoicing.database.db as db_module

logger = logging.getLogger(__name__)


def init_db() -> None:
    configure_logging()
    active_url = db_module.get_active_database_url()
    command.upgrade(build_alembic_config(active_url), "head")
    logger.info(
        "database.migrated",
        extra={
            "event": "database.migrated",
            "database_url_scheme": active_url.split("://", 1)[0],
            "revision": current_revision(db_module.engine),
        },
    )


if __name__ == "__main__":
    init_db()
