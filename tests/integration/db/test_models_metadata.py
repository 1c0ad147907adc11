from __future__ import annotations

from alembic import command
from sqlalchemy import create_engine, inspect

from invoicing.database.schema import build_alembic_config, current_revision, head_revision
from invoicing.models import Base, Task
import invoicing.models  # noqa: F401


def test_model_metadata_contains_invoicing_tables():
    expected = {"entities", "company_profiles", "invoices", "tasks", "task_charges"}
    assert expected == set(Base.metadata.tables.keys())


def test_task_links_to_invoice_by_internal_number():
    foreign_keys = {fk.target_fullname for fk in Task.__table__.c.invoice_internal_number.foreign_keys}
    assert foreign_keys == {"invoices.internal_number"}


def test_migrations_build_the_same_columns_as_the_models(tmp_path):
    url = f"sqlite:///{tmp_path / 'migrated.db'}"
    command.upgrade(build_alembic_config(url), "head")

    engine = create_engine(url)
    try:
        inspector = inspect(engine)
        for table_name, table in Base.metadata.tables.items():
            migrated = {column["name"] for column in inspector.get_columns(table_name)}
            assert migrated == set(table.columns.keys()), table_name
        unique = inspector.get_unique_constraints("invoices")
        assert any(constraint["column_names"] == ["internal_number"] for constraint in unique)
    finally:
        engine.dispose()


def test_upgrade_stamps_the_head_revision(tmp_path):
    url = f"sqlite:///{tmp_path / 'stamped.db'}"
    engine = create_engine(url)
    try:
        assert current_revision(engine) is None
        command.upgrade(build_alembic_config(url), "head")
        assert current_revision(engine) == head_revision(url)
        assert head_revision(url) is not None
    finally:
        engine.dispose()
