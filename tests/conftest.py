from __future__ import annotations

from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from invoicing.models import (
    Base,
    ChargeBearer,
    ChargeStatus,
    ChargeType,
    CompanyProfile,
    Entity,
    Invoice,
    InvoiceStatus,
    Task,
    TaskCharge,
    TaskStatus,
    TaskType,
)
from invoicing.models.base import utcnow
from invoicing.utils.ids import new_internal_number


class Seeder:
    """Builds committed rows for service tests."""

    def __init__(self, session) -> None:
        self.session = session
        self._counter = 0

    def _save(self, row):
        self.session.add(row)
        self.session.commit()
        self.session.refresh(row)
        return row

    def entity(self, name: str | None = None) -> Entity:
        self._counter += 1
        return self._save(Entity(name=name or f"Client {self._counter}", email=f"client{self._counter}@example.com"))

    def company_profile(self, is_active: bool = True) -> CompanyProfile:
        return self._save(CompanyProfile(name="Advisory Pvt Ltd", is_active=is_active))

    def task(
        self,
        entity: Entity,
        status: TaskStatus = TaskStatus.COMPLETED,
        charges: int = 1,
        amount: Decimal = Decimal("100.00"),
        task_type: TaskType = TaskType.STANDARD,
        is_system: bool = False,
        title: str = "GST filing",
    ) -> Task:
        task = self._save(
            Task(title=title, entity_id=entity.id, status=status, task_type=task_type, is_system=is_system)
        )
        for _ in range(charges):
            self.charge(task, amount=amount)
        return task

    def charge(
        self,
        task: Task,
        amount: Decimal = Decimal("100.00"),
        status: ChargeStatus = ChargeStatus.NOT_PAID,
        bearer: ChargeBearer = ChargeBearer.CLIENT,
        deleted: bool = False,
    ) -> TaskCharge:
        return self._save(
            TaskCharge(
                task_id=task.id,
                title="Professional fee",
                amount=amount,
                charge_type=ChargeType.SERVICE_FEE,
                status=status,
                bearer=bearer,
                deleted_at=utcnow() if deleted else None,
            )
        )

    def invoice(
        self,
        entity: Entity,
        profile: CompanyProfile,
        status: InvoiceStatus = InvoiceStatus.DRAFT,
        external_number: str | None = None,
        tasks: tuple[Task, ...] = (),
        issued_at=None,
        paid_at=None,
    ) -> Invoice:
        invoice = self._save(
            Invoice(
                entity_id=entity.id,
                company_profile_id=profile.id,
                internal_number=new_internal_number(),
                status=status,
                external_number=external_number,
                invoice_date=utcnow(),
                issued_at=issued_at,
                paid_at=paid_at,
                created_by="seed",
            )
        )
        for task in tasks:
            task.invoice_internal_number = invoice.internal_number
            task.invoiced_at = utcnow()
        self.session.commit()
        return invoice


@pytest.fixture
def session():
    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    Base.metadata.create_all(bind=engine)
    db = TestingSessionLocal()
    try:
        yield db
    finally:
        db.close()
        engine.dispose()


@pytest.fixture
def seed(session):
    return Seeder(session)


@pytest.fixture
def file_session_factory(tmp_path):
    """Sessions sharing one on-disk SQLite database, for tests that need two connections."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'invoicing.db'}",
        connect_args={"check_same_thread": False},
    )
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(autocommit=False, autoflush=False, expire_on_commit=False, bind=engine)
    try:
        yield factory
    finally:
        engine.dispose()


@pytest.fixture
def make_seeder():
    return Seeder
