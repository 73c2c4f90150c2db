"""Shared fixtures: in-memory shop database, stores and recording fakes."""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shopadmin.common.db import create_schema
from shopadmin.services.customers.schemas import CustomerSnapshot
from shopadmin.services.customers.store import CustomerStore
from shopadmin.services.payments.store import PaymentStore


class RecordingOperator:
    """Operator that answers prompts with `answer` and keeps every message."""

    def __init__(self, answer: bool = True) -> None:
        self.answer = answer
        self.prompts: list[str] = []
        self.errors: list[str] = []
        self.warnings: list[str] = []
        self.successes: list[str] = []

    def confirm(self, message: str) -> bool:
        self.prompts.append(message)
        return self.answer

    def report_error(self, message: str) -> None:
        self.errors.append(message)

    def report_warning(self, message: str) -> None:
        self.warnings.append(message)

    def report_success(self, message: str) -> None:
        self.successes.append(message)


class FakeCustomerStore:
    def __init__(self, snapshot: CustomerSnapshot | None = None, delete_result=True) -> None:
        self.snapshot = snapshot or CustomerSnapshot()
        self.delete_result = delete_result
        self.resolved: list[str] = []
        self.deleted: list[str] = []

    def resolve(self, identifier: str) -> CustomerSnapshot:
        self.resolved.append(identifier)
        return self.snapshot

    def delete(self, identifier: str) -> bool:
        self.deleted.append(identifier)
        if isinstance(self.delete_result, Exception):
            raise self.delete_result
        return self.delete_result


class FakePaymentStore:
    """Records every call; IDs in `failing` report failure."""

    def __init__(self, failing=()) -> None:
        self.failing = set(failing)
        self.meta_updates: list[tuple] = []
        self.deleted: list[tuple] = []

    def update_link_metadata(self, payment_id, key, value) -> bool:
        self.meta_updates.append((payment_id, key, value))
        return payment_id not in self.failing

    def delete_record(self, payment_id, cascade_meta=True) -> bool:
        self.deleted.append((payment_id, cascade_meta))
        return payment_id not in self.failing


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    create_schema(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session_factory(engine):
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture
def customer_store(session_factory):
    return CustomerStore(session_factory)


@pytest.fixture
def payment_store(session_factory):
    return PaymentStore(session_factory)


@pytest.fixture
def operator():
    return RecordingOperator()


@pytest.fixture
def fake_customers():
    """Factory for a fake customer store resolving to the given snapshot."""

    def build(customer_id: int = 42, payment_ids: str = "7,8,9", **kwargs):
        snapshot = CustomerSnapshot(id=customer_id, email="buyer@example.com", payment_ids=payment_ids)
        return FakeCustomerStore(snapshot, **kwargs)

    return build


@pytest.fixture
def fake_payments():
    return FakePaymentStore
