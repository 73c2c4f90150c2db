"""Customer store backed by the shop database."""

from sqlalchemy import func, select

from shopadmin.common.logging import logger
from shopadmin.common.validation import is_email, is_numeric_id
from shopadmin.services.customers.models import Customer
from shopadmin.services.customers.schemas import CustomerSnapshot


# Largest value a signed 64-bit integer primary key can hold.
MAX_CUSTOMER_ID = 2**63 - 1


class CustomerStore:
    """Looks up and deletes customers by numeric ID or email."""

    def __init__(self, session_factory) -> None:
        self.session_factory = session_factory

    def _lookup(self, db, identifier: str) -> Customer | None:
        if is_numeric_id(identifier):
            customer_id = int(identifier)
            if customer_id > MAX_CUSTOMER_ID:
                return None
            return db.get(Customer, customer_id)
        if is_email(identifier):
            return db.execute(
                select(Customer).where(func.lower(Customer.email) == identifier.lower())
            ).scalar_one_or_none()
        return None

    def resolve(self, identifier: str) -> CustomerSnapshot:
        """Return a snapshot for `identifier`, or the sentinel snapshot (id 0)."""

        with self.session_factory() as db:
            customer = self._lookup(db, identifier)
            if customer is None:
                return CustomerSnapshot()
            return CustomerSnapshot(
                id=customer.id,
                email=customer.email,
                name=customer.name,
                payment_ids=customer.payment_ids or "",
            )

    def delete(self, identifier: str) -> bool:
        """Delete the customer row; False when no row matched."""

        with self.session_factory() as db:
            customer = self._lookup(db, identifier)
            if customer is None:
                logger.warning("customer delete found no row identifier=%s", identifier)
                return False
            customer_id = customer.id
            db.delete(customer)
            db.commit()
            logger.info("customer deleted id=%s", customer_id)
            return True

    def add(
        self,
        email: str,
        name: str = "",
        user_id: int | None = None,
        payment_ids: list[int] | None = None,
    ) -> CustomerSnapshot:
        """Insert a customer and return its snapshot."""

        with self.session_factory() as db:
            customer = Customer(
                email=email.lower(),
                name=name,
                user_id=user_id,
                payment_ids=",".join(str(p) for p in payment_ids or []),
            )
            db.add(customer)
            db.commit()
            return CustomerSnapshot(
                id=customer.id, email=customer.email, name=customer.name, payment_ids=customer.payment_ids
            )

    def count(self) -> int:
        with self.session_factory() as db:
            return db.execute(select(func.count()).select_from(Customer)).scalar_one()
