"""Payment store: payment rows plus their key/value meta."""

from sqlalchemy import delete, select

from shopadmin.common.logging import logger
from shopadmin.services.payments.models import CUSTOMER_LINK_META_KEY, Payment, PaymentMeta

# Largest value a signed 64-bit integer primary key can hold.
MAX_PAYMENT_ID = 2**63 - 1


def _parse_payment_id(payment_id) -> int | None:
    """Accept ints or digit strings; anything else is not a payment ID."""

    if isinstance(payment_id, int):
        return payment_id if 0 < payment_id <= MAX_PAYMENT_ID else None
    text = str(payment_id).strip()
    if not (text.isascii() and text.isdigit()):
        return None
    value = int(text)
    return value if 0 < value <= MAX_PAYMENT_ID else None


class PaymentStore:
    """Per-payment reads and mutations used by customer commands.

    Mutations return False, and change nothing, for an empty, malformed or
    unknown payment ID. Storage errors propagate as `SQLAlchemyError`.
    """

    def __init__(self, session_factory) -> None:
        self.session_factory = session_factory

    def add(self, amount_cents: int, currency: str = "USD", customer_id: int | None = None) -> int:
        """Insert a payment, optionally linked to `customer_id`, and return its ID."""

        with self.session_factory() as db:
            payment = Payment(amount_cents=amount_cents, currency=currency.upper())
            db.add(payment)
            db.flush()
            if customer_id is not None:
                db.add(
                    PaymentMeta(
                        payment_id=payment.payment_id,
                        meta_key=CUSTOMER_LINK_META_KEY,
                        meta_value=str(customer_id),
                    )
                )
            db.commit()
            return payment.payment_id

    def get(self, payment_id) -> Payment | None:
        pid = _parse_payment_id(payment_id)
        if pid is None:
            return None
        with self.session_factory() as db:
            return db.get(Payment, pid)

    def get_meta(self, payment_id, key: str) -> str | None:
        pid = _parse_payment_id(payment_id)
        if pid is None:
            return None
        with self.session_factory() as db:
            return db.execute(
                select(PaymentMeta.meta_value).where(
                    PaymentMeta.payment_id == pid,
                    PaymentMeta.meta_key == key,
                )
            ).scalar_one_or_none()

    def update_link_metadata(self, payment_id, key: str, value) -> bool:
        """Upsert one meta value on an existing payment."""

        pid = _parse_payment_id(payment_id)
        if pid is None:
            logger.warning("payment meta update skipped invalid payment_id=%r", payment_id)
            return False
        with self.session_factory() as db:
            if db.get(Payment, pid) is None:
                logger.warning("payment meta update skipped unknown payment_id=%s", pid)
                return False
            meta = db.execute(
                select(PaymentMeta).where(PaymentMeta.payment_id == pid, PaymentMeta.meta_key == key)
            ).scalar_one_or_none()
            if meta is None:
                db.add(PaymentMeta(payment_id=pid, meta_key=key, meta_value=str(value)))
            else:
                meta.meta_value = str(value)
            db.commit()
            return True

    def delete_record(self, payment_id, cascade_meta: bool = True) -> bool:
        """Delete a payment and, with `cascade_meta`, every meta row it owns."""

        pid = _parse_payment_id(payment_id)
        if pid is None:
            logger.warning("payment delete skipped invalid payment_id=%r", payment_id)
            return False
        with self.session_factory() as db:
            payment = db.get(Payment, pid)
            if payment is None:
                logger.warning("payment delete skipped unknown payment_id=%s", pid)
                return False
            if cascade_meta:
                db.execute(delete(PaymentMeta).where(PaymentMeta.payment_id == pid))
            db.delete(payment)
            db.commit()
            return True
