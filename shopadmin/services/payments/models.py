"""Payment database models.

Payments never reference customers by foreign key; the link is a meta row
keyed by `CUSTOMER_LINK_META_KEY` so it can be reset without touching the
payment itself. Meta rows are plain key/value rows without a foreign key, so a
payment can be removed while its meta is kept.
"""

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, UniqueConstraint, func
from sqlalchemy.orm import Mapped, mapped_column

from shopadmin.common.db import Base


CUSTOMER_LINK_META_KEY = "_payment_customer_id"
UNASSIGNED_CUSTOMER_ID = 0


class Payment(Base):
    """One purchase transaction."""

    __tablename__ = "payments"

    payment_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    amount_cents: Mapped[int] = mapped_column(Integer)
    currency: Mapped[str] = mapped_column(String(3), default="USD")
    status: Mapped[str] = mapped_column(String, default="complete", index=True)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


class PaymentMeta(Base):
    """Key/value metadata attached to a payment."""

    __tablename__ = "payment_meta"
    __table_args__ = (UniqueConstraint("payment_id", "meta_key", name="uq_payment_meta_key"),)

    meta_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    payment_id: Mapped[int] = mapped_column(Integer, index=True)
    meta_key: Mapped[str] = mapped_column(String, index=True)
    meta_value: Mapped[str] = mapped_column(Text, default="")
