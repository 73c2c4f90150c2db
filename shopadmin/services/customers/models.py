"""Customer database model.

A customer keeps the IDs of its payments as a comma-separated list; the
payment side links back through a meta row (see payments.models).
"""

from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from shopadmin.common.db import Base


class Customer(Base):
    """One purchaser record."""

    __tablename__ = "customers"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    email: Mapped[str] = mapped_column(String(254), index=True)
    name: Mapped[str] = mapped_column(String, default="")
    user_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    purchase_value_cents: Mapped[int] = mapped_column(Integer, default=0)
    purchase_count: Mapped[int] = mapped_column(Integer, default=0)
    payment_ids: Mapped[str] = mapped_column(Text, default="")
    date_created: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())


# Emails are unique regardless of case, matching the case-insensitive lookup.
Index("ux_customers_email_lower", func.lower(Customer.email), unique=True)
