"""Read-only customer views handed to commands."""

from pydantic import BaseModel


class CustomerSnapshot(BaseModel):
    """Customer state captured at resolution time.

    `id == 0` is the "no such customer" sentinel; lookups never raise for a
    missing customer.
    """

    id: int = 0
    email: str = ""
    name: str = ""
    payment_ids: str = ""

    @property
    def exists(self) -> bool:
        return self.id != 0

    def payment_id_list(self) -> list[str]:
        """Split `payment_ids`, skipping empty segments ("" yields no IDs)."""

        return [part.strip() for part in self.payment_ids.split(",") if part.strip()]
