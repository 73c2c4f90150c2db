"""Guarded customer deletion.

Validates the identifier, resolves the customer, asks the operator, deletes
the customer and then detaches or deletes the payments it owned. Every check
is a hard gate: the first failure raises a `WorkflowError` and nothing after
it runs. Nothing already done is rolled back.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Mapping

from sqlalchemy.exc import SQLAlchemyError

from shopadmin.common.config import settings
from shopadmin.common.errors import (
    CustomerNotFound,
    DeletionFailed,
    InvalidIdentifier,
    MissingIdentifier,
    MissingInput,
    PaymentBatchFailed,
)
from shopadmin.common.logging import customer_ref_ctx, logger
from shopadmin.common.metrics import (
    customers_deleted_total,
    payment_batch_failures_total,
    payments_deleted_total,
    payments_detached_total,
)
from shopadmin.common.operator import Operator
from shopadmin.common.tracing import tracer
from shopadmin.common.validation import is_valid_id_or_email
from shopadmin.services.payments.models import CUSTOMER_LINK_META_KEY, UNASSIGNED_CUSTOMER_ID


class PaymentBatchPolicy(str, Enum):
    """What to do when one per-payment store call fails."""

    BEST_EFFORT = "best_effort"
    ABORT = "abort"


@dataclass(frozen=True)
class DeleteFlags:
    all_records: bool = False
    skip_confirmation: bool = False


class CustomerDeletionWorkflow:
    """Single-shot, stateless delete of one customer and its payment links."""

    def __init__(
        self,
        customers,
        payments,
        operator: Operator,
        batch_policy: PaymentBatchPolicy = PaymentBatchPolicy.BEST_EFFORT,
        service_name: str = settings.service_name,
    ) -> None:
        self.customers = customers
        self.payments = payments
        self.operator = operator
        self.batch_policy = PaymentBatchPolicy(batch_policy)
        self.service_name = service_name

    def execute(self, options: Mapping[str, Any]) -> None:
        """Run from the options the operator actually supplied.

        Recognized keys are `delete`, `all-records` and `yes`.
        """

        if not options:
            raise MissingInput()
        flags = DeleteFlags(
            all_records=bool(options.get("all-records")),
            skip_confirmation=bool(options.get("yes")),
        )
        self.delete(options.get("delete"), flags)

    def delete(self, identifier: str | None, flags: DeleteFlags) -> None:
        """Delete one customer; returns quietly when the operator declines."""

        with tracer.start_as_current_span("customers.delete") as span:
            span.set_attribute("customer.all_records", flags.all_records)
            token = customer_ref_ctx.set(identifier or "")
            try:
                self._delete(identifier, flags)
            finally:
                customer_ref_ctx.reset(token)

    def _delete(self, identifier: str | None, flags: DeleteFlags) -> None:
        if not identifier:
            raise MissingIdentifier()
        if not is_valid_id_or_email(identifier):
            raise InvalidIdentifier()

        try:
            customer = self.customers.resolve(identifier)
        except SQLAlchemyError as exc:
            logger.exception("customer lookup failed: %s", exc)
            raise DeletionFailed() from exc
        if not customer.exists:
            raise CustomerNotFound()

        if not flags.skip_confirmation:
            if not self.operator.confirm(f"Are you sure you want to delete the customer: {identifier}?"):
                logger.info("customer delete cancelled by operator")
                return

        payment_ids = customer.payment_id_list()
        try:
            deleted = self.customers.delete(identifier)
        except SQLAlchemyError as exc:
            logger.exception("customer delete failed: %s", exc)
            raise DeletionFailed() from exc
        if not deleted:
            raise DeletionFailed()

        customers_deleted_total.labels(service=self.service_name).inc()
        self.operator.report_success(f"The customer: {identifier} was deleted from the shop database.")

        if not flags.all_records:
            failed = self._for_each_payment("detach", payment_ids, self._detach, payments_detached_total)
            if failed:
                self.operator.report_warning(
                    f"Could not detach {len(failed)} payment(s) from customer {identifier}: {', '.join(failed)}"
                )
            return

        self.operator.report_warning(f"Removing associated payments and records for customer: {identifier}...")
        failed = self._for_each_payment("delete", payment_ids, self._purge, payments_deleted_total)
        if failed:
            self.operator.report_warning(
                f"Could not delete {len(failed)} payment(s) of customer {identifier}: {', '.join(failed)}"
            )
            return
        self.operator.report_success(f"All associated payments and records were deleted for customer: {identifier}.")

    def _detach(self, payment_id: str) -> bool:
        return self.payments.update_link_metadata(payment_id, CUSTOMER_LINK_META_KEY, UNASSIGNED_CUSTOMER_ID)

    def _purge(self, payment_id: str) -> bool:
        return self.payments.delete_record(payment_id, cascade_meta=True)

    def _for_each_payment(
        self,
        action: str,
        payment_ids: list[str],
        call: Callable[[str], bool],
        done_counter,
    ) -> list[str]:
        """Apply `call` to every payment ID in order; return the IDs that failed.

        Under `ABORT` the first failure raises `PaymentBatchFailed` instead.
        """

        failed: list[str] = []
        for index, payment_id in enumerate(payment_ids):
            try:
                ok = call(payment_id)
            except SQLAlchemyError as exc:
                logger.exception("payment %s failed payment_id=%s: %s", action, payment_id, exc)
                ok = False
            if ok:
                done_counter.labels(service=self.service_name).inc()
                continue

            payment_batch_failures_total.labels(service=self.service_name, action=action).inc()
            if self.batch_policy is PaymentBatchPolicy.ABORT:
                raise PaymentBatchFailed(
                    action,
                    payment_id,
                    processed=payment_ids[:index],
                    remaining=payment_ids[index + 1 :],
                )
            failed.append(payment_id)
        return failed
