"""`shopadmin` console entry point.

Parses arguments, checks that the shop schema is installed, builds the command
registry and maps terminal errors to exit codes (0 ok or cancelled, 1 error,
2 usage error from argparse).
"""

import argparse
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from shopadmin.cli.registry import CommandRegistry
from shopadmin.common import db
from shopadmin.common.config import settings
from shopadmin.common.errors import HostUnavailable, WorkflowError
from shopadmin.common.logging import command_ctx, configure_logging, logger
from shopadmin.common.metrics import flush_metrics, workflow_errors_total
from shopadmin.common.operator import Operator, TerminalOperator
from shopadmin.common.startup import log_startup_config
from shopadmin.common.tracing import setup_tracing, shutdown_tracing
from shopadmin.services.customers.commands import (
    DeleteCustomerCommand,
    ListOrCreateCustomerCommand,
    select_customer_command,
)
from shopadmin.services.customers.store import CustomerStore
from shopadmin.services.customers.workflow import CustomerDeletionWorkflow, PaymentBatchPolicy
from shopadmin.services.payments.store import PaymentStore

REQUIRED_TABLES = ["customers", "payments", "payment_meta"]

# argparse dest -> option name as typed on the command line.
CUSTOMER_OPTIONS = {
    "id": "id",
    "email": "email",
    "create": "create",
    "name": "name",
    "user_id": "user-id",
    "delete": "delete",
    "all_records": "all-records",
    "yes": "yes",
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="shopadmin", description="Shop administration commands.")
    sub = parser.add_subparsers(dest="command", required=True)

    customers = sub.add_parser(
        "customers",
        help="Get, create or delete customers.",
        epilog=(
            "examples: shopadmin customers --delete=1 | "
            "shopadmin customers --delete=john@test.com --all-records | "
            "shopadmin customers --delete=1 --yes"
        ),
    )
    customers.add_argument("--id", type=int, default=None, help="A specific customer ID to retrieve")
    customers.add_argument("--email", default=None, help="The email address of the customer to retrieve")
    customers.add_argument("--create", type=int, default=None, help="Number of customers to create")
    customers.add_argument("--name", default=None, help="Name for a created customer")
    customers.add_argument("--user-id", dest="user_id", type=int, default=None)
    customers.add_argument("--delete", default=None, metavar="ID_OR_EMAIL", help="Delete a customer by ID or email")
    customers.add_argument(
        "--all-records",
        dest="all_records",
        action="store_true",
        help="Also delete the customer's payments instead of detaching them",
    )
    customers.add_argument("--yes", action="store_true", help="Skip the confirmation prompt")
    customers.add_argument(
        "--stop-on-payment-error",
        action="store_true",
        help="Stop at the first payment that cannot be detached or deleted",
    )

    sub.add_parser("init-db", help="Create the shop tables in the configured database.")
    return parser


def options_from_namespace(args: argparse.Namespace) -> dict[str, Any]:
    """Keep only the customer options the operator actually supplied."""

    options = {}
    for dest, name in CUSTOMER_OPTIONS.items():
        value = getattr(args, dest, None)
        if value is None or value is False:
            continue
        options[name] = value
    return options


def ensure_host(engine) -> None:
    """Fail the whole command when the shop schema is not installed."""

    try:
        missing = db.missing_tables(engine, REQUIRED_TABLES)
    except SQLAlchemyError as exc:
        logger.exception("shop database unreachable: %s", exc)
        raise HostUnavailable("Could not connect to the shop database.") from exc
    if missing:
        logger.warning("shop schema incomplete missing_tables=%s", missing)
        raise HostUnavailable()


class InitDbCommand:
    def __init__(self, engine, operator: Operator) -> None:
        self.engine = engine
        self.operator = operator

    def run(self, options) -> None:
        db.create_schema(self.engine)
        self.operator.report_success("Shop tables are installed.")


def build_registry(
    engine,
    session_factory,
    operator: Operator,
    batch_policy: PaymentBatchPolicy,
    list_or_create_handler=None,
) -> CommandRegistry:
    """Register every command this CLI ships."""

    registry = CommandRegistry()

    def customers_factory(options):
        ensure_host(engine)
        workflow = CustomerDeletionWorkflow(
            CustomerStore(session_factory),
            PaymentStore(session_factory),
            operator,
            batch_policy=batch_policy,
        )
        return select_customer_command(
            options,
            DeleteCustomerCommand(workflow),
            ListOrCreateCustomerCommand(list_or_create_handler),
        )

    registry.register("customers", customers_factory)
    registry.register("init-db", lambda options: InitDbCommand(engine, operator))
    return registry


def run(
    argv: list[str] | None = None,
    engine=None,
    session_factory=None,
    operator: Operator | None = None,
    list_or_create_handler=None,
) -> int:
    """Parse `argv`, dispatch one command and return the process exit code."""

    args = build_parser().parse_args(argv)
    options = options_from_namespace(args)
    operator = operator or TerminalOperator()
    if getattr(args, "stop_on_payment_error", False):
        policy = PaymentBatchPolicy.ABORT
    else:
        policy = PaymentBatchPolicy(settings.payment_batch_policy)
    registry = build_registry(
        engine or db.engine,
        session_factory or db.SessionLocal,
        operator,
        policy,
        list_or_create_handler,
    )

    token = command_ctx.set(args.command)
    try:
        registry.resolve(args.command, options).run(options)
    except WorkflowError as exc:
        workflow_errors_total.labels(service=settings.service_name, error=type(exc).__name__).inc()
        logger.warning("command failed error=%s message=%s", type(exc).__name__, exc.message)
        operator.report_error(exc.message)
        return 1
    finally:
        command_ctx.reset(token)
        flush_metrics(settings.metrics_textfile)
    return 0


def main() -> None:
    """CLI entrypoint."""

    configure_logging()
    provider = setup_tracing(settings.service_name)
    log_startup_config(
        settings.service_name,
        ["SERVICE_NAME", "DATABASE_URL", "PAYMENT_BATCH_POLICY", "METRICS_TEXTFILE"],
    )
    try:
        rc = run()
    finally:
        shutdown_tracing(provider)
    raise SystemExit(rc)


if __name__ == "__main__":
    main()
