"""End-to-end runs of the `shopadmin` entry point on an in-memory database."""

import io

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from shopadmin.cli.main import build_parser, options_from_namespace, run
from shopadmin.cli.registry import CommandRegistry
from shopadmin.common.operator import TerminalOperator
from shopadmin.services.customers.models import Customer
from shopadmin.services.payments.models import CUSTOMER_LINK_META_KEY


@pytest.fixture
def shop(engine, session_factory, customer_store, payment_store):
    """One customer owning two payments."""

    customer = customer_store.add("john@test.com", name="John Doe")
    first = payment_store.add(1000, customer_id=customer.id)
    second = payment_store.add(2000, customer_id=customer.id)
    with session_factory() as db:
        db.get(Customer, customer.id).payment_ids = f"{first},{second}"
        db.commit()
    return customer, [first, second]


def invoke(argv, engine, session_factory, operator, **kwargs):
    return run(argv, engine=engine, session_factory=session_factory, operator=operator, **kwargs)


def test_delete_with_yes_detaches_payments(shop, engine, session_factory, operator, customer_store, payment_store):
    customer, payment_ids = shop
    rc = invoke(["customers", f"--delete={customer.id}", "--yes"], engine, session_factory, operator)
    assert rc == 0
    assert customer_store.count() == 0
    for payment_id in payment_ids:
        assert payment_store.get(payment_id) is not None
        assert payment_store.get_meta(payment_id, CUSTOMER_LINK_META_KEY) == "0"


def test_delete_all_records_by_email(shop, engine, session_factory, operator, payment_store):
    _, payment_ids = shop
    rc = invoke(["customers", "--delete=john@test.com", "--all-records"], engine, session_factory, operator)
    assert rc == 0
    assert operator.prompts == ["Are you sure you want to delete the customer: john@test.com?"]
    assert all(payment_store.get(payment_id) is None for payment_id in payment_ids)


def test_declined_prompt_exits_zero_and_keeps_data(shop, engine, session_factory, operator, customer_store):
    operator.answer = False
    rc = invoke(["customers", "--delete=john@test.com"], engine, session_factory, operator)
    assert rc == 0
    assert customer_store.count() == 1
    assert operator.errors == []


@pytest.mark.parametrize(
    "argv, message",
    [
        (["customers", "--delete="], "You need to provide the customer ID or email."),
        (["customers", "--delete=nope"], "The customer ID or email is not valid. Please enter a valid value."),
        (["customers", "--delete=404"], "The customer you are trying to delete does not exist."),
    ],
)
def test_errors_exit_one(shop, engine, session_factory, operator, argv, message):
    assert invoke(argv, engine, session_factory, operator) == 1
    assert operator.errors == [message]


def test_missing_schema_is_host_unavailable(operator):
    bare = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    rc = run(["customers", "--delete=1", "--yes"], engine=bare, session_factory=sessionmaker(bind=bare), operator=operator)
    assert rc == 1
    assert operator.errors == ["Shop database schema is not installed."]


def test_init_db_installs_schema(operator):
    bare = create_engine("sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool)
    factory = sessionmaker(bind=bare)
    assert run(["init-db"], engine=bare, session_factory=factory, operator=operator) == 0
    assert run(["customers", "--delete=1", "--yes"], engine=bare, session_factory=factory, operator=operator) == 1
    assert operator.errors == ["The customer you are trying to delete does not exist."]


def test_without_delete_uses_list_or_create_handler(engine, session_factory, operator):
    seen = []
    rc = invoke(["customers", "--id=3"], engine, session_factory, operator, list_or_create_handler=seen.append)
    assert rc == 0
    assert seen == [{"id": 3}]


def test_without_delete_and_no_handler_fails(engine, session_factory, operator):
    assert invoke(["customers", "--email=john@test.com"], engine, session_factory, operator) == 1
    assert operator.errors == ["The customer list/create command is not available."]


def test_stop_on_payment_error_aborts_batch(shop, engine, session_factory, operator, customer_store):
    customer, _ = shop
    with session_factory() as db:
        db.get(Customer, customer.id).payment_ids = "999,998"
        db.commit()
    rc = invoke(
        ["customers", "--delete=john@test.com", "--yes", "--stop-on-payment-error"],
        engine,
        session_factory,
        operator,
    )
    assert rc == 1
    assert customer_store.count() == 0
    assert operator.errors[0].startswith("Could not detach payment 999;")


def test_options_keep_only_supplied_values():
    args = build_parser().parse_args(["customers", "--delete=5", "--all-records"])
    assert options_from_namespace(args) == {"delete": "5", "all-records": True}


def test_registry_rejects_duplicate_names():
    registry = CommandRegistry()
    registry.register("customers", lambda options: None)
    with pytest.raises(ValueError):
        registry.register("customers", lambda options: None)
    with pytest.raises(ValueError):
        registry.resolve("menu-import", {})


@pytest.mark.parametrize("answer, expected", [("y", True), ("YES", True), ("n", False), ("", False)])
def test_terminal_operator_confirm(answer, expected):
    operator = TerminalOperator(out=io.StringIO(), err=io.StringIO(), read_line=lambda prompt: answer)
    assert operator.confirm("Delete?") is expected


def test_terminal_operator_eof_declines_and_prefixes_output():
    def eof(prompt):
        raise EOFError

    out, err = io.StringIO(), io.StringIO()
    operator = TerminalOperator(out=out, err=err, read_line=eof)
    assert operator.confirm("Delete?") is False
    operator.report_success("done")
    operator.report_error("broken")
    assert out.getvalue() == "Success: done\n"
    assert err.getvalue() == "Error: broken\n"


def test_oversized_numeric_id_is_not_found(shop, engine, session_factory, operator, customer_store):
    rc = invoke(["customers", "--delete=99999999999999999999", "--yes"], engine, session_factory, operator)
    assert rc == 1
    assert operator.errors == ["The customer you are trying to delete does not exist."]
    assert customer_store.count() == 1


def test_delete_by_email_in_other_case(engine, session_factory, operator, customer_store):
    customer_store.add("A@x.com")
    rc = invoke(["customers", "--delete=a@X.com", "--yes"], engine, session_factory, operator)
    assert rc == 0
    assert customer_store.count() == 0
