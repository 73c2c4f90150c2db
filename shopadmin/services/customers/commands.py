"""`customers` command variants.

The caller picks the variant before dispatch: `Delete` when the operator passed
the delete option, `ListOrCreate` otherwise.
"""

from typing import Any, Callable, Mapping, Protocol

from shopadmin.common.errors import HostUnavailable
from shopadmin.services.customers.workflow import CustomerDeletionWorkflow


class CustomerCommand(Protocol):
    def run(self, options: Mapping[str, Any]) -> None: ...


class DeleteCustomerCommand:
    def __init__(self, workflow: CustomerDeletionWorkflow) -> None:
        self.workflow = workflow

    def run(self, options: Mapping[str, Any]) -> None:
        self.workflow.execute(options)


class ListOrCreateCustomerCommand:
    """Hands listing and creation to a handler supplied by the host."""

    def __init__(self, handler: Callable[[Mapping[str, Any]], None] | None = None) -> None:
        self.handler = handler

    def run(self, options: Mapping[str, Any]) -> None:
        if self.handler is None:
            raise HostUnavailable("The customer list/create command is not available.")
        self.handler(options)


def select_customer_command(
    options: Mapping[str, Any],
    delete_command: CustomerCommand,
    list_or_create_command: CustomerCommand,
) -> CustomerCommand:
    # An empty `--delete=` still selects delete so it can be reported.
    if "delete" in options:
        return delete_command
    return list_or_create_command
