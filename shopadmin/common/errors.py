"""Terminal errors raised by admin commands.

Each error carries the message shown to the operator. The CLI entry point is
the only place that catches them.
"""


class WorkflowError(Exception):
    """Base class for every terminal command failure."""

    default_message = "The command failed."

    def __init__(self, message: str | None = None) -> None:
        super().__init__(message or self.default_message)

    @property
    def message(self) -> str:
        return self.args[0]


class HostUnavailable(WorkflowError):
    default_message = "Shop database schema is not installed."


class MissingInput(WorkflowError):
    default_message = "There is nothing to process for the current arguments."


class MissingIdentifier(WorkflowError):
    default_message = "You need to provide the customer ID or email."


class InvalidIdentifier(WorkflowError):
    default_message = "The customer ID or email is not valid. Please enter a valid value."


class CustomerNotFound(WorkflowError):
    default_message = "The customer you are trying to delete does not exist."


class DeletionFailed(WorkflowError):
    default_message = "Something went wrong when trying to delete the customer."


class PaymentBatchFailed(WorkflowError):
    """A payment store call failed while the batch policy is `abort`."""

    def __init__(self, action: str, failed_id: str, processed: list[str], remaining: list[str]) -> None:
        self.action = action
        self.failed_id = failed_id
        self.processed = processed
        self.remaining = remaining
        super().__init__(
            f"Could not {action} payment {failed_id or '<empty>'}; "
            f"stopped after {len(processed)} payment(s), {len(remaining)} left untouched."
        )
