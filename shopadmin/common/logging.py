"""Structured JSON logging with command context fields."""

import logging
import sys
from contextvars import ContextVar

from pythonjsonlogger.json import JsonFormatter

from shopadmin.common.config import settings


command_ctx: ContextVar[str] = ContextVar("command", default="")
customer_ref_ctx: ContextVar[str] = ContextVar("customer_ref", default="")


class ContextFilter(logging.Filter):
    """Inject service and command identifiers into every log record."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.service_name = settings.service_name
        record.command = command_ctx.get()
        record.customer_ref = customer_ref_ctx.get()
        return True


def configure_logging() -> None:
    """Configure root logger once per CLI process."""

    # stderr keeps stdout free for prompts and command output.
    handler = logging.StreamHandler(sys.stderr)
    context_filter = ContextFilter()
    handler.addFilter(context_filter)
    formatter = JsonFormatter(
        "%(asctime)s %(levelname)s %(service_name)s %(command)s %(customer_ref)s %(message)s"
    )
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.handlers = [handler]
    root.setLevel(settings.log_level)
    root.addFilter(context_filter)


logger = logging.getLogger("shopadmin")
