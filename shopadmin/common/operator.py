"""Operator interaction channel: prompts and status lines on the terminal."""

import sys
from typing import Callable, Protocol, TextIO


class Operator(Protocol):
    def confirm(self, message: str) -> bool: ...

    def report_error(self, message: str) -> None: ...

    def report_warning(self, message: str) -> None: ...

    def report_success(self, message: str) -> None: ...


class TerminalOperator:
    """Blocking yes/no prompts and prefixed status lines.

    Only `y` or `yes` (any case) confirms; any other answer, or EOF on stdin,
    declines.
    """

    def __init__(
        self,
        out: TextIO | None = None,
        err: TextIO | None = None,
        read_line: Callable[[str], str] = input,
    ) -> None:
        self.out = out or sys.stdout
        self.err = err or sys.stderr
        self.read_line = read_line

    def confirm(self, message: str) -> bool:
        try:
            answer = self.read_line(f"{message} [y/n] ")
        except EOFError:
            return False
        return answer.strip().lower() in {"y", "yes"}

    def report_error(self, message: str) -> None:
        print(f"Error: {message}", file=self.err)

    def report_warning(self, message: str) -> None:
        print(f"Warning: {message}", file=self.err)

    def report_success(self, message: str) -> None:
        print(f"Success: {message}", file=self.out)
