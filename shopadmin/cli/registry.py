"""Explicit command registry built by the entry point at startup."""

from typing import Any, Callable, Mapping, Protocol


class Command(Protocol):
    def run(self, options: Mapping[str, Any]) -> None: ...


CommandFactory = Callable[[Mapping[str, Any]], Command]


class CommandRegistry:
    """Maps command names to factories that build the command for one call."""

    def __init__(self) -> None:
        self._factories: dict[str, CommandFactory] = {}

    def register(self, name: str, factory: CommandFactory) -> None:
        if name in self._factories:
            raise ValueError(f"command already registered: {name}")
        self._factories[name] = factory

    def resolve(self, name: str, options: Mapping[str, Any]) -> Command:
        try:
            factory = self._factories[name]
        except KeyError:
            raise ValueError(f"unknown command: {name}") from None
        return factory(options)
