"""Command Table — explicit registry of gateway procedures, populated at startup.

Invariants:
    - Keys are derived target names (prefix + UPPER), so lookups are case-insensitive
      on the caller's routing value
    - In strict mode an unregistered target raises TargetNotFoundError before any
      backing-store call
    - In non-strict mode every well-formed descriptor passes (legacy passthrough);
      missing procedures are then detected by the executor
    - Catalog names that the naming transform can never produce are not registered

Design Decisions:
    - Explicit dict over dynamic lookup: every callable procedure visible in one place
    - Two sources (declared in settings, discovered from the catalog) recorded per
      entry for startup logging
"""

from dataclasses import dataclass
from enum import Enum

from intranet_api.core.dispatch_resolver import derive_target_name
from intranet_api.core.domain_types import (
    CommandDescriptor, TargetName, DEFAULT_PROCEDURE_PREFIX,
)
from intranet_api.core.errors import ErrorContext, TargetNotFoundError


class CommandSource(str, Enum):
    """Where a table entry came from."""
    DECLARED = "declared"
    DISCOVERED = "discovered"


@dataclass(frozen=True)
class RegisteredCommand:
    target_name: TargetName
    source: CommandSource


class CommandTable:
    """Routes derived target names to registered procedures."""

    def __init__(
        self, prefix: str = DEFAULT_PROCEDURE_PREFIX, strict: bool = True,
    ):
        self._prefix = prefix
        self._strict = strict
        self._commands: dict[TargetName, RegisteredCommand] = {}

    @property
    def strict(self) -> bool:
        return self._strict

    @property
    def prefix(self) -> str:
        return self._prefix

    def declare(self, routing_value: str) -> TargetName:
        """Register a routing value (e.g. 'GetOrders') by its derived target."""
        if not routing_value or not routing_value.strip():
            raise ValueError("Declared gateway command cannot be blank")
        target = derive_target_name(routing_value, self._prefix)
        self._commands[target] = RegisteredCommand(target, CommandSource.DECLARED)
        return target

    def register_target(self, name: str) -> TargetName | None:
        """Register a catalog procedure name. Returns None if unreachable."""
        if not name.startswith(self._prefix) or name != name.upper():
            return None
        if len(name) == len(self._prefix):
            return None
        target = TargetName(name)
        self._commands.setdefault(
            target, RegisteredCommand(target, CommandSource.DISCOVERED),
        )
        return target

    def check(self, descriptor: CommandDescriptor) -> None:
        """Raise TargetNotFoundError if strict and the target is unregistered."""
        if self._strict and descriptor.target_name not in self._commands:
            raise TargetNotFoundError(
                descriptor.target_name,
                ErrorContext(
                    routing_value=descriptor.routing_value,
                    debug_info={"rejected_by": "command_table"},
                ),
            )

    def targets(self) -> list[TargetName]:
        return sorted(self._commands)

    def source_of(self, target_name: str) -> CommandSource | None:
        entry = self._commands.get(TargetName(target_name))
        return entry.source if entry else None

    def __contains__(self, target_name: object) -> bool:
        return target_name in self._commands

    def __len__(self) -> int:
        return len(self._commands)
