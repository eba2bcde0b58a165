"""Boundary Protocols — contracts between core/services and infrastructure.

Invariants:
    - Services depend on these Protocols, never on concrete infrastructure classes
    - Implementations provided by infrastructure via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, test fakes need no inheritance
"""

from typing import Protocol

from intranet_api.core.domain_types import CommandDescriptor


class CommandExecutor(Protocol):
    """Runs one procedure call and returns its JSON string result."""
    async def execute(self, descriptor: CommandDescriptor) -> str: ...


class ProcedureCatalog(Protocol):
    """Lists procedure names available on the backing store."""
    async def list_procedures(self, prefix: str) -> list[str]: ...

