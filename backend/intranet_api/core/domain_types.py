"""Domain Types — gateway wire constants and the command descriptor.

Invariants:
    - TargetName is always DEFAULT_PROCEDURE_PREFIX-prefixed and upper-cased
      (only the suffix ever comes from the caller)
    - CommandDescriptor.raw_payload is the caller's JSON text, unmodified
    - EMPTY_RESULT is the only value returned for "no data"

Design Decisions:
    - NewType over wrapper classes: zero runtime cost, full type-checker support
    - Frozen dataclass for the descriptor: built once per request, never mutated
"""

from dataclasses import dataclass
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

RoutingValue = NewType("RoutingValue", str)
TargetName = NewType("TargetName", str)


# ─── Wire Constants ──────────────────────────────────────────────

DEFAULT_ROUTING_FIELD = "FromApi"
DEFAULT_PROCEDURE_PREFIX = "P_"
PROCEDURE_PARAMETER = "param"
EMPTY_RESULT = "[]"


@dataclass(frozen=True)
class CommandDescriptor:
    """A fully-formed procedure call: target name + opaque payload."""
    target_name: TargetName
    raw_payload: str
    routing_value: RoutingValue
