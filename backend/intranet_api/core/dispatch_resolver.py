"""Dispatch Resolver — raw JSON text to CommandDescriptor, with no IO.

Invariants:
    - Malformed text, NaN/Infinity literals, excessive nesting or a non-object
      document raise MalformedPayloadError
    - Absent, empty, whitespace-only or non-string routing field raises
      MissingRoutingFieldError
    - target_name == prefix + routing_value.upper(), for any case mix
    - The descriptor carries the original text; the parsed document is discarded

Design Decisions:
    - The parsed envelope is only used to read the routing field; forwarding
      the original text keeps the downstream wire format byte-for-byte
"""

import json

from intranet_api.core.domain_types import (
    CommandDescriptor, RoutingValue, TargetName,
    DEFAULT_PROCEDURE_PREFIX, DEFAULT_ROUTING_FIELD,
)
from intranet_api.core.errors import (
    ErrorContext, MalformedPayloadError, MissingRoutingFieldError,
)


def _reject_constant(token: str):
    raise MalformedPayloadError(f"Invalid JSON literal '{token}'.")


def parse_envelope(raw_json: str) -> dict:
    """Parse the request text as a JSON object (strict RFC 8259 literals)."""
    try:
        envelope = json.loads(raw_json, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedPayloadError(
            f"Invalid JSON payload: {e.msg} (line {e.lineno}, column {e.colno}).",
        ) from e
    except RecursionError as e:
        raise MalformedPayloadError("JSON nesting too deep.") from e
    if not isinstance(envelope, dict):
        raise MalformedPayloadError(
            f"Request body must be a JSON object, got {type(envelope).__name__}.",
        )
    return envelope


def extract_routing_value(
    envelope: dict, routing_field: str = DEFAULT_ROUTING_FIELD,
) -> RoutingValue:
    """Return the routing field's value or raise MissingRoutingFieldError."""
    value = envelope.get(routing_field)
    if not isinstance(value, str) or not value.strip():
        ctx = ErrorContext(
            routing_value=value if isinstance(value, str) else None,
            debug_info={"value_type": type(value).__name__},
        )
        raise MissingRoutingFieldError(routing_field, ctx)
    return RoutingValue(value)


def derive_target_name(
    routing_value: str, prefix: str = DEFAULT_PROCEDURE_PREFIX,
) -> TargetName:
    """GetOrders -> P_GETORDERS."""
    return TargetName(prefix + routing_value.upper())


def resolve(
    raw_json: str,
    routing_field: str = DEFAULT_ROUTING_FIELD,
    prefix: str = DEFAULT_PROCEDURE_PREFIX,
) -> CommandDescriptor:
    """Build the command descriptor for one gateway request."""
    envelope = parse_envelope(raw_json)
    routing_value = extract_routing_value(envelope, routing_field)
    return CommandDescriptor(
        target_name=derive_target_name(routing_value, prefix),
        raw_payload=raw_json,
        routing_value=routing_value,
    )


def decode_body(body: bytes) -> str:
    """Decode a raw request body as UTF-8 (the only JSON encoding accepted)."""
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as e:
        raise MalformedPayloadError(
            f"Request body is not valid UTF-8 text (byte offset {e.start}).",
        ) from e
