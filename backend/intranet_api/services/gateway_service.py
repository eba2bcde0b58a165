"""Gateway Service — Resolver -> Command Table -> Executor for the generic procedure call.

Invariants:
    - Pipeline is linear: resolve, check, execute; no state re-entered, no retry
    - Resolution and table failures happen before any backing-store call
    - Every failure path logs kind, derived target (if known) and routing value,
      then re-raises as an IntranetError subtype
    - Unexpected exceptions wrapped in UnclassifiedGatewayError (generic 500);
      asyncio.CancelledError passes through untouched
    - The executor's string is returned as-is (never parsed or re-serialized)

Design Decisions:
    - Singleton gateway initialized in the FastAPI lifespan, exposed through the
      get_gateway_service dependency so tests can override it
"""

import logging

from intranet_api.core.command_table import CommandTable
from intranet_api.core.dispatch_resolver import decode_body, resolve
from intranet_api.core.domain_types import (
    CommandDescriptor, DEFAULT_ROUTING_FIELD,
)
from intranet_api.core.errors import (
    ErrorContext, IntranetError, UnclassifiedGatewayError,
)
from intranet_api.core.repository_protocols import (
    CommandExecutor, ProcedureCatalog,
)

logger = logging.getLogger(__name__)


class GatewayService:
    """Handles one raw JSON gateway request end to end."""

    def __init__(
        self,
        table: CommandTable,
        executor: CommandExecutor,
        routing_field: str = DEFAULT_ROUTING_FIELD,
    ):
        self._table = table
        self._executor = executor
        self._routing_field = routing_field

    @property
    def table(self) -> CommandTable:
        return self._table

    async def handle(self, raw_json: str | bytes) -> str:
        descriptor: CommandDescriptor | None = None
        try:
            if isinstance(raw_json, (bytes, bytearray)):
                raw_json = decode_body(raw_json)
            descriptor = resolve(
                raw_json, self._routing_field, self._table.prefix,
            )
            self._table.check(descriptor)
            result = await self._executor.execute(descriptor)
        except IntranetError as exc:
            self._log_failure(exc, descriptor)
            raise
        except Exception as exc:
            error = UnclassifiedGatewayError(ErrorContext(
                routing_value=descriptor.routing_value if descriptor else None,
                target_name=descriptor.target_name if descriptor else None,
                debug_info={"exception": type(exc).__name__},
            ))
            self._log_failure(error, descriptor, exc_info=exc)
            raise error from exc

        logger.info(
            f"Stored procedure {descriptor.target_name} completed",
            extra={
                "target_name": descriptor.target_name,
                "routing_value": descriptor.routing_value,
            },
        )
        return result

    @staticmethod
    def _log_failure(
        error: IntranetError,
        descriptor: CommandDescriptor | None,
        exc_info: BaseException | None = None,
    ) -> None:
        target = error.context.target_name or (
            descriptor.target_name if descriptor else None
        )
        routing = error.context.routing_value or (
            descriptor.routing_value if descriptor else None
        )
        kind = error.kind.value if error.kind else error.code
        extra = {
            "error_kind": kind,
            "error_code": error.code,
            "target_name": target,
            "routing_value": routing,
        }
        message = (
            f"Gateway call failed ({kind}): target={target} "
            f"routing_value={routing!r}"
        )
        if error.http_status >= 500:
            logger.error(
                message, extra=extra,
                exc_info=exc_info or error.__cause__ or error,
            )
        else:
            logger.warning(message, extra=extra)


async def build_command_table(
    prefix: str,
    declared: list[str],
    strict: bool = True,
    catalog: ProcedureCatalog | None = None,
) -> CommandTable:
    """Populate the command table from settings and (optionally) the catalog.

    Catalog failures are logged and leave the declared commands in place;
    startup is never aborted by discovery.
    """
    table = CommandTable(prefix=prefix, strict=strict)
    for routing_value in declared:
        table.declare(routing_value)
    if catalog is not None:
        try:
            names = await catalog.list_procedures(prefix)
        except Exception as e:
            logger.error(f"Procedure discovery failed: {e}", exc_info=True)
        else:
            skipped = [n for n in names if table.register_target(n) is None]
            if skipped:
                logger.warning(
                    f"Ignoring procedures unreachable by the naming convention: "
                    f"{', '.join(skipped)}",
                )
    logger.info(
        f"Gateway command table ready (strict={strict})",
        extra={"command_count": len(table)},
    )
    if strict and not len(table):
        logger.warning("Gateway command table is empty; every call will be rejected")
    return table


# Singleton (initialized on startup)
gateway_service: GatewayService | None = None


def init_gateway(service: GatewayService) -> GatewayService:
    global gateway_service
    gateway_service = service
    return service


def get_gateway_service() -> GatewayService:
    """FastAPI dependency for the gateway."""
    if not gateway_service:
        raise RuntimeError("Gateway not initialized")
    return gateway_service
