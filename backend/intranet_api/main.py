"""Intranet API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map IntranetError -> problem-details responses
    - CORS configured from settings (not hardcoded); Custom-Header is exposed
    - Database and gateway command table initialized on startup via lifespan

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Gateway only wired for dialects with a procedure-call form (postgresql, mssql);
      on any other backend /Common/CallSP answers through the catch-all handler
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from intranet_api.api.error_handlers import register_error_handlers
from intranet_api.api.routes import (
    common, departments, employees, health, products,
)
from intranet_api.config import get_settings
from intranet_api.infrastructure.database import init_db
from intranet_api.infrastructure.observability import setup_logging
from intranet_api.infrastructure.procedure_catalog import SqlProcedureCatalog
from intranet_api.infrastructure.procedure_executor import (
    ProcedureExecutor, supports_dialect,
)
from intranet_api.services.gateway_service import (
    GatewayService, build_command_table, init_gateway,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    dialect = manager.engine.dialect.name
    if supports_dialect(dialect):
        catalog = (
            SqlProcedureCatalog(manager.engine)
            if settings.gateway_discover_procedures else None
        )
        table = await build_command_table(
            settings.gateway_procedure_prefix,
            settings.gateway_commands,
            strict=settings.gateway_strict_commands,
            catalog=catalog,
        )
        init_gateway(GatewayService(
            table, ProcedureExecutor(manager.engine),
            routing_field=settings.gateway_routing_field,
        ))
    else:
        logger.warning(
            f"Stored-procedure gateway disabled: dialect '{dialect}' has no "
            f"procedure call form",
        )
    logger.info("Intranet API started")
    yield
    logger.info("Intranet API shutting down")
    await manager.dispose()


app = FastAPI(
    title="Intranet API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["Custom-Header"],
)

app.include_router(health.router)
app.include_router(common.router)
app.include_router(products.router)
app.include_router(departments.router)
app.include_router(employees.router)

register_error_handlers(app)
