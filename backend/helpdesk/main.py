from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from helpdesk.core.config import settings
from helpdesk.core.exceptions import HelpdeskException
from helpdesk.core.logging import setup_logging
from helpdesk.routers import dashboards, reference, session, tickets


def create_app() -> FastAPI:
    setup_logging(settings.LOG_LEVEL)
    settings.validate_runtime_security()

    app = FastAPI(title=settings.APP_NAME)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(session.router, prefix="/api", tags=["session"])
    app.include_router(tickets.router, prefix="/api/tickets", tags=["tickets"])
    app.include_router(dashboards.router, prefix="/api/dashboards", tags=["dashboards"])
    app.include_router(reference.router, prefix="/api/reference", tags=["reference"])

    @app.exception_handler(HelpdeskException)
    async def handle_helpdesk_exception(_: Request, exc: HelpdeskException) -> JSONResponse:
        headers = exc.headers if getattr(exc, "headers", None) else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    return app


app = create_app()
