import logging

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from bookingdesk.core.abstract import App
from bookingdesk.core.config import Settings
from bookingdesk.server.services.store import DemoStore

logger = logging.getLogger(__name__)


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse({"error": str(exc.detail)}, status_code=exc.status_code, headers=exc.headers)


async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    first = exc.errors()[0] if exc.errors() else {}
    field = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid request")
    logger.info(f"Rejected {request.method} {request.url.path}: {exc.errors()}")
    return JSONResponse({"error": f"{field}: {message}" if field else message}, status_code=400)


def create_app(settings: Settings, store: DemoStore | None = None) -> FastAPI:
    app = FastAPI(
        title="Bookingdesk Stub Server",
        description="In-memory backend for the Bookingdesk client",
        version="1.0.0",
        docs_url="/docs" if settings.server_debug else None,
        redoc_url="/redoc" if settings.server_debug else None,
    )
    app.state.store = store or DemoStore()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)

    from .api.admin import router as admin_router
    from .api.bookings import router as bookings_router
    from .api.provider import router as provider_router

    app.include_router(admin_router, prefix="/api/admin")
    app.include_router(provider_router, prefix="/api/provider")
    app.include_router(bookings_router, prefix="/api/bookings")
    return app


class ServerApp(App):
    def __init__(self, settings: Settings) -> None:
        super().__init__(settings)
        self.app = create_app(settings)

    def run(self) -> None:
        uvicorn.run(
            self.app,
            host=self.settings.server_bind,
            port=self.settings.server_port or 8000,
        )
