"""
Main FastAPI application entry point.
"""
import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from dealership.config import Settings, get_settings
from dealership.database import Database
from dealership.exceptions import DealershipError
from dealership.routers import admin, auth, bookings, vehicles
from dealership.seed import init_db

logger = logging.getLogger(__name__)

HTTP_ERROR_TYPES = {
    status.HTTP_400_BAD_REQUEST: "validation_error",
    status.HTTP_401_UNAUTHORIZED: "unauthorized",
    status.HTTP_403_FORBIDDEN: "forbidden",
    status.HTTP_404_NOT_FOUND: "not_found",
    status.HTTP_405_METHOD_NOT_ALLOWED: "method_not_allowed",
    status.HTTP_409_CONFLICT: "conflict",
}


def error_response(status_code: int, message: str, error_type: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, "error_type": error_type},
    )


def describe_validation_error(exc: RequestValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return "Invalid request."
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    message = first.get("msg", "Invalid value")
    return f"{location}: {message}" if location else message


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"success": false, "message", "error_type"}``."""

    @app.exception_handler(DealershipError)
    async def handle_dealership_error(request: Request, exc: DealershipError):
        return error_response(exc.status_code, exc.message, exc.error_type)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation_error(request: Request, exc: RequestValidationError):
        return error_response(
            status.HTTP_400_BAD_REQUEST, describe_validation_error(exc), "validation_error"
        )

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_exception(request: Request, exc: StarletteHTTPException):
        error_type = HTTP_ERROR_TYPES.get(exc.status_code, "error")
        return error_response(exc.status_code, str(exc.detail), error_type)

    @app.exception_handler(Exception)
    async def handle_unexpected_error(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return error_response(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            "Internal server error. Please try again later.",
            "server_error",
        )


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around an explicitly constructed database client."""
    settings = settings or get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Lifespan events for the application.
        Opens the database on startup and disposes of it on shutdown.
        """
        database = Database(settings.database_url, echo=settings.database_echo)
        app.state.database = database

        # Startup
        print(f"🚗 Starting {settings.app_name}...")
        print("📊 Initializing database...")
        await init_db(database, settings)
        print("✅ Database initialized successfully")
        print(f"🌐 API available at: {settings.api_prefix}")
        print("📖 Interactive docs: http://localhost:8000/docs")

        yield

        # Shutdown
        print(f"👋 Shutting down {settings.app_name}...")
        await database.close()

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
        ## 🚗 Dealership API

        Inventory browsing, customer accounts and purchase, lease and rental
        bookings, plus the admin back-office.

        ### Entities:
        * **Vehicles**: Public catalog and admin inventory
        * **Bookings**: Purchase, lease and rental requests
        * **Inquiries**: Contact form submissions
        * **Users**: Customers and admins
        """,
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
    )
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    register_exception_handlers(app)

    # Include routers
    app.include_router(auth.router, prefix=settings.api_prefix)
    app.include_router(vehicles.router, prefix=settings.api_prefix)
    app.include_router(bookings.router, prefix=settings.api_prefix)
    app.include_router(admin.router, prefix=settings.api_prefix)

    @app.get("/")
    async def root():
        """Root endpoint."""
        return {
            "message": f"Welcome to the {settings.app_name}",
            "version": settings.app_version,
            "docs": "/docs",
            "redoc": "/redoc",
        }

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "version": settings.app_version,
        }

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(
        "dealership.main:app",
        host="0.0.0.0",
        port=8000,
        reload=get_settings().debug,
    )
