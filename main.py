import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

# Core
from core.config import settings
from core.config_validator import validate_config_on_startup
from core.logging_config import logger
from core.scheduler import shutdown_scheduler, start_scheduler

# -------------------------------------------------
# Routers
# -------------------------------------------------
from routers.users import router as users_router
from routers.user_roles import router as user_roles_router

from routers.properties import router as properties_router
from routers.bookings import router as bookings_router
from routers.payments import router as payments_router
from routers.issues import router as issues_router

from routers.announcements import router as announcements_router
from routers.polls import router as polls_router
from routers.events import router as events_router
from routers.chat import router as chat_router

from routers.reports import router as reports_router
from routers.health import router as health_router


# -------------------------------------------------
# Create the Application
# -------------------------------------------------
def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        version="1.0.0",
        description="RentEazy API: property rentals, bookings, payments and community",
    )

    # -------------------------------------------------
    # CORS
    # -------------------------------------------------
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.BACKEND_CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # -------------------------------------------------
    # Startup / shutdown
    # -------------------------------------------------
    @app.on_event("startup")
    async def on_startup():
        logger.info("Starting RentEazy API")
        validate_config_on_startup()

        if settings.ENABLE_SCHEDULER:
            start_scheduler()

        for route in app.routes:
            methods = ",".join(sorted(getattr(route, "methods", None) or []))
            logger.debug(f"{methods:10s} {route.path}")

    @app.on_event("shutdown")
    async def on_shutdown():
        shutdown_scheduler()

    # -------------------------------------------------
    # Error handling: every error body is {"message": ...}
    # -------------------------------------------------
    @app.exception_handler(StarletteHTTPException)
    async def handle_http(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (401, 403) or exc.status_code >= 500:
            logger.warning(f"HTTP {exc.status_code} at {request.url.path}: {exc.detail}")
        return JSONResponse(
            status_code=exc.status_code,
            content={"message": exc.detail},
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation(request: Request, exc: RequestValidationError):
        errors = [
            {
                "loc": [str(part) for part in err.get("loc", ())],
                "msg": err.get("msg"),
                "type": err.get("type"),
            }
            for err in exc.errors()
        ]
        return JSONResponse(
            status_code=400,
            content={"message": "Invalid request", "errors": errors},
        )

    @app.exception_handler(Exception)
    async def handle_unhandled(request: Request, exc: Exception):
        logger.error("Unhandled error at %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content={"message": "Internal server error"},
        )

    # -------------------------------------------------
    # Register Routers (all under /api except health)
    # -------------------------------------------------

    # Users & roles
    app.include_router(users_router)
    app.include_router(user_roles_router)

    # Rentals
    app.include_router(properties_router)
    app.include_router(bookings_router)
    app.include_router(payments_router)
    app.include_router(issues_router)

    # Community
    app.include_router(announcements_router)
    app.include_router(polls_router)
    app.include_router(events_router)
    app.include_router(chat_router)

    # Admin
    app.include_router(reports_router)

    # Health
    app.include_router(health_router)

    @app.get("/", include_in_schema=False)
    async def root():
        return {"service": settings.PROJECT_NAME, "status": "ok"}

    return app


# Create the global FastAPI instance
app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=settings.PORT, reload=settings.ENV == "development")
