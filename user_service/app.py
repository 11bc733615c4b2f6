import time
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from http import HTTPStatus

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from user_service.infrastructure.config.dependencies import get_settings
from user_service.infrastructure.logging.logger import Logger, setup_logging
from user_service.infrastructure.persistence.database import create_tables, dispose_engine, get_engine, set_engine
from user_service.presentation.routers import users

settings = get_settings()
setup_logging(settings.LOG_LEVEL)
logger = Logger.get_logger(__name__)

STARTED_AT = time.monotonic()


@asynccontextmanager
async def lifespan(app: FastAPI):
    engine = get_engine()
    set_engine(engine)
    if settings.CREATE_TABLES_ON_STARTUP:
        await create_tables(engine)
    try:
        yield
    finally:
        await dispose_engine()


app = FastAPI(title="User Directory API", version="1.0.0", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE", "PATCH"],
    allow_headers=["Content-Type", "Authorization"],
)

app.include_router(users.router, prefix=settings.API_PREFIX)


@app.exception_handler(SQLAlchemyError)
async def database_exception_handler(request: Request, exc: SQLAlchemyError):
    logger.exception("Database error on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=HTTPStatus.INTERNAL_SERVER_ERROR,
        content={"detail": "Database error"},
    )


@app.get("/health", status_code=HTTPStatus.OK)
def health() -> dict:
    return {
        "status": "success",
        "message": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "uptime": round(time.monotonic() - STARTED_AT, 3),
    }


@app.get(settings.API_PREFIX, status_code=HTTPStatus.OK)
def api_index() -> dict:
    users_path = f"{settings.API_PREFIX}/users"
    return {
        "message": "User Directory API",
        "version": app.version,
        "endpoints": {
            "health": "GET /health",
            "users": {
                "list": f"GET {users_path}",
                "create": f"POST {users_path}",
                "stats": f"GET {users_path}/stats",
                "get": f"GET {users_path}/:id",
                "update": f"PUT {users_path}/:id",
                "delete": f"DELETE {users_path}/:id",
                "hard_delete": f"DELETE {users_path}/:id/hard",
                "activate": f"PATCH {users_path}/:id/activate",
                "deactivate": f"PATCH {users_path}/:id/deactivate",
            },
        },
    }
