import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from hackhub.api.endpoints import admin as admin_endpoints
from hackhub.api.endpoints import auth as auth_endpoints
from hackhub.api.endpoints import events as event_endpoints
from hackhub.api.endpoints import leaderboard as leaderboard_endpoints
from hackhub.api.endpoints import registrations as registration_endpoints
from hackhub.api.endpoints import stats as stats_endpoints
from hackhub.api.endpoints import users as user_endpoints
from hackhub.core.config import settings
from hackhub.core.database import init_db
from hackhub.core.errors import HackhubError, InternalError, ValidationError

# Location prefixes FastAPI puts in front of a field name in error locs
_LOC_SOURCES = {"body", "query", "path", "header", "cookie"}

logger = logging.getLogger("hackhub")


def configure_logging(level: str = settings.LOG_LEVEL) -> None:
    logger.setLevel(level.upper())
    formatter = logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    else:
        for h in logger.handlers:
            h.setFormatter(formatter)


@asynccontextmanager
async def lifespan(app: FastAPI):
    init_db()
    logger.info("Database ready at %s", settings.DATABASE_URL.split("@")[-1])
    yield


async def hackhub_error_handler(request: Request, exc: HackhubError):
    if isinstance(exc, InternalError):
        logger.error("Internal error on %s: %s", request.url.path, exc)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_handler(request: Request, exc: RequestValidationError):
    errors = []
    for err in exc.errors():
        loc = [str(part) for part in err.get("loc", ()) if part not in _LOC_SOURCES]
        errors.append({"field": ".".join(loc) or "body", "message": err.get("msg", "Invalid value")})
    return JSONResponse(status_code=400, content=ValidationError(errors).to_dict())


async def generic_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception on %s", request.url.path)
    return JSONResponse(status_code=500, content=InternalError().to_dict())


def create_app() -> FastAPI:
    configure_logging()

    app = FastAPI(title=settings.APP_NAME, lifespan=lifespan)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(auth_endpoints.router, prefix="/api/auth", tags=["Authentication"])
    app.include_router(event_endpoints.router, prefix="/api/events", tags=["Events"])
    app.include_router(registration_endpoints.router, prefix="/api", tags=["Registrations"])
    app.include_router(leaderboard_endpoints.router, prefix="/api", tags=["Leaderboard"])
    app.include_router(user_endpoints.router, prefix="/api/users", tags=["Users"])
    app.include_router(admin_endpoints.router, prefix="/api/admin", tags=["Admin"])
    app.include_router(stats_endpoints.router, prefix="/api", tags=["Stats"])

    app.add_exception_handler(HackhubError, hackhub_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, generic_exception_handler)
    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("hackhub.main:app", host="0.0.0.0", port=8000, reload=True)
