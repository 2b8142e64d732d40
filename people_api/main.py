from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from people_api.api.v1 import health, people
from people_api.core.config import settings
from people_api.core.db import init_db
from people_api.core.logging_config import configure_logging, get_logger
from people_api.services.people import PERSON_NOT_FOUND

configure_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    await init_db()
    yield


app = FastAPI(title=settings.PROJECT_NAME, lifespan=lifespan)


def _describe(error: dict) -> str:
    field = ".".join(str(part) for part in error["loc"] if part not in ("body", "query", "path"))
    if error.get("type") == "value_error" and "error" in error.get("ctx", {}):
        message = str(error["ctx"]["error"])
    else:
        message = error["msg"]
    return f"{field}: {message}" if field else message


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """malformed input never reaches a handler; answer 400 with every violation"""
    # a malformed id cannot name an existing person
    if any(error["loc"][0] == "path" for error in exc.errors()):
        return JSONResponse(status_code=404, content={"message": PERSON_NOT_FOUND})

    errors = [_describe(error) for error in exc.errors()]
    logger.warning(f"validation failed for {request.method} {request.url.path}: {errors}")
    return JSONResponse(status_code=400, content={"message": "Validation failed", "errors": errors})


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """last-resort boundary for anything raised outside a route body"""
    logger.error(f"unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(
        status_code=500,
        content={"message": "An internal server error occurred", "error": str(exc)},
    )


@app.get("/")
def read_root():
    return {"message": "Welcome to People API"}

app.include_router(health.router, prefix="/health", tags=["health"])
app.include_router(people.router, prefix="/api/people", tags=["people"])
