import logging
import math
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from pathlib import Path

from alembic.config import Config
from alembic.runtime.migration import MigrationContext
from alembic.script import ScriptDirectory
from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from health_index.config import settings
from health_index.database import engine
import health_index.models  # noqa: F401
from health_index.routers import health_data, taxonomy, weights
from health_index.routers import health_index as health_index_router
from health_index.seed.taxonomy_seed import seed_on_startup

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


def _assert_database_at_head() -> None:
    project_root = Path(__file__).resolve().parent.parent
    alembic_cfg = Config(str(project_root / "alembic.ini"))
    alembic_cfg.set_main_option("script_location", str(project_root / "alembic"))
    script = ScriptDirectory.from_config(alembic_cfg)
    expected_heads = set(script.get_heads())

    with engine.connect() as connection:
        context = MigrationContext.configure(connection)
        current_heads = set(context.get_current_heads())

    if current_heads != expected_heads:
        raise RuntimeError(
            "Database schema is not at Alembic head. "
            "Run `alembic upgrade head` before starting the API. "
            f"Current revisions: {sorted(current_heads) or ['<none>']}, "
            f"expected: {sorted(expected_heads)}."
        )


@asynccontextmanager
async def lifespan(_: FastAPI):
    _assert_database_at_head()
    if settings.seed_on_startup:
        seed_on_startup()
    logger.info("Health Index API started (env=%s)", settings.app_env)
    yield


app = FastAPI(title="Health Index API", version="0.1.0", lifespan=lifespan)

allowed_origins = [origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=allowed_origins or ["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.get("/")
def root():
    return {"statusCode": 200, "message": "Success", "data": {"status": "ok", "service": "health-index"}}


@app.get("/health")
def health():
    return {
        "status": "ok",
        "service": "health-index",
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


ERROR_NAMES = {
    404: "NotFound",
    422: "ValidationError",
    500: "InternalServerError",
}


@app.exception_handler(HTTPException)
async def http_exception_handler(_: Request, exc: HTTPException):
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "statusCode": exc.status_code,
            "message": str(exc.detail) if exc.detail else "Request failed",
            "error": ERROR_NAMES.get(exc.status_code, "HTTPError"),
        },
    )


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(_: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "statusCode": 422,
            "message": "Invalid request payload",
            "error": "ValidationError",
            "details": {"errors": [_json_safe(error) for error in exc.errors()]},
        },
    )


def _json_safe(value):
    # echoed request input may hold NaN/Infinity, and ctx may hold exception objects
    if isinstance(value, float):
        return value if math.isfinite(value) else str(value)
    if isinstance(value, dict):
        return {key: _json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(item) for item in value]
    if value is None or isinstance(value, (str, int, bool)):
        return value
    return str(value)


@app.exception_handler(Exception)
async def unhandled_exception_handler(_: Request, exc: Exception):
    logger.exception("Unhandled server error: %s", exc)
    return JSONResponse(
        status_code=500,
        content={
            "statusCode": 500,
            "message": str(exc) or "An unexpected error occurred",
            "error": "InternalServerError",
        },
    )


app.include_router(taxonomy.router)
app.include_router(weights.router)
app.include_router(health_index_router.router)
app.include_router(health_data.router)
