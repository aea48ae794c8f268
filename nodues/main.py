import time
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.encoders import jsonable_encoder
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from nodues.api.routes import router as api_router
from nodues.core.config import settings
from nodues.core.database import engine
from nodues.core.exceptions import NoDuesError, ServerError
from nodues.core.logging_config import get_logger, setup_logging
from nodues.models.base import Base
import nodues.models  # noqa: F401

setup_logging(settings.log_level)
logger = get_logger("nodues.main")

app = FastAPI(title="No-Dues Clearance API", version="0.1.0")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(api_router)

Path(settings.upload_dir).mkdir(parents=True, exist_ok=True)
app.mount(settings.uploads_url_prefix, StaticFiles(directory=settings.upload_dir), name="uploads")


@app.middleware("http")
async def log_requests(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    duration_ms = (time.perf_counter() - start) * 1000
    logger.info(
        "HTTP %s %s - %s (%.2fms)",
        request.method, request.url.path, response.status_code, duration_ms,
    )
    return response


@app.exception_handler(NoDuesError)
async def nodues_error_handler(request: Request, exc: NoDuesError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=422,
        content={
            "message": "Invalid request",
            "code": "VALIDATION_ERROR",
            "details": jsonable_encoder(exc.errors()),
        },
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    error = ServerError(str(exc))
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.on_event("startup")
def on_startup():
    Base.metadata.create_all(bind=engine)
    logger.info("Database schema ready (%s)", settings.environment)


@app.get("/health")
def health_check():
    return {"status": "ok"}
