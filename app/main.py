import logging
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.config import settings
from app.database import init_db, close_db
from app.api import api_router
from app.schemas.envelope import ApiResponse
from app.utils.errors import AppError, InternalError, status_code_for
from app.utils.logging import configure_logging

configure_logging(settings.LOG_LEVEL)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup: initialize database
    await init_db()
    yield
    await close_db()


app = FastAPI(
    title="Vailovent Store API",
    description="Transactions of the Vailovent store, cross-referenced with Midtrans",
    version="1.0.0",
    lifespan=lifespan,
)

# The storefront sends cookies, so the origin must be explicit
app.add_middleware(
    CORSMiddleware,
    allow_origins=[settings.FRONTEND_URL],
    allow_credentials=True,
    allow_methods=["GET"],
    allow_headers=["Authorization", "Content-Type"],
)


def error_response(status_code: int, message: str) -> JSONResponse:
    body = ApiResponse(success=False, message=message, data=None)
    return JSONResponse(status_code=status_code, content=body.model_dump())


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return error_response(status_code_for(exc), exc.message)


@app.exception_handler(SQLAlchemyError)
async def database_error_handler(request: Request, exc: SQLAlchemyError):
    logger.exception(f"Database error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(500, InternalError.default_message)


@app.exception_handler(httpx.HTTPError)
async def outbound_http_error_handler(request: Request, exc: httpx.HTTPError):
    logger.exception(f"Outbound request failed on {request.method} {request.url.path}", exc_info=exc)
    return error_response(500, InternalError.default_message)


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return error_response(exc.status_code, str(exc.detail))


@app.exception_handler(Exception)
async def unexpected_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unexpected error on {request.method} {request.url.path}", exc_info=exc)
    return error_response(500, InternalError.default_message)


# Include API routes
app.include_router(api_router, prefix="/api")


@app.get("/")
async def root():
    return {
        "name": "Vailovent Store API",
        "version": "1.0.0",
        "docs": "/docs",
    }


@app.get("/health")
async def health_check():
    return {"status": "healthy"}
