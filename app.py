"""
FastAPI Application

Main application initialization, error handling and route registration.
"""

import logging
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import CORS_ORIGINS
from errors import AppError
from routes.health import router as health_router
from routes.functions import router as functions_router
from routes.wizard import router as wizard_router
from routes.account import router as account_router
from routes.billing import router as billing_router
from routes.admin import router as admin_router

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Nederlandse Content Generator API",
    description="Wizard-driven Dutch SEO content generation with sitemap discovery and keyword research",
    version="0.1.0"
)

# Every endpoint answers CORS preflight requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=CORS_ORIGINS,
    allow_credentials="*" not in CORS_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)


# Error handlers: every failure is rendered as {"error": message}

@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    fields = ", ".join(".".join(str(part) for part in err["loc"][1:]) for err in exc.errors())
    return JSONResponse(status_code=400, content={"error": f"Ongeldige invoer: {fields}"})


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"error": "Er is een onverwachte fout opgetreden"})


# Register REST API routers
app.include_router(health_router)
app.include_router(functions_router, prefix="/api")
app.include_router(wizard_router, prefix="/api")
app.include_router(account_router, prefix="/api")
app.include_router(billing_router, prefix="/api")
app.include_router(admin_router, prefix="/api")
