# main.py
import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from config import config
from database import check_connection, init_db
from clients.stripe_client import ProcessorError
from services.exceptions import NotFoundError, ConflictError
from routers import (
    auth,
    properties,
    leases,
    rent_payments,
    dashboard,
    fee_settings,
    rent_automation,
    payouts,
    team,
    team_portal,
    hiring,
    contractors,
    maintenance,
)

logging.basicConfig(
    level=config.LOG_LEVEL,
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)

# App instance
app = FastAPI(title="Landlord Operations API", version="1.0.0")

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(auth.router)
app.include_router(properties.router)
app.include_router(leases.router)
app.include_router(rent_payments.router)
app.include_router(dashboard.router)
app.include_router(fee_settings.router)
app.include_router(rent_automation.router)
app.include_router(payouts.router)
app.include_router(team.router)
app.include_router(team_portal.router)
app.include_router(hiring.router)
app.include_router(hiring.public_router)
app.include_router(contractors.router)
app.include_router(maintenance.router)


def error_response(status_code: int, message: str, **extra) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message, **extra},
    )


# Error handlers
@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    if exc.status_code == 404 and message == "Not Found":
        message = "Route not found"
    response = error_response(exc.status_code, message)
    if exc.headers:
        response.headers.update(exc.headers)
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if not errors:
        return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, "Invalid request")
    first = errors[0]
    message = str(first.get("msg", "Invalid request")).removeprefix("Value error, ")
    field = next((str(part) for part in reversed(first.get("loc", ())) if isinstance(part, str)), None)
    if field and field != "body":
        message = f"{field}: {message}"
    return error_response(status.HTTP_422_UNPROCESSABLE_ENTITY, message)


@app.exception_handler(NotFoundError)
async def not_found_handler(request: Request, exc: NotFoundError):
    return error_response(status.HTTP_404_NOT_FOUND, str(exc))


@app.exception_handler(ConflictError)
async def conflict_handler(request: Request, exc: ConflictError):
    return error_response(status.HTTP_409_CONFLICT, str(exc))


@app.exception_handler(ValueError)
async def value_error_handler(request: Request, exc: ValueError):
    return error_response(status.HTTP_400_BAD_REQUEST, str(exc))


@app.exception_handler(PermissionError)
async def permission_error_handler(request: Request, exc: PermissionError):
    return error_response(status.HTTP_403_FORBIDDEN, str(exc))


@app.exception_handler(ProcessorError)
async def processor_error_handler(request: Request, exc: ProcessorError):
    logger.warning("Payment processor error on %s %s: %s", request.method, request.url.path, exc.message)
    if exc.requires_manual_entry:
        return error_response(exc.status_code, exc.message, requiresManualEntry=True)
    return error_response(exc.status_code, exc.message)


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, "Internal server error")


@app.get("/health", tags=["health"])
def health():
    db_ok = check_connection()
    return JSONResponse(
        status_code=status.HTTP_200_OK if db_ok else status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"success": db_ok, "status": "ok" if db_ok else "degraded", "database": db_ok},
    )


@app.get("/", tags=["health"])
def root():
    return {"success": True, "message": "Landlord Operations API is running"}


if __name__ == "__main__":
    if config.DATABASE_URL.startswith("sqlite"):
        init_db()
    uvicorn.run("main:app", host=config.HOST, port=config.PORT, reload=True)
