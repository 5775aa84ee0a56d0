# ---------------------------------------------------------
# gridops/main.py
# GridOps - Industrial Maintenance Tracking Backend
#
# Run: uvicorn gridops.main:app --reload (from repo root)
#      python -m gridops
#
# - FastAPI + SQLite
# - /user, /signin              : register / sign in, returns {token}
# - /api/asset[/:id]            : equipment owned by the caller
# - /api/maintenance[/:id]      : service events on owned assets
# - /api/task[/:id]             : checklist items on owned records
# ---------------------------------------------------------

from __future__ import annotations

from typing import Dict

from fastapi import APIRouter, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, RedirectResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from gridops.config import CORS_ORIGINS, IS_DEV
from gridops.db import init_db
from gridops.errors import ApiError, Unexpected, ValidationFailure, public_message, status_code_for
from gridops.routes_assets import router as assets_router
from gridops.routes_maintenance import router as maintenance_router
from gridops.routes_tasks import router as tasks_router
from gridops.routes_users import router as users_router

app = FastAPI(title="GridOps Maintenance API")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"] if IS_DEV else CORS_ORIGINS,
    allow_credentials=not IS_DEV,
    allow_methods=["*"],
    allow_headers=["*"],
)

init_db()


# ---------------------------------------------------------
# Error boundary: kind -> status code, body is always {message}
# ---------------------------------------------------------
def _error_response(error: ApiError) -> JSONResponse:
    return JSONResponse(status_code=status_code_for(error), content={"message": public_message(error)})


@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError) -> JSONResponse:
    if IS_DEV:
        print(f"[API] {request.method} {request.url.path} -> {type(exc).__name__}: {exc.message}")
    return _error_response(exc)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    if IS_DEV:
        fields = [".".join(str(part) for part in err.get("loc", ())) for err in exc.errors()]
        print(f"[API] {request.method} {request.url.path} -> invalid input: {fields}")
    return _error_response(ValidationFailure())


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(status_code=exc.status_code, content={"message": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(Exception)
async def unexpected_handler(request: Request, exc: Exception) -> JSONResponse:
    print(f"[API] Unhandled error on {request.method} {request.url.path}: {type(exc).__name__}: {exc}")
    return _error_response(Unexpected())


# ---------------------------------------------------------
# Routes
# ---------------------------------------------------------
@app.get("/", include_in_schema=False)
def root() -> RedirectResponse:
    return RedirectResponse(url="/docs")


@app.get("/health")
def health() -> Dict[str, str]:
    return {"status": "ok"}


app.include_router(users_router)

api_router = APIRouter(prefix="/api")
api_router.include_router(assets_router)
api_router.include_router(maintenance_router)
api_router.include_router(tasks_router)
app.include_router(api_router)
