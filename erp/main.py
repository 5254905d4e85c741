"""
College ERP — student / faculty backend over Supabase.
FastAPI entry point.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from erp.core.config import settings
from erp.core.exceptions import ERPError, RemoteCallError
from erp.core.session import get_session_store
from erp.routers import auth, calendar, faculty, leave, student
from erp.utils.response import error_response

logging.basicConfig(
    level=settings.LOG_LEVEL.upper(),
    format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    get_session_store().hydrate()
    yield


app = FastAPI(
    title=settings.APP_NAME,
    description="Timetables, attendance, marks, assignments and leave for students and faculty",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS
origins = [o.strip() for o in settings.CORS_ORIGINS.split(",") if o.strip()]
app.add_middleware(
    CORSMiddleware,
    allow_origins=origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(ERPError)
async def erp_error_handler(request: Request, exc: ERPError):
    if not isinstance(exc, RemoteCallError):
        logger.info("%s %s -> %s: %s", request.method, request.url.path, type(exc).__name__, exc.message)
    return JSONResponse(status_code=exc.status_code, content=error_response(exc.message))


# Include routers
app.include_router(auth.router)
app.include_router(student.router)
app.include_router(faculty.router)
app.include_router(leave.router)
app.include_router(calendar.router)


@app.get("/")
async def root():
    return {
        "name": settings.APP_NAME,
        "version": "1.0.0",
        "status": "running",
    }


@app.get("/api/health")
async def health():
    return {"status": "healthy"}
