import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy import text

from hostelhub.core.config import settings
from hostelhub.core.database import SessionLocal
from hostelhub.core.exceptions import HostelHubError
from hostelhub.core.logging import setup_logging
from hostelhub.api.routes.auth import router as auth_router
from hostelhub.api.routes.issues import router as issues_router
from hostelhub.api.routes.emergency import router as emergency_router
from hostelhub.api.routes.announcements import router as announcements_router
from hostelhub.api.routes.lost_found import router as lost_found_router
from hostelhub.api.routes.analytics import router as analytics_router
from hostelhub.api.routes.leaderboard import router as leaderboard_router
from hostelhub.api.routes.ai import router as ai_router
from hostelhub.api.routes.audit_logs import router as audit_logs_router

setup_logging(settings.LOG_LEVEL)
logger = logging.getLogger("hostelhub")

# 1) Create the app FIRST
app = FastAPI(title="HostelHub Backend")

# 2) Add CORS Middleware BEFORE routes
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(HostelHubError)
async def hostelhub_error_handler(request: Request, exc: HostelHubError):
    if exc.status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


# 3) Include routers AFTER app is created
app.include_router(auth_router)
app.include_router(issues_router)
app.include_router(emergency_router)
app.include_router(announcements_router)
app.include_router(lost_found_router)
app.include_router(analytics_router)
app.include_router(leaderboard_router)
app.include_router(ai_router)
app.include_router(audit_logs_router)


# 4) Health check endpoints
@app.get("/health")
def health():
    return {"ok": True, "service": "hostelhub"}


@app.get("/db-health")
def db_health():
    db = SessionLocal()
    try:
        db.execute(text("select 1"))
        return {"ok": True, "db": "connected"}
    finally:
        db.close()
