import resource
import time
from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

import redis
from fastapi import Depends, FastAPI
from fastapi.concurrency import run_in_threadpool
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import Settings, get_settings
from app.database import ping_database
from app.dependencies import get_redis_client
from app.logging_config import get_logger, setup_logging
from app.routers import billing, speech, webhooks

settings = get_settings()
setup_logging(settings.log_level)

logger = get_logger("main")

LAGOS_TZ = ZoneInfo("Africa/Lagos")
STARTED_AT = time.monotonic()

app = FastAPI(
    title="ODIA API",
    description="Nigeria-first WhatsApp and Telegram AI agent backend",
    version="0.1.0",
)

cors_origins = [origin.strip() for origin in settings.cors_allow_origins.split(",") if origin.strip()]
if not cors_origins:
    cors_origins = ["*"]

app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=False,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(webhooks.router)
app.include_router(speech.router)
app.include_router(billing.router)


@app.get("/health")
async def health(
    settings: Settings = Depends(get_settings),
    redis_client: Optional[redis.Redis] = Depends(get_redis_client),
):
    return {
        "status": "ok",
        "time": datetime.now(LAGOS_TZ).isoformat(),
        "database": await run_in_threadpool(ping_database),
        "redis": redis_client is not None,
        "region": settings.vercel_region or "local",
    }


@app.get("/metrics")
def metrics():
    usage = resource.getrusage(resource.RUSAGE_SELF)
    return {
        "uptime": round(time.monotonic() - STARTED_AT, 3),
        "memory": {"max_rss_kb": usage.ru_maxrss},
        "time": datetime.now(LAGOS_TZ).isoformat(),
    }


@app.exception_handler(404)
async def not_found(request, exc):
    return JSONResponse(status_code=404, content={"error": "not found"})
