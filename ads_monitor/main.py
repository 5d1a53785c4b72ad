"""
Ads Monitor
Main FastAPI application
"""
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import PlainTextResponse
from starlette.middleware.gzip import GZipMiddleware
from contextlib import asynccontextmanager

from ads_monitor.config import get_settings
from ads_monitor.utils.logger import log
from ads_monitor import __version__

from ads_monitor.api import health, metrics
from ads_monitor.middleware.cache_middleware import NoCacheMiddleware

settings = get_settings()


def get_allowed_origins():
    """CORS origins from CORS_ORIGINS (comma-separated), all origins if unset"""
    origins = [o.strip() for o in settings.cors_origins.split(",") if o.strip()]
    return origins or ["*"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup and shutdown events"""
    log.info(f"Starting {settings.app_name} v{__version__}")
    log.info(f"Environment: {settings.environment}")

    accounts = settings.account_ids()
    if not settings.facebook_access_token or not accounts:
        log.warning("FACEBOOK_ACCESS_TOKEN or FB_ACCOUNT_ID_* missing; /api/metrics will return an error")
    else:
        log.info(f"Monitoring {len(accounts)} ad accounts via Graph API {settings.graph_api_version}")

    yield

    log.info("Shutting down application")


app = FastAPI(
    title=settings.app_name,
    version=__version__,
    description="""
    Live monitor for today's Meta ad spend

    - Spend and started conversations per ad account and campaign
    - Roll-up by product line (campaign name prefix)
    - Cost per result with status tiers
    - Synthetic hourly projection of conversations (not measured data)
    """,
    lifespan=lifespan
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=get_allowed_origins(),
    allow_credentials=False,
    allow_methods=["GET"],
    allow_headers=["*"],
)
app.add_middleware(NoCacheMiddleware)
app.add_middleware(GZipMiddleware, minimum_size=500)

app.include_router(health.router, tags=["health"])
app.include_router(metrics.router)


@app.get("/robots.txt", response_class=PlainTextResponse)
async def robots_txt():
    """Block all crawlers"""
    return "User-agent: *\nDisallow: /\n"


@app.get("/")
async def root():
    """Root endpoint with API information"""
    return {
        "app": settings.app_name,
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "status": "/status",
        "endpoints": {
            "metrics": "GET /api/metrics",
            "dashboard": "GET /api/metrics/dashboard",
            "connector_status": "GET /api/metrics/status",
        },
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("ads_monitor.main:app", host=settings.api_host, port=settings.api_port, reload=settings.debug)
