import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .config import settings
from .routers import google_ads
from .services.google_ads import GoogleAdsDashboard

logger = logging.getLogger(__name__)


def create_dashboard() -> GoogleAdsDashboard:
    return GoogleAdsDashboard(
        settings.google_ads_csv_url,
        columns=settings.csv_columns,
        default_window_days=settings.default_window_days,
        top_keywords_limit=settings.top_keywords_limit,
        trend_lookback_days=settings.trend_lookback_days,
        fetch_timeout_s=settings.fetch_timeout_s,
    )


@asynccontextmanager
async def lifespan(app: FastAPI):
    # one session per process; the CSV is fetched exactly once here
    dashboard = create_dashboard()
    app.state.google_ads_dashboard = dashboard
    await dashboard.load()
    if dashboard.error:
        logger.error("Google Ads dashboard started without data: %s", dashboard.error)
    yield


app = FastAPI(
    title=settings.app_name,
    version=settings.app_version,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(google_ads.router)


@app.get("/healthz")
def healthz():
    return {"ok": True, "version": settings.app_version}
