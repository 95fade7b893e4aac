"""Google Ads dashboard router."""
import os
import time
from datetime import date, datetime, time as dt_time

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from fastapi.responses import FileResponse
from pydantic import BaseModel, ConfigDict, Field
from starlette.background import BackgroundTask

from ..auth import DashboardUser, require_user
from ..config import settings
from ..error_logging import error_logger
from ..usage_logging import usage_logger
from ..services.google_ads import DateRange, GoogleAdsDashboard, build_dashboard_workbook

router = APIRouter(prefix="/google-ads", tags=["google-ads"])


class DateRangeRequest(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    start: date | None = Field(default=None, alias="from")
    end: date | None = Field(default=None, alias="to")


def whole_day_range(start: date | None, end: date | None) -> DateRange | None:
    """Turn a pair of calendar days into an inclusive 00:00 .. 23:59:59.999999 window."""
    if start is None and end is None:
        return None
    if start is None or end is None:
        raise HTTPException(status_code=400, detail="Provide both 'from' and 'to', or neither")
    if start > end:
        raise HTTPException(status_code=400, detail="'from' must not be after 'to'")
    return DateRange(
        start=datetime.combine(start, dt_time.min),
        end=datetime.combine(end, dt_time.max),
    )


def get_dashboard(request: Request) -> GoogleAdsDashboard:
    dashboard = getattr(request.app.state, "google_ads_dashboard", None)
    if dashboard is None or dashboard.loading:
        raise HTTPException(status_code=503, detail="Google Ads data is still loading")
    return dashboard


@router.get("/healthz")
def health():
    """Health check endpoint."""
    return {"ok": True}


@router.get("/dashboard")
def read_dashboard(
    start: date | None = Query(default=None, alias="from"),
    end: date | None = Query(default=None, alias="to"),
    dashboard: GoogleAdsDashboard = Depends(get_dashboard),
    user: DashboardUser = Depends(require_user),
):
    """
    Current dashboard state.

    `from`/`to` render another window for this response only; the session
    window is left as it is.
    """
    started = time.time()
    override = whole_day_range(start, end)
    snapshot = dashboard.snapshot(override)

    usage_logger.log(
        {
            **user.usage_fields(),
            "rows_processed": snapshot["rows_total"],
            "campaigns": len(snapshot["campaign_trends"]),
            "status": "error" if snapshot["error"] else "success",
            "duration_ms": int((time.time() - started) * 1000),
            "app_version": settings.app_version,
            "action": "dashboard",
            "date_range": snapshot["date_range"],
        }
    )
    return snapshot


@router.put("/date-range")
def update_date_range(
    payload: DateRangeRequest,
    dashboard: GoogleAdsDashboard = Depends(get_dashboard),
    user: DashboardUser = Depends(require_user),
):
    """Set the session window. An empty body restores the default 30-day window."""
    window = whole_day_range(payload.start, payload.end)
    if window is None:
        dashboard.reset_date_range()
    else:
        dashboard.set_date_range(window)
    snapshot = dashboard.snapshot()

    usage_logger.log(
        {
            **user.usage_fields(),
            "status": "success",
            "app_version": settings.app_version,
            "action": "reset_date_range" if window is None else "set_date_range",
            "date_range": snapshot["date_range"],
        }
    )
    return snapshot


@router.get("/export", response_class=FileResponse)
def export_dashboard(
    start: date | None = Query(default=None, alias="from"),
    end: date | None = Query(default=None, alias="to"),
    dashboard: GoogleAdsDashboard = Depends(get_dashboard),
    user: DashboardUser = Depends(require_user),
):
    """Download the dashboard window as an Excel workbook."""
    override = whole_day_range(start, end)
    view = dashboard.current_view() if override is None else dashboard.view(override)

    try:
        workbook_path = build_dashboard_workbook(
            view["date_range"],
            view["metrics"],
            view["top_keywords"],
            view["campaign_trends"],
        )
    except Exception as exc:
        error_logger.log(
            {
                "message": f"Workbook generation failed: {exc}",
                "route": "/google-ads/export",
                "method": "GET",
                "status_code": 500,
                **user.usage_fields(),
            }
        )
        raise HTTPException(status_code=500, detail=f"Workbook generation failed: {exc}") from exc

    window = view["date_range"]
    suffix = f"{window.start:%Y%m%d}_{window.end:%Y%m%d}" if window else "all"
    return FileResponse(
        workbook_path,
        media_type="application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
        filename=f"google_ads_dashboard_{suffix}.xlsx",
        background=BackgroundTask(os.unlink, workbook_path),
    )
