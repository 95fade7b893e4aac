from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from supabase import Client, create_client

from .config import settings
from .usage_logging import TOOL_NAME

logger = logging.getLogger(__name__)


class AppErrorLogger:
    """Thin wrapper around Supabase inserts for `app_error_events`."""

    allowed = {
        "occurred_at",
        "tool",
        "severity",
        "message",
        "route",
        "method",
        "status_code",
        "user_id",
        "user_email",
        "meta",
    }

    def __init__(self) -> None:
        self._client: Optional[Client] = None

    def _get_client(self) -> Optional[Client]:
        if not settings.usage_logging_enabled:
            return None
        if not settings.supabase_url or not settings.supabase_service_role:
            logger.warning("Error logging enabled but Supabase service role credentials missing.")
            return None
        if not self._client:
            self._client = create_client(settings.supabase_url, settings.supabase_service_role)
        return self._client

    def log(self, payload: Dict[str, Any]) -> None:
        client = self._get_client()
        if not client:
            return

        base_row = {k: v for k, v in payload.items() if k in self.allowed and v is not None}
        base_row.setdefault("tool", TOOL_NAME)
        base_row.setdefault("severity", "error")
        base_row.setdefault("occurred_at", datetime.now(timezone.utc).isoformat())
        extra = {k: v for k, v in payload.items() if k not in self.allowed and v is not None}
        if extra:
            meta = base_row.get("meta") if isinstance(base_row.get("meta"), dict) else {}
            base_row["meta"] = {**meta, **extra}

        try:
            client.table("app_error_events").insert(base_row).execute()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to record app error event: %s", exc)


error_logger = AppErrorLogger()
