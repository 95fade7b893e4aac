from __future__ import annotations

import logging
from typing import Any, Dict, Optional

from supabase import Client, create_client

from .config import settings

logger = logging.getLogger(__name__)

TOOL_NAME = "google_ads_dashboard"


class UsageLogger:
    """Thin wrapper around Supabase inserts for `usage_events`."""

    allowed = {
        "occurred_at",
        "user_id",
        "user_email",
        "rows_processed",
        "campaigns",
        "status",
        "duration_ms",
        "app_version",
        "tool",
        "meta",
    }

    def __init__(self) -> None:
        self._client: Optional[Client] = None

    def _get_client(self) -> Optional[Client]:
        if not settings.usage_logging_enabled:
            return None
        if not settings.supabase_url or not settings.supabase_service_role:
            logger.warning("Usage logging enabled but Supabase service role credentials missing.")
            return None
        if not self._client:
            self._client = create_client(settings.supabase_url, settings.supabase_service_role)
        return self._client

    def build_row(self, payload: Dict[str, Any]) -> Dict[str, Any]:
        """Split a payload into known columns, folding everything else into `meta`."""
        base_row = {k: v for k, v in payload.items() if k in self.allowed and v is not None}
        base_row.setdefault("tool", TOOL_NAME)
        extra = {k: v for k, v in payload.items() if k not in self.allowed and v is not None}
        if extra:
            meta = base_row.get("meta") if isinstance(base_row.get("meta"), dict) else {}
            base_row["meta"] = {**meta, **extra}
        return base_row

    def log(self, payload: Dict[str, Any]) -> None:
        client = self._get_client()
        if not client:
            return
        try:
            client.table("usage_events").insert(self.build_row(payload)).execute()
        except Exception as exc:  # noqa: BLE001
            logger.warning("Failed to record usage event: %s", exc)


usage_logger = UsageLogger()
